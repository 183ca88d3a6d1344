"""
Storefront Backend — Entity Capabilities
==========================================

What:  Small protocols naming the state an entity exposes, plus free
       functions that answer questions about any entity with that state.
Why:   Behaviour shared by unrelated models is written once here and applied
       to whatever satisfies the protocol, instead of being injected into
       each model class.
Who:   Item satisfies both protocols; ItemDecorator reads through them.
"""

from datetime import date
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class Ratable(Protocol):
    """Anything with a non-negative ratings count."""

    ratings: int


@runtime_checkable
class Sellable(Protocol):
    """Anything that records the day it was sold (None while available)."""

    sold_on: Optional[date]


def meets_rating_threshold(entity: Ratable, threshold: int) -> bool:
    """True when the entity's ratings are strictly above `threshold`."""
    return (entity.ratings or 0) > threshold


def is_sold(entity: Sellable) -> bool:
    return entity.sold_on is not None
