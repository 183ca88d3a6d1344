"""
Storefront Backend — Presentation Decorators
==============================================

What:  Per-request wrappers that add view-only operations to domain entities.

Inventory:
    - base.py:            Decorator, @presents (forwarding contract)
    - item_decorator.py:  ItemDecorator (is_featured, status)
    - formatting.py:      display formatting shared by decorators
"""

from storefront.decorators.base import Decorator, presents
from storefront.decorators.item_decorator import ItemDecorator

__all__ = ["Decorator", "ItemDecorator", "presents"]
