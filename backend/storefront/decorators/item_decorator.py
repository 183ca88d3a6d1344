"""
Storefront Backend — Item Decorator
=====================================

What:  Presentation view of an Item: adds `is_featured()` and `status()`,
       forwards everything else (`name`, `price`, `id`, ...) to the item.
Who:   Built by ItemService for every item it returns.
When:  Once per item per request; discarded with the response.

Both declared operations are pure reads of the item's own state. The
featured threshold and the date pattern come from settings.
"""

from typing import TYPE_CHECKING

from storefront.config import settings
from storefront.decorators.base import Decorator, presents
from storefront.decorators.formatting import format_date
from storefront.models.capabilities import is_sold, meets_rating_threshold

if TYPE_CHECKING:
    from storefront.models.item import Item

AVAILABLE = "Available"


class ItemDecorator(Decorator["Item"]):
    """Decorates a single Item."""

    __slots__ = ()

    @presents
    def is_featured(self) -> bool:
        return meets_rating_threshold(self.wrapped, settings.featured_ratings_threshold)

    @presents
    def status(self) -> str:
        """'Sold on <date>' for sold items, 'Available' otherwise."""
        item = self.wrapped
        if is_sold(item):
            return f"Sold on {format_date(item.sold_on)}"
        return AVAILABLE
