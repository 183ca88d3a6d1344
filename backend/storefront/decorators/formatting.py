"""
Storefront Backend — Display Formatting
=========================================

What:  Turns dates into the strings shown to API consumers.
Why:   Decorators decide WHAT to show; this module decides HOW a value looks.
       Keeping the pattern in one place means changing the display format is
       a configuration change, not an edit to every decorator.
"""

from datetime import date
from typing import Optional

from storefront.config import settings


def format_date(value: date, fmt: Optional[str] = None) -> str:
    """
    Format a date (or datetime) for display.

    Args:
        value: The date to render. Must not be None.
        fmt:   strftime pattern; defaults to settings.display_date_format.

    Raises:
        ValueError: When value is None.
    """
    if value is None:
        raise ValueError("Cannot format a missing date")
    return value.strftime(fmt or settings.display_date_format)
