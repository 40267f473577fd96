"""
Utility modules for the leasing tracker.
"""

from .formatting import (
    calendar_day,
    format_instant,
    format_iso_date,
    format_long_date,
    format_short_date,
    parse_instant,
    utc_day,
)
from .config import Config

__all__ = [
    "calendar_day",
    "format_instant",
    "format_iso_date",
    "format_long_date",
    "format_short_date",
    "parse_instant",
    "utc_day",
    "Config",
]
