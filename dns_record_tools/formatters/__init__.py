"""
Output formatters.

This package projects Directory records and zones into the concise
shape returned by default, or passes them through untouched.
"""

from .record import format_record, format_records
from .zone import format_zone, format_zones

__all__ = ["format_record", "format_records", "format_zone", "format_zones"]
