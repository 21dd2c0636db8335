"""
Core record query and mutation functionality.

This package contains the listing, shaping and mutation logic behind the tools.
"""

from .bulk_engine import BulkMutationEngine
from .dns_manager import DNSManager
from .query_engine import QueryEngine
from .record_manager import RecordManager
from .zone_manager import ZoneManager

__all__ = ["BulkMutationEngine", "DNSManager", "QueryEngine", "RecordManager", "ZoneManager"]
