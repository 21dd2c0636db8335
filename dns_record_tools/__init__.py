"""
DNS Record Tools - Query and change DNS records in a hosted Directory

Record listings are shaped (summary, random sample or paginated page) so
large zones stay readable, and bulk create/update applies up to 100 records
with per-item outcomes.
"""

__version__ = "1.0.0"
__author__ = "DNS Record Tools Team"
__description__ = "Query shaping and bulk changes for DNS zone records"

from .core.dns_manager import DNSManager
from .core.record_manager import RecordManager
from .providers.dns_client import DirectoryClient

__all__ = [
    "DNSManager",
    "RecordManager",
    "DirectoryClient",
]
