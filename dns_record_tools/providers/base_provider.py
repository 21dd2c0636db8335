"""
Base Directory provider interface.

This module defines the abstract base class that every Directory provider
must implement. Providers raise DirectoryError subclasses on failure.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models import DNSRecord, Zone


class DirectoryProvider(ABC):
    """Abstract base class for Directory providers."""

    @abstractmethod
    def list_zones(self, filters: Optional[Dict[str, Any]] = None) -> List[Zone]:
        """List all zones matching the filters."""
        pass

    @abstractmethod
    def get_zone(self, zone_id: str) -> Zone:
        """Get a zone by ID."""
        pass

    @abstractmethod
    def list_records(
        self,
        zone_id: str,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        per_page: int = 100,
    ) -> List[DNSRecord]:
        """Get one page of DNS records for a zone. Filtering is best effort."""
        pass

    @abstractmethod
    def get_record(self, zone_id: str, record_id: str) -> DNSRecord:
        """Get a DNS record by ID."""
        pass

    @abstractmethod
    def create_record(self, zone_id: str, fields: Dict[str, Any]) -> DNSRecord:
        """Create a new DNS record and return it."""
        pass

    @abstractmethod
    def update_record(self, zone_id: str, record_id: str, fields: Dict[str, Any]) -> DNSRecord:
        """Apply a partial update to a DNS record and return the result."""
        pass

    @abstractmethod
    def delete_record(self, zone_id: str, record_id: str) -> None:
        """Delete a DNS record."""
        pass

    @abstractmethod
    def export_zone(self, zone_id: str) -> str:
        """Export the zone in BIND zone file format."""
        pass

    def verify_token(self) -> Dict[str, str]:
        """Check that the provider credentials are usable."""
        return {"id": self.__class__.__name__, "status": "active"}
