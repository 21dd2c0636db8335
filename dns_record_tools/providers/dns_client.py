"""
Directory Client - Unified interface for Directory providers

This module provides a common interface for the configured Directory
provider, and a once-only holder that builds the client on first use.
"""

import logging
import os
import threading
from typing import Any, Callable, Dict, List, Optional

from .base_provider import DirectoryProvider
from .cloudflare_provider import CloudflareDirectory
from .memory_provider import MemoryDirectory

logger = logging.getLogger(__name__)


class DirectoryClient:
    """Unified Directory client that supports multiple providers."""

    def __init__(self, config: Dict):
        """Initialize Directory client with configuration."""
        self.config = config
        self.provider = self._get_provider()

    def _get_provider(self) -> DirectoryProvider:
        """Get Directory provider based on configuration."""
        provider_name = self.config.get("default_provider", "cloudflare")
        provider_config = dict(
            self.config.get("directory_providers", {}).get(provider_name) or {}
        )

        if provider_name == "cloudflare":
            if not provider_config.get("api_token"):
                provider_config["api_token"] = os.environ.get("CLOUDFLARE_API_TOKEN", "")
            return CloudflareDirectory(provider_config)
        elif provider_name == "memory":
            return MemoryDirectory(provider_config)
        else:
            logger.warning(f"Unknown provider '{provider_name}', using memory provider")
            return MemoryDirectory(provider_config)

    def verify_token(self) -> Dict[str, str]:
        return self.provider.verify_token()

    def list_zones(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict]:
        """List zones matching the filters."""
        return self.provider.list_zones(filters)

    def get_zone(self, zone_id: str) -> Dict:
        """Get a zone by ID."""
        return self.provider.get_zone(zone_id)

    def list_records(
        self,
        zone_id: str,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        per_page: int = 100,
    ) -> List[Dict]:
        """Get one page of DNS records for a zone."""
        return self.provider.list_records(zone_id, filters, page, per_page)

    def get_record(self, zone_id: str, record_id: str) -> Dict:
        """Get a DNS record by ID."""
        return self.provider.get_record(zone_id, record_id)

    def create_record(self, zone_id: str, fields: Dict[str, Any]) -> Dict:
        """Create a new DNS record."""
        return self.provider.create_record(zone_id, fields)

    def update_record(self, zone_id: str, record_id: str, fields: Dict[str, Any]) -> Dict:
        """Update an existing DNS record."""
        return self.provider.update_record(zone_id, record_id, fields)

    def delete_record(self, zone_id: str, record_id: str) -> None:
        """Delete a DNS record."""
        self.provider.delete_record(zone_id, record_id)

    def export_zone(self, zone_id: str) -> str:
        """Export a zone in BIND format."""
        return self.provider.export_zone(zone_id)


class DirectoryHandle:
    """
    Builds a Directory client on first use and hands out the same one after.

    Concurrent first calls are serialised by a lock; if the factory fails
    nothing is stored and the next call tries again.
    """

    def __init__(self, factory: Callable[[], DirectoryClient]):
        self._factory = factory
        self._client: Optional[DirectoryClient] = None
        self._lock = threading.Lock()

    def get(self) -> DirectoryClient:
        client = self._client
        if client is not None:
            return client
        with self._lock:
            if self._client is None:
                self._client = self._factory()
                logger.info("Directory client initialized")
            return self._client

    def is_initialized(self) -> bool:
        return self._client is not None

    def reset(self) -> None:
        with self._lock:
            self._client = None
