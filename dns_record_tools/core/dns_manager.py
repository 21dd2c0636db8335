"""
DNS Manager - Tool surface for inspecting and changing zone records

Each public method is one tool. Tools never raise: failures come back as a
ToolResponse flagged as an error, with a message that tells the caller what
to do next.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

import yaml

from .bulk_engine import BulkMutationEngine
from .query_engine import QueryEngine
from .record_manager import RecordManager
from .zone_manager import ZoneManager
from ..config import get_default_config
from ..constants import (
    CHARACTER_LIMIT,
    DEFAULT_FETCH_PAGE_SIZE,
    DEFAULT_PER_PAGE,
    DEFAULT_SAMPLE_SIZE,
)
from ..models import QueryFilter, ToolResponse
from ..providers.dns_client import DirectoryClient, DirectoryHandle
from ..utils.errors import InputInvalidError, describe_error
from ..utils.pagination import enforce_size_limit

logger = logging.getLogger(__name__)


class DNSManager:
    """Main class exposing the zone and record tools."""

    def __init__(self, config: Optional[Dict] = None):
        """Initialize the DNS manager with configuration."""
        self.config = config if config is not None else get_default_config()

        limits = self.config.get("limits") or {}
        self.character_limit = limits.get("character_limit", CHARACTER_LIMIT)
        self.default_per_page = limits.get("default_per_page", DEFAULT_PER_PAGE)
        self.fetch_page_size = limits.get("fetch_page_size", DEFAULT_FETCH_PAGE_SIZE)
        self.output_format = (self.config.get("output") or {}).get("format", "json")

        self.directory = DirectoryHandle(lambda: DirectoryClient(self.config))

    @property
    def dns_client(self) -> DirectoryClient:
        """Directory client, built on first use."""
        return self.directory.get()

    def verify_token(self) -> ToolResponse:
        return self._run("verify_token", lambda: self._render(self.dns_client.verify_token()))

    def list_zones(
        self,
        filter_name: Optional[str] = None,
        filter_status: Optional[str] = None,
        filter_account_id: Optional[str] = None,
        page: int = 1,
        per_page: Optional[int] = None,
        concise: bool = True,
        include_details: bool = False,
    ) -> ToolResponse:
        """List zones (domains) in the account."""

        def tool():
            zones = ZoneManager(self.dns_client).list_zones(
                filter_name=filter_name,
                filter_status=filter_status,
                filter_account_id=filter_account_id,
                page=page,
                per_page=self.default_per_page if per_page is None else per_page,
                concise=concise and not include_details,
            )
            return self._render(zones)

        return self._run("list_zones", tool)

    def get_zone(
        self,
        zone_id: Optional[str] = None,
        zone_name: Optional[str] = None,
        concise: bool = True,
        include_details: bool = False,
    ) -> ToolResponse:
        """Get one zone by ID or domain name."""
        return self._run(
            "get_zone",
            lambda: self._render(
                ZoneManager(self.dns_client).get_zone(
                    zone_id, zone_name, concise=concise and not include_details
                )
            ),
        )

    def list_records(
        self,
        zone_id: str,
        filter_type: Optional[str] = None,
        filter_name: Optional[str] = None,
        filter_content: Optional[str] = None,
        filter_proxied: Optional[bool] = None,
        filter_comment: Optional[str] = None,
        filter_tag: Optional[str] = None,
        order: Optional[str] = None,
        page: int = 1,
        per_page: Optional[int] = None,
        summary_only: bool = False,
        random_sample: bool = False,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        concise: bool = True,
        include_details: bool = False,
    ) -> ToolResponse:
        """
        List DNS records for a zone.

        Modes, first match wins:
          summary_only=True  -> count and type distribution only
          random_sample=True -> sample_size random records
          default            -> paginated records, with a summary for large zones
        """
        query_filter = QueryFilter(
            record_type=filter_type,
            name=filter_name,
            content=filter_content,
            comment=filter_comment,
            proxied=filter_proxied,
            tag=filter_tag,
        )

        def tool():
            output = QueryEngine(self.dns_client, self.fetch_page_size).list_records(
                zone_id,
                query_filter,
                page=page,
                per_page=self.default_per_page if per_page is None else per_page,
                order=order,
                summary_only=summary_only,
                random_sample=random_sample,
                sample_size=sample_size,
                concise=concise and not include_details,
            )
            return self._render(output)

        return self._run("list_records", tool)

    def get_record(
        self,
        zone_id: str,
        record_id: str,
        concise: bool = True,
        include_details: bool = False,
    ) -> ToolResponse:
        return self._run(
            "get_record",
            lambda: self._render(
                RecordManager(self.dns_client).get_record(
                    zone_id, record_id, concise=concise and not include_details
                )
            ),
        )

    def export_records(self, zone_id: str) -> ToolResponse:
        """Export all records of a zone as a BIND zone file."""
        return self._run(
            "export_records",
            lambda: enforce_size_limit(
                RecordManager(self.dns_client).export_records(zone_id), self.character_limit
            ),
        )

    def create_record(self, zone_id: str, **fields: Any) -> ToolResponse:
        return self._run(
            "create_record",
            lambda: self._render(RecordManager(self.dns_client).create_record(zone_id, fields)),
        )

    def update_record(self, zone_id: str, record_id: str, **fields: Any) -> ToolResponse:
        return self._run(
            "update_record",
            lambda: self._render(
                RecordManager(self.dns_client).update_record(zone_id, record_id, fields)
            ),
        )

    def delete_record(self, zone_id: str, record_id: str, confirm: bool = False) -> ToolResponse:
        """Permanently delete a record. Requires confirm=True."""
        return self._run(
            "delete_record",
            lambda: self._render(
                RecordManager(self.dns_client).delete_record(zone_id, record_id, confirm=confirm)
            ),
        )

    def bulk_create(self, zone_id: str, records: List[Dict[str, Any]]) -> ToolResponse:
        """Create up to 100 records. Earlier successes persist if a later item fails."""
        return self._run(
            "bulk_create",
            lambda: self._render(
                BulkMutationEngine(self.dns_client).create_records(zone_id, records),
                limit_size=False,
            ),
        )

    def bulk_update(self, zone_id: str, records: List[Dict[str, Any]]) -> ToolResponse:
        """Update up to 100 records. Earlier successes persist if a later item fails."""
        return self._run(
            "bulk_update",
            lambda: self._render(
                BulkMutationEngine(self.dns_client).update_records(zone_id, records),
                limit_size=False,
            ),
        )

    def _render(self, payload: Any, limit_size: bool = True) -> str:
        """Serialize a payload and apply the response size limit."""
        if self.output_format == "yaml":
            text = yaml.safe_dump(payload, sort_keys=False, default_flow_style=False)
        else:
            text = json.dumps(payload, indent=2)
        if limit_size:
            text = enforce_size_limit(text, self.character_limit)
        return text

    def _run(self, tool_name: str, tool: Callable[[], str]) -> ToolResponse:
        """Run a tool and turn any failure into an error response."""
        try:
            return ToolResponse(tool())
        except InputInvalidError as e:
            logger.warning(f"{tool_name} rejected: {e}")
            return ToolResponse(describe_error(e), is_error=True)
        except Exception as e:
            logger.error(f"{tool_name} failed: {e}")
            return ToolResponse(describe_error(e), is_error=True)
