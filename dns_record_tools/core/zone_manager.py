"""
Zone Manager - Read-only zone listing and lookup
"""

import logging
from typing import Dict, Optional

from ..constants import DEFAULT_PER_PAGE
from ..formatters.zone import format_zone, format_zones
from ..utils.errors import InputInvalidError, NotFoundError
from ..utils.pagination import paginate, pagination_meta
from ..utils.validators import validate_pagination, validate_zone_name, validate_zone_status

logger = logging.getLogger(__name__)


class ZoneManager:
    """Lists and looks up zones. Zones are never modified."""

    def __init__(self, dns_client):
        self.dns_client = dns_client

    def list_zones(
        self,
        filter_name: Optional[str] = None,
        filter_status: Optional[str] = None,
        filter_account_id: Optional[str] = None,
        page: int = 1,
        per_page: int = DEFAULT_PER_PAGE,
        concise: bool = True,
    ) -> Dict:
        """List zones with pagination applied over the full matching set."""
        validate_pagination(page, per_page)
        validate_zone_status(filter_status)

        filters = {}
        if filter_name:
            filters["name"] = filter_name
        if filter_status:
            filters["status"] = filter_status
        if filter_account_id:
            filters["account.id"] = filter_account_id

        zones = self.dns_client.list_zones(filters)
        logger.info(f"Found {len(zones)} zones")
        return {
            "pagination": pagination_meta(len(zones), page, per_page),
            "zones": format_zones(paginate(zones, page, per_page), concise),
        }

    def get_zone(
        self,
        zone_id: Optional[str] = None,
        zone_name: Optional[str] = None,
        concise: bool = True,
    ) -> Dict:
        """Get one zone by ID, or by domain name when no ID is given."""
        if not zone_id and zone_name:
            if not validate_zone_name(zone_name):
                raise InputInvalidError(
                    f"zone_name must be a domain name like example.com, got {zone_name!r}."
                )
            matches = self.dns_client.list_zones({"name": zone_name})
            exact = [z for z in matches if z.get("name") == zone_name.rstrip(".").lower()]
            if not (exact or matches):
                raise NotFoundError(f"No zone found for domain '{zone_name}'")
            zone_id = str((exact or matches)[0]["id"])

        if not zone_id:
            raise InputInvalidError("Provide either zone_id or zone_name.")

        zone = self.dns_client.get_zone(zone_id)
        return {"zone": format_zone(zone, concise)}
