"""
Record Manager - Single-record operations against the Directory

This module handles reading, creating, updating, deleting and exporting
individual DNS records. Payloads are validated before they are sent.
"""

import logging
from typing import Any, Dict

from ..constants import AUTO_TTL
from ..formatters.record import format_record
from ..utils.errors import DirectoryError, InputInvalidError
from ..utils.validators import (
    UPDATE_FIELDS,
    require_confirmation,
    require_zone_id,
    validate_record_fields,
    validate_update_fields,
)

logger = logging.getLogger(__name__)


def build_create_payload(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Build the Directory payload for a new record."""
    payload = {
        "type": fields["type"],
        "name": fields["name"],
        "ttl": fields.get("ttl") or AUTO_TTL,
    }
    if fields.get("content") is not None:
        payload["content"] = fields["content"]
    if fields.get("proxied") is not None:
        payload["proxied"] = fields["proxied"]
    if fields.get("priority") is not None:
        payload["priority"] = fields["priority"]
    if fields.get("comment"):
        payload["comment"] = fields["comment"]
    if fields.get("tags"):
        payload["tags"] = fields["tags"]
    if fields.get("data"):
        payload["data"] = fields["data"]
    return payload


def build_update_payload(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Build the Directory patch payload, only with fields that were provided."""
    return {name: fields[name] for name in UPDATE_FIELDS if fields.get(name) is not None}


class RecordManager:
    """Manages single DNS record operations."""

    def __init__(self, dns_client):
        """Initialize record manager with Directory client."""
        self.dns_client = dns_client

    def get_record(self, zone_id: str, record_id: str, concise: bool = True) -> Dict:
        require_zone_id(zone_id)
        if not record_id:
            raise InputInvalidError("record_id is required.")
        record = self.dns_client.get_record(zone_id, record_id)
        return {"record": format_record(record, concise)}

    def create_record(self, zone_id: str, fields: Dict[str, Any]) -> Dict:
        """
        Create a DNS record.

        Args:
            zone_id: Zone to create the record in
            fields: type, name, content and optional ttl, proxied, priority,
                comment, tags, data

        Returns:
            {"created": True, "record": <concise record>}
        """
        require_zone_id(zone_id)
        errors = validate_record_fields(fields)
        if errors:
            raise InputInvalidError("; ".join(errors))

        record = self.dns_client.create_record(zone_id, build_create_payload(fields))
        logger.info(f"Created record: {record.get('type')} {record.get('name')}")
        return {"created": True, "record": format_record(record, concise=True)}

    def update_record(self, zone_id: str, record_id: str, fields: Dict[str, Any]) -> Dict:
        """Apply a partial update. Fields not provided are left untouched."""
        require_zone_id(zone_id)
        if not record_id:
            raise InputInvalidError("record_id is required.")
        errors = validate_update_fields(fields)
        if errors:
            raise InputInvalidError("; ".join(errors))

        record = self.dns_client.update_record(zone_id, record_id, build_update_payload(fields))
        logger.info(f"Updated record: {record_id}")
        return {"updated": True, "record": format_record(record, concise=True)}

    def delete_record(self, zone_id: str, record_id: str, confirm: bool = False) -> Dict:
        """
        Permanently delete a DNS record.

        The delete only goes ahead with confirm=True. The record is looked up
        first so the response can say what was removed.
        """
        require_confirmation(confirm)
        require_zone_id(zone_id)
        if not record_id:
            raise InputInvalidError("record_id is required.")

        try:
            existing = self.dns_client.get_record(zone_id, record_id)
            was = f"{existing.get('type')} {existing.get('name')} -> {existing.get('content')}"
        except DirectoryError as e:
            logger.debug(f"Could not look up record {record_id} before delete: {e}")
            was = record_id

        self.dns_client.delete_record(zone_id, record_id)
        logger.info(f"Deleted record: {was}")
        return {"deleted": True, "record_id": record_id, "was": was}

    def export_records(self, zone_id: str) -> str:
        """Export all records of a zone in BIND zone file format."""
        require_zone_id(zone_id)
        text = self.dns_client.export_zone(zone_id)
        logger.info(f"Exported zone {zone_id} ({len(text)} characters)")
        return text
