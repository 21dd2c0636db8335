"""
Bulk Mutation Engine - Sequential multi-record create and update

Items are applied one at a time in input order. A failing item is recorded
in its BulkOutcome and the batch carries on; nothing already applied is
rolled back, so a partly failed batch leaves the successful changes in place.
"""

import logging
from typing import Any, Callable, Dict, List

from .record_manager import build_create_payload, build_update_payload
from ..formatters.record import format_record
from ..models import BulkOutcome
from ..utils.errors import describe_error
from ..utils.validators import (
    require_zone_id,
    validate_bulk_size,
    validate_record_fields,
    validate_update_fields,
)

logger = logging.getLogger(__name__)


class BulkMutationEngine:
    """Applies batches of record mutations with per-item failure containment."""

    def __init__(self, dns_client):
        """Initialize bulk engine with Directory client."""
        self.dns_client = dns_client

    def create_records(self, zone_id: str, items: List[Dict[str, Any]]) -> Dict:
        """
        Create up to 100 records, strictly in order.

        Returns:
            {"created": N, "failed": N, "total": N, "results": [...]} with one
            result per input item, in input order
        """
        require_zone_id(zone_id)
        validate_bulk_size(items)
        logger.info(f"Bulk creating {len(items)} records in zone {zone_id}")
        return self._apply(zone_id, items, "created", self._create_one)

    def update_records(self, zone_id: str, items: List[Dict[str, Any]]) -> Dict:
        """
        Update up to 100 records, strictly in order.

        Each item needs a record_id plus the fields to change.
        """
        require_zone_id(zone_id)
        validate_bulk_size(items)
        logger.info(f"Bulk updating {len(items)} records in zone {zone_id}")
        return self._apply(zone_id, items, "updated", self._update_one)

    def _apply(
        self,
        zone_id: str,
        items: List[Dict[str, Any]],
        success_label: str,
        apply_one: Callable[[str, int, Dict[str, Any]], BulkOutcome],
    ) -> Dict:
        results: List[BulkOutcome] = []
        succeeded = 0
        failed = 0

        for index, item in enumerate(items):
            outcome = apply_one(zone_id, index, item)
            results.append(outcome)
            if outcome.success:
                succeeded += 1
            else:
                failed += 1

        logger.info(
            f"Bulk operation complete: {succeeded} {success_label}, {failed} failed, "
            f"{len(items)} total"
        )
        return {
            success_label: succeeded,
            "failed": failed,
            "total": len(items),
            "results": [outcome.to_dict() for outcome in results],
        }

    def _create_one(self, zone_id: str, index: int, item: Dict[str, Any]) -> BulkOutcome:
        errors = validate_record_fields(item)
        if errors:
            logger.warning(f"Skipping invalid record at index {index}: {'; '.join(errors)}")
            return BulkOutcome(index, False, error="Invalid record: " + "; ".join(errors))

        try:
            record = self.dns_client.create_record(zone_id, build_create_payload(item))
        except Exception as e:
            logger.error(f"Failed to create record at index {index}: {e}")
            return BulkOutcome(index, False, error=describe_error(e))

        logger.info(f"Created record {index}: {record.get('type')} {record.get('name')}")
        return BulkOutcome(index, True, record=format_record(record, concise=True))

    def _update_one(self, zone_id: str, index: int, item: Dict[str, Any]) -> BulkOutcome:
        if not isinstance(item, dict) or not item.get("record_id"):
            return BulkOutcome(index, False, error="Invalid update: record_id is required")

        record_id = str(item["record_id"])
        fields = {key: value for key, value in item.items() if key != "record_id"}
        errors = validate_update_fields(fields)
        if errors:
            logger.warning(f"Skipping invalid update at index {index}: {'; '.join(errors)}")
            return BulkOutcome(
                index, False, error="Invalid update: " + "; ".join(errors), record_id=record_id
            )

        try:
            record = self.dns_client.update_record(
                zone_id, record_id, build_update_payload(fields)
            )
        except Exception as e:
            logger.error(f"Failed to update record {record_id} at index {index}: {e}")
            return BulkOutcome(index, False, error=describe_error(e), record_id=record_id)

        logger.info(f"Updated record {index}: {record_id}")
        return BulkOutcome(
            index, True, record=format_record(record, concise=True), record_id=record_id
        )
