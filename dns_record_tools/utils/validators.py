"""
Validators - Input validation for tool parameters and record payloads

Validation runs before any Directory call. Request-level problems raise
InputInvalidError; record payload checks return a list of messages so bulk
operations can record them per item.
"""

import ipaddress
import logging
import re
from typing import Any, Dict, List, Optional

from ..constants import (
    DNS_RECORD_TYPES,
    MAX_BULK_RECORDS,
    MAX_COMMENT_LENGTH,
    MAX_PER_PAGE,
    MAX_SAMPLE_SIZE,
    MIN_SAMPLE_SIZE,
    PROXIABLE_TYPES,
    SORT_FIELDS,
    ZONE_STATUSES,
)
from ..models import QueryFilter
from .errors import InputInvalidError

logger = logging.getLogger(__name__)

CREATE_FIELDS = ("type", "name", "content", "ttl", "proxied", "priority", "comment", "tags", "data")
UPDATE_FIELDS = ("content", "name", "ttl", "proxied", "priority", "comment", "tags", "data")


def validate_fqdn(fqdn: str) -> bool:
    """
    Validate Fully Qualified Domain Name (FQDN).

    Args:
        fqdn: The FQDN to validate

    Returns:
        True if valid, False otherwise
    """
    if not fqdn or not isinstance(fqdn, str):
        return False

    if len(fqdn) > 253:
        logger.warning(f"FQDN too long: {fqdn}")
        return False

    labels = fqdn.rstrip(".").split(".")
    if len(labels) < 2:
        return False

    return all(_validate_label(label) for label in labels)


def _validate_label(label: str) -> bool:
    """Validate a single domain label (letters, digits, inner hyphens)."""
    if len(label) == 0 or len(label) > 63:
        return False
    return bool(re.match(r"^[a-zA-Z0-9_]([a-zA-Z0-9-]*[a-zA-Z0-9])?$", label))


def validate_ipv4(ipv4: str) -> bool:
    """Validate IPv4 address."""
    if not ipv4 or not isinstance(ipv4, str):
        return False
    try:
        ipaddress.IPv4Address(ipv4.strip())
        return True
    except ipaddress.AddressValueError:
        return False


def validate_ipv6(ipv6: str) -> bool:
    """Validate IPv6 address."""
    if not ipv6 or not isinstance(ipv6, str):
        return False
    try:
        ipaddress.IPv6Address(ipv6.strip())
        return True
    except ipaddress.AddressValueError:
        return False


def validate_zone_name(zone: str) -> bool:
    """Zone names must be valid domain names, not IP addresses."""
    if not validate_fqdn(zone):
        return False
    return not validate_ipv4(zone)


def require_zone_id(zone_id: Optional[str]) -> None:
    if not zone_id or not str(zone_id).strip():
        raise InputInvalidError("zone_id is required.")


def validate_pagination(page: int, per_page: int) -> None:
    """Raise InputInvalidError for out-of-range page parameters."""
    if not isinstance(page, int) or isinstance(page, bool) or page < 1:
        raise InputInvalidError(f"page must be an integer >= 1, got {page!r}.")
    if (
        not isinstance(per_page, int)
        or isinstance(per_page, bool)
        or not 1 <= per_page <= MAX_PER_PAGE
    ):
        raise InputInvalidError(
            f"per_page must be an integer between 1 and {MAX_PER_PAGE}, got {per_page!r}."
        )


def validate_sample_size(sample_size: int) -> None:
    if (
        not isinstance(sample_size, int)
        or isinstance(sample_size, bool)
        or not MIN_SAMPLE_SIZE <= sample_size <= MAX_SAMPLE_SIZE
    ):
        raise InputInvalidError(
            f"sample_size must be between {MIN_SAMPLE_SIZE} and {MAX_SAMPLE_SIZE}, "
            f"got {sample_size!r}."
        )


def validate_order(order: Optional[str]) -> None:
    if order is not None and order not in SORT_FIELDS:
        raise InputInvalidError(
            f"order must be one of: {', '.join(SORT_FIELDS)}. Got {order!r}."
        )


def validate_zone_status(status: Optional[str]) -> None:
    if status is not None and status not in ZONE_STATUSES:
        raise InputInvalidError(
            f"filter_status must be one of: {', '.join(ZONE_STATUSES)}. Got {status!r}."
        )


def validate_query_filter(query_filter: QueryFilter) -> None:
    """
    Reject filter combinations that cannot be served as asked.

    The proxy flag only exists on proxiable types, so combining it with any
    other type filter is refused rather than silently ignored.
    """
    record_type = query_filter.record_type
    if record_type is not None and record_type not in DNS_RECORD_TYPES:
        raise InputInvalidError(
            f"filter_type must be one of: {', '.join(DNS_RECORD_TYPES)}. Got {record_type!r}."
        )
    if (
        query_filter.proxied is not None
        and record_type is not None
        and record_type not in PROXIABLE_TYPES
    ):
        raise InputInvalidError(
            f"filter_proxied only applies to {', '.join(PROXIABLE_TYPES)} records, "
            f"not {record_type}."
        )
    if query_filter.tag is not None and not query_filter.tag.strip():
        raise InputInvalidError("filter_tag must not be empty.")


def validate_bulk_size(items: List[Dict[str, Any]]) -> None:
    if not isinstance(items, list) or not items:
        raise InputInvalidError("records must be a non-empty list.")
    if len(items) > MAX_BULK_RECORDS:
        raise InputInvalidError(
            f"At most {MAX_BULK_RECORDS} records per call, got {len(items)}."
        )


def validate_record_fields(fields: Dict[str, Any]) -> List[str]:
    """
    Validate the payload of a record to create.

    Args:
        fields: Record fields (type, name, content and optional extras)

    Returns:
        List of error messages, empty when the payload is valid
    """
    if not isinstance(fields, dict):
        return ["record must be a mapping of field names to values"]

    errors = []
    unknown = sorted(set(fields) - set(CREATE_FIELDS))
    if unknown:
        errors.append(f"unknown fields: {', '.join(unknown)}")

    record_type = fields.get("type")
    if record_type not in DNS_RECORD_TYPES:
        errors.append(f"type must be one of the supported record types, got {record_type!r}")

    # structured types (SRV, CAA, ...) may carry their value in data instead
    required_fields = ("name",) if fields.get("data") else ("name", "content")
    for required in required_fields:
        value = fields.get(required)
        if not isinstance(value, str) or not value.strip():
            errors.append(f"{required} must be a non-empty string")

    errors.extend(_validate_common_fields(fields, record_type))

    content = fields.get("content")
    if isinstance(content, str) and content.strip():
        if record_type == "A" and not validate_ipv4(content):
            errors.append(f"content must be an IPv4 address for A records, got {content!r}")
        if record_type == "AAAA" and not validate_ipv6(content):
            errors.append(f"content must be an IPv6 address for AAAA records, got {content!r}")

    priority = fields.get("priority")
    if priority is not None and not _is_int_in_range(priority, 0, 65535):
        errors.append(f"priority must be an integer between 0 and 65535, got {priority!r}")

    return errors


def validate_update_fields(fields: Dict[str, Any]) -> List[str]:
    """
    Validate a partial update. At least one updatable field must be present.

    The record type is not known without a lookup, so proxied is checked
    by the Directory.
    """
    if not isinstance(fields, dict):
        return ["update must be a mapping of field names to values"]

    errors = []
    unknown = sorted(set(fields) - set(UPDATE_FIELDS))
    if unknown:
        errors.append(f"unknown fields: {', '.join(unknown)}")

    present = [name for name in UPDATE_FIELDS if fields.get(name) is not None]
    if not present:
        errors.append(
            "No fields to update. Provide at least one of: " + ", ".join(UPDATE_FIELDS)
        )

    for name in ("name", "content"):
        value = fields.get(name)
        if value is not None and (not isinstance(value, str) or not value.strip()):
            errors.append(f"{name} must be a non-empty string")

    errors.extend(_validate_common_fields(fields, None))
    return errors


def _validate_common_fields(fields: Dict[str, Any], record_type: Optional[str]) -> List[str]:
    errors = []

    ttl = fields.get("ttl")
    if ttl is not None and not _is_int_in_range(ttl, 1, None):
        errors.append(f"ttl must be a positive integer (1 = automatic), got {ttl!r}")

    proxied = fields.get("proxied")
    if proxied is not None:
        if not isinstance(proxied, bool):
            errors.append(f"proxied must be true or false, got {proxied!r}")
        elif record_type is not None and record_type not in PROXIABLE_TYPES:
            errors.append(
                f"proxied can only be set on {', '.join(PROXIABLE_TYPES)} records"
            )

    comment = fields.get("comment")
    if comment is not None:
        if not isinstance(comment, str):
            errors.append("comment must be a string")
        elif len(comment) > MAX_COMMENT_LENGTH:
            errors.append(f"comment must be at most {MAX_COMMENT_LENGTH} characters")

    tags = fields.get("tags")
    if tags is not None and (
        not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags)
    ):
        errors.append("tags must be a list of strings")

    data = fields.get("data")
    if data is not None and not isinstance(data, dict):
        errors.append("data must be a mapping")

    return errors


def _is_int_in_range(value: Any, low: int, high: Optional[int]) -> bool:
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    if value < low:
        return False
    return high is None or value <= high


def require_confirmation(confirm: Any) -> None:
    """Deletes go ahead only with an explicit confirm=True."""
    if confirm is not True:
        raise InputInvalidError(
            "Delete aborted. You must set confirm=true to permanently delete a DNS record."
        )
