"""
Summarizer - type and proxy-status distribution of a record set
"""

from typing import Any, Dict, Iterable

from ..constants import DNS_RECORD_TYPES, UNKNOWN_TYPE


def summarize(records: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Aggregate records into counts by type and by proxy status.

    Records with a missing or unrecognised type are counted under
    UNKNOWN so the bucket totals always equal the record count.

    Returns:
        Dictionary like {"total": 47, "by_type": {"A": 12, ...},
        "by_proxied": {"proxied": 20, "dns_only": 27}}
    """
    total = 0
    by_type: Dict[str, int] = {}
    proxied = 0
    dns_only = 0

    for record in records:
        total += 1
        record_type = record.get("type")
        if record_type not in DNS_RECORD_TYPES:
            record_type = UNKNOWN_TYPE
        by_type[record_type] = by_type.get(record_type, 0) + 1
        if record.get("proxied"):
            proxied += 1
        else:
            dns_only += 1

    return {
        "total": total,
        "by_type": by_type,
        "by_proxied": {"proxied": proxied, "dns_only": dns_only},
    }
