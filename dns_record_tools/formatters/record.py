"""
Record formatter - concise projection of Directory records

Concise mode keeps only the fields needed to make a decision about a
record and drops Directory metadata (zone_id, zone_name, meta, settings).
Full mode returns the record object unchanged.
"""

from typing import Any, Dict, List

from ..constants import AUTO_TTL, AUTO_TTL_MARKER, PROXIABLE_TYPES
from ..models import SRVData, parse_record_data


def format_record(record: Dict[str, Any], concise: bool = True) -> Dict[str, Any]:
    """
    Format a single DNS record for output.

    Args:
        record: Record as returned by the Directory
        concise: Return the minimal field set instead of the full record

    Returns:
        The projected record, or the input itself when concise is False
    """
    if not concise:
        return record

    record_type = str(record.get("type") or "")
    ttl = record.get("ttl")
    result: Dict[str, Any] = {
        "id": str(record.get("id") or ""),
        "type": record_type,
        "name": str(record.get("name") or ""),
        "content": str(record.get("content") or ""),
        "ttl": AUTO_TTL_MARKER if ttl == AUTO_TTL else int(ttl or 0),
    }

    if record_type in PROXIABLE_TYPES:
        result["proxied"] = bool(record.get("proxied"))

    if record.get("comment"):
        result["comment"] = str(record["comment"])

    if record.get("created_on"):
        result["created_on"] = str(record["created_on"])
    if record.get("modified_on"):
        result["modified_on"] = str(record["modified_on"])

    if record_type == "MX" and record.get("priority") is not None:
        result["priority"] = int(record["priority"])

    if record_type == "SRV" and record.get("data"):
        data = parse_record_data(record_type, record["data"])
        if isinstance(data, SRVData):
            result["priority"] = data.priority
            result["weight"] = data.weight
            result["port"] = data.port
        else:
            result["priority"] = data.fields.get("priority")
            result["weight"] = data.fields.get("weight")
            result["port"] = data.fields.get("port")

    return result


def format_records(
    records: List[Dict[str, Any]], concise: bool = True
) -> List[Dict[str, Any]]:
    """Format a list of DNS records."""
    return [format_record(record, concise) for record in records]
