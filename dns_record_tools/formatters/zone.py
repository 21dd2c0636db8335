"""
Zone formatter - concise mode strips account, plan and owner details.
"""

from typing import Any, Dict, List


def format_zone(zone: Dict[str, Any], concise: bool = True) -> Dict[str, Any]:
    """Format a single zone for output."""
    if not concise:
        return zone

    name_servers = zone.get("name_servers")
    result: Dict[str, Any] = {
        "id": str(zone.get("id") or ""),
        "name": str(zone.get("name") or ""),
        "status": str(zone.get("status") or ""),
        "name_servers": list(name_servers) if isinstance(name_servers, list) else [],
    }
    if zone.get("created_on"):
        result["created_on"] = str(zone["created_on"])
    if zone.get("modified_on"):
        result["modified_on"] = str(zone["modified_on"])
    return result


def format_zones(zones: List[Dict[str, Any]], concise: bool = True) -> List[Dict[str, Any]]:
    return [format_zone(zone, concise) for zone in zones]
