"""
Models - Data shapes passed between the Directory and the record tools

Records and zones travel as the plain dictionaries the Directory returns.
The dataclasses here describe request-scoped criteria and results.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TypedDict, Union


class DNSRecord(TypedDict, total=False):
    """DNS record as returned by the Directory."""

    id: str
    zone_id: str
    zone_name: str
    type: str
    name: str
    content: str
    ttl: int
    proxied: bool
    proxiable: bool
    comment: str
    tags: List[str]
    priority: int
    data: Dict[str, Any]
    created_on: str
    modified_on: str


class Zone(TypedDict, total=False):
    """DNS zone as returned by the Directory."""

    id: str
    name: str
    status: str
    name_servers: List[str]
    account: Dict[str, Any]
    created_on: str
    modified_on: str


@dataclass
class SRVData:
    priority: Optional[int] = None
    weight: Optional[int] = None
    port: Optional[int] = None
    target: Optional[str] = None
    service: Optional[str] = None
    proto: Optional[str] = None


@dataclass
class CAAData:
    flags: Optional[int] = None
    tag: Optional[str] = None
    value: Optional[str] = None


@dataclass
class CERTData:
    type: Optional[int] = None
    key_tag: Optional[int] = None
    algorithm: Optional[int] = None
    certificate: Optional[str] = None


@dataclass
class GenericData:
    """Structured payload for record types without a dedicated shape."""

    fields: Dict[str, Any] = field(default_factory=dict)


RecordData = Union[SRVData, CAAData, CERTData, GenericData]

_DATA_VARIANTS = {
    "SRV": SRVData,
    "CAA": CAAData,
    "CERT": CERTData,
}


def parse_record_data(record_type: str, data: Optional[Dict[str, Any]]) -> RecordData:
    """
    Build the structured payload variant for a record type.

    Keys the variant does not know about are kept by falling back to
    GenericData, so nothing in the payload is lost.
    """
    data = data or {}
    variant = _DATA_VARIANTS.get(record_type)
    if variant is None:
        return GenericData(dict(data))

    known = set(variant.__dataclass_fields__)
    if set(data) - known:
        return GenericData(dict(data))
    return variant(**data)


@dataclass
class QueryFilter:
    """Record criteria for one request. All set criteria must match."""

    record_type: Optional[str] = None
    name: Optional[str] = None
    content: Optional[str] = None
    comment: Optional[str] = None
    proxied: Optional[bool] = None
    tag: Optional[str] = None

    def to_params(self) -> Dict[str, Any]:
        """Server-side query parameters understood by the Directory."""
        params: Dict[str, Any] = {}
        if self.record_type:
            params["type"] = self.record_type
        if self.name:
            params["name.contains"] = self.name
        if self.content:
            params["content.contains"] = self.content
        if self.comment:
            params["comment.contains"] = self.comment
        if self.proxied is not None:
            params["proxied"] = self.proxied
        if self.tag:
            params["tag"] = self.tag
        return params

    def matches(self, record: Dict[str, Any]) -> bool:
        """Check a fetched record against every criterion."""
        if self.record_type and record.get("type") != self.record_type:
            return False
        if self.name and not _contains(record.get("name"), self.name):
            return False
        if self.content and not _contains(record.get("content"), self.content):
            return False
        if self.comment and not _contains(record.get("comment"), self.comment):
            return False
        if self.proxied is not None and bool(record.get("proxied")) != self.proxied:
            return False
        if self.tag and not _has_tag(record.get("tags") or [], self.tag):
            return False
        return True


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle.lower() in str(value).lower()


def _has_tag(tags: List[str], wanted: str) -> bool:
    # "name:value" must match exactly, a bare "name" matches any value
    if ":" in wanted:
        return wanted in tags
    return any(tag.split(":", 1)[0] == wanted for tag in tags)


@dataclass
class BulkOutcome:
    """Result of one item in a bulk mutation."""

    index: int
    success: bool
    record: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    record_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"index": self.index}
        if self.record_id is not None:
            result["record_id"] = self.record_id
        result["success"] = self.success
        if self.success:
            result["record"] = self.record
        else:
            result["error"] = self.error
        return result


@dataclass
class ToolResponse:
    """Text returned by a tool, flagged when it describes a failure."""

    text: str
    is_error: bool = False


def record_sort_key(field_name: str):
    """Ascending sort key for a record field, missing values sort last."""

    def key(record: Dict[str, Any]):
        value = record.get(field_name)
        if value is None:
            return (1, 0, "")
        if field_name == "proxied":
            return (0, int(bool(value)), "")
        if field_name == "ttl":
            return (0, int(value), "")
        return (0, 0, str(value).lower())

    return key
