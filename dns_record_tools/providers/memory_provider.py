"""
In-memory Directory provider for testing, demonstration and offline use.

Zones and records live in dictionaries for the lifetime of the provider.
The provider mimics the Directory's validation and error behaviour and can
be seeded from the configuration or from a YAML file.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import dns.exception
import dns.name
import dns.rdata
import dns.rdataclass
import dns.rdatatype
import dns.zone
import yaml

from .base_provider import DirectoryProvider
from ..constants import DNS_RECORD_TYPES, PROXIABLE_TYPES, SORT_FIELDS
from ..models import (
    CAAData,
    GenericData,
    QueryFilter,
    SRVData,
    parse_record_data,
    record_sort_key,
)
from ..utils.errors import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_NAME_SERVERS = ["ns1.example-directory.net", "ns2.example-directory.net"]


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


class MemoryDirectory(DirectoryProvider):
    """Directory provider that keeps zones and records in memory."""

    def __init__(self, config: Optional[Dict] = None):
        """Initialize the provider and load any seed zones."""
        config = config or {}
        self.zones: Dict[str, Dict] = {}
        self.records: Dict[str, List[Dict]] = {}

        seed_zones = list(config.get("zones") or [])
        seed_file = config.get("seed_file")
        if seed_file:
            seed_zones.extend(self._load_seed_file(seed_file))

        for zone in seed_zones:
            self.add_zone(zone)

        logger.info(f"Memory Directory initialized with {len(self.zones)} zones")

    def _load_seed_file(self, seed_file: str) -> List[Dict]:
        """Load zones from a YAML seed file."""
        with open(seed_file, "r") as f:
            seed = yaml.safe_load(f) or {}
        if isinstance(seed, dict):
            seed = seed.get("zones") or []
        logger.info(f"Loaded {len(seed)} seed zones from {seed_file}")
        return seed

    def add_zone(self, zone: Dict[str, Any]) -> Dict:
        """Add a zone, and the records listed under its "records" key."""
        zone_name = str(zone["name"]).rstrip(".").lower()
        zone_id = str(zone.get("id") or uuid.uuid4().hex)
        timestamp = _now()
        stored = {
            "id": zone_id,
            "name": zone_name,
            "status": zone.get("status", "active"),
            "name_servers": list(zone.get("name_servers") or DEFAULT_NAME_SERVERS),
            "account": dict(zone.get("account") or {"id": "memory", "name": "memory"}),
            "created_on": zone.get("created_on", timestamp),
            "modified_on": zone.get("modified_on", timestamp),
        }
        self.zones[zone_id] = stored
        self.records[zone_id] = []

        for record in zone.get("records") or []:
            fields = {key: value for key, value in record.items() if key != "id"}
            created = self.create_record(zone_id, fields)
            if record.get("id"):
                self._record(zone_id, created["id"])["id"] = str(record["id"])

        return dict(stored)

    def list_zones(self, filters: Optional[Dict[str, Any]] = None) -> List[Dict]:
        """List zones, filtering by name substring, status and account."""
        filters = filters or {}
        zones = []
        for zone in self.zones.values():
            name = filters.get("name")
            if name and name.lower() not in zone["name"]:
                continue
            if filters.get("status") and zone["status"] != filters["status"]:
                continue
            account_id = filters.get("account.id")
            if account_id and zone["account"].get("id") != account_id:
                continue
            zones.append(dict(zone))
        logger.debug(f"Memory: Listed {len(zones)} zones")
        return zones

    def get_zone(self, zone_id: str) -> Dict:
        return dict(self._zone(zone_id))

    def list_records(
        self,
        zone_id: str,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        per_page: int = 100,
    ) -> List[Dict]:
        """Get one page of records matching the server-side filters."""
        self._zone(zone_id)
        filters = filters or {}
        query_filter = QueryFilter(
            record_type=filters.get("type"),
            name=filters.get("name.contains"),
            content=filters.get("content.contains"),
            comment=filters.get("comment.contains"),
            proxied=filters.get("proxied"),
            tag=filters.get("tag"),
        )
        records = [r for r in self.records[zone_id] if query_filter.matches(r)]

        order = filters.get("order")
        if order in SORT_FIELDS:
            records.sort(key=record_sort_key(order))

        start = (page - 1) * per_page
        page_records = [dict(r) for r in records[start:start + per_page]]
        logger.debug(
            f"Memory: Retrieved {len(page_records)} records from zone {zone_id} (page {page})"
        )
        return page_records

    def get_record(self, zone_id: str, record_id: str) -> Dict:
        return dict(self._record(zone_id, record_id))

    def create_record(self, zone_id: str, fields: Dict[str, Any]) -> Dict:
        """Create a new DNS record."""
        zone = self._zone(zone_id)
        record_type = fields.get("type")
        if record_type not in DNS_RECORD_TYPES:
            raise BadRequestError(f"Unsupported record type {record_type!r}")

        name = str(fields.get("name") or "").strip()
        if not name:
            raise BadRequestError("Record name is required")

        content = str(fields.get("content") or "").strip()
        if not content and fields.get("data"):
            content = self._content_from_data(record_type, fields["data"])
        if not content:
            raise BadRequestError("Record content is required")

        if fields.get("proxied") and record_type not in PROXIABLE_TYPES:
            raise BadRequestError(f"{record_type} records cannot be proxied")

        fqdn = self._qualify(name, zone["name"])
        self._check_conflicts(zone_id, record_type, fqdn, content)

        timestamp = _now()
        record: Dict[str, Any] = {
            "id": uuid.uuid4().hex,
            "zone_id": zone_id,
            "zone_name": zone["name"],
            "name": fqdn,
            "type": record_type,
            "content": content,
            "proxiable": record_type in PROXIABLE_TYPES,
            "ttl": fields.get("ttl") or 1,
            "settings": {},
            "meta": {"auto_added": False},
            "comment": fields.get("comment"),
            "tags": list(fields.get("tags") or []),
            "created_on": timestamp,
            "modified_on": timestamp,
        }
        if record_type in PROXIABLE_TYPES:
            record["proxied"] = bool(fields.get("proxied", False))
        if fields.get("priority") is not None:
            record["priority"] = fields["priority"]
        if fields.get("data"):
            record["data"] = dict(fields["data"])

        self.records[zone_id].append(record)
        logger.info(f"Memory: Created record {record_type} {fqdn} -> {content}")
        return dict(record)

    def update_record(self, zone_id: str, record_id: str, fields: Dict[str, Any]) -> Dict:
        """Apply a partial update to a DNS record."""
        zone = self._zone(zone_id)
        record = self._record(zone_id, record_id)

        if fields.get("proxied") is not None and record["type"] not in PROXIABLE_TYPES:
            raise BadRequestError(f"{record['type']} records cannot be proxied")
        if "content" in fields and not str(fields["content"] or "").strip():
            raise BadRequestError("Record content cannot be empty")
        if "name" in fields and not str(fields["name"] or "").strip():
            raise BadRequestError("Record name cannot be empty")

        changes = {key: value for key, value in fields.items() if value is not None}
        if "name" in changes:
            changes["name"] = self._qualify(changes["name"], zone["name"])
        if "name" in changes or "content" in changes:
            self._check_conflicts(
                zone_id,
                record["type"],
                changes.get("name", record["name"]),
                changes.get("content", record["content"]),
                exclude_id=record_id,
            )

        record.update(changes)
        record["modified_on"] = _now()
        logger.info(f"Memory: Updated record {record_id} ({', '.join(sorted(changes))})")
        return dict(record)

    def delete_record(self, zone_id: str, record_id: str) -> None:
        """Delete a DNS record."""
        record = self._record(zone_id, record_id)
        self.records[zone_id].remove(record)
        logger.info(f"Memory: Deleted record {record['type']} {record['name']}")

    def export_zone(self, zone_id: str) -> str:
        """Export the zone as BIND zone file text built with dnspython."""
        zone = self._zone(zone_id)
        origin = dns.name.from_text(zone["name"])
        bind_zone = dns.zone.Zone(origin, relativize=False)
        skipped = []

        for record in self.records[zone_id]:
            try:
                rdtype = dns.rdatatype.from_text(record["type"])
                rdata = dns.rdata.from_text(
                    dns.rdataclass.IN, rdtype, self._rdata_text(record),
                    origin=origin,
                    relativize=False,
                )
                name = dns.name.from_text(record["name"])
                rdataset = bind_zone.find_rdataset(name, rdtype, create=True)
                rdataset.add(rdata, record["ttl"])
            except (dns.exception.DNSException, KeyError, ValueError) as e:
                logger.warning(f"Skipping {record['type']} {record['name']} in export: {e}")
                skipped.append(record)

        header = [
            f";; Zone: {zone['name']}",
            f";; Exported: {_now()}",
            ";; TTL 1 means automatic.",
        ]
        for record in skipped:
            header.append(
                f";; Skipped unexportable record: {record['type']} {record['name']} {record['content']}"
            )
        return "\n".join(header) + "\n\n" + bind_zone.to_text(relativize=False)

    def _rdata_text(self, record: Dict[str, Any]) -> str:
        """Build the zone file rdata for a record."""
        record_type = record["type"]
        content = record["content"]
        if record_type in ("CNAME", "MX", "NS", "PTR") and not content.endswith("."):
            content = content + "."
        if record_type == "MX":
            return f"{record.get('priority', 10)} {content}"
        if record_type == "TXT" and not content.startswith('"'):
            return '"' + content.replace('"', '\\"') + '"'
        if record_type == "SRV" and record.get("data"):
            data = parse_record_data("SRV", record["data"])
            if isinstance(data, SRVData) and data.target:
                return f"{data.priority} {data.weight} {data.port} {data.target.rstrip('.')}."
        return content

    def _content_from_data(self, record_type: str, data: Dict[str, Any]) -> str:
        """Derive the content string the Directory shows for structured records."""
        parsed = parse_record_data(record_type, data)
        if isinstance(parsed, SRVData):
            return f"{parsed.weight} {parsed.port} {parsed.target}"
        if isinstance(parsed, CAAData):
            return f'{parsed.flags} {parsed.tag} "{parsed.value}"'
        if isinstance(parsed, GenericData):
            return " ".join(str(value) for value in parsed.fields.values())
        return " ".join(str(value) for value in vars(parsed).values() if value is not None)

    def _check_conflicts(
        self,
        zone_id: str,
        record_type: str,
        fqdn: str,
        content: str,
        exclude_id: Optional[str] = None,
    ) -> None:
        for existing in self.records[zone_id]:
            if existing["id"] == exclude_id or existing["name"] != fqdn:
                continue
            if record_type == "CNAME" or existing["type"] == "CNAME":
                raise ConflictError(
                    f"A CNAME record cannot share the name {fqdn} with another record"
                )
            if existing["type"] == record_type and existing["content"] == content:
                raise ConflictError("An identical record already exists")

    def _qualify(self, name: str, zone_name: str) -> str:
        name = name.strip().rstrip(".").lower()
        if name in ("@", zone_name):
            return zone_name
        if name.endswith("." + zone_name):
            return name
        return f"{name}.{zone_name}"

    def _zone(self, zone_id: str) -> Dict:
        try:
            return self.zones[zone_id]
        except KeyError:
            raise NotFoundError(f"Zone {zone_id} not found")

    def _record(self, zone_id: str, record_id: str) -> Dict:
        self._zone(zone_id)
        for record in self.records[zone_id]:
            if record["id"] == record_id:
                return record
        raise NotFoundError(f"Record {record_id} not found in zone {zone_id}")
