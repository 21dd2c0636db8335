#!/usr/bin/env python3
"""
DNS Record Tools - Command Line Interface

Main entry point for the dns-records CLI. Each sub-command runs one tool and
prints its response.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

import yaml
from rich.console import Console
from rich.table import Table

from ..config import DEFAULT_CONFIG_PATH, config_logger, load_config
from ..constants import DEFAULT_SAMPLE_SIZE, DNS_RECORD_TYPES, SORT_FIELDS, ZONE_STATUSES
from ..core.dns_manager import DNSManager
from ..models import ToolResponse
from ..parsers.csv import load_record_file

console = Console()
error_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config != DEFAULT_CONFIG_PATH and not Path(args.config).exists():
        error_console.print(f"Error: Configuration file '{args.config}' not found", style="red")
        sys.exit(1)

    config = load_config(args.config)
    if args.provider:
        config["default_provider"] = args.provider
    if args.format:
        config.setdefault("output", {})["format"] = args.format
    if args.verbose:
        config.setdefault("logging", {})["level"] = "DEBUG"
    config_logger(config)

    try:
        dns_manager = DNSManager(config)
        response = run_command(dns_manager, args)
        print_response(response, as_json=_prints_json(args, config))

        if response.is_error:
            sys.exit(1)
        if args.command in ("bulk-create", "bulk-update"):
            payload = _load_payload(response.text, config)
            print_bulk_table(payload)
            if payload.get("failed"):
                sys.exit(1)

    except Exception as e:
        error_console.print(f"Error: {e}", style="red", markup=False)
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dns-records",
        description="DNS Record Tools - Query and change DNS records in a hosted zone",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=DEFAULT_CONFIG_PATH,
        help=f"Configuration file path (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument("--provider", "-p", help="Override the configured Directory provider")
    parser.add_argument("--format", choices=("json", "yaml"), help="Output format")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("verify-token", help="Check that the API token is active")

    zones = commands.add_parser("list-zones", help="List zones in the account")
    zones.add_argument("--name", help="Only zones whose name contains this text")
    zones.add_argument("--status", choices=ZONE_STATUSES)
    zones.add_argument("--account-id")
    _add_page_arguments(zones)
    _add_detail_argument(zones)

    zone = commands.add_parser("get-zone", help="Show one zone by ID or domain name")
    zone_target = zone.add_mutually_exclusive_group(required=True)
    zone_target.add_argument("--zone-id")
    zone_target.add_argument("--zone-name")
    _add_detail_argument(zone)

    records = commands.add_parser("list-records", help="List records in a zone")
    records.add_argument("zone_id")
    records.add_argument("--type", dest="filter_type", choices=DNS_RECORD_TYPES)
    records.add_argument("--name", dest="filter_name", help="Name contains this text")
    records.add_argument("--content", dest="filter_content", help="Content contains this text")
    records.add_argument("--comment", dest="filter_comment", help="Comment contains this text")
    records.add_argument("--tag", dest="filter_tag", help="Tag as name or name:value")
    proxy = records.add_mutually_exclusive_group()
    proxy.add_argument("--proxied", dest="filter_proxied", action="store_const", const=True)
    proxy.add_argument("--dns-only", dest="filter_proxied", action="store_const", const=False)
    records.add_argument("--order", choices=SORT_FIELDS)
    records.add_argument("--summary", action="store_true", help="Only show counts by type")
    records.add_argument("--sample", action="store_true", help="Show a random sample")
    records.add_argument("--sample-size", type=int, default=DEFAULT_SAMPLE_SIZE)
    _add_page_arguments(records)
    _add_detail_argument(records)

    record = commands.add_parser("get-record", help="Show one record")
    record.add_argument("zone_id")
    record.add_argument("record_id")
    _add_detail_argument(record)

    export = commands.add_parser("export", help="Export a zone as a BIND zone file")
    export.add_argument("zone_id")
    export.add_argument("--output-file", "-o", help="Write the zone file here instead of stdout")

    create = commands.add_parser("create", help="Create a record")
    create.add_argument("zone_id")
    create.add_argument("--type", required=True, choices=DNS_RECORD_TYPES)
    create.add_argument("--name", required=True)
    _add_record_arguments(create)

    update = commands.add_parser("update", help="Update fields of a record")
    update.add_argument("zone_id")
    update.add_argument("record_id")
    update.add_argument("--name")
    _add_record_arguments(update)

    delete = commands.add_parser("delete", help="Permanently delete a record")
    delete.add_argument("zone_id")
    delete.add_argument("record_id")
    delete.add_argument("--confirm", action="store_true", help="Required to delete")

    for name, help_text in (
        ("bulk-create", "Create records listed in a CSV or YAML file"),
        ("bulk-update", "Update records listed in a CSV or YAML file"),
    ):
        bulk = commands.add_parser(name, help=help_text)
        bulk.add_argument("zone_id")
        bulk.add_argument("--file", "-f", required=True, help="CSV or YAML file of records")

    return parser


def run_command(dns_manager: DNSManager, args: argparse.Namespace) -> ToolResponse:
    """Dispatch parsed arguments to the matching tool."""
    command = args.command

    if command == "verify-token":
        return dns_manager.verify_token()
    if command == "list-zones":
        return dns_manager.list_zones(
            filter_name=args.name,
            filter_status=args.status,
            filter_account_id=args.account_id,
            page=args.page,
            per_page=args.per_page,
            include_details=args.details,
        )
    if command == "get-zone":
        return dns_manager.get_zone(
            zone_id=args.zone_id, zone_name=args.zone_name, include_details=args.details
        )
    if command == "list-records":
        return dns_manager.list_records(
            args.zone_id,
            filter_type=args.filter_type,
            filter_name=args.filter_name,
            filter_content=args.filter_content,
            filter_proxied=args.filter_proxied,
            filter_comment=args.filter_comment,
            filter_tag=args.filter_tag,
            order=args.order,
            page=args.page,
            per_page=args.per_page,
            summary_only=args.summary,
            random_sample=args.sample,
            sample_size=args.sample_size,
            include_details=args.details,
        )
    if command == "get-record":
        return dns_manager.get_record(args.zone_id, args.record_id, include_details=args.details)
    if command == "export":
        response = dns_manager.export_records(args.zone_id)
        if args.output_file and not response.is_error:
            with open(args.output_file, "w") as f:
                f.write(response.text)
            return ToolResponse(f"Zone file written to {args.output_file}")
        return response
    if command == "create":
        return dns_manager.create_record(args.zone_id, **_record_fields(args, type=args.type))
    if command == "update":
        return dns_manager.update_record(args.zone_id, args.record_id, **_record_fields(args))
    if command == "delete":
        return dns_manager.delete_record(args.zone_id, args.record_id, confirm=args.confirm)
    if command == "bulk-create":
        return dns_manager.bulk_create(args.zone_id, load_record_file(args.file))
    if command == "bulk-update":
        return dns_manager.bulk_update(args.zone_id, load_record_file(args.file))

    raise ValueError(f"Unknown command: {command}")


def print_response(response: ToolResponse, as_json: bool = True):
    if response.is_error:
        error_console.print(response.text, style="red", markup=False, highlight=False)
        return
    if as_json:
        try:
            console.print_json(response.text)
            return
        except json.JSONDecodeError:
            # Truncated output is no longer valid JSON
            logger.debug("Response is not valid JSON, printing as text")
    console.print(response.text, markup=False, highlight=False)


def print_bulk_table(payload: Dict[str, Any]):
    """Display per-item bulk outcomes as a table."""
    table = Table(title="Bulk Results")
    table.add_column("#", style="cyan")
    table.add_column("Status")
    table.add_column("Record", style="magenta")
    table.add_column("Detail")

    for result in payload.get("results", []):
        record = result.get("record") or {}
        if result.get("success"):
            status = "[green]ok[/green]"
            detail = f"{record.get('content', '')}"
        else:
            status = "[red]failed[/red]"
            detail = result.get("error", "")
        label = f"{record.get('type', '')} {record.get('name', '')}".strip()
        table.add_row(str(result.get("index")), status, label or result.get("record_id", ""), detail)

    error_console.print(table)
    succeeded = payload.get("created", payload.get("updated", 0))
    error_console.print(
        f"{succeeded} succeeded, {payload.get('failed', 0)} failed, {payload.get('total', 0)} total"
    )


def _add_page_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--per-page", type=int)


def _add_detail_argument(parser: argparse.ArgumentParser):
    parser.add_argument("--details", action="store_true", help="Show all fields")


def _add_record_arguments(parser: argparse.ArgumentParser):
    parser.add_argument("--content")
    parser.add_argument("--ttl", type=int, help="TTL in seconds, 1 for automatic")
    proxy = parser.add_mutually_exclusive_group()
    proxy.add_argument("--proxied", dest="proxied", action="store_const", const=True)
    proxy.add_argument("--no-proxied", dest="proxied", action="store_const", const=False)
    parser.add_argument("--priority", type=int)
    parser.add_argument("--comment")
    parser.add_argument("--tag", dest="tags", action="append", help="Repeat for several tags")
    parser.add_argument("--data", help="Structured data as YAML or JSON, e.g. SRV fields")


def _record_fields(args: argparse.Namespace, **extra) -> Dict[str, Any]:
    fields = dict(extra)
    for name in ("name", "content", "ttl", "proxied", "priority", "comment", "tags"):
        value = getattr(args, name, None)
        if value is not None:
            fields[name] = value
    if args.data:
        fields["data"] = yaml.safe_load(args.data)
    return fields


def _prints_json(args: argparse.Namespace, config: Dict) -> bool:
    if args.command == "export":
        return False
    return (config.get("output") or {}).get("format", "json") == "json"


def _load_payload(text: str, config: Dict) -> Dict[str, Any]:
    if (config.get("output") or {}).get("format", "json") == "yaml":
        return yaml.safe_load(text)
    return json.loads(text)


if __name__ == "__main__":
    main()
