import csv
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..utils.errors import InputInvalidError

logger = logging.getLogger(__name__)

RECORD_COLUMNS = ("record_id", "type", "name", "content", "ttl", "proxied", "priority", "comment", "tags")
INT_COLUMNS = ("ttl", "priority")
TAG_SEPARATOR = ";"


class CSVParser:
    """Reads bulk record items from a CSV file with a header row."""

    def __init__(self, csv_path: str):
        self.csv_path = csv_path

    def parse(self) -> List[Dict[str, Any]]:
        """Parse CSV rows into record items. Empty cells are left out of the item."""
        records = []

        try:
            with open(self.csv_path, "r", newline="") as f:
                reader = csv.DictReader(f)

                unknown = [c for c in (reader.fieldnames or []) if c.strip() not in RECORD_COLUMNS]
                if unknown:
                    raise InputInvalidError(
                        f"Unknown CSV columns: {', '.join(unknown)}. "
                        f"Allowed columns: {', '.join(RECORD_COLUMNS)}"
                    )

                for row_num, row in enumerate(reader, start=2):
                    records.append(self._parse_row(row, row_num))

            logger.info(f"Successfully parsed {len(records)} records from CSV")

        except FileNotFoundError:
            raise FileNotFoundError(f"CSV file not found: {self.csv_path}")
        except csv.Error as e:
            raise InputInvalidError(f"Error parsing CSV: {e}")

        return records

    def _parse_row(self, row: Dict[str, Optional[str]], row_num: int) -> Dict[str, Any]:
        item: Dict[str, Any] = {}
        for column, raw in row.items():
            if column is None or raw is None:
                continue
            value = raw.strip()
            if not value:
                continue
            column = column.strip()

            if column in INT_COLUMNS:
                try:
                    item[column] = int(value)
                except ValueError:
                    # Left as text so the item fails validation with a clear message
                    logger.warning(f"Non-numeric {column} '{value}' at row {row_num}")
                    item[column] = value
            elif column == "proxied":
                item[column] = parse_bool(value)
            elif column == "tags":
                item[column] = [t.strip() for t in value.split(TAG_SEPARATOR) if t.strip()]
            else:
                item[column] = value
        return item


def parse_bool(value: str) -> Any:
    lowered = value.lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    return value


def load_record_file(path: str) -> List[Dict[str, Any]]:
    """Load bulk record items from a .csv, .yaml or .yml file."""
    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        return CSVParser(path).parse()

    if suffix not in (".yaml", ".yml"):
        raise InputInvalidError(f"Unsupported record file '{path}'. Use .csv, .yaml or .yml")

    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InputInvalidError(f"Error parsing YAML record file: {e}")

    if isinstance(data, dict):
        data = data.get("records")
    if not isinstance(data, list):
        raise InputInvalidError(
            "YAML record file must be a list of records or a mapping with a 'records' list"
        )
    logger.info(f"Successfully parsed {len(data)} records from {path}")
    return data
