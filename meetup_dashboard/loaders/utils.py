"""
Shared utilities for sheet ingestion: header mapping, field fallbacks,
integer coercion, event-type normalisation.
"""

import logging
import re
from typing import Any, Sequence

from ..config import EVENT_TYPES, REGIONS

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_YEAR = re.compile(r"\d{4}")


def rows_to_records(
    rows: Sequence[Sequence[Any]],
    headers: Sequence[str] | None = None,
) -> list[dict[str, str]]:
    """Zip sheet rows against a header row.

    When `headers` is None the first row is taken as the header row.
    Ragged rows are padded with empty strings; no row is dropped.
    """
    if not rows:
        return []

    if headers is None:
        header_row = [str(h).strip() if h is not None else "" for h in rows[0]]
        data_rows = rows[1:]
    else:
        header_row = list(headers)
        data_rows = rows

    records = []
    for row in data_rows:
        record = {}
        for idx, header in enumerate(header_row):
            value = row[idx] if idx < len(row) else ""
            record[header] = "" if value is None else str(value)
        records.append(record)
    return records


def pick_field(record: dict[str, str], aliases: Sequence[str], default: str = "") -> str:
    """Return the first non-empty value among the accepted header spellings."""
    for alias in aliases:
        value = record.get(alias)
        if value:
            return value
    return default


def safe_int(val: Any) -> int:
    """Parse the leading base-10 integer of a cell, 0 when there is none.

    "42" -> 42, " 17 people" -> 17, "1,234" -> 1, "n/a" -> 0.
    """
    if val is None:
        return 0
    if isinstance(val, bool):
        return int(val)
    if isinstance(val, int):
        return val
    if isinstance(val, float):
        return int(val) if val == val and abs(val) != float("inf") else 0
    match = _LEADING_INT.match(str(val))
    if not match:
        return 0
    return int(match.group(1))


def normalise_event_type(raw: str | None) -> str:
    """Map any casing of Physical/Online/Hybrid to its canonical label.

    Unknown types are kept as given (trimmed) rather than rejected.
    """
    value = (raw or "").strip()
    for label in EVENT_TYPES:
        if value.upper() == label.upper():
            return label
    return value


def year_from_sheet_name(sheet_name: str) -> int | None:
    """Extract the year tag from a sheet name such as 'Events 2024'."""
    match = _YEAR.search(sheet_name)
    return int(match.group(0)) if match else None


def region_from_sheet_name(sheet_name: str) -> str | None:
    """Region tag encoded in a group sheet name, None if it has none."""
    upper = sheet_name.upper()
    for region in REGIONS:
        if region in upper:
            return region
    logger.warning("Sheet '%s' carries no region tag (%s)", sheet_name, "/".join(REGIONS))
    return None
