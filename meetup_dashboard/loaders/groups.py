"""
Loader for the regional group rosters.

Source: one sheet per region (default 'AMER Dashboard', 'EMEA Dashboard',
'APAC Dashboard'), columns A-J, first row headers. The region of every
group is taken from the sheet name.
"""

import logging
from typing import Sequence

from ..config import GROUP_COLUMNS, GROUP_FIELD_MAP
from ..models import Group
from .sources import SheetSource, fetch_batch
from .utils import pick_field, region_from_sheet_name, rows_to_records, safe_int

logger = logging.getLogger(__name__)


def map_group_row(record: dict[str, str], region: str | None = None) -> Group:
    """Build a Group from one header-keyed row. Missing fields become zero values."""
    f = GROUP_FIELD_MAP
    return Group(
        timestamp=pick_field(record, f["timestamp"]),
        name=pick_field(record, f["name"]),
        member_count=safe_int(pick_field(record, f["member_count"], "0")),
        pro_join_date=pick_field(record, f["pro_join_date"]),
        founded_date=pick_field(record, f["founded_date"]),
        city=pick_field(record, f["city"]),
        past_rsvps=safe_int(pick_field(record, f["past_rsvps"], "0")),
        past_event_count=safe_int(pick_field(record, f["past_event_count"], "0")),
        upcoming_events=safe_int(pick_field(record, f["upcoming_events"], "0")),
        last_event_date=pick_field(record, f["last_event_date"]),
        region=region,
    )


def parse_group_sheet(sheet_name: str, rows: Sequence[Sequence[str]]) -> list[Group]:
    """Map the raw rows of one group sheet (header row first)."""
    if rows:
        logger.debug("Header row from %s: %s", sheet_name, list(rows[0]))

    region = region_from_sheet_name(sheet_name)
    groups = [map_group_row(rec, region) for rec in rows_to_records(rows)]

    logger.info("Parsed %d groups from %s (%s)", len(groups), sheet_name, region)
    return groups


def load_groups(
    source: SheetSource,
    spreadsheet_id: str | None,
    sheet_names: Sequence[str],
) -> list[Group]:
    """Fetch all group sheets as one concurrent batch and concatenate them.

    Sheets are concatenated in configuration order regardless of which
    fetch finishes first.
    """
    specs = {name: f"{name}!{GROUP_COLUMNS}" for name in sheet_names}
    fetched = fetch_batch(source, spreadsheet_id, list(specs.values()))

    groups: list[Group] = []
    for name, spec in specs.items():
        groups.extend(parse_group_sheet(name, fetched.get(spec, [])))

    logger.info("Total groups loaded: %d", len(groups))
    return groups
