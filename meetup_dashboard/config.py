"""
Configuration: sheet layout, header aliases, region exemplars, constants.

GROUP_FIELD_MAP / EVENT_FIELD_MAP map each record field to the ordered list
of header spellings accepted for it (human-readable label first, camelCase
fallback second). Credentials and sheet lists come from the environment via
load_settings().
"""

import os
from dataclasses import dataclass
from pathlib import Path

# ---------------------------------------------------------------------------
# File paths
# ---------------------------------------------------------------------------
DATA_DIR = Path(__file__).resolve().parent.parent

WORKBOOK_FILE = DATA_DIR / "dashboard_export.xlsx"

# ---------------------------------------------------------------------------
# Data source
# ---------------------------------------------------------------------------
SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"
DEFAULT_GROUPS_SHEETS = "AMER Dashboard,EMEA Dashboard,APAC Dashboard"
DEFAULT_TIMEOUT = 30.0

GROUP_COLUMNS = "A:J"
EVENT_COLUMNS = "A:H"
EVENT_SHEET_TEMPLATE = "Events {year}"
YEAR_LOOKBACK = 20

# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------
REGIONS = ("AMER", "EMEA", "APAC")
UNKNOWN_REGION = "Unknown"

EVENT_TYPES = ("Physical", "Online", "Hybrid")

# Leading phrase stripped from group names before fuzzy comparison
ORG_PREFIX = "Graph Database"

TOP_N_GROUPS = 10

# Exemplar cities per region. Order matters: first matching list wins.
REGION_CITIES: dict[str, tuple[str, ...]] = {
    "AMER": (
        "new york", "san francisco", "chicago", "toronto", "boston", "austin", "seattle",
    ),
    "APAC": (
        "bengaluru", "bangalore", "delhi", "mumbai", "pune", "singapore", "sydney",
        "melbourne", "tokyo", "brisbane",
    ),
    "EMEA": (
        "london", "paris", "berlin", "amsterdam", "madrid", "barcelona",
    ),
}

# ---------------------------------------------------------------------------
# Header aliases
# ---------------------------------------------------------------------------
GROUP_FIELD_MAP: dict[str, tuple[str, ...]] = {
    "timestamp": ("Timestamp", "timestamp"),
    "name": ("User Group Name", "userGroupName"),
    "member_count": ("Member Count", "memberCount"),
    "pro_join_date": ("Pro Join Date", "proJoinDate"),
    "founded_date": ("Founded Date", "foundedDate"),
    "city": ("City", "city"),
    "past_rsvps": ("Past RSVPs", "pastRSVPs"),
    "past_event_count": ("Past Event Count", "pastEventCount"),
    "upcoming_events": (
        "Upcoming Events Count", "Upcoming Event", "Upcoming Events", "upcomingEvents",
    ),
    "last_event_date": ("Last Event Date", "lastEventDate"),
}

EVENT_FIELD_MAP: dict[str, tuple[str, ...]] = {
    "timestamp": ("Timestamp", "timestamp"),
    "title": ("Meetup Title", "meetupTitle"),
    "url": ("Meetup URL", "meetupURL"),
    "date": ("Meetup Date", "meetupDate"),
    "group_name": ("Meetup Group Name", "meetupGroupName"),
    "city": ("Meetup City", "meetupCity"),
    "rsvp_count": ("RSVP Count", "rsvpCount"),
    "event_type": ("Meetup Type", "meetupType"),
}


# ---------------------------------------------------------------------------
# Environment-driven settings
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Settings:
    api_key: str | None = None
    spreadsheet_id: str | None = None
    groups_sheets: tuple[str, ...] = tuple(DEFAULT_GROUPS_SHEETS.split(","))
    source: str = "sheets"
    workbook_file: Path = WORKBOOK_FILE
    timeout: float = DEFAULT_TIMEOUT

    @property
    def is_configured(self) -> bool:
        """True when the remote spreadsheet can be addressed at all."""
        return bool(self.api_key) and bool(self.spreadsheet_id)


def parse_sheet_list(raw: str) -> tuple[str, ...]:
    """Split a comma-separated sheet list, dropping quotes and blanks."""
    names = [s.strip() for s in raw.replace('"', "").split(",")]
    return tuple(n for n in names if n)


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Unset or empty credentials are kept as None; loaders downgrade to
    empty results rather than failing.
    """
    env = os.environ if environ is None else environ

    try:
        timeout = float(env.get("SHEETS_TIMEOUT", DEFAULT_TIMEOUT))
    except ValueError:
        timeout = DEFAULT_TIMEOUT

    return Settings(
        api_key=env.get("GOOGLE_SHEETS_API_KEY") or None,
        spreadsheet_id=env.get("SPREADSHEET_ID") or None,
        groups_sheets=parse_sheet_list(env.get("GROUPS_SHEETS") or DEFAULT_GROUPS_SHEETS),
        source=(env.get("DASHBOARD_SOURCE") or "sheets").strip().lower(),
        workbook_file=Path(env.get("WORKBOOK_FILE") or WORKBOOK_FILE),
        timeout=timeout,
    )
