"""
Simulated spreadsheet for the meetup dashboard.

Generates regional group sheets and per-year event sheets with the same
quirks as the real spreadsheet: camelCase headers on one sheet, mixed-case
meetup types, event group names that differ from the roster, and a few
events that belong to no known group. All values are synthetic.
"""

from datetime import date

import numpy as np
import pandas as pd

from .config import ORG_PREFIX
from .loaders.sources import split_range

# Seed for reproducibility
_SEED = 42

# (name, city, region sheet)
_GROUPS = [
    ("Graph Database New York", "New York", "AMER Dashboard"),
    ("Graph Database San Francisco", "San Francisco", "AMER Dashboard"),
    ("Graph Database Toronto", "Toronto", "AMER Dashboard"),
    ("Graph Database Chicago", "Chicago", "AMER Dashboard"),
    ("Graph Database London", "London", "EMEA Dashboard"),
    ("Graph Database Berlin", "Berlin", "EMEA Dashboard"),
    ("Graph Database Tel Aviv", "Tel Aviv-Yafo", "EMEA Dashboard"),
    ("Graph Database Paris", "Paris", "EMEA Dashboard"),
    ("Graph Database Bengaluru", "Bengaluru", "APAC Dashboard"),
    ("Graph Database Singapore", "Singapore", "APAC Dashboard"),
    ("Graph Database Sydney", "Sydney", "APAC Dashboard"),
]

# How events spell the group name and city, when not the roster spelling
_EVENT_ALIASES = {
    "Graph Database Tel Aviv": ("Graph Database Tel Aviv-Yafo", "Tel Aviv"),
    "Graph Database Bengaluru": ("Graph Database - Bangalore", "Bengaluru, India"),
    "Graph Database Paris": ("Graph Database - Paris", "Paris"),
}

_ORPHAN_EVENTS = [
    ("Graph Database Reykjavik", "Reykjavik"),
    ("Graph Database Nairobi", "Nairobi"),
]

_GROUP_HEADERS = [
    "Timestamp", "User Group Name", "Member Count", "Pro Join Date", "Founded Date",
    "City", "Past RSVPs", "Past Event Count", "Upcoming Events Count", "Last Event Date",
]
_GROUP_HEADERS_CAMEL = [
    "timestamp", "userGroupName", "memberCount", "proJoinDate", "foundedDate",
    "city", "pastRSVPs", "pastEventCount", "upcomingEvents", "lastEventDate",
]
_EVENT_HEADERS = [
    "Timestamp", "Meetup Title", "Meetup URL", "Meetup Date", "Meetup Group Name",
    "Meetup City", "RSVP Count", "Meetup Type",
]

_TYPE_SPELLINGS = {
    "Physical": ["Physical", "PHYSICAL", "physical"],
    "Online": ["Online", "ONLINE", "online "],
    "Hybrid": ["Hybrid", "hybrid"],
}


def generate_group_sheets(rng: np.random.Generator | None = None) -> dict[str, list[list[str]]]:
    """Generate one roster sheet per region; the APAC sheet uses camelCase headers."""
    if rng is None:
        rng = np.random.default_rng(_SEED)
    sheets: dict[str, list[list[str]]] = {}

    for name, city, sheet in _GROUPS:
        if sheet not in sheets:
            headers = _GROUP_HEADERS_CAMEL if sheet.startswith("APAC") else _GROUP_HEADERS
            sheets[sheet] = [list(headers)]

        members = int(rng.integers(150, 4000))
        past_events = int(rng.integers(3, 80))
        founded = pd.Timestamp("2012-01-01") + pd.Timedelta(days=int(rng.integers(0, 3000)))
        last_event = pd.Timestamp("2025-01-01") + pd.Timedelta(days=int(rng.integers(0, 300)))

        sheets[sheet].append([
            founded.strftime("%Y-%m-%d %H:%M:%S"),
            name,
            str(members),
            founded.strftime("%Y-%m-%d"),
            founded.strftime("%Y-%m-%d"),
            city,
            str(int(past_events * rng.uniform(15, 45))),
            str(past_events),
            str(int(rng.integers(0, 4))),
            last_event.strftime("%Y-%m-%d"),
        ])

    return sheets


def generate_event_sheet(
    year: int,
    rng: np.random.Generator | None = None,
    events_per_group: tuple[int, int] = (1, 6),
) -> list[list[str]]:
    """Generate the 'Events <year>' sheet, header row first."""
    if rng is None:
        rng = np.random.default_rng(_SEED + year)
    rows = [list(_EVENT_HEADERS)]

    hosts = [
        _EVENT_ALIASES.get(name, (name, city)) for name, city, _ in _GROUPS
    ] + _ORPHAN_EVENTS

    for group_name, city in hosts:
        for _ in range(int(rng.integers(*events_per_group))):
            day = pd.Timestamp(f"{year}-01-01") + pd.Timedelta(days=int(rng.integers(0, 365)))
            kind = rng.choice(["Physical", "Physical", "Online", "Hybrid"])
            spelling = rng.choice(_TYPE_SPELLINGS[kind])
            topic = rng.choice(["Intro to Graphs", "Knowledge Graphs", "GraphRAG", "Cypher Deep Dive"])
            slug = group_name.replace(f"{ORG_PREFIX} ", "").replace(" ", "-").lower()

            rows.append([
                day.strftime("%Y-%m-%d %H:%M:%S"),
                f"{topic} - {city}",
                f"https://www.meetup.com/{slug}/events/{int(rng.integers(10**8, 10**9))}/",
                day.strftime("%b %d, %Y"),
                group_name,
                city,
                str(int(rng.integers(5, 180))),
                str(spelling),
            ])

    return rows


class SimulatedSource:
    """In-memory spreadsheet honouring the SheetSource contract."""

    def __init__(self, current_year: int | None = None, n_years: int = 3):
        if current_year is None:
            current_year = date.today().year
        rng = np.random.default_rng(_SEED)

        self.sheets = generate_group_sheets(rng)
        for year in range(current_year - n_years + 1, current_year + 1):
            self.sheets[f"Events {year}"] = generate_event_sheet(year, rng)

    def list_sheet_names(self, spreadsheet_id: str | None = None) -> list[str]:
        return list(self.sheets)

    def fetch_rows(self, spreadsheet_id: str | None, range_spec: str) -> list[list[str]]:
        sheet, first_col, last_col = split_range(range_spec)
        rows = self.sheets.get(sheet, [])
        return [row[first_col - 1:last_col] for row in rows]

