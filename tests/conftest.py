import pytest

from meetup_dashboard.config import Settings
from meetup_dashboard.loaders.sources import split_range
from meetup_dashboard.models import Event, Group


class FakeSource:
    """In-memory SheetSource; sheets listed in `failing` raise on fetch."""

    def __init__(self, sheets: dict[str, list[list[str]]], failing: set[str] | None = None):
        self.sheets = sheets
        self.failing = failing or set()
        self.fetched: list[str] = []

    def list_sheet_names(self, spreadsheet_id):
        return list(self.sheets)

    def fetch_rows(self, spreadsheet_id, range_spec):
        self.fetched.append(range_spec)
        sheet, first_col, last_col = split_range(range_spec)
        if sheet in self.failing:
            raise RuntimeError(f"boom: {sheet}")
        return [row[first_col - 1:last_col] for row in self.sheets.get(sheet, [])]


GROUP_HEADER = [
    "Timestamp", "User Group Name", "Member Count", "Pro Join Date", "Founded Date",
    "City", "Past RSVPs", "Past Event Count", "Upcoming Events Count", "Last Event Date",
]
EVENT_HEADER = [
    "Timestamp", "Meetup Title", "Meetup URL", "Meetup Date", "Meetup Group Name",
    "Meetup City", "RSVP Count", "Meetup Type",
]


@pytest.fixture
def sheets():
    return {
        "AMER Dashboard": [
            GROUP_HEADER,
            ["", "GDB NYC", "100", "", "", "New York", "300", "10", "1", "2024-11-02"],
            ["", "GDB Toronto", "40", "", "", "Toronto", "80", "4", "0", ""],
        ],
        "EMEA Dashboard": [
            GROUP_HEADER,
            ["", "GDB London", "50", "", "", "London", "120", "6", "2", ""],
            ["", "GDB Tel Aviv", "30", "", "", "Tel Aviv-Yafo", "60", "3"],
        ],
        "APAC Dashboard": [GROUP_HEADER],
        "Events 2024": [
            EVENT_HEADER,
            ["", "Graphs 101", "", "Mar 3, 2024", "GDB NYC", "New York", "25", "PHYSICAL"],
            ["", "Cypher Night", "", "Jun 9, 2024", "GDB London", "London", "15", "online"],
        ],
        "Events 2025": [
            EVENT_HEADER,
            ["", "Knowledge Graphs", "", "Feb 1, 2025", "GDB NYC", "New York", "30", "Physical"],
            ["", "GraphRAG", "", "Apr 4, 2025", "GDB Tel Aviv-Yafo", "Tel Aviv", "12", "ONLINE"],
            ["", "Hybrid Meetup", "", "May 5, 2025", "GDB London", "London", "20", "hybrid"],
            ["", "Lost Event", "", "Jul 7, 2025", "GDB Atlantis", "Atlantis", "5", "Physical"],
        ],
        "Notes": [["free text"]],
    }


@pytest.fixture
def fake_source(sheets):
    return FakeSource(sheets)


@pytest.fixture
def settings():
    return Settings(api_key="key", spreadsheet_id="sheet-id")


@pytest.fixture
def groups():
    return [
        Group(name="GDB NYC", city="New York", region="AMER", member_count=100, past_rsvps=300,
              past_event_count=10, upcoming_events=1),
        Group(name="GDB London", city="London", region="EMEA", member_count=50, past_rsvps=120,
              past_event_count=6, upcoming_events=2),
        Group(name="GDB Tel Aviv", city="Tel Aviv-Yafo", region="EMEA", member_count=30),
    ]


@pytest.fixture
def events():
    return [
        Event(title="Graphs 101", date="Mar 3, 2024", group_name="GDB NYC", city="New York",
              rsvp_count=25, event_type="Physical", year=2024),
        Event(title="Cypher Night", date="Jun 9, 2024", group_name="GDB London", city="London",
              rsvp_count=15, event_type="Online", year=2024),
        Event(title="Knowledge Graphs", date="Feb 1, 2025", group_name="GDB NYC",
              city="New York", rsvp_count=30, event_type="Physical", year=2025),
        Event(title="GraphRAG", date="Apr 4, 2025", group_name="GDB Tel Aviv-Yafo",
              city="Tel Aviv", rsvp_count=12, event_type="Online", year=2025),
        Event(title="Lost Event", date="Jul 7, 2025", group_name="GDB Atlantis",
              city="Atlantis", rsvp_count=5, event_type="Physical", year=2025),
    ]
