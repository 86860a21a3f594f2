import pytest

from meetup_dashboard.loaders.utils import (
    normalise_event_type,
    pick_field,
    region_from_sheet_name,
    rows_to_records,
    safe_int,
    year_from_sheet_name,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42", 42),
        (" 17 people", 17),
        ("1,234", 1),
        ("-3", -3),
        ("n/a", 0),
        ("", 0),
        (None, 0),
        (7, 7),
        (7.9, 7),
        (float("nan"), 0),
    ],
)
def test_safe_int(raw, expected):
    assert safe_int(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("ONLINE", "Online"),
        (" physical ", "Physical"),
        ("HyBrId", "Hybrid"),
        ("  Workshop ", "Workshop"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalise_event_type(raw, expected):
    assert normalise_event_type(raw) == expected


def test_rows_to_records_pads_ragged_rows():
    rows = [["A", "B", "C"], ["1"], ["1", "2", "3", "extra"]]
    assert rows_to_records(rows) == [
        {"A": "1", "B": "", "C": ""},
        {"A": "1", "B": "2", "C": "3"},
    ]


def test_rows_to_records_with_known_headers_keeps_first_row():
    rows = [["1", "2"]]
    assert rows_to_records(rows, headers=["A", "B"]) == [{"A": "1", "B": "2"}]


def test_rows_to_records_empty():
    assert rows_to_records([]) == []
    assert rows_to_records([["A", "B"]]) == []


def test_pick_field_falls_through_empty_values():
    record = {"Member Count": "", "memberCount": "12"}
    assert pick_field(record, ("Member Count", "memberCount")) == "12"
    assert pick_field({}, ("Member Count", "memberCount"), "0") == "0"


def test_sheet_name_tags():
    assert year_from_sheet_name("Events 2024") == 2024
    assert year_from_sheet_name("Events") is None
    assert region_from_sheet_name("emea dashboard") == "EMEA"
    assert region_from_sheet_name("APAC Dashboard") == "APAC"
    assert region_from_sheet_name("AMER Dashboard") == "AMER"
    assert region_from_sheet_name("Consolidated") is None
