from pathlib import Path

from meetup_dashboard.config import DEFAULT_TIMEOUT, Settings, load_settings, parse_sheet_list


def test_parse_sheet_list():
    assert parse_sheet_list('"AMER Dashboard", EMEA Dashboard,,') == ("AMER Dashboard", "EMEA Dashboard")


def test_load_settings_defaults():
    settings = load_settings({})
    assert settings.api_key is None
    assert settings.spreadsheet_id is None
    assert settings.groups_sheets == ("AMER Dashboard", "EMEA Dashboard", "APAC Dashboard")
    assert settings.source == "sheets"
    assert settings.timeout == DEFAULT_TIMEOUT
    assert not settings.is_configured


def test_load_settings_from_environment():
    settings = load_settings({
        "GOOGLE_SHEETS_API_KEY": "key",
        "SPREADSHEET_ID": "abc",
        "GROUPS_SHEETS": "EMEA Dashboard",
        "DASHBOARD_SOURCE": " Workbook ",
        "WORKBOOK_FILE": "/tmp/export.xlsx",
        "SHEETS_TIMEOUT": "not a number",
    })
    assert settings.is_configured
    assert settings.groups_sheets == ("EMEA Dashboard",)
    assert settings.source == "workbook"
    assert settings.workbook_file == Path("/tmp/export.xlsx")
    assert settings.timeout == DEFAULT_TIMEOUT


def test_empty_credentials_are_none():
    settings = load_settings({"GOOGLE_SHEETS_API_KEY": "", "SPREADSHEET_ID": ""})
    assert settings == Settings()
