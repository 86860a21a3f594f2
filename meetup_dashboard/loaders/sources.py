"""
Spreadsheet data sources.

Every source honours the same two-call contract:

    list_sheet_names(spreadsheet_id) -> list of sheet titles
    fetch_rows(spreadsheet_id, range_spec) -> 2D list of string cells

range_spec is "<sheet name>!<first col>:<last col>", e.g. "Events 2024!A:H".
Sources never raise for transport or configuration problems; they log and
return an empty list so one bad sheet cannot abort the others.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

import openpyxl
import requests
from openpyxl.utils import column_index_from_string

from ..config import SHEETS_API_BASE, Settings

logger = logging.getLogger(__name__)

_RANGE = re.compile(r"^(?P<sheet>.+)!(?P<start>[A-Za-z]+)(?:\d+)?:(?P<end>[A-Za-z]+)(?:\d+)?$")


class SheetSource(Protocol):
    def list_sheet_names(self, spreadsheet_id: str | None) -> list[str]: ...

    def fetch_rows(self, spreadsheet_id: str | None, range_spec: str) -> list[list[str]]: ...


def split_range(range_spec: str) -> tuple[str, int, int]:
    """Split 'Sheet!A:J' into (sheet, first_col, last_col) with 1-based columns."""
    match = _RANGE.match(range_spec)
    if not match:
        raise ValueError(f"Unsupported range spec: {range_spec!r}")
    sheet = match.group("sheet").strip("'")
    return (
        sheet,
        column_index_from_string(match.group("start").upper()),
        column_index_from_string(match.group("end").upper()),
    )


def _trim_row(cells: list[str]) -> list[str]:
    while cells and cells[-1] == "":
        cells.pop()
    return cells


# ---------------------------------------------------------------------------
# Google Sheets API v4
# ---------------------------------------------------------------------------

class GoogleSheetsSource:
    """Read-only access to a spreadsheet through the Sheets API (API-key auth)."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = SHEETS_API_BASE,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get_json(self, url: str, params: dict) -> dict | None:
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException:
            logger.exception("Request to %s failed", url)
            return None

        if not response.ok:
            logger.error(
                "Sheets API returned %s %s: %s",
                response.status_code, response.reason, response.text[:200],
            )
            return None

        try:
            return response.json()
        except ValueError:
            logger.error("Sheets API returned a non-JSON body from %s", url)
            return None

    def list_sheet_names(self, spreadsheet_id: str | None) -> list[str]:
        if not self.api_key or not spreadsheet_id:
            logger.error("Google Sheets API key or spreadsheet id not configured")
            return []

        data = self._get_json(
            f"{self.base_url}/{spreadsheet_id}",
            {"key": self.api_key, "fields": "sheets.properties.title"},
        )
        if data is None:
            return []

        names = [
            sheet.get("properties", {}).get("title", "")
            for sheet in data.get("sheets", [])
        ]
        logger.info("Spreadsheet has %d sheets", len(names))
        return [n for n in names if n]

    def fetch_rows(self, spreadsheet_id: str | None, range_spec: str) -> list[list[str]]:
        if not self.api_key or not spreadsheet_id:
            logger.error("Google Sheets API key or spreadsheet id not configured")
            return []

        sheet, _, _ = split_range(range_spec)
        cols = range_spec.rsplit("!", 1)[1]
        a1 = quote(f"'{sheet}'!{cols}", safe="")

        data = self._get_json(
            f"{self.base_url}/{spreadsheet_id}/values/{a1}",
            {"key": self.api_key},
        )
        if data is None:
            return []

        values = data.get("values", [])
        logger.info("Fetched %d rows from %s", len(values), range_spec)
        return [[str(cell) for cell in row] for row in values]


# ---------------------------------------------------------------------------
# Local workbook export
# ---------------------------------------------------------------------------

class WorkbookSource:
    """Serve the same contract from an .xlsx download of the spreadsheet.

    The spreadsheet id is ignored; the workbook is the spreadsheet.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _open(self):
        try:
            return openpyxl.load_workbook(self.path, read_only=True, data_only=True)
        except Exception:
            logger.exception("Failed to open workbook: %s", self.path)
            return None

    def list_sheet_names(self, spreadsheet_id: str | None = None) -> list[str]:
        wb = self._open()
        if wb is None:
            return []
        names = list(wb.sheetnames)
        wb.close()
        return names

    def fetch_rows(self, spreadsheet_id: str | None, range_spec: str) -> list[list[str]]:
        try:
            sheet_name, first_col, last_col = split_range(range_spec)
        except ValueError:
            logger.exception("Bad range spec for workbook source")
            return []

        wb = self._open()
        if wb is None:
            return []

        if sheet_name not in wb.sheetnames:
            logger.error("Sheet '%s' not found in %s", sheet_name, self.path)
            wb.close()
            return []

        ws = wb[sheet_name]
        rows = []
        for raw in ws.iter_rows(min_col=first_col, max_col=last_col, values_only=True):
            cells = _trim_row(["" if v is None else str(v) for v in raw])
            rows.append(cells)
        wb.close()

        # Sheets API omits trailing empty rows
        while rows and not rows[-1]:
            rows.pop()

        logger.info("Read %d rows from %s [%s]", len(rows), self.path.name, range_spec)
        return rows


def fetch_batch(
    source: SheetSource,
    spreadsheet_id: str | None,
    range_specs: list[str],
) -> dict[str, list[list[str]]]:
    """Fetch several ranges concurrently and wait for all of them.

    Returns a mapping range_spec -> rows, in the order given. A range whose
    fetch raises comes back as an empty row set; the rest are unaffected.
    """
    if not range_specs:
        return {}

    results: dict[str, list[list[str]]] = {}
    with ThreadPoolExecutor(max_workers=len(range_specs)) as pool:
        futures = {
            spec: pool.submit(source.fetch_rows, spreadsheet_id, spec)
            for spec in range_specs
        }
        for spec, future in futures.items():
            try:
                results[spec] = future.result()
            except Exception:
                logger.exception("Fetch of %s failed", spec)
                results[spec] = []
    return results


def get_source(settings: Settings) -> SheetSource:
    """Pick the data source named by settings.source."""
    if settings.source == "workbook":
        return WorkbookSource(settings.workbook_file)
    if settings.source == "demo":
        from ..simulator import SimulatedSource

        return SimulatedSource()
    if settings.source != "sheets":
        logger.warning("Unknown source '%s', using Google Sheets", settings.source)
    return GoogleSheetsSource(settings.api_key, timeout=settings.timeout)
