"""
Meetup Analytics Dashboard

Analytics backend that pulls user-group rosters and per-year event logs
from a spreadsheet, links events to their groups, and computes totals and
per-year statistics for a read-only dashboard.

To swap the data source:
    Implement list_sheet_names() and fetch_rows() (see
    meetup_dashboard.loaders.sources.SheetSource) and pass the object to
    pipeline.load_snapshot(). Google Sheets, a local .xlsx export and a
    simulated spreadsheet are provided.

To connect to Streamlit/Dash:
    Call dashboard.get_dashboard_view(snapshot, selection) after every filter
    change to get a plain dict of cards, chart frames and tables.

To add a region:
    Add it to config.REGIONS and give it an exemplar list in
    config.REGION_CITIES, then name its roster sheet with the region tag.
"""
