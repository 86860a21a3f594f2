"""
Meetup Analytics Dashboard - Interactive Dashboard

Run with:  streamlit run app.py
"""

import sys
from pathlib import Path

import streamlit as st
import plotly.graph_objects as go
import pandas as pd

sys.path.insert(0, str(Path(__file__).resolve().parent))

from meetup_dashboard.config import load_settings
from meetup_dashboard.dashboard import get_dashboard_view, get_top_groups
from meetup_dashboard.filters import (
    CLEAR,
    DATA_LOADED,
    SET_EVENT_TYPES,
    SET_GROUPS,
    SET_REGIONS,
    SET_SEARCH,
    FilterSelection,
    reduce_selection,
)
from meetup_dashboard.loaders import get_source
from meetup_dashboard.pipeline import load_snapshot
from meetup_dashboard.reconcile import annotate_events
from meetup_dashboard.transforms import build_events_frame, build_year_stats_frame

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Meetup Analytics Dashboard",
    page_icon="📊",
    layout="wide",
    initial_sidebar_state="expanded",
)

MEMBERS_COLOR = "#8b5cf6"
RSVPS_COLOR = "#06b6d4"
GROWTH_COLORS = {
    "up": "#2ecc71",
    "down": "#e74c3c",
    "none": "#95a5a6",
}

WIDGET_KEYS = {
    "search": "w_search",
    "regions": "w_regions",
    "event_types": "w_event_types",
    "groups": "w_groups",
}


# ---------------------------------------------------------------------------
# State: one snapshot per load, one selection updated through the reducer
# ---------------------------------------------------------------------------
def _sync_widgets(selection: FilterSelection) -> None:
    st.session_state[WIDGET_KEYS["search"]] = selection.search
    st.session_state[WIDGET_KEYS["regions"]] = list(selection.regions)
    st.session_state[WIDGET_KEYS["event_types"]] = list(selection.event_types)
    st.session_state[WIDGET_KEYS["groups"]] = list(selection.groups)


def _dispatch(action: str, value=None) -> None:
    snapshot = st.session_state["snapshot"]
    selection = reduce_selection(
        st.session_state["selection"], action, value, snapshot.groups
    )
    st.session_state["selection"] = selection
    _sync_widgets(selection)


def _load_data() -> None:
    settings = load_settings()
    snapshot = load_snapshot(get_source(settings), settings)
    st.session_state["snapshot"] = snapshot
    st.session_state.setdefault("selection", FilterSelection())
    _dispatch(DATA_LOADED)


def _on_widget(action: str, field: str) -> None:
    _dispatch(action, st.session_state[WIDGET_KEYS[field]])


if "snapshot" not in st.session_state:
    with st.spinner("Loading spreadsheet data..."):
        _load_data()

snapshot = st.session_state["snapshot"]
selection = st.session_state["selection"]
view = get_dashboard_view(snapshot, selection)

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.title("Meetup Analytics")
st.sidebar.markdown("Track your Meetup groups and events performance")
st.sidebar.button("Refresh", on_click=_load_data, use_container_width=True)
st.sidebar.divider()

st.sidebar.subheader("Filters")
if view["has_filters"]:
    st.sidebar.button("Clear All", on_click=_dispatch, args=(CLEAR,))

st.sidebar.text_input(
    "Search",
    key=WIDGET_KEYS["search"],
    placeholder="Search groups, cities...",
    on_change=_on_widget,
    args=(SET_SEARCH, "search"),
)
st.sidebar.multiselect(
    "Regions",
    view["options"]["regions"],
    key=WIDGET_KEYS["regions"],
    on_change=_on_widget,
    args=(SET_REGIONS, "regions"),
)
st.sidebar.multiselect(
    "Event Types",
    view["options"]["event_types"],
    key=WIDGET_KEYS["event_types"],
    on_change=_on_widget,
    args=(SET_EVENT_TYPES, "event_types"),
)

group_choices = list(dict.fromkeys(view["options"]["group_choices"] + list(selection.groups)))
st.sidebar.multiselect(
    f"Groups ({len(selection.groups)} selected)",
    group_choices,
    key=WIDGET_KEYS["groups"],
    on_change=_on_widget,
    args=(SET_GROUPS, "groups"),
)

st.sidebar.divider()
if snapshot.loaded_at is not None:
    st.sidebar.caption(f"Loaded {snapshot.loaded_at:%d %b %Y %H:%M}")
if snapshot.is_empty:
    st.sidebar.warning("No data loaded. Check the spreadsheet configuration.")


# ---------------------------------------------------------------------------
# Helper: bar chart of groups by one metric
# ---------------------------------------------------------------------------
def group_bar_chart(df: pd.DataFrame, metric: str, color: str, height: int = 400):
    fig = go.Figure(go.Bar(
        x=df["name"],
        y=df[metric],
        marker_color=color,
    ))
    fig.update_layout(
        height=height,
        xaxis_title="",
        yaxis_title=metric.title(),
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=10, r=10, t=10, b=40),
    )
    return fig


# ===========================================================================
# KPI cards
# ===========================================================================
st.title("Meetup Analytics Dashboard")

cards = view["kpi_cards"]
cols = st.columns(5)
kpis = [
    ("Total Groups", "total_groups"),
    ("Total Members", "total_members"),
    ("Past Events", "past_events"),
    ("Upcoming Events", "upcoming_events"),
    ("Total RSVPs", "total_rsvps"),
]
for i, (label, key) in enumerate(kpis):
    with cols[i]:
        st.metric(label, f"{cards[key]:,}")

st.divider()

# ===========================================================================
# Year statistics with YoY growth, newest first
# ===========================================================================
year_cards = view["year_cards"]
if year_cards:
    cols = st.columns(min(len(year_cards), 3))
    for i, card in enumerate(year_cards):
        growth = card["yoy_growth"]
        if growth is None:
            color, badge = GROWTH_COLORS["none"], "no comparison"
        else:
            color = GROWTH_COLORS["up"] if growth >= 0 else GROWTH_COLORS["down"]
            badge = f"{growth:.1f}% YoY"

        with cols[i % len(cols)]:
            st.markdown(
                f"""
                <div style="border-left: 4px solid {color}; border-radius: 8px;
                            padding: 16px; margin-bottom: 8px; background: {color}11;">
                    <div style="display: flex; justify-content: space-between;">
                        <span style="font-size: 18px; font-weight: 600;">{card['year']} Statistics</span>
                        <span style="font-size: 13px; color: {color}; font-weight: 600;">{badge}</span>
                    </div>
                    <div style="font-size: 14px; color: #444; margin-top: 8px;">
                        Total Events: <b>{card['total_events']:,}</b><br>
                        Physical Events: <b>{card['physical_events']:,}</b><br>
                        Online Events: <b>{card['online_events']:,}</b><br>
                        Total RSVPs: <b>{card['total_rsvps']:,}</b>
                    </div>
                </div>
                """,
                unsafe_allow_html=True,
            )

    trend = build_year_stats_frame(year_cards)
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=trend["year"].astype(str), y=trend["physical_events"],
        name="Physical", marker_color="#3498db",
    ))
    fig.add_trace(go.Bar(
        x=trend["year"].astype(str), y=trend["online_events"],
        name="Online", marker_color="#f39c12",
    ))
    fig.update_layout(
        title="Events per Year",
        barmode="stack",
        height=300,
        plot_bgcolor="rgba(0,0,0,0)",
    )
    st.plotly_chart(fig, use_container_width=True)
else:
    st.info("No event sheets found.")

# ===========================================================================
# Charts
# ===========================================================================
col1, col2 = st.columns(2)

with col1:
    st.subheader("Top 10 Groups by Members")
    if view["top_members"].empty:
        st.caption("No data available. Try adjusting your filters.")
    else:
        st.plotly_chart(group_bar_chart(view["top_members"], "members", MEMBERS_COLOR),
                        use_container_width=True)
        with st.expander("All groups by members"):
            full = get_top_groups(view["filtered_groups"], "members", limit=None)
            st.plotly_chart(group_bar_chart(full, "members", MEMBERS_COLOR, height=600),
                            use_container_width=True)

with col2:
    st.subheader("Top 10 Groups by RSVPs")
    if view["top_rsvps"].empty:
        st.caption("No data available. Try adjusting your filters.")
    else:
        st.plotly_chart(group_bar_chart(view["top_rsvps"], "rsvps", RSVPS_COLOR),
                        use_container_width=True)
        with st.expander("All groups by RSVPs"):
            full = get_top_groups(view["filtered_groups"], "rsvps", limit=None)
            st.plotly_chart(group_bar_chart(full, "rsvps", RSVPS_COLOR, height=600),
                            use_container_width=True)

# ===========================================================================
# Tables
# ===========================================================================
tab1, tab2, tab3 = st.tabs(["Groups Overview", "Events", "Unmatched Events"])

with tab1:
    table = view["groups_table"].rename(columns={
        "name": "Group Name",
        "city": "City",
        "member_count": "Members",
        "past_rsvps": "Past RSVPs",
        "past_event_count": "Past Events",
        "upcoming_events": "Upcoming",
    })
    st.dataframe(table, use_container_width=True, hide_index=True)

with tab2:
    events_df = build_events_frame(annotate_events(view["filtered_events"], snapshot.groups))
    st.dataframe(events_df, use_container_width=True, hide_index=True)

with tab3:
    unmatched = view["unmatched_events"]
    if unmatched:
        st.caption(f"{len(unmatched)} events could not be linked to a group.")
        st.dataframe(pd.DataFrame(unmatched), use_container_width=True, hide_index=True)
    else:
        st.caption("Every event was linked to a group.")
