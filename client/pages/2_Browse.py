# client/pages/2_Browse.py
import streamlit as st
import api as API
from components import export_buttons, show_dashboard, show_projection

from factexplorer.facts import (
    FilterWorker,
    apply_filters,
    build_rows,
    dashboard_rows,
    fact_paths,
    host_projection,
    list_projection,
    pivot_rows,
    restrict_to_visible,
    sort_items,
    summarize,
)

SOURCE_LABELS = {"awx": "Live AWX", "db": "Cached DB", "demo": "Demo"}
# Below this many rows filtering inline is faster than handing off to the worker
WORKER_THRESHOLD = 20000

st.title("📚 Browse")

# ------------------------
# Session state
# ------------------------
defaults = {
    "rows": [],
    "all_paths": [],
    "visible_paths": set(),
    "pills": [],
    "loaded_source": None,
    "chart_paths": ["ansible_distribution", "role"],
}
for k, v in defaults.items():
    if k not in st.session_state:
        st.session_state[k] = v
if "filter_worker" not in st.session_state:
    st.session_state.filter_worker = FilterWorker()

@st.cache_data(ttl=60, show_spinner=False)
def _status():
    try:
        return API.status()
    except Exception:
        # Backend down: only the demo data is usable
        return {"awx": {"configured": False}, "db": {"configured": False}}

# ------------------------
# Load snapshot
# ------------------------
status = _status()
available = [s for s in ("awx", "db") if status.get(s, {}).get("configured")] + ["demo"]
awx_error = status.get("awx", {}).get("error")
if awx_error:
    st.warning(f"AWX is configured but unreachable: {awx_error}")
c1, c2 = st.columns([3, 1])
with c1:
    source = st.radio("Data source", available, format_func=SOURCE_LABELS.get, horizontal=True,
                      index=len(available) - 1, key="br_source")
with c2:
    load = st.button("▶️ Reload" if st.session_state.rows else "▶️ Load Facts", key="btn_load")

if load:
    with st.spinner(f"Fetching facts from {SOURCE_LABELS[source]}..."):
        try:
            snapshot = API.facts(source)
            rows = build_rows(snapshot)
            st.session_state.rows = rows
            st.session_state.all_paths = fact_paths(rows)
            st.session_state.visible_paths = set(st.session_state.all_paths)
            st.session_state.loaded_source = source
        except Exception as e:
            st.error(f"Error: {e}")

rows = st.session_state.rows
if not st.session_state.loaded_source:
    st.info('Select a data source and click "Load Facts" to get started.')
    st.stop()

st.caption(f"Data source: {SOURCE_LABELS[st.session_state.loaded_source]}")

# ------------------------
# Search pills + live term
# ------------------------
def _add_pill():
    term = st.session_state.br_live.strip()
    if term and term not in st.session_state.pills:
        st.session_state.pills = st.session_state.pills + [term]
    st.session_state.br_live = ""

q1, q2 = st.columns([5, 1])
with q1:
    live_term = st.text_input(
        "Search",
        key="br_live",
        placeholder='Supports "exact", regex, and key-value filters (e.g. vcpus>4, host=web-01, ubuntu|debian)',
    )
with q2:
    st.button("📌 Pin", key="btn_pin", on_click=_add_pill, help="Keep the search as a filter pill.")

if st.session_state.pills:
    pill_cols = st.columns(min(len(st.session_state.pills), 6) + 1)
    for i, pill in enumerate(list(st.session_state.pills)):
        if pill_cols[i % (len(pill_cols) - 1)].button(f"✖ {pill}", key=f"pill_{i}_{pill}"):
            st.session_state.pills = [p for p in st.session_state.pills if p != pill]
            st.rerun()
    if pill_cols[-1].button("Clear all", key="btn_clear_pills"):
        st.session_state.pills = []
        st.rerun()

pills = st.session_state.pills

# ------------------------
# View options
# ------------------------
o1, o2, o3 = st.columns(3)
with o1:
    view = st.radio("View", ["list", "pivot"], horizontal=True, key="br_view")
with o2:
    show_modified = st.checkbox("Show modified column", key="br_modified", disabled=view != "list")
with o3:
    show_dash = st.checkbox("Dashboard", key="br_dashboard")

with st.expander(f"Columns ({len(st.session_state.visible_paths)} of {len(st.session_state.all_paths)} visible)"):
    a, b = st.columns(2)
    if a.button("Select all", key="btn_cols_all"):
        st.session_state.visible_paths = set(st.session_state.all_paths)
    if b.button("Select none", key="btn_cols_none"):
        st.session_state.visible_paths = set()
    chosen = st.multiselect("Visible fact paths", st.session_state.all_paths,
                            default=[p for p in st.session_state.all_paths if p in st.session_state.visible_paths])
    st.session_state.visible_paths = set(chosen)

visible = st.session_state.visible_paths
if len(visible) == len(st.session_state.all_paths):
    visible = None  # nothing hidden

sort_keys = ["host", "fact_path", "value"] + (["modified"] if show_modified else [])
s1, s2 = st.columns(2)

# ------------------------
# Filter
# ------------------------
worker: FilterWorker = st.session_state.filter_worker
if len(rows) > WORKER_THRESHOLD and (pills or live_term.strip()):
    request = worker.submit(rows, pills, live_term)
    searched = worker.collect(request)
    if searched is None:
        st.stop()  # a newer search superseded this one
    filtered = restrict_to_visible(searched, visible)
else:
    filtered = apply_filters(rows, pills, live_term, visible)

if show_dash:
    summary = summarize(dashboard_rows(rows, pills, live_term), st.session_state.all_paths,
                        st.session_state.chart_paths)
    chart_paths = st.multiselect("Charts", summary.chartable_paths,
                                 default=[p for p in st.session_state.chart_paths if p in summary.chartable_paths])
    if chart_paths != st.session_state.chart_paths:
        st.session_state.chart_paths = chart_paths
        st.rerun()
    show_dashboard(summary)

# ------------------------
# Project + sort
# ------------------------
if view == "list":
    with s1:
        sort_key = st.selectbox("Sort by", sort_keys, key="br_sort_list")
    with s2:
        direction = st.radio("Direction", ["asc", "desc"], horizontal=True, key="br_dir_list")
    ordered = sort_items(filtered, sort_key, direction)
    projection = list_projection(ordered, include_modified=show_modified)
    shown, total, noun = len(ordered), len(rows), "facts"
else:
    pivot = pivot_rows(host_projection(rows, pills, live_term, visible))
    with s1:
        sort_key = st.selectbox("Sort by", pivot.headers or ["hostname"], key="br_sort_pivot")
    with s2:
        direction = st.radio("Direction", ["asc", "desc"], horizontal=True, key="br_dir_pivot")
    pivot.data = sort_items(pivot.data, sort_key, direction)
    projection = pivot
    shown, total, noun = len(pivot.data), len({r.host for r in rows}), "hosts"

st.caption(f"Displaying {shown:,} of {total:,} total {noun}.")
export_buttons(projection)
show_projection(projection)
