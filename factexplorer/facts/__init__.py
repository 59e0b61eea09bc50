from .types import (
    MODIFIED_KEY,
    NO_DATA_VALUE,
    SENTINEL_PATH,
    FactRow,
    HostFactSnapshot,
    to_comparable_number,
    to_comparable_string,
)
from .flatten import build_rows, fact_paths, flatten_facts
from .query import compile_pill, compile_term, matches
from .filters import (
    apply_filters,
    dashboard_rows,
    host_projection,
    restrict_to_visible,
    rows_for_hosts,
    search_rows,
)
from .pivot import Projection, pivot_rows
from .sorting import sort_items
from .export import list_projection, to_csv, to_xlsx
from .dashboard import DashboardSummary, summarize
from .worker import FilterWorker

__all__ = [
    "MODIFIED_KEY",
    "NO_DATA_VALUE",
    "SENTINEL_PATH",
    "FactRow",
    "HostFactSnapshot",
    "to_comparable_number",
    "to_comparable_string",
    "build_rows",
    "fact_paths",
    "flatten_facts",
    "compile_pill",
    "compile_term",
    "matches",
    "apply_filters",
    "dashboard_rows",
    "host_projection",
    "restrict_to_visible",
    "rows_for_hosts",
    "search_rows",
    "Projection",
    "pivot_rows",
    "sort_items",
    "list_projection",
    "to_csv",
    "to_xlsx",
    "DashboardSummary",
    "summarize",
    "FilterWorker",
]
