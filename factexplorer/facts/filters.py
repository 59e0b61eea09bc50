# factexplorer/facts/filters.py
from typing import AbstractSet, List, Optional, Sequence

from .query import compile_pill, match_all
from .types import FactRow


def search_rows(rows: Sequence[FactRow], pills: Sequence[str], live_term: str = "") -> List[FactRow]:
    """
    Rows matching every pill and then the live search box.
    The live term uses the same grammar as a pill; it only differs in that
    the caller never persists it.
    """
    out = list(rows)

    everything = match_all(pills)
    if everything is not None:
        out = [r for r in out if everything(r)]

    live = (live_term or "").strip()
    if live:
        pred = compile_pill(live)
        out = [r for r in out if pred(r)]
    return out


def restrict_to_visible(rows: Sequence[FactRow], visible_paths: Optional[AbstractSet[str]]) -> List[FactRow]:
    """Drop hidden columns. ``None`` means every path is visible; sentinel rows always stay."""
    if visible_paths is None:
        return list(rows)
    return [r for r in rows if r.is_sentinel or r.fact_path in visible_paths]


def apply_filters(
    rows: Sequence[FactRow],
    pills: Sequence[str] = (),
    live_term: str = "",
    visible_paths: Optional[AbstractSet[str]] = None,
) -> List[FactRow]:
    """Pills (AND), then the live term, then column visibility. Input order is kept."""
    return restrict_to_visible(search_rows(rows, pills, live_term), visible_paths)


def is_filtering(pills: Sequence[str], live_term: str = "") -> bool:
    return bool(pills) or bool((live_term or "").strip())


def rows_for_hosts(all_rows: Sequence[FactRow], searched: Sequence[FactRow]) -> List[FactRow]:
    """
    Every row of each host that has at least one row in ``searched``.
    Summaries and the pivot view describe whole hosts, not just the facts
    that happened to match the query.
    """
    hosts = {r.host for r in searched}
    return [r for r in all_rows if r.host in hosts]


def host_projection(
    all_rows: Sequence[FactRow],
    pills: Sequence[str] = (),
    live_term: str = "",
    visible_paths: Optional[AbstractSet[str]] = None,
) -> List[FactRow]:
    """Rows feeding the pivot view: whole matching hosts, limited to visible columns."""
    if not is_filtering(pills, live_term):
        return restrict_to_visible(all_rows, visible_paths)
    matched = rows_for_hosts(all_rows, search_rows(all_rows, pills, live_term))
    return restrict_to_visible(matched, visible_paths)


def dashboard_rows(all_rows: Sequence[FactRow], pills: Sequence[str] = (), live_term: str = "") -> List[FactRow]:
    """Rows behind the dashboard; column visibility is ignored here."""
    if not is_filtering(pills, live_term):
        return list(all_rows)
    return rows_for_hosts(all_rows, search_rows(all_rows, pills, live_term))
