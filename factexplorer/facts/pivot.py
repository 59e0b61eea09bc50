# factexplorer/facts/pivot.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from .types import FactRow

HOSTNAME = "hostname"


@dataclass
class Projection:
    """Tabular view shared by the pivot table and every export."""
    data: List[Dict[str, Any]] = field(default_factory=list)
    headers: List[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.data)


def pivot_rows(rows: Sequence[FactRow]) -> Projection:
    """
    One record per host (first-seen order) with each fact path as a field.
    Headers are "hostname" followed by the fact paths in ascending order.
    Sentinel rows contribute nothing.
    """
    if not rows:
        return Projection()

    by_host: Dict[str, Dict[str, Any]] = {}
    paths = set()
    for row in rows:
        if row.is_sentinel:
            continue
        record = by_host.setdefault(row.host, {HOSTNAME: row.host})
        record[row.fact_path] = row.value
        paths.add(row.fact_path)

    return Projection(data=list(by_host.values()), headers=[HOSTNAME, *sorted(paths)])
