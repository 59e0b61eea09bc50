# factexplorer/facts/dashboard.py
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .types import FactRow, Value, to_comparable_string

VCPU_PATH = "ansible_processor_vcpus"
MEMORY_PATH = "ansible_memtotal_mb"
TOP_N = 5


@dataclass
class DashboardSummary:
    host_count: int = 0
    fact_count: int = 0
    total_vcpus: float = 0
    total_memory_gb: str = "0.00"
    distributions: Dict[str, List[Tuple[str, int]]] = field(default_factory=dict)
    chartable_paths: List[str] = field(default_factory=list)


def _as_number(value: Value) -> float:
    """Strict numeric reading used for totals; anything non-numeric adds 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip()
    if not text:
        return 0
    try:
        return float(text)
    except ValueError:
        return 0


def _is_numeric_text(text: str) -> bool:
    if not text.strip():
        return True
    try:
        float(text)
    except ValueError:
        return False
    return True


def distribution(rows: Sequence[FactRow], fact_path: str, top: int = TOP_N) -> List[Tuple[str, int]]:
    """Most common values of one fact path, each host counted once."""
    if not fact_path:
        return []
    counts: Counter = Counter()
    seen = set()
    for r in rows:
        if r.fact_path != fact_path or r.host in seen:
            continue
        label = to_comparable_string(r.value)
        if label and label != "null" and label.strip():
            counts[label] += 1
            seen.add(r.host)
    # Counter.most_common keeps first-seen order among ties
    return counts.most_common(top)


def chartable_paths(rows: Sequence[FactRow], fact_paths: Sequence[str]) -> List[str]:
    """
    Paths worth a bar chart: more than one distinct value, but fewer distinct
    values than hosts, and at least one non-numeric string among them.
    """
    host_count = len({r.host for r in rows})
    values_by_path: Dict[str, List[Value]] = {}
    for r in rows:
        values_by_path.setdefault(r.fact_path, []).append(r.value)

    picked = []
    for path in fact_paths:
        values = values_by_path.get(path, [])
        distinct = {(type(v).__name__, to_comparable_string(v)) for v in values}
        has_text = any(isinstance(v, str) and not _is_numeric_text(v) for v in values)
        if 1 < len(distinct) < host_count and has_text:
            picked.append(path)
    return sorted(picked) or list(fact_paths)


def summarize(
    rows: Sequence[FactRow],
    fact_paths: Sequence[str],
    chart_paths: Sequence[str] = (),
) -> DashboardSummary:
    if not rows:
        return DashboardSummary()

    total_vcpus = sum(_as_number(r.value) for r in rows if r.fact_path == VCPU_PATH)
    total_memory_mb = sum(_as_number(r.value) for r in rows if r.fact_path == MEMORY_PATH)

    return DashboardSummary(
        host_count=len({r.host for r in rows}),
        fact_count=len(rows),
        total_vcpus=total_vcpus,
        total_memory_gb=f"{total_memory_mb / 1024:.2f}",
        distributions={p: distribution(rows, p) for p in chart_paths},
        chartable_paths=chartable_paths(rows, fact_paths),
    )
