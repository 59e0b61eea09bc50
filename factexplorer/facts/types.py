# factexplorer/facts/types.py
import json
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

# Reserved per-host key carrying the last-modified timestamp (metadata, not a fact)
MODIFIED_KEY = "__awx_facts_modified_timestamp"

# Placeholder row for a host without any leaf facts
SENTINEL_PATH = "---"
NO_DATA_VALUE = "(No data available)"

Value = Union[str, int, float, bool, None]
HostFactSnapshot = Dict[str, Dict[str, Any]]


@dataclass(frozen=True)
class FactRow:
    """One (host, fact path, value) record of a loaded snapshot."""
    id: str
    host: str
    fact_path: str
    value: Value
    modified: Optional[str] = None

    @property
    def is_sentinel(self) -> bool:
        return self.fact_path == SENTINEL_PATH


# -------------------------------------------------------------------
# Coercion helpers shared by the matcher and the sorter
# -------------------------------------------------------------------
_NUMBER_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity)")


def display_value(value: Any) -> Value:
    """Collapse lists/dicts at a leaf into compact JSON text."""
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return value


def to_comparable_string(value: Value) -> str:
    """Render a value the way a user sees it in the table."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def to_comparable_number(value: Value) -> Optional[float]:
    """
    Parse the leading number of a value ("16GB" -> 16.0).
    Returns None when there is no numeric prefix; booleans and null never parse.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if isinstance(value, float) and math.isnan(value) else float(value)
    m = _NUMBER_PREFIX.match(str(value))
    if not m:
        return None
    token = m.group(1)
    if token.endswith("Infinity"):
        return -math.inf if token.startswith("-") else math.inf
    return float(token)
