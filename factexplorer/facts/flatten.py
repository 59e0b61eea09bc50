# factexplorer/facts/flatten.py
import logging
from typing import Any, Dict, Iterable, List, Tuple

from .types import (
    MODIFIED_KEY,
    NO_DATA_VALUE,
    SENTINEL_PATH,
    FactRow,
    HostFactSnapshot,
    Value,
    display_value,
)

log = logging.getLogger(__name__)


def flatten_facts(facts: Dict[str, Any]) -> List[Tuple[str, Value]]:
    """
    Flatten one host's nested facts into (dot.joined.path, value) pairs.

    Nested dicts are walked; lists and primitives are leaves. The reserved
    modified-timestamp key at the top level is skipped.
    """
    pairs: List[Tuple[str, Value]] = []

    def _walk(obj: Dict[str, Any], prefix: List[str]):
        for key, value in obj.items():
            path = prefix + [str(key)]
            if isinstance(value, dict):
                _walk(value, path)
            else:
                pairs.append((".".join(path), display_value(value)))

    _walk({k: v for k, v in facts.items() if k != MODIFIED_KEY}, [])
    return pairs


def build_rows(snapshot: HostFactSnapshot) -> List[FactRow]:
    """
    Build the full row collection for a snapshot.
    Hosts keep their insertion order and so do the paths within a host.
    A host with no leaf facts gets a single sentinel row.
    """
    rows: List[FactRow] = []
    for host, facts in snapshot.items():
        facts = facts if isinstance(facts, dict) else {}
        modified = facts.get(MODIFIED_KEY)
        pairs = flatten_facts(facts)
        if not pairs:
            rows.append(FactRow(
                id=f"{host}-no-facts",
                host=host,
                fact_path=SENTINEL_PATH,
                value=NO_DATA_VALUE,
                modified=modified,
            ))
            continue
        for path, value in pairs:
            rows.append(FactRow(id=f"{host}-{path}", host=host, fact_path=path, value=value, modified=modified))

    log.debug("built %d fact rows for %d hosts", len(rows), len(snapshot))
    return rows


def fact_paths(rows: Iterable[FactRow]) -> List[str]:
    """Distinct non-sentinel fact paths, sorted ascending."""
    return sorted({r.fact_path for r in rows if not r.is_sentinel})
