# factexplorer/sources/demo.py
import json
from copy import deepcopy
from functools import lru_cache
from pathlib import Path

from factexplorer.facts import HostFactSnapshot

DEMO_FILE = Path(__file__).with_name("demo_facts.json")


@lru_cache(maxsize=1)
def _load() -> HostFactSnapshot:
    with DEMO_FILE.open(encoding="utf-8") as f:
        return json.load(f)


class DemoSource:
    """Static fixture bundled with the package; always available."""

    def is_configured(self) -> bool:
        return True

    def fetch_facts(self) -> HostFactSnapshot:
        return deepcopy(_load())
