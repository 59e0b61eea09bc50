# factexplorer/sources/base.py
from typing import Literal, Protocol

from factexplorer.facts import HostFactSnapshot

SourceName = Literal["awx", "db", "demo"]


class SourceError(RuntimeError):
    """An upstream fact source failed while loading a snapshot."""


class SourceNotConfigured(SourceError):
    """The source is missing the settings it needs to be used at all."""


class FactSource(Protocol):
    def is_configured(self) -> bool:
        ...

    def fetch_facts(self) -> HostFactSnapshot:
        """Return a NEW snapshot: hostname -> nested facts."""
        ...
