from sqlalchemy.orm import Session

from .base import FactSource, SourceError, SourceName, SourceNotConfigured
from .awx import AwxSource
from .cache import CacheSource
from .demo import DemoSource

SOURCES = ("awx", "db", "demo")


def get_source(name: str, db: Session) -> FactSource:
    """Factory for the snapshot loaders; raises ValueError for an unknown name."""
    if name == "awx":
        return AwxSource()
    if name == "db":
        return CacheSource(db)
    if name == "demo":
        return DemoSource()
    raise ValueError(f"Invalid or missing source {name!r}. Use one of: {', '.join(SOURCES)}.")


__all__ = [
    "get_source",
    "SOURCES",
    "FactSource",
    "SourceError",
    "SourceName",
    "SourceNotConfigured",
    "AwxSource",
    "CacheSource",
    "DemoSource",
]
