# factexplorer/sources/cache.py
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from factexplorer.facts import HostFactSnapshot
from factexplorer.repositories import load_snapshot
from .base import SourceError

log = logging.getLogger(__name__)


class CacheSource:
    """Facts previously stored in the relational cache (see POST /ingest)."""

    def __init__(self, db: Session):
        self.db = db

    def is_configured(self) -> bool:
        try:
            self.db.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            log.error("database connection check failed: %s", e)
            return False

    def fetch_facts(self) -> HostFactSnapshot:
        try:
            return load_snapshot(self.db)
        except SQLAlchemyError as e:
            log.exception("reading the fact cache failed")
            raise SourceError(f"Database error: {e}") from e
