import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, StatementError
from sqlalchemy.orm import Session
from factexplorer.facts import MODIFIED_KEY, HostFactSnapshot
from factexplorer.models import HostFacts

log = logging.getLogger(__name__)


def parse_dt(z: Optional[str]):
    """Parse ISO-ish datetime strings into aware UTC datetimes (None if unparseable)."""
    if not z:
        return None
    try:
        dt = datetime.fromisoformat(str(z).replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_dt(dt: Optional[datetime]) -> Optional[str]:
    """Render a stored timestamp as ISO-8601 UTC ("...Z"). SQLite hands back naive values."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def update_or_insert_host_facts(db: Session, snapshot: HostFactSnapshot) -> tuple[int, list[dict]]:
    """
    Idempotent upsert keyed by hostname.
    The reserved modified-timestamp key is lifted out of the facts into `modified_at`.
    """
    ok = 0
    errors: list[dict] = []

    for hostname, facts in snapshot.items():
        host = (hostname or "").strip()
        if not host:
            msg = "hostname is required"
            log.warning("fact record rejected: %s", msg)
            errors.append({"hostname": hostname, "error": msg})
            continue
        if not isinstance(facts, dict):
            msg = "facts must be a JSON object"
            log.warning("fact record rejected: %s (hostname=%s)", msg, host)
            errors.append({"hostname": host, "error": msg})
            continue

        data = {k: v for k, v in facts.items() if k != MODIFIED_KEY}
        modified_at = parse_dt(facts.get(MODIFIED_KEY))

        try:
            # per-record savepoint so one bad record doesn’t poison the batch
            with db.begin_nested():
                row = db.get(HostFacts, host)
                if row is None:
                    row = HostFacts(hostname=host)
                row.data = data
                row.modified_at = modified_at
                db.merge(row)
            ok += 1

        except (IntegrityError, StatementError, TypeError, ValueError) as e:
            # the savepoint is already rolled back; earlier hosts stay pending
            log.exception("fact upsert failed: hostname=%s", host)
            errors.append({"hostname": host, "error": str(e)})

    return ok, errors


def load_snapshot(db: Session) -> HostFactSnapshot:
    """Read the whole cache back as a snapshot, hosts ordered by name."""
    snapshot: HostFactSnapshot = {}
    for row in db.execute(select(HostFacts).order_by(HostFacts.hostname)).scalars():
        facts = dict(row.data or {})
        stamp = format_dt(row.modified_at)
        if stamp:
            facts[MODIFIED_KEY] = stamp
        snapshot[row.hostname] = facts
    log.info("loaded %d hosts from the fact cache", len(snapshot))
    return snapshot
