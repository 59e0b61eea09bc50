import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from factexplorer.db import get_db
from factexplorer.sources import AwxSource, CacheSource, SourceError, SourceNotConfigured, get_source

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="/api", tags=["facts"])


def _awx_status(awx: AwxSource) -> Dict[str, Any]:
    if not awx.is_configured():
        return {"configured": False, "reachable": False, "error": None}
    try:
        awx.test_connection()
    except SourceError as e:
        log.warning("AWX connection check failed: %s", e)
        return {"configured": True, "reachable": False, "error": str(e)}
    return {"configured": True, "reachable": True, "error": None}


@router.get("/status")
def status(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Which upstream sources can be used right now.
    The demo source is always available and is not listed.
    A configured AWX is pinged; `error` says why it is unreachable.
    """
    result = {
        "awx": _awx_status(AwxSource()),
        "db": {"configured": CacheSource(db).is_configured()},
    }
    log.info("service status: %s", result)
    return result


@router.get("/facts")
def facts(
    source: str = Query(..., description="awx | db | demo"),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """
    Load a full snapshot: {hostname: {nested facts...}}.
    Hosts may carry `__awx_facts_modified_timestamp` with the time their
    facts were gathered.
    """
    try:
        loader = get_source(source, db)
    except ValueError as e:
        raise HTTPException(400, str(e))

    try:
        data = loader.fetch_facts()
    except SourceNotConfigured as e:
        raise HTTPException(503, str(e))
    except SourceError as e:
        log.error("fact fetch failed for source %s: %s", source, e)
        raise HTTPException(502, str(e))

    log.info("fetched data for %d hosts from %s", len(data), source)
    return data
