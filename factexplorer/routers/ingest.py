from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from factexplorer.db import get_db
from factexplorer.repositories import update_or_insert_host_facts

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="", tags=["ingest"])


@router.post("/ingest")
def ingest(payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """
    Store a fact snapshot in the relational cache.

    Accepts:
        A JSON object mapping hostname -> nested facts, the same shape
        GET /api/facts returns. `__awx_facts_modified_timestamp` inside a
        host is stored as that host's modification time.

    Behavior:
        Each host is upserted in its own savepoint, so one bad host
        doesn't block the others. Hosts not in the payload are left alone.

    Returns:
        {
          "ok": True,
          "ingested": <count of stored hosts>,
          "failed": <count of rejected hosts>,
          "errors": [ ... up to 10 sample errors ... ]
        }
    """
    if not payload:
        raise HTTPException(400, "Payload must be a non-empty JSON object of hostname -> facts")

    try:
        ok, errors = update_or_insert_host_facts(db, payload)
        db.commit()
    except Exception as e:
        db.rollback()
        raise HTTPException(500, f"Ingest failed: {e}")

    return {
        "ok": True,
        "ingested": ok,
        "failed": len(errors),
        "errors": errors[:10],  # limit size of error list
    }
