import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from factexplorer.nl import naturalfilter_local

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="", tags=["ask"])


# Request schema: the question plus the fact paths of the loaded snapshot
class AskRequest(BaseModel):
    q: str                        # natural-language question
    fact_paths: List[str] = []    # paths the model may refer to


@router.post("/ask")
def ask(req: AskRequest) -> Dict[str, Any]:
    """
    Translate a natural-language question into filter pills.
    The pills use the same grammar as the search box and are applied
    by the caller; nothing is filtered server-side.

    Request body:
      {"q": "Ubuntu hosts with more than 4 CPUs", "fact_paths": ["ansible_distribution", ...]}

    Response JSON:
      {
        "ok": True,
        "provider": "local-transformers",
        "pills": ["ansible_distribution=Ubuntu", "ansible_processor_vcpus>4"]
      }
    """
    question = (req.q or "").strip()
    if not question:
        raise HTTPException(400, "Missing 'q'")

    try:
        pills = naturalfilter_local.generate_pills(question, req.fact_paths)
    except Exception as e:
        # Small local models do not always follow the output format
        log.warning("filter translation failed for %r: %s", question, e)
        raise HTTPException(400, f"Could not translate: {e}")

    return {"ok": True, "provider": "local-transformers", "pills": pills}
