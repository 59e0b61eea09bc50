from contextlib import asynccontextmanager
import asyncio
from fastapi import FastAPI

from .db import engine, Base
from .routers.facts import router as facts_router
from .routers.ingest import router as ingest_router
from .routers.ask import router as ask_router
from factexplorer import models  # noqa: F401  (registers tables on Base)
from factexplorer.settings import LOG_LEVEL, PRELOAD_MODEL, PRELOAD_BLOCKING
from factexplorer.setup_logging import setup_logging
from factexplorer.nl.model_loader import load_model, is_loaded

# --------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------
setup_logging(LOG_LEVEL) # Init Logging

# Create the fact cache table if it doesn’t exist.
Base.metadata.create_all(bind=engine)

# --------------------------------------------------------------------
# FastAPI application with lifespan hook
# --------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context runs once at startup and once at shutdown.
    With PRELOAD_MODEL set, the filter-translation model is warmed up so
    /ask answers quickly from the first request; otherwise it loads lazily.
    """
    app.state.model_error = None

    async def _warmup():
        try:
            if PRELOAD_BLOCKING:
                # Blocking: run in current event loop (server waits for model)
                load_model()
            else:
                # Non-blocking: offload to a background thread
                await asyncio.to_thread(load_model)
        except Exception as e:
            # Store any load error so /healthz can report it
            app.state.model_error = str(e)

    if PRELOAD_MODEL:
        if PRELOAD_BLOCKING:
            await _warmup()
        else:
            asyncio.create_task(_warmup())

    yield

# Create the FastAPI app instance
app = FastAPI(title="Fact Explorer API", lifespan=lifespan)

# --------------------------------------------------------------------
# Routes
# --------------------------------------------------------------------
@app.get("/healthz")
def health():
    """
    Simple health probe for monitoring.
    Returns:
      - ok: static True if the app is alive
      - model_ready: True once the filter-translation model is loaded
      - model_error: any load error message (None if healthy)
    """
    return {
        "ok": True,
        "service": "fact-explorer",
        "version": 1,
        "model_ready": is_loaded(),
        "model_error": getattr(app.state, "model_error", None),
    }

# Register API routers:
app.include_router(facts_router)
app.include_router(ingest_router)
app.include_router(ask_router)
