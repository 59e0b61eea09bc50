# factexplorer/settings.py
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parents[1]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Relational fact cache (sqlite by default, any SQLAlchemy URL works)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./facts_cache.sqlite3")

# AWX / Ansible Tower
AWX_PLACEHOLDER_URL = "https://awx.example.com"
AWX_PLACEHOLDER_TOKEN = "YOUR_SECRET_AWX_TOKEN"
AWX_URL = os.getenv("AWX_URL", AWX_PLACEHOLDER_URL)
AWX_TOKEN = os.getenv("AWX_TOKEN", AWX_PLACEHOLDER_TOKEN)
AWX_CONCURRENCY_LIMIT = int(os.getenv("AWX_CONCURRENCY_LIMIT", "20"))
AWX_REQUEST_TIMEOUT = float(os.getenv("AWX_REQUEST_TIMEOUT", "30"))  # seconds

# Local instruction model used to turn questions into filter pills
NLFILTER_MODEL_ID = os.getenv("NLFILTER_MODEL_ID", "Qwen/Qwen2.5-0.5B-Instruct")
NLFILTER_MAX_NEW_TOKENS = int(os.getenv("NLFILTER_MAX_NEW_TOKENS", "128"))

#   PRELOAD_MODEL=true    -> warm the model up at startup
#   PRELOAD_BLOCKING=true -> and wait for it before serving
PRELOAD_MODEL = os.getenv("PRELOAD_MODEL", "false").lower() in ("1", "true", "yes")
PRELOAD_BLOCKING = os.getenv("PRELOAD_BLOCKING", "true").lower() in ("1", "true", "yes")

HF_HOME = PROJECT_ROOT / "hf-cache"
TRANSFORMERS_CACHE = HF_HOME / "transformers"
