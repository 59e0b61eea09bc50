import os, requests
from dotenv import load_dotenv
load_dotenv()
API = os.getenv("API_BASE_URL", "http://localhost:8000")
S = requests.Session(); S.headers.update({"Content-Type":"application/json"})

def healthz():   r=S.get(f"{API}/healthz",timeout=10); r.raise_for_status(); return r.json()
def status():    r=S.get(f"{API}/api/status",timeout=15); r.raise_for_status(); return r.json()
def ingest(b):   r=S.post(f"{API}/ingest",json=b,timeout=60); r.raise_for_status(); return r.json()

def facts(source: str):
    # AWX snapshots can take minutes on large inventories
    r = S.get(f"{API}/api/facts", params={"source": source}, timeout=600)
    if not r.ok:
        try:
            detail = r.json().get("detail")
        except ValueError:
            detail = None
        raise RuntimeError(detail or f"Failed to fetch data from API: {r.reason}")
    return r.json()

def ask(q, fact_paths=()):
    r=S.post(f"{API}/ask",json={"q":q,"fact_paths":list(fact_paths)},timeout=120); r.raise_for_status(); return r.json()
