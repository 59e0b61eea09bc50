# client/streamlit_app.py
import os
import requests
import streamlit as st

st.set_page_config(page_title="Fact Explorer", layout="wide")
st.title("🔎 Fact Explorer")

st.markdown("""
This is the home page.

Use the **sidebar Pages** to open:
- **📥 Ingest** — Generate a synthetic fact snapshot or upload one and POST it to `/ingest` to fill the cached DB source.
- **📚 Browse** — Load facts from Live AWX, the Cached DB or the demo data, then search, pivot, sort and export them. Filtering runs locally, no round-trip per keystroke.
- **❓ Ask** — Describe what you are looking for; a local model turns it into filter pills you can add to Browse.
""")

with st.sidebar:
    st.header("Settings")
    api_url = os.getenv("API_BASE_URL", "http://localhost:8000")
    st.text_input("API Base URL (from env)", value=api_url, disabled=True)
    if st.button("Health check"):
        try:
            r = requests.get(f"{api_url}/healthz", timeout=5)
            st.success(r.json())
        except Exception as e:
            st.error(f"Health check failed: {e}")

st.info("Tip: set `API_BASE_URL` in `client/.env` or export it before running `streamlit run client/streamlit_app.py`.")
