import streamlit as st, random, requests, json, io
import api as API
from gen_data import gen_snapshot
from components import show_json

st.title("📥 Ingest")

# ------------------------
# Session state
# ------------------------
if "generated_snapshot" not in st.session_state:
    st.session_state.generated_snapshot = {}

# ------------------------
# Controls
# ------------------------
col1, col2, col3 = st.columns(3)
with col1:
    total_n = st.number_input("Hosts", 1, 20000, 200, key="ing_total")
with col2:
    prefix = st.text_input("Hostname prefix", "node", key="ing_prefix")
with col3:
    seed = st.number_input("Random seed", 0, 999999, 0, key="ing_seed")

# ------------------------
# Helpers
# ------------------------
def _dl_button(snapshot, label="⬇️ Download generated JSON", file_name="facts_snapshot.json"):
    buf = io.StringIO()
    json.dump(snapshot, buf, indent=2)
    st.download_button(label, data=buf.getvalue(), file_name=file_name, mime="application/json")

def _post(snapshot):
    try:
        resp = API.ingest(snapshot)
        st.success(f"Stored {resp['ingested']} host(s), {resp['failed']} failed.")
        if resp.get("errors"):
            show_json(resp["errors"], caption="Sample errors")
    except requests.HTTPError as e:
        msg = e.response.text[:400] if e.response is not None else str(e)
        st.error(f"HTTP error: {msg}")
    except Exception as e:
        st.error(e)

# ------------------------
# Generate & Preview
# ------------------------
cA, cB, cC = st.columns(3)
with cA:
    if st.button("🎲 Generate snapshot", key="btn_gen"):
        if seed:
            random.seed(int(seed))
        st.session_state.generated_snapshot = gen_snapshot(int(total_n), prefix.strip() or "node")
        st.success(f"Generated facts for {len(st.session_state.generated_snapshot)} host(s).")
with cB:
    if st.button("Preview first 2 hosts", key="btn_preview"):
        if not st.session_state.generated_snapshot:
            st.info("No generated snapshot yet — click **Generate snapshot** first.")
        else:
            first = dict(list(st.session_state.generated_snapshot.items())[:2])
            show_json(first, caption="Preview (first 2 hosts)")
with cC:
    if st.session_state.generated_snapshot:
        _dl_button(st.session_state.generated_snapshot)

if st.session_state.generated_snapshot:
    if st.button("➡️ Store generated snapshot", key="btn_ingest_gen"):
        _post(st.session_state.generated_snapshot)

st.divider()

# ------------------------
# Raw JSON paths (manual)
# ------------------------
st.caption("Or upload/paste a snapshot (`{hostname: {facts...}}`) and POST it to `/ingest`")

cU, cP = st.columns(2)
with cU:
    up = st.file_uploader("Upload JSON file (object)", type=["json"], key="ing_upload")
    if up and st.button("POST uploaded JSON", key="btn_upload_post"):
        try:
            _post(json.load(up))
        except ValueError as e:
            st.error(f"Invalid JSON: {e}")

with cP:
    payload_text = st.text_area("Paste JSON object", height=180, key="ing_textarea",
                                placeholder='{"web-01": {"ansible_distribution": "Ubuntu", ...}}')
    if st.button("POST pasted JSON", key="btn_paste_post"):
        try:
            _post(json.loads(payload_text))
        except ValueError as e:
            st.error(f"Invalid JSON: {e}")
