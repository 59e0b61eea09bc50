# client/pages/3_Ask.py
import streamlit as st
import api as API  # your client/api.py

st.title("❓ Ask (AI → filters)")

paths = st.session_state.get("all_paths", [])
if not paths:
    st.info("Load facts on the **Browse** page first so the model knows which fact paths exist.")

q = st.text_input("Question", placeholder="Ubuntu web servers with more than 4 vCPUs")

if st.button("Translate"):
    try:
        res = API.ask(q=q, fact_paths=paths)   # expects {"ok", "pills": [...]}
        st.session_state.suggested_pills = res.get("pills") or []
    except Exception as e:
        st.error(e)

suggested = st.session_state.get("suggested_pills") or []
if suggested:
    st.subheader("Suggested filters")
    for pill in suggested:
        st.code(pill)
    if st.button("➕ Apply on Browse"):
        current = st.session_state.get("pills", [])
        st.session_state.pills = current + [p for p in suggested if p not in current]
        st.success(f"{len(suggested)} filter(s) added. Open **Browse** to see the results.")
