# client/components.py
import streamlit as st
import pandas as pd

from factexplorer.facts import DashboardSummary, Projection, to_csv, to_xlsx

def show_projection(projection: Projection, caption: str | None = None):
    """Render a projection with its columns in header order."""
    if caption:
        st.caption(caption)
    if not projection.data:
        st.info("No facts match the current filters.")
        return
    frame = pd.DataFrame(
        [[rec.get(h) for h in projection.headers] for rec in projection.data],
        columns=projection.headers,
    )
    # mixed-type fact columns confuse Arrow; the table is for reading anyway
    st.dataframe(frame.astype(str).replace({"None": ""}), use_container_width=True, hide_index=True)

def show_json(obj, caption: str | None = None):
    if caption:
        st.caption(caption)
    st.json(obj)

def export_buttons(projection: Projection, base_name: str = "ansible_facts_export"):
    """CSV/XLSX downloads; disabled while there is nothing to export."""
    csv_text = to_csv(projection)
    xlsx_bytes = to_xlsx(projection) if projection.data else None
    c1, c2 = st.columns(2)
    with c1:
        st.download_button("⬇️ Export as CSV", data=csv_text or "", file_name=f"{base_name}.csv",
                           mime="text/csv", disabled=csv_text is None)
    with c2:
        st.download_button("📊 Export as XLSX", data=xlsx_bytes or b"", file_name=f"{base_name}.xlsx",
                           mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                           disabled=xlsx_bytes is None)

def show_dashboard(summary: DashboardSummary):
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Hosts", f"{summary.host_count:,}")
    c2.metric("Facts", f"{summary.fact_count:,}")
    c3.metric("Total vCPUs", f"{summary.total_vcpus:,g}")
    c4.metric("Total Memory (GB)", summary.total_memory_gb)
    for path, dist in summary.distributions.items():
        st.caption(f'Distribution of "{path}"')
        if dist:
            st.bar_chart(pd.DataFrame(dist, columns=["value", "hosts"]).set_index("value"))
        else:
            st.write(f'No categorical data found for "{path}".')
