"""Data export utilities."""
from __future__ import annotations

import io

import pandas as pd
import streamlit as st

from hospital_capacity.sim.engine import summarise_history

st.set_page_config(page_title="Exports", layout="wide")

st.title("📦 Exports")
st.write("Download the time series of the live simulation or the last scenario run.")

sources = {}
controller = st.session_state.get("controller")
if controller is not None:
    live_df = controller.history_frame()
    sources["Live simulation"] = (live_df, summarise_history(live_df, controller.state))
if "scenario_history" in st.session_state:
    sources["Last scenario run"] = (
        st.session_state["scenario_history"],
        st.session_state.get("scenario_summary", {}),
    )

if not sources or all(df.empty for df, _ in sources.values()):
    st.info("No history available yet. Run the simulation or a scenario first.")
    st.stop()

for label, (history_df, summary) in sources.items():
    if history_df.empty:
        continue
    st.subheader(label)
    st.dataframe(history_df.tail(24), use_container_width=True)

    history_buffer = io.StringIO()
    summary_buffer = io.StringIO()
    history_df.to_csv(history_buffer, index=False)
    pd.DataFrame([summary]).to_csv(summary_buffer, index=False)
    slug = label.lower().replace(" ", "_")

    st.download_button(
        label="Download hourly time series",
        data=history_buffer.getvalue().encode("utf-8"),
        file_name=f"hospital_{slug}_timeseries.csv",
        mime="text/csv",
        key=f"{slug}-timeseries",
    )
    st.download_button(
        label="Download summary",
        data=summary_buffer.getvalue().encode("utf-8"),
        file_name=f"hospital_{slug}_summary.csv",
        mime="text/csv",
        key=f"{slug}-summary",
    )

st.caption("Exports are generated on demand; nothing is stored between sessions.")
