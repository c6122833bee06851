"""Headless scenario runs with a fixed seed."""
from __future__ import annotations

import streamlit as st
from pydantic import ValidationError

from hospital_capacity.sim.engine import simulate_hours
from hospital_capacity.sim.recommendations import levelled_recommendations
from hospital_capacity.sim.utils import clamp_parameters, configure_logging, load_config_bundle
from hospital_capacity.viz.charts import time_series_chart

st.set_page_config(page_title="Scenario Runner", layout="wide")
configure_logging()

st.title("🧪 Scenario Runner")
st.write("Run a whole scenario at once instead of watching it hour by hour.")

config = load_config_bundle()
defaults = config.parameters.defaults
bounds = config.parameters.bounds

with st.form("scenario"):
    cols = st.columns(3)
    values = {
        "total_beds": cols[0].number_input("Total beds", value=defaults.total_beds, step=bounds["total_beds"].step),
        "initial_occupied_beds": cols[0].number_input("Occupied beds at start", value=defaults.initial_occupied_beds),
        "doctors": cols[1].number_input("Doctors", value=defaults.doctors),
        "nurses": cols[1].number_input("Nurses", value=defaults.nurses),
        "patient_influx_rate": cols[2].number_input("Patient influx (per hour)", value=int(defaults.patient_influx_rate)),
        "avg_treatment_days": cols[2].number_input("Avg treatment time (days)", value=int(defaults.avg_treatment_days)),
    }
    hours = st.slider("Hours to simulate", min_value=1, max_value=24 * 14, value=72)
    seed = st.number_input("Random seed", value=config.simulation.random_seed)
    casualty_hours = st.multiselect("Mass casualty at hour", list(range(hours)))
    submitted = st.form_submit_button("Run scenario", use_container_width=True, type="primary")

if not submitted:
    st.stop()

try:
    parameters = clamp_parameters(values, bounds)
except ValidationError as exc:
    st.error(f"Invalid parameters: {exc}")
    st.stop()

clamped = parameters.model_dump()
if any(float(clamped[name]) != float(value) for name, value in values.items()):
    st.warning("Some values were outside the allowed ranges and have been clamped.")

state, history_df, summary = simulate_hours(
    parameters,
    hours=hours,
    config_bundle=config,
    seed=int(seed),
    casualty_hours=casualty_hours,
)
st.session_state["scenario_history"] = history_df
st.session_state["scenario_summary"] = summary

col1, col2, col3, col4 = st.columns(4)
col1.metric("Treated", f"{summary['treated_total']:,.0f}")
col2.metric("Discharged", f"{summary['discharged_total']:,.0f}")
col3.metric("Peak waiting", f"{summary['peak_waiting_patients']:,.0f}")
col4.metric("Mean occupancy", f"{summary['mean_occupancy_rate']:.1%}")

st.plotly_chart(time_series_chart(history_df, title="Scenario time series"), use_container_width=True)

st.subheader("Recommendations at the end of the run")
for item in levelled_recommendations(state.recommendations, config.recommendations.levels):
    st.markdown(f"**{item['level'].title()}** · {item['message']}")

st.caption("Results are kept for this browser session only; use the Exports page to download them.")
