"""Live hospital capacity dashboard."""
from __future__ import annotations

import streamlit as st
from pydantic import ValidationError
from streamlit_autorefresh import st_autorefresh

from hospital_capacity.sim.controller import ParametersLockedError, SimulationController
from hospital_capacity.sim.recommendations import levelled_recommendations
from hospital_capacity.sim.utils import HospitalParameters, configure_logging, load_config_bundle
from hospital_capacity.viz.charts import severity_bar, time_series_chart, utilization_gauge
from hospital_capacity.viz.help import HELP_MARKDOWN, HELP_TITLE

st.set_page_config(page_title="Hospital Simulation", layout="wide")
configure_logging()

LEVEL_ICONS = {"critical": "🔴", "warning": "🟡", "advisory": "🟢"}

config = load_config_bundle()
if "controller" not in st.session_state:
    st.session_state["controller"] = SimulationController(config_bundle=config)
    st.session_state["show_help"] = False
controller: SimulationController = st.session_state["controller"]

if controller.running:
    st_autorefresh(
        interval=int(config.simulation.tick_interval_seconds * 1000),
        key="simulation-tick",
    )
controller.sync()

title_col, help_col = st.columns([5, 1])
title_col.title("🏥 Hospital Simulation")
if help_col.button("❔ Help", use_container_width=True):
    st.session_state["show_help"] = not st.session_state["show_help"]

if st.session_state["show_help"]:
    with st.container(border=True):
        st.subheader(HELP_TITLE)
        st.markdown(HELP_MARKDOWN)
        if st.button("Close", key="close-help", use_container_width=True):
            st.session_state["show_help"] = False
            st.rerun()

controls_col, params_col, stats_col = st.columns(3)

with controls_col:
    st.subheader("Simulation Controls")
    if st.button("⏸️ Pause" if controller.running else "▶️ Start", use_container_width=True, type="primary"):
        controller.toggle()
        st.rerun()
    if st.button("🔄 Reset", use_container_width=True):
        controller.reset()
        st.rerun()
    if st.button("⚠️ Trigger Mass Casualty", use_container_width=True):
        controller.trigger_mass_casualty()
    st.metric("Simulation Time", f"Hour {controller.state.hour}")

with params_col:
    st.subheader("Hospital Parameters")
    bounds = config.parameters.bounds
    current = controller.parameters
    locked = controller.running

    def slider(label: str, name: str, value: int, max_value: int | None = None) -> int:
        bound = bounds[name]
        return st.slider(
            label,
            min_value=bound.min,
            max_value=max_value if max_value is not None else bound.max,
            value=min(int(value), max_value if max_value is not None else bound.max),
            step=bound.step,
            disabled=locked,
        )

    total_beds = slider("Total Beds", "total_beds", current.total_beds)
    occupied = slider(
        "Occupied Beds at Start",
        "initial_occupied_beds",
        current.initial_occupied_beds,
        max_value=total_beds,
    )
    doctors = slider("Doctors", "doctors", current.doctors)
    nurses = slider("Nurses", "nurses", current.nurses)
    influx = slider("Patient Influx (per hour)", "patient_influx_rate", int(current.patient_influx_rate))
    treatment_days = slider("Avg Treatment Time (days)", "avg_treatment_days", int(current.avg_treatment_days))

    if not locked:
        try:
            controller.update_parameters(
                HospitalParameters(
                    total_beds=total_beds,
                    initial_occupied_beds=occupied,
                    doctors=doctors,
                    nurses=nurses,
                    patient_influx_rate=influx,
                    avg_treatment_days=treatment_days,
                )
            )
        except (ValidationError, ParametersLockedError) as exc:
            st.error(f"Parameters not applied: {exc}")

state = controller.state

with stats_col:
    st.subheader("Hospital Statistics")
    st.write(f"Total Beds: {state.total_beds}")
    st.write(f"Occupied Beds: {state.occupied_beds}")
    st.write(f"Available Beds: {state.available_beds}")
    st.write(f"Waiting Patients: {state.waiting_patients}")
    st.write(f"Treated Patients: {state.treated_patients_cumulative}")
    st.write(f"Discharged Patients: {state.discharged_patients_cumulative}")
    st.caption(
        f"Last hour: +{state.last_tick.new_patients} arrivals, "
        f"{state.last_tick.admitted} admitted, {state.last_tick.discharged} discharged"
    )

metrics_col, recs_col, mix_col = st.columns(3)
with metrics_col:
    st.subheader("Performance Metrics")
    col1, col2 = st.columns(2)
    col1.metric("Occupancy Rate", f"{state.performance_metrics.occupancy_rate * 100:.2f}%")
    col2.metric("Staff-to-Patient Ratio", f"{state.performance_metrics.staff_to_patient_ratio:.2f}")
    st.plotly_chart(utilization_gauge(state.staff_utilization), use_container_width=True)

with recs_col:
    st.subheader("Recommendations")
    if not state.recommendations:
        st.info("No recommendations yet.")
    for item in levelled_recommendations(state.recommendations, config.recommendations.levels):
        st.markdown(f"{LEVEL_ICONS.get(item['level'], '⚪')} {item['message']}")

with mix_col:
    st.subheader("Patient Severity")
    st.plotly_chart(severity_bar(state.severity_mix), use_container_width=True)

st.subheader("Time Series Data")
history_df = controller.history_frame()
if history_df.empty:
    st.info("Start the simulation to populate the time series.")
else:
    st.plotly_chart(time_series_chart(history_df), use_container_width=True)
