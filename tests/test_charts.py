from __future__ import annotations

from hospital_capacity.sim.engine import history_frame, simulate_hours
from hospital_capacity.viz.charts import PATIENT_SERIES, severity_bar, time_series_chart, utilization_gauge


def test_time_series_chart_has_patient_series(parameters, bundle):
    state, history, _ = simulate_hours(parameters, hours=12, config_bundle=bundle, seed=11)
    fig = time_series_chart(history_frame(state))
    assert [trace.name for trace in fig.data] == list(PATIENT_SERIES.values())
    assert list(fig.data[0].x) == list(range(1, 13))


def test_state_figures_build(parameters, bundle):
    state, _, _ = simulate_hours(parameters, hours=6, config_bundle=bundle, seed=5)
    assert len(severity_bar(state.severity_mix).data) == 3
    assert len(utilization_gauge(state.staff_utilization).data) == 1
