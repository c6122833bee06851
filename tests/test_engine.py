from __future__ import annotations

from dataclasses import asdict

import numpy as np
import pandas as pd
import pytest

from hospital_capacity.sim.engine import (
    HISTORY_COLUMNS,
    advance,
    apply_config,
    history_frame,
    reset,
    simulate_hours,
)
from hospital_capacity.sim.shocks import apply_mass_casualty
from hospital_capacity.sim.states import HistoryRecord
from hospital_capacity.sim.utils import ConfigBundle, HospitalParameters

HIGH_OCCUPANCY = "High occupancy rate. Consider increasing bed capacity."


def _snapshot(state):
    data = asdict(state)
    data["active_stays"] = state.active_stays.tolist()
    return data


def _lagged(bundle: ConfigBundle) -> ConfigBundle:
    return ConfigBundle(
        parameters=bundle.parameters,
        recommendations=bundle.recommendations,
        simulation=bundle.simulation.model_copy(update={"derived_metrics_source": "lagged"}),
    )


def test_first_tick_with_minimum_draws(parameters, bundle, minimum_draws):
    state = advance(reset(parameters), bundle, minimum_draws)
    assert state.hour == 1
    assert state.occupied_beds == 0
    assert state.waiting_patients == 0
    assert state.history == [HistoryRecord(1, 0, 0, 0, 0)]
    assert state.last_tick.admitted == 0


def test_advance_does_not_mutate_input(parameters, bundle, fixed_draws):
    start = reset(parameters)
    before = _snapshot(start)
    advance(start, bundle, fixed_draws(3))
    assert _snapshot(start) == before


def test_admission_and_discharge_sequence(parameters, bundle, fixed_draws):
    gen = fixed_draws(3)
    state = reset(parameters)

    state = advance(state, bundle, gen)
    assert state.occupied_beds == 3
    assert state.treated_patients_cumulative == 3
    assert state.active_stays.tolist() == [2, 2, 2]

    state = advance(state, bundle, gen)
    assert state.occupied_beds == 6
    assert state.discharged_patients_cumulative == 0

    state = advance(state, bundle, gen)
    assert state.last_tick.discharged == 3
    assert state.occupied_beds == 6
    assert state.treated_patients_cumulative == 9
    assert state.discharged_patients_cumulative == 3
    assert sorted(state.active_stays.tolist()) == [1, 1, 1, 2, 2, 2]
    assert [record.hour for record in state.history] == [1, 2, 3]


def test_admission_limited_by_free_beds(bundle, minimum_draws):
    state = reset(
        HospitalParameters(total_beds=10, initial_occupied_beds=9, doctors=20, nurses=50)
    )
    state.waiting_patients = 50
    state = advance(state, bundle, minimum_draws)
    assert state.last_tick.admitted == 1
    # a zero-hour stay is discharged within the same tick
    assert state.last_tick.discharged == 1
    assert state.occupied_beds == 9
    assert state.waiting_patients == 49


def test_admission_limited_by_scarcer_staff(bundle, minimum_draws):
    state = reset(HospitalParameters(total_beds=100, doctors=2, nurses=50))
    state.waiting_patients = 30
    state = advance(state, bundle, minimum_draws)
    assert state.last_tick.admitted == 2


def test_invariants_hold_over_long_run(parameters, bundle, seeded_gen):
    state = reset(parameters.model_copy(update={"initial_occupied_beds": 60}))
    previous = state
    for hour in range(300):
        if hour % 50 == 0:
            state = apply_mass_casualty(state, seeded_gen)
        state = advance(state, bundle, seeded_gen)
        assert 0 <= state.occupied_beds <= state.total_beds
        assert state.waiting_patients >= 0
        assert state.treated_patients_cumulative >= previous.treated_patients_cumulative
        assert state.discharged_patients_cumulative >= previous.discharged_patients_cumulative
        assert 0.0 <= state.staff_utilization.doctors <= 1.0
        assert 0.0 <= state.staff_utilization.nurses <= 1.0
        previous = state
    assert len(state.history) == state.hour == 300


@pytest.mark.parametrize("occupied, expected", [(95, True), (40, False)])
def test_high_occupancy_recommendation(bundle, minimum_draws, occupied, expected):
    state = reset(
        HospitalParameters(total_beds=100, initial_occupied_beds=occupied, doctors=1, nurses=1)
    )
    state = advance(state, bundle, minimum_draws)
    assert state.performance_metrics.occupancy_rate == occupied / 100
    assert (HIGH_OCCUPANCY in state.recommendations) is expected


def test_derived_metrics_follow_current_occupancy(parameters, bundle, fixed_draws):
    state = advance(reset(parameters), bundle, fixed_draws(3))
    assert state.performance_metrics.occupancy_rate == pytest.approx(0.03)
    assert state.severity_mix.mild == 1
    assert state.history[-1] == HistoryRecord(1, 3, 0, 3, 0)


def test_lagged_metrics_use_start_of_tick(parameters, bundle, fixed_draws):
    state = advance(reset(parameters), _lagged(bundle), fixed_draws(3))
    assert state.occupied_beds == 3
    assert state.performance_metrics.occupancy_rate == 0.0
    assert state.severity_mix.mild == 0
    assert state.history[-1] == HistoryRecord(1, 0, 0, 0, 0)


def test_reset_is_idempotent(parameters, bundle, seeded_gen):
    state = reset(parameters)
    for _ in range(5):
        state = advance(state, bundle, seeded_gen)
    once = reset(parameters)
    twice = reset(parameters)
    assert _snapshot(once) == _snapshot(twice)
    assert once.hour == 0
    assert once.history == []
    assert once.treated_patients_cumulative == 0
    assert once.discharged_patients_cumulative == 0
    assert once.active_stays.size == 0


def test_apply_config_keeps_counters(parameters, bundle, fixed_draws):
    state = advance(reset(parameters), bundle, fixed_draws(3))
    edited = apply_config(
        state,
        parameters.model_copy(update={"doctors": 5, "initial_occupied_beds": 10}),
    )
    assert edited.doctors == 5
    assert edited.occupied_beds == 10
    assert edited.treated_patients_cumulative == 3
    assert len(edited.history) == 1


def test_history_frame_columns(parameters, bundle, minimum_draws):
    state = reset(parameters)
    assert history_frame(state).empty
    state = advance(state, bundle, minimum_draws)
    df = history_frame(state)
    assert list(df.columns) == HISTORY_COLUMNS
    assert df.iloc[0]["hour"] == 1


def test_simulate_hours_is_reproducible(parameters, bundle):
    state, history, summary = simulate_hours(parameters, hours=48, config_bundle=bundle, seed=7)
    _, history_again, _ = simulate_hours(parameters, hours=48, config_bundle=bundle, seed=7)
    pd.testing.assert_frame_equal(history, history_again)
    assert len(history) == 48
    assert state.hour == 48
    assert summary["hours"] == 48
    assert summary["treated_total"] == state.treated_patients_cumulative
    assert np.isclose(
        summary["mean_occupancy_rate"],
        (history["occupied_beds"] / parameters.total_beds).mean(),
    )


def test_simulate_hours_applies_casualties(parameters, bundle):
    _, history, summary = simulate_hours(
        parameters, hours=3, config_bundle=bundle, seed=3, casualty_hours=[0]
    )
    assert summary["peak_waiting_patients"] >= 30


def test_simulate_hours_rejects_negative_hours(parameters, bundle):
    with pytest.raises(ValueError):
        simulate_hours(parameters, hours=-1, config_bundle=bundle)


def test_apply_config_keeps_live_occupancy_when_baseline_unchanged(parameters, bundle, fixed_draws):
    state = advance(reset(parameters), bundle, fixed_draws(3))
    edited = apply_config(state, parameters.model_copy(update={"nurses": 30}), parameters)
    assert edited.occupied_beds == 3
    assert edited.nurses == 30

    shrunk = state.copy()
    shrunk.occupied_beds = 50
    capped = apply_config(
        shrunk,
        parameters.model_copy(update={"total_beds": 20}),
        parameters,
    )
    assert capped.occupied_beds == 20


def test_reset_seeds_occupancy_without_stays():
    state = reset(HospitalParameters(total_beds=50, initial_occupied_beds=12))
    assert state.occupied_beds == 12
    assert state.active_stays.size == 0
