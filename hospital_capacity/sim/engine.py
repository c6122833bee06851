"""Simulation engine for the hospital capacity model."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Tuple

import numpy as np
import pandas as pd

from .capacity import admission_capacity, performance_metrics, severity_mix, staff_utilization
from .recommendations import build_recommendations
from .shocks import apply_mass_casualty, get_event
from .states import HistoryRecord, SimulationState, TickSummary
from .utils import ConfigBundle, HospitalParameters, RandomSource, load_config_bundle, rng

logger = logging.getLogger(__name__)

HISTORY_COLUMNS = [
    "hour",
    "occupied_beds",
    "waiting_patients",
    "treated_patients_cumulative",
    "discharged_patients_cumulative",
]


def reset(parameters: HospitalParameters) -> SimulationState:
    """Build a fresh hour-0 state from the configured baseline.

    ``occupied_beds`` starts at ``initial_occupied_beds``. Those beds get no
    entry in ``active_stays``, so the stay countdown never discharges them.
    """
    return SimulationState(
        total_beds=parameters.total_beds,
        doctors=parameters.doctors,
        nurses=parameters.nurses,
        patient_influx_rate=parameters.patient_influx_rate,
        avg_treatment_days=parameters.avg_treatment_days,
        occupied_beds=min(parameters.initial_occupied_beds, parameters.total_beds),
    )


def apply_config(
    state: SimulationState,
    parameters: HospitalParameters,
    previous: HospitalParameters | None = None,
) -> SimulationState:
    """Copy edited parameters into a paused state, keeping counters and history.

    Occupancy is only overwritten when the starting occupancy itself changed
    (or ``previous`` is unknown); otherwise it is just capped at the new bed
    count.
    """
    state = state.copy()
    state.total_beds = parameters.total_beds
    state.doctors = parameters.doctors
    state.nurses = parameters.nurses
    state.patient_influx_rate = parameters.patient_influx_rate
    state.avg_treatment_days = parameters.avg_treatment_days
    if previous is None or previous.initial_occupied_beds != parameters.initial_occupied_beds:
        state.occupied_beds = parameters.initial_occupied_beds
    state.occupied_beds = min(state.occupied_beds, parameters.total_beds)
    return state


def advance(
    state: SimulationState,
    config_bundle: ConfigBundle | None = None,
    gen: RandomSource | None = None,
) -> SimulationState:
    """Advance the hospital by one simulated hour and return the new state."""
    cfg = config_bundle or load_config_bundle()
    gen = gen or rng(cfg.simulation.random_seed + state.hour)
    lagged = cfg.simulation.derived_metrics_source == "lagged"

    start = state
    state = state.copy()

    # Arrivals
    new_patients = int(gen.integers(0, max(int(state.patient_influx_rate), 1)))
    state.waiting_patients += new_patients

    # Admission
    admitted = admission_capacity(
        state.doctors,
        state.nurses,
        state.waiting_patients,
        state.total_beds,
        state.occupied_beds,
    )
    state.waiting_patients -= admitted
    state.occupied_beds += admitted
    state.treated_patients_cumulative += admitted
    if admitted:
        max_stay = max(int(state.avg_treatment_days * 24), 1)
        stays = np.asarray(gen.integers(0, max_stay, size=admitted), dtype=int)
        state.active_stays = np.concatenate([state.active_stays, stays])

    # Discharge
    remaining = state.active_stays - 1
    discharged_mask = remaining <= 0
    discharged = int(discharged_mask.sum())
    state.active_stays = remaining[~discharged_mask]
    state.discharged_patients_cumulative += discharged
    state.occupied_beds = max(0, state.occupied_beds - discharged)

    # Derived figures read either this tick's result or the incoming snapshot
    source = start if lagged else state
    occupied = source.occupied_beds
    state.severity_mix = severity_mix(occupied)
    state.staff_utilization = staff_utilization(occupied, state.doctors, state.nurses)
    state.performance_metrics = performance_metrics(
        occupied, state.total_beds, state.doctors, state.nurses
    )
    state.recommendations = build_recommendations(
        state.performance_metrics,
        source.waiting_patients,
        state.total_beds,
        cfg.recommendations,
    )

    state.history.append(
        HistoryRecord(
            hour=state.hour + 1,
            occupied_beds=source.occupied_beds,
            waiting_patients=source.waiting_patients,
            treated_patients_cumulative=source.treated_patients_cumulative,
            discharged_patients_cumulative=source.discharged_patients_cumulative,
        )
    )
    state.hour += 1
    state.last_tick = TickSummary(new_patients=new_patients, admitted=admitted, discharged=discharged)

    logger.debug(
        "hour %d: +%d arrivals, %d admitted, %d discharged, %d/%d beds, %d waiting",
        state.hour,
        new_patients,
        admitted,
        discharged,
        state.occupied_beds,
        state.total_beds,
        state.waiting_patients,
    )
    return state


def history_frame(state: SimulationState) -> pd.DataFrame:
    """One row per tick, columns in ``HISTORY_COLUMNS`` order."""
    return pd.DataFrame([record.as_dict() for record in state.history], columns=HISTORY_COLUMNS)


def summarise_history(history: pd.DataFrame, state: SimulationState) -> Dict[str, float]:
    """Totals, peaks and mean occupancy of a run, as plain floats for export."""
    if history.empty:
        return {
            "hours": 0.0,
            "treated_total": 0.0,
            "discharged_total": 0.0,
            "peak_occupied_beds": float(state.occupied_beds),
            "peak_waiting_patients": float(state.waiting_patients),
            "mean_occupancy_rate": 0.0,
            "final_waiting_patients": float(state.waiting_patients),
            "recommendation_count": float(len(state.recommendations)),
        }
    occupancy = history["occupied_beds"] / max(state.total_beds, 1)
    return {
        "hours": float(len(history)),
        "treated_total": float(history["treated_patients_cumulative"].iloc[-1]),
        "discharged_total": float(history["discharged_patients_cumulative"].iloc[-1]),
        "peak_occupied_beds": float(history["occupied_beds"].max()),
        "peak_waiting_patients": float(history["waiting_patients"].max()),
        "mean_occupancy_rate": float(occupancy.mean()),
        "final_waiting_patients": float(history["waiting_patients"].iloc[-1]),
        "recommendation_count": float(len(state.recommendations)),
    }


def simulate_hours(
    parameters: HospitalParameters,
    hours: int,
    config_bundle: ConfigBundle | None = None,
    seed: int = 1234,
    casualty_hours: Iterable[int] = (),
) -> Tuple[SimulationState, pd.DataFrame, Dict[str, float]]:
    """Run ``hours`` ticks from a fresh state without a scheduler.

    A mass casualty event is applied before the tick of every hour listed in
    ``casualty_hours`` (0 is the first tick).
    """
    if hours < 0:
        raise ValueError("hours must be non-negative")
    cfg = config_bundle or load_config_bundle()
    gen = rng(seed)
    event = get_event(cfg.simulation.mass_casualty_event, strict=True)
    casualty_at = set(casualty_hours)

    state = reset(parameters)
    for hour in range(hours):
        if hour in casualty_at:
            state = apply_mass_casualty(state, gen, event)
        state = advance(state, cfg, gen)

    history = history_frame(state)
    summary = summarise_history(history, state)
    logger.info("simulated %d hours (seed %d): %s", hours, seed, summary)
    return state, history, summary


__all__ = [
    "HISTORY_COLUMNS",
    "reset",
    "apply_config",
    "advance",
    "history_frame",
    "summarise_history",
    "simulate_hours",
]
