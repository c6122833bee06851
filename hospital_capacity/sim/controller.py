"""Session-level owner of the simulation state used by the dashboard."""
from __future__ import annotations

import logging

import pandas as pd

from .engine import advance, apply_config, history_frame, reset
from .scheduler import Clock, TickScheduler
from .shocks import apply_mass_casualty, get_event
from .states import SimulationState
from .utils import ConfigBundle, HospitalParameters, RandomSource, load_config_bundle, rng

logger = logging.getLogger(__name__)


class ParametersLockedError(RuntimeError):
    """Raised when parameters are edited while the simulation is running."""


class SimulationController:
    """Single mutator of one :class:`SimulationState`.

    The dashboard stores one controller per browser session and routes every
    user action through it: start/pause, reset, mass casualty and parameter
    edits. ``sync`` runs whatever ticks the scheduler says are due.
    """

    def __init__(
        self,
        parameters: HospitalParameters | None = None,
        config_bundle: ConfigBundle | None = None,
        clock: Clock | None = None,
        gen: RandomSource | None = None,
    ):
        self.config = config_bundle or load_config_bundle()
        self.parameters = parameters or self.config.parameters.defaults
        self.gen = gen or rng(self.config.simulation.random_seed)
        self.scheduler = TickScheduler(
            clock=clock,
            interval_seconds=self.config.simulation.tick_interval_seconds,
            max_catch_up=self.config.simulation.max_catch_up_ticks,
        )
        self.event = get_event(self.config.simulation.mass_casualty_event, strict=True)
        self.state: SimulationState = reset(self.parameters)

    @property
    def running(self) -> bool:
        return self.scheduler.running

    def toggle(self) -> bool:
        return self.scheduler.toggle()

    def pause(self) -> None:
        self.scheduler.pause()

    def reset(self) -> SimulationState:
        self.scheduler.pause()
        self.state = reset(self.parameters)
        logger.info("simulation reset: %s", self.parameters.model_dump())
        return self.state

    def update_parameters(self, parameters: HospitalParameters) -> SimulationState:
        if self.running:
            raise ParametersLockedError("Pause the simulation before changing parameters")
        if parameters == self.parameters:
            return self.state
        previous, self.parameters = self.parameters, parameters
        self.state = apply_config(self.state, parameters, previous)
        logger.info("parameters updated: %s", parameters.model_dump())
        return self.state

    def trigger_mass_casualty(self) -> SimulationState:
        self.state = apply_mass_casualty(self.state, self.gen, self.event)
        return self.state

    def step(self) -> SimulationState:
        self.state = advance(self.state, self.config, self.gen)
        return self.state

    def sync(self) -> int:
        due = self.scheduler.due_ticks()
        for _ in range(due):
            self.step()
        return due

    def history_frame(self) -> pd.DataFrame:
        return history_frame(self.state)


__all__ = ["ParametersLockedError", "SimulationController"]
