"""One-shot events triggered from the control panel."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from .states import SimulationState
from .utils import RandomSource, rng

logger = logging.getLogger(__name__)


@dataclass
class ShockEvent:
    name: str
    description: str
    min_casualties: int
    max_casualties: int  # exclusive


PREDEFINED_EVENTS: Dict[str, ShockEvent] = {
    "mass_casualty": ShockEvent(
        name="mass_casualty",
        description="A sudden burst of casualties joins the waiting queue.",
        min_casualties=50,
        max_casualties=100,
    ),
}


def get_event(name: str, strict: bool = False) -> Optional[ShockEvent]:
    event = PREDEFINED_EVENTS.get(name)
    if event is None and strict:
        raise ValueError(f"Unknown event '{name}'")
    return event


def apply_event(
    state: SimulationState,
    event: ShockEvent,
    gen: RandomSource | None = None,
) -> SimulationState:
    gen = gen or rng(None)
    casualties = int(gen.integers(event.min_casualties, event.max_casualties))
    state = state.copy()
    state.waiting_patients += casualties
    logger.info(
        "%s at hour %d: %d patients added to the queue (%d waiting)",
        event.name,
        state.hour,
        casualties,
        state.waiting_patients,
    )
    return state


def apply_mass_casualty(
    state: SimulationState,
    gen: RandomSource | None = None,
    event: ShockEvent | None = None,
) -> SimulationState:
    """Add 50-99 waiting patients. Nothing else in the state changes."""
    return apply_event(state, event or PREDEFINED_EVENTS["mass_casualty"], gen)


__all__ = [
    "ShockEvent",
    "PREDEFINED_EVENTS",
    "get_event",
    "apply_event",
    "apply_mass_casualty",
]
