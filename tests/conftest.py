"""Pytest fixtures for hospital capacity tests."""
from __future__ import annotations

import numpy as np
import pytest

from hospital_capacity.sim.utils import HospitalParameters, load_config_bundle


class MinimumDraws:
    """Random source that always returns the lowest value of the range."""

    def integers(self, low, high=None, size=None):
        if high is None:
            low = 0
        if size is None:
            return low
        return np.full(size, low, dtype=int)


class FixedDraws:
    """Random source returning ``value`` clipped into ``[low, high)``."""

    def __init__(self, value: int):
        self.value = value

    def integers(self, low, high=None, size=None):
        if high is None:
            low, high = 0, low
        drawn = min(max(self.value, low), high - 1)
        if size is None:
            return drawn
        return np.full(size, drawn, dtype=int)


@pytest.fixture
def bundle():
    return load_config_bundle()


@pytest.fixture
def parameters() -> HospitalParameters:
    return HospitalParameters(
        total_beds=100,
        initial_occupied_beds=0,
        doctors=20,
        nurses=50,
        patient_influx_rate=5,
        avg_treatment_days=3,
    )


@pytest.fixture
def minimum_draws() -> MinimumDraws:
    return MinimumDraws()


@pytest.fixture
def seeded_gen() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def fixed_draws():
    return FixedDraws
