"""Utility helpers for configuration loading and deterministic RNG."""
from __future__ import annotations

import hashlib
import json
import logging
import math
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Literal, Mapping, Optional, Protocol

import numpy as np
from pydantic import BaseModel, Field, model_validator

from .states import RecommendationLevel

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"
CONFIG_DIR_ENV = "HOSPITAL_SIM_CONFIG_DIR"
LOG_LEVEL_ENV = "HOSPITAL_SIM_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class RandomSource(Protocol):
    """Anything that draws integers like ``numpy.random.Generator.integers``.

    ``high`` is exclusive. When ``size`` is given an array is returned.
    """

    def integers(self, low, high=None, size=None): ...


class ParameterBound(BaseModel):
    min: int
    max: int
    step: int = Field(1, gt=0)


class HospitalParameters(BaseModel):
    """User-adjustable hospital parameters with the slider bounds enforced."""

    total_beds: int = Field(100, ge=10, le=500)
    initial_occupied_beds: int = Field(0, ge=0, le=500)
    doctors: int = Field(20, ge=1, le=100)
    nurses: int = Field(50, ge=1, le=200)
    patient_influx_rate: float = Field(5, ge=1, le=20)
    avg_treatment_days: float = Field(3, ge=1, le=30)

    @model_validator(mode="after")
    def _check_beds(self) -> "HospitalParameters":
        if self.total_beds % 10 != 0:
            raise ValueError("total_beds must be a multiple of 10")
        if self.initial_occupied_beds > self.total_beds:
            raise ValueError("initial_occupied_beds cannot exceed total_beds")
        return self


class ParametersConfig(BaseModel):
    defaults: HospitalParameters
    bounds: Dict[str, ParameterBound]


class RecommendationThresholds(BaseModel):
    high_occupancy_rate: float = 0.9
    low_staff_ratio: float = 0.2
    long_wait_bed_fraction: float = 0.5
    overstaffing_ratio: float = 0.5
    low_occupancy_rate: float = 0.5
    low_occupancy_staff_ratio: float = 0.4


class RecommendationsConfig(BaseModel):
    thresholds: RecommendationThresholds
    messages: Dict[str, str]
    levels: list[RecommendationLevel] = Field(
        default_factory=lambda: list(RecommendationLevel), min_length=1
    )


class SimulationSettings(BaseModel):
    tick_interval_seconds: float = Field(1.0, gt=0)
    max_catch_up_ticks: int = Field(10, ge=1)
    random_seed: int = 1234
    derived_metrics_source: Literal["current", "lagged"] = "current"
    mass_casualty_event: str = "mass_casualty"


@dataclass
class ConfigBundle:
    parameters: ParametersConfig
    recommendations: RecommendationsConfig
    simulation: SimulationSettings

    def hash(self) -> str:
        hasher = hashlib.sha256()
        for model in (self.parameters, self.recommendations, self.simulation):
            payload = json.dumps(model.model_dump(mode="json"), sort_keys=True)
            hasher.update(payload.encode("utf-8"))
        return hasher.hexdigest()


def _load_json(path: Path) -> Dict:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _config_dir(config_dir: Optional[Path]) -> Path:
    if config_dir is not None:
        return Path(config_dir)
    override = os.getenv(CONFIG_DIR_ENV)
    return Path(override) if override else CONFIG_DIR


@lru_cache(maxsize=4)
def load_config_bundle(config_dir: Optional[Path] = None) -> ConfigBundle:
    directory = _config_dir(config_dir)
    parameters = ParametersConfig.model_validate(
        _load_json(directory / "parameters_config.json")
    )
    recommendations = RecommendationsConfig.model_validate(
        _load_json(directory / "recommendations_config.json")
    )
    simulation = SimulationSettings.model_validate(
        _load_json(directory / "simulation_config.json")
    )
    return ConfigBundle(
        parameters=parameters,
        recommendations=recommendations,
        simulation=simulation,
    )


def clamp_value(value: float, bound: ParameterBound) -> int:
    """Clamp ``value`` into ``bound`` and snap it down onto the step grid."""
    clamped = min(max(float(value), bound.min), bound.max)
    steps = math.floor((clamped - bound.min) / bound.step)
    return int(bound.min + steps * bound.step)


def clamp_parameters(
    values: Mapping[str, float],
    bounds: Mapping[str, ParameterBound],
) -> HospitalParameters:
    clamped = {}
    for name, value in values.items():
        bound = bounds.get(name)
        clamped[name] = clamp_value(value, bound) if bound is not None else value
    total_beds = clamped.get("total_beds", HospitalParameters.model_fields["total_beds"].default)
    if "initial_occupied_beds" in clamped:
        clamped["initial_occupied_beds"] = min(clamped["initial_occupied_beds"], total_beds)
    return HospitalParameters.model_validate(clamped)


def rng(seed: int | None) -> np.random.Generator:
    return np.random.default_rng(seed)


def configure_logging(level: str | None = None) -> None:
    level_name = (level or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)


__all__ = [
    "RandomSource",
    "ParameterBound",
    "HospitalParameters",
    "ParametersConfig",
    "RecommendationThresholds",
    "RecommendationsConfig",
    "SimulationSettings",
    "ConfigBundle",
    "load_config_bundle",
    "clamp_value",
    "clamp_parameters",
    "rng",
    "configure_logging",
]
