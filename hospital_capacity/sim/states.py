"""Core state dataclasses for the hospital capacity simulation."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List

import numpy as np


class RecommendationLevel(str, Enum):
    """Colour coding for advisories, by position in the ordered list."""

    CRITICAL = "critical"  # red
    WARNING = "warning"  # amber
    ADVISORY = "advisory"  # green


@dataclass
class SeverityMix:
    mild: int = 0
    moderate: int = 0
    severe: int = 0


@dataclass
class StaffUtilization:
    doctors: float = 0.0
    nurses: float = 0.0


@dataclass
class PerformanceMetrics:
    occupancy_rate: float = 0.0
    staff_to_patient_ratio: float = 0.0


@dataclass
class HistoryRecord:
    """One row of the time series, appended each tick."""

    hour: int
    occupied_beds: int
    waiting_patients: int
    treated_patients_cumulative: int
    discharged_patients_cumulative: int

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class TickSummary:
    """Counts produced by the most recent tick."""

    new_patients: int = 0
    admitted: int = 0
    discharged: int = 0


@dataclass
class SimulationState:
    """Snapshot of hospital conditions, replaced after every tick."""

    total_beds: int
    doctors: int
    nurses: int
    patient_influx_rate: float
    avg_treatment_days: float
    hour: int = 0
    occupied_beds: int = 0
    waiting_patients: int = 0
    treated_patients_cumulative: int = 0
    discharged_patients_cumulative: int = 0
    active_stays: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=int))
    severity_mix: SeverityMix = field(default_factory=SeverityMix)
    staff_utilization: StaffUtilization = field(default_factory=StaffUtilization)
    performance_metrics: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    recommendations: List[str] = field(default_factory=list)
    history: List[HistoryRecord] = field(default_factory=list)
    last_tick: TickSummary = field(default_factory=TickSummary)

    def copy(self) -> "SimulationState":
        return SimulationState(
            total_beds=self.total_beds,
            doctors=self.doctors,
            nurses=self.nurses,
            patient_influx_rate=self.patient_influx_rate,
            avg_treatment_days=self.avg_treatment_days,
            hour=self.hour,
            occupied_beds=self.occupied_beds,
            waiting_patients=self.waiting_patients,
            treated_patients_cumulative=self.treated_patients_cumulative,
            discharged_patients_cumulative=self.discharged_patients_cumulative,
            active_stays=self.active_stays.copy(),
            severity_mix=SeverityMix(**asdict(self.severity_mix)),
            staff_utilization=StaffUtilization(**asdict(self.staff_utilization)),
            performance_metrics=PerformanceMetrics(**asdict(self.performance_metrics)),
            recommendations=list(self.recommendations),
            history=list(self.history),
            last_tick=TickSummary(**asdict(self.last_tick)),
        )

    @property
    def available_beds(self) -> int:
        return self.total_beds - self.occupied_beds

    @property
    def active_patients(self) -> int:
        return int(self.active_stays.size)


__all__ = [
    "RecommendationLevel",
    "SeverityMix",
    "StaffUtilization",
    "PerformanceMetrics",
    "HistoryRecord",
    "TickSummary",
    "SimulationState",
]
