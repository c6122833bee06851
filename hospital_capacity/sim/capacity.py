"""Capacity, staffing and occupancy calculations."""
from __future__ import annotations

import math

from .states import PerformanceMetrics, SeverityMix, StaffUtilization

PATIENTS_PER_DOCTOR = 5
PATIENTS_PER_NURSE = 2

SEVERITY_SHARES = {"mild": 0.5, "moderate": 0.3, "severe": 0.2}


def admission_capacity(
    doctors: int,
    nurses: int,
    waiting_patients: int,
    total_beds: int,
    occupied_beds: int,
) -> int:
    """Patients that can be admitted this hour.

    Limited by the scarcer staff group, the queue and the free beds.
    """
    available_staff = min(doctors, nurses)
    free_beds = total_beds - occupied_beds
    return max(0, min(available_staff, waiting_patients, free_beds))


def severity_mix(occupied_beds: int) -> SeverityMix:
    return SeverityMix(
        mild=math.floor(occupied_beds * SEVERITY_SHARES["mild"]),
        moderate=math.floor(occupied_beds * SEVERITY_SHARES["moderate"]),
        severe=math.floor(occupied_beds * SEVERITY_SHARES["severe"]),
    )


def staff_utilization(occupied_beds: int, doctors: int, nurses: int) -> StaffUtilization:
    return StaffUtilization(
        doctors=min(1.0, occupied_beds / max(doctors * PATIENTS_PER_DOCTOR, 1)),
        nurses=min(1.0, occupied_beds / max(nurses * PATIENTS_PER_NURSE, 1)),
    )


def performance_metrics(
    occupied_beds: int,
    total_beds: int,
    doctors: int,
    nurses: int,
) -> PerformanceMetrics:
    return PerformanceMetrics(
        occupancy_rate=occupied_beds / max(total_beds, 1),
        staff_to_patient_ratio=(doctors + nurses) / max(occupied_beds, 1),
    )


__all__ = [
    "PATIENTS_PER_DOCTOR",
    "PATIENTS_PER_NURSE",
    "admission_capacity",
    "severity_mix",
    "staff_utilization",
    "performance_metrics",
]
