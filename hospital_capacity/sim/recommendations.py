"""Advisory rules evaluated after every tick."""
from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from .states import PerformanceMetrics, RecommendationLevel
from .utils import RecommendationsConfig, RecommendationThresholds, load_config_bundle

Rule = Callable[[PerformanceMetrics, int, int, RecommendationThresholds], bool]

# Evaluation order is priority order.
RULES: List[Tuple[str, Rule]] = [
    (
        "high_occupancy",
        lambda m, waiting, beds, t: m.occupancy_rate > t.high_occupancy_rate,
    ),
    (
        "low_staff_ratio",
        lambda m, waiting, beds, t: m.staff_to_patient_ratio < t.low_staff_ratio,
    ),
    (
        "long_wait",
        lambda m, waiting, beds, t: waiting > beds * t.long_wait_bed_fraction,
    ),
    (
        "overstaffing",
        lambda m, waiting, beds, t: m.staff_to_patient_ratio > t.overstaffing_ratio,
    ),
    (
        "low_occupancy_high_staff",
        lambda m, waiting, beds, t: m.occupancy_rate < t.low_occupancy_rate
        and m.staff_to_patient_ratio > t.low_occupancy_staff_ratio,
    ),
]


def build_recommendations(
    metrics: PerformanceMetrics,
    waiting_patients: int,
    total_beds: int,
    recommendations_cfg: RecommendationsConfig | None = None,
) -> List[str]:
    cfg = recommendations_cfg or load_config_bundle().recommendations
    return [
        cfg.messages[key]
        for key, rule in RULES
        if rule(metrics, waiting_patients, total_beds, cfg.thresholds)
    ]


def recommendation_level(
    index: int,
    levels: List[RecommendationLevel] | None = None,
) -> RecommendationLevel:
    levels = levels or list(RecommendationLevel)
    return RecommendationLevel(levels[min(index, len(levels) - 1)])


def levelled_recommendations(
    recommendations: List[str],
    levels: List[RecommendationLevel] | None = None,
) -> List[Dict[str, str]]:
    return [
        {"message": message, "level": recommendation_level(index, levels).value}
        for index, message in enumerate(recommendations)
    ]


__all__ = [
    "RULES",
    "build_recommendations",
    "recommendation_level",
    "levelled_recommendations",
]
