"""Classify coverage counts and percentages into gap categories.

Two independent policies live here. Outerwear is judged by item count against
seasonal min/ideal/max targets; every other category is judged by a single
coverage percentage against a fixed threshold.
"""

from __future__ import annotations

from typing import Dict, Optional

from advisor_app.config import DEFAULT_COVERAGE_THRESHOLD
from models.coverage import GAP_TYPES, OuterwearTargets

COVERAGE_THRESHOLD = DEFAULT_COVERAGE_THRESHOLD

SEASONAL_OUTERWEAR_TARGETS: Dict[str, OuterwearTargets] = {
    "summer": OuterwearTargets(min=1, ideal=2, max=3),
    "winter": OuterwearTargets(min=2, ideal=3, max=4),
    "spring": OuterwearTargets(min=3, ideal=4, max=5),
    "fall": OuterwearTargets(min=3, ideal=4, max=5),
    "spring/fall": OuterwearTargets(min=3, ideal=4, max=5),
    "default": OuterwearTargets(min=2, ideal=3, max=4),
}

# Lower rank is more urgent.
GAP_TYPE_RANK: Dict[str, int] = {gap_type: index for index, gap_type in enumerate(GAP_TYPES)}

ACTIONABLE_GAP_TYPES = frozenset({"critical", "improvement", "expansion"})

SEVERITY_BANDS = ((20.0, "critical"), (40.0, "high"), (80.0, "moderate"))


def seasonal_outerwear_targets(season: Optional[str]) -> OuterwearTargets:
    """Fallback outerwear targets for a season with no wardrobe data."""

    key = (season or "").strip().lower()
    return SEASONAL_OUTERWEAR_TARGETS.get(key, SEASONAL_OUTERWEAR_TARGETS["default"])


def classify_outerwear(current_items: int, target_min: int, target_ideal: int, target_max: int) -> str:
    """Return the gap type for an outerwear count.

    Zero items is always ``critical``, even when the season's minimum is zero.
    """

    if current_items <= 0:
        return "critical"
    if current_items < target_min:
        return "critical"
    if current_items < target_ideal:
        return "improvement"
    if current_items < target_max:
        return "expansion"
    if current_items == target_max:
        return "satisfied"
    return "oversaturated"


def calculate_coverage_percent(current_items: float, target_ideal: Optional[float]) -> float:
    """Coverage against the ideal count, clamped to ``[0, 100]``."""

    current = max(0.0, float(current_items or 0))
    if not target_ideal or target_ideal <= 0:
        return 100.0 if current > 0 else 0.0
    return min(100.0, current / float(target_ideal) * 100.0)


def has_coverage_gap(coverage_percent: Optional[float], threshold: float = COVERAGE_THRESHOLD) -> bool:
    if coverage_percent is None:
        return False
    return coverage_percent < threshold


def is_actionable_gap_type(gap_type: Optional[str]) -> bool:
    return gap_type in ACTIONABLE_GAP_TYPES


def coverage_severity(current_items: Optional[int], coverage_percent: Optional[float]) -> str:
    """Display severity used in prompt text only; scoring never reads it."""

    if current_items == 0:
        return "critical"
    percent = coverage_percent or 0.0
    for upper_bound, label in SEVERITY_BANDS:
        if percent < upper_bound:
            return label
    return "low"


__all__ = [
    "ACTIONABLE_GAP_TYPES",
    "COVERAGE_THRESHOLD",
    "GAP_TYPE_RANK",
    "SEASONAL_OUTERWEAR_TARGETS",
    "calculate_coverage_percent",
    "classify_outerwear",
    "coverage_severity",
    "has_coverage_gap",
    "is_actionable_gap_type",
    "seasonal_outerwear_targets",
]
