"""Identify wardrobe gaps a candidate item could fill.

Outerwear is assessed per season against min/ideal/max targets because a coat
serves every scenario at once. Every other item is assessed per scenario and
season against the coverage threshold.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from logic.coverage_classifier import (
    COVERAGE_THRESHOLD,
    calculate_coverage_percent,
    classify_outerwear,
    coverage_severity,
    has_coverage_gap,
    is_actionable_gap_type,
    seasonal_outerwear_targets,
)
from logic.scoring_policy import score_for_coverage_percent, score_for_gap_type
from logic.validation import FormDataInput, coerce_coverage_entries, coerce_form_data
from models.coverage import ALL_SCENARIOS, CoverageRecord, GapRecord
from models.taxonomy import frequency_weight

logger = logging.getLogger(__name__)

# Scenario name -> garment keywords that never suit it.
INAPPROPRIATE_SCENARIO_COMBOS: Dict[str, tuple] = {
    "light outdoor activities": ("heels", "dress shoes", "formal shoes"),
    "staying at home": ("heels", "dress shoes", "formal shoes"),
    "exercise": ("heels", "dress shoes", "formal shoes"),
    "sports": ("heels", "dress shoes", "formal shoes"),
    "hiking": ("heels", "dress shoes", "formal shoes"),
    "gym": ("heels", "dress shoes", "formal shoes"),
}

_COMBINED_SEASON_KEYS = {"spring": "spring/fall", "fall": "spring/fall"}


def is_item_appropriate_for_scenario(
    category: Optional[str], subcategory: Optional[str], scenario_name: str
) -> bool:
    """Deny-list check; scenarios without an entry accept any item."""

    forbidden = INAPPROPRIATE_SCENARIO_COMBOS.get((scenario_name or "").strip().lower())
    if not forbidden:
        return True
    category_text = (category or "").lower()
    subcategory_text = (subcategory or "").lower()
    return not any(term in subcategory_text or term in category_text for term in forbidden)


def extract_outerwear_coverage(coverage: Iterable[CoverageRecord]) -> Dict[str, CoverageRecord]:
    """Outerwear aggregates keyed by season; later entries win."""

    seasonal: Dict[str, CoverageRecord] = {}
    for record in coverage:
        if record.is_outerwear:
            seasonal[record.season] = record
    return seasonal


def _outerwear_record_for(seasonal: Dict[str, CoverageRecord], season: str) -> Optional[CoverageRecord]:
    if season in seasonal:
        return seasonal[season]
    combined = _COMBINED_SEASON_KEYS.get(season)
    return seasonal.get(combined) if combined else None


def assess_outerwear_season(record: CoverageRecord, season: str) -> GapRecord:
    """Classify one season's outerwear aggregate.

    Targets missing from the aggregate fall back to the seasonal defaults.
    """

    if record.target_min is None or record.target_ideal is None or record.target_max is None:
        fallback = seasonal_outerwear_targets(season)
        target_min, target_ideal, target_max = fallback.min, fallback.ideal, fallback.max
    else:
        target_min, target_ideal, target_max = record.target_min, record.target_ideal, record.target_max

    current = record.current_items
    gap_type = classify_outerwear(current, target_min, target_ideal, target_max)
    coverage_percent = calculate_coverage_percent(current, target_ideal)
    base_score = score_for_gap_type(gap_type)
    logger.debug(
        "%s %s outerwear: %s/%s items (%.1f%%, score %s)",
        gap_type.upper(),
        season,
        current,
        target_ideal,
        coverage_percent,
        base_score,
    )
    return GapRecord(
        season=season,
        is_outerwear_gap=True,
        current_items=current,
        coverage_percent=coverage_percent,
        category="outerwear",
        target_min=target_min,
        target_ideal=target_ideal,
        target_max=target_max,
        gap_type=gap_type,
        base_score=base_score,
        is_critical=gap_type == "critical",
        scenarios=[ALL_SCENARIOS],
    )


def _fallback_outerwear_gap(season: str) -> GapRecord:
    targets = seasonal_outerwear_targets(season)
    return GapRecord(
        season=season,
        is_outerwear_gap=True,
        current_items=0,
        coverage_percent=0.0,
        category="outerwear",
        target_min=targets.min,
        target_ideal=targets.ideal,
        target_max=targets.max,
        gap_type="critical",
        base_score=score_for_gap_type("critical"),
        is_critical=True,
        scenarios=[ALL_SCENARIOS],
    )


def analyze_outerwear_seasons(coverage: Sequence[CoverageRecord], item_seasons: Sequence[str]) -> List[GapRecord]:
    """Assess every season the item is worn in, including satisfied and oversaturated ones."""

    seasonal = extract_outerwear_coverage(coverage)
    assessments: List[GapRecord] = []
    for season in item_seasons:
        record = _outerwear_record_for(seasonal, season)
        if record is None:
            logger.info("No outerwear coverage for %s; using fallback targets", season)
            assessments.append(_fallback_outerwear_gap(season))
        else:
            assessments.append(assess_outerwear_season(record, season))
    return assessments


def _regular_gap_reason(
    record: CoverageRecord, form_data: FormDataInput, threshold: float
) -> Optional[str]:
    if not has_coverage_gap(record.coverage_percent, threshold):
        return "no gap"
    if record.season not in form_data.seasons:
        return "season mismatch"
    if not is_item_appropriate_for_scenario(form_data.category, form_data.subcategory, record.scenario_name or ""):
        return "inappropriate for scenario"
    return None


def analyze_regular_gaps(
    coverage: Sequence[CoverageRecord],
    form_data: FormDataInput,
    threshold: float = COVERAGE_THRESHOLD,
) -> List[GapRecord]:
    """Scenario/season gaps for a non-outerwear item."""

    gaps: List[GapRecord] = []
    for record in coverage:
        if record.is_outerwear or not record.scenario_name or record.scenario_name == ALL_SCENARIOS:
            continue
        reason = _regular_gap_reason(record, form_data, threshold)
        if reason:
            logger.debug("Not adding gap %s/%s (%s)", record.scenario_name, record.season, reason)
            continue
        percent = record.coverage_percent or 0.0
        gaps.append(
            GapRecord(
                season=record.season,
                is_outerwear_gap=False,
                current_items=record.current_items,
                coverage_percent=percent,
                scenario=record.scenario_name,
                frequency=record.scenario_frequency,
                category=record.category or form_data.category,
                base_score=score_for_coverage_percent(percent),
                is_critical=coverage_severity(record.current_items, percent) == "critical",
            )
        )
    return gaps


def rank_gaps(gaps: Sequence[GapRecord]) -> List[GapRecord]:
    """Lowest coverage first, then more frequent scenarios; stable otherwise."""

    return sorted(gaps, key=lambda gap: (gap.coverage_percent, -frequency_weight(gap.frequency)))


def identify_seasonal_gaps(
    coverage_data: Optional[Iterable[Any]],
    form_data: Any,
    threshold: float = COVERAGE_THRESHOLD,
) -> List[GapRecord]:
    """Gaps the candidate item described by ``form_data`` could fill.

    Missing coverage or missing seasons yields an empty list.
    """

    form = coerce_form_data(form_data)
    if not form.seasons:
        logger.info("Item has no seasons; skipping gap identification")
        return []
    coverage = coerce_coverage_entries(coverage_data)

    if form.is_outerwear:
        assessments = analyze_outerwear_seasons(coverage, form.seasons)
        gaps = [gap for gap in assessments if is_actionable_gap_type(gap.gap_type)]
        kind = "outerwear"
    else:
        gaps = analyze_regular_gaps(coverage, form, threshold)
        kind = "regular"

    ranked = rank_gaps(gaps)
    logger.info("Identified %s %s gaps across seasons %s", len(ranked), kind, form.seasons)
    return ranked


__all__ = [
    "INAPPROPRIATE_SCENARIO_COMBOS",
    "analyze_outerwear_seasons",
    "analyze_regular_gaps",
    "assess_outerwear_season",
    "extract_outerwear_coverage",
    "identify_seasonal_gaps",
    "is_item_appropriate_for_scenario",
    "rank_gaps",
]
