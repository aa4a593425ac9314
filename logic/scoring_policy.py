"""Mandatory scores derived from gap analysis.

Scores here are final: no qualitative signal (style, quality, duplicates
outside :func:`decide_item_score`) may move them. Two framings exist, one keyed
on gap type and one on coverage percentage; both are kept as separate
functions because prompt text presents them side by side.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from logic.coverage_classifier import GAP_TYPE_RANK
from models.coverage import ALL_SCENARIOS, CoverageRecord, GapRecord, ScoringInstruction
from models.taxonomy import CONSERVATIVE_GOAL_KEYWORDS, CONSERVATIVE_GOALS

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 5

STANDARD_GAP_TYPE_SCORES: Dict[str, int] = {
    "critical": 10,
    "improvement": 9,
    "expansion": 8,
    "satisfied": 6,
    "oversaturated": 3,
}

CONSERVATIVE_GAP_TYPE_SCORES: Dict[str, int] = {
    "critical": 10,
    "improvement": 9,
    "expansion": 6,
    "satisfied": 4,
    "oversaturated": 2,
}

# (upper bound inclusive, label, standard score, conservative score); anything above 100 is oversaturated.
PERCENT_BANDS: Tuple[Tuple[float, str, int, int], ...] = (
    (20.0, "0-20%", 10, 10),
    (50.0, "21-50%", 9, 9),
    (80.0, "51-80%", 8, 6),
    (100.0, "81-100%", 6, 4),
)
OVERSATURATED_PERCENT_LABEL = ">100%"
OVERSATURATED_PERCENT_SCORES = (3, 2)

PERCENT_BAND_MEANINGS = {
    "0-20%": "critical gap",
    "21-50%": "improvement needed",
    "51-80%": "expansion opportunity",
    "81-100%": "satisfied",
    ">100%": "oversaturated",
}


def has_conservative_goals(user_goals: Optional[Iterable[str]]) -> bool:
    """True when the user's goals call for minimalist, budget-aware scoring."""

    for goal in user_goals or []:
        text = str(goal).strip().lower()
        if text in CONSERVATIVE_GOALS:
            return True
        if any(keyword in text for keyword in CONSERVATIVE_GOAL_KEYWORDS):
            return True
    return False


def gap_type_table(conservative: bool = False) -> Dict[str, int]:
    return dict(CONSERVATIVE_GAP_TYPE_SCORES if conservative else STANDARD_GAP_TYPE_SCORES)


def coverage_percent_table(conservative: bool = False) -> List[Tuple[str, int]]:
    index = 3 if conservative else 2
    rows = [(band[1], band[index]) for band in PERCENT_BANDS]
    rows.append((OVERSATURATED_PERCENT_LABEL, OVERSATURATED_PERCENT_SCORES[1 if conservative else 0]))
    return rows


def score_for_gap_type(gap_type: str, conservative: bool = False) -> int:
    table = CONSERVATIVE_GAP_TYPE_SCORES if conservative else STANDARD_GAP_TYPE_SCORES
    key = str(gap_type).strip().lower()
    if key not in table:
        raise ValueError(f"Unknown gap type '{gap_type}'. Allowed: {list(table)}")
    return table[key]


def score_for_coverage_percent(coverage_percent: float, conservative: bool = False) -> int:
    percent = max(0.0, float(coverage_percent))
    for upper_bound, _label, standard, constrained in PERCENT_BANDS:
        if percent <= upper_bound:
            return constrained if conservative else standard
    standard, constrained = OVERSATURATED_PERCENT_SCORES
    return constrained if conservative else standard


def resolve_score(gap_type_or_percent: Union[str, int, float], conservative: bool = False) -> int:
    """Dispatch to the gap-type table for strings and the percentage table for numbers."""

    if isinstance(gap_type_or_percent, str):
        return score_for_gap_type(gap_type_or_percent, conservative)
    if isinstance(gap_type_or_percent, bool):
        raise ValueError("Coverage percent must be numeric, got a boolean")
    return score_for_coverage_percent(gap_type_or_percent, conservative)


def _percent_band_label(coverage_percent: float) -> str:
    for upper_bound, label, _standard, _constrained in PERCENT_BANDS:
        if coverage_percent <= upper_bound:
            return label
    return OVERSATURATED_PERCENT_LABEL


def build_scoring_instruction(gap: GapRecord, conservative: bool = False) -> ScoringInstruction:
    """Mandatory score and its rationale for one gap.

    Outerwear gaps use the gap-type framing; regular gaps use the coverage
    percentage framing.
    """

    if gap.is_outerwear_gap and gap.gap_type:
        score = score_for_gap_type(gap.gap_type, conservative)
        rationale = (
            f"{gap.label}: gap type {gap.gap_type.upper()} with {gap.current_items} items "
            f"(min {gap.target_min}, ideal {gap.target_ideal}, max {gap.target_max}). "
            f"Final score MUST be {score}."
        )
        return ScoringInstruction(mandatory_score=score, rationale_text=rationale, framing="gap_type")

    percent = gap.coverage_percent or 0.0
    score = score_for_coverage_percent(percent, conservative)
    band = _percent_band_label(percent)
    rationale = (
        f"{gap.label}: coverage {percent:.1f}% falls in the {band} band "
        f"({PERCENT_BAND_MEANINGS[band]}). Final score MUST be {score}."
    )
    return ScoringInstruction(mandatory_score=score, rationale_text=rationale, framing="coverage_percent")


@dataclass(frozen=True)
class ItemScoreDecision:
    """Outcome of scoring one candidate item against its wardrobe coverage."""

    score: int
    reason: str
    gap_type: Optional[str] = None
    relevant_coverage: List[CoverageRecord] = field(default_factory=list)
    duplicate_count: int = 0


def _matches_scenario(record: CoverageRecord, suitable: Sequence[str]) -> bool:
    name = (record.scenario_name or "").lower()
    if ALL_SCENARIOS.lower() in name:
        return True
    return any(scenario.lower() in name or (name and name in scenario.lower()) for scenario in suitable)


def select_relevant_coverage(
    coverage: Sequence[CoverageRecord], suitable_scenarios: Optional[Sequence[str]] = None
) -> List[CoverageRecord]:
    """Coverage for the suitable scenarios, falling back to everything when none match."""

    if not suitable_scenarios:
        return list(coverage)
    relevant = [record for record in coverage if _matches_scenario(record, suitable_scenarios)]
    if not relevant:
        logger.debug("No coverage matched scenarios %s; using all coverage", list(suitable_scenarios))
        return list(coverage)
    return relevant


def most_urgent_gap_type(coverage: Iterable[CoverageRecord]) -> Optional[str]:
    ranked = [record.gap_type for record in coverage if record.gap_type in GAP_TYPE_RANK]
    if not ranked:
        return None
    return min(ranked, key=lambda gap_type: GAP_TYPE_RANK[gap_type])


def decide_item_score(
    coverage: Optional[Sequence[CoverageRecord]],
    suitable_scenarios: Optional[Sequence[str]] = None,
    conservative: bool = False,
    duplicate_count: int = 0,
    duplicate_items: Optional[Sequence[str]] = None,
) -> ItemScoreDecision:
    """Score a candidate item; duplicates override every coverage signal."""

    if duplicate_count > 0:
        names = list(duplicate_items or [])
        if duplicate_count >= 2:
            reason = (
                f"You already have {duplicate_count} very similar items ({', '.join(names)}). "
                "Adding this would create excessive redundancy in your wardrobe."
            )
            score = 1
        else:
            similar = names[0] if names else "a very similar item"
            reason = f'You already have a very similar item: "{similar}". Consider if you really need another.'
            score = 2
        return ItemScoreDecision(score=score, reason=reason, gap_type="duplicate", duplicate_count=duplicate_count)

    if not coverage:
        return ItemScoreDecision(score=NEUTRAL_SCORE, reason="No coverage data available for analysis.")

    relevant = select_relevant_coverage(coverage, suitable_scenarios)
    gap_type = most_urgent_gap_type(relevant)
    if gap_type is None:
        percents = [record.coverage_percent for record in relevant if record.coverage_percent is not None]
        if not percents:
            return ItemScoreDecision(
                score=NEUTRAL_SCORE,
                reason="Coverage data carries no gap classification.",
                relevant_coverage=relevant,
            )
        lowest = min(percents)
        score = score_for_coverage_percent(lowest, conservative)
        return ItemScoreDecision(
            score=score,
            reason=f"Lowest relevant coverage is {lowest:.1f}%, which scores {score}.",
            relevant_coverage=relevant,
        )

    score = score_for_gap_type(gap_type, conservative)
    policy = "conservative" if conservative else "standard"
    logger.info("Scored item from gap type %s using %s policy: %s", gap_type, policy, score)
    return ItemScoreDecision(
        score=score,
        reason=f"Most urgent coverage gap is {gap_type}; {policy} scoring gives {score}.",
        gap_type=gap_type,
        relevant_coverage=relevant,
    )


__all__ = [
    "CONSERVATIVE_GAP_TYPE_SCORES",
    "ItemScoreDecision",
    "NEUTRAL_SCORE",
    "STANDARD_GAP_TYPE_SCORES",
    "build_scoring_instruction",
    "coverage_percent_table",
    "decide_item_score",
    "gap_type_table",
    "has_conservative_goals",
    "most_urgent_gap_type",
    "resolve_score",
    "score_for_coverage_percent",
    "score_for_gap_type",
    "select_relevant_coverage",
]
