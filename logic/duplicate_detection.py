"""Exact-match duplicate detection for a candidate wardrobe item."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from models.taxonomy import normalize_category, normalize_text
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

# Share of a subcategory, after adding the candidate, at which a colour dominates.
VARIETY_RISK_THRESHOLD = 0.5

DUPLICATE_SCORE_BAND = (1, 3)
GAP_FILLING_SCORE_BAND = (6, 8)

ItemLike = Union[WardrobeItem, Mapping[str, Any]]


@dataclass(frozen=True)
class CandidateAttributes:
    category: Optional[str]
    subcategory: str
    color: str
    silhouette: Optional[str] = None
    style: Optional[str] = None
    label: str = ""


@dataclass(frozen=True)
class VarietyImpact:
    color: str
    same_color_after_addition: int
    subcategory_total_after_addition: int
    percentage: int
    would_dominate: bool
    message: str


@dataclass(frozen=True)
class DuplicateAnalysis:
    found: bool
    count: int
    items: List[str]
    severity: str
    variety_impact: VarietyImpact
    recommended_score_band: Optional[Tuple[int, int]]
    recommendation: str
    matched: List[CandidateAttributes] = field(default_factory=list)


def _attributes(item: ItemLike) -> CandidateAttributes:
    if isinstance(item, WardrobeItem):
        return CandidateAttributes(
            category=item.category,
            subcategory=normalize_text(item.subcategory),
            color=normalize_text(item.color),
            silhouette=item.silhouette,
            style=item.style,
            label=item.display_name,
        )
    subcategory = normalize_text(item.get("subcategory") or item.get("sub_category"))
    color = normalize_text(item.get("color"))
    category = normalize_category(item.get("category")) or normalize_text(item.get("category")) or None
    label = item.get("name") or " ".join(part for part in (color, subcategory) if part)
    return CandidateAttributes(
        category=category,
        subcategory=subcategory,
        color=color,
        silhouette=item.get("silhouette"),
        style=item.get("style"),
        label=str(label),
    )


def duplicate_severity(count: int) -> str:
    if count <= 0:
        return "NONE"
    if count == 1:
        return "MODERATE"
    if count == 2:
        return "HIGH"
    return "EXCESSIVE"


def build_duplicate_index(items: Iterable[CandidateAttributes]) -> Dict[Tuple[str, str], List[CandidateAttributes]]:
    index: Dict[Tuple[str, str], List[CandidateAttributes]] = defaultdict(list)
    for item in items:
        index[(item.subcategory, item.color)].append(item)
    return index


def analyze_variety_impact(candidate: CandidateAttributes, context: List[CandidateAttributes]) -> VarietyImpact:
    """How concentrated the candidate's colour would be within its subcategory."""

    same_subcategory = [item for item in context if item.subcategory == candidate.subcategory]
    same_color = sum(1 for item in same_subcategory if item.color == candidate.color)
    after_addition = same_color + 1
    total = len(same_subcategory) + 1
    share = after_addition / total
    would_dominate = bool(same_subcategory) and share >= VARIETY_RISK_THRESHOLD
    percentage = round(share * 100)
    noun = candidate.subcategory or "items"
    if would_dominate:
        message = f"{percentage}% of your {noun} would be {candidate.color or 'the same color'}"
    else:
        message = "Good variety maintained"
    return VarietyImpact(
        color=candidate.color,
        same_color_after_addition=after_addition,
        subcategory_total_after_addition=total,
        percentage=percentage,
        would_dominate=would_dominate,
        message=message,
    )


def _recommendation(severity: str, count: int, impact: VarietyImpact, fills_gap: bool) -> str:
    if severity == "EXCESSIVE":
        return f"SKIP - you already have {count} very similar items"
    if severity == "HIGH":
        return f"SKIP - {count} similar items already cover this look"
    if severity == "MODERATE":
        return "CONSIDER - you already own a very similar item"
    if impact.would_dominate:
        return f"CONSIDER - {impact.message}"
    if fills_gap:
        return "RECOMMEND - no duplicates and it fills a coverage gap"
    return "NEUTRAL - no duplicates found"


def detect_duplicates(
    candidate: ItemLike, context_items: Iterable[ItemLike], fills_gap: bool = False
) -> DuplicateAnalysis:
    """Flag context items matching the candidate on both subcategory and colour.

    A candidate with a category only matches context items of that category.
    """

    target = _attributes(candidate)
    context = [_attributes(item) for item in context_items]
    if target.category:
        context = [item for item in context if not item.category or item.category == target.category]

    index = build_duplicate_index(context)
    matches = index.get((target.subcategory, target.color), []) if target.subcategory and target.color else []
    count = len(matches)
    severity = duplicate_severity(count)
    impact = analyze_variety_impact(target, context)

    if count:
        band: Optional[Tuple[int, int]] = DUPLICATE_SCORE_BAND
    elif fills_gap:
        band = GAP_FILLING_SCORE_BAND
    else:
        band = None

    logger.info("Duplicate check: %s matches (%s), dominant color=%s", count, severity, impact.would_dominate)
    return DuplicateAnalysis(
        found=count > 0,
        count=count,
        items=[item.label for item in matches],
        severity=severity,
        variety_impact=impact,
        recommended_score_band=band,
        recommendation=_recommendation(severity, count, impact, fills_gap),
        matched=list(matches),
    )


__all__ = [
    "CandidateAttributes",
    "DuplicateAnalysis",
    "VARIETY_RISK_THRESHOLD",
    "VarietyImpact",
    "analyze_variety_impact",
    "build_duplicate_index",
    "detect_duplicates",
    "duplicate_severity",
]
