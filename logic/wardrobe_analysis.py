"""Lightweight per-scenario wardrobe summary used when no coverage data exists."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from logic.duplicate_detection import DuplicateAnalysis, detect_duplicates
from logic.outfit_combinations import calculate_outfit_combinations, item_fits_season
from logic.validation import coerce_form_data
from models.taxonomy import SEASONS
from models.wardrobe_item import Scenario, WardrobeItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioSummary:
    name: str
    frequency: Optional[str]
    season: str
    complete_outfits: int
    coverage_level: int
    bottleneck: Optional[str]
    item_counts: dict
    status: str


@dataclass
class WardrobeSummary:
    duplicate_check: DuplicateAnalysis
    scenario_coverage: List[ScenarioSummary] = field(default_factory=list)
    gap_summary: str = ""


def outfit_status(complete_outfits: int, coverage_level: int) -> str:
    if complete_outfits == 0:
        return "CRITICAL GAP"
    if coverage_level <= 2:
        return "SIGNIFICANT GAP"
    if coverage_level <= 3:
        return "BASIC COVERAGE"
    return "GOOD COVERAGE"


def summarize_gaps(coverage: Sequence[ScenarioSummary]) -> str:
    for summary in coverage:
        if summary.complete_outfits == 0:
            missing = (summary.bottleneck or "unknown").replace("_", " ")
            return f"CRITICAL: {summary.name} has 0 complete outfits (missing: {missing})"
    for summary in coverage:
        if summary.coverage_level <= 2:
            return f"SIGNIFICANT: {summary.name} has only {summary.complete_outfits} outfits"
    return "No major gaps detected"


def analyze_wardrobe_for_prompt(
    form_data: Any, items: Sequence[WardrobeItem], scenarios: Sequence[Scenario]
) -> WardrobeSummary:
    """Duplicate check plus outfit status for each scenario in the item's first season."""

    form = coerce_form_data(form_data)
    seasons = form.seasons or list(SEASONS)
    season_items = [item for item in items if any(item_fits_season(item, season) for season in seasons)]

    candidate = {"category": form.category, "subcategory": form.subcategory, "color": form.color}
    duplicates = detect_duplicates(candidate, season_items)

    coverage: List[ScenarioSummary] = []
    for scenario in scenarios:
        result = calculate_outfit_combinations(season_items, scenario, seasons[0])
        coverage.append(
            ScenarioSummary(
                name=scenario.name,
                frequency=scenario.frequency,
                season=seasons[0],
                complete_outfits=result.total_outfits,
                coverage_level=result.coverage_level,
                bottleneck=result.bottleneck,
                item_counts=result.item_counts,
                status=outfit_status(result.total_outfits, result.coverage_level),
            )
        )

    summary = WardrobeSummary(duplicate_check=duplicates, scenario_coverage=coverage)
    if coverage:
        summary.gap_summary = summarize_gaps(coverage)
    logger.debug("Wardrobe summary over %s items and %s scenarios", len(season_items), len(coverage))
    return summary


def render_wardrobe_summary(summary: WardrobeSummary) -> str:
    duplicates = summary.duplicate_check
    lines = ["", "=== WARDROBE ANALYSIS ===", ""]
    if duplicates.found:
        lines.append(f"DUPLICATE CHECK: {duplicates.count} identical items found")
        lines.append(f"- Found: {', '.join(duplicates.items)}")
    else:
        lines.append("DUPLICATE CHECK: No exact duplicates found")

    if summary.scenario_coverage:
        lines.append("")
        lines.append("SCENARIO COVERAGE:")
        for scenario in summary.scenario_coverage:
            counts = scenario.item_counts
            lines.append(
                f"{scenario.name} [{scenario.frequency or 'unknown'}]: "
                f"{scenario.complete_outfits} complete outfits ({scenario.status})"
            )
            lines.append(
                f"- Available: {counts.get('tops', 0)} tops, {counts.get('bottoms', 0)} bottoms, "
                f"{counts.get('dresses', 0)} dresses, {counts.get('footwear', 0)} footwear"
            )
            if scenario.bottleneck:
                lines.append(f"- Bottleneck: {scenario.bottleneck}")

    lines.append("")
    lines.append(f"GAP ANALYSIS: {summary.gap_summary or 'No scenarios to analyse'}")
    return "\n".join(lines)


__all__ = [
    "ScenarioSummary",
    "WardrobeSummary",
    "analyze_wardrobe_for_prompt",
    "outfit_status",
    "render_wardrobe_summary",
    "summarize_gaps",
]
