"""Decide which coverage to recalculate when the wardrobe changes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from logic.outfit_combinations import calculate_scenario_coverage
from models.coverage import OutfitCombinationResult
from models.taxonomy import ALL_SEASON, SEASONS
from models.wardrobe_item import Scenario, WardrobeItem

logger = logging.getLogger(__name__)

COVERAGE_AFFECTING_FIELDS = ("category", "subcategory", "season", "scenarios", "style")


@dataclass(frozen=True)
class RecalculationPlan:
    """Seasons and scenarios to recompute; ``scenarios`` of ``None`` means all of them."""

    seasons: List[str] = field(default_factory=lambda: list(SEASONS))
    scenarios: Optional[List[str]] = None
    required: bool = True


def _seasons_for(item: WardrobeItem) -> List[str]:
    if not item.season or ALL_SEASON in item.season:
        return list(SEASONS)
    return [season for season in SEASONS if season in item.season]


def _merge(*groups: Sequence[str]) -> List[str]:
    merged: List[str] = []
    for group in groups:
        for value in group:
            if value not in merged:
                merged.append(value)
    return merged


def item_changes_affect_coverage(old_item: WardrobeItem, new_item: WardrobeItem) -> bool:
    for name in COVERAGE_AFFECTING_FIELDS:
        old_value = getattr(old_item, name) or None
        new_value = getattr(new_item, name) or None
        if old_value != new_value:
            logger.debug("Coverage-affecting field changed: %s", name)
            return True
    return False


def plan_for_added_item(item: WardrobeItem) -> RecalculationPlan:
    return RecalculationPlan(seasons=_seasons_for(item), scenarios=list(item.scenarios) or None)


def plan_for_deleted_item(item: WardrobeItem) -> RecalculationPlan:
    return RecalculationPlan(seasons=_seasons_for(item), scenarios=list(item.scenarios) or None)


def plan_for_updated_item(old_item: WardrobeItem, new_item: WardrobeItem) -> RecalculationPlan:
    """Recalculate the union of old and new seasons and scenarios, if anything relevant changed."""

    if not item_changes_affect_coverage(old_item, new_item):
        return RecalculationPlan(seasons=[], scenarios=[], required=False)
    seasons = [season for season in SEASONS if season in _merge(_seasons_for(old_item), _seasons_for(new_item))]
    scenarios = _merge(old_item.scenarios, new_item.scenarios)
    return RecalculationPlan(seasons=seasons, scenarios=scenarios or None)


def plan_for_scenarios_updated() -> RecalculationPlan:
    return RecalculationPlan()


def recalculate(
    items: Sequence[WardrobeItem], scenarios: Sequence[Scenario], plan: RecalculationPlan
) -> Dict[Tuple[str, str], OutfitCombinationResult]:
    """Run the outfit calculator for the pairs ``plan`` names."""

    if not plan.required:
        logger.info("Item changes do not affect coverage; skipping recalculation")
        return {}
    results = calculate_scenario_coverage(items, scenarios, plan.seasons, plan.scenarios)
    logger.info(
        "Recalculated %s scenario/season pairs for seasons %s",
        len(results),
        plan.seasons,
    )
    return results


__all__ = [
    "COVERAGE_AFFECTING_FIELDS",
    "RecalculationPlan",
    "item_changes_affect_coverage",
    "plan_for_added_item",
    "plan_for_deleted_item",
    "plan_for_scenarios_updated",
    "plan_for_updated_item",
    "recalculate",
]
