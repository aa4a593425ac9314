"""Count complete outfits per scenario and season.

An outfit is a top + bottom, a dress or a jumpsuit, always worn with footwear.
The counts feed the coverage records that gap analysis classifies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from advisor_app.config import DEFAULT_OUTFIT_TARGET_IDEAL
from logic.coverage_classifier import (
    calculate_coverage_percent,
    classify_outerwear,
    seasonal_outerwear_targets,
)
from models.coverage import (
    ALL_SCENARIOS,
    BOTTLENECK_BOTTOMS,
    BOTTLENECK_FOOTWEAR,
    BOTTLENECK_TOPS,
    CoverageRecord,
    OutfitCombinationResult,
)
from models.taxonomy import ALL_SEASON, SEASONS
from models.wardrobe_item import Scenario, WardrobeItem

logger = logging.getLogger(__name__)

# (minimum outfits, level); highest matching threshold wins.
COVERAGE_LEVEL_STEPS: Tuple[Tuple[int, int], ...] = ((15, 5), (10, 4), (6, 3), (3, 2), (1, 1))

COVERAGE_LEVEL_DESCRIPTIONS: Dict[int, str] = {
    0: "No complete outfits possible - major gap",
    1: "Very limited options (1-2 outfits) - significant gap",
    2: "Basic coverage (3-5 outfits) - room for improvement",
    3: "Good variety (6-9 outfits) - adequate options",
    4: "Strong coverage (10-14 outfits) - excellent variety",
    5: "Outstanding coverage (15+ outfits) - exceptional options",
}


@dataclass(frozen=True)
class SuitabilityRule:
    """Heuristic mapping from a scenario family to the garments that suit it.

    ``subcategories`` must match exactly, ``style_keywords`` match as substrings
    of the item style and ``terms`` match as substrings of either.
    """

    family: str
    scenario_keywords: Tuple[str, ...]
    subcategories: FrozenSet[str] = frozenset()
    style_keywords: Tuple[str, ...] = ()
    terms: Tuple[str, ...] = ()

    def matches_scenario(self, scenario_name: str) -> bool:
        return any(keyword in scenario_name for keyword in self.scenario_keywords)

    def allows(self, subcategory: str, style: str) -> bool:
        if subcategory in self.subcategories:
            return True
        if any(keyword in style for keyword in self.style_keywords):
            return True
        return any(term in subcategory or term in style for term in self.terms)


# Checked in order; exercise comes first so that "workout" is not read as "work".
SCENARIO_SUITABILITY: Tuple[SuitabilityRule, ...] = (
    SuitabilityRule(
        family="exercise",
        scenario_keywords=("exercise", "gym", "workout"),
        terms=("activewear", "sportswear", "sneakers", "athletic"),
    ),
    SuitabilityRule(
        family="office",
        scenario_keywords=("office", "work", "professional"),
        subcategories=frozenset(
            {"blazer", "shirt", "blouse", "dress shirt", "trousers", "dress pants", "dress", "heels", "dress shoes"}
        ),
        style_keywords=("formal", "business"),
    ),
    SuitabilityRule(
        family="casual",
        scenario_keywords=("casual", "weekend"),
        subcategories=frozenset({"t-shirt", "jeans", "shorts", "sneakers", "casual dress", "sandals"}),
        style_keywords=("casual",),
    ),
    SuitabilityRule(
        family="evening",
        scenario_keywords=("dinner", "evening", "date"),
        subcategories=frozenset({"dress", "blouse", "nice shirt", "heels", "dress shoes"}),
        style_keywords=("elegant", "dressy"),
    ),
)

VERSATILE_SUBCATEGORIES = frozenset({"jeans", "shirt", "sweater", "cardigan", "dress"})


def suitability_rule_for(scenario_name: str) -> Optional[SuitabilityRule]:
    name = scenario_name.lower()
    for rule in SCENARIO_SUITABILITY:
        if rule.matches_scenario(name):
            return rule
    return None


def is_item_suitable_for_scenario(item: WardrobeItem, scenario: Scenario) -> bool:
    """Best-effort keyword guess at whether ``item`` can be worn for ``scenario``.

    Items explicitly tagged with the scenario name are always suitable.
    """

    if scenario.name in item.scenarios:
        return True
    subcategory = (item.subcategory or "").lower()
    style = (item.style or "").lower()
    rule = suitability_rule_for(scenario.name)
    if rule is None:
        return subcategory in VERSATILE_SUBCATEGORIES
    return rule.allows(subcategory, style)


def item_fits_season(item: WardrobeItem, season: str) -> bool:
    if not item.season or ALL_SEASON in item.season:
        return True
    return season in item.season


def coverage_level_for(total_outfits: int) -> int:
    for minimum, level in COVERAGE_LEVEL_STEPS:
        if total_outfits >= minimum:
            return level
    return 0


def describe_coverage_level(level: int) -> str:
    return COVERAGE_LEVEL_DESCRIPTIONS.get(level, "Unknown coverage level")


def _partition(items: Iterable[WardrobeItem]) -> Dict[str, List[WardrobeItem]]:
    groups: Dict[str, List[WardrobeItem]] = {
        "tops": [],
        "bottoms": [],
        "dresses": [],
        "jumpsuits": [],
        "footwear": [],
        "outerwear": [],
    }
    for item in items:
        if item.category == "top":
            groups["tops"].append(item)
        elif item.category == "bottom":
            groups["bottoms"].append(item)
        elif item.category == "one_piece" and item.subcategory == "dress":
            groups["dresses"].append(item)
        elif item.category == "one_piece" and item.subcategory == "jumpsuit":
            groups["jumpsuits"].append(item)
        elif item.category == "footwear":
            groups["footwear"].append(item)
        elif item.category == "outerwear":
            groups["outerwear"].append(item)
    return groups


def _find_bottleneck(counts: Dict[str, int]) -> Tuple[Optional[str], Optional[str]]:
    one_pieces = counts["dresses"] + counts["jumpsuits"]
    has_garments = counts["tops"] + counts["bottoms"] + one_pieces > 0
    if not has_garments:
        return BOTTLENECK_TOPS, "Need tops/dresses to create complete outfits"
    if counts["footwear"] == 0:
        return BOTTLENECK_FOOTWEAR, "Adding appropriate footwear would unlock outfit combinations"
    if counts["tops"] == 0 and one_pieces == 0:
        return BOTTLENECK_TOPS, "Need tops/dresses to create complete outfits"
    if counts["bottoms"] == 0 and one_pieces == 0:
        return BOTTLENECK_BOTTOMS, "Need bottoms/dresses to create complete outfits"
    if counts["tops"] and counts["bottoms"]:
        combos = counts["tops"] * counts["bottoms"]
        if counts["bottoms"] > counts["tops"]:
            return None, f"Adding 1 more top would create {combos + counts['bottoms']} total outfits"
        return None, f"Adding 1 more bottom would create {combos + counts['tops']} total outfits"
    return None, None


def calculate_outfit_combinations(
    items: Sequence[WardrobeItem], scenario: Scenario, season: str
) -> OutfitCombinationResult:
    """Count complete outfits available for ``scenario`` in ``season``."""

    suitable = [
        item for item in items if item_fits_season(item, season) and is_item_suitable_for_scenario(item, scenario)
    ]
    groups = _partition(suitable)
    counts = {key: len(group) for key, group in groups.items()}

    breakdown = {"top_bottom_combos": 0, "dresses": 0, "jumpsuits": 0}
    if counts["footwear"] > 0:
        breakdown["top_bottom_combos"] = counts["tops"] * counts["bottoms"]
        breakdown["dresses"] = counts["dresses"]
        breakdown["jumpsuits"] = counts["jumpsuits"]
    total_outfits = sum(breakdown.values())

    bottleneck, missing = _find_bottleneck(counts)
    logger.debug(
        "Outfit combinations for %s/%s: %s outfits from %s suitable items",
        scenario.name,
        season,
        total_outfits,
        len(suitable),
    )
    return OutfitCombinationResult(
        total_outfits=total_outfits,
        outfit_breakdown=breakdown,
        coverage_level=coverage_level_for(total_outfits),
        bottleneck=bottleneck,
        item_counts=counts,
        missing_for_next_outfit=missing,
    )


def calculate_scenario_coverage(
    items: Sequence[WardrobeItem],
    scenarios: Sequence[Scenario],
    seasons: Optional[Sequence[str]] = None,
    affected_scenarios: Optional[Iterable[str]] = None,
) -> Dict[Tuple[str, str], OutfitCombinationResult]:
    """Combination results keyed by ``(scenario name, season)``.

    ``affected_scenarios`` limits the run to the named scenarios.
    """

    target_seasons = list(seasons) if seasons else list(SEASONS)
    wanted = set(affected_scenarios) if affected_scenarios is not None else None
    results: Dict[Tuple[str, str], OutfitCombinationResult] = {}
    for scenario in scenarios:
        if wanted is not None and scenario.name not in wanted:
            continue
        for season in target_seasons:
            results[(scenario.name, season)] = calculate_outfit_combinations(items, scenario, season)
    return results


def build_coverage_records(
    items: Sequence[WardrobeItem],
    scenarios: Sequence[Scenario],
    seasons: Optional[Sequence[str]] = None,
    target_ideal: int = DEFAULT_OUTFIT_TARGET_IDEAL,
) -> List[CoverageRecord]:
    """Coverage records for every scenario/season pair plus one outerwear record per season."""

    target_seasons = list(seasons) if seasons else list(SEASONS)
    records: List[CoverageRecord] = []
    frequencies = {scenario.name: scenario.frequency for scenario in scenarios}

    for (scenario_name, season), result in calculate_scenario_coverage(items, scenarios, target_seasons).items():
        records.append(
            CoverageRecord(
                season=season,
                scenario_name=scenario_name,
                current_items=result.total_outfits,
                target_ideal=target_ideal,
                coverage_percent=calculate_coverage_percent(result.total_outfits, target_ideal),
                total_outfits=result.total_outfits,
                bottleneck=result.bottleneck,
                scenario_frequency=frequencies.get(scenario_name),
            )
        )

    for season in target_seasons:
        targets = seasonal_outerwear_targets(season)
        current = sum(1 for item in items if item.category == "outerwear" and item_fits_season(item, season))
        records.append(
            CoverageRecord(
                season=season,
                scenario_name=ALL_SCENARIOS,
                category="outerwear",
                current_items=current,
                target_min=targets.min,
                target_ideal=targets.ideal,
                target_max=targets.max,
                coverage_percent=calculate_coverage_percent(current, targets.ideal),
                gap_type=classify_outerwear(current, targets.min, targets.ideal, targets.max),
            )
        )

    logger.info("Built %s coverage records for %s scenarios", len(records), len(scenarios))
    return records


__all__ = [
    "COVERAGE_LEVEL_DESCRIPTIONS",
    "SCENARIO_SUITABILITY",
    "SuitabilityRule",
    "VERSATILE_SUBCATEGORIES",
    "build_coverage_records",
    "calculate_outfit_combinations",
    "calculate_scenario_coverage",
    "coverage_level_for",
    "describe_coverage_level",
    "is_item_suitable_for_scenario",
    "item_fits_season",
    "suitability_rule_for",
]
