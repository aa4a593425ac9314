"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.coverage import CoverageRecord, GapRecord, OutfitCombinationResult, ScoringInstruction
from models.wardrobe_item import Scenario, WardrobeItem, from_raw_metadata, scenario_from_raw

__all__ = [
    "CoverageRecord",
    "GapRecord",
    "OutfitCombinationResult",
    "Scenario",
    "ScoringInstruction",
    "WardrobeItem",
    "from_raw_metadata",
    "scenario_from_raw",
]
