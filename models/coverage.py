"""Coverage, gap and scoring records produced by the analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

GapType = Literal["critical", "improvement", "expansion", "satisfied", "oversaturated"]
Bottleneck = Literal["footwear", "tops_or_dresses", "bottoms_or_dresses"]

BOTTLENECK_FOOTWEAR: Bottleneck = "footwear"
BOTTLENECK_TOPS: Bottleneck = "tops_or_dresses"
BOTTLENECK_BOTTOMS: Bottleneck = "bottoms_or_dresses"

# Most urgent first.
GAP_TYPES: List[str] = ["critical", "improvement", "expansion", "satisfied", "oversaturated"]

ALL_SCENARIOS = "All scenarios"


@dataclass(frozen=True)
class OutfitCombinationResult:
    total_outfits: int
    outfit_breakdown: Dict[str, int]
    coverage_level: int
    bottleneck: Optional[str]
    item_counts: Dict[str, int]
    missing_for_next_outfit: Optional[str] = None


@dataclass(frozen=True)
class OuterwearTargets:
    min: int
    ideal: int
    max: int


@dataclass
class CoverageRecord:
    """Coverage of one scenario/season pair, or of outerwear for one season.

    Regular records carry ``coverage_percent``; outerwear records carry the
    min/ideal/max targets and a ``gap_type``.
    """

    season: str
    scenario_name: Optional[str] = None
    category: Optional[str] = None
    current_items: int = 0
    target_min: Optional[int] = None
    target_ideal: Optional[int] = None
    target_max: Optional[int] = None
    coverage_percent: Optional[float] = None
    total_outfits: int = 0
    bottleneck: Optional[str] = None
    gap_type: Optional[str] = None
    scenario_frequency: Optional[str] = None

    def __post_init__(self) -> None:
        targets = [t for t in (self.target_min, self.target_ideal, self.target_max) if t is not None]
        if targets != sorted(targets):
            raise ValueError(
                f"Coverage targets must satisfy min <= ideal <= max, got "
                f"{self.target_min}/{self.target_ideal}/{self.target_max}"
            )

    @property
    def is_outerwear(self) -> bool:
        return (self.category or "").lower() == "outerwear"


@dataclass
class GapRecord:
    """A season (outerwear) or scenario/season (regular) with insufficient coverage."""

    season: str
    is_outerwear_gap: bool
    current_items: int
    coverage_percent: float
    scenario: Optional[str] = None
    frequency: Optional[str] = None
    category: Optional[str] = None
    target_min: Optional[int] = None
    target_ideal: Optional[int] = None
    target_max: Optional[int] = None
    gap_type: Optional[str] = None
    base_score: Optional[int] = None
    is_critical: bool = False
    scenarios: List[str] = field(default_factory=list)

    @property
    def label(self) -> str:
        if self.is_outerwear_gap:
            return f"{self.season} outerwear"
        return f"{self.scenario} in {self.season}"


@dataclass(frozen=True)
class ScoringInstruction:
    mandatory_score: int
    rationale_text: str
    framing: Literal["gap_type", "coverage_percent"]


__all__ = [
    "ALL_SCENARIOS",
    "BOTTLENECK_BOTTOMS",
    "BOTTLENECK_FOOTWEAR",
    "BOTTLENECK_TOPS",
    "Bottleneck",
    "CoverageRecord",
    "GAP_TYPES",
    "GapRecord",
    "GapType",
    "OuterwearTargets",
    "OutfitCombinationResult",
    "ScoringInstruction",
]
