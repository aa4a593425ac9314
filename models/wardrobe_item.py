"""Wardrobe item and scenario data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.taxonomy import (
    normalize_frequency,
    normalize_seasons,
    normalize_text,
    validate_category,
)


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _first_present(metadata: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if metadata.get(key) not in (None, ""):
            return metadata[key]
    return None


@dataclass
class WardrobeItem:
    """Snapshot of a wardrobe item as seen by the analysis.

    ``season`` empty means the item fits every season. ``scenarios`` lists
    scenario names the user tagged the item for explicitly.
    """

    item_id: str
    category: str
    subcategory: str = ""
    name: Optional[str] = None
    color: Optional[str] = None
    style: Optional[str] = None
    silhouette: Optional[str] = None
    season: List[str] = field(default_factory=list)
    scenarios: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.category = validate_category(self.category)
        self.subcategory = normalize_text(self.subcategory)
        self.season = normalize_seasons(_ensure_list(self.season))
        self.scenarios = [str(s).strip() for s in _ensure_list(self.scenarios) if str(s).strip()]

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        parts = [part for part in (self.color, self.subcategory or self.category) if part]
        return " ".join(parts)


@dataclass
class Scenario:
    """A usage scenario from the user's profile, e.g. ``Office Work``."""

    name: str
    frequency: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        self.name = str(self.name).strip()
        if not self.name:
            raise ValueError("Scenario name must not be empty")
        self.frequency = normalize_frequency(self.frequency) or self.frequency


def from_raw_metadata(metadata: Dict[str, Any]) -> WardrobeItem:
    """Factory to build a :class:`WardrobeItem` from loose API/database payloads.

    Accepts both camelCase and snake_case keys, and the ``seasons`` /
    ``season`` spellings used by different clients.
    """

    item_id = _first_present(metadata, "item_id", "id", "_id")
    category = metadata.get("category")
    missing = [name for name, value in (("item_id", item_id), ("category", category)) if not value]
    if missing:
        raise ValueError(f"Missing required fields for WardrobeItem: {missing}")

    return WardrobeItem(
        item_id=str(item_id),
        category=str(category),
        subcategory=str(_first_present(metadata, "subcategory", "sub_category") or ""),
        name=metadata.get("name"),
        color=metadata.get("color"),
        style=metadata.get("style"),
        silhouette=metadata.get("silhouette"),
        season=_ensure_list(_first_present(metadata, "season", "seasons")),
        scenarios=_ensure_list(metadata.get("scenarios")),
    )


def scenario_from_raw(metadata: Dict[str, Any]) -> Scenario:
    return Scenario(
        name=str(metadata.get("name") or ""),
        frequency=metadata.get("frequency"),
        type=metadata.get("type"),
        description=metadata.get("description"),
    )


__all__ = ["Scenario", "WardrobeItem", "from_raw_metadata", "scenario_from_raw"]
