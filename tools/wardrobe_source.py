"""Data-access collaborator supplying wardrobe items and scenarios to the analysis."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from models.wardrobe_item import Scenario, WardrobeItem, from_raw_metadata, scenario_from_raw

logger = logging.getLogger(__name__)


class WardrobeSource:
    """Read-only access to a user's wardrobe and scenarios."""

    def list_items(self, user_id: str) -> List[WardrobeItem]:
        raise NotImplementedError

    def list_scenarios(self, user_id: str) -> List[Scenario]:
        raise NotImplementedError


def coerce_items(raw_items: Iterable[Any]) -> List[WardrobeItem]:
    """Build items from loose payloads, skipping entries that fail validation."""

    items: List[WardrobeItem] = []
    for raw in raw_items:
        if isinstance(raw, WardrobeItem):
            items.append(raw)
            continue
        try:
            items.append(from_raw_metadata(dict(raw)))
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping wardrobe entry due to validation error: %s", exc)
    return items


def coerce_scenarios(raw_scenarios: Iterable[Any]) -> List[Scenario]:
    scenarios: List[Scenario] = []
    for raw in raw_scenarios:
        if isinstance(raw, Scenario):
            scenarios.append(raw)
            continue
        try:
            scenarios.append(scenario_from_raw(dict(raw)))
        except (TypeError, ValueError) as exc:
            logger.warning("Skipping scenario due to validation error: %s", exc)
    return scenarios


class InMemoryWardrobeSource(WardrobeSource):
    """Dictionary-backed source keyed by user id."""

    def __init__(
        self,
        items: Optional[Dict[str, Iterable[Any]]] = None,
        scenarios: Optional[Dict[str, Iterable[Any]]] = None,
    ) -> None:
        self._items: Dict[str, List[WardrobeItem]] = {
            user_id: coerce_items(raw) for user_id, raw in (items or {}).items()
        }
        self._scenarios: Dict[str, List[Scenario]] = {
            user_id: coerce_scenarios(raw) for user_id, raw in (scenarios or {}).items()
        }

    def add_item(self, user_id: str, item: Any) -> None:
        self._items.setdefault(user_id, []).extend(coerce_items([item]))

    def set_scenarios(self, user_id: str, scenarios: Iterable[Any]) -> None:
        self._scenarios[user_id] = coerce_scenarios(scenarios)

    def list_items(self, user_id: str) -> List[WardrobeItem]:
        return list(self._items.get(user_id, []))

    def list_scenarios(self, user_id: str) -> List[Scenario]:
        return list(self._scenarios.get(user_id, []))


__all__ = ["InMemoryWardrobeSource", "WardrobeSource", "coerce_items", "coerce_scenarios"]
