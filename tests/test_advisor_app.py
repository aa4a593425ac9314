"""End-to-end checks of the advisor bootstrap."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from advisor_app.app import GapAdvisorApp
from advisor_app.config import AdvisorConfig
from tools.wardrobe_source import InMemoryWardrobeSource, WardrobeSource


class _FailingSource(WardrobeSource):
    def list_items(self, user_id: str):
        raise ConnectionError("offline")

    def list_scenarios(self, user_id: str):
        raise ConnectionError("offline")


def _app(items, scenarios) -> GapAdvisorApp:
    source = InMemoryWardrobeSource(items={"user-1": items}, scenarios={"user-1": scenarios})
    return GapAdvisorApp(config=AdvisorConfig(), source=source)


def test_duplicate_overrides_gap_score():
    app = _app(
        [
            {"item_id": "1", "category": "top", "subcategory": "blouse", "color": "white"},
            {"item_id": "2", "category": "bottom", "subcategory": "trousers", "color": "navy"},
            {"item_id": "3", "category": "footwear", "subcategory": "heels", "color": "black"},
        ],
        [{"name": "Office Work", "frequency": "daily"}],
    )

    advice = app.advise("user-1", {"category": "footwear", "subcategory": "heels", "color": "Black", "seasons": ["summer"]})

    assert [gap.label for gap in advice.analysis.gaps] == ["Office Work in summer"]
    assert advice.duplicates.count == 1
    assert advice.decision.score == 2
    assert "=== SEASONAL GAP ANALYSIS ===" in advice.prompt_text
    assert "DUPLICATES FOUND: 1 similar items" in advice.prompt_text


def test_no_gaps_appends_wardrobe_summary():
    coats = [
        {"item_id": f"coat-{color}", "category": "outerwear", "subcategory": "coat", "color": color, "season": "winter"}
        for color in ("black", "navy", "camel", "grey", "olive")
    ]
    app = _app(coats, [{"name": "Office Work", "frequency": "daily"}])

    advice = app.advise("user-1", {"category": "outerwear", "subcategory": "coat", "color": "red", "seasons": ["winter"]})

    assert advice.analysis.gaps == []
    assert advice.duplicates.found is False
    assert advice.decision.score == 3
    assert advice.decision.gap_type == "oversaturated"
    assert "=== WARDROBE ANALYSIS ===" in advice.prompt_text


def test_failing_source_still_returns_advice():
    app = GapAdvisorApp(config=AdvisorConfig(), source=_FailingSource())

    advice = app.advise("user-1", {"category": "top", "subcategory": "shirt", "seasons": ["spring"]})

    assert advice.analysis.method == "source_failed"
    assert advice.decision.score == 5
    assert "NO DUPLICATES" in advice.prompt_text


class _ShiftingSource(InMemoryWardrobeSource):
    """Returns the wardrobe only on the first read, like a store mutated mid-request."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.item_reads = 0

    def list_items(self, user_id: str):
        self.item_reads += 1
        return super().list_items(user_id) if self.item_reads == 1 else []


def test_wardrobe_is_read_once_per_advice():
    source = _ShiftingSource(
        items={
            "user-1": [
                {"item_id": "1", "category": "top", "subcategory": "blouse", "color": "white"},
                {"item_id": "2", "category": "bottom", "subcategory": "trousers", "color": "navy"},
                {"item_id": "3", "category": "footwear", "subcategory": "heels", "color": "black"},
            ]
        },
        scenarios={"user-1": [{"name": "Office Work", "frequency": "daily"}]},
    )
    app = GapAdvisorApp(config=AdvisorConfig(), source=source)

    advice = app.advise("user-1", {"category": "footwear", "subcategory": "heels", "color": "black", "seasons": ["summer"]})

    assert source.item_reads == 1
    assert len(advice.analysis.items) == 3
    assert advice.duplicates.count == 1


def test_blank_user_id_returns_review_payload():
    app = _app([{"item_id": "1", "category": "top", "subcategory": "blouse"}], [])

    advice = app.advise("  ", {"category": "top", "subcategory": "blouse", "seasons": ["summer"]})

    assert advice.analysis.method == "invalid_request"
    assert advice.analysis.review["status"] == "needs_review"
    assert advice.decision.score == 5
