"""Tests for exact duplicate detection and colour dominance."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.duplicate_detection import detect_duplicates, duplicate_severity
from models.wardrobe_item import WardrobeItem


def test_black_tee_matches_only_black_tee():
    candidate = {"color": "black", "subcategory": "t-shirt"}
    context = [{"color": "black", "subcategory": "t-shirt"}, {"color": "white", "subcategory": "t-shirt"}]

    result = detect_duplicates(candidate, context)

    assert result.found is True
    assert result.count == 1
    assert result.severity == "MODERATE"
    assert result.recommended_score_band == (1, 3)
    assert result.items == ["black t-shirt"]


def test_matching_is_case_insensitive_and_uses_item_names():
    candidate = {"color": "Navy", "subcategory": "Blazer", "category": "top"}
    context = [
        WardrobeItem(item_id="1", category="top", subcategory="blazer", color="navy", name="Office blazer"),
        WardrobeItem(item_id="2", category="outerwear", subcategory="blazer", color="navy"),
    ]

    result = detect_duplicates(candidate, context)

    assert result.count == 1
    assert result.items == ["Office blazer"]


def test_no_duplicates_band_depends_on_gap():
    candidate = {"color": "green", "subcategory": "skirt"}
    context = [{"color": "black", "subcategory": "skirt"}, {"color": "white", "subcategory": "skirt"}]

    assert detect_duplicates(candidate, context).recommended_score_band is None
    filling = detect_duplicates(candidate, context, fills_gap=True)
    assert filling.recommended_score_band == (6, 8)
    assert filling.recommendation.startswith("RECOMMEND")


def test_severity_scale():
    assert [duplicate_severity(n) for n in (0, 1, 2, 3, 7)] == ["NONE", "MODERATE", "HIGH", "EXCESSIVE", "EXCESSIVE"]


def test_colour_dominance_needs_existing_items():
    alone = detect_duplicates({"color": "red", "subcategory": "scarf"}, [])
    crowded = detect_duplicates(
        {"color": "red", "subcategory": "scarf"},
        [{"color": "red", "subcategory": "scarf"}, {"color": "blue", "subcategory": "scarf"}],
    )
    diverse = detect_duplicates(
        {"color": "red", "subcategory": "scarf"},
        [{"color": c, "subcategory": "scarf"} for c in ("blue", "green", "grey")],
    )

    assert alone.variety_impact.would_dominate is False
    assert crowded.variety_impact.would_dominate is True
    assert crowded.variety_impact.percentage == 67
    assert diverse.variety_impact.would_dominate is False
    assert diverse.variety_impact.message == "Good variety maintained"


def test_missing_colour_never_matches():
    result = detect_duplicates({"subcategory": "jeans"}, [{"subcategory": "jeans"}])

    assert result.found is False
