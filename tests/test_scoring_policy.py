"""Tests for mandatory score tables and item-level score decisions."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.scoring_policy import (
    build_scoring_instruction,
    coverage_percent_table,
    decide_item_score,
    has_conservative_goals,
    resolve_score,
    score_for_coverage_percent,
    score_for_gap_type,
)
from models.coverage import CoverageRecord, GapRecord


def test_gap_type_tables():
    standard = [score_for_gap_type(t) for t in ("critical", "improvement", "expansion", "satisfied", "oversaturated")]
    conservative = [
        score_for_gap_type(t, conservative=True)
        for t in ("critical", "improvement", "expansion", "satisfied", "oversaturated")
    ]

    assert standard == [10, 9, 8, 6, 3]
    assert conservative == [10, 9, 6, 4, 2]


def test_percentage_tables():
    percents = [0, 20, 21, 50, 51, 80, 81, 100, 130]

    assert [score_for_coverage_percent(p) for p in percents] == [10, 10, 9, 9, 8, 8, 6, 6, 3]
    assert [score_for_coverage_percent(p, conservative=True) for p in percents] == [10, 10, 9, 9, 6, 6, 4, 4, 2]
    assert coverage_percent_table(True)[-1] == (">100%", 2)


def test_resolve_score_dispatches_and_is_deterministic():
    assert resolve_score("oversaturated") == 3
    assert resolve_score("oversaturated", conservative=True) == 2
    assert resolve_score(55.0) == resolve_score(55.0) == 8
    with pytest.raises(ValueError):
        resolve_score("unknown")


def test_conservative_goal_detection():
    assert has_conservative_goals(["save-money"])
    assert has_conservative_goals(["I want a Minimalist closet"])
    assert has_conservative_goals(["Buy less, choose well"])
    assert not has_conservative_goals(["build-a-capsule", "look professional"])
    assert not has_conservative_goals(None)


def test_scoring_instruction_framings():
    outer = GapRecord(
        season="winter",
        is_outerwear_gap=True,
        current_items=5,
        coverage_percent=100.0,
        target_min=2,
        target_ideal=3,
        target_max=4,
        gap_type="oversaturated",
    )
    regular = GapRecord(
        season="summer", is_outerwear_gap=False, current_items=2, coverage_percent=55.0, scenario="Office Work"
    )

    outer_instruction = build_scoring_instruction(outer)
    regular_instruction = build_scoring_instruction(regular, conservative=True)

    assert (outer_instruction.mandatory_score, outer_instruction.framing) == (3, "gap_type")
    assert "OVERSATURATED" in outer_instruction.rationale_text
    assert (regular_instruction.mandatory_score, regular_instruction.framing) == (6, "coverage_percent")
    assert "Office Work in summer" in regular_instruction.rationale_text


def _record(scenario: str, gap_type=None, percent=None) -> CoverageRecord:
    return CoverageRecord(season="winter", scenario_name=scenario, gap_type=gap_type, coverage_percent=percent)


def test_duplicates_take_priority_over_coverage():
    coverage = [_record("Office Work", "critical")]

    single = decide_item_score(coverage, duplicate_count=1, duplicate_items=["Black tee"])
    many = decide_item_score(coverage, duplicate_count=3, duplicate_items=["a", "b", "c"])

    assert (single.score, single.gap_type) == (2, "duplicate")
    assert "Black tee" in single.reason
    assert many.score == 1


def test_neutral_score_without_coverage():
    assert decide_item_score([]).score == 5
    assert decide_item_score([_record("Office Work")]).score == 5


def test_most_urgent_gap_type_drives_score():
    coverage = [
        _record("Office Work", "satisfied"),
        _record("Weekend Casual", "expansion"),
        _record("All scenarios", "oversaturated"),
    ]

    assert decide_item_score(coverage).score == 8
    assert decide_item_score(coverage, conservative=True).score == 6


def test_suitable_scenarios_filter_keeps_all_scenario_aggregates():
    coverage = [
        _record("Office Work", "satisfied"),
        _record("Weekend Casual", "critical"),
        _record("All scenarios", "oversaturated"),
    ]

    decision = decide_item_score(coverage, suitable_scenarios=["office"])

    assert decision.gap_type == "satisfied"
    assert [r.scenario_name for r in decision.relevant_coverage] == ["Office Work", "All scenarios"]
    fallback = decide_item_score(coverage[:2], suitable_scenarios=["Gala"])
    assert fallback.gap_type == "critical"


def test_lowest_percent_used_when_no_gap_types():
    coverage = [_record("Office Work", percent=70.0), _record("Weekend Casual", percent=15.0)]

    assert decide_item_score(coverage).score == 10
