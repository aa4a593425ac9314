"""Tests for the coverage analysis service and its degradation paths."""
from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from advisor_app.config import AdvisorConfig
from logic.scenario_coverage_service import (
    METHOD_CALCULATED,
    METHOD_FRONTEND,
    METHOD_INVALID_REQUEST,
    METHOD_SKIPPED,
    METHOD_SOURCE_EMPTY,
    METHOD_SOURCE_FAILED,
    ScenarioCoverageService,
)
from models.wardrobe_item import Scenario, WardrobeItem
from tools.wardrobe_source import InMemoryWardrobeSource, WardrobeSource


class BrokenSource(WardrobeSource):
    def list_items(self, user_id: str):
        raise RuntimeError("database unavailable")

    def list_scenarios(self, user_id: str):
        return []


def _office_wardrobe():
    return [
        WardrobeItem(item_id="1", category="top", subcategory="blouse", season=["summer"]),
        WardrobeItem(item_id="2", category="bottom", subcategory="trousers"),
        WardrobeItem(item_id="3", category="footwear", subcategory="heels"),
    ]


def _coats(count: int):
    return [
        WardrobeItem(item_id=f"coat-{idx}", category="outerwear", subcategory="coat", season=["winter"])
        for idx in range(count)
    ]


def test_client_coverage_is_analysed_directly():
    service = ScenarioCoverageService(AdvisorConfig())
    coverage = [
        {"scenarioName": "Office Work", "season": "summer", "coveragePercent": 30, "currentItems": 3},
        {"scenarioName": "Weekend Casual", "season": "summer", "coveragePercent": 90, "currentItems": 9},
    ]

    analysis = service.analyze(scenario_coverage=coverage, form_data={"category": "top", "seasons": ["summer"]})

    assert analysis.method == METHOD_FRONTEND
    assert [gap.label for gap in analysis.gaps] == ["Office Work in summer"]
    assert [instruction.mandatory_score for instruction in analysis.scoring] == [9]
    assert "Office Work in summer" in analysis.prompt_section


def test_missing_coverage_skips_analysis():
    service = ScenarioCoverageService()

    analysis = service.analyze(scenario_coverage=[], form_data={"category": "top", "seasons": ["summer"]})

    assert analysis.method == METHOD_SKIPPED
    assert analysis.prompt_section == ""
    assert analysis.has_gaps is False


def test_threshold_comes_from_config():
    service = ScenarioCoverageService(AdvisorConfig(coverage_threshold=95.0))
    coverage = [{"scenarioName": "Weekend Casual", "season": "summer", "coveragePercent": 90}]

    analysis = service.analyze(scenario_coverage=coverage, form_data={"category": "top", "seasons": ["summer"]})

    assert [gap.scenario for gap in analysis.gaps] == ["Weekend Casual"]


def test_wardrobe_coverage_is_calculated():
    service = ScenarioCoverageService()
    scenarios = [Scenario(name="Office Work", frequency="weekly")]

    analysis = service.analyze_wardrobe(
        _office_wardrobe(),
        scenarios,
        form_data={"category": "top", "subcategory": "blouse", "seasons": ["summer"]},
    )

    assert analysis.method == METHOD_CALCULATED
    assert [gap.label for gap in analysis.gaps] == ["Office Work in summer"]
    assert analysis.gaps[0].coverage_percent == 10.0
    assert analysis.gaps[0].frequency == "weekly"
    assert any(record.is_outerwear for record in analysis.coverage)


def test_oversaturated_outerwear_produces_scores_but_no_gaps():
    service = ScenarioCoverageService()
    form = {"category": "outerwear", "subcategory": "coat", "seasons": ["winter"]}

    standard = service.analyze_wardrobe(_coats(5), [], form_data=form)
    conservative = service.analyze_wardrobe(_coats(5), [], form_data=form, user_goals=["declutter-downsize"])

    assert standard.gaps == []
    assert standard.prompt_section == ""
    assert [a.gap_type for a in standard.assessments] == ["oversaturated"]
    assert [s.mandatory_score for s in standard.scoring] == [3]
    assert conservative.conservative is True
    assert [s.mandatory_score for s in conservative.scoring] == [2]


def test_missing_source_fails_softly():
    analysis = ScenarioCoverageService().analyze_for_user(user_id="user-1", form_data={"category": "top"})

    assert analysis.method == METHOD_SOURCE_FAILED
    assert analysis.prompt_section == ""


def test_source_errors_fail_softly():
    service = ScenarioCoverageService(source=BrokenSource())

    analysis = service.analyze_for_user(user_id="user-1", form_data={"category": "top", "seasons": ["summer"]})

    assert analysis.method == METHOD_SOURCE_FAILED
    assert analysis.gaps == []


def test_empty_wardrobe_is_reported():
    source = InMemoryWardrobeSource(scenarios={"user-1": [{"name": "Office Work"}]})
    service = ScenarioCoverageService(source=source)

    analysis = service.analyze_for_user(user_id="user-1", form_data={"category": "top", "seasons": ["summer"]})

    assert analysis.method == METHOD_SOURCE_EMPTY


def test_source_passed_per_call_wins():
    source = InMemoryWardrobeSource(
        items={"user-1": [{"id": "c1", "category": "outerwear", "season": "summer"}]}
    )
    service = ScenarioCoverageService(source=BrokenSource())

    analysis = service.analyze_for_user(
        user_id="user-1", source=source, form_data={"category": "outerwear", "seasons": ["summer", "winter"]}
    )

    assert analysis.method == METHOD_CALCULATED
    assert [gap.label for gap in analysis.gaps] == ["winter outerwear", "summer outerwear"]
    assert [gap.gap_type for gap in analysis.gaps] == ["critical", "improvement"]


def test_infinite_client_numbers_do_not_break_analysis():
    coverage = [
        {"scenarioName": "Office Work", "season": "summer", "coveragePercent": 25, "currentItems": float("inf")},
        {"scenarioName": "Weekend Casual", "season": "summer", "coveragePercent": 30, "currentItems": "1e400"},
    ]

    analysis = ScenarioCoverageService().analyze(
        scenario_coverage=coverage, form_data={"category": "top", "seasons": ["summer"]}
    )

    assert analysis.method == METHOD_FRONTEND
    assert [(gap.scenario, gap.current_items) for gap in analysis.gaps] == [("Office Work", 0), ("Weekend Casual", 0)]


def test_calculated_analysis_keeps_its_wardrobe_snapshot():
    scenarios = [Scenario(name="Office Work", frequency="weekly")]

    analysis = ScenarioCoverageService().analyze_wardrobe(
        _office_wardrobe(), scenarios, form_data={"category": "top", "seasons": ["summer"]}
    )

    assert [item.item_id for item in analysis.items] == ["1", "2", "3"]
    assert [scenario.name for scenario in analysis.scenarios] == ["Office Work"]


def test_user_analysis_without_user_id_needs_review():
    service = ScenarioCoverageService(source=InMemoryWardrobeSource())

    blank = service.analyze_for_user(user_id="", form_data={"category": "top"})
    missing = service.analyze_for_user(form_data={"category": "top"})

    assert blank.method == METHOD_INVALID_REQUEST
    assert blank.review["message"] == "Invalid wardrobe analysis request"
    assert blank.review["details"][0]["loc"] == ("user_id",)
    assert missing.method == METHOD_INVALID_REQUEST
    assert blank.prompt_section == ""


def test_season_aliases_in_config_are_resolved():
    config = AdvisorConfig(default_seasons=["Autumn", "winter"])
    source = InMemoryWardrobeSource(
        items={"user-1": [{"id": "c1", "category": "outerwear", "season": "autumn"}]}
    )

    analysis = ScenarioCoverageService(config, source).analyze_for_user(
        user_id="user-1", form_data={"category": "outerwear", "seasons": ["fall"]}
    )

    assert config.default_seasons == ["fall", "winter"]
    assert sorted({record.season for record in analysis.coverage}) == ["fall", "winter"]
    assert [(gap.label, gap.current_items) for gap in analysis.gaps] == [("fall outerwear", 1)]
