"""Tests for taxonomy normalisation, item models, config and structured logging."""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from advisor_app.config import AdvisorConfig
from advisor_app.logging_config import JsonFormatter, correlation_context, redact_for_log
from logic.validation import AnalysisRequest, CoverageEntryInput, FormDataInput, coerce_form_data
from models.coverage import CoverageRecord
from models.taxonomy import frequency_weight, normalize_frequency, normalize_seasons, validate_category
from models.wardrobe_item import Scenario, WardrobeItem, from_raw_metadata


def test_category_aliases_and_rejection():
    assert validate_category("Shoes") == "footwear"
    assert validate_category("one piece") == "one_piece"
    with pytest.raises(ValueError):
        validate_category("handbag")


def test_season_and_frequency_normalisation():
    assert normalize_seasons(["Autumn", "spring/fall", "SUMMER", "monsoon"]) == ["fall", "spring", "summer"]
    assert normalize_frequency("3 times per week") == "weekly"
    assert normalize_frequency("Daily") == "daily"
    assert frequency_weight("daily") > frequency_weight("rarely") > frequency_weight(None)


def test_item_from_loose_payload():
    item = from_raw_metadata(
        {"_id": 42, "category": "Tops", "sub_category": " Blouse ", "seasons": "summer", "scenarios": "Office Work"}
    )

    assert (item.item_id, item.category, item.subcategory) == ("42", "top", "blouse")
    assert item.season == ["summer"]
    assert item.scenarios == ["Office Work"]
    assert item.display_name == "blouse"


def test_item_payload_requires_id_and_category():
    with pytest.raises(ValueError):
        from_raw_metadata({"category": "top"})
    with pytest.raises(ValueError):
        WardrobeItem(item_id="1", category="jewellery")


def test_scenario_requires_name():
    assert Scenario(name=" Office Work ", frequency="5 days a week").frequency == "daily"
    with pytest.raises(ValueError):
        Scenario(name="  ")


def test_coverage_record_rejects_out_of_order_targets():
    with pytest.raises(ValueError):
        CoverageRecord(season="winter", target_min=4, target_ideal=3, target_max=5)


def test_coverage_entry_accepts_camel_case():
    record = CoverageEntryInput.model_validate(
        {"scenarioName": "Office", "season": "Winter", "currentItems": "3", "coveragePercent": "nan", "frequency": "weekly"}
    ).to_record()

    assert (record.scenario_name, record.season, record.current_items) == ("Office", "winter", 3)
    assert record.coverage_percent is None
    assert record.scenario_frequency == "weekly"


def test_form_data_normalisation():
    form = FormDataInput.model_validate({"category": "Outerwear", "season": ["all-season"], "color": " Navy "})

    assert form.is_outerwear
    assert form.seasons == ["spring", "summer", "fall", "winter"]
    assert form.color == "navy"
    assert coerce_form_data("not a form").seasons == []


def test_analysis_request_tolerates_loose_goals():
    assert AnalysisRequest.model_validate({"user_goals": "save-money"}).user_goals == ["save-money"]
    assert AnalysisRequest.model_validate({"user_goals": 7, "form_data": None}).user_goals == []


def test_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("APP_ENV", "APP_CONFIG_PATH", "COVERAGE_THRESHOLD", "OUTFIT_TARGET_IDEAL", "DEFAULT_SEASONS", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)

    config = AdvisorConfig.from_env()

    assert config.coverage_threshold == 60.0
    assert config.outfit_target_ideal == 10
    assert config.default_seasons == ["spring", "summer", "fall", "winter"]
    assert config.log_level == "INFO"


def test_config_file_and_env_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    config_file = tmp_path / "staging.yaml"
    config_file.write_text(
        "# staging overrides\ncoverage_threshold: 70\ndefault_seasons: [summer, winter]\nlog_level: 'debug'\n"
    )
    monkeypatch.setenv("APP_ENV", "staging")
    monkeypatch.setenv("ADVISOR_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("OUTFIT_TARGET_IDEAL", "12")
    for key in ("APP_CONFIG_PATH", "COVERAGE_THRESHOLD", "DEFAULT_SEASONS", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)

    config = AdvisorConfig.from_env()

    assert config.environment == "staging"
    assert config.coverage_threshold == 70.0
    assert config.default_seasons == ["summer", "winter"]
    assert config.outfit_target_ideal == 12
    assert config.log_level == "DEBUG"


def test_redaction_scrubs_identifiers():
    payload = {"user_id": "u-1", "note": "mail me at a@b.com", "image_url": "https://x", "items": [{"name": "Tee"}]}

    assert redact_for_log(payload) == {
        "user_id": "[redacted]",
        "note": "mail me at [redacted-email]",
        "image_url": "[redacted]",
        "items": [{"name": "[redacted]"}],
    }


def test_json_formatter_includes_extras_and_correlation():
    record = logging.LogRecord("advisor", logging.INFO, __file__, 1, "gap_found", None, None)
    record.event = "gap_found"
    record.season = "winter"

    with correlation_context("abc123"):
        payload = json.loads(JsonFormatter().format(record))

    assert payload["event"] == "gap_found"
    assert payload["season"] == "winter"
    assert payload["correlation_id"] == "abc123"


def test_config_seasons_resolve_aliases(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("APP_ENV", "APP_CONFIG_PATH"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DEFAULT_SEASONS", "Autumn, winter")

    assert AdvisorConfig.from_env().default_seasons == ["fall", "winter"]
    assert AdvisorConfig(default_seasons=["autumn", "Spring"]).default_seasons == ["fall", "spring"]
    assert AdvisorConfig(default_seasons=["all-season"]).default_seasons == ["spring", "summer", "fall", "winter"]
    assert AdvisorConfig(default_seasons=["monsoon"]).default_seasons == ["spring", "summer", "fall", "winter"]


def test_config_ignores_overflowing_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("APP_ENV", "APP_CONFIG_PATH"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("OUTFIT_TARGET_IDEAL", "1e400")

    assert AdvisorConfig.from_env().outfit_target_ideal == 10
