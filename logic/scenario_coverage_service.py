"""Entry point tying coverage data, gap analysis and scoring together.

Gap analysis enhances a recommendation but is never required for one, so every
path here degrades to an empty analysis instead of raising.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from advisor_app.config import AdvisorConfig
from advisor_app.logging_config import get_logger, log_event, operation_context
from logic.gap_analysis import analyze_outerwear_seasons, identify_seasonal_gaps
from logic.outfit_combinations import build_coverage_records
from logic.prompt_sections import generate_prompt_section
from logic.scoring_policy import build_scoring_instruction, has_conservative_goals
from logic.validation import (
    AnalysisRequest,
    UserAnalysisRequest,
    coerce_coverage_entries,
    coerce_form_data,
    validation_failure,
)
from models.coverage import CoverageRecord, GapRecord, ScoringInstruction
from models.wardrobe_item import Scenario, WardrobeItem
from tools.observability import instrument_analysis
from tools.wardrobe_source import WardrobeSource

LOGGER = get_logger(__name__)

METHOD_SKIPPED = "skipped"
METHOD_FRONTEND = "frontend_provided"
METHOD_CALCULATED = "calculated"
METHOD_SOURCE_FAILED = "source_failed"
METHOD_SOURCE_EMPTY = "source_empty"
METHOD_INVALID_REQUEST = "invalid_request"


@dataclass
class CoverageAnalysis:
    """Result handed to prompt assembly.

    ``gaps`` holds what the prompt should mention; ``assessments`` holds every
    evaluated season or scenario that carries a mandatory score. ``items`` and
    ``scenarios`` are the wardrobe snapshot the coverage was computed from, when
    the analysis loaded or received one.
    """

    prompt_section: str = ""
    gaps: List[GapRecord] = field(default_factory=list)
    assessments: List[GapRecord] = field(default_factory=list)
    scoring: List[ScoringInstruction] = field(default_factory=list)
    conservative: bool = False
    method: str = METHOD_SKIPPED
    coverage: List[CoverageRecord] = field(default_factory=list)
    items: List[WardrobeItem] = field(default_factory=list)
    scenarios: List[Scenario] = field(default_factory=list)
    review: Optional[Dict[str, Any]] = None

    @property
    def has_gaps(self) -> bool:
        return bool(self.gaps)


def _invalid_request(exc: ValidationError) -> CoverageAnalysis:
    return CoverageAnalysis(
        method=METHOD_INVALID_REQUEST,
        review=validation_failure("Invalid wardrobe analysis request", exc),
    )


class ScenarioCoverageService:
    """Run gap analysis from client-supplied coverage or from raw wardrobe data."""

    def __init__(self, config: AdvisorConfig | None = None, source: WardrobeSource | None = None) -> None:
        self.config = config or AdvisorConfig()
        self.source = source

    def identify_seasonal_gaps(self, coverage: Iterable[Any], form_data: Any) -> List[GapRecord]:
        return identify_seasonal_gaps(coverage, form_data, threshold=self.config.coverage_threshold)

    def generate_prompt_section(self, gaps: Sequence[GapRecord], user_goals: Optional[Iterable[str]] = None) -> str:
        return generate_prompt_section(gaps, user_goals)

    def _run(
        self,
        records: List[CoverageRecord],
        form_data: Any,
        user_goals: List[str],
        method: str,
        items: Sequence[WardrobeItem] = (),
        scenarios: Sequence[Scenario] = (),
    ) -> CoverageAnalysis:
        form = coerce_form_data(form_data)
        gaps = self.identify_seasonal_gaps(records, form)
        if form.is_outerwear:
            assessments = analyze_outerwear_seasons(records, form.seasons)
        else:
            assessments = list(gaps)
        conservative = has_conservative_goals(user_goals)
        scoring = [build_scoring_instruction(gap, conservative) for gap in assessments]
        log_event(
            LOGGER,
            logging.INFO,
            "coverage_analysis_finished",
            method=method,
            gap_count=len(gaps),
            assessment_count=len(assessments),
            conservative=conservative,
        )
        return CoverageAnalysis(
            prompt_section=self.generate_prompt_section(gaps, user_goals),
            gaps=gaps,
            assessments=assessments,
            scoring=scoring,
            conservative=conservative,
            method=method,
            coverage=records,
            items=list(items),
            scenarios=list(scenarios),
        )

    @instrument_analysis("scenario_coverage.analyze", input_model=AnalysisRequest)
    def analyze(
        self,
        *,
        scenario_coverage: Optional[Iterable[Any]] = None,
        form_data: Any = None,
        user_goals: Optional[List[str]] = None,
    ) -> CoverageAnalysis:
        """Analyse coverage computed elsewhere, typically by the client."""

        with operation_context("scenario_coverage.analyze"):
            records = coerce_coverage_entries(scenario_coverage)
            if not records:
                log_event(LOGGER, logging.INFO, "coverage_analysis_skipped", reason="no coverage data")
                return CoverageAnalysis(method=METHOD_SKIPPED)
            return self._run(records, form_data, list(user_goals or []), METHOD_FRONTEND)

    @instrument_analysis("scenario_coverage.analyze_wardrobe", input_model=AnalysisRequest)
    def analyze_wardrobe(
        self,
        items: Sequence[WardrobeItem],
        scenarios: Sequence[Scenario],
        *,
        form_data: Any = None,
        user_goals: Optional[List[str]] = None,
    ) -> CoverageAnalysis:
        """Compute coverage from the wardrobe itself, then analyse it."""

        with operation_context("scenario_coverage.analyze_wardrobe"):
            records = build_coverage_records(
                items,
                scenarios,
                seasons=self.config.default_seasons,
                target_ideal=self.config.outfit_target_ideal,
            )
            return self._run(
                records, form_data, list(user_goals or []), METHOD_CALCULATED, items=items, scenarios=scenarios
            )

    @instrument_analysis(
        "scenario_coverage.analyze_for_user",
        input_model=UserAnalysisRequest,
        on_validation_error=_invalid_request,
    )
    def analyze_for_user(
        self,
        *,
        user_id: str,
        source: WardrobeSource | None = None,
        form_data: Any = None,
        user_goals: Optional[List[str]] = None,
    ) -> CoverageAnalysis:
        """Load the user's wardrobe through a data source and analyse it.

        Failures of the source are logged and produce an empty analysis; a
        request without a user id returns a review payload instead.
        """

        data_source = source or self.source
        with operation_context("scenario_coverage.analyze_for_user"):
            if data_source is None:
                log_event(LOGGER, logging.WARNING, "coverage_source_missing")
                return CoverageAnalysis(method=METHOD_SOURCE_FAILED)
            try:
                items = data_source.list_items(user_id)
                scenarios = data_source.list_scenarios(user_id)
            except Exception:  # noqa: BLE001
                log_event(LOGGER, logging.ERROR, "coverage_source_failed", exc_info=True)
                return CoverageAnalysis(method=METHOD_SOURCE_FAILED)

            if not items:
                log_event(LOGGER, logging.INFO, "coverage_source_empty", scenario_count=len(scenarios))
                return CoverageAnalysis(method=METHOD_SOURCE_EMPTY, scenarios=list(scenarios))

            records = build_coverage_records(
                items,
                scenarios,
                seasons=self.config.default_seasons,
                target_ideal=self.config.outfit_target_ideal,
            )
            return self._run(
                records, form_data, list(user_goals or []), METHOD_CALCULATED, items=items, scenarios=scenarios
            )


__all__ = [
    "CoverageAnalysis",
    "METHOD_CALCULATED",
    "METHOD_FRONTEND",
    "METHOD_INVALID_REQUEST",
    "METHOD_SKIPPED",
    "METHOD_SOURCE_EMPTY",
    "METHOD_SOURCE_FAILED",
    "ScenarioCoverageService",
]
