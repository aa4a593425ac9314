"""Advisor bootstrap: wires config, logging, data source and analysis together."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from advisor_app.config import AdvisorConfig
from advisor_app.logging_config import configure_logging, get_logger, log_event, operation_context
from logic.duplicate_detection import DuplicateAnalysis, detect_duplicates
from logic.prompt_sections import render_duplicate_section
from logic.scenario_coverage_service import CoverageAnalysis, ScenarioCoverageService
from logic.scoring_policy import ItemScoreDecision, decide_item_score
from logic.validation import FormDataInput, coerce_form_data
from logic.wardrobe_analysis import analyze_wardrobe_for_prompt, render_wardrobe_summary
from models.coverage import CoverageRecord
from tools.wardrobe_source import InMemoryWardrobeSource, WardrobeSource

LOGGER = get_logger(__name__)


@dataclass
class AdviceResult:
    """Everything prompt assembly needs for one candidate item."""

    analysis: CoverageAnalysis
    duplicates: DuplicateAnalysis
    decision: ItemScoreDecision
    prompt_text: str


def _scoring_coverage(records: Sequence[CoverageRecord], form: FormDataInput) -> List[CoverageRecord]:
    seasons = set(form.seasons)
    return [
        record
        for record in records
        if record.is_outerwear == form.is_outerwear and (not seasons or record.season in seasons)
    ]


class GapAdvisorApp:
    """Runs coverage, duplicate and scoring analysis for a candidate purchase."""

    def __init__(self, config: AdvisorConfig | None = None, source: WardrobeSource | None = None) -> None:
        self.config = config or AdvisorConfig.from_env()
        configure_logging(self.config.log_level)
        self.source = source or InMemoryWardrobeSource()
        self.service = ScenarioCoverageService(config=self.config, source=self.source)

    def advise(
        self,
        user_id: str,
        form_data: Any,
        user_goals: Optional[List[str]] = None,
        suitable_scenarios: Optional[List[str]] = None,
    ) -> AdviceResult:
        """Analyse a candidate item against the user's wardrobe.

        The wardrobe is read once; duplicate detection and scoring use the same
        snapshot as the gap analysis.
        """

        form = coerce_form_data(form_data)
        goals = list(user_goals or [])
        with operation_context("advisor.advise"):
            analysis = self.service.analyze_for_user(user_id=user_id, form_data=form, user_goals=goals)
            items, scenarios = analysis.items, analysis.scenarios

            candidate = {"category": form.category, "subcategory": form.subcategory, "color": form.color}
            duplicates = detect_duplicates(candidate, items, fills_gap=analysis.has_gaps)
            decision = decide_item_score(
                _scoring_coverage(analysis.coverage, form),
                suitable_scenarios=suitable_scenarios,
                conservative=analysis.conservative,
                duplicate_count=duplicates.count,
                duplicate_items=duplicates.items,
            )

            sections = [analysis.prompt_section, render_duplicate_section(duplicates, form.model_dump())]
            if items and scenarios and not analysis.has_gaps:
                sections.append(render_wardrobe_summary(analyze_wardrobe_for_prompt(form, items, scenarios)))
            prompt_text = "\n".join(section for section in sections if section)

            log_event(
                LOGGER,
                logging.INFO,
                "advice_ready",
                method=analysis.method,
                gap_count=len(analysis.gaps),
                duplicate_count=duplicates.count,
                score=decision.score,
            )
            return AdviceResult(analysis=analysis, duplicates=duplicates, decision=decision, prompt_text=prompt_text)


__all__ = ["AdviceResult", "GapAdvisorApp"]
