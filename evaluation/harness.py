"""Lightweight evaluation harness for deterministic gap-analysis scenarios."""

from __future__ import annotations

from typing import Dict, List

from advisor_app.config import AdvisorConfig
from evaluation.scenarios import EvaluationScenario, SCENARIOS
from logic.scenario_coverage_service import CoverageAnalysis, ScenarioCoverageService
from tools.wardrobe_source import InMemoryWardrobeSource


def _evaluate_expectations(expectations: Dict[str, object], analysis: CoverageAnalysis) -> Dict[str, object]:
    labels = [gap.label for gap in analysis.gaps]
    scores = [instruction.mandatory_score for instruction in analysis.scoring]
    checks: Dict[str, bool] = {}
    if "method" in expectations:
        checks["method"] = analysis.method == expectations["method"]
    if "gap_labels" in expectations:
        checks["gap_labels"] = labels == list(expectations["gap_labels"])
    if "excluded_labels" in expectations:
        checks["excluded_labels"] = not set(labels) & set(expectations["excluded_labels"])
    if "mandatory_scores" in expectations:
        checks["mandatory_scores"] = scores == list(expectations["mandatory_scores"])
    if "prompt_empty" in expectations:
        checks["prompt_empty"] = (analysis.prompt_section == "") == bool(expectations["prompt_empty"])
    return {"passed": all(checks.values()), "checks": checks}


def run_scenario(scenario: EvaluationScenario, user_id: str = "eval_user") -> Dict[str, object]:
    config = AdvisorConfig.from_env()
    source = InMemoryWardrobeSource(
        items={user_id: scenario.wardrobe_items},
        scenarios={user_id: scenario.scenarios},
    )
    service = ScenarioCoverageService(config=config, source=source)
    analysis = service.analyze_for_user(
        user_id=user_id,
        form_data=scenario.form_data,
        user_goals=scenario.user_goals,
    )
    evaluation = _evaluate_expectations(scenario.expectations, analysis)
    return {
        "scenario": scenario.name,
        "passed": evaluation["passed"],
        "checks": evaluation["checks"],
        "gap_count": len(analysis.gaps),
        "analysis": analysis,
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    results = run_evaluation_suite()
    return [f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in results]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks"]
