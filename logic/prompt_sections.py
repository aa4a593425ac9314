"""Render gap analysis as instruction text for the recommendation prompt.

The wording is a template; what matters is that every gap is named with its
season (and scenario), its severity and the single mandatory score it implies.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from logic.coverage_classifier import coverage_severity
from logic.duplicate_detection import DuplicateAnalysis
from logic.scoring_policy import (
    PERCENT_BAND_MEANINGS,
    build_scoring_instruction,
    coverage_percent_table,
    gap_type_table,
    has_conservative_goals,
)
from models.coverage import GapRecord

GAP_TYPE_GUIDANCE = {
    "critical": "Strongly recommend this item. Critical gap needs filling.",
    "improvement": "Good addition for variety and better coverage.",
    "expansion": "Well-covered but room for strategic growth.",
    "satisfied": "Perfect amount. Focus budget elsewhere.",
    "oversaturated": "DO NOT buy more items. Skip this item.",
}


def _join_labels(gaps: Sequence[GapRecord]) -> str:
    return ", ".join(gap.label for gap in gaps)


def render_mandatory_scoring(conservative: bool = False) -> str:
    """Both scoring tables for the active policy, framed as non-negotiable."""

    lines = [
        "",
        "**MANDATORY SCORING INSTRUCTION:**",
        "Your final score MUST be based ONLY on the gap analysis above. DO NOT adjust for other factors.",
    ]
    if conservative:
        lines.append("The user has minimalist or budget goals: conservative scoring applies.")
    lines.append("")
    lines.append("**If a gap type is provided (outerwear):**")
    for gap_type, score in gap_type_table(conservative).items():
        lines.append(f"- Gap type '{gap_type}': final score MUST be {score}.")
    lines.append("")
    lines.append("**If only coverage % is provided (regular items):**")
    for label, score in coverage_percent_table(conservative):
        lines.append(f"- Coverage {label}: score MUST be {score} ({PERCENT_BAND_MEANINGS[label]})")
    lines.append("")
    lines.append("DO NOT consider quality, style, or duplicates. Use ONLY the gap analysis data.")
    return "\n".join(lines)


def render_outerwear_section(gaps: Sequence[GapRecord], conservative: bool = False) -> str:
    lines = [
        "",
        "=== OUTERWEAR SEASONAL ANALYSIS ===",
        "This outerwear item could help fill the following seasonal needs:",
    ]
    for gap in gaps:
        instruction = build_scoring_instruction(gap, conservative)
        guidance = GAP_TYPE_GUIDANCE.get(gap.gap_type or "")
        score_line = f"  - MANDATORY SCORE: {instruction.mandatory_score}"
        lines.extend(
            [
                f"- {gap.season} season outerwear:",
                f"  - Current: {gap.current_items} items (Min: {gap.target_min}, Ideal: {gap.target_ideal}, "
                f"Max: {gap.target_max})",
                f"  - Coverage: {gap.coverage_percent:.1f}%",
                f"  - Gap type: {gap.gap_type or 'unknown'}",
                f"  - Severity: {coverage_severity(gap.current_items, gap.coverage_percent).upper()}",
                f"{score_line} - {guidance}" if guidance else score_line,
            ]
        )
        if gap.scenarios:
            lines.append(f"  - Used across scenarios: {', '.join(gap.scenarios)}")
    lines.append("")
    lines.append("**OUTERWEAR RECOMMENDATION INSTRUCTION:**")
    lines.append("This is an OUTERWEAR item worn across scenarios. Focus on SEASONAL NEEDS and GAP TYPE.")
    return "\n".join(lines) + "\n" + render_mandatory_scoring(conservative)


def render_regular_section(gaps: Sequence[GapRecord], conservative: bool = False) -> str:
    lines = [
        "",
        "=== SEASONAL GAP ANALYSIS ===",
        "This item could potentially fill the following seasonal gaps:",
    ]
    for gap in gaps:
        instruction = build_scoring_instruction(gap, conservative)
        frequency = f" ({gap.frequency})" if gap.frequency else ""
        lines.extend(
            [
                f"- {gap.scenario}{frequency} in {gap.season}:",
                f"  - Current coverage: {gap.coverage_percent:.1f}% ({gap.current_items} outfits)",
                f"  - Gap severity: {coverage_severity(gap.current_items, gap.coverage_percent).upper()}",
                f"  - MANDATORY SCORE: {instruction.mandatory_score}",
            ]
        )
    labels = _join_labels(gaps)
    plural = "s" if len(gaps) > 1 else ""
    lines.extend(
        [
            "",
            "**TARGETED RECOMMENDATION INSTRUCTION:**",
            "In your FINAL RECOMMENDATION, mention ONLY the seasonal gaps listed above.",
            f"The gaps to mention are: {labels}.",
            f'Example: "This item would be particularly valuable for your {labels} wardrobe gap{plural}."',
        ]
    )
    return "\n".join(lines) + "\n" + render_mandatory_scoring(conservative)


def generate_prompt_section(gaps: Sequence[GapRecord], user_goals: Optional[Iterable[str]] = None) -> str:
    """Instruction block for the gaps, or an empty string when there are none."""

    if not gaps:
        return ""
    conservative = has_conservative_goals(user_goals)
    if any(gap.is_outerwear_gap for gap in gaps):
        outerwear = [gap for gap in gaps if gap.is_outerwear_gap]
        return render_outerwear_section(outerwear, conservative)
    return render_regular_section(gaps, conservative)


def render_duplicate_section(analysis: DuplicateAnalysis, attributes: Optional[dict] = None) -> str:
    lines: List[str] = [
        "",
        "=== ALGORITHMIC DUPLICATE ANALYSIS ===",
        "The following analysis was performed using deterministic algorithms:",
    ]
    if attributes:
        lines.append("DETECTED ATTRIBUTES:")
        for key in ("color", "silhouette", "style"):
            lines.append(f"- {key.capitalize()}: {attributes.get(key) or 'N/A'}")
    lines.append("DUPLICATE ANALYSIS:")
    if analysis.found:
        lines.append(f"- DUPLICATES FOUND: {analysis.count} similar items")
        lines.append(f"- Items: {', '.join(analysis.items)}")
        lines.append(f"- Severity: {analysis.severity}")
    else:
        lines.append("- NO DUPLICATES: No similar items detected")
    lines.append("VARIETY IMPACT:")
    lines.append(f"- {analysis.variety_impact.message}")
    lines.append(f"- Color dominance risk: {'YES' if analysis.variety_impact.would_dominate else 'NO'}")
    lines.append(f"ALGORITHMIC RECOMMENDATION: {analysis.recommendation}")
    if analysis.recommended_score_band:
        low, high = analysis.recommended_score_band
        lines.append(f"IMPORTANT: Base your recommendation on these findings. Score MUST be {low}-{high}/10.")
    return "\n".join(lines)


__all__ = [
    "generate_prompt_section",
    "render_duplicate_section",
    "render_mandatory_scoring",
    "render_outerwear_section",
    "render_regular_section",
]
