"""Evaluation scenarios exercising regular, outerwear and degraded gap analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class EvaluationScenario:
    name: str
    description: str
    form_data: Dict[str, object]
    wardrobe_items: List[Dict[str, object]]
    scenarios: List[Dict[str, object]]
    expectations: Dict[str, object]
    user_goals: List[str] = field(default_factory=list)


def _profile_scenarios() -> List[Dict[str, object]]:
    return [
        {"name": "Office Work", "frequency": "daily"},
        {"name": "Weekend Casual", "frequency": "weekly"},
        {"name": "Hiking", "frequency": "monthly"},
    ]


def _wardrobe_fixtures() -> List[Dict[str, object]]:
    return [
        {"item_id": "top_blouse", "category": "top", "subcategory": "blouse", "color": "white"},
        {"item_id": "top_shirt", "category": "top", "subcategory": "shirt", "color": "blue"},
        {"item_id": "top_tee_black", "category": "top", "subcategory": "t-shirt", "color": "black"},
        {"item_id": "top_tee_white", "category": "top", "subcategory": "t-shirt", "color": "white"},
        {"item_id": "bottom_trousers", "category": "bottom", "subcategory": "trousers", "color": "black"},
        {"item_id": "bottom_jeans", "category": "bottom", "subcategory": "jeans", "color": "blue"},
        {"item_id": "shoes_heels", "category": "footwear", "subcategory": "heels", "color": "black"},
        {"item_id": "shoes_sneakers", "category": "footwear", "subcategory": "sneakers", "color": "white"},
        {
            "item_id": "coat_wool",
            "category": "outerwear",
            "subcategory": "coat",
            "color": "camel",
            "season": ["fall", "winter"],
        },
    ]


def _coat_collection() -> List[Dict[str, object]]:
    colors = ["black", "navy", "camel", "grey", "olive"]
    return [
        {
            "item_id": f"coat_{color}",
            "category": "outerwear",
            "subcategory": "coat",
            "color": color,
            "season": ["winter"],
        }
        for color in colors
    ]


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="heels_fill_summer_gaps",
        description="Heels fill office and weekend gaps but never the hiking gap.",
        form_data={"category": "footwear", "subcategory": "heels", "color": "red", "seasons": ["summer"]},
        wardrobe_items=_wardrobe_fixtures(),
        scenarios=_profile_scenarios(),
        expectations={
            "method": "calculated",
            "gap_labels": ["Office Work in summer", "Weekend Casual in summer"],
            "excluded_labels": ["Hiking in summer"],
            "mandatory_scores": [10, 10],
            "prompt_empty": False,
        },
    ),
    EvaluationScenario(
        name="outerwear_critical_seasons",
        description="A single fall/winter coat leaves summer and winter outerwear critical.",
        form_data={"category": "outerwear", "subcategory": "jacket", "seasons": ["winter", "summer"]},
        wardrobe_items=_wardrobe_fixtures(),
        scenarios=_profile_scenarios(),
        expectations={
            "method": "calculated",
            "gap_labels": ["summer outerwear", "winter outerwear"],
            "mandatory_scores": [10, 10],
            "prompt_empty": False,
        },
    ),
    EvaluationScenario(
        name="oversaturated_outerwear_conservative",
        description="Five winter coats and a decluttering goal: no gap, score 2.",
        form_data={"category": "outerwear", "subcategory": "coat", "seasons": ["winter"]},
        wardrobe_items=_coat_collection(),
        scenarios=[],
        user_goals=["declutter-downsize"],
        expectations={
            "method": "calculated",
            "gap_labels": [],
            "mandatory_scores": [2],
            "prompt_empty": True,
        },
    ),
    EvaluationScenario(
        name="empty_wardrobe_skips_analysis",
        description="A user without items degrades to an empty analysis.",
        form_data={"category": "top", "subcategory": "shirt", "seasons": ["spring"]},
        wardrobe_items=[],
        scenarios=_profile_scenarios(),
        expectations={
            "method": "source_empty",
            "gap_labels": [],
            "mandatory_scores": [],
            "prompt_empty": True,
        },
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
