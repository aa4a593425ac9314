"""Canonical taxonomy definitions for wardrobe gap analysis.

This module centralises the canonical labels for categories, seasons, scenario
frequencies and wardrobe goals. Helper functions keep normalisation consistent
across the calculator, the gap engine and the scoring policy.
"""

from typing import Dict, Iterable, List, Optional


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace(" ", "_").replace("-", "_")


CATEGORIES: List[str] = ["top", "bottom", "one_piece", "outerwear", "footwear", "accessory"]

_CATEGORY_ALIASES: Dict[str, str] = {
    "tops": "top",
    "bottoms": "bottom",
    "one_pieces": "one_piece",
    "onepiece": "one_piece",
    "shoes": "footwear",
    "accessories": "accessory",
}

SEASONS: List[str] = ["spring", "summer", "fall", "winter"]
ALL_SEASON = "all-season"

_SEASON_ALIASES: Dict[str, str] = {
    "autumn": "fall",
    "all_season": ALL_SEASON,
    "all_seasons": ALL_SEASON,
    "all_year": ALL_SEASON,
}

FREQUENCIES: List[str] = ["daily", "weekly", "monthly", "rarely"]

# Higher weight means the scenario comes up more often and its gaps rank first.
FREQUENCY_WEIGHTS: Dict[str, int] = {"daily": 4, "weekly": 3, "monthly": 2, "rarely": 1}

CONSERVATIVE_GOALS = {
    "optimize-my-wardrobe",
    "buy-less-shop-more-intentionally",
    "declutter-downsize",
    "save-money",
}
CONSERVATIVE_GOAL_KEYWORDS = ("optimize", "minimalist", "buy less", "declutter")


def validate_category(value: str) -> str:
    """Validate and normalise a category value.

    Raises a :class:`ValueError` if the category is not part of the canonical
    taxonomy.
    """

    key = _normalize_key(str(value))
    key = _CATEGORY_ALIASES.get(key, key)
    if key not in CATEGORIES:
        raise ValueError(f"Unsupported category '{value}'. Allowed: {CATEGORIES}")
    return key


def normalize_category(value: Optional[str]) -> Optional[str]:
    """Lenient variant of :func:`validate_category` returning ``None`` when unknown."""

    if not value:
        return None
    try:
        return validate_category(value)
    except ValueError:
        return None


def normalize_text(value: Optional[str]) -> str:
    """Lower-case and trim a free-text attribute such as subcategory or color."""

    return str(value).strip().lower() if value else ""


def normalize_season(value: str) -> Optional[str]:
    key = _normalize_key(str(value))
    if key in SEASONS:
        return key
    return _SEASON_ALIASES.get(key) or _SEASON_ALIASES.get(str(value).strip().lower())


def normalize_seasons(values: Iterable[str]) -> List[str]:
    """Normalise and deduplicate season tags, dropping unknown values."""

    normalised = []
    seen = set()
    for value in values:
        text = str(value).strip().lower()
        parts = text.split("/") if "/" in text else [text]
        for key in filter(None, (normalize_season(part) for part in parts)):
            if key not in seen:
                normalised.append(key)
                seen.add(key)
    return normalised


def normalize_frequency(value: Optional[str]) -> Optional[str]:
    """Map a frequency label (or a phrase like ``3 times per week``) to a bucket."""

    text = normalize_text(value)
    if not text:
        return None
    if text in FREQUENCIES:
        return text
    for marker, bucket in (("day", "daily"), ("week", "weekly"), ("month", "monthly"), ("year", "rarely")):
        if marker in text:
            return bucket
    return "rarely" if "rare" in text else None


def frequency_weight(value: Optional[str]) -> int:
    bucket = normalize_frequency(value)
    return FREQUENCY_WEIGHTS.get(bucket, 0) if bucket else 0


__all__ = [
    "ALL_SEASON",
    "CATEGORIES",
    "CONSERVATIVE_GOALS",
    "CONSERVATIVE_GOAL_KEYWORDS",
    "FREQUENCIES",
    "FREQUENCY_WEIGHTS",
    "SEASONS",
    "frequency_weight",
    "normalize_category",
    "normalize_frequency",
    "normalize_season",
    "normalize_seasons",
    "normalize_text",
    "validate_category",
]
