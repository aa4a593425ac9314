"""Pydantic schemas that coerce loose coverage payloads at the engine boundary."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from models.coverage import CoverageRecord
from models.taxonomy import (
    ALL_SEASON,
    SEASONS,
    normalize_category,
    normalize_frequency,
    normalize_season,
    normalize_seasons,
)

logger = logging.getLogger(__name__)


def _coerce_count(value: Any) -> int:
    """Counts that are missing or not numeric become 0."""

    if value is None or isinstance(value, bool):
        return 0
    try:
        return max(0, int(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 0


def _coerce_optional_count(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return _coerce_count(value)


def _coerce_percent(value: Any) -> Optional[float]:
    """Percentages that are missing, not numeric or not finite become ``None``."""

    if value is None or isinstance(value, bool):
        return None
    try:
        percent = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(percent):
        return None
    return max(0.0, percent)


class CoverageEntryInput(BaseModel):
    """One coverage entry as clients send it (camelCase or snake_case)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    season: str = Field(min_length=1)
    scenario_name: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("scenario_name", "scenarioName", "scenario")
    )
    category: Optional[str] = None
    current_items: int = Field(default=0, validation_alias=AliasChoices("current_items", "currentItems"))
    target_min: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("target_min", "targetMin", "neededItemsMin")
    )
    target_ideal: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("target_ideal", "targetIdeal", "neededItemsIdeal")
    )
    target_max: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("target_max", "targetMax", "neededItemsMax")
    )
    coverage_percent: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("coverage_percent", "coveragePercent")
    )
    total_outfits: int = Field(default=0, validation_alias=AliasChoices("total_outfits", "totalOutfits"))
    bottleneck: Optional[str] = None
    gap_type: Optional[str] = Field(default=None, validation_alias=AliasChoices("gap_type", "gapType"))
    scenario_frequency: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("scenario_frequency", "scenarioFrequency", "frequency")
    )

    @field_validator("season", mode="before")
    @classmethod
    def _normalise_season(cls, value: Any) -> str:
        text = str(value or "").strip().lower()
        # Combined keys such as "spring/fall" stay combined.
        parts = [part.strip() for part in text.split("/")]
        return "/".join(normalize_season(part) or part for part in parts)

    @field_validator("category", mode="before")
    @classmethod
    def _normalise_category(cls, value: Any) -> Optional[str]:
        if not value:
            return None
        return normalize_category(str(value)) or str(value).strip().lower()

    @field_validator("current_items", "total_outfits", mode="before")
    @classmethod
    def _count(cls, value: Any) -> int:
        return _coerce_count(value)

    @field_validator("target_min", "target_ideal", "target_max", mode="before")
    @classmethod
    def _target(cls, value: Any) -> Optional[int]:
        return _coerce_optional_count(value)

    @field_validator("coverage_percent", mode="before")
    @classmethod
    def _percent(cls, value: Any) -> Optional[float]:
        return _coerce_percent(value)

    @field_validator("scenario_frequency", mode="before")
    @classmethod
    def _frequency(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return normalize_frequency(str(value)) or str(value)

    def to_record(self) -> CoverageRecord:
        return CoverageRecord(**self.model_dump())


class FormDataInput(BaseModel):
    """Attributes of the item being evaluated."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    category: Optional[str] = None
    subcategory: Optional[str] = Field(default=None, validation_alias=AliasChoices("subcategory", "sub_category"))
    seasons: List[str] = Field(default_factory=list, validation_alias=AliasChoices("seasons", "season"))
    color: Optional[str] = None
    style: Optional[str] = None
    silhouette: Optional[str] = None

    @field_validator("category", "subcategory", "color", "style", "silhouette", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, (dict, list)):
            return None
        text = str(value).strip().lower()
        return text or None

    @field_validator("seasons", mode="before")
    @classmethod
    def _seasons(cls, value: Any) -> List[str]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set)):
            return []
        seasons = normalize_seasons(str(part) for part in value if isinstance(part, str))
        if ALL_SEASON in seasons:
            return list(SEASONS)
        return seasons

    @property
    def is_outerwear(self) -> bool:
        return normalize_category(self.category) == "outerwear"


class AnalysisRequest(BaseModel):
    """Input contract for the instrumented analysis entry points."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    form_data: FormDataInput = Field(default_factory=FormDataInput)
    user_goals: List[str] = Field(default_factory=list)

    @field_validator("form_data", mode="before")
    @classmethod
    def _form_data(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, FormDataInput):
            return value
        return value if isinstance(value, dict) else {}

    @field_validator("user_goals", mode="before")
    @classmethod
    def _goals(cls, value: Any) -> List[str]:
        if isinstance(value, str):
            return [value]
        if not isinstance(value, (list, tuple, set)):
            return []
        return [str(goal) for goal in value if goal]


class UserAnalysisRequest(AnalysisRequest):
    """Analysis of a stored wardrobe, which needs the owner's id."""

    user_id: str = Field(min_length=1)

    @field_validator("user_id", mode="before")
    @classmethod
    def _user_id(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class ValidationResult(BaseModel):
    """Summary returned when a payload is rejected."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    return ValidationResult(message=message, details=exc.errors()).model_dump()


def coerce_form_data(form_data: Any) -> FormDataInput:
    if isinstance(form_data, FormDataInput):
        return form_data
    if not isinstance(form_data, dict):
        return FormDataInput()
    return FormDataInput.model_validate(form_data)


def coerce_coverage_entries(entries: Optional[Iterable[Any]]) -> List[CoverageRecord]:
    """Turn raw coverage entries into :class:`CoverageRecord` objects.

    Records pass through untouched. Entries that cannot be validated, including
    those with targets out of order, are skipped with a warning.
    """

    records: List[CoverageRecord] = []
    for index, entry in enumerate(entries or []):
        if isinstance(entry, CoverageRecord):
            records.append(entry)
            continue
        if not isinstance(entry, dict):
            logger.warning("Skipping coverage entry %s: expected a mapping, got %s", index, type(entry).__name__)
            continue
        try:
            records.append(CoverageEntryInput.model_validate(entry).to_record())
        except (ValidationError, ValueError) as exc:
            logger.warning("Skipping coverage entry %s due to validation error: %s", index, exc)
    return records


__all__ = [
    "AnalysisRequest",
    "CoverageEntryInput",
    "FormDataInput",
    "UserAnalysisRequest",
    "ValidationResult",
    "coerce_coverage_entries",
    "coerce_form_data",
    "validation_failure",
]
