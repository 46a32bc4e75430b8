"""Inbound row contracts for the catalog and assessment stores.

Rows arrive as loosely typed dicts (database rows, JSON files). These models
validate them before they become the engine's frozen dataclasses.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime, time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from coachgen.models import SCREEN_FIELDS, AssessmentResult, CatalogExercise

logger = logging.getLogger(__name__)


def _normalize_non_empty(value: str, *, field_name: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError(f"{field_name} must not be empty")
    return normalized


def _normalize_optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


class CatalogExerciseRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    category: str = ""
    movement_pattern: str = ""
    description: str | None = None
    difficulty: int = Field(default=1, ge=1, le=5)
    is_active: bool = True

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, value: Any) -> Any:
        # database ids may come back as UUID or int
        if value is not None and not isinstance(value, str):
            return str(value)
        return value

    @field_validator("id", "name")
    @classmethod
    def not_empty(cls, value: str, info) -> str:
        return _normalize_non_empty(value, field_name=info.field_name)

    @field_validator("category", "movement_pattern", mode="before")
    @classmethod
    def none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("description")
    @classmethod
    def optional_description(cls, value: str | None) -> str | None:
        return _normalize_optional_text(value)

    def to_exercise(self) -> CatalogExercise:
        return CatalogExercise(
            id=self.id,
            name=self.name,
            category=self.category.strip(),
            movement_pattern=self.movement_pattern.strip(),
            description=self.description,
            difficulty=self.difficulty,
            is_active=self.is_active,
        )


class AssessmentRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    deep_squat: int = Field(ge=0, le=3)
    hurdle_step: int = Field(ge=0, le=3)
    inline_lunge: int = Field(ge=0, le=3)
    shoulder_mobility: int = Field(ge=0, le=3)
    active_straight_leg_raise: int = Field(ge=0, le=3)
    trunk_stability_pushup: int = Field(ge=0, le=3)
    rotary_stability: int = Field(ge=0, le=3)
    notes: str | None = None
    assessed_at: datetime | None = None
    date: datetime | None = None
    created_at: datetime | None = None

    @field_validator("date", mode="before")
    @classmethod
    def date_at_midnight(cls, value: Any) -> Any:
        # DATE columns arrive as datetime.date
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time.min)
        return value

    @field_validator("notes")
    @classmethod
    def optional_notes(cls, value: str | None) -> str | None:
        return _normalize_optional_text(value)

    @model_validator(mode="after")
    def resolve_timestamp(self) -> AssessmentRecord:
        # stores name the timestamp differently; prefer the ones carrying a time of day
        timestamp = self.assessed_at or self.created_at or self.date
        if timestamp is None:
            raise ValueError("assessment needs one of assessed_at, created_at or date")
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        self.assessed_at = timestamp
        return self

    def to_assessment(self) -> AssessmentResult:
        scores = {screen: getattr(self, screen) for screen in SCREEN_FIELDS}
        return AssessmentResult(**scores, assessed_at=self.assessed_at, notes=self.notes)


def load_catalog(rows: Iterable[dict[str, Any]]) -> list[CatalogExercise]:
    """Validate catalog rows, skipping (and logging) the ones that fail."""
    exercises: list[CatalogExercise] = []
    skipped = 0
    for row in rows:
        try:
            exercises.append(CatalogExerciseRecord.model_validate(row).to_exercise())
        except ValidationError as exc:
            skipped += 1
            logger.warning(
                "Skipping invalid catalog row id=%s: %s",
                row.get("id") if isinstance(row, dict) else None,
                exc.errors(include_url=False),
            )
    if skipped:
        logger.info("Loaded %d catalog exercises (%d skipped)", len(exercises), skipped)
    return exercises


def load_assessment(row: dict[str, Any] | None) -> AssessmentResult | None:
    """Validate an assessment row; None passes through as 'no assessment on file'."""
    if row is None:
        return None
    return AssessmentRecord.model_validate(row).to_assessment()
