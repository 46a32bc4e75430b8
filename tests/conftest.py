"""Shared fixtures: sample catalog, assessment factory, seeded rng."""

from __future__ import annotations

import random
from datetime import UTC, datetime

import pytest

from coachgen.catalog import sample_catalog
from coachgen.models import SCREEN_FIELDS, AssessmentResult, CatalogExercise


def make_assessment(default: int = 3, **scores: int) -> AssessmentResult:
    values = {screen: scores.get(screen, default) for screen in SCREEN_FIELDS}
    return AssessmentResult(**values, assessed_at=datetime(2026, 3, 1, 9, 0, tzinfo=UTC))


def make_exercise(
    exercise_id: str,
    name: str = "Exercise",
    category: str = "Strength",
    movement_pattern: str = "",
    description: str | None = None,
    **kwargs,
) -> CatalogExercise:
    return CatalogExercise(
        id=exercise_id,
        name=name,
        category=category,
        movement_pattern=movement_pattern,
        description=description,
        **kwargs,
    )


@pytest.fixture
def catalog() -> list[CatalogExercise]:
    return sample_catalog()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)
