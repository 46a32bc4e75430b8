"""Core data models for program synthesis."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

ProgramType = Literal["two-day", "three-day", "four-day"]
ExerciseSource = Literal["catalog", "correction", "placeholder"]

PROGRAM_DURATION_MINUTES = 60

SCREEN_FIELDS: tuple[str, ...] = (
    "deep_squat",
    "hurdle_step",
    "inline_lunge",
    "shoulder_mobility",
    "active_straight_leg_raise",
    "trunk_stability_pushup",
    "rotary_stability",
)


@dataclass(frozen=True)
class CatalogExercise:
    """Exercise as supplied by the catalog store. Never mutated by the engine."""

    id: str
    name: str
    category: str
    movement_pattern: str
    description: str | None = None
    difficulty: int = 1  # 1-5
    is_active: bool = True


@dataclass(frozen=True)
class AssessmentResult:
    """Latest movement-screen result for a user (each screen scored 0-3)."""

    deep_squat: int
    hurdle_step: int
    inline_lunge: int
    shoulder_mobility: int
    active_straight_leg_raise: int
    trunk_stability_pushup: int
    rotary_stability: int
    assessed_at: datetime
    notes: str | None = None

    def score(self, screen: str) -> int:
        if screen not in SCREEN_FIELDS:
            raise KeyError(screen)
        return getattr(self, screen)

    @property
    def total_score(self) -> int:
        return sum(self.score(screen) for screen in SCREEN_FIELDS)


@dataclass
class ResolvedExercise:
    """One filled slot of a generated program.

    Only ``weight`` changes after creation (see weights.annotate).
    """

    exercise_id: str
    name: str
    sets: int
    reps: str
    rest_seconds: int
    instruction: str | None = None
    weight: float | None = None
    source: ExerciseSource = "catalog"

    @property
    def is_placeholder(self) -> bool:
        return self.exercise_id.startswith("placeholder-")


@dataclass
class Section:
    name: str
    exercises: list[ResolvedExercise] = field(default_factory=list)


@dataclass
class GeneratedProgram:
    """A single training day ready to hand to the workout store."""

    title: str
    description: str
    date: date
    sections: list[Section]
    notes: str
    user_id: str
    program_type: ProgramType
    day: int
    corrections: tuple[str, ...] = ()
    placeholder_count: int = 0
    duration: int = PROGRAM_DURATION_MINUTES

    @property
    def degraded(self) -> bool:
        """True when at least one slot had no matching catalog exercise."""
        return self.placeholder_count > 0

    def exercises(self) -> list[ResolvedExercise]:
        return [ex for section in self.sections for ex in section.exercises]
