"""Generic program composer: interprets a DayTemplate into resolved sections."""

from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from coachgen.categorizer import is_unilateral
from coachgen.models import CatalogExercise, ProgramType, ResolvedExercise, Section
from coachgen.resolver import correction_id, placeholder_id, resolve_first
from coachgen.templates import SlotTemplate, get_template


@dataclass
class CompositionResult:
    sections: list[Section]
    corrections_used: list[str] = field(default_factory=list)
    placeholder_count: int = 0


class _CorrectionCursor:
    """Hands out correction tags in order, remembering each tag's 1-based position."""

    def __init__(self, corrections: Sequence[str]):
        self._corrections = list(corrections)
        self._next = 0

    def take(self) -> tuple[int, str] | None:
        if self._next >= len(self._corrections):
            return None
        self._next += 1
        return self._next, self._corrections[self._next - 1]

    @property
    def used(self) -> list[str]:
        return self._corrections[: self._next]


def _from_catalog(
    slot: SlotTemplate, exercise: CatalogExercise, *, placeholder_only: bool,
) -> ResolvedExercise:
    unilateral = is_unilateral(exercise)
    reps = slot.unilateral_reps if unilateral and slot.unilateral_reps else slot.reps
    instruction = slot.instruction
    if unilateral and slot.unilateral_instruction:
        instruction = slot.unilateral_instruction
    return ResolvedExercise(
        exercise_id=placeholder_id(slot.hint) if placeholder_only else exercise.id,
        name=exercise.name,
        sets=slot.sets,
        reps=reps,
        rest_seconds=slot.rest_seconds,
        instruction=instruction,
        source="placeholder" if placeholder_only else "catalog",
    )


def _placeholder(slot: SlotTemplate) -> ResolvedExercise:
    return ResolvedExercise(
        exercise_id=placeholder_id(slot.hint),
        name=slot.fallback_name,
        sets=slot.sets,
        reps=slot.reps,
        rest_seconds=slot.rest_seconds,
        instruction=slot.instruction,
        source="placeholder",
    )


def _resolve_correction(
    slot: SlotTemplate,
    pools: Mapping[str, Sequence[CatalogExercise]],
    cursor: _CorrectionCursor,
    rng: random.Random,
    *,
    placeholder_only: bool = False,
) -> ResolvedExercise:
    taken = cursor.take()
    if taken is None:
        return _placeholder(slot)

    position, tag = taken
    focus = f"Corrective focus: {tag}"
    exercise = resolve_first(slot.buckets, pools, rng) if slot.buckets else None
    if exercise is not None:
        return ResolvedExercise(
            exercise_id=placeholder_id(slot.hint) if placeholder_only else exercise.id,
            name=exercise.name,
            sets=slot.sets,
            reps=slot.reps,
            rest_seconds=slot.rest_seconds,
            instruction=focus,
            source="placeholder" if placeholder_only else "catalog",
        )
    return ResolvedExercise(
        exercise_id=correction_id(position),
        name=tag,
        sets=slot.sets,
        reps=slot.reps,
        rest_seconds=slot.rest_seconds,
        instruction=focus,
        source="correction",
    )


def compose(
    program_type: ProgramType | str,
    day: int,
    pools: Mapping[str, Sequence[CatalogExercise]],
    corrections: Sequence[str],
    rng: random.Random,
    *,
    placeholder_only: bool = False,
) -> CompositionResult:
    """Fill the (program_type, day) template.

    Raises InvalidProgramDayCombination before any slot is resolved.
    ``placeholder_only`` keeps the resolved exercise name but reports the
    slot's placeholder id (and source) instead of the catalog id, correction
    slots filled from the catalog included.
    """
    template = get_template(program_type, day)
    cursor = _CorrectionCursor(corrections)
    placeholders = 0
    sections: list[Section] = []

    for section_template in template.sections:
        section = Section(name=section_template.name)
        for slot in section_template.slots:
            if slot.correction:
                resolved = _resolve_correction(
                    slot, pools, cursor, rng, placeholder_only=placeholder_only,
                )
            else:
                exercise = resolve_first(slot.buckets, pools, rng)
                if exercise is None:
                    if slot.optional:
                        continue
                    resolved = _placeholder(slot)
                    placeholders += 1
                else:
                    resolved = _from_catalog(slot, exercise, placeholder_only=placeholder_only)
            section.exercises.append(resolved)
        sections.append(section)

    return CompositionResult(
        sections=sections,
        corrections_used=cursor.used,
        placeholder_count=placeholders,
    )
