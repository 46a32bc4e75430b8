"""Program synthesis engine: categorize, recommend, compose, annotate.

Generation itself is synchronous and pure. The async ``generate`` wrapper only
awaits the two store reads before handing over to ``synthesize``.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from datetime import UTC, date, datetime

from coachgen.categorizer import categorize
from coachgen.composer import compose
from coachgen.corrections import recommend
from coachgen.errors import CatalogUnavailable, SynthesisError
from coachgen.models import AssessmentResult, CatalogExercise, GeneratedProgram, ProgramType
from coachgen.stores import AssessmentStore, CatalogStore
from coachgen.templates import get_template, validate_program_day
from coachgen.weights import DEFAULT_LOAD_KG, annotate

logger = logging.getLogger(__name__)


def summary_notes(title: str, corrections_used: int, placeholder_count: int) -> str:
    notes = (
        f"Generated program - {title}. "
        f"Includes {corrections_used} corrective exercise recommendation(s)."
    )
    if placeholder_count:
        notes += (
            f" {placeholder_count} slot(s) have no matching catalog exercise"
            " and use a placeholder; the plan is incomplete."
        )
    return notes


class ProgramSynthesisEngine:
    """Builds one training day from a catalog snapshot and an optional assessment."""

    def __init__(
        self,
        *,
        seed: int | None = None,
        include_weights: bool = True,
        adjust_for_assessment: bool = True,
        default_load_kg: float = DEFAULT_LOAD_KG,
        placeholder_only_programs: Iterable[str] = (),
    ):
        self.seed = seed
        self.include_weights = include_weights
        self.adjust_for_assessment = adjust_for_assessment
        self.default_load_kg = default_load_kg
        self.placeholder_only_programs = frozenset(placeholder_only_programs)

    def new_rng(self) -> random.Random:
        """A fresh random source per call; seeded calls repeat exactly."""
        return random.Random(self.seed)

    def synthesize(
        self,
        user_id: str,
        program_type: ProgramType | str,
        day: int,
        exercises: Iterable[CatalogExercise],
        assessment: AssessmentResult | None = None,
        *,
        on: date | None = None,
        rng: random.Random | None = None,
    ) -> GeneratedProgram:
        validate_program_day(program_type, day)

        active = [exercise for exercise in exercises if exercise.is_active]
        if not active:
            raise CatalogUnavailable(
                "Catalog has no active exercises",
                docs_hint="Add or activate exercises before generating a program.",
            )

        rng = rng or self.new_rng()
        template = get_template(program_type, day)

        pools = categorize(active)
        corrections = recommend(assessment if self.adjust_for_assessment else None, rng)
        result = compose(
            program_type, day, pools, corrections, rng,
            placeholder_only=program_type in self.placeholder_only_programs,
        )
        if self.include_weights:
            annotate(result.sections, self.default_load_kg)

        program = GeneratedProgram(
            title=template.title,
            description=template.description,
            date=on or datetime.now(UTC).date(),
            sections=result.sections,
            notes=summary_notes(
                template.title, len(result.corrections_used), result.placeholder_count,
            ),
            user_id=user_id,
            program_type=program_type,
            day=day,
            corrections=tuple(result.corrections_used),
            placeholder_count=result.placeholder_count,
        )

        logger.info(
            "Generated %s day %d for user=%s (%d sections, %d placeholders)",
            program_type, day, user_id, len(program.sections), program.placeholder_count,
            extra={
                "coachgen_user_id": user_id,
                "coachgen_program_type": program_type,
                "coachgen_day": day,
                "coachgen_placeholder_count": program.placeholder_count,
                "coachgen_corrections": len(program.corrections),
            },
        )
        return program

    async def generate(
        self,
        user_id: str,
        program_type: ProgramType | str,
        day: int,
        catalog: CatalogStore,
        assessments: AssessmentStore | None = None,
        *,
        on: date | None = None,
    ) -> GeneratedProgram:
        """Fetch both snapshots, then synthesize.

        The (program_type, day) pair is checked before any store is touched.
        """
        validate_program_day(program_type, day)

        try:
            exercises = await catalog.list_active_exercises()
        except SynthesisError:
            raise
        except Exception as exc:
            raise CatalogUnavailable(f"Catalog fetch failed: {exc}") from exc

        assessment = None
        if self.adjust_for_assessment and assessments is not None:
            assessment = await self._latest_assessment(assessments, user_id)

        return self.synthesize(user_id, program_type, day, exercises, assessment, on=on)

    async def _latest_assessment(
        self, assessments: AssessmentStore, user_id: str,
    ) -> AssessmentResult | None:
        try:
            return await assessments.latest_assessment(user_id)
        except Exception as exc:  # AssessmentUnavailable or a store bug; both degrade
            logger.warning(
                "Assessment unavailable for user=%s, continuing without corrections: %s",
                user_id, exc,
                extra={"coachgen_user_id": user_id},
            )
            return None
