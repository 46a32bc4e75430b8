"""Catalog, assessment and workout stores.

The engine only depends on the Protocols below. Two implementations ship:
in-memory stores (tests, file-based CLI runs) and PostgreSQL stores on an
async psycopg connection.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any, Protocol

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb
from pydantic import ValidationError

from coachgen.contracts import load_assessment, load_catalog
from coachgen.errors import AssessmentUnavailable, CatalogUnavailable
from coachgen.models import AssessmentResult, CatalogExercise, GeneratedProgram
from coachgen.output import program_to_record

logger = logging.getLogger(__name__)


class CatalogStore(Protocol):
    async def list_active_exercises(self) -> list[CatalogExercise]: ...


class AssessmentStore(Protocol):
    async def latest_assessment(self, user_id: str) -> AssessmentResult | None: ...


class WorkoutStore(Protocol):
    async def save_program(self, program: GeneratedProgram) -> str: ...


# --- In-memory ---


class InMemoryCatalogStore:
    def __init__(self, exercises: Iterable[CatalogExercise]):
        self._exercises = list(exercises)

    async def list_active_exercises(self) -> list[CatalogExercise]:
        return [exercise for exercise in self._exercises if exercise.is_active]


class InMemoryAssessmentStore:
    def __init__(self, assessments: dict[str, list[AssessmentResult]] | None = None):
        self._assessments = {user: list(items) for user, items in (assessments or {}).items()}

    def add(self, user_id: str, assessment: AssessmentResult) -> None:
        self._assessments.setdefault(user_id, []).append(assessment)

    async def latest_assessment(self, user_id: str) -> AssessmentResult | None:
        items = self._assessments.get(user_id)
        if not items:
            return None
        return max(items, key=lambda a: a.assessed_at)


class InMemoryWorkoutStore:
    def __init__(self) -> None:
        self.saved: list[dict[str, Any]] = []

    async def save_program(self, program: GeneratedProgram) -> str:
        record = program_to_record(program)
        record["id"] = f"workout-{len(self.saved) + 1}"
        self.saved.append(record)
        return record["id"]


# --- PostgreSQL ---

_CATALOG_QUERY = """
    SELECT id, name, category, movement_pattern, description, difficulty, is_active
    FROM exercises
    WHERE is_active
    ORDER BY created_at DESC
"""

_ASSESSMENT_QUERY = """
    SELECT deep_squat, hurdle_step, inline_lunge, shoulder_mobility,
           active_straight_leg_raise, trunk_stability_pushup, rotary_stability,
           notes, date, created_at
    FROM fms_assessments
    WHERE user_id = %s
    ORDER BY created_at DESC
    LIMIT 1
"""

_INSERT_WORKOUT = """
    INSERT INTO workouts (user_id, title, description, date, duration, sections, notes)
    VALUES (%s, %s, %s, %s, %s, %s, %s)
    RETURNING id
"""

# Raised when the sections column will not take a JSON document
# (e.g. a text column on an older schema).
_STRUCTURED_WRITE_ERRORS = (
    psycopg.errors.DatatypeMismatch,
    psycopg.errors.InvalidTextRepresentation,
    psycopg.errors.CannotCoerce,
)


class PostgresCatalogStore:
    def __init__(self, conn: psycopg.AsyncConnection):
        self.conn = conn

    async def list_active_exercises(self) -> list[CatalogExercise]:
        try:
            async with self.conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(_CATALOG_QUERY)
                rows = await cur.fetchall()
        except psycopg.Error as exc:
            raise CatalogUnavailable(f"Catalog query failed: {exc}") from exc

        exercises = load_catalog(rows)
        if not exercises:
            raise CatalogUnavailable("Catalog returned no usable exercises")
        return exercises


class PostgresAssessmentStore:
    def __init__(self, conn: psycopg.AsyncConnection):
        self.conn = conn

    async def latest_assessment(self, user_id: str) -> AssessmentResult | None:
        try:
            async with self.conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(_ASSESSMENT_QUERY, (user_id,))
                row = await cur.fetchone()
        except psycopg.Error as exc:
            raise AssessmentUnavailable(f"Assessment query failed: {exc}") from exc

        try:
            return load_assessment(row)
        except ValidationError as exc:
            raise AssessmentUnavailable(f"Stored assessment is invalid: {exc}") from exc


class PostgresWorkoutStore:
    """Persists generated programs.

    ``sections`` is written as a JSON document. When the column rejects that
    form, the write is retried inside a fresh savepoint as JSON text; readers
    go through output.load_sections, which accepts both.
    """

    def __init__(self, conn: psycopg.AsyncConnection):
        self.conn = conn

    async def save_program(self, program: GeneratedProgram) -> str:
        record = program_to_record(program)
        try:
            async with self.conn.transaction():
                return await self._insert(record, Jsonb(record["sections"]))
        except _STRUCTURED_WRITE_ERRORS as exc:
            logger.warning(
                "Structured sections rejected (%s), retrying as JSON text",
                type(exc).__name__,
                extra={"coachgen_user_id": program.user_id},
            )

        async with self.conn.transaction():
            return await self._insert(record, json.dumps(record["sections"], ensure_ascii=False))

    async def _insert(self, record: dict[str, Any], sections: Any) -> str:
        async with self.conn.cursor() as cur:
            await cur.execute(
                _INSERT_WORKOUT,
                (
                    record["user_id"],
                    record["title"],
                    record["description"],
                    record["date"],
                    record["duration"],
                    sections,
                    record["notes"],
                ),
            )
            row = await cur.fetchone()
        return str(row[0])
