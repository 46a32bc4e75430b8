"""Tests for catalog, assessment and workout stores.

PostgreSQL stores run against mock connections; no database needed.
"""

from dataclasses import replace
from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, MagicMock

import psycopg
import pytest
from psycopg.types.json import Jsonb

from coachgen.errors import AssessmentUnavailable, CatalogUnavailable
from coachgen.models import GeneratedProgram, ResolvedExercise, Section
from coachgen.output import load_sections
from coachgen.stores import (
    InMemoryAssessmentStore,
    InMemoryCatalogStore,
    InMemoryWorkoutStore,
    PostgresAssessmentStore,
    PostgresCatalogStore,
    PostgresWorkoutStore,
)

from tests.conftest import make_assessment, make_exercise


# ---------------------------------------------------------------------------
# Helper: mock DB connection
# ---------------------------------------------------------------------------


def _make_mock_cursor(rows):
    cursor = AsyncMock()
    cursor.fetchall = AsyncMock(return_value=rows)
    cursor.fetchone = AsyncMock(return_value=rows[0] if rows else None)
    cursor.execute = AsyncMock()
    return cursor


class _MockContext:
    def __init__(self, value=None):
        self.value = value

    async def __aenter__(self):
        return self.value

    async def __aexit__(self, *args):
        return False


def _make_conn(cursor):
    conn = AsyncMock()
    conn.cursor = MagicMock(side_effect=lambda *args, **kwargs: _MockContext(cursor))
    conn.transaction = MagicMock(side_effect=lambda *args, **kwargs: _MockContext())
    return conn


def _program():
    return GeneratedProgram(
        title="Two-day program: Day 1",
        description="Full-body session, bilateral emphasis.",
        date=date(2026, 3, 2),
        sections=[Section("Corrective", [
            ResolvedExercise("placeholder-correction", "Corrective exercise (optional)", 2, "8-10", 60,
                             source="placeholder"),
        ])],
        notes="Generated program",
        user_id="u1",
        program_type="two-day",
        day=1,
    )


ASSESSMENT_ROW = {
    "deep_squat": 1,
    "hurdle_step": 3,
    "inline_lunge": 3,
    "shoulder_mobility": 2,
    "active_straight_leg_raise": 3,
    "trunk_stability_pushup": 3,
    "rotary_stability": 2,
    "notes": None,
    "date": date(2026, 3, 1),
    "created_at": datetime(2026, 3, 1, 9, tzinfo=UTC),
}


# ---------------------------------------------------------------------------
# In-memory stores
# ---------------------------------------------------------------------------


class TestInMemoryStores:
    async def test_catalog_filters_inactive(self):
        store = InMemoryCatalogStore([make_exercise("a"), make_exercise("b", is_active=False)])
        assert [ex.id for ex in await store.list_active_exercises()] == ["a"]

    async def test_latest_assessment(self):
        older = make_assessment(deep_squat=0)
        newer = replace(older, assessed_at=datetime(2026, 4, 1, tzinfo=UTC))
        store = InMemoryAssessmentStore({"u1": [newer, older]})
        assert await store.latest_assessment("u1") is newer
        assert await store.latest_assessment("u2") is None

    async def test_workout_store_records(self):
        store = InMemoryWorkoutStore()
        assert await store.save_program(_program()) == "workout-1"
        assert await store.save_program(_program()) == "workout-2"
        assert store.saved[0]["sections"][0]["name"] == "Corrective"


# ---------------------------------------------------------------------------
# PostgreSQL stores
# ---------------------------------------------------------------------------


class TestPostgresCatalogStore:
    async def test_loads_rows(self):
        cursor = _make_mock_cursor([
            {"id": 1, "name": "Push-up", "category": "Strength",
             "movement_pattern": "Horizontal push - bilateral", "description": None,
             "difficulty": 2, "is_active": True},
            {"id": 2, "name": "", "category": None, "movement_pattern": None,
             "description": None, "difficulty": 1, "is_active": True},
        ])
        exercises = await PostgresCatalogStore(_make_conn(cursor)).list_active_exercises()
        assert [(ex.id, ex.name) for ex in exercises] == [("1", "Push-up")]
        assert "FROM exercises" in cursor.execute.call_args.args[0]

    async def test_no_usable_rows(self):
        store = PostgresCatalogStore(_make_conn(_make_mock_cursor([])))
        with pytest.raises(CatalogUnavailable):
            await store.list_active_exercises()

    async def test_database_error_wrapped(self):
        cursor = _make_mock_cursor([])
        cursor.execute.side_effect = psycopg.OperationalError("connection lost")
        with pytest.raises(CatalogUnavailable, match="connection lost"):
            await PostgresCatalogStore(_make_conn(cursor)).list_active_exercises()


class TestPostgresAssessmentStore:
    async def test_latest_row(self):
        cursor = _make_mock_cursor([ASSESSMENT_ROW])
        assessment = await PostgresAssessmentStore(_make_conn(cursor)).latest_assessment("u1")
        assert assessment.deep_squat == 1
        assert assessment.assessed_at == datetime(2026, 3, 1, 9, tzinfo=UTC)
        assert cursor.execute.call_args.args[1] == ("u1",)

    async def test_no_row(self):
        store = PostgresAssessmentStore(_make_conn(_make_mock_cursor([])))
        assert await store.latest_assessment("u1") is None

    async def test_database_error(self):
        cursor = _make_mock_cursor([])
        cursor.execute.side_effect = psycopg.errors.UndefinedTable("fms_assessments")
        with pytest.raises(AssessmentUnavailable):
            await PostgresAssessmentStore(_make_conn(cursor)).latest_assessment("u1")

    async def test_invalid_row(self):
        cursor = _make_mock_cursor([{**ASSESSMENT_ROW, "deep_squat": 7}])
        with pytest.raises(AssessmentUnavailable, match="invalid"):
            await PostgresAssessmentStore(_make_conn(cursor)).latest_assessment("u1")


class TestPostgresWorkoutStore:
    async def test_structured_insert(self):
        cursor = _make_mock_cursor([("w-1",)])
        workout_id = await PostgresWorkoutStore(_make_conn(cursor)).save_program(_program())
        assert workout_id == "w-1"
        params = cursor.execute.call_args.args[1]
        assert isinstance(params[5], Jsonb)
        assert params[0] == "u1"

    async def test_falls_back_to_json_text(self):
        cursor = _make_mock_cursor([("w-2",)])
        cursor.execute.side_effect = [psycopg.errors.DatatypeMismatch("sections is text"), None]
        conn = _make_conn(cursor)

        workout_id = await PostgresWorkoutStore(conn).save_program(_program())

        assert workout_id == "w-2"
        assert cursor.execute.call_count == 2
        assert conn.transaction.call_count == 2
        text_sections = cursor.execute.call_args_list[1].args[1][5]
        assert isinstance(text_sections, str)
        assert load_sections(text_sections) == _program().sections

    async def test_other_errors_propagate(self):
        cursor = _make_mock_cursor([("w-3",)])
        cursor.execute.side_effect = psycopg.errors.UniqueViolation("duplicate")
        with pytest.raises(psycopg.errors.UniqueViolation):
            await PostgresWorkoutStore(_make_conn(cursor)).save_program(_program())
        assert cursor.execute.call_count == 1
