"""Tests for inbound catalog and assessment row contracts."""

import logging
import uuid
from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from coachgen.contracts import (
    AssessmentRecord,
    CatalogExerciseRecord,
    load_assessment,
    load_catalog,
)

SCORES = {
    "deep_squat": 1,
    "hurdle_step": 2,
    "inline_lunge": 3,
    "shoulder_mobility": 2,
    "active_straight_leg_raise": 0,
    "trunk_stability_pushup": 3,
    "rotary_stability": 2,
}


class TestCatalogExerciseRecord:
    def test_minimal_row(self):
        ex = CatalogExerciseRecord.model_validate({"id": "ex-1", "name": "Push-up"}).to_exercise()
        assert ex.id == "ex-1"
        assert ex.category == ""
        assert ex.movement_pattern == ""
        assert ex.difficulty == 1
        assert ex.is_active

    def test_uuid_id_becomes_text(self):
        exercise_id = uuid.uuid4()
        record = CatalogExerciseRecord.model_validate({"id": exercise_id, "name": "Row"})
        assert record.id == str(exercise_id)

    def test_null_labels_and_blank_description(self):
        record = CatalogExerciseRecord.model_validate({
            "id": "ex-1", "name": " Row ", "category": None,
            "movement_pattern": None, "description": "   ",
        })
        assert record.name == "Row"
        assert record.category == ""
        assert record.description is None

    def test_extra_columns_ignored(self):
        record = CatalogExerciseRecord.model_validate(
            {"id": "ex-1", "name": "Row", "created_at": "2026-01-01"},
        )
        assert not hasattr(record, "created_at")

    @pytest.mark.parametrize("difficulty", [0, 6])
    def test_difficulty_range(self, difficulty):
        with pytest.raises(ValidationError):
            CatalogExerciseRecord.model_validate({"id": "ex-1", "name": "Row", "difficulty": difficulty})

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError, match="name must not be empty"):
            CatalogExerciseRecord.model_validate({"id": "ex-1", "name": "  "})


class TestLoadCatalog:
    def test_skips_invalid_rows(self, caplog):
        rows = [
            {"id": "ex-1", "name": "Push-up"},
            {"id": "ex-2", "name": ""},
            {"name": "No id"},
            {"id": "ex-3", "name": "Row", "difficulty": 9},
        ]
        with caplog.at_level(logging.WARNING, logger="coachgen.contracts"):
            exercises = load_catalog(rows)
        assert [ex.id for ex in exercises] == ["ex-1"]
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 3


class TestAssessmentRecord:
    def test_to_assessment(self):
        assessment = AssessmentRecord.model_validate(
            {**SCORES, "assessed_at": "2026-03-01T09:00:00+00:00", "notes": " tight hips "},
        ).to_assessment()
        assert assessment.deep_squat == 1
        assert assessment.total_score == 13
        assert assessment.notes == "tight hips"
        assert assessment.assessed_at == datetime(2026, 3, 1, 9, tzinfo=UTC)

    def test_created_at_preferred_over_date(self):
        record = AssessmentRecord.model_validate(
            {**SCORES, "date": date(2026, 1, 5), "created_at": datetime(2026, 1, 5, 8, 30)},
        )
        assert record.assessed_at == datetime(2026, 1, 5, 8, 30, tzinfo=UTC)

    def test_date_column_alone_is_midnight_utc(self):
        from_date = AssessmentRecord.model_validate({**SCORES, "date": date(2026, 2, 1)})
        assert from_date.assessed_at == datetime(2026, 2, 1, tzinfo=UTC)
        from_text = AssessmentRecord.model_validate({**SCORES, "date": "2026-02-01T00:00:00"})
        assert from_text.assessed_at == datetime(2026, 2, 1, tzinfo=UTC)

    def test_missing_timestamp_rejected(self):
        with pytest.raises(ValidationError, match="assessed_at"):
            AssessmentRecord.model_validate(SCORES)

    @pytest.mark.parametrize("score", [-1, 4])
    def test_score_range(self, score):
        with pytest.raises(ValidationError):
            AssessmentRecord.model_validate(
                {**SCORES, "deep_squat": score, "assessed_at": "2026-03-01T09:00:00Z"},
            )

    def test_missing_screen_rejected(self):
        row = {k: v for k, v in SCORES.items() if k != "rotary_stability"}
        with pytest.raises(ValidationError):
            AssessmentRecord.model_validate({**row, "assessed_at": "2026-03-01T09:00:00Z"})


def test_load_assessment_none():
    assert load_assessment(None) is None


def test_load_assessment_row():
    assessment = load_assessment({**SCORES, "created_at": "2026-03-01T09:00:00Z"})
    assert assessment.active_straight_leg_raise == 0
