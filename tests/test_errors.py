import pytest

from coachgen.errors import (
    AssessmentUnavailable,
    CatalogUnavailable,
    InvalidProgramDayCombination,
    SynthesisError,
    classify_error_code,
)


@pytest.mark.parametrize(
    "code,expected",
    [
        ("catalog_unavailable", "fatal"),
        ("invalid_program_day", "fatal"),
        ("assessment_unavailable", "degraded"),
        ("  Assessment_Unavailable ", "degraded"),
        ("something_else", "other"),
        ("", "other"),
        (None, "other"),
    ],
)
def test_classify_error_code(code, expected):
    assert classify_error_code(code) == expected


def test_codes_are_distinct():
    codes = {cls.code for cls in (CatalogUnavailable, AssessmentUnavailable, InvalidProgramDayCombination)}
    assert len(codes) == 3


def test_invalid_day_message():
    error = InvalidProgramDayCombination("two-day", 3, (1, 2))
    assert isinstance(error, SynthesisError)
    assert "valid days: 1, 2" in str(error)
    assert error.docs_hint


def test_docs_hint_optional():
    assert CatalogUnavailable("empty").docs_hint is None
