"""Error taxonomy for program synthesis.

Fatal errors abort generation and reach the caller. Degrading errors are
absorbed by the engine and only show up in the program metadata.
"""

from __future__ import annotations

from typing import Literal

ErrorClass = Literal["fatal", "degraded", "other"]


class SynthesisError(Exception):
    code = "synthesis_error"

    def __init__(self, message: str, *, docs_hint: str | None = None) -> None:
        super().__init__(message)
        self.docs_hint = docs_hint


class CatalogUnavailable(SynthesisError):
    """Catalog fetch failed or returned no usable exercise."""

    code = "catalog_unavailable"


class AssessmentUnavailable(SynthesisError):
    """Assessment fetch failed; generation continues without corrections."""

    code = "assessment_unavailable"


class InvalidProgramDayCombination(SynthesisError):
    code = "invalid_program_day"

    def __init__(self, program_type: str, day: object, valid_days: tuple[int, ...] = ()) -> None:
        if valid_days:
            message = (
                f"Day {day!r} is not valid for program type {program_type!r} "
                f"(valid days: {', '.join(str(d) for d in valid_days)})"
            )
        else:
            message = f"Unknown program type {program_type!r}"
        super().__init__(
            message,
            docs_hint="Use two-day (days 1-2), three-day (days 1-3) or four-day (days 1-4).",
        )
        self.program_type = program_type
        self.day = day
        self.valid_days = valid_days


ERROR_CLASS_BY_CODE: dict[str, ErrorClass] = {
    CatalogUnavailable.code: "fatal",
    InvalidProgramDayCombination.code: "fatal",
    AssessmentUnavailable.code: "degraded",
}


def classify_error_code(error_code: str | None) -> ErrorClass:
    normalized = str(error_code or "").strip().lower()
    if not normalized:
        return "other"
    return ERROR_CLASS_BY_CODE.get(normalized, "other")
