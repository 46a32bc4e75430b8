"""Static program templates, keyed by (program type, day).

Templates are plain data; composer.compose is the only code that reads them.
A slot lists its buckets in preference order: the first bucket with an
exercise wins. Correction slots consume the next correction tag instead.
"""

from __future__ import annotations

from dataclasses import dataclass

from coachgen.categorizer import (
    CORE,
    CORRECTIVE,
    GAIT,
    HIP_EXTENDED,
    HIP_FLEXED,
    HORIZONTAL_PULL_BILATERAL,
    HORIZONTAL_PULL_UNILATERAL,
    HORIZONTAL_PUSH_BILATERAL,
    HORIZONTAL_PUSH_UNILATERAL,
    KNEE_BILATERAL,
    KNEE_UNILATERAL,
    PLYOMETRIC,
    REHAB,
    ROTATIONAL,
    STRETCH,
    VERTICAL_PULL_BILATERAL,
    VERTICAL_PUSH_BILATERAL,
    VERTICAL_PUSH_UNILATERAL,
    WARMUP,
)
from coachgen.errors import InvalidProgramDayCombination
from coachgen.models import ProgramType

PROGRAM_DAYS: dict[str, tuple[int, ...]] = {
    "two-day": (1, 2),
    "three-day": (1, 2, 3),
    "four-day": (1, 2, 3, 4),
}

BOTH_SIDES = "Perform on both sides"
OPTIONAL_CORRECTION = "Optional corrective exercise; skip it if no correction is needed"


@dataclass(frozen=True)
class SlotTemplate:
    buckets: tuple[str, ...]
    sets: int
    reps: str
    rest_seconds: int
    hint: str  # placeholder-<hint> when nothing resolves
    fallback_name: str
    instruction: str | None = None
    correction: bool = False
    optional: bool = False  # dropped instead of placeholdered
    unilateral_reps: str | None = None
    unilateral_instruction: str | None = None


@dataclass(frozen=True)
class SectionTemplate:
    name: str
    slots: tuple[SlotTemplate, ...]


@dataclass(frozen=True)
class DayTemplate:
    title: str
    description: str
    sections: tuple[SectionTemplate, ...]

    @property
    def section_names(self) -> list[str]:
        return [section.name for section in self.sections]


def _repeat(count: int, slot: SlotTemplate) -> tuple[SlotTemplate, ...]:
    return (slot,) * count


def _correction(
    sets: int, reps: str, rest_seconds: int, *, from_catalog: bool = False,
) -> SlotTemplate:
    return SlotTemplate(
        buckets=(CORRECTIVE,) if from_catalog else (),
        sets=sets,
        reps=reps,
        rest_seconds=rest_seconds,
        hint="correction",
        fallback_name="Corrective exercise (optional)",
        instruction=OPTIONAL_CORRECTION,
        correction=True,
    )


# --- Shared building blocks ---

_WARMUP = SlotTemplate((WARMUP,), 1, "30-60 s", 0, "warmup", "Dynamic warm-up")
_PLYO = SlotTemplate((PLYOMETRIC,), 3, "5-8", 90, "plyo", "Plyometric exercise")
_CORE = SlotTemplate((CORE,), 3, "10-12", 60, "core", "Core exercise")
_HIP_FLEXOR_STRETCH = SlotTemplate(
    (STRETCH,), 2, "30 s/side", 0, "stretch", "Hip-flexor stretch", instruction=BOTH_SIDES,
)
_ROTATIONAL = SlotTemplate(
    (ROTATIONAL, REHAB), 3, "10 per side", 60, "rotational", "Rotational or rehab exercise",
)

_PUSH_HORIZONTAL_FIRST = (
    HORIZONTAL_PUSH_BILATERAL, HORIZONTAL_PUSH_UNILATERAL,
    VERTICAL_PUSH_BILATERAL, VERTICAL_PUSH_UNILATERAL,
)
_PUSH_VERTICAL_FIRST = (
    VERTICAL_PUSH_BILATERAL, VERTICAL_PUSH_UNILATERAL,
    HORIZONTAL_PUSH_BILATERAL, HORIZONTAL_PUSH_UNILATERAL,
)
_PULL_BILATERAL = (HORIZONTAL_PULL_BILATERAL, VERTICAL_PULL_BILATERAL)


def _gait(sets: int, rest_seconds: int) -> SlotTemplate:
    return SlotTemplate(
        (GAIT,), sets, "20-30 m", rest_seconds, "gait", "Gait exercise",
        instruction="Gait pattern practice", optional=True,
    )


def _big_slot(
    buckets: tuple[str, ...], sets: int, reps: str, hint: str, fallback: str, **kwargs,
) -> SlotTemplate:
    return SlotTemplate(buckets, sets, reps, kwargs.pop("rest_seconds", 90), hint, fallback, **kwargs)


# --- Two-day program: full body, tag-backed corrections ---

_TWO_DAY_CORRECTION = _correction(2, "8-10", 60)

TWO_DAY_1 = DayTemplate(
    title="Two-day program: Day 1",
    description="Full-body session, bilateral emphasis.",
    sections=(
        SectionTemplate("Corrective", (_TWO_DAY_CORRECTION,)),
        SectionTemplate("First circuit", (
            _big_slot((KNEE_BILATERAL,), 4, "8-10", "knee-bi", "Knee-dominant bilateral exercise"),
            _TWO_DAY_CORRECTION,
            _big_slot(
                (HORIZONTAL_PUSH_BILATERAL,), 4, "8-10", "hpush-bi",
                "Horizontal push bilateral exercise",
            ),
        )),
        SectionTemplate("Second circuit", (
            _big_slot((VERTICAL_PULL_BILATERAL,), 4, "8-10", "vpull-bi", "Vertical pull exercise"),
            _TWO_DAY_CORRECTION,
            _big_slot((HIP_EXTENDED,), 4, "8-10", "hip-extended", "Hip-dominant bilateral exercise"),
        )),
    ),
)

TWO_DAY_2 = DayTemplate(
    title="Two-day program: Day 2",
    description="Full-body session, unilateral emphasis.",
    sections=(
        SectionTemplate("Corrective", (_TWO_DAY_CORRECTION,)),
        SectionTemplate("First circuit", (
            _big_slot(
                (KNEE_UNILATERAL,), 4, "8-10/side", "knee-uni",
                "Knee-dominant unilateral exercise",
            ),
            _TWO_DAY_CORRECTION,
            _big_slot((VERTICAL_PUSH_BILATERAL,), 4, "8-10", "vpush-bi", "Vertical push exercise"),
        )),
        SectionTemplate("Second circuit", (
            _big_slot(
                (HORIZONTAL_PULL_BILATERAL,), 4, "8-10", "hpull-bi",
                "Horizontal pull bilateral exercise",
            ),
            _TWO_DAY_CORRECTION,
            _big_slot((HIP_FLEXED,), 4, "8-10/side", "hip-flexed", "Hip-dominant unilateral exercise"),
        )),
    ),
)

# --- Three-day program: pair + triplet, tag-backed corrections ---

_THREE_DAY_CORRECTION = _correction(2, "8-10", 60)

THREE_DAY_1 = DayTemplate(
    title="Three-day program: Day 1",
    description="Structured session: knee-dominant and vertical pull focus.",
    sections=(
        SectionTemplate("Corrective", (_THREE_DAY_CORRECTION,)),
        SectionTemplate("First pair", (
            _big_slot((KNEE_BILATERAL,), 3, "8-10", "knee-bi", "Knee-dominant bilateral exercise"),
            _THREE_DAY_CORRECTION,
            _big_slot((VERTICAL_PULL_BILATERAL,), 3, "8-10", "vpull-bi", "Vertical pull exercise"),
        )),
        SectionTemplate("First triplet", (
            _big_slot(
                (KNEE_UNILATERAL,), 3, "8-10", "knee-uni", "Knee-dominant unilateral exercise",
            ),
            _big_slot(
                (HORIZONTAL_PUSH_UNILATERAL,), 3, "8-10", "hpush-uni",
                "Horizontal push unilateral exercise",
            ),
            _THREE_DAY_CORRECTION,
            _big_slot((HIP_EXTENDED,), 3, "8-10", "hip-extended", "Hip-dominant bilateral exercise"),
        )),
    ),
)

THREE_DAY_2 = DayTemplate(
    title="Three-day program: Day 2",
    description="Structured session: pressing and hip-hinge focus.",
    sections=(
        SectionTemplate("Corrective", (_THREE_DAY_CORRECTION,)),
        SectionTemplate("First pair", (
            _big_slot(
                (HORIZONTAL_PUSH_BILATERAL,), 3, "8-10", "hpush-bi",
                "Horizontal push bilateral exercise",
            ),
            _THREE_DAY_CORRECTION,
            _big_slot(
                (KNEE_UNILATERAL,), 3, "8-10", "knee-uni", "Knee-dominant unilateral exercise",
            ),
        )),
        SectionTemplate("First triplet", (
            _big_slot((VERTICAL_PUSH_BILATERAL,), 3, "8-10", "vpush-bi", "Vertical push exercise"),
            _big_slot(
                (HORIZONTAL_PULL_BILATERAL,), 3, "8-10", "hpull-bi",
                "Horizontal pull bilateral exercise",
            ),
            _THREE_DAY_CORRECTION,
            _big_slot((HIP_FLEXED,), 3, "8-10", "hip-flexed", "Hip-dominant unilateral exercise"),
        )),
    ),
)

THREE_DAY_3 = DayTemplate(
    title="Three-day program: Day 3",
    description="Structured session: unilateral upper body and gait.",
    sections=(
        SectionTemplate("Corrective", (_THREE_DAY_CORRECTION,)),
        SectionTemplate("First pair", (
            _big_slot((KNEE_BILATERAL,), 3, "8-10", "knee-bi", "Knee-dominant bilateral exercise"),
            _THREE_DAY_CORRECTION,
            _big_slot((VERTICAL_PULL_BILATERAL,), 3, "8-10", "vpull-bi", "Vertical pull exercise"),
        )),
        SectionTemplate("First triplet", (
            _big_slot(
                (HORIZONTAL_PUSH_UNILATERAL,), 3, "8-10", "hpush-uni",
                "Horizontal push unilateral exercise",
            ),
            _big_slot(
                (HORIZONTAL_PULL_UNILATERAL,), 3, "8-10", "hpull-uni",
                "Horizontal pull unilateral exercise",
            ),
            _THREE_DAY_CORRECTION,
            _big_slot((GAIT, CORE), 3, "8-10", "gait-core", "Gait or core exercise"),
        )),
    ),
)

# --- Four-day program: themed days, catalog-backed corrections ---

FOUR_DAY_1 = DayTemplate(
    title="Four-day program: explosive focus",
    description="Day 1: explosive session with kettlebell and bodyweight exercises.",
    sections=(
        SectionTemplate("Warm-up", _repeat(3, _WARMUP)),
        SectionTemplate("Plyometric", _repeat(2, _PLYO)),
        SectionTemplate("Core", _repeat(2, _CORE)),
        SectionTemplate("Hip-flexor stretch", (_HIP_FLEXOR_STRETCH,)),
        SectionTemplate("First circuit", (
            _big_slot(
                (KNEE_BILATERAL, KNEE_UNILATERAL), 4, "6-8", "knee", "Squat-pattern exercise",
                unilateral_instruction=BOTH_SIDES,
            ),
            _correction(3, "8-10", 60, from_catalog=True),
            _big_slot(
                _PUSH_HORIZONTAL_FIRST, 4, "8-10", "push", "Push-up or overhead press",
                unilateral_instruction=BOTH_SIDES,
            ),
        )),
        SectionTemplate("Second circuit", (
            _big_slot(_PULL_BILATERAL, 4, "6-8", "pull", "Pull-up or row"),
            _correction(3, "8-10", 60, from_catalog=True),
            _big_slot((HIP_FLEXED, HIP_EXTENDED), 4, "8-10", "hip", "Bridge or Romanian deadlift"),
            _ROTATIONAL,
            _gait(2, 60),
        )),
    ),
)

FOUR_DAY_2 = DayTemplate(
    title="Four-day program: strength focus",
    description="Day 2: strength session with kettlebell and bodyweight exercises.",
    sections=(
        SectionTemplate("Warm-up", _repeat(3, _WARMUP)),
        SectionTemplate("Plyometric", _repeat(2, _PLYO)),
        SectionTemplate("Core", _repeat(2, _CORE)),
        SectionTemplate("Hip-flexor stretch", (_HIP_FLEXOR_STRETCH,)),
        SectionTemplate("First circuit", (
            _big_slot(
                (KNEE_UNILATERAL, KNEE_BILATERAL), 4, "6-8", "knee", "Bulgarian split squat",
                unilateral_reps="6-8 per side", unilateral_instruction=BOTH_SIDES,
            ),
            _correction(3, "8-10", 60, from_catalog=True),
            _big_slot(
                _PUSH_VERTICAL_FIRST, 4, "8-10", "push", "Overhead press",
                unilateral_instruction=BOTH_SIDES,
            ),
        )),
        SectionTemplate("Second circuit", (
            _big_slot(_PULL_BILATERAL, 4, "8-10", "pull", "Bent-over row"),
            _correction(3, "8-10", 60, from_catalog=True),
            _big_slot((HIP_EXTENDED, HIP_FLEXED), 4, "8-10", "hip", "Romanian deadlift"),
            _ROTATIONAL,
            _gait(3, 60),
        )),
    ),
)

FOUR_DAY_3 = DayTemplate(
    title="Four-day program: combined circuit",
    description="Day 3: combined focus in circuit format with short rests.",
    sections=(
        SectionTemplate("Warm-up", _repeat(3, _WARMUP)),
        SectionTemplate("Core", _repeat(3, _CORE)),
        SectionTemplate("First circuit", (
            _big_slot(
                (KNEE_BILATERAL, KNEE_UNILATERAL), 3, "8-10", "knee", "Goblet squat",
                rest_seconds=30, unilateral_instruction=BOTH_SIDES,
            ),
            _correction(3, "10", 30, from_catalog=True),
            _big_slot(
                _PUSH_HORIZONTAL_FIRST, 3, "8-10", "push", "Chest press or overhead press",
                rest_seconds=30, unilateral_instruction=BOTH_SIDES,
            ),
        )),
        SectionTemplate("Second circuit", (
            _big_slot(_PULL_BILATERAL, 3, "10", "pull", "Row", rest_seconds=30),
            _correction(3, "10", 30, from_catalog=True),
            _big_slot(
                (HIP_FLEXED, HIP_EXTENDED), 3, "10", "hip", "Bridge or Romanian deadlift",
                rest_seconds=30,
            ),
            SlotTemplate(
                (ROTATIONAL, REHAB), 3, "12/side", 30, "rotational", "Rotational or rehab exercise",
            ),
            _gait(2, 30),
        )),
        SectionTemplate("Stretch and recovery", _repeat(3, SlotTemplate(
            (STRETCH,), 1, "45 s", 0, "stretch", "Stretching exercise",
            instruction="Slowly, in rhythm with your breathing",
        ))),
    ),
)

FOUR_DAY_4 = DayTemplate(
    title="Four-day program: mobility and recovery",
    description="Day 4: mobility and recovery focus.",
    sections=(
        SectionTemplate("Light warm-up", _repeat(2, _WARMUP)),
        SectionTemplate("Corrective round 1", (_correction(3, "10-12", 30, from_catalog=True),)),
        SectionTemplate("Corrective round 2", (_correction(3, "10-12", 30, from_catalog=True),)),
        SectionTemplate("Mobility", _repeat(4, SlotTemplate(
            (STRETCH,), 2, "45-60 s", 10, "stretch", "Mobility exercise",
            instruction="Slow, controlled movement",
        ))),
        SectionTemplate("Core activation", _repeat(3, SlotTemplate(
            (CORE,), 2, "12-15 (light)", 30, "core", "Core exercise",
        ))),
        SectionTemplate("Gait and functional", (
            SlotTemplate((GAIT,), 2, "20 m", 60, "gait", "Gait exercise"),
            SlotTemplate((REHAB,), 2, "10-12", 30, "rehab", "Rehab exercise"),
        )),
    ),
)

PROGRAM_TEMPLATES: dict[tuple[str, int], DayTemplate] = {
    ("two-day", 1): TWO_DAY_1,
    ("two-day", 2): TWO_DAY_2,
    ("three-day", 1): THREE_DAY_1,
    ("three-day", 2): THREE_DAY_2,
    ("three-day", 3): THREE_DAY_3,
    ("four-day", 1): FOUR_DAY_1,
    ("four-day", 2): FOUR_DAY_2,
    ("four-day", 3): FOUR_DAY_3,
    ("four-day", 4): FOUR_DAY_4,
}


def validate_program_day(program_type: str, day: int) -> None:
    """Raise InvalidProgramDayCombination unless ``day`` is valid for ``program_type``."""
    valid_days = PROGRAM_DAYS.get(program_type)
    if valid_days is None:
        raise InvalidProgramDayCombination(program_type, day)
    # bool is an int subclass; True must not pass as day 1
    if isinstance(day, bool) or not isinstance(day, int) or day not in valid_days:
        raise InvalidProgramDayCombination(program_type, day, valid_days)


def get_template(program_type: ProgramType | str, day: int) -> DayTemplate:
    validate_program_day(program_type, day)
    return PROGRAM_TEMPLATES[(program_type, day)]
