"""Bundled sample catalog: enough exercises to fill every bucket at least once.

Labels mix English and Hungarian; the categorizer accepts both.
"""

from __future__ import annotations

from coachgen.models import CatalogExercise


def _ex(
    exercise_id: str,
    name: str,
    category: str,
    movement_pattern: str,
    description: str | None = None,
    difficulty: int = 2,
) -> CatalogExercise:
    return CatalogExercise(
        id=exercise_id,
        name=name,
        category=category,
        movement_pattern=movement_pattern,
        description=description,
        difficulty=difficulty,
    )


SAMPLE_CATALOG: tuple[CatalogExercise, ...] = (
    # Warm-up / mobility
    _ex("ex-001", "World's greatest stretch", "Mobility", "Full body", difficulty=1),
    _ex("ex-002", "Jumping jacks", "Warm-up", "Full body", difficulty=1),
    _ex("ex-003", "Macskahát-tehénhát", "Bemelegítés", "Gerinc mobilizáció", difficulty=1),
    _ex("ex-004", "Arm circles", "Warm-up", "Shoulder", difficulty=1),
    # Core
    _ex("ex-010", "Dead bug", "Core", "Anti-extension"),
    _ex("ex-011", "Front plank", "Strength", "Stability - trunk", difficulty=1),
    _ex("ex-012", "Pallof press", "Core", "Anti-rotation"),
    # Stretch
    _ex("ex-020", "Half-kneeling hip-flexor stretch", "Stretch", "Hip", difficulty=1),
    _ex("ex-021", "Csípőhajlító nyújtás", "Nyújtás", "Csípő", difficulty=1),
    _ex("ex-022", "Doorway pec stretch", "Stretch", "Shoulder", difficulty=1),
    _ex("ex-023", "Hamstring stretch with band", "Stretch", "Posterior chain", difficulty=1),
    # Plyometric
    _ex("ex-030", "Box jump", "Plyometric", "Jump", difficulty=3),
    _ex("ex-031", "Kettlebell swing", "Plyometric", "Hip hinge", "Explosive hip extension", 3),
    _ex("ex-032", "Medicine ball slam", "Plyometric", "Throw", difficulty=2),
    # Knee dominant
    _ex("ex-040", "Kettlebell goblet squat", "Strength", "Knee dominant - bilateral"),
    _ex("ex-041", "Kettlebell serleg guggolás", "Erő", "Térd domináns – bilaterális"),
    _ex("ex-042", "Bulgarian split squat", "Strength", "Knee dominant - unilateral", difficulty=3),
    _ex("ex-043", "Dumbbell reverse lunge", "Strength", "Knee dominant - unilateral"),
    # Hip dominant
    _ex("ex-050", "Glute bridge", "Strength", "Hip dominant - bilateral", difficulty=1),
    _ex("ex-051", "Single-leg hip thrust", "Strength", "Hip dominant - unilateral", difficulty=3),
    _ex("ex-052", "Kettlebell Romanian deadlift", "Strength", "Hip dominant - bilateral"),
    _ex("ex-053", "Single-leg deadlift", "Strength", "Hip dominant - unilateral", difficulty=3),
    # Push
    _ex("ex-060", "Push-up", "Strength", "Horizontal push - bilateral"),
    _ex("ex-061", "Single-arm dumbbell floor press", "Strength", "Horizontal push - unilateral"),
    _ex("ex-062", "Kettlebell overhead press", "Strength", "Vertical push - bilateral", difficulty=3),
    _ex("ex-063", "Half-kneeling single-arm KB press", "Strength", "Vertical push - unilateral"),
    # Pull
    _ex("ex-070", "Inverted row", "Strength", "Horizontal pull - bilateral"),
    _ex("ex-071", "Single-arm dumbbell row", "Strength", "Horizontal pull - unilateral"),
    _ex("ex-072", "Pull-up", "Strength", "Vertical pull - bilateral", difficulty=4),
    _ex("ex-073", "Húzódzkodás gumiszalaggal", "Erő", "Vertikális húzás – bilaterális", difficulty=3),
    _ex("ex-074", "Single-arm lat pulldown", "Strength", "Vertical pull - unilateral"),
    # Rotational
    _ex("ex-080", "Half-kneeling cable chop", "Strength", "Rotational"),
    _ex("ex-081", "Landmine rotation", "Strength", "Anti-rotation", difficulty=3),
    # Gait
    _ex("ex-090", "Farmer's carry", "Conditioning", "Gait - loaded carry"),
    _ex("ex-091", "Suitcase carry", "Conditioning", "Gait - trunk stability"),
    # Corrective
    _ex("ex-100", "Ankle rocks", "Corrective", "Corrective", "FMS deep squat drill", 1),
    _ex("ex-101", "Quadruped T-spine opener", "Corrective", "Corrective", difficulty=1),
    _ex("ex-102", "Active straight-leg lowering", "Corrective", "Korrekció", difficulty=1),
    # Rehab / recovery
    _ex("ex-110", "Foam rolling", "Recovery", "Soft tissue", difficulty=1),
    _ex("ex-111", "Band external rotation", "Rehab", "Shoulder", difficulty=1),
)


def sample_catalog() -> list[CatalogExercise]:
    return list(SAMPLE_CATALOG)
