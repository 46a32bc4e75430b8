"""Default-load heuristic applied after composition.

Best effort only: a missed loadable exercise is fine, a weight on a
placeholder is not.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from coachgen.models import Section
from coachgen.resolver import is_synthetic

DEFAULT_LOAD_KG = 16.0

# Whole words only; "db" must not match "Dbl unders"
LOADABLE_ABBREVIATIONS: tuple[str, ...] = ("kb", "db")

# Word prefixes, so plurals and Hungarian suffixes ("súlyzós", "súlyzóval") match
LOADABLE_KEYWORDS: tuple[str, ...] = (
    "kettlebell",
    "dumbbell",
    "súlyzó",
    "kézisúlyzó",
)


def _alternatives(words: tuple[str, ...]) -> str:
    return "|".join(re.escape(word) for word in words)


_LOADABLE = re.compile(
    rf"\b(?:(?:{_alternatives(LOADABLE_ABBREVIATIONS)})\b|(?:{_alternatives(LOADABLE_KEYWORDS)}))",
    re.IGNORECASE,
)


def is_loadable(name: str | None) -> bool:
    return bool(name) and _LOADABLE.search(name) is not None


def annotate(sections: Iterable[Section], default_load_kg: float = DEFAULT_LOAD_KG) -> list[Section]:
    """Give recognisably loadable catalog exercises a default weight, in place."""
    sections = list(sections)
    for section in sections:
        for exercise in section.exercises:
            if exercise.weight is not None or is_synthetic(exercise.exercise_id):
                continue
            if is_loadable(exercise.name):
                exercise.weight = default_load_kg
    return sections
