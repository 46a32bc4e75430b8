"""Exercise categorizer: ordered first-match classification into movement buckets.

Every exercise is tested against CLASSIFICATION_RULES in order and lands in the
bucket of the first rule that matches. Exercises matching no rule are left out.

Matching is case-insensitive and treats ``_``, ``-`` and ``–`` as spaces, so
"knee_dominant_bilateral", "Knee dominant - bilateral" and the Hungarian
"Térd domináns – bilaterális" all classify the same way.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from coachgen.models import CatalogExercise

WARMUP = "warm-up"
CORE = "core"
STRETCH = "stretch"
PLYOMETRIC = "plyometric"
KNEE_BILATERAL = "knee-dominant-bilateral"
KNEE_UNILATERAL = "knee-dominant-unilateral"
HIP_FLEXED = "hip-dominant-flexed"
HIP_EXTENDED = "hip-dominant-extended"
HORIZONTAL_PUSH_BILATERAL = "horizontal-push-bilateral"
HORIZONTAL_PUSH_UNILATERAL = "horizontal-push-unilateral"
HORIZONTAL_PULL_BILATERAL = "horizontal-pull-bilateral"
HORIZONTAL_PULL_UNILATERAL = "horizontal-pull-unilateral"
VERTICAL_PUSH_BILATERAL = "vertical-push-bilateral"
VERTICAL_PUSH_UNILATERAL = "vertical-push-unilateral"
VERTICAL_PULL_BILATERAL = "vertical-pull-bilateral"
VERTICAL_PULL_UNILATERAL = "vertical-pull-unilateral"
ROTATIONAL = "rotational"
GAIT = "gait"
CORRECTIVE = "corrective"
REHAB = "rehab"

BILATERAL_KEYWORDS = ("bilateral", "bilaterális")
UNILATERAL_KEYWORDS = ("unilateral", "unilaterális", "single leg", "single arm", "per side")

_SEPARATORS = re.compile(r"[_\-–—]+")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str | None) -> str:
    """Lower-case and flatten separators so substring checks are label-agnostic."""
    if not text:
        return ""
    flattened = _SEPARATORS.sub(" ", text.lower())
    return _WHITESPACE.sub(" ", flattened).strip()


def _contains(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


@dataclass(frozen=True)
class _Fields:
    name: str
    category: str
    pattern: str
    description: str

    @classmethod
    def of(cls, exercise: CatalogExercise) -> _Fields:
        return cls(
            name=normalize(exercise.name),
            category=normalize(exercise.category),
            pattern=normalize(exercise.movement_pattern),
            description=normalize(exercise.description),
        )


# A rule maps the normalised fields to a bucket name, or None if it does not apply.
Rule = Callable[[_Fields], str | None]


def _warmup(f: _Fields) -> str | None:
    if _contains(f.category, ("bemelegítés", "mobility", "warmup", "warm up")):
        return WARMUP
    return None


def _core(f: _Fields) -> str | None:
    # Only patterns that *start* with stability count; "Gait – trunk stability"
    # belongs to gait.
    if (
        "core" in f.category
        or "core" in f.pattern
        or f.pattern.startswith(("stabilitás", "stability"))
    ):
        return CORE
    return None


def _stretch(f: _Fields) -> str | None:
    keywords = ("nyújtás", "stretch")
    if (
        _contains(f.category, keywords)
        or _contains(f.pattern, keywords)
        or _contains(f.description, keywords)
    ):
        return STRETCH
    return None


def _plyometric(f: _Fields) -> str | None:
    keywords = ("pilometrikus", "plyometric")
    if _contains(f.category, keywords) or _contains(f.description, keywords):
        return PLYOMETRIC
    return None


def _bilateral_split(
    pattern_keywords: tuple[str, ...], bilateral: str, unilateral: str,
) -> Rule:
    def rule(f: _Fields) -> str | None:
        if not _contains(f.pattern, pattern_keywords):
            return None
        return bilateral if _contains(f.pattern, BILATERAL_KEYWORDS) else unilateral

    rule.__name__ = f"_{bilateral.rsplit('-', 1)[0].replace('-', '_')}"
    return rule


def _hip_dominant(f: _Fields) -> str | None:
    if not _contains(f.pattern, ("csípő domináns", "hip dominant")):
        return None
    if (
        _contains(f.description, ("hajlított", "bent knee", "flexed"))
        or _contains(f.name, ("híd", "bridge", "good morning", "hip thrust"))
    ):
        return HIP_FLEXED
    return HIP_EXTENDED


def _rotational(f: _Fields) -> str | None:
    if (
        _contains(f.pattern, ("anti rotáció", "anti rotation", "rotational"))
        or _contains(f.description, ("rotáció", "rotation"))
    ):
        return ROTATIONAL
    return None


def _gait(f: _Fields) -> str | None:
    if "gait" in f.pattern:
        return GAIT
    return None


def _corrective(f: _Fields) -> str | None:
    if (
        _contains(f.pattern, ("korrekció", "corrective", "correction"))
        or _contains(f.description, ("fms", "korrekció", "corrective"))
    ):
        return CORRECTIVE
    return None


def _rehab(f: _Fields) -> str | None:
    if "rehab" in f.description or _contains(f.category, ("rehab", "recovery")):
        return REHAB
    return None


CLASSIFICATION_RULES: tuple[Rule, ...] = (
    _warmup,
    _core,
    _stretch,
    _plyometric,
    _bilateral_split(("térd domináns", "knee dominant"), KNEE_BILATERAL, KNEE_UNILATERAL),
    _hip_dominant,
    _bilateral_split(
        ("horizontális nyomás", "horizontal push"),
        HORIZONTAL_PUSH_BILATERAL, HORIZONTAL_PUSH_UNILATERAL,
    ),
    _bilateral_split(
        ("horizontális húzás", "horizontal pull"),
        HORIZONTAL_PULL_BILATERAL, HORIZONTAL_PULL_UNILATERAL,
    ),
    _bilateral_split(
        ("vertikális nyomás", "vertical push"),
        VERTICAL_PUSH_BILATERAL, VERTICAL_PUSH_UNILATERAL,
    ),
    _bilateral_split(
        ("vertikális húzás", "vertical pull"),
        VERTICAL_PULL_BILATERAL, VERTICAL_PULL_UNILATERAL,
    ),
    _rotational,
    _gait,
    _corrective,
    _rehab,
)

BUCKETS: tuple[str, ...] = (
    WARMUP,
    CORE,
    STRETCH,
    PLYOMETRIC,
    KNEE_BILATERAL,
    KNEE_UNILATERAL,
    HIP_FLEXED,
    HIP_EXTENDED,
    HORIZONTAL_PUSH_BILATERAL,
    HORIZONTAL_PUSH_UNILATERAL,
    HORIZONTAL_PULL_BILATERAL,
    HORIZONTAL_PULL_UNILATERAL,
    VERTICAL_PUSH_BILATERAL,
    VERTICAL_PUSH_UNILATERAL,
    VERTICAL_PULL_BILATERAL,
    VERTICAL_PULL_UNILATERAL,
    ROTATIONAL,
    GAIT,
    CORRECTIVE,
    REHAB,
)


def classify(exercise: CatalogExercise) -> str | None:
    """Return the bucket of the first matching rule, or None."""
    fields = _Fields.of(exercise)
    for rule in CLASSIFICATION_RULES:
        bucket = rule(fields)
        if bucket is not None:
            return bucket
    return None


def categorize(exercises: Iterable[CatalogExercise]) -> dict[str, list[CatalogExercise]]:
    """Partition exercises into movement buckets, preserving input order.

    Every known bucket is present in the result, possibly empty.
    """
    pools: dict[str, list[CatalogExercise]] = {bucket: [] for bucket in BUCKETS}
    for exercise in exercises:
        bucket = classify(exercise)
        if bucket is not None:
            pools[bucket].append(exercise)
    return pools


def is_unilateral(exercise: CatalogExercise) -> bool:
    pattern = normalize(exercise.movement_pattern)
    if _contains(pattern, BILATERAL_KEYWORDS):
        return False
    return _contains(pattern, UNILATERAL_KEYWORDS)
