"""Slot resolver and the synthetic identifier namespaces."""

from __future__ import annotations

import random
from collections.abc import Mapping, Sequence

from coachgen.models import CatalogExercise

PLACEHOLDER_PREFIX = "placeholder-"
CORRECTION_PREFIX = "fms-correction-"


def resolve(
    bucket: str,
    pools: Mapping[str, Sequence[CatalogExercise]],
    rng: random.Random,
) -> CatalogExercise | None:
    """Pick one exercise uniformly from ``pools[bucket]``; None if unknown or empty."""
    candidates = pools.get(bucket)
    if not candidates:
        return None
    return rng.choice(candidates)


def resolve_first(
    buckets: Sequence[str],
    pools: Mapping[str, Sequence[CatalogExercise]],
    rng: random.Random,
) -> CatalogExercise | None:
    """Resolve against each bucket in preference order, stopping at the first hit."""
    for bucket in buckets:
        exercise = resolve(bucket, pools, rng)
        if exercise is not None:
            return exercise
    return None


def placeholder_id(hint: str) -> str:
    return f"{PLACEHOLDER_PREFIX}{hint}"


def correction_id(position: int) -> str:
    """Identifier of a tag-backed correction slot (1-based tag position)."""
    if position < 1:
        raise ValueError("correction position is 1-based")
    return f"{CORRECTION_PREFIX}{position}"


def is_placeholder(exercise_id: str | None) -> bool:
    return bool(exercise_id) and exercise_id.startswith(PLACEHOLDER_PREFIX)


def is_synthetic(exercise_id: str | None) -> bool:
    """True for ids outside the catalog's own identifier space."""
    if not exercise_id:
        return False
    return exercise_id.startswith((PLACEHOLDER_PREFIX, CORRECTION_PREFIX))
