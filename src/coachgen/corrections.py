"""Corrective exercise recommender.

A screen scoring below 2 contributes exactly one correction tag, picked at
random from that screen's candidates. Screens are visited in SCREEN_ORDER;
the composer consumes tags positionally, so this order is part of the
contract.
"""

from __future__ import annotations

import random

from coachgen.models import SCREEN_FIELDS, AssessmentResult

PASSING_SCORE = 2

SCREEN_ORDER: tuple[str, ...] = SCREEN_FIELDS

CORRECTION_CANDIDATES: dict[str, tuple[str, ...]] = {
    "deep_squat": (
        "Hip mobility",
        "Ankle dorsiflexion",
        "Core stabilization",
    ),
    "hurdle_step": (
        "Hip stability",
        "Balance training",
        "Stepping mechanics",
    ),
    "inline_lunge": (
        "Hip mobility in split stance",
        "Knee stability",
        "Trunk control",
    ),
    "shoulder_mobility": (
        "Shoulder mobility",
        "Pec stretch",
        "Scapular stability",
    ),
    "active_straight_leg_raise": (
        "Hamstring stretch",
        "Hip flexor stretch",
        "Pelvic positioning",
    ),
    "trunk_stability_pushup": (
        "Anti-extension core work",
        "Shoulder girdle stability",
        "Plank variations",
    ),
    "rotary_stability": (
        "Rotary core strength",
        "Hip-shoulder coordination",
        "Single-side stability",
    ),
}


def failing_screens(assessment: AssessmentResult | None) -> list[str]:
    """Screens scoring below the passing score, in SCREEN_ORDER."""
    if assessment is None:
        return []
    return [screen for screen in SCREEN_ORDER if assessment.score(screen) < PASSING_SCORE]


def recommend(assessment: AssessmentResult | None, rng: random.Random) -> list[str]:
    """Return 0-7 correction tags, one per failing screen."""
    return [rng.choice(CORRECTION_CANDIDATES[screen]) for screen in failing_screens(assessment)]
