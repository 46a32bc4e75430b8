"""Tests for the corrective exercise recommender."""

import random

import pytest

from coachgen.corrections import (
    CORRECTION_CANDIDATES,
    SCREEN_ORDER,
    failing_screens,
    recommend,
)

from tests.conftest import make_assessment


def test_every_screen_has_three_candidates():
    assert set(CORRECTION_CANDIDATES) == set(SCREEN_ORDER)
    for screen, candidates in CORRECTION_CANDIDATES.items():
        assert len(candidates) == 3, screen


def test_no_assessment_means_no_corrections(rng):
    assert recommend(None, rng) == []


def test_all_passing_means_no_corrections(rng):
    assert recommend(make_assessment(default=2), rng) == []


def test_deep_squat_failure(rng):
    tags = recommend(make_assessment(deep_squat=1), rng)
    assert len(tags) == 1
    assert tags[0] in CORRECTION_CANDIDATES["deep_squat"]


def test_zero_counts_as_failing():
    assert failing_screens(make_assessment(rotary_stability=0)) == ["rotary_stability"]


def test_all_failing_gives_seven_in_screen_order(rng):
    tags = recommend(make_assessment(default=1), rng)
    assert len(tags) == 7
    for tag, screen in zip(tags, SCREEN_ORDER):
        assert tag in CORRECTION_CANDIDATES[screen]


def test_failing_screens_keep_screen_order():
    assessment = make_assessment(rotary_stability=0, hurdle_step=1, shoulder_mobility=1)
    assert failing_screens(assessment) == ["hurdle_step", "shoulder_mobility", "rotary_stability"]


def test_seeded_rng_is_deterministic():
    assessment = make_assessment(default=0)
    assert recommend(assessment, random.Random(7)) == recommend(assessment, random.Random(7))


@pytest.mark.parametrize("score", [2, 3])
def test_passing_scores(score, rng):
    assert recommend(make_assessment(default=score), rng) == []
