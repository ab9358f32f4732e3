"""
Tests for the stability and difficulty update formulas.
"""

import pytest

from srs.fsrs.constants import D_MAX, D_MIN, DEFAULT_WEIGHTS, S_MIN, Rating
from srs.fsrs.updates import (
    clamp_difficulty,
    initial_difficulty,
    initial_stability,
    next_difficulty,
    next_forget_stability,
    next_recall_stability,
    next_short_term_stability,
)


W = DEFAULT_WEIGHTS


def test_clamp_difficulty():
    assert clamp_difficulty(-3.0) == D_MIN
    assert clamp_difficulty(4.2) == 4.2
    assert clamp_difficulty(42.0) == D_MAX


def test_initial_stability_reads_first_four_weights():
    assert [initial_stability(W, r) for r in Rating] == list(W[:4])


def test_initial_difficulty_decreases_with_rating():
    seeds = [initial_difficulty(W, r) for r in Rating]

    assert seeds[0] == pytest.approx(W[4])
    assert seeds == sorted(seeds, reverse=True)
    assert all(D_MIN <= d <= D_MAX for d in seeds)


def test_next_difficulty_moves_with_rating():
    assert next_difficulty(W, 5.0, Rating.FAIL) > 5.0
    assert next_difficulty(W, 5.0, Rating.HARD) > 5.0
    assert next_difficulty(W, 5.0, Rating.GOOD) == pytest.approx(5.0, abs=0.01)
    assert next_difficulty(W, 5.0, Rating.EASY) < 5.0


def test_next_difficulty_damps_near_maximum():
    low_step = next_difficulty(W, 3.0, Rating.FAIL) - 3.0
    high_step = next_difficulty(W, 9.0, Rating.FAIL) - 9.0

    assert high_step < low_step
    assert next_difficulty(W, D_MAX, Rating.FAIL) <= D_MAX
    assert next_difficulty(W, D_MIN, Rating.EASY) >= D_MIN


def test_next_difficulty_clamps_out_of_range_input():
    assert D_MIN <= next_difficulty(W, -20.0, Rating.EASY) <= D_MAX
    assert D_MIN <= next_difficulty(W, 500.0, Rating.FAIL) <= D_MAX


def test_recall_stability_never_shrinks():
    for rating in (Rating.HARD, Rating.GOOD, Rating.EASY):
        for retrievability in (1.0, 0.95, 0.9, 0.5, 0.1):
            assert next_recall_stability(W, 5.0, 10.0, retrievability, rating) >= 10.0


def test_recall_stability_orders_by_rating():
    hard = next_recall_stability(W, 5.0, 10.0, 0.9, Rating.HARD)
    good = next_recall_stability(W, 5.0, 10.0, 0.9, Rating.GOOD)
    easy = next_recall_stability(W, 5.0, 10.0, 0.9, Rating.EASY)

    assert hard < good < easy


def test_recall_of_nearly_forgotten_card_grows_more():
    assert next_recall_stability(W, 5.0, 10.0, 0.5, Rating.GOOD) > next_recall_stability(W, 5.0, 10.0, 0.9, Rating.GOOD)


def test_harder_cards_grow_less():
    assert next_recall_stability(W, 9.0, 10.0, 0.9, Rating.GOOD) < next_recall_stability(W, 2.0, 10.0, 0.9, Rating.GOOD)


def test_recall_stability_rejects_fail():
    with pytest.raises(ValueError):
        next_recall_stability(W, 5.0, 10.0, 0.9, Rating.FAIL)


def test_forget_stability_stays_below_previous():
    for stability in (0.5, 3.0, 10.0, 365.0):
        result = next_forget_stability(W, 5.0, stability, 0.9)
        assert S_MIN <= result < stability


def test_forget_stability_floor():
    assert next_forget_stability(W, 10.0, 0.0, 1.0) >= S_MIN


def test_short_term_pass_never_shrinks():
    for rating in (Rating.HARD, Rating.GOOD, Rating.EASY):
        for stability in (0.2, 2.0, 50.0):
            assert next_short_term_stability(W, stability, rating) >= stability


def test_short_term_fail_shrinks():
    assert S_MIN <= next_short_term_stability(W, 2.0, Rating.FAIL) < 2.0
