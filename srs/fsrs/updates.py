"""
Stability and Difficulty Updates

Implements the FSRS-6 update formulas. All functions are pure and take the
weight vector explicitly (w0-w20).

Key principles:
- Spaced, effortful success produces the largest stability gains
- Success on a nearly forgotten card (low R) is the strongest evidence
- Failure shrinks stability multiplicatively, never to zero
- Difficulty reflects intrinsic hardness, not forgetting speed
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from srs.fsrs.constants import D_MAX, D_MIN, S_MIN, S_SEED_MIN, Rating


def clamp_difficulty(difficulty: float) -> float:
    """Clip difficulty to [D_MIN, D_MAX]."""
    return max(D_MIN, min(D_MAX, difficulty))


def initial_difficulty(w: Sequence[float], rating: Rating) -> float:
    """
    Seed difficulty for a card's first review.

    Formula:
        D0(g) = w4 - e^(w5 * (g - 1)) + 1

    Easy seeds a low difficulty, Fail a high one.
    """
    return clamp_difficulty(w[4] - math.exp(w[5] * (rating.grade - 1)) + 1.0)


def initial_stability(w: Sequence[float], rating: Rating) -> float:
    """Seed stability for a card's first review: S0(g) = w[g-1]."""
    return max(w[rating.grade - 1], S_SEED_MIN)


def next_difficulty(w: Sequence[float], difficulty: float, rating: Rating) -> float:
    """
    Update difficulty based on rating.

    Formula:
        delta = -w6 * (g - 3)
        D' = D + delta * (10 - D) / 9            (linear damping)
        D'' = w7 * D0(Easy) + (1 - w7) * D'      (mean reversion)

    - Fail / Hard push difficulty up, Easy pulls it down, Good leaves it
    - Damping shrinks increases as D approaches the maximum
    - Result is clipped to [1, 10]
    """
    difficulty = clamp_difficulty(difficulty)
    delta = -w[6] * (rating.grade - 3)
    damped = difficulty + delta * (D_MAX - difficulty) / (D_MAX - D_MIN)
    reverted = w[7] * initial_difficulty(w, Rating.EASY) + (1.0 - w[7]) * damped
    return clamp_difficulty(reverted)


def next_recall_stability(
    w: Sequence[float],
    difficulty: float,
    stability: float,
    retrievability: float,
    rating: Rating
) -> float:
    """
    Update stability after a successful long-term review (Hard/Good/Easy).

    Formula:
        S' = S * (1 + e^w8 * (11 - D) * S^-w9 * (e^((1 - R) * w10) - 1)
                  * hard_penalty * easy_bonus)

    Where:
        - (e^((1 - R) * w10) - 1) rewards recall of a nearly forgotten card
        - (11 - D) reduces gains for difficult cards
        - S^-w9 makes growth saturate for already stable cards
        - hard_penalty = w15 for Hard, easy_bonus = w16 for Easy

    The growth term is never negative, so S' >= S.
    """
    if rating == Rating.FAIL:
        raise ValueError("Use next_forget_stability for FAIL ratings")

    difficulty = clamp_difficulty(difficulty)
    stability = max(stability, S_MIN)
    hard_penalty = w[15] if rating == Rating.HARD else 1.0
    easy_bonus = w[16] if rating == Rating.EASY else 1.0

    growth = (
        math.exp(w[8])
        * (11.0 - difficulty)
        * stability ** -w[9]
        * (math.exp((1.0 - retrievability) * w[10]) - 1.0)
        * hard_penalty
        * easy_bonus
    )
    return stability * (1.0 + max(growth, 0.0))


def next_forget_stability(
    w: Sequence[float],
    difficulty: float,
    stability: float,
    retrievability: float
) -> float:
    """
    Update stability after a failed long-term review (lapse).

    Formula:
        S_forget = w11 * D^-w12 * ((S + 1)^w13 - 1) * e^((1 - R) * w14)
        S' = max(S_MIN, min(S_forget, S / e^(w17 * w18)))

    The cap keeps post-lapse stability strictly below the previous value;
    the floor keeps it positive.
    """
    difficulty = clamp_difficulty(difficulty)
    stability = max(stability, S_MIN)
    forgotten = (
        w[11]
        * difficulty ** -w[12]
        * ((stability + 1.0) ** w[13] - 1.0)
        * math.exp((1.0 - retrievability) * w[14])
    )
    ceiling = stability / math.exp(w[17] * w[18])
    return max(S_MIN, min(forgotten, ceiling))


def next_short_term_stability(
    w: Sequence[float],
    stability: float,
    rating: Rating
) -> float:
    """
    Update stability for a same-day review of a learning/relearning card.

    Formula:
        SInc = e^(w17 * (g - 3 + w18)) * S^-w19
        S' = S * SInc

    A pass never shrinks stability (SInc >= 1); a fail does.
    """
    stability = max(stability, S_MIN)
    increase = math.exp(w[17] * (rating.grade - 3 + w[18])) * stability ** -w[19]
    if rating != Rating.FAIL:
        increase = max(increase, 1.0)
    return max(S_MIN, stability * increase)
