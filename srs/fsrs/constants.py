"""
FSRS Constants and Parameters

All fixed parameters for the scheduler in one place.
Weight values are the FSRS-6 defaults (w0-w20).
"""

from enum import IntEnum
from typing import Final


# ---- Ratings ----

class Rating(IntEnum):
    """User recall quality on a review."""
    FAIL = 0  # Not recalled
    HARD = 1  # Recalled with high effort ("difícil")
    GOOD = 2  # Recalled normally
    EASY = 3  # Recalled fluently ("fácil")

    @property
    def grade(self) -> int:
        """FSRS grade (1-4) used inside the formulas."""
        return int(self) + 1


# ---- Lifecycle Phases ----

class Phase(IntEnum):
    """Lifecycle stage of a card. Values match the stored `state` column."""
    NEW = 0
    LEARNING = 1
    REVIEW = 2
    RELEARNING = 3


# ---- Difficulty / Stability Bounds ----

D_MIN = 1.0      # Minimum difficulty
D_MAX = 10.0     # Maximum difficulty
D_MIDPOINT = (D_MIN + D_MAX) / 2
S_MIN = 0.01     # Minimum stability (days) once a card has been reviewed
S_SEED_MIN = 0.1  # Minimum seeded stability for a new card


# ---- Default Configuration ----

DEFAULT_TARGET_RETENTION = 0.9
DEFAULT_MAXIMUM_INTERVAL_DAYS = 36500

# FSRS-6 default parameters
DEFAULT_WEIGHTS: Final[tuple[float, ...]] = (
    0.212, 1.2931, 2.3065, 8.2956,
    6.4133, 0.8334, 3.0194, 0.001,
    1.8722, 0.1666, 0.796, 1.4835,
    0.0614, 0.2629, 1.6483, 0.6014,
    1.8729, 0.5425, 0.0912, 0.0658,
    0.1542,
)
WEIGHT_COUNT = len(DEFAULT_WEIGHTS)

# Accepted range per weight; vectors outside these bounds fall back to the
# defaults. Within them every exponential in the update formulas stays finite.
WEIGHT_BOUNDS: Final[tuple[tuple[float, float], ...]] = (
    (0.001, 100.0), (0.001, 100.0), (0.001, 100.0), (0.001, 100.0),
    (1.0, 10.0), (0.001, 4.0), (0.001, 4.0), (0.001, 0.75),
    (0.0, 4.5), (0.0, 0.8), (0.001, 3.5), (0.001, 5.0),
    (0.001, 0.25), (0.001, 0.9), (0.0, 4.0), (0.0, 1.0),
    (1.0, 6.0), (0.0, 2.0), (0.0, 2.0), (0.0, 0.8),
    (0.1, 0.8),
)


# ---- Learning Steps ----
# Fixed intervals (days) for cards that have not graduated yet.
# A learning card graduates once its stability reaches the last step.

LEARNING_STEPS: Final[tuple[int, ...]] = (1, 6)
GRADUATING_STABILITY = float(LEARNING_STEPS[-1])


# ---- Rating Names ----
# Lowercase names accepted by parse_rating, including the dashboard's
# Portuguese button labels.

RATING_ALIASES: Final[dict[str, Rating]] = {
    "fail": Rating.FAIL,
    "again": Rating.FAIL,
    "wrong": Rating.FAIL,
    "errei": Rating.FAIL,
    "hard": Rating.HARD,
    "difícil": Rating.HARD,
    "dificil": Rating.HARD,
    "good": Rating.GOOD,
    "bom": Rating.GOOD,
    "easy": Rating.EASY,
    "fácil": Rating.EASY,
    "facil": Rating.EASY,
}


# ---- SM-2 Quality Scale ----
# 0-5 quality used by the first dashboard draft.

QUALITY_TO_RATING: Final[dict[int, Rating]] = {
    0: Rating.FAIL,
    1: Rating.FAIL,
    2: Rating.GOOD,
    3: Rating.HARD,
    4: Rating.GOOD,
    5: Rating.EASY,
}
