"""
Scheduler - FSRS Review Logic

Pure scheduling and state updates (no database calls, no clock reads).

Main workflow:
1. Load card state (caller's responsibility)
2. Validate rating, coerce elapsed time and configuration
3. Calculate retrievability at the moment of review
4. Update difficulty and stability, move along the phase state machine
5. Derive the interval and due date
6. Return a new result (the input state is never modified)
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Union

from srs.fsrs import updates
from srs.fsrs.config import ConfigLike, SchedulerConfig, resolve_config
from srs.fsrs.constants import (
    D_MIDPOINT,
    GRADUATING_STABILITY,
    LEARNING_STEPS,
    QUALITY_TO_RATING,
    RATING_ALIASES,
    Phase,
    Rating,
)
from srs.fsrs.memory_state import (
    MemoryState,
    calculate_retrievability,
    clamp_interval,
    next_interval,
)
from srs.logging import logger


class InvalidRatingError(ValueError):
    """Raised when a review is submitted with a rating that is not one of the four grades."""


@dataclass(frozen=True)
class ScheduleResult:
    """Outcome of one review: the new memory state plus the due date."""
    stability: float
    difficulty: float
    phase: Phase
    lapse_count: int
    interval_days: int
    due_date: date
    retrievability: float  # R at the moment of review (1.0 for first exposure)
    reviewed_at: datetime

    def to_memory_state(self) -> MemoryState:
        """State to persist for the next review."""
        return MemoryState(
            stability=self.stability,
            difficulty=self.difficulty,
            phase=self.phase,
            interval_days=self.interval_days,
            lapse_count=self.lapse_count,
            last_reviewed_at=self.reviewed_at,
        )


StateLike = Union[MemoryState, Mapping[str, Any], None]


def parse_rating(value: Any) -> Rating:
    """
    Convert a caller-supplied rating to Rating.

    Accepts a Rating, an int 0-3, or a name/alias such as "good", "fácil".

    Raises:
        InvalidRatingError: for anything else
    """
    if isinstance(value, Rating):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Rating(value)
        except ValueError:
            raise InvalidRatingError(f"Rating must be 0-3, got {value}") from None
    if isinstance(value, str):
        rating = RATING_ALIASES.get(value.strip().lower())
        if rating is not None:
            return rating
    raise InvalidRatingError(f"Unknown rating: {value!r}")


def rating_from_quality(quality: Any) -> Rating:
    """
    Map an SM-2 quality score (0-5) to a rating.

    0/1 -> FAIL, 3 -> HARD, 5 -> EASY, 2/4 -> GOOD.
    """
    if isinstance(quality, int) and not isinstance(quality, bool) and quality in QUALITY_TO_RATING:
        return QUALITY_TO_RATING[quality]
    raise InvalidRatingError(f"Quality must be 0-5, got {quality!r}")


def _coerce_state(previous_state: StateLike) -> MemoryState:
    if previous_state is None:
        return MemoryState()
    if isinstance(previous_state, MemoryState):
        return previous_state
    if isinstance(previous_state, Mapping):
        return MemoryState.from_mapping(previous_state)
    return MemoryState()


def _coerce_elapsed(elapsed_days: Any) -> float:
    if isinstance(elapsed_days, bool):
        return 0.0
    try:
        elapsed = float(elapsed_days)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(elapsed) or elapsed < 0:
        return 0.0
    return elapsed


def _reviewed_at(now: datetime | date) -> datetime:
    if isinstance(now, datetime):
        return now
    return datetime.combine(now, time.min)


def _due_date(reviewed_at: datetime, interval: int) -> date:
    """Calendar day of the review plus the interval, saturating at date.max."""
    day = reviewed_at.date()
    return day + timedelta(days=min(interval, (date.max - day).days))


def _learning_step_after(previous_interval: int) -> int:
    """Next fixed learning step strictly longer than the previous interval."""
    for step in LEARNING_STEPS:
        if step > previous_interval:
            return step
    return LEARNING_STEPS[-1]


def schedule(
    rating: Any,
    previous_state: StateLike,
    elapsed_days: Any,
    now: datetime | date,
    config: ConfigLike = None
) -> ScheduleResult:
    """
    Process a review and return the new memory state and due date.

    This is the core algorithm. No database calls.
    Caller is responsible for:
    1. Loading the card state (None for a card never reviewed)
    2. Measuring elapsed days since the last review
    3. Persisting the returned state and due date

    Args:
        rating: Rating, int 0-3 or rating name (FAIL, HARD, GOOD, EASY)
        previous_state: MemoryState, storage row mapping, or None for a new card
        elapsed_days: Days since last review (negative or missing -> 0)
        now: Review instant; the due date is counted from its calendar day
        config: Optional override of weights / target_retention / maximum_interval_days

    Returns:
        ScheduleResult

    Raises:
        InvalidRatingError: if rating is not one of the four grades
    """
    rating = parse_rating(rating)
    state = _coerce_state(previous_state)
    elapsed = _coerce_elapsed(elapsed_days)
    config = resolve_config(config)

    if state.phase == Phase.NEW:
        stability, difficulty, phase, retrievability = _first_review(config, rating)
        lapse_count = state.lapse_count
    else:
        stability, difficulty, phase, retrievability = _repeat_review(config, state, rating, elapsed)
        lapse_count = state.lapse_count
        if state.phase == Phase.REVIEW and rating == Rating.FAIL:
            lapse_count += 1

    interval = _interval_for(config, state, phase, rating, stability)
    reviewed_at = _reviewed_at(now)

    logger.debug(
        "review_scheduled",
        rating=rating.name,
        previous_phase=state.phase.name,
        phase=phase.name,
        elapsed_days=elapsed,
        interval_days=interval,
    )

    return ScheduleResult(
        stability=round(stability, 2),
        difficulty=updates.clamp_difficulty(round(difficulty, 2)),
        phase=phase,
        lapse_count=lapse_count,
        interval_days=interval,
        due_date=_due_date(reviewed_at, interval),
        retrievability=retrievability,
        reviewed_at=reviewed_at,
    )


def _first_review(
    config: SchedulerConfig,
    rating: Rating
) -> tuple[float, float, Phase, float]:
    """
    Seed S and D from the first rating.

    Easy skips learning entirely; every other rating starts the learning steps.
    """
    w = config.weights
    stability = updates.initial_stability(w, rating)
    difficulty = updates.initial_difficulty(w, rating)
    phase = Phase.REVIEW if rating == Rating.EASY else Phase.LEARNING
    return stability, difficulty, phase, 1.0


def _repeat_review(
    config: SchedulerConfig,
    state: MemoryState,
    rating: Rating,
    elapsed: float
) -> tuple[float, float, Phase, float]:
    """
    Update S and D for a card that has been reviewed before.

    - Same-day reviews of learning/relearning cards use the short-term formula
    - Otherwise: recall formula on a pass, forget formula on a fail
    """
    w = config.weights
    retrievability = calculate_retrievability(state.stability, elapsed, config)

    previous_difficulty = state.difficulty if state.difficulty > 0 else D_MIDPOINT
    difficulty = updates.next_difficulty(w, previous_difficulty, rating)

    in_steps = state.phase in (Phase.LEARNING, Phase.RELEARNING)
    if in_steps and elapsed < 1.0:
        stability = updates.next_short_term_stability(w, state.stability, rating)
    elif rating == Rating.FAIL:
        stability = updates.next_forget_stability(w, difficulty, state.stability, retrievability)
    else:
        stability = updates.next_recall_stability(w, difficulty, state.stability, retrievability, rating)

    if rating == Rating.FAIL:
        phase = Phase.RELEARNING if state.phase in (Phase.REVIEW, Phase.RELEARNING) else Phase.LEARNING
    elif state.phase == Phase.LEARNING and stability < GRADUATING_STABILITY:
        phase = Phase.LEARNING
    else:
        phase = Phase.REVIEW

    return stability, difficulty, phase, retrievability


def _interval_for(
    config: SchedulerConfig,
    state: MemoryState,
    phase: Phase,
    rating: Rating,
    stability: float
) -> int:
    """
    Derive the next interval in days.

    - Any fail restarts at the first learning step
    - Ungraduated learning cards take the next fixed step
    - Review cards invert the forgetting curve at the target retention;
      a pass on a card already in review always lengthens its interval
    """
    if rating == Rating.FAIL:
        return clamp_interval(LEARNING_STEPS[0], config)

    if phase == Phase.LEARNING:
        return clamp_interval(_learning_step_after(state.interval_days), config)

    interval = next_interval(stability, config)
    if state.phase == Phase.REVIEW:
        interval = clamp_interval(max(interval, state.interval_days + 1), config)
    return interval
