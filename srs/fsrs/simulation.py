"""
Simulation - replay a rating sequence through the scheduler.

Each review happens exactly when the previous one said it was due, which is
how scheduling behaviour is inspected by hand and in tests.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Any, Optional

from srs.fsrs.config import ConfigLike
from srs.fsrs.memory_state import MemoryState
from srs.fsrs.scheduler import ScheduleResult, schedule


def replay(
    ratings: Iterable[Any],
    start_state: Optional[MemoryState] = None,
    start: datetime | date = date(2024, 1, 1),
    config: ConfigLike = None,
    initial_elapsed_days: float = 0.0
) -> list[ScheduleResult]:
    """
    Run ratings in order, each one on the previous result's due date.

    Args:
        ratings: Sequence of ratings accepted by schedule()
        start_state: State before the first rating (default: new card)
        start: Date of the first review
        config: Configuration override passed to every call
        initial_elapsed_days: Elapsed days for the first review (e.g. a
            migrated card last seen weeks ago)

    Returns:
        One ScheduleResult per rating
    """
    state = start_state if start_state is not None else MemoryState()
    now = start
    elapsed = initial_elapsed_days
    results: list[ScheduleResult] = []

    for rating in ratings:
        result = schedule(rating, state, elapsed, now, config)
        results.append(result)

        state = result.to_memory_state()
        elapsed = float(result.interval_days)
        now = now + timedelta(days=result.interval_days)

    return results
