"""
FSRS - Free Spaced Repetition Scheduler

Main API for scheduling flashcard reviews.

This module implements the FSRS-6 memory model with:
- Power forgetting curve: R = (1 + FACTOR * t / S) ^ DECAY
- Interpretable memory state (Stability, Difficulty, Retrievability)
- New -> Learning -> Review <-> Relearning phase state machine
- Migration of legacy (interval-only) cards

Quick start:
    from datetime import date
    from srs import fsrs

    # First review of a new card
    result = fsrs.schedule(fsrs.Rating.GOOD, None, 0, date.today())

    # Persist result.to_memory_state() and result.due_date, then later:
    result = fsrs.schedule("easy", state, elapsed_days, date.today())
"""

# Core scheduler API (algorithm logic)
from srs.fsrs.scheduler import (
    InvalidRatingError,
    ScheduleResult,
    parse_rating,
    rating_from_quality,
    schedule,
)

# Configuration
from srs.fsrs.config import (
    DEFAULT_CONFIG,
    SchedulerConfig,
    load_config_from_env,
    resolve_config,
)

# Constants and parameters
from srs.fsrs.constants import (
    Rating,
    Phase,
    DEFAULT_WEIGHTS,
    DEFAULT_TARGET_RETENTION,
    DEFAULT_MAXIMUM_INTERVAL_DAYS,
    D_MIN,
    D_MAX,
    S_MIN,
    LEARNING_STEPS,
    GRADUATING_STABILITY,
)

# Memory state (for advanced usage)
from srs.fsrs.memory_state import (
    MemoryState,
    calculate_retrievability,
    elapsed_days_between,
    next_interval,
    retention_interval_factor,
)

# Legacy import and reset
from srs.fsrs.migration import (
    migrate_legacy_card,
    migrate_legacy_item,
    reset_progress,
)

from srs.fsrs.simulation import replay


__all__ = [
    # Core algorithm
    "schedule",
    "ScheduleResult",
    "InvalidRatingError",
    "parse_rating",
    "rating_from_quality",
    "replay",

    # Configuration
    "SchedulerConfig",
    "DEFAULT_CONFIG",
    "load_config_from_env",
    "resolve_config",

    # Enums
    "Rating",
    "Phase",

    # Memory state
    "MemoryState",
    "calculate_retrievability",
    "elapsed_days_between",
    "next_interval",
    "retention_interval_factor",

    # Migration
    "migrate_legacy_item",
    "migrate_legacy_card",
    "reset_progress",

    # Parameters
    "DEFAULT_WEIGHTS",
    "DEFAULT_TARGET_RETENTION",
    "DEFAULT_MAXIMUM_INTERVAL_DAYS",
    "D_MIN",
    "D_MAX",
    "S_MIN",
    "LEARNING_STEPS",
    "GRADUATING_STABILITY",
]
