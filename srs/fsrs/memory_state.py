"""
Memory State - Card State, Retrievability and Intervals

Defines the persisted memory state and the forgetting curve used both to
estimate recall probability and to derive the next interval.

Key concepts:
- Stability (S): days until recall probability decays to 90%
- Difficulty (D): how hard the card is to learn (1-10 scale)
- Retrievability (R): probability of successful recall at time t
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from srs.fsrs.config import SchedulerConfig, resolve_config
from srs.fsrs.constants import Phase
from srs.logging import logger


@dataclass(frozen=True)
class MemoryState:
    """
    Memory state for a single card.

    The default instance is a brand-new card (never reviewed).
    """
    stability: float = 0.0  # S, in days
    difficulty: float = 0.0  # D, range 1-10 once reviewed
    phase: Phase = Phase.NEW
    interval_days: int = 0
    lapse_count: int = 0
    last_reviewed_at: Optional[datetime] = None

    @property
    def is_new(self) -> bool:
        return self.phase == Phase.NEW

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "MemoryState":
        """
        Build a state from a loosely-typed row (e.g. a database record).

        Missing, null or malformed fields take New-card values.
        Accepts both attribute names and the storage column names
        (`state`, `interval`, `lapses`).
        """
        def pick(*keys: str) -> Any:
            for key in keys:
                if key in row and row[key] is not None:
                    return row[key]
            return None

        return cls(
            stability=_non_negative_float(pick("stability")),
            difficulty=_non_negative_float(pick("difficulty")),
            phase=coerce_phase(pick("phase", "state")),
            interval_days=int(_non_negative_float(pick("interval_days", "interval"))),
            lapse_count=int(_non_negative_float(pick("lapse_count", "lapses"))),
            last_reviewed_at=_coerce_datetime(pick("last_reviewed_at")),
        )


def _non_negative_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def _coerce_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def coerce_phase(value: Any) -> Phase:
    """Convert a stored phase (enum, int or name) to Phase; unknown values map to NEW."""
    if isinstance(value, Phase):
        return value
    if value is None:
        return Phase.NEW
    if isinstance(value, str):
        name = value.strip().upper()
        if name in Phase.__members__:
            return Phase[name]
        if name.isdigit():
            value = int(name)
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Phase(value)
        except ValueError:
            pass
    logger.debug("phase_fallback", value=repr(value))
    return Phase.NEW


def calculate_retrievability(
    stability: float,
    elapsed_days: float,
    config: Optional[SchedulerConfig] = None
) -> float:
    """
    Calculate retrievability using the FSRS power forgetting curve.

    Formula: R = (1 + FACTOR * t / S) ^ DECAY

    Where:
    - t = days since last review
    - S = stability (in days)
    - DECAY = -w20, FACTOR = 0.9 ^ (1 / DECAY) - 1, so R(t=S) = 0.9

    First exposures (S <= 0) and same-moment reviews (t <= 0) have R = 1.

    Args:
        stability: Current stability in days
        elapsed_days: Time since last review in days
        config: Scheduler configuration (defaults to process default)

    Returns:
        Retrievability between 0 and 1
    """
    if stability <= 0 or elapsed_days <= 0:
        return 1.0

    config = resolve_config(config)
    return (1.0 + config.factor * elapsed_days / stability) ** config.decay


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def next_interval(
    stability: float,
    config: Optional[SchedulerConfig] = None
) -> int:
    """
    Days until retrievability falls to the target retention.

    Inverts the forgetting curve:
        t = S / FACTOR * (r ^ (1 / DECAY) - 1)

    Rounded to the nearest day, at least 1, at most maximum_interval_days.
    Very low retention targets saturate at the cap instead of overflowing.
    """
    config = resolve_config(config)
    raw = stability / config.factor * _retention_scale(config.target_retention, config.decay)
    if math.isnan(raw):
        raw = 0.0
    if raw >= config.maximum_interval_days:
        return config.maximum_interval_days
    return clamp_interval(round_half_up(raw), config)


def clamp_interval(days: int, config: SchedulerConfig) -> int:
    return max(1, min(days, config.maximum_interval_days))


def _retention_scale(target_retention: float, decay: float) -> float:
    """r ^ (1 / DECAY) - 1, infinite when the power overflows."""
    try:
        return target_retention ** (1.0 / decay) - 1.0
    except OverflowError:
        return math.inf


def retention_interval_factor(
    target_retention: float,
    config: Optional[SchedulerConfig] = None
) -> float:
    """
    Interval multiplier for a retention target relative to 90%.

    Used to preview how much longer (or shorter) intervals get when the
    user changes the desired retention. Returns 1.0 at 0.9.
    """
    config = resolve_config(config)
    return _retention_scale(target_retention, config.decay) / config.factor


def elapsed_days_between(
    last_reviewed_at: Optional[datetime | date],
    now: datetime | date
) -> float:
    """
    Days between the last review and now (0 if never reviewed or in the future).

    Dates without a time component count whole days.
    """
    if last_reviewed_at is None:
        return 0.0

    if isinstance(last_reviewed_at, datetime) and isinstance(now, datetime):
        if (last_reviewed_at.tzinfo is None) != (now.tzinfo is None):
            # Mixed naive/aware timestamps: compare calendar days only
            delta_days = float((now.date() - last_reviewed_at.date()).days)
        else:
            delta_days = (now - last_reviewed_at).total_seconds() / 86400.0
    else:
        delta_days = float((_as_date(now) - _as_date(last_reviewed_at)).days)

    return max(0.0, delta_days)


def _as_date(value: datetime | date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value
