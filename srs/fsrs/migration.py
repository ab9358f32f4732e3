"""
Migration - Legacy Items and Progress Reset

Cards imported from the SM-2 era (or from Anki) only carry an interval.
Treating them as new would collapse a well-known card back to a one-day
interval on its next review, so the interval is taken as the last known
memory duration instead.

Applied once at import time; the result is a normal MemoryState that goes
through schedule() on the next real review.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional, Union

from srs.fsrs.constants import D_MAX, D_MIDPOINT, D_MIN, Phase
from srs.fsrs.memory_state import MemoryState, coerce_phase, round_half_up
from srs.schemas import LegacyCard


def migrate_legacy_item(
    prior_interval: Optional[float],
    last_reviewed_at: Optional[datetime] = None,
    lapse_count: int = 0
) -> MemoryState:
    """
    Build a memory state from a legacy interval.

    Policy:
        - prior interval > 0: S = interval, D = midpoint of [1, 10], phase = REVIEW
        - otherwise: new card (S = D = 0, phase = NEW)

    Args:
        prior_interval: Last interval (days) from the old system
        last_reviewed_at: Last review timestamp, if the old system kept one
        lapse_count: Lapses already recorded by the old system

    Returns:
        MemoryState ready for schedule()
    """
    interval = _positive_or_zero(prior_interval)
    lapse_count = max(0, int(lapse_count or 0))

    if interval <= 0:
        return MemoryState(lapse_count=lapse_count)

    return MemoryState(
        stability=interval,
        difficulty=D_MIDPOINT,
        phase=Phase.REVIEW,
        interval_days=max(1, round_half_up(interval)),
        lapse_count=lapse_count,
        last_reviewed_at=last_reviewed_at,
    )


def migrate_legacy_card(card: Union[LegacyCard, Mapping[str, Any]]) -> MemoryState:
    """
    Migrate a stored card row, keeping whatever FSRS fields it already has.

    Only missing stability / difficulty / state values are derived from the
    legacy interval, so running the migration twice is harmless.
    """
    if not isinstance(card, LegacyCard):
        card = LegacyCard.model_validate(dict(card))

    derived = migrate_legacy_item(card.interval, card.last_reviewed_at, card.lapses)

    stability = card.stability if card.stability else derived.stability
    if card.difficulty:
        difficulty = max(D_MIN, min(D_MAX, card.difficulty))
    else:
        difficulty = derived.difficulty or D_MIDPOINT
    phase = coerce_phase(card.state) if card.state is not None else derived.phase

    if phase == Phase.NEW or stability <= 0:
        # No usable memory signal: start over, keeping the lapse history
        return MemoryState(lapse_count=derived.lapse_count)

    return MemoryState(
        stability=stability,
        difficulty=difficulty,
        phase=phase,
        interval_days=derived.interval_days or max(1, round_half_up(stability)),
        lapse_count=derived.lapse_count,
        last_reviewed_at=card.last_reviewed_at,
    )


def reset_progress() -> MemoryState:
    """
    Explicit "reset to New": zero S, D, interval and lapses, clear last review.
    """
    return MemoryState()


def _positive_or_zero(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number
