"""
Pydantic models for card rows exchanged with the caller's storage.

The scheduler does not own a schema; these models describe the columns it
populates (ReviewRecord) and the legacy rows it can migrate (LegacyCard).
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Optional, Union

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from srs.fsrs.memory_state import MemoryState
    from srs.fsrs.scheduler import ScheduleResult


def _non_negative_or_none(value: Any) -> Any:
    """Map negative, NaN or unparsable numbers to None before validation."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


# ---- Scheduler Output ----

class ReviewRecord(BaseModel):
    """
    Card columns written after a review.

    Field names follow the storage columns (`state`, `interval`, `lapses`,
    `next_review_date`) rather than the scheduler's attribute names.
    """
    stability: float = Field(..., ge=0, description="Days until recall probability drops to 90%")
    difficulty: float = Field(..., ge=0, le=10, description="Intrinsic hardness, 1-10 (0 for new cards)")
    state: int = Field(..., ge=0, le=3, description="0=New, 1=Learning, 2=Review, 3=Relearning")
    interval: int = Field(..., ge=0, description="Days until next review")
    lapses: int = Field(default=0, ge=0, description="Failed reviews while in Review")
    next_review_date: Optional[date] = Field(default=None, description="Due date (date only)")
    last_reviewed_at: Optional[datetime] = None

    @classmethod
    def from_result(cls, result: "ScheduleResult") -> "ReviewRecord":
        return cls(
            stability=result.stability,
            difficulty=result.difficulty,
            state=int(result.phase),
            interval=result.interval_days,
            lapses=result.lapse_count,
            next_review_date=result.due_date,
            last_reviewed_at=result.reviewed_at,
        )

    def to_memory_state(self) -> "MemoryState":
        from srs.fsrs.memory_state import MemoryState

        return MemoryState.from_mapping(self.model_dump())


# ---- Import Data ----

class LegacyCard(BaseModel):
    """
    A card row from before the FSRS migration.

    Only `interval` is guaranteed; FSRS fields may be null.
    """
    interval: Optional[float] = Field(default=None, description="Last SM-2 interval in days")
    stability: Optional[float] = None
    difficulty: Optional[float] = None
    state: Optional[Union[int, str]] = None
    lapses: int = 0
    last_reviewed_at: Optional[datetime] = None

    @field_validator("interval", "stability", "difficulty", mode="before")
    @classmethod
    def _drop_invalid_numbers(cls, value: Any) -> Any:
        return _non_negative_or_none(value)

    @field_validator("lapses", mode="before")
    @classmethod
    def _default_lapses(cls, value: Any) -> Any:
        number = _non_negative_or_none(value)
        return 0 if number is None else int(number)
