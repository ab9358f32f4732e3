"""
Review forecast for the upcoming days.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import Optional, Union

import pandas as pd


DueDate = Union[date, datetime, str, None]


def build_forecast_index(today: date, days: int = 7) -> pd.DatetimeIndex:
    """
    Dense day index starting today.
    """
    return pd.date_range(start=pd.Timestamp(today), periods=max(days, 0), freq="D")


def _as_day(value: DueDate) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def upcoming_review_counts(
    due_dates: Iterable[DueDate],
    today: date,
    days: int = 7
) -> pd.Series:
    """
    Number of cards due on each of the next `days` days.

    Cards with no (or unparsable) due date, or due on/before today, count
    towards today. Cards due after the window are ignored.
    """
    day_index = build_forecast_index(today, days)
    if len(day_index) == 0:
        return pd.Series(dtype="int64", index=day_index)

    first_day = day_index[0]
    stamps = pd.Series(
        [pd.Timestamp(day) if day is not None else first_day for day in map(_as_day, due_dates)],
        dtype="datetime64[ns]",
    )
    stamps = stamps.clip(lower=first_day)

    counts = stamps.value_counts().sort_index()
    return counts.reindex(day_index, fill_value=0).astype("int64")
