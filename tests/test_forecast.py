"""
Tests for the upcoming review forecast.
"""

from datetime import date, datetime

import pandas as pd

from srs.analytics import build_forecast_index, upcoming_review_counts


def test_forecast_index_starts_today(today):
    index = build_forecast_index(today)

    assert len(index) == 7
    assert index[0] == pd.Timestamp(2024, 3, 1)
    assert index[-1] == pd.Timestamp(2024, 3, 7)


def test_overdue_and_undated_cards_count_today(today):
    due = [
        None,
        date(2024, 2, 20),
        date(2024, 3, 1),
        "2024-03-02",
        datetime(2024, 3, 3, 15, 0),
        date(2024, 3, 20),
    ]

    counts = upcoming_review_counts(due, today)

    assert counts.tolist() == [3, 1, 1, 0, 0, 0, 0]
    assert counts.dtype == "int64"
    assert list(counts.index) == list(build_forecast_index(today))


def test_unparsable_due_date_counts_today(today):
    counts = upcoming_review_counts(["not a date", "2024-03-04T08:00:00"], today, days=5)
    assert counts.tolist() == [1, 0, 0, 1, 0]


def test_empty_input_is_all_zero(today):
    assert upcoming_review_counts([], today).tolist() == [0] * 7


def test_zero_day_window(today):
    counts = upcoming_review_counts([today], today, days=0)
    assert counts.empty
