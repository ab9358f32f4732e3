"""
Tests for the storage row models.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from srs.fsrs import MemoryState, Phase, Rating, schedule
from srs.schemas import LegacyCard, ReviewRecord


def test_review_record_from_result(now):
    result = schedule(Rating.EASY, None, 0, now)
    record = ReviewRecord.from_result(result)

    assert record.state == int(Phase.REVIEW)
    assert record.interval == 8
    assert record.lapses == 0
    assert record.next_review_date == date(2024, 1, 18)
    assert record.last_reviewed_at == now


def test_review_record_restores_memory_state(now):
    result = schedule(Rating.GOOD, MemoryState(stability=10.0, difficulty=5.0, phase=Phase.REVIEW, interval_days=10), 10, now)

    assert ReviewRecord.from_result(result).to_memory_state() == result.to_memory_state()


def test_review_record_dump_uses_column_names(now):
    dumped = ReviewRecord.from_result(schedule(Rating.FAIL, None, 0, now)).model_dump()

    assert set(dumped) == {
        "stability", "difficulty", "state", "interval", "lapses", "next_review_date", "last_reviewed_at",
    }


@pytest.mark.parametrize("field, value", [
    ("difficulty", 11.0),
    ("state", 4),
    ("interval", -1),
    ("stability", -0.5),
])
def test_review_record_rejects_out_of_range(field, value):
    row = {"stability": 1.0, "difficulty": 5.0, "state": 1, "interval": 1}
    row[field] = value

    with pytest.raises(ValidationError):
        ReviewRecord(**row)


def test_legacy_card_coerces_bad_numbers():
    card = LegacyCard.model_validate({
        "interval": "12",
        "stability": -4,
        "difficulty": "hard",
        "lapses": None,
    })

    assert card.interval == 12.0
    assert card.stability is None
    assert card.difficulty is None
    assert card.lapses == 0
    assert card.state is None


def test_legacy_card_accepts_state_names():
    assert LegacyCard(interval=3, state="learning").state == "learning"
    assert LegacyCard(interval=3, state=2).state == 2
