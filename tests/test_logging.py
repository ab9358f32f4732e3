import json
import logging
from datetime import datetime

from srs.fsrs import Rating, schedule
from srs.logging import configure_logging


def test_review_is_logged_as_json(caplog):
    configure_logging("DEBUG")
    caplog.set_level(logging.DEBUG, logger="srs")

    schedule(Rating.GOOD, None, 0, datetime(2024, 1, 1))

    events = [json.loads(record.getMessage()) for record in caplog.records if record.name == "srs"]
    scheduled = [e for e in events if e["event"] == "review_scheduled"]
    assert scheduled
    assert scheduled[0]["rating"] == "GOOD"
    assert scheduled[0]["phase"] == "LEARNING"
    assert scheduled[0]["level"] == "debug"
