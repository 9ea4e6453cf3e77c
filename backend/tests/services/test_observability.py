"""Structured logging — JSON records carry the request context fields."""

import json
import logging

from app.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "app.services.stripe_webhook", logging.WARNING, __file__, 1,
        "Unknown customer %s", ("cus_1",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_record_has_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "app.services.stripe_webhook"
    assert log["message"] == "Unknown customer cus_1"
    assert "timestamp" in log


def test_json_record_surfaces_extras():
    log = json.loads(JSONFormatter().format(
        _record(event_type="customer.subscription.updated", event_id="evt_1", user_id=None),
    ))
    assert log["event_type"] == "customer.subscription.updated"
    assert log["event_id"] == "evt_1"
    assert "user_id" not in log
