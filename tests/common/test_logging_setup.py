from __future__ import annotations

import json
import logging

from flask import Flask, session

from src.workforce_hub.workforce_hub.common.logging_setup import (
    JSONFormatter,
    RequestContextFilter,
    setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("workforce_hub.fives.service", logging.INFO, __file__, 1, "Saved %s", ("x",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_line_carries_request_context():
    app = Flask(__name__)
    app.secret_key = "test"
    record = _record(collection="five_s_inspections")

    with app.test_request_context("/api/fives/inspections", method="POST"):
        session["user_id"] = 7
        assert RequestContextFilter().filter(record) is True

    entry = json.loads(JSONFormatter().format(record))
    assert entry["message"] == "Saved x"
    assert entry["method"] == "POST"
    assert entry["path"] == "/api/fives/inspections"
    assert entry["user_id"] == 7
    assert entry["collection"] == "five_s_inspections"


def test_outside_a_request_context_fields_are_left_out():
    record = _record()
    RequestContextFilter().filter(record)

    entry = json.loads(JSONFormatter().format(record))
    assert record.path == "-"
    assert "path" not in entry
    assert "collection" not in entry


def test_setup_is_idempotent_and_keeps_foreign_handlers():
    root = logging.getLogger()
    before_level = root.level
    foreign = logging.NullHandler()
    root.addHandler(foreign)
    try:
        first = setup_logging("INFO")
        second = setup_logging("DEBUG", json_output=True)

        assert foreign in root.handlers
        assert first not in root.handlers
        assert second in root.handlers
        assert isinstance(second.formatter, JSONFormatter)
        assert root.level == logging.DEBUG
    finally:
        root.removeHandler(foreign)
        root.removeHandler(second)
        root.setLevel(before_level)
