from __future__ import annotations

import json
import logging

from reconnect.core.logging import JSONLogFormatter


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "reconnect.services.metrics", logging.INFO, __file__, 1, "Recomputed %s", ("metrics",), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_json_with_context() -> None:
    formatter = JSONLogFormatter("test", "1.2.3")

    line = formatter.format(make_record(contact_id=7, contact_trend="stable"))
    payload = json.loads(line)

    assert payload["message"] == "Recomputed metrics"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "reconnect.services.metrics"
    assert payload["environment"] == "test"
    assert payload["version"] == "1.2.3"
    assert payload["context"] == {"contact_id": 7, "contact_trend": "stable"}


def test_formatter_omits_empty_context_and_serialises_unknown_types() -> None:
    formatter = JSONLogFormatter("test", "1.2.3")

    assert "context" not in json.loads(formatter.format(make_record()))

    payload = json.loads(formatter.format(make_record(tag_ids={3})))
    assert payload["context"]["tag_ids"] == "{3}"
