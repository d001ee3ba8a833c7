# tests/unit/test_logging_config.py
"""
Unit tests for structured logging helpers.
"""

import json
import logging

import pytest

from aggregator.logging_config import (
    JSONFormatter,
    log_stage,
    new_trace_id,
    stage_var,
    trace_id_var,
)


def make_record(**extra):
    record = logging.LogRecord("aggregator.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self):
        payload = json.loads(JSONFormatter().format(make_record()))

        assert payload["level"] == "INFO"
        assert payload["logger"] == "aggregator.test"
        assert payload["message"] == "hello world"
        assert payload["timestamp"].endswith("Z")

    def test_whitelisted_extras_only(self):
        record = make_record(source="nyt", items_processed=3, secret="hide-me")
        payload = json.loads(JSONFormatter().format(record))

        assert payload["source"] == "nyt"
        assert payload["items_processed"] == 3
        assert "secret" not in payload

    def test_trace_and_stage(self):
        trace_token = trace_id_var.set("trace-123")
        stage_token = stage_var.set("ingest:nyt")
        try:
            payload = json.loads(JSONFormatter().format(make_record()))
        finally:
            trace_id_var.reset(trace_token)
            stage_var.reset(stage_token)

        assert payload["trace_id"] == "trace-123"
        assert payload["stage"] == "ingest:nyt"


class TestLogStage:
    """Tests for log_stage."""

    def test_success_logs_start_and_complete(self, caplog):
        caplog.set_level(logging.INFO, logger="aggregator.pipeline")
        trace_id = new_trace_id()

        with log_stage("ingest:newsapi", trace_id=trace_id):
            assert stage_var.get() == "ingest:newsapi"

        events = [r.event for r in caplog.records if r.name == "aggregator.pipeline"]
        assert events == ["stage_start", "stage_complete"]
        assert stage_var.get() is None
        assert trace_id_var.get() == trace_id

    def test_failure_logs_and_reraises(self, caplog):
        caplog.set_level(logging.INFO, logger="aggregator.pipeline")

        with pytest.raises(RuntimeError):
            with log_stage("ingest:guardian"):
                raise RuntimeError("boom")

        failed = [r for r in caplog.records if getattr(r, "event", None) == "stage_failed"]
        assert len(failed) == 1
        assert "boom" in failed[0].getMessage()
