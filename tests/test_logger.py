"""Tests for the structured trace logger."""

import json
import logging

from flowconditions.utils.logger import ConditionLogger, JSONFormatter


class TestConditionLogger:

    def test_close_detaches_handlers(self):
        tracer = ConditionLogger(name="flowconditions.trace.close")
        assert len(tracer.logger.handlers) == 1
        tracer.close()
        assert tracer.logger.handlers == []

    def test_new_instance_replaces_handlers(self):
        first = ConditionLogger(name="flowconditions.trace.shared")
        old_handler = first.logger.handlers[0]
        second = ConditionLogger(name="flowconditions.trace.shared")
        try:
            assert second.logger.handlers != [old_handler]
            assert len(second.logger.handlers) == 1
        finally:
            second.close()

    def test_file_handler_is_closed(self, tmp_path):
        log_file = tmp_path / "trace.log"
        tracer = ConditionLogger(name="flowconditions.trace.file", output_file=str(log_file))
        file_handler = next(h for h in tracer.logger.handlers if isinstance(h, logging.FileHandler))
        tracer.route_selected("block", "item", "edge")
        tracer.close()
        assert file_handler.stream is None
        assert "route_selected" in log_file.read_text()

    def test_json_events(self, caplog):
        tracer = ConditionLogger(name="flowconditions.trace.json", format_type="json")
        try:
            with caplog.at_level(logging.DEBUG, logger="flowconditions.trace.json"):
                tracer.condition_evaluated("OR", 2, True)
        finally:
            tracer.close()
        event = json.loads(caplog.records[-1].getMessage())
        assert event["event_type"] == "condition_evaluated"
        assert event["comparisons"] == 2
        assert event["result"] is True

    def test_json_formatter(self):
        record = logging.LogRecord("flowconditions", logging.INFO, __file__, 1, "hello", None, None)
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "hello"
        assert data["level"] == "INFO"
