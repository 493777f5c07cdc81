"""
Tests for the logging module.

Tests verify:
- JSON output carries ECS field names and service metadata
- Bound context shows up on events and is removed on exit
- DEBUG events are suppressed at INFO level
"""

import importlib
import json

import pytest
import structlog

from estimate_spine.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    mask_secret,
)


def _events(capsys) -> list[dict]:
    err = capsys.readouterr().err
    return [json.loads(line) for line in err.splitlines() if line.startswith("{")]


class TestConfigureLogging:
    def test_json_output(self, capsys):
        configure_logging(level="INFO", json_format=True, service="estimate-test")
        get_logger("tests").info("run_finished", total=3)

        [event] = _events(capsys)
        assert event["event"] == "run_finished"
        assert event["total"] == 3
        assert event["service.name"] == "estimate-test"
        assert event["log.level"] == "info"
        assert "@timestamp" in event

    def test_debug_suppressed_at_info(self, capsys):
        configure_logging(level="INFO", json_format=True)
        logger = get_logger("tests")
        logger.debug("hidden")
        logger.info("shown")

        assert [e["event"] for e in _events(capsys)] == ["shown"]

    def test_events_go_to_stderr_only(self, capsys):
        configure_logging(level="INFO", json_format=True)
        get_logger("tests").info("run_finished")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert json.loads(captured.err)["event"] == "run_finished"

    def test_logger_name_is_recorded(self, capsys):
        configure_logging(level="INFO", json_format=True)
        get_logger("estimate_spine.engine.reconcile").info("item_updated")

        [event] = _events(capsys)
        assert event["log.logger"] == "estimate_spine.engine.reconcile"

    def test_module_loggers_work_under_real_config(self, capsys):
        configure_logging(level="INFO", json_format=True)
        module = importlib.import_module("estimate_spine.engine.reconcile")
        module.logger.info("run_finished", total=0)

        [event] = _events(capsys)
        assert event["log.logger"] == "estimate_spine.engine.reconcile"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError):
            configure_logging(level="LOUD")


class TestContext:
    def setup_method(self):
        clear_context()

    def test_bind_context(self, capsys):
        configure_logging(level="INFO", json_format=True)
        bind_context(run_id="abc123")
        get_logger("tests").info("step")

        [event] = _events(capsys)
        assert event["run_id"] == "abc123"

    def test_log_context_unbinds_on_exit(self, capsys):
        configure_logging(level="INFO", json_format=True)
        logger = get_logger("tests")
        with LogContext(item_id="PVTI_1"):
            logger.info("inside")
        logger.info("outside")

        inside, outside = _events(capsys)
        assert inside["item_id"] == "PVTI_1"
        assert "item_id" not in outside
        assert structlog.contextvars.get_contextvars() == {}


class TestMaskSecret:
    def test_keeps_last_four(self):
        assert mask_secret("ghp_abcdefgh1234") == "...1234"

    def test_empty(self):
        assert mask_secret("") == ""
