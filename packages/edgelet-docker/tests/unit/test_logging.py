"""Unit tests — logging setup and operation context injection."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from edgelet_docker.logging import (
    _inject_context_vars,
    configure_logging,
    get_logger,
    operation_context,
)


@pytest.mark.unit
class TestOperationContext:
    def test_injects_operation_and_target(self) -> None:
        with operation_context("stop", "edgeHub"):
            event = _inject_context_vars(None, "info", {"event": "module_stopped"})
        assert event["operation"] == "stop"
        assert event["target"] == "edgeHub"

    def test_cleared_after_block(self) -> None:
        with operation_context("list"):
            pass
        event = _inject_context_vars(None, "info", {"event": "x"})
        assert "operation" not in event
        assert "target" not in event

    def test_explicit_keys_win(self) -> None:
        with operation_context("create", "m1"):
            event = _inject_context_vars(None, "info", {"event": "x", "target": "other"})
        assert event["target"] == "other"


@pytest.mark.unit
class TestConfigureLogging:
    def test_sets_root_level_and_quiets_http(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(level="debug", format="json")
            assert root.level == logging.DEBUG
            assert logging.getLogger("httpx").level == logging.WARNING
            get_logger(__name__).debug("configured")
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)
            structlog.reset_defaults()

    def test_json_events_reach_log_file(self, tmp_path) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        log_file = tmp_path / "edgelet.log"
        try:
            configure_logging(level="info", format="json", log_file=str(log_file))
            with operation_context("start", "edgeHub"):
                get_logger("edgelet_docker.runtime").info("module_started")
            for handler in root.handlers:
                handler.flush()
        finally:
            for handler in root.handlers:
                if handler not in saved_handlers:
                    handler.close()
            root.handlers = saved_handlers
            root.setLevel(saved_level)
            structlog.reset_defaults()
        (line,) = log_file.read_text().splitlines()
        event = json.loads(line)
        assert event["event"] == "module_started"
        assert event["operation"] == "start"
        assert event["target"] == "edgeHub"
