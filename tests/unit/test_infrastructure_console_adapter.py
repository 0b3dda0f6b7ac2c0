"""Unit tests for the structlog console adapter."""

import json

import pytest

from staffdesk.infrastructure.logging import ConsoleAdapter


def _lines(capsys) -> list[dict]:
    return [json.loads(line) for line in capsys.readouterr().out.splitlines() if line]


@pytest.mark.unit
class TestConsoleAdapter:
    def test_json_output_carries_event_and_context(self, capsys):
        logger = ConsoleAdapter(use_json=True)

        logger.info("client.created", client_id="c-1")

        [line] = _lines(capsys)
        assert line["event"] == "client.created"
        assert line["client_id"] == "c-1"
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_level_filtering(self, capsys):
        logger = ConsoleAdapter(use_json=True, level="WARNING")

        logger.info("hidden")
        logger.warning("shown")

        assert [line["event"] for line in _lines(capsys)] == ["shown"]

    def test_error_adds_exception_fields(self, capsys):
        logger = ConsoleAdapter(use_json=True)

        logger.error("action.unexpected_error", error=RuntimeError("boom"))

        [line] = _lines(capsys)
        assert line["error_type"] == "RuntimeError"
        assert line["error_message"] == "boom"

    def test_bind_returns_new_adapter_with_context(self, capsys):
        logger = ConsoleAdapter(use_json=True)

        bound = logger.bind(action="create_client")
        bound.info("action.failed")
        logger.info("plain")

        bound_line, plain_line = _lines(capsys)
        assert bound is not logger
        assert bound_line["action"] == "create_client"
        assert "action" not in plain_line
