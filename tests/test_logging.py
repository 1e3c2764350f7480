"""Structured logging: redaction of credentials and user text, tool events."""

import io
import json
import logging
from pathlib import Path
import sys
from typing import Callable, Iterator, List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from polish_app.logging_config import JsonFormatter, correlation_context, log_event, redact_for_log
from tools.observability import instrument_tool

_FAKE_KEY = "AIza" + "Sy" + "0123456789abcdefghijklmnopqrstu"


@pytest.fixture()
def json_logs() -> Iterator[Callable[[], List[dict]]]:
    """Attach a JSON handler to the loggers under test and return parsed lines."""

    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    loggers = [logging.getLogger("polish_muse.tests"), logging.getLogger("tools.observability")]
    previous_levels = [logger.level for logger in loggers]
    for logger in loggers:
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    try:
        yield lambda: [json.loads(line) for line in stream.getvalue().splitlines() if line]
    finally:
        for logger, level in zip(loggers, previous_levels):
            logger.removeHandler(handler)
            logger.setLevel(level)


def test_redact_for_log_masks_sensitive_keys_recursively() -> None:
    scrubbed = redact_for_log(
        {
            "api_key": "secret-value",
            "prompt": "my skin tone is Tan",
            "details": [{"text": "model reply"}, {"Mood": "romantic"}],
            "status_code": 403,
        }
    )

    assert scrubbed == {
        "api_key": "[redacted]",
        "prompt": "[redacted]",
        "details": [{"text": "[redacted]"}, {"Mood": "[redacted]"}],
        "status_code": 403,
    }


def test_key_shaped_strings_are_masked_anywhere() -> None:
    scrubbed = redact_for_log({"error": f"API key {_FAKE_KEY} not valid"})

    assert _FAKE_KEY not in scrubbed["error"]
    assert "[redacted-key]" in scrubbed["error"]


def test_log_event_never_emits_key_or_prompt(json_logs: Callable[[], List[dict]]) -> None:
    logger = logging.getLogger("polish_muse.tests")

    with correlation_context("corr-123"):
        log_event(
            logger,
            logging.WARNING,
            "gemini_upstream_error",
            api_key="secret-value",
            prompt="Occasion: engagement party",
            detail=f"bad key {_FAKE_KEY}",
            status_code=400,
        )

    output = json.dumps(json_logs())
    assert "secret-value" not in output
    assert "engagement party" not in output
    assert _FAKE_KEY not in output

    [entry] = json_logs()
    assert entry["event"] == "gemini_upstream_error"
    assert entry["level"] == "WARNING"
    assert entry["correlation_id"] == "corr-123"
    assert entry["api_key"] == "[redacted]"
    assert entry["prompt"] == "[redacted]"
    assert entry["status_code"] == 400


def test_instrument_tool_logs_start_and_completion(json_logs: Callable[[], List[dict]]) -> None:
    @instrument_tool("shade_lookup")
    def lookup(prompt: str) -> str:
        return prompt.upper()

    assert lookup("secret prompt text") == "SECRET PROMPT TEXT"

    entries = json_logs()
    assert [entry["event"] for entry in entries] == ["tool_call_started", "tool_call_completed"]
    assert all(entry["tool"] == "shade_lookup" for entry in entries)
    assert entries[1]["duration_ms"] >= 0
    assert "secret prompt text" not in json.dumps(entries)


def test_instrument_tool_logs_failure_and_reraises(json_logs: Callable[[], List[dict]]) -> None:
    @instrument_tool("shade_lookup")
    def lookup() -> str:
        raise KeyError("missing")

    with pytest.raises(KeyError):
        lookup()

    entries = json_logs()
    assert [entry["event"] for entry in entries] == ["tool_call_started", "tool_call_failed"]
    assert entries[1]["error_type"] == "KeyError"
    assert entries[1]["level"] == "WARNING"
