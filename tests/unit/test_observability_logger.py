# pylint: disable=missing-module-docstring,missing-function-docstring

import json
from typing import Any

import pytest

from observability import logger


def _capture(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    captured: list[str] = []
    monkeypatch.setattr(logger, "_print", captured.append)
    monkeypatch.setattr(logger, "_enabled", True)
    return captured


def test_log_event_emits_valid_jsonl(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """
    - log_event emits exactly one JSONL line
    - payload is serialized as-is
    - output sink is patchable
    """
    captured = _capture(monkeypatch)

    payload: dict[str, Any] = {
        "ts_ms": 1,
        "event_type": "TEST",
        "value": 123,
    }

    logger.log_event(payload)

    # Exactly one line emitted
    assert len(captured) == 1

    # Must be valid JSON, payload preserved exactly
    assert json.loads(captured[0]) == payload


def test_missing_timestamp_is_filled(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture(monkeypatch)

    logger.log_event({"event_type": "TEST"})

    decoded = json.loads(captured[0])
    assert isinstance(decoded["ts_ms"], int)


def test_non_serializable_values_do_not_raise(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture(monkeypatch)

    logger.log_event({"ts_ms": 1, "event_type": "TEST", "obj": object()})

    decoded = json.loads(captured[0])
    assert decoded["event_type"] == "TEST"
    assert decoded["obj"].startswith("<object")


def test_disabled_logger_is_silent(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = _capture(monkeypatch)
    monkeypatch.setattr(logger, "_enabled", False)

    logger.log_event({"event_type": "TEST"})

    assert not captured
