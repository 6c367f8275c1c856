# pylint: disable=missing-module-docstring,missing-function-docstring

import pytest

from constants import RECOGNITION_RETRY_DELAY_MS
from orchestrator.retry import (
    ERROR_MESSAGES,
    ErrorClass,
    RetryAttempt,
    classify_error,
    error_message,
    get_retry_delay_ms,
    next_attempt,
    reset_attempt,
    should_retry,
)


@pytest.mark.parametrize(
    "code, expected",
    [
        ("network", ErrorClass.NETWORK),
        ("no-speech", ErrorClass.NO_SPEECH),
        ("audio-capture", ErrorClass.AUDIO_CAPTURE),
        ("not-allowed", ErrorClass.NOT_ALLOWED),
        ("service-not-allowed", ErrorClass.SERVICE_NOT_ALLOWED),
        ("bad-grammar", ErrorClass.BAD_GRAMMAR),
        ("language-not-supported", ErrorClass.LANGUAGE_NOT_SUPPORTED),
        ("aborted", ErrorClass.ABORTED),
        ("something-new", ErrorClass.UNKNOWN),
        ("", ErrorClass.UNKNOWN),
        (None, ErrorClass.UNKNOWN),
    ],
)
def test_classify_error(code: str | None, expected: ErrorClass) -> None:
    assert classify_error(code) is expected


def test_every_class_has_a_message() -> None:
    for error_class in ErrorClass:
        assert error_message(error_class) == ERROR_MESSAGES[error_class]
        assert error_message(error_class)


def test_network_retries_twice_then_stops() -> None:
    attempt = reset_attempt()
    assert should_retry(error_class=ErrorClass.NETWORK, attempt=attempt)

    attempt = next_attempt(attempt)
    assert should_retry(error_class=ErrorClass.NETWORK, attempt=attempt)

    attempt = next_attempt(attempt)
    assert attempt == RetryAttempt(2)
    assert not should_retry(error_class=ErrorClass.NETWORK, attempt=attempt)


@pytest.mark.parametrize(
    "error_class", [c for c in ErrorClass if c is not ErrorClass.NETWORK]
)
def test_non_network_errors_never_retry(error_class: ErrorClass) -> None:
    assert not should_retry(error_class=error_class, attempt=reset_attempt())


def test_retry_delay_is_fixed() -> None:
    assert get_retry_delay_ms(attempt=RetryAttempt(1)) == RECOGNITION_RETRY_DELAY_MS
    assert get_retry_delay_ms(attempt=RetryAttempt(2)) == RECOGNITION_RETRY_DELAY_MS
