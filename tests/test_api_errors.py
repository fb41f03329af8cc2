from __future__ import annotations

import pytest

from architect.llm.providers import APIErrorType, classify_api_error


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ("Error 429: Too Many Requests", APIErrorType.RATE_LIMITED),
        ("rate_limit_error: slow down", APIErrorType.RATE_LIMITED),
        ("Overloaded", APIErrorType.API_UNAVAILABLE),
        ("503 Service Unavailable", APIErrorType.API_UNAVAILABLE),
        ("Your credit balance is too low", APIErrorType.BUDGET_EXCEEDED),
        ("usage limit reached; try again later", APIErrorType.BUDGET_EXCEEDED),
        ("something odd happened", APIErrorType.UNKNOWN),
    ],
)
def test_classify_api_error(message: str, expected: APIErrorType) -> None:
    assert classify_api_error(RuntimeError(message)) is expected


def test_classify_value_error_is_unknown() -> None:
    assert classify_api_error(ValueError("invalid JSON")) is APIErrorType.UNKNOWN
