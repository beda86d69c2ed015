"""Tests for response classification."""

import json

from stabilityclient.models.errors import ApiRequestError, DeserializationError, RateLimitedError
from stabilityclient.models.responses import ApiError, BalanceResponse, Engine, EngineType
from stabilityclient.services.classifier import RateLimited, Success, TerminalFailure, classify

from conftest import api_error_body


def _body(payload) -> bytes:
    return json.dumps(payload).encode("utf-8")


def test_success_decodes_model():
    """2xx bodies decode into the requested model."""
    outcome = classify(200, _body({"credits": 12.5}), BalanceResponse)

    assert isinstance(outcome, Success)
    assert outcome.value == BalanceResponse(credits=12.5)


def test_success_decodes_list_type():
    """Response types may be generic aliases such as list[Engine]."""
    body = _body([
        {"id": "esrgan-v1-x2plus", "name": "Real-ESRGAN x2", "description": "upscaler", "type": "PICTURE"},
    ])

    outcome = classify(200, body, list[Engine])

    assert isinstance(outcome, Success)
    assert outcome.value[0].id == "esrgan-v1-x2plus"
    assert outcome.value[0].type == EngineType.PICTURE


def test_rate_limited_carries_api_error():
    """HTTP 429 with an error body is classified as rate limited."""
    outcome = classify(429, _body(api_error_body("rate_limit_exceeded", "slow down")), BalanceResponse)

    assert isinstance(outcome, RateLimited)
    assert isinstance(outcome.error, RateLimitedError)
    assert outcome.error.api_error == ApiError(id="err-123", name="rate_limit_exceeded", message="slow down")
    assert outcome.error.status_code == 429
    assert outcome.error.retryable is True


def test_other_status_is_terminal_api_error():
    """Non-429 errors become ApiRequestError with the decoded error object."""
    outcome = classify(500, _body(api_error_body("server_error", "boom")), BalanceResponse)

    assert isinstance(outcome, TerminalFailure)
    assert type(outcome.error) is ApiRequestError
    assert outcome.error.status_code == 500
    assert outcome.error.message == "id: err-123, name: server_error, message: boom"
    assert outcome.error.retryable is False


def test_undecodable_error_body_is_deserialization_error():
    """An HTML error page is terminal and keeps the raw body."""
    body = b"<html>Bad Gateway</html>"

    outcome = classify(502, body, BalanceResponse)

    assert isinstance(outcome, TerminalFailure)
    assert isinstance(outcome.error, DeserializationError)
    assert outcome.error.raw_body == body


def test_undecodable_429_is_not_rate_limited():
    """A 429 whose body is not an error object is not retried."""
    outcome = classify(429, b"Too Many Requests", BalanceResponse)

    assert isinstance(outcome, TerminalFailure)
    assert isinstance(outcome.error, DeserializationError)


def test_success_with_wrong_shape_is_deserialization_error():
    """A 2xx body that does not match the response type is terminal."""
    body = _body({"unexpected": True})

    outcome = classify(200, body, BalanceResponse)

    assert isinstance(outcome, TerminalFailure)
    assert isinstance(outcome.error, DeserializationError)
    assert outcome.error.raw_body == body
