"""Contract tests for response models and the error taxonomy."""

import pytest
from pydantic import ValidationError

from stabilityclient.models.errors import (
    ApiRequestError,
    DeserializationError,
    ErrorCode,
    FileReadError,
    FileSaveError,
    InvalidArgumentError,
    RateLimitedError,
    StabilityError,
    TransportError,
    is_retryable,
)
from stabilityclient.models.responses import ApiError, Artifact, Artifacts, FinishReason

from conftest import artifact_payload


def test_artifact_parses_api_shape():
    """Artifacts decode from the camelCase wire format."""
    artifacts = Artifacts.model_validate({"artifacts": [artifact_payload(seed=99)]})

    assert len(artifacts) == 1
    artifact = artifacts.artifacts[0]
    assert artifact.seed == 99
    assert artifact.finish_reason == FinishReason.SUCCESS
    assert artifact.encoded_data == artifact_payload()["base64"]


def test_artifact_is_immutable():
    artifact = Artifact.model_validate(artifact_payload())

    with pytest.raises(ValidationError):
        artifact.seed = 1


def test_unknown_finish_reason_is_rejected():
    with pytest.raises(ValidationError):
        Artifact.model_validate(artifact_payload(finish_reason="MAYBE"))


def test_api_error_message_format():
    """ApiRequestError renders the id, name and message of the error object."""
    error = ApiRequestError(ApiError(id="abc", name="bad_request", message="bad prompt"), status_code=400)

    assert str(error) == "id: abc, name: bad_request, message: bad prompt"
    assert error.error_code == ErrorCode.API_ERROR


def test_only_rate_limiting_is_retryable():
    api_error = ApiError(id="1", name="rate_limit_exceeded", message="slow down")

    assert RateLimitedError(api_error, 429).retryable is True
    assert is_retryable(ErrorCode.RATE_LIMITED) is True
    for error in [
        TransportError("boom"),
        DeserializationError("bad body", raw_body=b"<html>"),
        ApiRequestError(api_error, 400),
        FileReadError("missing"),
        FileSaveError("disk full"),
        InvalidArgumentError("no prompt"),
    ]:
        assert isinstance(error, StabilityError)
        assert error.retryable is False


def test_file_save_error_aggregate():
    """Aggregated save errors keep each failure and join them with '; '."""
    error = FileSaveError.aggregate(["first failed", "second failed"])

    assert error.failures == ["first failed", "second failed"]
    assert error.message == "first failed; second failed"
    assert error.error_code == ErrorCode.FILE_SAVE_ERROR


def test_single_file_save_error_lists_itself():
    error = FileSaveError("disk full")

    assert error.failures == ["disk full"]


def test_original_exception_is_preserved():
    cause = OSError("no such file")

    error = FileReadError("failed to read file", original_exception=cause)

    assert error.original_exception is cause
