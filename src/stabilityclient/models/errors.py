"""Error codes and exception types for StabilityClient."""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stabilityclient.models.responses import ApiError


class ErrorCode(str, Enum):
    """Error category codes for API operations."""

    # Retryable errors (retryable=True)
    RATE_LIMITED = "RATE_LIMITED"

    # Not retryable errors (retryable=False)
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    DESERIALIZATION_ERROR = "DESERIALIZATION_ERROR"
    API_ERROR = "API_ERROR"
    FILE_READ_ERROR = "FILE_READ_ERROR"
    FILE_SAVE_ERROR = "FILE_SAVE_ERROR"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"


# Set of retryable error codes
RETRYABLE_ERRORS = {
    ErrorCode.RATE_LIMITED,
}


def is_retryable(code: ErrorCode) -> bool:
    """Check if an error code indicates a retryable error."""
    return code in RETRYABLE_ERRORS


class StabilityError(Exception):
    """Base exception for every failure surfaced by the client."""

    error_code: ErrorCode = ErrorCode.API_ERROR

    def __init__(self, message: str, original_exception: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception

    @property
    def retryable(self) -> bool:
        return is_retryable(self.error_code)


class TransportError(StabilityError):
    """Connection, timeout or protocol failure before a response was received."""

    error_code = ErrorCode.TRANSPORT_ERROR


class DeserializationError(StabilityError):
    """A response body could not be decoded into the expected shape."""

    error_code = ErrorCode.DESERIALIZATION_ERROR

    def __init__(self, message: str, raw_body: bytes, original_exception: Exception | None = None):
        super().__init__(message, original_exception=original_exception)
        self.raw_body = raw_body


class ApiRequestError(StabilityError):
    """Well-formed error object returned by the API."""

    error_code = ErrorCode.API_ERROR

    def __init__(self, api_error: "ApiError", status_code: int):
        super().__init__(
            f"id: {api_error.id}, name: {api_error.name}, message: {api_error.message}"
        )
        self.api_error = api_error
        self.status_code = status_code


class RateLimitedError(ApiRequestError):
    """HTTP 429. The only condition the retry engine recovers from."""

    error_code = ErrorCode.RATE_LIMITED


class FileReadError(StabilityError):
    """A file referenced by a request could not be read."""

    error_code = ErrorCode.FILE_READ_ERROR


class FileSaveError(StabilityError):
    """One or more artifacts could not be written.

    ``failures`` holds every per-artifact message; ``message`` joins them.
    """

    error_code = ErrorCode.FILE_SAVE_ERROR

    def __init__(
        self,
        message: str,
        failures: list[str] | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(message, original_exception=original_exception)
        self.failures = failures if failures is not None else [message]

    @classmethod
    def aggregate(cls, failures: list[str]) -> "FileSaveError":
        return cls("; ".join(failures), failures=list(failures))


class InvalidArgumentError(StabilityError):
    """Request failed local validation before any network call."""

    error_code = ErrorCode.INVALID_ARGUMENT
