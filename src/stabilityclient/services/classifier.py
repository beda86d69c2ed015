"""Classification of raw HTTP responses into success, rate limit or terminal failure."""

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from stabilityclient.models.errors import (
    ApiRequestError,
    DeserializationError,
    RateLimitedError,
    StabilityError,
)
from stabilityclient.models.responses import ApiError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RATE_LIMITED_STATUS = 429


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class RateLimited:
    error: RateLimitedError


@dataclass(frozen=True)
class TerminalFailure:
    error: StabilityError


Outcome = Union[Success[T], RateLimited, TerminalFailure]


def _deserialization_error(e: ValidationError, body: bytes) -> DeserializationError:
    logger.error(
        f"❌ [Classifier] failed deserialization of: {body.decode('utf-8', errors='replace')}"
    )
    return DeserializationError(
        f"failed to deserialize api response: {str(e)}",
        raw_body=body,
        original_exception=e,
    )


def classify(status_code: int, body: bytes, response_model: Any) -> Outcome:
    """
    Decide what one HTTP response means for the caller.

    Args:
        status_code: HTTP status of the response
        body: Full response body
        response_model: Type the 2xx body decodes into (model class or e.g. ``list[Engine]``)

    Returns:
        Success with the decoded value, RateLimited for HTTP 429, or
        TerminalFailure for everything else (including undecodable bodies)
    """
    if 200 <= status_code < 300:
        try:
            return Success(TypeAdapter(response_model).validate_json(body))
        except ValidationError as e:
            return TerminalFailure(_deserialization_error(e, body))

    try:
        api_error = ApiError.model_validate_json(body)
    except ValidationError as e:
        return TerminalFailure(_deserialization_error(e, body))

    if status_code == RATE_LIMITED_STATUS:
        return RateLimited(RateLimitedError(api_error, status_code))
    return TerminalFailure(ApiRequestError(api_error, status_code))
