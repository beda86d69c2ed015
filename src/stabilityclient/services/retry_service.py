"""Retry engine with exponential backoff for rate-limited API calls."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    stop_before_delay,
    wait_exponential,
)

from stabilityclient.interfaces import RequestFactory, Transport
from stabilityclient.models.config import DEFAULT_BACKOFF_POLICY, BackoffPolicy
from stabilityclient.models.errors import InvalidArgumentError, RateLimitedError, StabilityError
from stabilityclient.services.classifier import RateLimited, Success, TerminalFailure, classify

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _log_backoff(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    message = error.api_error.message if isinstance(error, RateLimitedError) else str(error)
    delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.warning(
        f"⏳ [RetryEngine] Rate limited, retrying in {delay:.2f}s "
        f"(attempt {retry_state.attempt_number}): {message}"
    )


def build_retry_config(policy: BackoffPolicy) -> dict[str, Any]:
    """Translate a BackoffPolicy into tenacity keyword arguments."""
    stop = stop_before_delay(policy.max_elapsed_s)
    if policy.max_attempts is not None:
        stop = stop | stop_after_attempt(policy.max_attempts)

    return {
        "stop": stop,
        "wait": wait_exponential(
            multiplier=policy.initial_interval_s,
            exp_base=policy.multiplier,
            max=policy.max_interval_s,
        ),
        # HTTP 429 is the only recoverable condition
        "retry": retry_if_exception_type(RateLimitedError),
        "before_sleep": _log_backoff,
        "reraise": True,
    }


class RetryEngine:
    """Executes request factories with exponential backoff on rate limiting.

    Attempts within one ``execute`` call are strictly sequential. Transport
    failures are never retried, since a repeated generation request may be
    billed twice.
    """

    def __init__(
        self,
        transport: Transport,
        backoff: BackoffPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Initialize the retry engine.

        Args:
            transport: Transport used to send each attempt
            backoff: Default backoff policy (original client defaults if None)
            sleep: Coroutine used to wait between attempts
        """
        self.transport = transport
        self.backoff = backoff or DEFAULT_BACKOFF_POLICY
        self._sleep = sleep

    async def execute(
        self,
        request_factory: RequestFactory,
        response_model: Any,
        backoff: BackoffPolicy | None = None,
    ) -> Any:
        """
        Send requests built by ``request_factory`` until a terminal outcome.

        Args:
            request_factory: Builds a fresh request for every attempt
            response_model: Type the successful body decodes into
            backoff: Optional per-call policy overriding the engine default

        Returns:
            Decoded response body

        Raises:
            RateLimitedError: If the time or attempt budget ran out while rate limited
            StabilityError: Any other failure, raised immediately without retry
        """
        policy = (backoff or self.backoff).model_copy()

        async for attempt in AsyncRetrying(sleep=self._sleep, **build_retry_config(policy)):
            with attempt:
                return await self._attempt(
                    request_factory, response_model, attempt.retry_state.attempt_number
                )

    async def _attempt(self, request_factory: RequestFactory, response_model: Any, attempt_number: int) -> Any:
        try:
            request = await request_factory.build()
        except StabilityError:
            raise
        except Exception as e:
            raise InvalidArgumentError(f"failed to build request: {str(e)}", original_exception=e)

        logger.debug(f"🚀 [RetryEngine] Attempt {attempt_number}: {request.method} {request.url}")
        response = await self.transport.send(request)

        outcome = classify(response.status_code, response.content, response_model)
        if isinstance(outcome, Success):
            return outcome.value
        if isinstance(outcome, RateLimited):
            raise outcome.error
        if isinstance(outcome, TerminalFailure):
            raise outcome.error
        raise TypeError(f"Unexpected outcome: {outcome!r}")
