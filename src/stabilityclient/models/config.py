"""Retry configuration models for StabilityClient."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BackoffPolicy(BaseModel):
    """Exponential backoff applied to rate-limited requests.

    Interval for retry ``n`` (1-indexed) is
    ``min(max_interval_s, initial_interval_s * multiplier ** (n - 1))``.
    Retrying stops once ``max_elapsed_s`` has passed since the first attempt,
    or after ``max_attempts`` attempts when that is set.
    """

    model_config = ConfigDict(frozen=True)

    initial_interval_s: float = Field(0.5, ge=0.0, description="Delay before the first retry")
    multiplier: float = Field(1.5, ge=1.0, description="Growth factor applied per retry")
    max_interval_s: float = Field(60.0, ge=0.0, description="Upper bound for a single delay")
    max_elapsed_s: float = Field(900.0, ge=0.0, description="Total time budget for one call")
    max_attempts: Optional[int] = Field(None, ge=1, description="Optional cap on attempts (None = time budget only)")

    @model_validator(mode="after")
    def validate_bounds(self):
        """Ensure the interval cap is not below the initial interval."""
        if self.max_interval_s < self.initial_interval_s:
            raise ValueError("max_interval_s must be >= initial_interval_s")
        return self

    def compute_interval(self, retry_number: int) -> float:
        """Return the delay in seconds before retry ``retry_number`` (1-indexed)."""
        if retry_number < 1:
            raise ValueError("retry_number must be >= 1")
        return min(self.max_interval_s, self.initial_interval_s * self.multiplier ** (retry_number - 1))


DEFAULT_BACKOFF_POLICY = BackoffPolicy()
