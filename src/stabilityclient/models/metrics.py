"""Metrics models for StabilityClient."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer


class GenerationMetrics(BaseModel):
    """Tracking data for one generation call."""

    duration_ms: int = Field(..., ge=0, description="Total call time in milliseconds, retries included")
    engine_id: str = Field(..., description="Engine that served the request")
    operation: str = Field(..., description="Endpoint operation, e.g. text-to-image")
    artifact_count: int = Field(0, ge=0, description="Artifacts returned")
    filtered_count: int = Field(0, ge=0, description="Artifacts rejected by safety filters")
    success: bool = Field(True, description="Whether the call returned artifacts")
    error_code: Optional[str] = Field(None, description="ErrorCode value when success=False")
    timestamp: Optional[datetime] = Field(None, description="When the call completed (UTC)")

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None
