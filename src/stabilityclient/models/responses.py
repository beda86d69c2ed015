"""Response models for StabilityClient."""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiError(BaseModel):
    """Error object returned by the API on any non-2xx response."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier for this occurrence of the problem")
    name: str = Field(..., description="Short name of the error class, e.g. bad_request")
    message: str = Field(..., description="Human-readable explanation")


class FinishReason(str, Enum):
    """Completion status of a single generated image."""

    SUCCESS = "SUCCESS"
    CONTENT_FILTERED = "CONTENT_FILTERED"
    ERROR = "ERROR"


class Artifact(BaseModel):
    """One generated image as returned by the generation endpoints."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    encoded_data: str = Field(..., alias="base64", description="Base64-encoded PNG bytes")
    finish_reason: FinishReason = Field(..., alias="finishReason")
    seed: int = Field(..., description="Seed used for this image")

    async def save(self, directory: str | Path) -> Path:
        """Decode and write this artifact into ``directory``."""
        from stabilityclient.services.artifact_service import ArtifactService

        return await ArtifactService().save(self, directory)


class Artifacts(BaseModel):
    """Ordered set of artifacts produced by one generation call."""

    model_config = ConfigDict(frozen=True)

    artifacts: list[Artifact] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.artifacts)

    async def save(self, directory: str | Path) -> list[Path]:
        """Save every artifact concurrently and return the written paths.

        Raises:
            FileSaveError: If any artifact failed; lists every failure.
        """
        from stabilityclient.services.artifact_service import ArtifactService

        return await ArtifactService().save_all(self, directory)


class EngineType(str, Enum):
    """Type of content an engine produces."""

    AUDIO = "AUDIO"
    CLASSIFICATION = "CLASSIFICATION"
    PICTURE = "PICTURE"
    STORAGE = "STORAGE"
    TEXT = "TEXT"
    VIDEO = "VIDEO"


class Engine(BaseModel):
    """An engine available to the account."""

    id: str
    name: str
    description: str
    type: EngineType


class OrganizationMembership(BaseModel):
    id: str
    is_default: bool
    name: str
    role: str


class AccountResponse(BaseModel):
    """Account associated with the API key."""

    email: str
    id: str
    organizations: list[OrganizationMembership] = Field(default_factory=list)
    profile_picture: Optional[str] = None


class BalanceResponse(BaseModel):
    """Credit balance of the account or organization."""

    credits: float
