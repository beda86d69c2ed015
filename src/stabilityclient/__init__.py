"""StabilityClient - async client for the Stability AI REST API."""

from stabilityclient.client import API_BASE, StabilityClient
from stabilityclient.interfaces import ArtifactStore, RequestFactory, Transport, TransportResponse
from stabilityclient.models.config import BackoffPolicy
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
from stabilityclient.models.metrics import GenerationMetrics
from stabilityclient.models.requests import (
    ClipGuidancePreset,
    ImageToImageRequest,
    InitImageMode,
    LatentUpscalerUpscaleRequest,
    MaskingRequest,
    MaskSource,
    RealESRGANUpscaleRequest,
    Sampler,
    StylePreset,
    TextPrompt,
    TextToImageRequest,
)
from stabilityclient.models.responses import (
    AccountResponse,
    ApiError,
    Artifact,
    Artifacts,
    BalanceResponse,
    Engine,
    EngineType,
    FinishReason,
)
from stabilityclient.services.artifact_service import ArtifactService, LocalArtifactStore
from stabilityclient.services.metrics_service import MetricsService
from stabilityclient.services.retry_service import RetryEngine
from stabilityclient.services.transport import HttpxTransport

__version__ = "0.1.0"

__all__ = [
    # Client
    "API_BASE",
    "StabilityClient",
    # Interfaces
    "ArtifactStore",
    "RequestFactory",
    "Transport",
    "TransportResponse",
    # Errors
    "ErrorCode",
    "is_retryable",
    "StabilityError",
    "TransportError",
    "DeserializationError",
    "ApiRequestError",
    "RateLimitedError",
    "FileReadError",
    "FileSaveError",
    "InvalidArgumentError",
    # Request types
    "ClipGuidancePreset",
    "InitImageMode",
    "MaskSource",
    "Sampler",
    "StylePreset",
    "TextPrompt",
    "TextToImageRequest",
    "ImageToImageRequest",
    "MaskingRequest",
    "LatentUpscalerUpscaleRequest",
    "RealESRGANUpscaleRequest",
    # Response types
    "AccountResponse",
    "ApiError",
    "Artifact",
    "Artifacts",
    "BalanceResponse",
    "Engine",
    "EngineType",
    "FinishReason",
    # Services
    "ArtifactService",
    "LocalArtifactStore",
    "HttpxTransport",
    "MetricsService",
    "RetryEngine",
    # Config / metrics
    "BackoffPolicy",
    "GenerationMetrics",
]
