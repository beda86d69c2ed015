"""Models package for StabilityClient."""

from stabilityclient.models.config import DEFAULT_BACKOFF_POLICY, BackoffPolicy
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
    UpscaleRequest,
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
    OrganizationMembership,
)

__all__ = [
    "BackoffPolicy",
    "DEFAULT_BACKOFF_POLICY",
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
    "GenerationMetrics",
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
    "UpscaleRequest",
    "AccountResponse",
    "ApiError",
    "Artifact",
    "Artifacts",
    "BalanceResponse",
    "Engine",
    "EngineType",
    "FinishReason",
    "OrganizationMembership",
]
