"""Generation endpoints bound to a single engine."""

import logging
import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from stabilityclient.models.errors import InvalidArgumentError, StabilityError
from stabilityclient.models.metrics import GenerationMetrics
from stabilityclient.models.requests import (
    ImageToImageRequest,
    LatentUpscalerUpscaleRequest,
    MaskingRequest,
    MaskSource,
    TextPrompt,
    TextToImageRequest,
    UpscaleRequest,
)
from stabilityclient.models.responses import Artifacts, FinishReason
from stabilityclient.services.metrics_service import MetricsService

if TYPE_CHECKING:
    from stabilityclient.client import StabilityClient

logger = logging.getLogger(__name__)

MASK_IMAGE_SOURCES = {MaskSource.MASK_IMAGE_BLACK, MaskSource.MASK_IMAGE_WHITE}


def _require_prompt(prompts: Optional[list[TextPrompt]]) -> None:
    if not prompts or not any(prompt.text for prompt in prompts):
        raise InvalidArgumentError("at least one text prompt with non-empty text is required")


class GenerationService:
    """Generate images with one engine.

    Every method validates its request before touching the network, then
    returns the decoded ``Artifacts``. Rate-limited calls are retried by the
    client's RetryEngine.
    """

    def __init__(
        self,
        client: "StabilityClient",
        engine_id: str,
        metrics_service: MetricsService | None = None,
    ):
        self.client = client
        self.engine_id = engine_id
        self._metrics_service = metrics_service

    def _path(self, operation: str) -> str:
        if not self.engine_id or not self.engine_id.strip():
            raise InvalidArgumentError("engine id must not be empty")
        return f"/generation/{self.engine_id}/{operation}"

    async def text_to_image(self, request: TextToImageRequest) -> Artifacts:
        """Generate images from text prompts (JSON body)."""
        path = self._path("text-to-image")
        _require_prompt(request.text_prompts)
        return await self._run("text-to-image", lambda: self.client.post(path, request, Artifacts))

    async def image_to_image(self, request: ImageToImageRequest) -> Artifacts:
        """Modify an existing image using text prompts (multipart body)."""
        path = self._path("image-to-image")
        _require_prompt(request.text_prompts)
        return await self._run("image-to-image", lambda: self.client.post_form(path, request, Artifacts))

    async def image_to_image_upscale(self, request: UpscaleRequest) -> Artifacts:
        """Create a higher resolution version of an image."""
        path = self._path("image-to-image/upscale")
        if request.width is not None and request.height is not None:
            raise InvalidArgumentError("only one of width or height may be set for upscaling")
        if isinstance(request, LatentUpscalerUpscaleRequest) and request.text_prompts is not None:
            _require_prompt(request.text_prompts)
        return await self._run(
            "image-to-image/upscale", lambda: self.client.post_form(path, request, Artifacts)
        )

    async def image_to_image_masking(self, request: MaskingRequest) -> Artifacts:
        """Selectively modify portions of an image using a mask."""
        path = self._path("image-to-image/masking")
        _require_prompt(request.text_prompts)
        if request.mask_source in MASK_IMAGE_SOURCES and request.mask_image is None:
            raise InvalidArgumentError(f"mask_image is required when mask_source is {request.mask_source.value}")
        return await self._run(
            "image-to-image/masking", lambda: self.client.post_form(path, request, Artifacts)
        )

    async def _run(self, operation: str, call: Callable[[], Awaitable[Artifacts]]) -> Artifacts:
        start_time = time.time()
        try:
            artifacts = await call()
        except StabilityError as e:
            self._record(operation, start_time, success=False, error_code=e.error_code.value)
            raise

        filtered = sum(1 for a in artifacts.artifacts if a.finish_reason == FinishReason.CONTENT_FILTERED)
        if filtered:
            logger.warning(f"🚫 [GenerationService] {filtered}/{len(artifacts)} artifacts filtered on {self.engine_id}")
        self._record(operation, start_time, artifact_count=len(artifacts), filtered_count=filtered)
        return artifacts

    def _record(
        self,
        operation: str,
        start_time: float,
        artifact_count: int = 0,
        filtered_count: int = 0,
        success: bool = True,
        error_code: str | None = None,
    ) -> None:
        if not self._metrics_service:
            return
        self._metrics_service.record(
            GenerationMetrics(
                duration_ms=int((time.time() - start_time) * 1000),
                engine_id=self.engine_id,
                operation=operation,
                artifact_count=artifact_count,
                filtered_count=filtered_count,
                success=success,
                error_code=error_code,
                timestamp=datetime.now(timezone.utc),
            )
        )
