"""Client holding configuration and the shared HTTP connection pool."""

import logging
import os
from typing import Any

import httpx
from pydantic import BaseModel

from stabilityclient.interfaces import RequestFactory
from stabilityclient.models.config import BackoffPolicy
from stabilityclient.services.engine_service import EngineService
from stabilityclient.services.generation_service import GenerationService
from stabilityclient.services.materializer import JsonRequestFactory, MultipartRequestFactory
from stabilityclient.services.metrics_service import MetricsService
from stabilityclient.services.retry_service import RetryEngine
from stabilityclient.services.transport import HttpxTransport
from stabilityclient.services.user_service import UserService

logger = logging.getLogger(__name__)

# Default v1 API base url
API_BASE = "https://api.stability.ai/v1"
ORGANIZATION_HEADER = "Organization"
CLIENT_ID_HEADER = "Stability-Client-ID"
CLIENT_VERSION_HEADER = "Stability-Client-Version"


class StabilityClient:
    """Entry point for all API calls.

    Example:
        >>> async with StabilityClient(organization="the-continental") as client:
        ...     artifacts = await client.generate("stable-diffusion-xl-1024-v1-0").text_to_image(
        ...         TextToImageRequest(text_prompts="A lighthouse on a cliff")
        ...     )
        ...     paths = await artifacts.save("./data")
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_base: str | None = None,
        organization: str | None = None,
        client_id: str | None = None,
        client_version: str | None = None,
        backoff: BackoffPolicy | None = None,
        timeout_s: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
        metrics_service: MetricsService | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: API key (defaults to STABILITY_API_KEY env var)
            api_base: API base url (defaults to STABILITY_API_BASE env var, then API_BASE)
            organization: Organization id sent with every request
            client_id: Value of the Stability-Client-ID header
            client_version: Value of the Stability-Client-Version header
            backoff: Backoff policy for rate-limited requests
            timeout_s: Timeout for the owned httpx client (ignored if http_client is given)
            http_client: Custom httpx.AsyncClient; the caller keeps ownership
            metrics_service: Optional MetricsService for recording generation metrics
        """
        self.api_key = api_key or os.getenv("STABILITY_API_KEY")
        if not self.api_key:
            raise ValueError("STABILITY_API_KEY environment variable or api_key parameter is required")

        self.api_base = (api_base or os.getenv("STABILITY_API_BASE") or API_BASE).rstrip("/")
        self.organization = organization
        self.client_id = client_id
        self.client_version = client_version

        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout_s)
        self.retry_engine = RetryEngine(HttpxTransport(self.http_client), backoff=backoff)
        self.metrics_service = metrics_service

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "StabilityClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def headers(self) -> dict[str, str]:
        """Headers attached to every outgoing request."""
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if self.organization:
            headers[ORGANIZATION_HEADER] = self.organization
        if self.client_id:
            headers[CLIENT_ID_HEADER] = self.client_id
        if self.client_version:
            headers[CLIENT_VERSION_HEADER] = self.client_version
        return headers

    def url(self, path: str) -> str:
        return f"{self.api_base}{path}"

    # API groups

    @property
    def user(self) -> UserService:
        return UserService(self)

    @property
    def engines(self) -> EngineService:
        return EngineService(self)

    def generate(self, engine_id: str) -> GenerationService:
        return GenerationService(self, engine_id, metrics_service=self.metrics_service)

    # Request primitives

    async def get(self, path: str, response_model: Any) -> Any:
        """GET {path} and decode the response body into ``response_model``."""
        factory = JsonRequestFactory("GET", self.url(path), self.headers())
        return await self.execute(factory, response_model)

    async def post(self, path: str, body: BaseModel, response_model: Any) -> Any:
        """POST a JSON body to {path} and decode the response body."""
        factory = JsonRequestFactory("POST", self.url(path), self.headers(), body=body)
        return await self.execute(factory, response_model)

    async def post_form(self, path: str, request: BaseModel, response_model: Any) -> Any:
        """POST a multipart form to {path}; files are re-read on every attempt."""
        factory = MultipartRequestFactory(self.url(path), self.headers(), request)
        return await self.execute(factory, response_model)

    async def execute(self, request_factory: RequestFactory, response_model: Any) -> Any:
        """Run a request factory through the retry engine."""
        return await self.retry_engine.execute(request_factory, response_model)
