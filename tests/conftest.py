"""Shared pytest fixtures for StabilityClient tests."""

import base64
import json
from typing import Callable

import httpx
import pytest

from stabilityclient.client import StabilityClient
from stabilityclient.models.config import BackoffPolicy
from stabilityclient.models.responses import Artifact

# Smallest valid PNG header-ish payload; content is opaque to the client
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"stability-test-image"


class RecordingSleep:
    """Async sleep replacement that records requested delays without waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def api_error_body(name: str = "bad_request", message: str = "invalid prompt", id: str = "err-123") -> dict:
    return {"id": id, "name": name, "message": message}


def artifact_payload(data: bytes = PNG_BYTES, finish_reason: str = "SUCCESS", seed: int = 42) -> dict:
    """Artifact as it appears in the API response body."""
    return {
        "base64": base64.b64encode(data).decode("ascii"),
        "finishReason": finish_reason,
        "seed": seed,
    }


def json_response(status_code: int, payload) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))


@pytest.fixture
def recording_sleep():
    """Fixture for a sleep that returns immediately."""
    return RecordingSleep()


@pytest.fixture
def fast_backoff():
    """Backoff policy short enough for real-time tests."""
    return BackoffPolicy(
        initial_interval_s=0.001,
        multiplier=1.5,
        max_interval_s=0.005,
        max_elapsed_s=5.0,
    )


@pytest.fixture
def make_artifact() -> Callable[..., Artifact]:
    """Fixture building Artifact models from API-shaped payloads."""

    def _make(data: bytes = PNG_BYTES, finish_reason: str = "SUCCESS", seed: int = 42) -> Artifact:
        return Artifact.model_validate(artifact_payload(data, finish_reason, seed))

    return _make


@pytest.fixture
def init_image(tmp_path):
    """A PNG file on disk for multipart uploads."""
    path = tmp_path / "init.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture
def make_client(fast_backoff):
    """Fixture building a StabilityClient whose HTTP traffic goes to ``handler``."""
    http_clients: list[httpx.AsyncClient] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> StabilityClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        http_clients.append(http_client)
        kwargs.setdefault("api_key", "sk-test")
        kwargs.setdefault("api_base", "https://api.test/v1")
        kwargs.setdefault("backoff", fast_backoff)
        return StabilityClient(http_client=http_client, **kwargs)

    return _make
