"""Protocol interfaces for StabilityClient."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import httpx
from typing_extensions import runtime_checkable


@dataclass(frozen=True)
class TransportResponse:
    """Raw result of one HTTP exchange."""

    status_code: int
    content: bytes


@runtime_checkable
class RequestFactory(Protocol):
    """Produces a fresh outgoing request for every attempt."""

    async def build(self) -> httpx.Request:
        """Build a new request. Called once per attempt, never memoized."""
        ...


@runtime_checkable
class Transport(Protocol):
    """Sends one request and returns status + full body. No retry logic."""

    async def send(self, request: httpx.Request) -> TransportResponse:
        """
        Send a request.

        Raises:
            TransportError: On connection, timeout or protocol failures
        """
        ...


@runtime_checkable
class ArtifactStore(Protocol):
    """Filesystem-like sink for decoded artifacts."""

    async def ensure_directory(self, directory: Path) -> None:
        """Create ``directory`` and its parents if absent."""
        ...

    def unique_path(self, directory: Path) -> Path:
        """Return a fresh, collision-resistant file path inside ``directory``."""
        ...

    async def write_bytes(self, path: Path, data: bytes) -> None:
        """Write ``data`` as the whole content of a new file at ``path``."""
        ...
