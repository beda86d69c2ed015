"""Engine listing endpoint."""

from typing import TYPE_CHECKING

from stabilityclient.models.responses import Engine

if TYPE_CHECKING:
    from stabilityclient.client import StabilityClient


class EngineService:
    """Enumerate available engines."""

    def __init__(self, client: "StabilityClient"):
        self.client = client

    async def list(self) -> list[Engine]:
        """List all engines available to the organization/user."""
        return await self.client.get("/engines/list", list[Engine])
