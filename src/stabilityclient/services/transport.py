"""HTTP transport built on httpx."""

import logging

import httpx

from stabilityclient.interfaces import TransportResponse
from stabilityclient.models.errors import TransportError

logger = logging.getLogger(__name__)


class HttpxTransport:
    """Sends requests through a shared ``httpx.AsyncClient``.

    The client's connection pool is safe to share between concurrent calls.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        self.http_client = http_client

    async def send(self, request: httpx.Request) -> TransportResponse:
        """
        Send one request and read the full response body.

        Args:
            request: Fully built request (URL, headers, body)

        Returns:
            TransportResponse with status code and body bytes

        Raises:
            TransportError: For timeouts, connection failures and protocol errors
        """
        logger.debug(f"🌐 [Transport] {request.method} {request.url}")
        try:
            response = await self.http_client.send(request)
        except httpx.TimeoutException as e:
            raise TransportError(
                f"Request timed out: {request.method} {request.url}: {str(e)}",
                original_exception=e,
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"http error: {request.method} {request.url}: {str(e)}",
                original_exception=e,
            )

        return TransportResponse(status_code=response.status_code, content=response.content)
