"""HTTP transport for Mercury requests."""

from __future__ import annotations

import logging

import httpx

from .errors import TransportError
from .types import OutboundRequest, RawResponse

logger = logging.getLogger(__name__)


class MercuryTransport:
    """Sends built requests and returns the raw status and body.

    Any failure before a response arrives surfaces as :class:`TransportError`.
    Status codes are not interpreted here.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def send(self, request: OutboundRequest) -> RawResponse:
        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.content(),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Mercury request %s %s failed (%s)", request.method, request.url, type(exc).__name__)
            raise TransportError(str(exc) or type(exc).__name__) from exc
        logger.debug("Mercury %s %s -> %s", request.method, request.url, response.status_code)
        return RawResponse(status_code=response.status_code, text=response.text)

    async def aclose(self) -> None:
        """Dispose the underlying HTTP client if owned by this instance."""

        if self._owns_client:
            await self._client.aclose()


__all__ = ["MercuryTransport"]
