"""Runtime context shared by every bound Mercury tool."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import httpx

from mercury_mcp.core.config import MercurySettings

from .idempotency import IdempotencyKeyProvider
from .transport import MercuryTransport

logger = logging.getLogger(__name__)


def _mask_token(token: str) -> str:
    if len(token) <= 8:
        return "••••"
    return f"{token[:4]}…{token[-4:]}"


@dataclass(frozen=True, slots=True)
class MercuryContext:
    """Read-only credentials and collaborators captured when tools are bound."""

    access_token: str = field(repr=False)
    base_url: str
    transport: MercuryTransport = field(repr=False)
    idempotency: IdempotencyKeyProvider = field(default_factory=IdempotencyKeyProvider, repr=False)

    @property
    def masked_token(self) -> str:
        return _mask_token(self.access_token)


@asynccontextmanager
async def open_context(
    settings: MercurySettings,
    *,
    client: httpx.AsyncClient | None = None,
    idempotency: IdempotencyKeyProvider | None = None,
) -> AsyncIterator[MercuryContext]:
    """Build a context for ``settings`` and close its transport on exit."""

    transport = MercuryTransport(timeout=settings.timeout_seconds, client=client)
    context = MercuryContext(
        access_token=settings.api_key,
        base_url=settings.base_url,
        transport=transport,
        idempotency=idempotency or IdempotencyKeyProvider(),
    )
    logger.debug("Opened Mercury context for %s (token %s)", context.base_url, context.masked_token)
    try:
        yield context
    finally:
        await transport.aclose()


__all__ = ["MercuryContext", "open_context"]
