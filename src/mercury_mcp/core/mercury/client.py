"""Send a built request and normalise whatever comes back."""

from __future__ import annotations

import logging

from mercury_mcp.core.results import ToolResult

from .context import MercuryContext
from .errors import TransportError
from .responses import failure_result, normalize_response
from .types import OutboundRequest

logger = logging.getLogger(__name__)


async def execute(
    context: MercuryContext,
    request: OutboundRequest,
    *,
    action: str,
    permission_message: str | None = None,
) -> ToolResult:
    """Dispatch ``request`` through the context's transport.

    Never raises for upstream or network failures; those become failure
    results local to this invocation.
    """

    try:
        response = await context.transport.send(request)
    except TransportError as exc:
        logger.error("%s: %s", action, exc)
        return failure_result(exc, action=action)
    return normalize_response(
        response,
        action=action,
        idempotency_key=request.idempotency_key,
        permission_message=permission_message,
    )


__all__ = ["execute"]
