"""Collapse Mercury responses into tool results."""

from __future__ import annotations

import json
import logging
from typing import Any

from mercury_mcp.core.results import ToolResult

from .errors import MercuryAPIError, ResponseParseError, error_for_status
from .types import RawResponse

logger = logging.getLogger(__name__)


def _with_idempotency_key(data: Any, idempotency_key: str) -> dict[str, Any]:
    if isinstance(data, dict):
        return {**data, "idempotency_key": idempotency_key}
    return {"result": data, "idempotency_key": idempotency_key}


def failure_result(exc: MercuryAPIError, *, action: str) -> ToolResult:
    return ToolResult.failure(f"{action}: {exc}", kind=exc.kind)


def normalize_response(
    response: RawResponse,
    *,
    action: str,
    idempotency_key: str | None = None,
    permission_message: str | None = None,
) -> ToolResult:
    """Turn a status/body pair into exactly one success or failure result.

    ``action`` prefixes every failure message (e.g. ``"Error sending money"``).
    For mutating calls the ``idempotency_key`` is echoed in the success
    payload and named in conflict messages.
    """

    if not response.ok:
        error = error_for_status(
            response.status_code,
            response.text,
            idempotency_key=idempotency_key,
            permission_message=permission_message,
        )
        logger.error("%s: %s", action, error)
        return failure_result(error, action=action)

    try:
        data = json.loads(response.text)
    except ValueError as exc:
        error = ResponseParseError(
            f"Invalid JSON in Mercury response: {exc}",
            status_code=response.status_code,
            body=response.text,
        )
        logger.error("%s: %s", action, error)
        return failure_result(error, action=action)

    if idempotency_key is not None:
        data = _with_idempotency_key(data, idempotency_key)
    return ToolResult.success(data)


__all__ = ["failure_result", "normalize_response"]
