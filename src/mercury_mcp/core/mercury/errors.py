"""Mercury API errors."""

from __future__ import annotations

from mercury_mcp.core.results import FailureKind

AUTHENTICATION_MESSAGE = "Authentication error: Invalid or expired API token. Check your API token permissions."
DEFAULT_PERMISSION_MESSAGE = "Permission error: Your API token doesn't have permission to perform this operation."


class MercuryAPIError(RuntimeError):
    """Raised when a Mercury API call cannot be completed."""

    kind: FailureKind = "upstream"

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class BadRequestError(MercuryAPIError):
    """Upstream rejected the request parameters (HTTP 400)."""

    kind: FailureKind = "bad_request"


class AuthenticationError(MercuryAPIError):
    """The API token is invalid or expired (HTTP 401)."""

    kind: FailureKind = "authentication"


class PermissionDeniedError(MercuryAPIError):
    """The API token lacks the scope or IP allow-listing for the call (HTTP 403)."""

    kind: FailureKind = "permission"


class ConflictError(MercuryAPIError):
    """The idempotency key was already used for another request (HTTP 409)."""

    kind: FailureKind = "conflict"


class UnknownUpstreamError(MercuryAPIError):
    """Any other non-2xx response."""


class TransportError(MercuryAPIError):
    """No response was obtained from Mercury."""

    kind: FailureKind = "transport"


class ResponseParseError(MercuryAPIError):
    """Mercury answered with a success status but an unreadable body."""

    kind: FailureKind = "parse"


def error_for_status(
    status_code: int,
    body: str,
    *,
    idempotency_key: str | None = None,
    permission_message: str | None = None,
) -> MercuryAPIError:
    """Map a non-2xx response to the matching :class:`MercuryAPIError`."""

    if status_code == 400:
        return BadRequestError(f"Invalid request parameters: {body}", status_code=status_code, body=body)
    if status_code == 401:
        return AuthenticationError(AUTHENTICATION_MESSAGE, status_code=status_code, body=body)
    if status_code == 403:
        return PermissionDeniedError(
            permission_message or DEFAULT_PERMISSION_MESSAGE,
            status_code=status_code,
            body=body,
        )
    if status_code == 409:
        if idempotency_key:
            message = (
                f"The idempotency key {idempotency_key} is already in use. "
                "This request has already been processed."
            )
        else:
            message = f"Conflict: the request conflicts with the current state of the resource. {body}".rstrip()
        return ConflictError(message, status_code=status_code, body=body)
    return UnknownUpstreamError(f"HTTP error! status: {status_code} - {body}", status_code=status_code, body=body)


__all__ = [
    "AUTHENTICATION_MESSAGE",
    "DEFAULT_PERMISSION_MESSAGE",
    "AuthenticationError",
    "BadRequestError",
    "ConflictError",
    "MercuryAPIError",
    "PermissionDeniedError",
    "ResponseParseError",
    "TransportError",
    "UnknownUpstreamError",
    "error_for_status",
]
