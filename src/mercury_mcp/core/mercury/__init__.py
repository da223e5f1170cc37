"""Mercury REST API plumbing.

Request construction (`request.py`), the httpx transport (`transport.py`),
response normalisation (`responses.py`) and the per-process context
(`context.py`). Tool handlers combine these through :func:`execute`.
"""

from .client import execute
from .context import MercuryContext, open_context
from .errors import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    MercuryAPIError,
    PermissionDeniedError,
    ResponseParseError,
    TransportError,
    UnknownUpstreamError,
)
from .idempotency import IdempotencyKeyProvider
from .request import PayloadBuilder, build_request, query_params
from .transport import MercuryTransport
from .types import OutboundRequest, RawResponse

__all__ = [
    "AuthenticationError",
    "BadRequestError",
    "ConflictError",
    "IdempotencyKeyProvider",
    "MercuryAPIError",
    "MercuryContext",
    "MercuryTransport",
    "OutboundRequest",
    "PayloadBuilder",
    "PermissionDeniedError",
    "RawResponse",
    "ResponseParseError",
    "TransportError",
    "UnknownUpstreamError",
    "build_request",
    "execute",
    "open_context",
    "query_params",
]
