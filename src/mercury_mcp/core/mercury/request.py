"""Request building helpers for Mercury endpoints."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlencode

from pydantic import BaseModel

from .types import OutboundRequest

if TYPE_CHECKING:
    from .context import MercuryContext


def build_url(base_url: str, *segments: object) -> str:
    base = base_url.rstrip("/")
    path = "/".join(quote(str(segment), safe="") for segment in segments)
    return f"{base}/{path}" if path else base


def _format_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(params: Iterable[tuple[str, Any]]) -> str:
    """Encode ``params`` in the given order, skipping absent or empty values.

    Returns an empty string when nothing survives so callers can append the
    result to a path unconditionally.
    """

    pairs = [(name, _format_query_value(value)) for name, value in params if value]
    if not pairs:
        return ""
    return f"?{urlencode(pairs)}"


def query_params(payload: BaseModel, *, exclude: Collection[str] = ()) -> list[tuple[str, Any]]:
    """Collect ``payload`` fields as query parameters in schema declaration order."""

    return [
        (name, getattr(payload, name))
        for name in type(payload).model_fields
        if name not in exclude and name != "idempotency_key"
    ]


def build_headers(access_token: str, *, idempotency_key: str | None = None) -> dict[str, str]:
    headers = {
        "accept": "application/json",
        "authorization": f"Bearer {access_token}",
    }
    if idempotency_key is not None:
        headers["content-type"] = "application/json"
        headers["idempotency-key"] = idempotency_key
    return headers


class PayloadBuilder:
    """Accumulates only the fields that carry a value.

    Nested builders are attached with :meth:`nest` and are dropped entirely
    when nothing was added to them, so the built payload never contains a
    placeholder for an omitted optional field.
    """

    def __init__(self) -> None:
        self._fields: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> PayloadBuilder:
        if value is not None:
            self._fields[key] = value
        return self

    def nest(self, key: str, builder: PayloadBuilder | None) -> PayloadBuilder:
        if builder:
            self._fields[key] = builder.build()
        return self

    def __bool__(self) -> bool:
        return bool(self._fields)

    def build(self) -> dict[str, Any]:
        return dict(self._fields)


def build_request(
    context: MercuryContext,
    method: str,
    path: Sequence[object],
    *,
    query: Iterable[tuple[str, Any]] = (),
    body: PayloadBuilder | None = None,
    idempotency_key: str | None = None,
) -> OutboundRequest:
    """Assemble the request for one invocation from validated input."""

    url = build_url(context.base_url, *path) + encode_query(query)
    return OutboundRequest(
        method=method,
        url=url,
        headers=build_headers(context.access_token, idempotency_key=idempotency_key),
        body=body.build() if body is not None else None,
        idempotency_key=idempotency_key,
    )


__all__ = [
    "PayloadBuilder",
    "build_headers",
    "build_request",
    "build_url",
    "encode_query",
    "query_params",
]
