"""Shared Mercury request/response types."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class OutboundRequest:
    """A fully built HTTP request, ready for the transport."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] | None = None
    idempotency_key: str | None = None

    @property
    def mutating(self) -> bool:
        return self.idempotency_key is not None

    def content(self) -> bytes | None:
        """Serialise the body the same way on every call."""

        if self.body is None:
            return None
        return json.dumps(self.body, separators=(",", ":"), allow_nan=False).encode("utf-8")


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Status code and undecoded body text as received from Mercury."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


__all__ = ["OutboundRequest", "RawResponse"]
