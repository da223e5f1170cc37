"""Uniform result shape returned by every tool invocation."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal

FailureKind = Literal[
    "validation",
    "unknown_tool",
    "bad_request",
    "authentication",
    "permission",
    "conflict",
    "upstream",
    "transport",
    "parse",
    "internal",
]


@dataclass(frozen=True, slots=True)
class ToolResult:
    """Outcome of a single invocation: either a success payload or a failure message.

    ``content`` is the text handed to the calling agent. Successful results
    carry the serialised upstream payload and keep the parsed value in
    ``data``; failures carry a human-readable message and set ``is_error``.
    """

    content: str
    is_error: bool = False
    data: Any | None = None
    kind: FailureKind | None = None

    @classmethod
    def success(cls, data: Any) -> ToolResult:
        return cls(content=json.dumps(data), data=data)

    @classmethod
    def failure(cls, message: str, *, kind: FailureKind) -> ToolResult:
        return cls(content=message, is_error=True, kind=kind)

    @property
    def message(self) -> str | None:
        return self.content if self.is_error else None


__all__ = ["ToolResult", "FailureKind"]
