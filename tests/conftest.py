from __future__ import annotations

import itertools
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from mercury_mcp.core.mercury import IdempotencyKeyProvider, MercuryContext, MercuryTransport

BASE_URL = "https://api.mercury.test/api/v1"
TOKEN = "secret-token-1234"


class Recorder:
    """MockTransport handler that records requests and replays a canned response."""

    def __init__(self, status_code: int = 200, body: Any = None, *, text: str | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.body = {} if body is None else body
        self.text = text

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content.decode())


ContextFactory = Callable[..., MercuryContext]


@pytest.fixture
def make_recorder() -> type[Recorder]:
    return Recorder


@pytest.fixture
def make_context() -> ContextFactory:
    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        *,
        key_factory: Callable[[], str] | None = None,
    ) -> MercuryContext:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        if key_factory is None:
            counter = itertools.count(1)
            key_factory = lambda: f"generated-key-{next(counter)}"  # noqa: E731
        return MercuryContext(
            access_token=TOKEN,
            base_url=BASE_URL,
            transport=MercuryTransport(client=client),
            idempotency=IdempotencyKeyProvider(key_factory),
        )

    return _make
