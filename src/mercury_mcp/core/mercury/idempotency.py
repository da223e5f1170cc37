"""Idempotency keys for mutating Mercury calls."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable

logger = logging.getLogger(__name__)

KeyFactory = Callable[[], str]


def _uuid4_key() -> str:
    return str(uuid.uuid4())


class IdempotencyKeyProvider:
    """Hands out the key used for one mutating invocation.

    A key supplied by the caller is returned verbatim so retries of the same
    logical request deduplicate upstream; otherwise a fresh UUID4 is minted.
    """

    def __init__(self, factory: KeyFactory | None = None) -> None:
        self._factory = factory or _uuid4_key

    def provide(self, supplied_key: str | None = None) -> str:
        if supplied_key:
            return supplied_key
        key = self._factory()
        logger.debug("Generated idempotency key %s", key)
        return key


__all__ = ["IdempotencyKeyProvider", "KeyFactory"]
