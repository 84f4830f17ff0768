"""Key-value stores with per-key expiry.

Stores offer atomic get/put per key and nothing more: no cross-key
transactions and no locking. Concurrent writers get last-write-wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from movecar.state.policy import expires_at, is_expired

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class KeyValueStore(Protocol):
    """Structural store interface used by the workflow.

    ``get`` returns ``None`` for absent or expired keys. Any other failure
    should surface as :class:`movecar.exceptions.StoreError`.
    """

    async def get(self, key: str) -> str | None:
        ...

    async def put(self, key: str, value: str, *, ttl_seconds: float) -> None:
        ...


class StoredValue(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    value: str
    expires_at: datetime


class MemoryStore:
    """In-process store with TTL evaluated against an injectable clock.

    Expired entries are dropped lazily when read. A TTL is never extended
    implicitly; only a new ``put`` resets it.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._entries: dict[str, StoredValue] = {}

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if is_expired(self._clock(), entry.expires_at):
            _logger.debug("Key expired key=%s", key)
            self._entries.pop(key, None)
            return None
        return entry.value

    async def put(self, key: str, value: str, *, ttl_seconds: float) -> None:
        now = self._clock()
        self._entries[key] = StoredValue(
            value=value,
            expires_at=expires_at(now, ttl_seconds),
        )
        _logger.debug("Stored key=%s ttl=%ss", key, ttl_seconds)
