"""Key/value store interface and guarded read/write helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from skillshare.exceptions import SkillShareError, StoreUnavailable, UserRejected, WriteFailed

USER_REJECTED_MARKER = "user rejected"


@dataclass(frozen=True)
class WriteReceipt:
    """Acknowledgement returned by ``set_data``."""

    key: str
    size: int
    sequence: int = 0


class KeyValueStore(ABC):
    """Generic key/value store. Every call is a suspension point."""

    @abstractmethod
    async def is_available(self) -> bool:
        """Readiness probe, checked before any load."""

    @abstractmethod
    async def get_data(self, key: str) -> bytes:
        """Return the bytes at ``key``, or ``b""`` when absent."""

    @abstractmethod
    async def set_data(self, key: str, value: bytes) -> WriteReceipt:
        """Write ``value`` at ``key``, overwriting unconditionally."""


async def read_key(store: KeyValueStore, key: str) -> bytes:
    """Read a key, mapping store failures to ``StoreUnavailable``."""
    try:
        return await store.get_data(key)
    except SkillShareError:
        raise
    except Exception as exc:
        raise StoreUnavailable(f"read of {key!r} failed: {exc}") from exc


async def write_key(store: KeyValueStore, key: str, value: bytes) -> WriteReceipt:
    """Write a key, mapping failures to ``UserRejected`` or ``WriteFailed``."""
    try:
        return await store.set_data(key, value)
    except SkillShareError:
        raise
    except Exception as exc:
        if USER_REJECTED_MARKER in str(exc).lower():
            raise UserRejected(str(exc)) from exc
        raise WriteFailed(str(exc) or "Unknown error") from exc
