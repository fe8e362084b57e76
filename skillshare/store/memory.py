"""In-process key/value store."""

from __future__ import annotations

import asyncio

from skillshare.store.base import KeyValueStore, WriteReceipt


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store.

    Each call yields to the event loop once before touching the data, so
    independent flows interleave at every read and write the way they do
    against a remote store.
    """

    def __init__(self, data: dict[str, bytes] | None = None, available: bool = True):
        self.data: dict[str, bytes] = dict(data or {})
        self.available = available
        self.writes = 0

    async def is_available(self) -> bool:
        await asyncio.sleep(0)
        return self.available

    async def get_data(self, key: str) -> bytes:
        await asyncio.sleep(0)
        return self.data.get(key, b"")

    async def set_data(self, key: str, value: bytes) -> WriteReceipt:
        await asyncio.sleep(0)
        self.data[key] = bytes(value)
        self.writes += 1
        return WriteReceipt(key=key, size=len(value), sequence=self.writes)
