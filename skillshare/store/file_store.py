"""Local file-based key/value store.

A simple, file-system-backed store for development and single-machine use.
All keys live in one JSON document with base64-encoded values. The document
is re-read on every call, so several processes pointed at the same
directory see each other's writes (and race each other exactly like
clients of a shared remote store).
File I/O runs on a worker thread via ``asyncio.to_thread`` so the event
loop is never blocked.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import json
import logging
from pathlib import Path

from skillshare.store.base import KeyValueStore, WriteReceipt

logger = logging.getLogger(__name__)


class FileStore(KeyValueStore):
    """JSON-file-backed store."""

    DATA_FILE = "store.json"

    def __init__(self, store_dir: str | Path):
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)
        self.data_path = self.store_dir / self.DATA_FILE

    async def is_available(self) -> bool:
        return self.store_dir.is_dir()

    async def get_data(self, key: str) -> bytes:
        encoded = (await asyncio.to_thread(self._load)).get(key)
        if not encoded:
            return b""
        try:
            return base64.b64decode(encoded, validate=True)
        except binascii.Error:
            logger.warning("Corrupt value for key %s in %s", key, self.data_path)
            return b""

    async def set_data(self, key: str, value: bytes) -> WriteReceipt:
        data = await asyncio.to_thread(self._load)
        data[key] = base64.b64encode(value).decode("ascii")
        await asyncio.to_thread(self._save, data)
        return WriteReceipt(key=key, size=len(value), sequence=len(data))

    def keys(self) -> list[str]:
        """All stored keys. Diagnostic only; the store contract has no listing."""
        return sorted(self._load())

    def _load(self) -> dict[str, str]:
        if not self.data_path.exists():
            return {}
        with open(self.data_path) as f:
            return json.load(f)

    def _save(self, data: dict[str, str]) -> None:
        tmp_path = self.data_path.with_suffix(".tmp")
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2, sort_keys=True)
        tmp_path.replace(self.data_path)
