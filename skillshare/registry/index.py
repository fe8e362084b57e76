"""Registry index — the aggregate list of record identifiers.

The store has no listing primitive, so every known id lives in one blob at
a fixed key. Appends are read-modify-write with no guard: two writers whose
read and write steps interleave will each persist only the ids they saw,
and one id is dropped from the index (its record stays in the store,
unreachable).
"""

from __future__ import annotations

import logging

from skillshare.config import StoreKeys
from skillshare.exceptions import DecodeError, UnsupportedSchemaVersion
from skillshare.registry.codec import decode_index, encode_index
from skillshare.store.base import KeyValueStore, read_key, write_key

logger = logging.getLogger(__name__)


class RegistryIndexManager:
    """Owns the index blob at ``keys.index_key``."""

    def __init__(self, store: KeyValueStore, keys: StoreKeys | None = None):
        self.store = store
        self.keys = keys or StoreKeys()

    async def load_index(self) -> list[str]:
        """Return the stored ids; ``[]`` if absent or unreadable."""
        raw = await read_key(self.store, self.keys.index_key)
        if not raw:
            return []
        try:
            return decode_index(raw)
        except DecodeError as exc:
            logger.error("Error parsing registry index: %s", exc)
            return []

    async def append_index(self, record_id: str) -> list[str]:
        """Append ``record_id`` and persist. Returns the list written."""
        raw = await read_key(self.store, self.keys.index_key)
        ids: list[str] = []
        if raw:
            try:
                ids = decode_index(raw)
            except UnsupportedSchemaVersion:
                raise
            except DecodeError as exc:
                logger.error("Error parsing registry index, rewriting: %s", exc)

        ids.append(record_id)
        await write_key(self.store, self.keys.index_key, encode_index(ids))
        logger.debug("Index now holds %d ids", len(ids))
        return ids
