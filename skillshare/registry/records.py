"""Record store accessor — one blob per record at an id-derived key."""

from __future__ import annotations

import logging

from skillshare.config import StoreKeys
from skillshare.exceptions import DecodeError, StoreUnavailable
from skillshare.models import SkillRecord
from skillshare.registry.codec import decode_record, encode_record
from skillshare.store.base import KeyValueStore, WriteReceipt, read_key, write_key

logger = logging.getLogger(__name__)


class RecordStoreAccessor:
    """Reads and writes individual skill records."""

    def __init__(self, store: KeyValueStore, keys: StoreKeys | None = None):
        self.store = store
        self.keys = keys or StoreKeys()

    async def load_record(self, record_id: str) -> SkillRecord | None:
        """Load one record. Empty value means absent; bad bytes raise ``DecodeError``."""
        raw = await read_key(self.store, self.keys.record_key(record_id))
        if not raw:
            return None
        return decode_record(record_id, raw)

    async def record_exists(self, record_id: str) -> bool:
        return bool(await read_key(self.store, self.keys.record_key(record_id)))

    async def save_record(self, record: SkillRecord) -> WriteReceipt:
        """Write the whole record. Last write wins; no version check."""
        return await write_key(self.store, self.keys.record_key(record.id), encode_record(record))

    async def load_records(self, ids: list[str]) -> list[SkillRecord]:
        """Load every id, skipping absent or unreadable ones, newest first."""
        records: list[SkillRecord] = []
        for record_id in ids:
            try:
                record = await self.load_record(record_id)
            except DecodeError as exc:
                logger.warning("Error parsing skill data for %s: %s", record_id, exc)
                continue
            except StoreUnavailable as exc:
                logger.warning("Error loading skill %s: %s", record_id, exc)
                continue
            if record is None:
                logger.debug("Index entry %s has no stored record", record_id)
                continue
            records.append(record)

        records.sort(key=lambda r: r.timestamp, reverse=True)
        return records
