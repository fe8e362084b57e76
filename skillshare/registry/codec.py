"""Codecs for payloads, record blobs and the registry index blob.

Blob layout (UTF-8 JSON):

- index v1: ``{"version": 1, "ids": [...]}``
- record v1: ``{"version": 1, "data", "timestamp", "owner", "category", "rating"}``

Unversioned blobs written by earlier web clients (a bare JSON list
for the index, ``{data, timestamp, owner, skillType, rating?}`` for a
record) are upgraded on read. Any other version is rejected.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Protocol

from skillshare.exceptions import DecodeError, UnsupportedSchemaVersion
from skillshare.models import MAX_RATING, SkillCategory, SkillDraft, SkillRecord

SCHEMA_VERSION = 1


# ---------------------------------------------------------------------------
# Payload codec
# ---------------------------------------------------------------------------


class PayloadCodec(Protocol):
    """Transforms a draft into the opaque payload stored with a record."""

    def encode(self, draft: SkillDraft) -> str: ...

    def decode(self, payload: str) -> SkillDraft: ...


class PlaceholderCodec:
    """Stand-in for a privacy-preserving transform.

    Output is a fixed marker followed by base64 of the draft as JSON. It is
    reversible by anyone and provides no confidentiality.
    """

    MARKER = "FHE-"

    def encode(self, draft: SkillDraft) -> str:
        body = json.dumps(
            {
                "skillType": draft.category,
                "description": draft.description,
                "experience": draft.experience,
            }
        )
        return self.MARKER + base64.b64encode(body.encode("utf-8")).decode("ascii")

    def decode(self, payload: str) -> SkillDraft:
        if not payload.startswith(self.MARKER):
            raise DecodeError("payload is missing the encoding marker")
        try:
            raw = base64.b64decode(payload[len(self.MARKER):], validate=True)
            data = json.loads(raw.decode("utf-8"))
        except (binascii.Error, UnicodeDecodeError, ValueError) as exc:
            raise DecodeError(f"payload does not decode: {exc}") from exc
        if not isinstance(data, dict):
            raise DecodeError("payload is not an object")
        return SkillDraft(
            category=str(data.get("skillType", "")),
            description=str(data.get("description", "")),
            experience=str(data.get("experience", "")),
        )


# ---------------------------------------------------------------------------
# Blob helpers
# ---------------------------------------------------------------------------


def _load_json(raw: bytes, kind: str):
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodeError(f"{kind} blob is not valid JSON: {exc}") from exc


def _dump_json(data) -> bytes:
    return json.dumps(data, separators=(",", ":")).encode("utf-8")


# ---------------------------------------------------------------------------
# Index blob
# ---------------------------------------------------------------------------


def encode_index(ids: list[str]) -> bytes:
    return _dump_json({"version": SCHEMA_VERSION, "ids": list(ids)})


def decode_index(raw: bytes) -> list[str]:
    data = _load_json(raw, "index")

    if isinstance(data, list):
        ids = data
    elif isinstance(data, dict):
        version = data.get("version")
        if version != SCHEMA_VERSION:
            raise UnsupportedSchemaVersion("index", version)
        ids = data.get("ids")
    else:
        raise DecodeError("index blob is neither a list nor an object")

    if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
        raise DecodeError("index ids must be a list of strings")
    return ids


# ---------------------------------------------------------------------------
# Record blob
# ---------------------------------------------------------------------------


def encode_record(record: SkillRecord) -> bytes:
    return _dump_json(
        {
            "version": SCHEMA_VERSION,
            "data": record.payload,
            "timestamp": record.timestamp,
            "owner": record.owner,
            "category": record.category.value,
            "rating": record.rating,
        }
    )


def decode_record(record_id: str, raw: bytes) -> SkillRecord:
    data = _load_json(raw, "record")
    if not isinstance(data, dict):
        raise DecodeError(f"record {record_id} is not an object")

    if "version" not in data:
        # Unversioned web client layout
        category_name = data.get("skillType")
    elif data["version"] == SCHEMA_VERSION:
        category_name = data.get("category")
    else:
        raise UnsupportedSchemaVersion("record", data["version"])

    category = SkillCategory.parse(category_name) if isinstance(category_name, str) else None
    if category is None:
        raise DecodeError(f"record {record_id} has unknown category {category_name!r}")

    payload = data.get("data")
    timestamp = data.get("timestamp")
    owner = data.get("owner")
    rating = data.get("rating") or 0

    if not isinstance(payload, str) or not isinstance(owner, str):
        raise DecodeError(f"record {record_id} is missing data or owner")
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise DecodeError(f"record {record_id} has a non-integer timestamp")
    if isinstance(rating, bool) or not isinstance(rating, int) or not 0 <= rating <= MAX_RATING:
        raise DecodeError(f"record {record_id} has an invalid rating {rating!r}")

    return SkillRecord(
        id=record_id,
        payload=payload,
        timestamp=timestamp,
        owner=owner,
        category=category,
        rating=rating,
    )
