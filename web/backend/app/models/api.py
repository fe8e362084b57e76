"""Pydantic models for API request/response serialization.

These models mirror the SkillShare dataclasses and provide JSON
serialization for the FastAPI endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from skillshare.models import (
    ActivityLogEntry,
    CategoryStat,
    SkillRecord,
    TransactionState,
)


# ---------------------------------------------------------------------------
# Skill models
# ---------------------------------------------------------------------------


class SkillResponse(BaseModel):
    """Mirrors skillshare.models.SkillRecord."""

    id: str
    payload: str
    timestamp: int
    owner: str
    category: str
    rating: int = 0

    @classmethod
    def from_record(cls, record: SkillRecord) -> SkillResponse:
        return cls(
            id=record.id,
            payload=record.payload,
            timestamp=record.timestamp,
            owner=record.owner,
            category=record.category.value,
            rating=record.rating,
        )


class SkillListResponse(BaseModel):
    entries: list[SkillResponse] = Field(default_factory=list)
    total_count: int = 0
    search: str = ""
    category: str = "all"


class CategoryStatResponse(BaseModel):
    category: str
    count: int
    percentage: float

    @classmethod
    def from_stat(cls, stat: CategoryStat) -> CategoryStatResponse:
        return cls(category=stat.category.value, count=stat.count, percentage=stat.percentage)


class SubmitSkillRequest(BaseModel):
    category: str = Field(..., description="Programming, Cooking, Language or Other")
    description: str = ""
    experience: str = ""


class RateSkillRequest(BaseModel):
    stars: int = Field(..., ge=1, le=5)


# ---------------------------------------------------------------------------
# Transaction / activity / wallet models
# ---------------------------------------------------------------------------


class TransactionResponse(BaseModel):
    """Mirrors skillshare.models.TransactionState."""

    ok: bool = True
    visible: bool = False
    status: str = "pending"
    message: str = ""
    error: str = ""

    @classmethod
    def from_state(cls, state: TransactionState, ok: bool = True) -> TransactionResponse:
        return cls(
            ok=ok,
            visible=state.visible,
            status=state.status.value,
            message=state.message,
            error=state.error,
        )


class ActivityEntryResponse(BaseModel):
    timestamp: str
    text: str

    @classmethod
    def from_entry(cls, entry: ActivityLogEntry) -> ActivityEntryResponse:
        return cls(timestamp=entry.timestamp, text=entry.text)


class ConnectWalletRequest(BaseModel):
    address: str = Field(..., min_length=1)


class WalletResponse(BaseModel):
    connected: bool = False
    address: str = ""


class LearnResponse(BaseModel):
    skill_id: str
    message: str
