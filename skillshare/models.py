"""SkillShare data models — records, drafts, transaction and session state."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SkillCategory(Enum):
    """Fixed set of skill categories."""

    PROGRAMMING = "Programming"
    COOKING = "Cooking"
    LANGUAGE = "Language"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: str) -> SkillCategory | None:
        for member in cls:
            if member.value == value:
                return member
        return None


ALL_CATEGORIES = "all"
MAX_RATING = 5


class TransactionStatus(Enum):
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class OperationKind(Enum):
    """Write operations wrapped by the transaction lifecycle."""

    SUBMIT = "submit"
    RATE = "rate"


# --- Records ---


@dataclass
class SkillDraft:
    """Submission form contents before encoding."""

    category: str = ""
    description: str = ""
    experience: str = ""


@dataclass(frozen=True)
class SkillRecord:
    """One shared skill offer, keyed by ``id`` in the store."""

    id: str
    payload: str
    timestamp: int  # seconds
    owner: str
    category: SkillCategory
    rating: int = 0  # 0 = unrated

    @property
    def short_id(self) -> str:
        return self.id[:6]

    @property
    def short_owner(self) -> str:
        return self.owner[:6]


# --- Presentation-facing state ---


@dataclass(frozen=True)
class TransactionState:
    visible: bool = False
    status: TransactionStatus = TransactionStatus.PENDING
    message: str = ""
    error: str = ""  # error kind name when status is ERROR


@dataclass(frozen=True)
class ActivityLogEntry:
    timestamp: str  # display string
    text: str

    def __str__(self) -> str:
        return f"{self.timestamp}: {self.text}"


@dataclass(frozen=True)
class WalletSession:
    address: str
    provider: Any = None


@dataclass(frozen=True)
class CategoryStat:
    category: SkillCategory
    count: int
    percentage: float


@dataclass
class AppState:
    """Application state owned by the controller."""

    records: tuple[SkillRecord, ...] = ()
    loading: bool = True
    refreshing: bool = False
    session: WalletSession | None = None
    search_term: str = ""
    filter_category: str = ALL_CATEGORIES
    draft: SkillDraft = field(default_factory=SkillDraft)
    show_add_modal: bool = False
