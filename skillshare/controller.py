"""Application controller — the single owner of SkillShare state.

Presentation layers (CLI, REST, a UI) hold one controller, read its
derived views and call ``load_all``, ``submit`` and ``rate``. Observers
registered with ``subscribe`` are called after every state change.
"""

from __future__ import annotations

import logging
import secrets
import string
import time
from collections.abc import Callable
from dataclasses import replace

from skillshare.activity import ActivityLog
from skillshare.config import SkillShareConfig
from skillshare.exceptions import (
    InvalidDraft,
    RecordNotFound,
    StoreUnavailable,
    WalletNotConnected,
    WriteFailed,
)
from skillshare.models import (
    MAX_RATING,
    AppState,
    CategoryStat,
    OperationKind,
    SkillCategory,
    SkillDraft,
    SkillRecord,
    TransactionState,
    WalletSession,
)
from skillshare.read_model import category_stats, filter_records
from skillshare.registry.codec import PayloadCodec, PlaceholderCodec
from skillshare.registry.index import RegistryIndexManager
from skillshare.registry.records import RecordStoreAccessor
from skillshare.store.base import KeyValueStore
from skillshare.transactions import TransactionOrchestrator
from skillshare.wallet import WalletProvider, short_address

logger = logging.getLogger(__name__)

Observer = Callable[["SkillShareController"], None]

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 7


def new_record_id(now: float | None = None) -> str:
    """Millisecond timestamp plus a random base-36 suffix.

    Uniqueness is probabilistic; ``SkillShareController`` re-rolls on a
    detected collision.
    """
    millis = int((time.time() if now is None else now) * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"{millis}-{suffix}"


class SkillShareController:
    """Explicit application state plus the operations that change it."""

    def __init__(
        self,
        store: KeyValueStore,
        config: SkillShareConfig | None = None,
        codec: PayloadCodec | None = None,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.config = config or SkillShareConfig()
        self.store = store
        self.codec = codec or PlaceholderCodec()
        self.index = RegistryIndexManager(store, self.config.keys)
        self.records_accessor = RecordStoreAccessor(store, self.config.keys)
        self.activity = ActivityLog(limit=self.config.history_limit)
        self.transactions = TransactionOrchestrator(
            success_delay=self.config.timing.success_dismiss_seconds,
            error_delay=self.config.timing.error_dismiss_seconds,
            on_change=self._on_transaction_change,
        )
        self.state = AppState()
        self._clock = clock
        self._id_factory = id_factory or (lambda: new_record_id(self._clock()))
        self._observers: list[Observer] = []

    # ------------------------------------------------------------------
    # Observers and derived views
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer``; returns a function that unregisters it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    @property
    def records(self) -> tuple[SkillRecord, ...]:
        return self.state.records

    @property
    def transaction(self) -> TransactionState:
        return self.transactions.state

    @property
    def filtered_records(self) -> list[SkillRecord]:
        return filter_records(self.state.records, self.state.search_term, self.state.filter_category)

    @property
    def statistics(self) -> list[CategoryStat]:
        return category_stats(self.state.records)

    @property
    def adding(self) -> bool:
        return self.transactions.in_flight(OperationKind.SUBMIT)

    def find_record(self, record_id: str) -> SkillRecord | None:
        return next((r for r in self.state.records if r.id == record_id), None)

    # ------------------------------------------------------------------
    # Presentation inputs
    # ------------------------------------------------------------------

    def set_search(self, search_term: str) -> None:
        self.state.search_term = search_term
        self._notify()

    def set_filter(self, filter_category: str) -> None:
        self.state.filter_category = filter_category
        self._notify()

    def open_add_modal(self) -> None:
        self.state.show_add_modal = True
        self._notify()

    def close_add_modal(self) -> None:
        self.state.show_add_modal = False
        self._notify()

    def update_draft(self, **fields: str) -> SkillDraft:
        self.state.draft = replace(self.state.draft, **fields)
        self._notify()
        return self.state.draft

    # ------------------------------------------------------------------
    # Wallet session
    # ------------------------------------------------------------------

    async def connect_wallet(self, provider: WalletProvider) -> WalletSession | None:
        try:
            accounts = await provider.request_accounts()
        except Exception as exc:
            logger.error("Failed to connect wallet: %s", exc)
            self.activity.record("Failed to connect wallet")
            self._notify()
            return None

        session = WalletSession(address=accounts[0] if accounts else "", provider=provider)
        self.state.session = session
        self.activity.record(f"Wallet connected: {short_address(session.address)}")
        provider.on_accounts_changed(lambda accounts: self._on_accounts_changed(provider, accounts))
        self._notify()
        return session

    def disconnect_wallet(self) -> None:
        self.state.session = None
        self.activity.record("Wallet disconnected")
        self._notify()

    def _on_accounts_changed(self, provider: WalletProvider, accounts: list[str]) -> None:
        current = self.state.session
        if current is None or current.provider is not provider:
            return
        address = accounts[0] if accounts else ""
        self.state.session = WalletSession(address=address, provider=provider)
        self.activity.record(f"Wallet changed to: {short_address(address)}")
        self._notify()

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    async def load_all(self) -> tuple[SkillRecord, ...]:
        """Reload every indexed record and replace the in-memory set."""
        self.state.refreshing = True
        self._notify()
        try:
            if not await self._probe_store():
                raise StoreUnavailable("store is not available")
            ids = await self.index.load_index()
            records = await self.records_accessor.load_records(ids)
        except StoreUnavailable as exc:
            logger.error("Error loading skills: %s", exc)
            self.activity.record("Error loading skills")
        else:
            self.state.records = tuple(records)
            self.activity.record(f"Loaded {len(records)} skills")
        finally:
            self.state.refreshing = False
            self.state.loading = False
            self._notify()
        return self.state.records

    async def _probe_store(self) -> bool:
        try:
            return await self.store.is_available()
        except Exception as exc:
            raise StoreUnavailable(f"readiness probe failed: {exc}") from exc

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def submit(self, draft: SkillDraft | None = None) -> bool:
        """Encode and publish a draft (the current form when ``draft`` is None)."""
        draft = draft or self.state.draft
        session = self.state.session

        async def action() -> None:
            owner = self._require_session(session)
            category = SkillCategory.parse(draft.category)
            if category is None:
                raise InvalidDraft("Please select a skill type")

            payload = self.codec.encode(draft)
            record_id = await self._allocate_id()
            record = SkillRecord(
                id=record_id,
                payload=payload,
                timestamp=int(self._clock()),
                owner=owner,
                category=category,
            )
            await self.records_accessor.save_record(record)
            await self.index.append_index(record_id)
            logger.info("Submitted skill %s (%s)", record_id, category.value)

        async def after_success() -> None:
            self.activity.record(f"Added new skill: {draft.category}")
            await self.load_all()

        return await self.transactions.run(
            OperationKind.SUBMIT,
            action,
            pending_message="Encrypting skill data with Zama FHE...",
            success_message="Encrypted skill submitted securely!",
            failure_label="Submission",
            after_success=after_success,
            on_dismiss=self._reset_submission_form,
            after_failure=self.activity.record,
        )

    async def rate(self, record_id: str, value: int) -> bool:
        """Overwrite the rating of one record, keeping its other fields."""
        session = self.state.session

        async def action() -> None:
            self._require_session(session)
            if not 1 <= value <= MAX_RATING:
                raise InvalidDraft(f"Rating must be between 1 and {MAX_RATING}")
            record = await self.records_accessor.load_record(record_id)
            if record is None:
                raise RecordNotFound("Skill not found")
            await self.records_accessor.save_record(replace(record, rating=value))
            logger.info("Rated skill %s as %d", record_id, value)

        async def after_success() -> None:
            self.activity.record(f"Rated skill {record_id[:6]}... as {value} stars")
            await self.load_all()

        return await self.transactions.run(
            OperationKind.RATE,
            action,
            pending_message="Processing encrypted rating with FHE...",
            success_message="FHE rating completed successfully!",
            failure_label="Rating",
            after_success=after_success,
            after_failure=self.activity.record,
        )

    def request_to_learn(self, record_id: str) -> str:
        """Record interest in a skill. Matching happens off-system."""
        record = self.find_record(record_id)
        if record is None:
            raise RecordNotFound(f"Skill {record_id} is not loaded")
        self.activity.record(f"Requested to learn {record.category.value} from {short_address(record.owner)}")
        self._notify()
        return "FHE matching initiated! You'll be anonymously connected if there's a match."

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_session(session: WalletSession | None) -> str:
        if session is None or not session.address:
            raise WalletNotConnected("Please connect wallet first")
        return session.address

    async def _allocate_id(self) -> str:
        for _ in range(self.config.id_attempts):
            record_id = self._id_factory()
            if not await self.records_accessor.record_exists(record_id):
                return record_id
            logger.warning("Skill id %s already in use, regenerating", record_id)
        raise WriteFailed("could not allocate an unused skill id")

    def _reset_submission_form(self) -> None:
        self.state.draft = SkillDraft()
        self.state.show_add_modal = False
        self._notify()

    def _on_transaction_change(self, _state: TransactionState) -> None:
        self._notify()

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer(self)
