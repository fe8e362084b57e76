"""Transaction orchestrator — pending/success/error lifecycle for writes.

Every write runs as ``idle -> pending -> {success, error} -> idle``. The
return to idle is a timer owned by the orchestrator; starting a new
operation cancels a dismissal that has not fired yet and runs its
``on_dismiss`` callback right away. Operations themselves are never
cancelled once started.

Only a second request of the *same* kind is refused while one is pending.
A submission and a rating may overlap.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from skillshare.exceptions import SkillShareError, UserRejected, WriteFailed
from skillshare.models import OperationKind, TransactionState, TransactionStatus
from skillshare.store.base import USER_REJECTED_MARKER

logger = logging.getLogger(__name__)

IDLE = TransactionState()

REJECTED_MESSAGE = "Transaction rejected by user"


def classify_failure(exc: BaseException) -> SkillShareError:
    """Map an arbitrary write-path exception onto an error kind."""
    if isinstance(exc, SkillShareError):
        return exc
    if USER_REJECTED_MARKER in str(exc).lower():
        return UserRejected(str(exc))
    return WriteFailed(str(exc) or "Unknown error")


def failure_message(error: SkillShareError, label: str) -> str:
    if isinstance(error, UserRejected):
        return REJECTED_MESSAGE
    return f"{label} failed: {error or 'Unknown error'}"


class TransactionOrchestrator:
    """Drives write operations through the visible lifecycle."""

    def __init__(
        self,
        success_delay: float = 2.0,
        error_delay: float = 3.0,
        on_change: Callable[[TransactionState], None] | None = None,
    ) -> None:
        self.success_delay = success_delay
        self.error_delay = error_delay
        self._on_change = on_change
        self._state = IDLE
        self._in_flight: set[OperationKind] = set()
        self._dismiss_task: asyncio.Task | None = None
        self._dismiss_callback: Callable[[], None] | None = None

    @property
    def state(self) -> TransactionState:
        return self._state

    def in_flight(self, kind: OperationKind) -> bool:
        return kind in self._in_flight

    async def run(
        self,
        kind: OperationKind,
        action: Callable[[], Awaitable[object]],
        *,
        pending_message: str,
        success_message: str,
        failure_label: str,
        after_success: Callable[[], Awaitable[None]] | None = None,
        on_dismiss: Callable[[], None] | None = None,
        after_failure: Callable[[str], None] | None = None,
    ) -> bool:
        """Run ``action`` inside the lifecycle. Returns True on success.

        Failures never propagate; they end in the visible error state and are
        reported to ``after_failure``. A superseded dismissal still runs its
        ``on_dismiss`` callback, immediately.
        """
        if kind in self._in_flight:
            logger.warning("Ignoring %s request: one is already pending", kind.value)
            return False

        self._in_flight.add(kind)
        self._cancel_dismiss()
        self._set(TransactionState(visible=True, status=TransactionStatus.PENDING, message=pending_message))

        try:
            try:
                await action()
            except Exception as exc:
                error = classify_failure(exc)
                logger.warning("%s failed (%s): %s", failure_label, type(error).__name__, error)
                message = failure_message(error, failure_label)
                if after_failure is not None:
                    after_failure(message)
                self._set(
                    TransactionState(
                        visible=True,
                        status=TransactionStatus.ERROR,
                        message=message,
                        error=type(error).__name__,
                    )
                )
                self._schedule_dismiss(self.error_delay)
                return False

            self._set(TransactionState(visible=True, status=TransactionStatus.SUCCESS, message=success_message))
            if after_success is not None:
                await after_success()
            self._schedule_dismiss(self.success_delay, on_dismiss)
            return True
        finally:
            self._in_flight.discard(kind)

    async def wait_dismissed(self) -> None:
        """Wait for the scheduled return to idle, if any."""
        task = self._dismiss_task
        if task is not None:
            await asyncio.wait({task})

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _set(self, state: TransactionState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)

    def _schedule_dismiss(self, delay: float, on_dismiss: Callable[[], None] | None = None) -> None:
        self._cancel_dismiss()
        self._dismiss_callback = on_dismiss
        self._dismiss_task = asyncio.get_running_loop().create_task(self._dismiss_after(delay, on_dismiss))

    def _cancel_dismiss(self) -> None:
        if self._dismiss_task is not None and not self._dismiss_task.done():
            self._dismiss_task.cancel()
        self._dismiss_task = None
        callback, self._dismiss_callback = self._dismiss_callback, None
        if callback is not None:
            callback()

    async def _dismiss_after(self, delay: float, on_dismiss: Callable[[], None] | None) -> None:
        await asyncio.sleep(delay)
        self._set(IDLE)
        self._dismiss_callback = None
        if on_dismiss is not None:
            on_dismiss()
