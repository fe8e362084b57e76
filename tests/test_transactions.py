"""Tests for the transaction orchestrator state machine."""

import asyncio

import pytest

from skillshare.exceptions import UserRejected, WriteFailed
from skillshare.models import OperationKind, TransactionStatus
from skillshare.transactions import REJECTED_MESSAGE, TransactionOrchestrator, classify_failure


def _orchestrator(success_delay=0, error_delay=0):
    seen = []
    orchestrator = TransactionOrchestrator(success_delay, error_delay, on_change=seen.append)
    return orchestrator, seen


async def _ok():
    return None


@pytest.mark.asyncio
async def test_success_lifecycle():
    orchestrator, seen = _orchestrator()
    ok = await orchestrator.run(
        OperationKind.SUBMIT,
        _ok,
        pending_message="working",
        success_message="done",
        failure_label="Submission",
    )
    assert ok
    assert orchestrator.state.status is TransactionStatus.SUCCESS
    assert orchestrator.state.visible

    await orchestrator.wait_dismissed()
    assert [(s.visible, s.status, s.message) for s in seen] == [
        (True, TransactionStatus.PENDING, "working"),
        (True, TransactionStatus.SUCCESS, "done"),
        (False, TransactionStatus.PENDING, ""),
    ]


@pytest.mark.asyncio
async def test_error_lifecycle():
    orchestrator, seen = _orchestrator()

    async def boom():
        raise WriteFailed("out of gas")

    ok = await orchestrator.run(
        OperationKind.RATE, boom, pending_message="p", success_message="s", failure_label="Rating"
    )
    assert not ok
    assert orchestrator.state.status is TransactionStatus.ERROR
    assert orchestrator.state.message == "Rating failed: out of gas"
    assert orchestrator.state.error == "WriteFailed"

    await orchestrator.wait_dismissed()
    assert not orchestrator.state.visible
    assert not orchestrator.in_flight(OperationKind.RATE)


@pytest.mark.asyncio
async def test_rejection_gets_friendly_message():
    orchestrator, _ = _orchestrator()

    async def declined():
        raise RuntimeError("MetaMask: User rejected transaction signature")

    await orchestrator.run(
        OperationKind.SUBMIT, declined, pending_message="p", success_message="s", failure_label="Submission"
    )
    assert orchestrator.state.message == REJECTED_MESSAGE
    assert orchestrator.state.error == "UserRejected"


def test_classify_failure():
    assert isinstance(classify_failure(RuntimeError("user rejected transaction")), UserRejected)
    assert isinstance(classify_failure(RuntimeError("nonce too low")), WriteFailed)
    assert str(classify_failure(RuntimeError())) == "Unknown error"
    original = UserRejected("declined")
    assert classify_failure(original) is original


@pytest.mark.asyncio
async def test_timed_dismissal_waits_for_delay():
    orchestrator, _ = _orchestrator(success_delay=0.05)
    await orchestrator.run(
        OperationKind.SUBMIT, _ok, pending_message="p", success_message="s", failure_label="Submission"
    )
    await asyncio.sleep(0)
    assert orchestrator.state.visible

    await orchestrator.wait_dismissed()
    assert not orchestrator.state.visible


@pytest.mark.asyncio
async def test_same_kind_refused_while_pending():
    orchestrator, _ = _orchestrator()
    release = asyncio.Event()
    calls = []

    async def slow():
        calls.append("slow")
        await release.wait()

    first = asyncio.create_task(
        orchestrator.run(OperationKind.SUBMIT, slow, pending_message="p", success_message="s", failure_label="S")
    )
    await asyncio.sleep(0)
    assert orchestrator.in_flight(OperationKind.SUBMIT)

    second = await orchestrator.run(
        OperationKind.SUBMIT, slow, pending_message="p", success_message="s", failure_label="S"
    )
    assert second is False

    release.set()
    assert await first is True
    assert calls == ["slow"]


@pytest.mark.asyncio
async def test_different_kinds_may_overlap():
    orchestrator, _ = _orchestrator()
    release = asyncio.Event()

    async def slow():
        await release.wait()

    submit = asyncio.create_task(
        orchestrator.run(OperationKind.SUBMIT, slow, pending_message="p", success_message="s", failure_label="S")
    )
    await asyncio.sleep(0)

    rated = await orchestrator.run(
        OperationKind.RATE, _ok, pending_message="rating", success_message="rated", failure_label="Rating"
    )
    assert rated
    assert orchestrator.in_flight(OperationKind.SUBMIT)

    release.set()
    assert await submit


@pytest.mark.asyncio
async def test_new_operation_supersedes_pending_dismissal():
    orchestrator, _ = _orchestrator(success_delay=10, error_delay=10)
    dismissed = []

    await orchestrator.run(
        OperationKind.SUBMIT,
        _ok,
        pending_message="p",
        success_message="s",
        failure_label="S",
        on_dismiss=lambda: dismissed.append(True),
    )
    first_timer = orchestrator._dismiss_task

    await orchestrator.run(
        OperationKind.RATE, _ok, pending_message="p2", success_message="s2", failure_label="R"
    )
    await asyncio.sleep(0)

    assert first_timer.cancelled()
    assert dismissed == [True]
    assert orchestrator.state.message == "s2"
    orchestrator._cancel_dismiss()
    await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_after_success_runs_before_dismissal():
    orchestrator, _ = _orchestrator()
    order = []

    async def after():
        order.append(("after", orchestrator.state.status))

    await orchestrator.run(
        OperationKind.SUBMIT,
        _ok,
        pending_message="p",
        success_message="s",
        failure_label="S",
        after_success=after,
        on_dismiss=lambda: order.append(("dismiss", orchestrator.state.visible)),
    )
    await orchestrator.wait_dismissed()
    assert order == [("after", TransactionStatus.SUCCESS), ("dismiss", False)]


@pytest.mark.asyncio
async def test_failure_reported_before_error_state():
    orchestrator, seen = _orchestrator()
    reported = []

    async def fail():
        raise RuntimeError("node offline")

    await orchestrator.run(
        OperationKind.RATE,
        fail,
        pending_message="p",
        success_message="s",
        failure_label="Rating",
        after_failure=lambda message: reported.append((message, len(seen))),
    )
    assert reported == [("Rating failed: node offline", 1)]
    assert orchestrator.state.status is TransactionStatus.ERROR
    await orchestrator.wait_dismissed()
