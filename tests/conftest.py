"""Shared fixtures and store doubles."""

import asyncio

import pytest

from skillshare.config import SkillShareConfig, TimingConfig
from skillshare.controller import SkillShareController
from skillshare.store.memory import InMemoryStore
from skillshare.wallet import StaticWalletProvider

ALICE = "0xAAA1111111111111111111111111111111111111"
BOB = "0xBBB2222222222222222222222222222222222222"


def fast_config(**overrides) -> SkillShareConfig:
    """Config with immediate auto-dismiss so lifecycle tests finish quickly."""
    return SkillShareConfig(
        timing=TimingConfig(success_dismiss_seconds=0, error_dismiss_seconds=0),
        **overrides,
    )


async def connected(controller: SkillShareController, address: str = ALICE) -> SkillShareController:
    await controller.connect_wallet(StaticWalletProvider([address]))
    return controller


class RejectingStore(InMemoryStore):
    """Signer declines every write."""

    async def set_data(self, key, value):
        raise RuntimeError("user rejected transaction")


class BrokenWriteStore(InMemoryStore):
    """Writes fail for reasons other than the user."""

    async def set_data(self, key, value):
        raise ConnectionError("execution reverted: out of gas")


class OfflineStore(InMemoryStore):
    """Every read raises while ``failing`` is set."""

    failing = True

    async def get_data(self, key):
        if self.failing:
            raise ConnectionError("network unreachable")
        return await super().get_data(key)


class InterleavingStore(InMemoryStore):
    """Holds readers of one key until ``readers`` flows have all read it.

    Forces concurrent read-modify-write flows to overlap between their
    read and their write.
    """

    def __init__(self, gated_key: str, readers: int = 2):
        super().__init__()
        self.gated_key = gated_key
        self.readers = readers
        self._arrived = 0
        self._released = asyncio.Event()

    async def get_data(self, key):
        value = await super().get_data(key)
        if key == self.gated_key and not self._released.is_set():
            self._arrived += 1
            if self._arrived >= self.readers:
                self._released.set()
            await self._released.wait()
        return value


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def controller(store):
    return SkillShareController(store, config=fast_config())
