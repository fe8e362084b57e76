"""Wallet provider interface.

The presentation layer picks a provider; the core only asks it for
accounts and listens for account changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

AccountsHandler = Callable[[list[str]], None]


class WalletProvider(ABC):
    @abstractmethod
    async def request_accounts(self) -> list[str]:
        """Ask the user to expose accounts; first entry is the active one."""

    @abstractmethod
    def on_accounts_changed(self, handler: AccountsHandler) -> None:
        """Subscribe to account switches."""


class StaticWalletProvider(WalletProvider):
    """Provider with a fixed account list, for the CLI, REST adapter and tests."""

    def __init__(self, accounts: list[str] | None = None):
        self.accounts = list(accounts or [])
        self._handlers: list[AccountsHandler] = []

    async def request_accounts(self) -> list[str]:
        return list(self.accounts)

    def on_accounts_changed(self, handler: AccountsHandler) -> None:
        self._handlers.append(handler)

    def switch_account(self, address: str) -> None:
        self.accounts = [address] + [a for a in self.accounts if a != address]
        for handler in list(self._handlers):
            handler(list(self.accounts))


def short_address(address: str) -> str:
    return f"{address[:6]}..."
