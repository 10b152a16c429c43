from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest

from handylink.components.config import Settings
from handylink.components.controller import BookingController, BookingPageState
from handylink.components.wallet import WalletBridge


ACCOUNT = "0xABCDEF1234567890"
TX_HASH = "0x5f3c0b7e2a9d4c1e8b6a7f0d3e2c1b0a9f8e7d6c5b4a39281706f5e4d3c2b1a0"


class FakeProvider:
    """In-memory wallet provider that records every request."""

    def __init__(self, accounts: Optional[List[str]] = None, balance: Any = "0x0", tx_hash: str = TX_HASH) -> None:
        self.calls: List[Tuple[str, Any]] = []
        self.results: Dict[str, Any] = {
            "wallet_addEthereumChain": None,
            "eth_requestAccounts": [ACCOUNT] if accounts is None else accounts,
            "eth_getBalance": balance,
            "eth_sendTransaction": tx_hash,
        }
        self.errors: Dict[str, Exception] = {}
        self.gates: Dict[str, asyncio.Event] = {}
        self.reached: Dict[str, asyncio.Event] = {}

    @property
    def methods(self) -> List[str]:
        return [method for method, _ in self.calls]

    def hold(self, method: str) -> None:
        """Make ``method`` block until :meth:`release` is called (inside a running loop)."""
        self.gates[method] = asyncio.Event()
        self.reached[method] = asyncio.Event()

    def release(self, method: str) -> None:
        self.gates[method].set()

    async def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        self.calls.append((method, params))
        if method in self.gates:
            self.reached[method].set()
            await self.gates[method].wait()
        if method in self.errors:
            raise self.errors[method]
        return self.results[method]


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def bridge(provider: FakeProvider, settings: Settings) -> WalletBridge:
    return WalletBridge(provider, settings.network)


@pytest.fixture
def controller(bridge: WalletBridge, settings: Settings) -> BookingController:
    return BookingController(BookingPageState(), bridge, settings)


@pytest.fixture
def filled_controller(controller: BookingController) -> BookingController:
    """Electrical selected, wallet connected, every customer field filled."""
    controller.select_service(2)
    asyncio.run(controller.connect_wallet())
    controller.update_customer("name", "Ada Lovelace")
    controller.update_customer("address", "12 Analytical Way")
    controller.update_customer("phone", "555-0100")
    controller.update_customer("email", "ada@example.com")
    return controller
