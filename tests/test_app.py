"""
Streamlit page tests driven through ``streamlit.testing.v1.AppTest``.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import handylink
from handylink.components import booking_section
from handylink.components.wallet import WalletBridge


APP_PATH = Path(handylink.__file__).parent / "app.py"


@pytest.fixture(autouse=True)
def _fresh_bridge_cache(monkeypatch):
    monkeypatch.delenv("HANDYLINK_WALLET_URL", raising=False)
    booking_section.get_wallet_bridge.clear()
    yield
    booking_section.get_wallet_bridge.clear()


def _subheaders(at: AppTest) -> list:
    return [element.value for element in at.subheader]


def test_page_renders_without_wallet():
    """No wallet configured: page renders and Connect is inert."""
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    assert not at.exception

    assert "Available Services, Connect wallet to continue" in _subheaders(at)
    assert "Connect Wallet" in _subheaders(at)
    assert at.button(key="pay_aptos").disabled

    at.button(key="service_2").click().run()
    at.button(key="connect_wallet").click().run()

    state = at.session_state[booking_section.STATE_SESSION_KEY]
    assert state.selected_service.name == "Electrical"
    assert state.account is None
    assert not at.error
    assert "Book Electrical Service" not in _subheaders(at)


def test_full_booking_through_page(monkeypatch, provider):
    monkeypatch.setattr(
        booking_section,
        "build_bridge",
        lambda settings: WalletBridge(provider, settings.network),
    )
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()

    at.button(key="service_2").click().run()
    at.button(key="connect_wallet").click().run()
    assert "Wallet Connected" in _subheaders(at)
    assert "Book Electrical Service" in _subheaders(at)

    at.text_input(key="customer_name").input("Ada Lovelace")
    at.text_input(key="customer_address").input("12 Analytical Way")
    at.text_input(key="customer_phone").input("555-0100")
    at.text_input(key="customer_email").input("ada@example.com")
    at.run()
    at.button(key="submit_booking").click().run()

    assert not at.exception
    assert "Booking Confirmed!" in _subheaders(at)
    markdown = "\n".join(element.value for element in at.markdown)
    assert "Service: Electrical" in markdown
    assert "Customer: Ada Lovelace" in markdown
    assert "Wallet: 0xABCD...7890" in markdown
    assert provider.methods == [
        "wallet_addEthereumChain",
        "eth_requestAccounts",
        "eth_getBalance",
        "eth_sendTransaction",
    ]


def test_submit_with_missing_fields_warns(monkeypatch, provider):
    monkeypatch.setattr(
        booking_section,
        "build_bridge",
        lambda settings: WalletBridge(provider, settings.network),
    )
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    at.button(key="service_1").click().run()
    at.button(key="connect_wallet").click().run()
    provider.calls.clear()

    at.button(key="submit_booking").click().run()

    assert [w.value for w in at.warning] == ["Please fill in all fields and connect a wallet."]
    assert provider.calls == []
