from __future__ import annotations

import asyncio
import logging
from typing import Optional

import streamlit as st

from .catalog import SERVICES, catalog_frame
from .config import Settings
from .controller import BookingController, BookingPageState
from .errors import ValidationError
from .providers import build_bridge
from .wallet import WalletBridge


logger = logging.getLogger(__name__)

STATE_SESSION_KEY = "handylink_state"
ALERT_SESSION_KEY = "handylink_alert"

FIELD_LABELS = {
    "name": "Name",
    "address": "Address",
    "phone": "Phone",
    "email": "Email",
}


@st.cache_resource(show_spinner=False)
def get_wallet_bridge(settings: Settings) -> Optional[WalletBridge]:
    return build_bridge(settings)


def get_controller(settings: Settings) -> BookingController:
    state = st.session_state.get(STATE_SESSION_KEY)
    if not isinstance(state, BookingPageState):
        state = BookingPageState()
        st.session_state[STATE_SESSION_KEY] = state
    return BookingController(state, get_wallet_bridge(settings), settings)


# ---- Callbacks (run before the script body on the next rerun) ----
def _on_select(settings: Settings, identifier: int) -> None:
    get_controller(settings).select_service(identifier)


def _on_connect(settings: Settings) -> None:
    controller = get_controller(settings)
    if not controller.wallet_available:
        logger.debug("Connect clicked but no wallet provider is configured")
        return
    asyncio.run(controller.connect_wallet())


def _on_field_change(settings: Settings, name: str) -> None:
    get_controller(settings).update_customer(name, st.session_state.get(f"customer_{name}", ""))


def _on_submit(settings: Settings) -> None:
    controller = get_controller(settings)
    try:
        asyncio.run(controller.submit_booking())
    except ValidationError as exc:
        st.session_state[ALERT_SESSION_KEY] = str(exc)


# ---- Sections ----
def render_intro() -> None:
    st.subheader("Welcome to HandyLink")
    st.write(
        "HandyLink is your go-to platform for connecting with professional local repairers such as plumbers, "
        "electricians, and carpenters. Our mission is to make it easier for you to find reliable help for your "
        "home repair needs."
    )


def render_services(settings: Settings) -> None:
    st.subheader("Available Services, Connect wallet to continue")
    cols = st.columns(len(SERVICES))
    for col, service in zip(cols, SERVICES):
        col.button(
            service.label,
            key=f"service_{service.identifier}",
            on_click=_on_select,
            args=(settings, service.identifier),
        )

    with st.expander("Service catalog", expanded=False):
        st.dataframe(catalog_frame(), hide_index=True)


def render_wallet_section(controller: BookingController, settings: Settings) -> None:
    state = controller.state
    if state.account:
        st.subheader("Wallet Connected")
        st.success(f"Connected: {state.connection.display}")
        st.caption(f"Network: {settings.network.chain_name} (chain `{settings.network.chain_id}`)")
        return

    st.subheader("Connect Wallet")
    st.button("Connect MetaMask", key="connect_wallet", on_click=_on_connect, args=(settings,))
    if state.connection.message:
        st.error(state.connection.message)


def render_booking_form(controller: BookingController, settings: Settings) -> None:
    state = controller.state
    if not state.show_booking_form or state.selected_service is None:
        return

    st.subheader(f"Book {state.selected_service.name} Service")
    for name, label in FIELD_LABELS.items():
        st.text_input(
            label,
            value=getattr(state.customer, name),
            key=f"customer_{name}",
            on_change=_on_field_change,
            args=(settings, name),
        )

    st.button(
        "Processing..." if state.processing else "Confirm Booking",
        key="submit_booking",
        type="primary",
        disabled=state.processing,
        on_click=_on_submit,
        args=(settings,),
    )

    alert = st.session_state.pop(ALERT_SESSION_KEY, None)
    if alert:
        st.warning(alert)
    if state.error:
        st.error(state.error)


def render_confirmation(controller: BookingController, settings: Settings) -> None:
    booking = controller.state.booking
    if not controller.state.confirmed or booking is None:
        return

    st.subheader("Booking Confirmed!")
    customer = booking.customer
    lines = [
        f"Service: {booking.service.name}",
        f"Customer: {customer.name}",
        f"Address: {customer.address}",
        f"Phone: {customer.phone}",
        f"Email: {customer.email}",
        f"Wallet: {booking.wallet_display}",
    ]
    st.markdown("  \n".join(lines))
    st.markdown(f"[View transaction]({settings.network.tx_url(booking.tx_hash)})")
    st.info(
        "Payment will be processed securely using Aptos and Manta Chain once the job is verified."
    )


def render_payment_options() -> None:
    st.subheader("Payment Options")
    st.button("Pay with Aptos - Coming Soon", key="pay_aptos", disabled=True)
