"""HandyLink: book a local repair professional and confirm with your wallet."""

from __future__ import annotations

import logging

import streamlit as st

from handylink.components.booking_section import (
    get_controller,
    render_booking_form,
    render_confirmation,
    render_intro,
    render_payment_options,
    render_services,
    render_wallet_section,
)
from handylink.components.config import load_settings


# ---------------------------------------------------------------------------
# 1. Page configuration & headline
# ---------------------------------------------------------------------------
st.set_page_config(page_title="HandyLink", page_icon="🔧", layout="centered")

settings = load_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.title("🔧 HandyLink")
st.caption("Connecting you with local repair professionals.")

controller = get_controller(settings)


# ---------------------------------------------------------------------------
# 2. Intro & services
# ---------------------------------------------------------------------------
render_intro()
render_services(settings)


# ---------------------------------------------------------------------------
# 3. Wallet
# ---------------------------------------------------------------------------
render_wallet_section(controller, settings)


# ---------------------------------------------------------------------------
# 4. Booking form / confirmation
# ---------------------------------------------------------------------------
render_booking_form(controller, settings)
render_confirmation(controller, settings)


# ---------------------------------------------------------------------------
# 5. Payment options
# ---------------------------------------------------------------------------
st.divider()
render_payment_options()
