"""Booking state, wallet bridge and Streamlit sections.

Re-exports the pieces the page and tests use most.
"""

from __future__ import annotations

from .catalog import SERVICES, Service, get_service
from .config import NetworkConfig, Settings, load_settings
from .controller import (
    Booking,
    BookingController,
    BookingPageState,
    BookingStatus,
    ConnectionState,
    ConnectionStatus,
    CustomerInfo,
)
from .errors import (
    BookingError,
    InsufficientBalanceError,
    ProviderRpcError,
    TransactionError,
    ValidationError,
    WalletConnectionError,
)
from .wallet import WalletBridge, WalletProvider, truncate_address

__all__ = [
    "SERVICES",
    "Service",
    "get_service",
    "NetworkConfig",
    "Settings",
    "load_settings",
    "Booking",
    "BookingController",
    "BookingPageState",
    "BookingStatus",
    "ConnectionState",
    "ConnectionStatus",
    "CustomerInfo",
    "BookingError",
    "InsufficientBalanceError",
    "ProviderRpcError",
    "TransactionError",
    "ValidationError",
    "WalletConnectionError",
    "WalletBridge",
    "WalletProvider",
    "truncate_address",
]
