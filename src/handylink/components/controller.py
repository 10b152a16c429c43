"""Booking page state and the transitions that mutate it.

The Streamlit page only reads :class:`BookingPageState`; every change goes
through :class:`BookingController`. Wallet calls are coroutines, and each
connect attempt or booking submission takes a token so that a result arriving
after the user has moved on (picked another service, retried) is dropped
instead of overwriting newer state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Optional, Tuple

from .catalog import Service, get_service
from .config import Settings
from .errors import InsufficientBalanceError, TransactionError, ValidationError, WalletConnectionError
from .wallet import WalletBridge, truncate_address


logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Please fill in all fields and connect a wallet."
NO_SERVICE_MESSAGE = "Please select a service first."
ALREADY_PROCESSING_MESSAGE = "A booking is already being processed."
CONNECT_FAILED_MESSAGE = "Failed to connect to MetaMask. Please try again."
TRANSACTION_FAILED_MESSAGE = "Transaction failed. Please try again."


class ConnectionStatus(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    FAILED = "failed"


class BookingStatus(str, Enum):
    NONE_SELECTED = "none_selected"
    SELECTED = "selected"
    PROCESSING = "processing"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass(frozen=True)
class ConnectionState:
    status: ConnectionStatus = ConnectionStatus.DISCONNECTED
    account: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def connected(cls, account: str) -> "ConnectionState":
        return cls(ConnectionStatus.CONNECTED, account=account)

    @classmethod
    def failed(cls, message: str) -> "ConnectionState":
        return cls(ConnectionStatus.FAILED, message=message)

    @property
    def display(self) -> Optional[str]:
        if self.status is ConnectionStatus.CONNECTED and self.account:
            return truncate_address(self.account)
        return self.message


@dataclass(frozen=True)
class CustomerInfo:
    name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def with_field(self, name: str, value: str) -> "CustomerInfo":
        if name not in self.field_names():
            raise ValueError(f"Unknown customer field: {name!r}")
        return replace(self, **{name: value})

    def is_complete(self) -> bool:
        return all(getattr(self, name) for name in self.field_names())


@dataclass(frozen=True)
class Booking:
    """What the confirmation shows, frozen at submit time."""

    service: Service
    customer: CustomerInfo
    account: str
    tx_hash: str

    @property
    def wallet_display(self) -> str:
        return truncate_address(self.account)


@dataclass
class BookingPageState:
    selected_service: Optional[Service] = None
    customer: CustomerInfo = field(default_factory=CustomerInfo)
    connection: ConnectionState = field(default_factory=ConnectionState)
    status: BookingStatus = BookingStatus.NONE_SELECTED
    error: Optional[str] = None
    booking: Optional[Booking] = None
    submission_token: int = 0
    connect_token: int = 0

    @property
    def account(self) -> Optional[str]:
        if self.connection.status is ConnectionStatus.CONNECTED:
            return self.connection.account
        return None

    @property
    def processing(self) -> bool:
        return self.status is BookingStatus.PROCESSING

    @property
    def confirmed(self) -> bool:
        return self.status is BookingStatus.CONFIRMED

    @property
    def show_booking_form(self) -> bool:
        return self.selected_service is not None and self.account is not None and not self.confirmed


class BookingController:
    def __init__(self, state: BookingPageState, bridge: Optional[WalletBridge], settings: Settings) -> None:
        self.state = state
        self.bridge = bridge
        self.settings = settings

    @property
    def wallet_available(self) -> bool:
        return self.bridge is not None

    # ---- Form transitions ----
    def select_service(self, identifier: int) -> Service:
        service = get_service(identifier)
        if service is None:
            raise ValueError(f"Unknown service id: {identifier}")
        # Abandons any submission still in flight.
        self.state.submission_token += 1
        self.state.selected_service = service
        self.state.booking = None
        self.state.error = None
        self.state.status = BookingStatus.SELECTED
        return service

    def update_customer(self, name: str, value: str) -> CustomerInfo:
        self.state.customer = self.state.customer.with_field(name, value)
        return self.state.customer

    # ---- Wallet connection ----
    def begin_connect(self) -> Optional[int]:
        if self.bridge is None:
            return None
        self.state.connect_token += 1
        return self.state.connect_token

    def resolve_connect(self, token: int, connection: ConnectionState) -> bool:
        if token != self.state.connect_token:
            logger.debug("Dropping stale connect result (token %s, active %s)", token, self.state.connect_token)
            return False
        self.state.connection = connection
        return True

    async def connect_wallet(self) -> ConnectionState:
        token = self.begin_connect()
        if token is None or self.bridge is None:
            return self.state.connection

        try:
            account = await self.bridge.connect()
        except WalletConnectionError:
            logger.exception("Wallet connection error")
            self.resolve_connect(token, ConnectionState.failed(CONNECT_FAILED_MESSAGE))
        else:
            self.resolve_connect(token, ConnectionState.connected(account))
        return self.state.connection

    # ---- Booking submission ----
    def begin_submission(self) -> Tuple[int, Service, CustomerInfo, str, WalletBridge]:
        """Validate the form and enter Processing.

        Raises :class:`ValidationError` without touching the wallet when the
        form is incomplete, no wallet is connected or a submission is running.
        """
        state = self.state
        account = state.account
        bridge = self.bridge
        if not state.customer.is_complete() or account is None or bridge is None:
            raise ValidationError(MISSING_FIELDS_MESSAGE)
        if state.selected_service is None:
            raise ValidationError(NO_SERVICE_MESSAGE)
        if state.processing:
            raise ValidationError(ALREADY_PROCESSING_MESSAGE)

        state.submission_token += 1
        state.status = BookingStatus.PROCESSING
        state.error = None
        logger.info("Submitting %s booking for %s", state.selected_service.name, truncate_address(account))
        return state.submission_token, state.selected_service, state.customer, account, bridge

    def complete_submission(self, token: int, booking: Booking) -> bool:
        if token != self.state.submission_token:
            logger.debug("Dropping stale booking confirmation (token %s)", token)
            return False
        self.state.booking = booking
        self.state.status = BookingStatus.CONFIRMED
        self.state.error = None
        return True

    def fail_submission(self, token: int, message: str) -> bool:
        if token != self.state.submission_token:
            logger.debug("Dropping stale booking failure (token %s)", token)
            return False
        self.state.status = BookingStatus.FAILED
        self.state.error = message
        return True

    def _deposit_message(self) -> str:
        return (
            f"You need to make a deposit of at least ${self.settings.required_deposit} to proceed. "
            f"Please fund your wallet address on {self.settings.network.chain_name}."
        )

    async def submit_booking(self) -> Optional[Booking]:
        token, service, customer, account, bridge = self.begin_submission()
        required = self.settings.required_deposit_wei

        try:
            balance = await bridge.check_balance(account)
            if balance < required:
                raise InsufficientBalanceError(self._deposit_message(), balance=balance, required=required)
            tx_hash = await bridge.transfer(account, self.settings.deposit_address, required)
        except InsufficientBalanceError as exc:
            logger.warning("Balance %s below required deposit %s", exc.balance, exc.required)
            self.fail_submission(token, str(exc))
            return None
        except TransactionError:
            logger.exception("Transaction error")
            self.fail_submission(token, TRANSACTION_FAILED_MESSAGE)
            return None

        booking = Booking(service=service, customer=customer, account=account, tx_hash=tx_hash)
        if not self.complete_submission(token, booking):
            return None
        return booking
