from __future__ import annotations

from typing import Optional


class BookingError(Exception):
    """Base class for every failure the booking page reports to the user."""


class ValidationError(BookingError):
    """Form incomplete or no wallet connected at submit time."""


class WalletConnectionError(BookingError):
    """Network registration or account request failed."""


class InsufficientBalanceError(BookingError):
    def __init__(self, message: str, *, balance: int, required: int) -> None:
        super().__init__(message)
        self.balance = balance
        self.required = required


class TransactionError(BookingError):
    """Balance query or transfer rejected by the provider."""


class ProviderRpcError(Exception):
    """JSON-RPC error object returned by a wallet provider (EIP-1193 shape)."""

    USER_REJECTED = 4001

    def __init__(self, code: Optional[int], message: str, data: object = None) -> None:
        super().__init__(f"[{code}] {message}" if code is not None else message)
        self.code = code
        self.message = message
        self.data = data

    @property
    def user_rejected(self) -> bool:
        return self.code == self.USER_REJECTED
