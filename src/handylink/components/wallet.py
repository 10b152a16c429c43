from __future__ import annotations

import logging
from typing import Any, List, Optional, Protocol

from web3 import Web3

from .config import NetworkConfig
from .errors import ProviderRpcError, TransactionError, WalletConnectionError


logger = logging.getLogger(__name__)


class WalletProvider(Protocol):
    """Anything exposing the injected-provider ``request`` call."""

    async def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        ...


def truncate_address(address: str) -> str:
    """Show the first 6 and last 4 characters of an address."""
    return f"{address[:6]}...{address[-4:]}"


class WalletBridge:
    """Thin adapter over a wallet provider for the booking flow."""

    def __init__(self, provider: WalletProvider, network: NetworkConfig) -> None:
        self.provider = provider
        self.network = network

    async def connect(self) -> str:
        """Register/switch to the target network, then request account access.

        Returns the first account the wallet exposes.
        """
        try:
            await self.provider.request("wallet_addEthereumChain", [self.network.add_chain_params()])
            accounts = await self.provider.request("eth_requestAccounts")
        except (ProviderRpcError, OSError, ValueError) as exc:
            raise WalletConnectionError(str(exc)) from exc

        if not isinstance(accounts, (list, tuple)) or not accounts:
            raise WalletConnectionError(f"Wallet returned no accounts: {accounts!r}")
        account = accounts[0]
        if not isinstance(account, str) or not account:
            raise WalletConnectionError(f"Wallet returned an invalid account: {account!r}")
        logger.info("Wallet connected on chain %s: %s", self.network.chain_id_hex, truncate_address(account))
        return account

    async def check_balance(self, account: str) -> int:
        """Native-currency balance of ``account`` in wei."""
        try:
            raw = await self.provider.request("eth_getBalance", [account, "latest"])
            if isinstance(raw, int) and not isinstance(raw, bool):
                return raw
            if not isinstance(raw, str):
                raise TypeError(f"Unexpected balance reply: {raw!r}")
            return Web3.to_int(hexstr=raw)
        except (ProviderRpcError, OSError, TypeError, ValueError) as exc:
            raise TransactionError(str(exc)) from exc

    async def transfer(self, sender: str, recipient: str, amount: int) -> str:
        """Submit a value transfer and return the transaction hash."""
        tx_request = {
            "from": sender,
            "to": Web3.to_checksum_address(recipient),
            "value": hex(amount),
        }
        try:
            tx_hash = await self.provider.request("eth_sendTransaction", [tx_request])
        except ProviderRpcError as exc:
            if exc.user_rejected:
                logger.info("Transfer rejected in wallet by %s", truncate_address(sender))
            raise TransactionError(str(exc)) from exc
        except (OSError, ValueError) as exc:
            raise TransactionError(str(exc)) from exc
        if not isinstance(tx_hash, str) or not tx_hash:
            raise TransactionError(f"Wallet returned no transaction hash: {tx_hash!r}")
        logger.info("Transfer submitted: %s", tx_hash)
        return tx_hash
