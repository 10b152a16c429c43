"""Runtime configuration for the HandyLink booking page.

Every network and deposit constant can be overridden from the environment
(or a local ``.env`` file):

• HANDYLINK_CHAIN_ID          – decimal or hex chain id of the target network.
• HANDYLINK_CHAIN_NAME        – display name sent with ``wallet_addEthereumChain``.
• HANDYLINK_CURRENCY_*        – native currency name, symbol and decimals.
• HANDYLINK_RPC_URL           – public RPC endpoint registered with the wallet.
• HANDYLINK_EXPLORER_URL      – block explorer registered with the wallet.
• HANDYLINK_DEPOSIT_ADDRESS   – recipient of the booking transfer.
• HANDYLINK_REQUIRED_DEPOSIT  – deposit in ether (decimal string).
• HANDYLINK_WALLET_URL        – JSON-RPC endpoint of the wallet provider.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional

from dotenv import load_dotenv  # type: ignore
from web3 import Web3

load_dotenv()

logger = logging.getLogger(__name__)


ENV_PREFIX = "HANDYLINK_"

DEFAULT_CHAIN_ID = 0xA9  # 169, Manta Pacific
DEFAULT_CHAIN_NAME = "Manta Pacific Mainnet"
DEFAULT_CURRENCY_NAME = "MANTA"
DEFAULT_CURRENCY_SYMBOL = "MANTA"
DEFAULT_CURRENCY_DECIMALS = 18
DEFAULT_RPC_URL = "https://pacific-rpc.manta.network/http"
DEFAULT_EXPLORER_URL = "https://pacific-explorer.manta.network"
DEFAULT_DEPOSIT_ADDRESS = "0x829ee0644aa28E6002E357A1F41a6CCBb521fb30"
DEFAULT_REQUIRED_DEPOSIT = "0"
DEFAULT_WALLET_TIMEOUT = 120.0


def _env(name: str) -> Optional[str]:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _env_str(name: str, default: str) -> str:
    return _env(name) or default


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return int(raw, 0)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_address(name: str, default: str) -> str:
    raw = _env(name)
    if raw is None:
        return default
    if not Web3.is_address(raw):
        logger.warning("Ignoring invalid %s%s=%r; using %s", ENV_PREFIX, name, raw, default)
        return default
    return raw


def _env_decimal(name: str, default: str) -> Decimal:
    raw = _env(name) or default
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return Decimal(default)
    if not value.is_finite() or value < 0:
        return Decimal(default)
    return value


@dataclass(frozen=True)
class NetworkConfig:
    """The single network the wallet is asked to add/switch to."""

    chain_id: int = DEFAULT_CHAIN_ID
    chain_name: str = DEFAULT_CHAIN_NAME
    currency_name: str = DEFAULT_CURRENCY_NAME
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    currency_decimals: int = DEFAULT_CURRENCY_DECIMALS
    rpc_url: str = DEFAULT_RPC_URL
    explorer_url: str = DEFAULT_EXPLORER_URL

    @property
    def chain_id_hex(self) -> str:
        return hex(self.chain_id)

    def add_chain_params(self) -> Dict[str, Any]:
        """Parameter record for ``wallet_addEthereumChain``."""
        return {
            "chainId": self.chain_id_hex,
            "chainName": self.chain_name,
            "nativeCurrency": {
                "name": self.currency_name,
                "symbol": self.currency_symbol,
                "decimals": self.currency_decimals,
            },
            "rpcUrls": [self.rpc_url],
            "blockExplorerUrls": [self.explorer_url],
        }

    def tx_url(self, tx_hash: str) -> str:
        return f"{self.explorer_url.rstrip('/')}/tx/{tx_hash}"


@dataclass(frozen=True)
class Settings:
    """Immutable container for runtime parameters."""

    network: NetworkConfig = field(default_factory=NetworkConfig)
    deposit_address: str = DEFAULT_DEPOSIT_ADDRESS
    required_deposit: Decimal = Decimal(DEFAULT_REQUIRED_DEPOSIT)
    wallet_url: Optional[str] = None
    wallet_timeout: float = DEFAULT_WALLET_TIMEOUT
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        object.__setattr__(self, "deposit_address", Web3.to_checksum_address(self.deposit_address))

    @property
    def required_deposit_wei(self) -> int:
        return int(Web3.to_wei(self.required_deposit, "ether"))


def load_settings() -> Settings:
    """Build settings from the current environment."""
    network = NetworkConfig(
        chain_id=_env_int("CHAIN_ID", DEFAULT_CHAIN_ID),
        chain_name=_env_str("CHAIN_NAME", DEFAULT_CHAIN_NAME),
        currency_name=_env_str("CURRENCY_NAME", DEFAULT_CURRENCY_NAME),
        currency_symbol=_env_str("CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL),
        currency_decimals=_env_int("CURRENCY_DECIMALS", DEFAULT_CURRENCY_DECIMALS),
        rpc_url=_env_str("RPC_URL", DEFAULT_RPC_URL),
        explorer_url=_env_str("EXPLORER_URL", DEFAULT_EXPLORER_URL),
    )
    return Settings(
        network=network,
        deposit_address=_env_address("DEPOSIT_ADDRESS", DEFAULT_DEPOSIT_ADDRESS),
        required_deposit=_env_decimal("REQUIRED_DEPOSIT", DEFAULT_REQUIRED_DEPOSIT),
        wallet_url=_env("WALLET_URL"),
        wallet_timeout=_env_float("WALLET_TIMEOUT", DEFAULT_WALLET_TIMEOUT),
        log_level=_env_str("LOG_LEVEL", "INFO").upper(),
    )
