from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from aiohttp import ClientError, ClientTimeout
from web3 import AsyncHTTPProvider
from web3.types import RPCEndpoint

from .config import Settings
from .errors import ProviderRpcError
from .wallet import WalletBridge


logger = logging.getLogger(__name__)


class RpcWalletProvider:
    """Wallet provider reached over JSON-RPC instead of a browser injection.

    Desktop wallets (Frame, a local signer, a dev node with unlocked
    accounts) expose the same ``wallet_*``/``eth_*`` methods an injected
    provider does, so the bridge can drive them unchanged.
    """

    def __init__(self, endpoint_uri: str, timeout: float) -> None:
        self.endpoint_uri = endpoint_uri
        self._transport = AsyncHTTPProvider(
            endpoint_uri,
            request_kwargs={"timeout": ClientTimeout(total=timeout)},
            # A failed wallet call is reported once, never retried.
            exception_retry_configuration=None,
        )

    async def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        try:
            response = await self._transport.make_request(RPCEndpoint(method), params or [])
        except (ClientError, asyncio.TimeoutError) as exc:
            raise ProviderRpcError(None, f"Wallet endpoint unreachable: {exc}") from exc

        error = response.get("error")
        if error:
            if isinstance(error, dict):
                raise ProviderRpcError(error.get("code"), str(error.get("message", "")), error.get("data"))
            raise ProviderRpcError(None, str(error))
        return response.get("result")


def build_bridge(settings: Settings) -> Optional[WalletBridge]:
    """Bridge for the configured wallet, or ``None`` when no wallet is available."""
    if not settings.wallet_url:
        logger.debug("HANDYLINK_WALLET_URL not set; wallet features disabled")
        return None
    provider = RpcWalletProvider(settings.wallet_url, settings.wallet_timeout)
    return WalletBridge(provider, settings.network)
