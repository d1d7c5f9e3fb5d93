"""Entry point of the client: shared transport, request wrapper and resource factories."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from .async_request import AsyncRequest
from .config import ClientConfig
from .interfaces import Transport
from .polling import wait_for_tx_status
from .resources.btc import Bitcoin
from .resources.eth import Ethereum
from .resources.wallet import Wallet
from .transport import AiohttpTransport

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Waas:
    """Client for the WaaS REST API.

    Every API call goes through :meth:`wrap`, which bounds the number of calls
    in flight when the limiter is enabled.
    """

    def __init__(self, config: ClientConfig, transport: Transport | None = None) -> None:
        self.config = config
        self.transport: Transport = transport or AiohttpTransport(config)
        self._semaphore: asyncio.Semaphore | None = None
        if config.limiter.enabled:
            self._semaphore = asyncio.Semaphore(config.limiter.max_concurrent)
            logger.debug("Request limiter enabled (max %d concurrent calls)", config.limiter.max_concurrent)

    async def wrap(self, fn: Callable[[], Awaitable[T]]) -> T:
        if self._semaphore is None:
            return await fn()
        async with self._semaphore:
            return await fn()

    # -----------------------------------------------------------------------
    # Wrapped transport calls
    # -----------------------------------------------------------------------

    async def get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        if params:
            return await self.wrap(lambda: self.transport.get(url, params=params))
        return await self.wrap(lambda: self.transport.get(url))

    async def post(self, url: str, json: Any = None) -> Any:
        return await self.wrap(lambda: self.transport.post(url, json=json))

    async def patch(self, url: str, json: Any = None) -> Any:
        return await self.wrap(lambda: self.transport.patch(url, json=json))

    async def put(self, url: str, json: Any = None) -> Any:
        return await self.wrap(lambda: self.transport.put(url, json=json))

    async def delete(self, url: str) -> Any:
        return await self.wrap(lambda: self.transport.delete(url))

    async def head(self, url: str) -> None:
        await self.wrap(lambda: self.transport.head(url))

    # -----------------------------------------------------------------------
    # Resources
    # -----------------------------------------------------------------------

    def wallet(self, name: str | None = None) -> Wallet:
        return Wallet(self, name)

    def eth(self, tx_hash: str | None = None) -> Ethereum:
        return Ethereum(self, tx_hash)

    def btc(self, tx_hash: str | None = None) -> Bitcoin:
        return Bitcoin(self, tx_hash)

    def request(self, request_id: str) -> AsyncRequest[Any]:
        """Handle for the asynchronous request ``request_id``."""
        return AsyncRequest(self, request_id)

    @staticmethod
    async def wait_for_tx_status(
        get_status: Callable[[], Awaitable[dict[str, Any]]],
        tx_hash: str | None = None,
        timeout: float = 20.0,
        interval: float = 0.4,
    ) -> dict[str, Any]:
        """Poll ``get_status`` until the transaction is confirmed.

        Raises:
            MiningError: The transaction failed.
            PollingTimeoutError: Still pending after ``timeout`` seconds.
        """
        return await wait_for_tx_status(get_status, tx_hash, timeout, interval)
