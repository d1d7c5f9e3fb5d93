"""Ethereum network calls not bound to a wallet."""
from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any

from ..pagination import ItemIterator, PageIterator, list_items, list_pages
from ..polling import wait_for_tx_status
from .base import Resource, optional_str, require_str
from .contract import EthereumContract
from .eth_transaction import EthTransaction, convert_to_eth_transaction
from .monitor import EthMonitorSearch

if TYPE_CHECKING:
    from ..client import Waas

_NULL_TX_HASH = "0x" + "0" * 64


class Ethereum(Resource):
    """Ethereum calls, optionally bound to one transaction hash."""

    def __init__(self, waas: Waas, tx_hash: str | None = None) -> None:
        super().__init__(waas)
        self._tx_hash = optional_str(tx_hash, "tx_hash")

    @property
    def tx_hash(self) -> str:
        return require_str(self._tx_hash, "tx_hash")

    async def fetch_affinity_cookie(self) -> None:
        """Establish a sticky session with an Ethereum full node."""
        await self.waas.head(f"eth/transaction/{_NULL_TX_HASH}")

    async def get(self) -> dict[str, Any]:
        """Status of the transaction; it is not mined until a ``blockNr`` is assigned."""
        return await EthTransaction(self.waas, self.tx_hash).get()

    def list_transaction_pages(
        self, params: dict[str, Any] | None = None
    ) -> PageIterator[EthTransaction]:
        """Iterate transactions matching ``params`` page by page."""
        return list_pages(
            self.waas,
            "eth/transactions",
            params,
            partial(convert_to_eth_transaction, waas=self.waas),
        )

    def list_transactions(self, params: dict[str, Any] | None = None) -> ItemIterator[EthTransaction]:
        """Iterate transactions matching ``params`` one by one.

        A page is fetched only once all items of the previous one were
        consumed.
        """
        return list_items(
            self.waas,
            "eth/transactions",
            params,
            partial(convert_to_eth_transaction, waas=self.waas),
        )

    async def get_event(self, index: int) -> dict[str, Any]:
        """Details of the event with log ``index`` in the current transaction."""
        return await self.waas.get(f"eth/transaction/{self.tx_hash}/event/{index}")

    async def wait(
        self, timeout: float | None = None, interval: float | None = None
    ) -> dict[str, Any]:
        """Resolve once the transaction is mined.

        Polls the API frequently and may result in excessive quota usage.
        """
        polling = self.waas.config.polling
        return await wait_for_tx_status(
            self.get,
            self.tx_hash,
            polling.timeout if timeout is None else timeout,
            polling.interval if interval is None else interval,
        )

    async def get_status(self) -> dict[str, Any]:
        """Status of the Ethereum full node."""
        return await self.waas.get("eth/status")

    def contract(self, address: str) -> EthereumContract:
        return EthereumContract(self.waas, address)

    def monitor(self) -> EthMonitorSearch:
        """Monitors across all wallets."""
        return EthMonitorSearch(self.waas)
