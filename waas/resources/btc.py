"""Bitcoin transaction and node handles."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..polling import wait_for_tx_status
from .base import Resource, optional_str, require_str

if TYPE_CHECKING:
    from ..client import Waas

_NULL_TX_HASH = "0" * 64


class Bitcoin(Resource):
    """Bitcoin calls, optionally bound to one transaction hash."""

    def __init__(self, waas: Waas, tx_hash: str | None = None) -> None:
        super().__init__(waas)
        self._tx_hash = optional_str(tx_hash, "tx_hash")

    @property
    def tx_hash(self) -> str:
        return require_str(self._tx_hash, "tx_hash")

    async def get(self) -> dict[str, Any]:
        """Return the status of the transaction."""
        return await self.waas.get(f"btc/transaction/{self.tx_hash}")

    async def fetch_affinity_cookie(self) -> None:
        """Establish a sticky session with a Bitcoin full node."""
        await self.waas.head(f"btc/transaction/{_NULL_TX_HASH}")

    async def wait(
        self, timeout: float | None = None, interval: float | None = None
    ) -> dict[str, Any]:
        """Resolve once the transaction is confirmed.

        Polls the API repeatedly and may use up a lot of request quota.
        """
        polling = self.waas.config.polling
        return await wait_for_tx_status(
            self.get,
            self.tx_hash,
            polling.timeout if timeout is None else timeout,
            polling.btc_interval if interval is None else interval,
        )

    async def get_status(self) -> dict[str, Any]:
        """Status and information about the Bitcoin full node."""
        return await self.waas.get("btc/status")


class BtcTransactionAsync(Bitcoin):
    """Bitcoin transaction produced by an asynchronous send or sweep request."""

    def __init__(self, waas: Waas, details: dict[str, Any]) -> None:
        super().__init__(waas, require_str(details.get("hash"), "hash"))
        self._details = dict(details)

    @property
    def hash(self) -> str:
        return self.tx_hash

    @property
    def block_nr(self) -> int | None:
        return self._details.get("blockNr")

    @property
    def status(self) -> str | None:
        return self._details.get("status")

    def __repr__(self) -> str:
        return f"BtcTransactionAsync(hash={self.hash!r}, status={self.status!r})"
