"""Smart contract calls on behalf of a wallet."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..async_request import EthTransactionRequest
from .base import require_str
from .blockchain_wallet import BlockchainWallet, extract_request_id
from .contract import call_contract_function

if TYPE_CHECKING:
    from ..client import Waas
    from .wallet import Wallet


class EthContractWallet(BlockchainWallet):
    def __init__(self, waas: Waas, wallet_instance: Wallet, address: str) -> None:
        super().__init__(waas, wallet_instance)
        self.address = require_str(address, "address")

    @property
    def _base_url(self) -> str:
        return f"eth/contract/{self.address}/{self.wallet}"

    async def send_async(self, config: dict[str, Any]) -> EthTransactionRequest:
        """Execute a contract function in a transaction, asynchronously."""
        response = await self.waas.post(f"{self._base_url}/send-async", dict(config))
        return EthTransactionRequest(self.waas, extract_request_id(response))

    async def estimate_fee(self, config: dict[str, Any]) -> dict[str, Any]:
        """Estimate the fee of a contract execution.

        The estimation follows the current network utilization and may differ
        from the fee eventually paid.
        """
        return await self.waas.post(f"{self._base_url}/estimate-fee", dict(config))

    async def call(
        self, function: str | dict[str, Any], types: list[str] | None = None
    ) -> list[dict[str, Any]]:
        """Execute a read-only contract function with ``msg.sender`` set to the wallet.

        With a function name, a single address argument is filled with the
        wallet address. Functions taking several arguments need a full call
        configuration.
        """
        return await call_contract_function(self.waas, self._base_url, function, types)
