"""Ethereum wallet calls."""
from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any

from ..async_request import EthTransactionRequest
from ..pagination import ItemIterator, PageIterator, list_items, list_pages
from .base import optional_str, require_str
from .blockchain_wallet import BlockchainWallet, extract_request_id
from .contract_wallet import EthContractWallet
from .erc20_wallet import EthErc20Wallet
from .eth_transaction import EthTransaction, convert_to_eth_transaction
from .monitor import Monitor

if TYPE_CHECKING:
    from ..client import Waas
    from .wallet import Wallet

_OPTIONAL_RECIPIENT_FIELDS = ("wallet", "data")


def validate_eth_recipient(recipient: dict[str, Any]) -> None:
    if not recipient.get("to"):
        raise ValueError("Missing 'to' argument")
    if not recipient.get("amount"):
        raise ValueError("Missing 'amount' argument")
    require_str(recipient["to"], "to")
    require_str(recipient["amount"], "amount")
    for name in _OPTIONAL_RECIPIENT_FIELDS:
        optional_str(recipient.get(name), name)


class EthWallet(BlockchainWallet):
    """Wallet calls on the Ethereum blockchain."""

    def __init__(self, waas: Waas, wallet_instance: Wallet) -> None:
        super().__init__(waas, wallet_instance)

    @property
    def _base_url(self) -> str:
        return f"eth/wallet/{self.wallet}"

    async def get(self) -> dict[str, Any]:
        """Ether balance and address of the wallet."""
        return await self.waas.get(self._base_url)

    async def send(self, recipient: dict[str, Any]) -> dict[str, Any]:
        validate_eth_recipient(recipient)
        return await self.waas.post(f"{self._base_url}/send", dict(recipient))

    async def send_async(self, recipient: dict[str, Any]) -> EthTransactionRequest:
        """Send Ether asynchronously; returns a handle for the server-side request."""
        validate_eth_recipient(recipient)
        response = await self.waas.post(f"{self._base_url}/send-async", dict(recipient))
        return EthTransactionRequest(self.waas, extract_request_id(response))

    async def sign(self, recipient: dict[str, Any]) -> dict[str, Any]:
        """Create a signed RLP encoded transaction that can be transmitted later."""
        validate_eth_recipient(recipient)
        return await self.waas.post(f"{self._base_url}/sign", dict(recipient))

    def list_transaction_pages(
        self, params: dict[str, Any] | None = None
    ) -> PageIterator[EthTransaction]:
        """Iterate the wallet's transactions page by page."""
        return list_pages(
            self.waas,
            f"{self._base_url}/transactions",
            params,
            partial(convert_to_eth_transaction, waas=self.waas),
        )

    def list_transactions(self, params: dict[str, Any] | None = None) -> ItemIterator[EthTransaction]:
        """Iterate the wallet's transactions one by one."""
        return list_items(
            self.waas,
            f"{self._base_url}/transactions",
            params,
            partial(convert_to_eth_transaction, waas=self.waas),
        )

    def erc20(self, token_address: str) -> EthErc20Wallet:
        return EthErc20Wallet(self.waas, self.wallet_instance, token_address)

    def contract(self, address: str) -> EthContractWallet:
        return EthContractWallet(self.waas, self.wallet_instance, address)

    def monitor(self, monitor_id: str | None = None) -> Monitor:
        """Monitors of this wallet, or a single one if ``monitor_id`` is given."""
        return Monitor(self.waas, monitor_id, self.wallet)
