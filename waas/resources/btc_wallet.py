"""Bitcoin wallet calls."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence, Union

from ..async_request import BtcTransactionRequest
from .blockchain_wallet import BlockchainWallet, extract_request_id
from .base import require_str

if TYPE_CHECKING:
    from ..client import Waas
    from .wallet import Wallet

Recipient = dict[str, Any]
Recipients = Union[Recipient, Sequence[Recipient]]


def _check_recipient(recipient: Recipient) -> Recipient:
    if not recipient.get("to"):
        raise ValueError("Missing 'to' argument")
    if not recipient.get("amount"):
        raise ValueError("Missing 'amount' argument")
    require_str(recipient["to"], "to")
    require_str(recipient["amount"], "amount")
    return recipient


def recipients_data(recipients: Recipients) -> dict[str, Any]:
    """Convert one recipient or a list of them into the request body."""
    if isinstance(recipients, dict):
        return dict(_check_recipient(recipients))
    return {"list": [_check_recipient(r) for r in recipients]}


class BtcWallet(BlockchainWallet):
    """Wallet calls on the Bitcoin blockchain."""

    def __init__(self, waas: Waas, wallet_instance: Wallet) -> None:
        super().__init__(waas, wallet_instance)

    @property
    def _base_url(self) -> str:
        return f"btc/wallet/{self.wallet}"

    async def get(self) -> dict[str, Any]:
        """BTC balance and address of the wallet."""
        return await self.waas.get(self._base_url)

    async def send(self, recipients: Recipients) -> dict[str, Any]:
        """Send BTC from the wallet to one or more recipients."""
        return await self.waas.post(f"{self._base_url}/send", recipients_data(recipients))

    async def send_async(self, recipients: Recipients) -> BtcTransactionRequest:
        """Send BTC asynchronously; returns a handle for the server-side request."""
        response = await self.waas.post(
            f"{self._base_url}/send-async", recipients_data(recipients)
        )
        return BtcTransactionRequest(self.waas, extract_request_id(response))

    async def sweep_async(self, to: str) -> BtcTransactionRequest:
        """Transfer the entire wallet balance to ``to`` asynchronously."""
        require_str(to, "to")
        response = await self.waas.post(f"{self._base_url}/sweep-async", {"to": to})
        return BtcTransactionRequest(self.waas, extract_request_id(response))

    async def sign(self, recipients: Recipients) -> dict[str, Any]:
        """Create a signed transaction that can be transmitted later."""
        return await self.waas.post(f"{self._base_url}/sign", recipients_data(recipients))

    async def estimate_fee(self, recipients: Recipients) -> dict[str, Any]:
        return await self.waas.post(
            f"{self._base_url}/estimate-fee", recipients_data(recipients)
        )

    def __repr__(self) -> str:
        return f"BtcWallet(wallet={self.wallet_instance.name!r})"
