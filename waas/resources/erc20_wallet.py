"""ERC20 token calls on behalf of a wallet."""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from .base import optional_str, require_str
from .blockchain_wallet import BlockchainWallet
from .eth_transaction import EthTransaction

if TYPE_CHECKING:
    from ..client import Waas
    from .wallet import Wallet


class Erc20Method(str, Enum):
    TRANSFER = "transfer"
    APPROVE = "approve"
    TRANSFER_FROM = "transferFrom"
    BURN = "burn"
    MINT = "mint"


def _body(**fields: Any) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if v is not None}


def erc20_recipient_data(method: Erc20Method, recipient: dict[str, Any]) -> dict[str, Any]:
    """Validate ``recipient`` for ``method`` and return the request body.

    Unlike the plain Ether endpoints, ``amount`` is always required here.
    Fields left unset are omitted from the body.
    """
    to = recipient.get("to")
    wallet = recipient.get("wallet")
    amount = recipient.get("amount")
    sender = recipient.get("from")

    if method is Erc20Method.MINT:
        if not amount:
            raise ValueError("Missing 'amount' argument")
        if sender:
            raise ValueError("Invalid 'from' argument")
        return _body(
            to=optional_str(to, "to"),
            wallet=optional_str(wallet, "wallet"),
            amount=require_str(amount, "amount"),
        )

    if method is Erc20Method.BURN:
        if not amount:
            raise ValueError("Missing 'amount' argument")
        if to:
            raise ValueError("Invalid 'to' argument")
        if sender:
            raise ValueError("Invalid 'from' argument")
        return {"amount": require_str(amount, "amount")}

    if method is Erc20Method.TRANSFER_FROM:
        if not (sender or wallet):
            raise ValueError("At least one of the properties 'from' or 'wallet' must be set")
        if to:
            raise ValueError("Invalid 'to' argument")
        if not amount:
            raise ValueError("Missing 'amount' argument")
        optional_str(wallet, "wallet")
        return _body(**{"from": optional_str(sender, "from"), "amount": require_str(amount, "amount")})

    # transfer and approve
    if not (to or wallet):
        raise ValueError("At least one of the properties 'to' or 'wallet' must be set")
    if sender:
        raise ValueError("Invalid 'from' argument")
    if not amount:
        raise ValueError("Missing 'amount' argument")
    return _body(
        to=optional_str(to, "to"),
        wallet=optional_str(wallet, "wallet"),
        amount=require_str(amount, "amount"),
    )


class EthErc20Wallet(BlockchainWallet):
    """ERC20 token calls of a wallet for one token contract."""

    def __init__(self, waas: Waas, wallet_instance: Wallet, address: str) -> None:
        super().__init__(waas, wallet_instance)
        self.address = require_str(address, "address")

    @property
    def _base_url(self) -> str:
        return f"eth/erc20/{self.address}/{self.wallet}"

    async def get(self) -> dict[str, Any]:
        """Token balance of the wallet."""
        return await self.waas.get(self._base_url)

    async def _post(self, action: str, method: Erc20Method, recipient: dict[str, Any]) -> EthTransaction:
        body = erc20_recipient_data(method, recipient)
        response = await self.waas.post(f"{self._base_url}/{action}", body)
        return EthTransaction(self.waas, (response or {}).get("hash"))

    async def send(self, recipient: dict[str, Any]) -> EthTransaction:
        """Send tokens to an address (``to``) or another wallet (``wallet``)."""
        return await self._post("send", Erc20Method.TRANSFER, recipient)

    async def approve(self, recipient: dict[str, Any]) -> EthTransaction:
        """Allow ``to`` to withdraw up to ``amount`` tokens via :meth:`transfer_from`."""
        return await self._post("approve", Erc20Method.APPROVE, recipient)

    async def transfer_from(self, recipient: dict[str, Any]) -> EthTransaction:
        """Withdraw a previously approved amount of tokens from ``from``."""
        return await self._post("transfer-from", Erc20Method.TRANSFER_FROM, recipient)

    async def burn(self, recipient: dict[str, Any]) -> EthTransaction:
        return await self._post("burn", Erc20Method.BURN, recipient)

    async def mint(self, recipient: dict[str, Any]) -> EthTransaction:
        """Mint tokens to ``to``, or to the wallet address if omitted."""
        return await self._post("mint", Erc20Method.MINT, recipient)
