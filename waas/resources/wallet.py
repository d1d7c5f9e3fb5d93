"""Wallet management."""
from __future__ import annotations

import re
from functools import partial
from typing import TYPE_CHECKING, Any

from ..errors import ConflictError
from ..pagination import ItemIterator, PageIterator, find_get_link, list_items, list_pages, match_link
from .base import Resource, optional_str, require_str
from .btc_wallet import BtcWallet
from .eth_wallet import EthWallet

if TYPE_CHECKING:
    from ..client import Waas

_WALLET_LINK_RE = re.compile(r"/wallet/([^/?#]+)/?(?:[?#].*)?$")


class Wallet(Resource):
    """Handle for the wallets of the subscription, or for one named wallet."""

    def __init__(self, waas: Waas, name: str | None = None) -> None:
        super().__init__(waas)
        self.name = optional_str(name, "name")

    @property
    def wallet(self) -> str:
        """The wallet name; raises if the handle was created without one."""
        return require_str(self.name, "wallet")

    def list_pages(self, params: dict[str, Any] | None = None) -> PageIterator[Wallet]:
        """Iterate all wallets page by page."""
        return list_pages(self.waas, "wallets", params, partial(convert_to_wallet, waas=self.waas))

    def list_items(self, params: dict[str, Any] | None = None) -> ItemIterator[Wallet]:
        """Iterate all wallets one by one."""
        return list_items(self.waas, "wallets", params, partial(convert_to_wallet, waas=self.waas))

    async def create(self, wallet: str | None = None, use_hsm: bool | None = None) -> dict[str, Any]:
        """Create a new wallet.

        Args:
            wallet: Wallet name, e.g. a user identifier. Generated by the API if omitted.
            use_hsm: Keep the private key in a hardware security module.

        Raises:
            ConflictError: A wallet with this name already exists.
        """
        optional_str(wallet, "wallet")
        if use_hsm is not None and not isinstance(use_hsm, bool):
            raise TypeError("'use_hsm' must be a boolean")
        body = {k: v for k, v in (("wallet", wallet), ("useHsm", use_hsm)) if v is not None}
        try:
            return await self.waas.post("wallet", body)
        except ConflictError as exc:
            raise ConflictError("Cannot overwrite existing wallet", exc.activity_id) from exc

    async def get(self) -> dict[str, Any]:
        return await self.waas.get(f"wallet/{self.wallet}")

    async def delete(self) -> dict[str, Any]:
        """Soft-delete the wallet; writing operations are refused afterwards."""
        return await self.waas.delete(f"wallet/{self.wallet}")

    def eth(self) -> EthWallet:
        return EthWallet(self.waas, self)

    def btc(self) -> BtcWallet:
        return BtcWallet(self.waas, self)

    def __repr__(self) -> str:
        return f"Wallet(name={self.name!r})"


def convert_to_wallet(item: dict[str, Any], waas: Waas) -> Wallet:
    """Convert a wallet search item into a :class:`Wallet`."""
    link = find_get_link(item.get("links", ()), "wallet")
    match = match_link(link, _WALLET_LINK_RE, f"wallet '{item.get('wallet')}'")
    return Wallet(waas, match.group(1))
