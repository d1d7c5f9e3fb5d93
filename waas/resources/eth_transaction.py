"""Ethereum transaction and event handles, plus their search item converters."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from ..errors import LinkParseError
from ..pagination import find_get_link, match_link
from .base import Resource, require_str

if TYPE_CHECKING:
    from ..client import Waas

_TRANSACTION_LINK_RE = re.compile(r"/eth/transaction/([^/?#]+)/?(?:[?#].*)?$")
_EVENT_LINK_RE = re.compile(r"/eth/transaction/([^/?#]+)/event/([^/?#]+)")


class EthTransaction(Resource):
    """Handle for a single Ethereum transaction, addressed by its hash."""

    def __init__(self, waas: Waas, tx_hash: str) -> None:
        super().__init__(waas)
        self._hash = require_str(tx_hash, "hash")

    @property
    def hash(self) -> str:
        return self._hash

    async def get(self) -> dict[str, Any]:
        """Request details for the transaction."""
        return await self.waas.get(f"eth/transaction/{self.hash}")

    def __repr__(self) -> str:
        return f"EthTransaction(hash={self.hash!r})"


class EthTransactionAsync(EthTransaction):
    """Transaction produced by an asynchronous send request.

    The details delivered with the request output are available without a
    further fetch.
    """

    def __init__(self, waas: Waas, details: dict[str, Any]) -> None:
        super().__init__(waas, details.get("hash"))
        self._details = dict(details)

    @property
    def block_nr(self) -> int | None:
        return self._details.get("blockNr")

    @property
    def data(self) -> str | None:
        return self._details.get("data")

    @property
    def status(self) -> str | None:
        return self._details.get("status")

    @property
    def nonce(self) -> int | None:
        return self._details.get("nonce")


class EthTransactionEvent(Resource):
    """Handle for one event log entry of an Ethereum transaction."""

    def __init__(self, waas: Waas, tx_hash: str, index: int, name: str | None = None) -> None:
        super().__init__(waas)
        self._hash = require_str(tx_hash, "hash")
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError("'index' must be an integer")
        self._index = index
        self._name = name

    @property
    def hash(self) -> str:
        return self._hash

    @property
    def index(self) -> int:
        return self._index

    @property
    def name(self) -> str | None:
        return self._name

    async def get(self) -> dict[str, Any]:
        """Request details for the event."""
        return await self.waas.get(f"eth/transaction/{self.hash}/event/{self.index}")

    def __repr__(self) -> str:
        return f"EthTransactionEvent(hash={self.hash!r}, index={self.index}, name={self.name!r})"


# ---------------------------------------------------------------------------
# Search item converters
# ---------------------------------------------------------------------------


def convert_to_eth_transaction(item: dict[str, Any], waas: Waas) -> EthTransaction:
    """Convert a transaction search item into an :class:`EthTransaction`."""
    link = find_get_link(item.get("links", ()), "transaction")
    match = match_link(link, _TRANSACTION_LINK_RE, "transaction")
    return EthTransaction(waas, match.group(1))


def convert_to_eth_event(item: dict[str, Any], waas: Waas) -> EthTransactionEvent:
    """Convert an event search item into an :class:`EthTransactionEvent`."""
    link = find_get_link(item.get("links", ()), "event")
    match = match_link(link, _EVENT_LINK_RE, "transaction event")
    try:
        index = int(match.group(2))
    except ValueError:
        raise LinkParseError(
            f"Event log index '{match.group(2)}' in link '{link}' is not a number"
        ) from None
    return EthTransactionEvent(waas, match.group(1), index, item.get("event"))
