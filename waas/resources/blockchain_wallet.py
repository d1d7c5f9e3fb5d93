"""Base for the per-blockchain views of a wallet."""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from ..errors import LinkParseError
from .base import Resource

if TYPE_CHECKING:
    from ..client import Waas
    from .wallet import Wallet

_LAST_SEGMENT_RE = re.compile(r"([^/]+)/?$")


def extract_request_id(response: dict[str, Any] | None) -> str:
    """Return the asynchronous request id from an async endpoint's response.

    Async endpoints answer with the ``statusUri`` of the request status
    resource; the id is its last path segment.
    """
    status_uri = (response or {}).get("statusUri")
    match = _LAST_SEGMENT_RE.search(status_uri) if isinstance(status_uri, str) else None
    if match is None:
        raise LinkParseError(
            "The API call for an asynchronous request has returned an unexpected format "
            f"(statusUri {status_uri!r})"
        )
    return match.group(1)


class BlockchainWallet(Resource):
    """Wallet actions on one blockchain, e.g. Ethereum or Bitcoin."""

    def __init__(self, waas: Waas, wallet_instance: Wallet) -> None:
        super().__init__(waas)
        self.wallet_instance = wallet_instance

    @property
    def wallet(self) -> str:
        return self.wallet_instance.wallet
