"""Ethereum transaction monitors."""
from __future__ import annotations

import re
from functools import partial
from typing import TYPE_CHECKING, Any

from ..pagination import ItemIterator, PageIterator, find_get_link, list_items, list_pages, match_link
from .base import Resource, optional_str, require_str

if TYPE_CHECKING:
    from ..client import Waas

_MONITOR_LINK_RE = re.compile(r"/eth/wallet/([^/?#]+)/monitor/([^/?#]+)")


class Monitor(Resource):
    """Handle for the monitors of one wallet, or for a single monitor of it."""

    def __init__(
        self, waas: Waas, monitor_id: str | None = None, wallet: str | None = None
    ) -> None:
        super().__init__(waas)
        self._monitor_id = optional_str(monitor_id, "monitor_id")
        self._wallet = optional_str(wallet, "wallet")

    @property
    def monitor_id(self) -> str:
        """The monitor id; raises if the handle was created without one."""
        return require_str(self._monitor_id, "monitor_id")

    @property
    def wallet(self) -> str:
        """The wallet name; raises if the handle was created without one."""
        return require_str(self._wallet, "wallet")

    @property
    def _single_resource_url(self) -> str:
        return f"eth/wallet/{self.wallet}/monitor/{self.monitor_id}"

    @property
    def _resource_list_url(self) -> str:
        return f"eth/wallet/{self.wallet}/monitors"

    def list_pages(self, params: dict[str, Any] | None = None) -> PageIterator[Monitor]:
        """Iterate the monitors of the current wallet page by page."""
        return list_pages(
            self.waas,
            self._resource_list_url,
            params,
            partial(convert_to_monitor, waas=self.waas, wallet=self.wallet),
        )

    def list_items(self, params: dict[str, Any] | None = None) -> ItemIterator[Monitor]:
        """Iterate the monitors of the current wallet one by one."""
        return list_items(
            self.waas,
            self._resource_list_url,
            params,
            partial(convert_to_monitor, waas=self.waas, wallet=self.wallet),
        )

    async def create(self, monitor: dict[str, Any]) -> dict[str, Any]:
        return await self.waas.post(self._resource_list_url, monitor)

    async def get(self) -> dict[str, Any]:
        return await self.waas.get(self._single_resource_url)

    async def update(self, new_values: dict[str, Any]) -> dict[str, Any]:
        """Partially update the monitor.

        Non-primitive values such as lists replace the previous value and
        therefore need to contain everything that should be kept.
        """
        if not new_values:
            raise ValueError("At least one property must be updated")
        if "target" in new_values:
            raise ValueError("The monitor 'target' cannot be updated")
        return await self.waas.patch(self._single_resource_url, new_values)

    async def replace(self, monitor: dict[str, Any]) -> dict[str, Any]:
        return await self.waas.put(self._single_resource_url, monitor)

    async def delete(self) -> dict[str, Any]:
        return await self.waas.delete(self._single_resource_url)

    def __repr__(self) -> str:
        return f"Monitor(monitor_id={self._monitor_id!r}, wallet={self._wallet!r})"


class EthMonitorSearch(Resource):
    """Cross-wallet search over all Ethereum monitors."""

    _url = "eth/monitors"

    def list_pages(self, params: dict[str, Any] | None = None) -> PageIterator[Monitor]:
        return list_pages(self.waas, self._url, params, partial(convert_to_monitor, waas=self.waas))

    def list_items(self, params: dict[str, Any] | None = None) -> ItemIterator[Monitor]:
        return list_items(self.waas, self._url, params, partial(convert_to_monitor, waas=self.waas))


def convert_to_monitor(
    item: dict[str, Any], waas: Waas, wallet: str | None = None
) -> Monitor:
    """Convert a monitor search item into a :class:`Monitor`.

    The wallet name is not part of the item; unless ``wallet`` is given it is
    read from the monitor's GET link. A given ``wallet`` is assigned to every
    converted monitor. An item without a ``monitor`` field takes the id from
    the link as well.
    """
    monitor_id = item.get("monitor")
    if wallet is None or not monitor_id:
        link = find_get_link(item.get("links", ()), "monitor")
        match = match_link(link, _MONITOR_LINK_RE, f"monitor '{monitor_id}'")
        if wallet is None:
            wallet = match.group(1)
        if not monitor_id:
            monitor_id = match.group(2)
    return Monitor(waas, monitor_id, wallet)
