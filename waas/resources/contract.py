"""Universal Ethereum smart contract calls and event searches."""
from __future__ import annotations

import json
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Any, Iterable

from ..pagination import ItemIterator, PageIterator, list_items, list_pages
from .base import Resource, require_str
from .eth_transaction import EthTransactionEvent, convert_to_eth_event

if TYPE_CHECKING:
    from ..client import Waas


@dataclass(frozen=True)
class EventArgumentFilter:
    """Filter contract events by one of their arguments.

    ``position`` is either the positional number or the name of the argument,
    ``type`` its Solidity type (the API defaults to ``address``).
    """

    position: int | str | None = None
    type: str | None = None
    value: Any = None


class EventArgumentFilterCollection:
    def __init__(self, filters: Iterable[EventArgumentFilter]) -> None:
        self.filters = tuple(filters)

    def to_query_string(self) -> str:
        """Assemble the ``inputs[...]`` URL query string understood by the API."""
        query = ""
        for f in self.filters:
            if f.position is None and not f.type and f.value is None:
                raise ValueError("An argument filter object must define at least one criterion")

            part = "?inputs" if query == "" else "&inputs"
            part += f"[{_json(f.position) if f.position is not None else ''}]"
            if f.type:
                part += f".{f.type}"
            if f.value is not None:
                part += f"={_json(f.value)}"
            query += part
        return query


def _json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


async def call_contract_function(
    waas: Waas,
    base_url: str,
    function: str | dict[str, Any],
    types: list[str] | None = None,
) -> list[dict[str, Any]]:
    """Execute a read-only contract function.

    ``function`` is either a function name (optionally with the expected
    output ``types``) or a full call configuration with ``function``,
    ``inputs`` and ``outputs``.
    """
    if isinstance(function, dict):
        if types:
            raise ValueError(
                "Using the second parameter is not allowed if an object is passed as first argument"
            )
        response = await waas.post(f"{base_url}/call", dict(function))
    elif isinstance(function, str):
        params = {"type": list(types)} if types else None
        response = await waas.get(f"{base_url}/call/{function}", params=params)
    else:
        raise TypeError("Passed arguments do not match any method signature")
    return list((response or {}).get("list", []))


class EthereumContract(Resource):
    """Methods on an arbitrary Ethereum smart contract."""

    def __init__(self, waas: Waas, address: str) -> None:
        super().__init__(waas)
        self.address = require_str(address, "address")
        self._base_url = f"eth/contract/{address}"

    def _events_url(self, argument_filters: Iterable[EventArgumentFilter] | None) -> str:
        url = f"{self._base_url}/events"
        if argument_filters:
            url += EventArgumentFilterCollection(argument_filters).to_query_string()
        return url

    def get_event_pages(
        self,
        params: dict[str, Any] | None = None,
        argument_filters: Iterable[EventArgumentFilter] | None = None,
    ) -> PageIterator[EthTransactionEvent]:
        """Iterate the contract's events page by page."""
        return list_pages(
            self.waas,
            self._events_url(argument_filters),
            params,
            partial(convert_to_eth_event, waas=self.waas),
        )

    def get_events(
        self,
        params: dict[str, Any] | None = None,
        argument_filters: Iterable[EventArgumentFilter] | None = None,
    ) -> ItemIterator[EthTransactionEvent]:
        """Iterate the contract's events one by one."""
        return list_items(
            self.waas,
            self._events_url(argument_filters),
            params,
            partial(convert_to_eth_event, waas=self.waas),
        )

    async def call(
        self, function: str | dict[str, Any], types: list[str] | None = None
    ) -> list[dict[str, Any]]:
        return await call_contract_function(self.waas, self._base_url, function, types)
