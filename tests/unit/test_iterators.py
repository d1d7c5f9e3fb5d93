"""Unit tests for the item-wise and page-wise search iterators."""
from __future__ import annotations

from typing import Any, Callable
from unittest.mock import MagicMock, call

import pytest

from waas.errors import LinkNotFoundError
from waas.models import ResultPage, SearchRequest
from waas.pagination import ItemIterator, PageCursor, PageIterator, convert_page


def _identity(item: dict[str, Any]) -> dict[str, Any]:
    return item


def _items(transport: MagicMock, params: dict[str, Any] | None = None, convert=_identity) -> ItemIterator:
    return ItemIterator(PageCursor(transport, SearchRequest("eth/transactions", params)), convert)


def _pages(transport: MagicMock, convert=_identity) -> PageIterator:
    return PageIterator(PageCursor(transport, SearchRequest("eth/transactions")), convert_page(convert))


async def _collect(iterator: ItemIterator) -> list:
    return [item async for item in iterator]


class TestItemIterator:
    @pytest.mark.asyncio
    async def test_no_request_before_consumption(self, fake_transport: MagicMock) -> None:
        _items(fake_transport)
        fake_transport.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_hits_then_iterate_fetches_first_page_once(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        fake_transport.get.return_value = make_page([{"id": 1}, {"id": 2}], total=2)
        iterator = _items(fake_transport)

        assert await iterator.hits() == {"total": 2}
        assert await iterator.hits() == {"total": 2}
        assert await _collect(iterator) == [{"id": 1}, {"id": 2}]
        assert fake_transport.get.await_count == 1

    @pytest.mark.asyncio
    async def test_iterate_then_hits_fetches_first_page_once(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        fake_transport.get.return_value = make_page([{"id": 1}], total=1)
        iterator = _items(fake_transport)

        assert await _collect(iterator) == [{"id": 1}]
        assert await iterator.hits() == {"total": 1}
        assert fake_transport.get.await_count == 1

    @pytest.mark.asyncio
    async def test_single_page_terminates(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        fake_transport.get.return_value = make_page([{"id": i} for i in range(3)])
        iterator = _items(fake_transport)

        assert len(await _collect(iterator)) == 3
        with pytest.raises(StopAsyncIteration):
            await iterator.__anext__()
        assert fake_transport.get.await_count == 1

    @pytest.mark.asyncio
    async def test_multi_page_totals(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        k, n = 3, 4
        pages = []
        for p in range(k):
            next_link = f"eth/transactions?page={p + 2}" if p < k - 1 else None
            pages.append(make_page([{"page": p, "i": i} for i in range(n)], next=next_link))
        fake_transport.get.side_effect = pages

        items = await _collect(_items(fake_transport))

        assert len(items) == k * n
        assert items[0] == {"page": 0, "i": 0}
        assert items[-1] == {"page": k - 1, "i": n - 1}
        assert fake_transport.get.await_count == k

    @pytest.mark.asyncio
    async def test_transactions_scenario(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        fake_transport.get.side_effect = [
            make_page(["A", "B"], next="eth/transactions?page=2", total=4),
            make_page(["C", "D"], previous="eth/transactions?page=1", total=4),
        ]

        items = await _collect(_items(fake_transport, {"limit": 2}))

        assert items == ["A", "B", "C", "D"]
        assert fake_transport.get.await_args_list == [
            call("eth/transactions", params={"limit": 2}),
            call("eth/transactions?page=2"),
        ]

    @pytest.mark.asyncio
    async def test_next_page_fetched_only_when_current_exhausted(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        fake_transport.get.side_effect = [
            make_page(["A", "B"], next="p2"),
            make_page(["C"]),
        ]
        iterator = _items(fake_transport)

        assert await iterator.__anext__() == "A"
        assert await iterator.__anext__() == "B"
        assert fake_transport.get.await_count == 1
        assert await iterator.__anext__() == "C"
        assert fake_transport.get.await_count == 2

    @pytest.mark.asyncio
    async def test_skips_empty_intermediate_page(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        fake_transport.get.side_effect = [
            make_page([], next="p2"),
            make_page(["A"]),
        ]
        assert await _collect(_items(fake_transport)) == ["A"]

    @pytest.mark.asyncio
    async def test_conversion_error_aborts_at_item(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        fake_transport.get.return_value = make_page([{"ok": True}, {"ok": False}, {"ok": True}])

        def convert(item: dict[str, Any]) -> dict[str, Any]:
            if not item["ok"]:
                raise LinkNotFoundError("no link")
            return item

        iterator = _items(fake_transport, convert=convert)
        seen = []
        with pytest.raises(LinkNotFoundError):
            async for item in iterator:
                seen.append(item)

        assert seen == [{"ok": True}]
        assert fake_transport.get.await_count == 1
        with pytest.raises(StopAsyncIteration):
            await iterator.__anext__()

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, fake_transport: MagicMock) -> None:
        fake_transport.get.side_effect = ConnectionError("down")
        with pytest.raises(ConnectionError):
            await _collect(_items(fake_transport))


class TestPageIterator:
    @pytest.mark.asyncio
    async def test_next_converts_page(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        fake_transport.get.return_value = make_page([{"id": 1}, {"id": 2}], total=10)
        iterator = _pages(fake_transport, convert=lambda item: item["id"])

        result = await iterator.next()

        assert result.done is False
        assert result.value == ResultPage(hits={"total": 10}, items=(1, 2))

    @pytest.mark.asyncio
    async def test_done_without_request_when_no_link(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        fake_transport.get.return_value = make_page([{"id": 1}])
        iterator = _pages(fake_transport)

        await iterator.next()
        result = await iterator.next()

        assert result.done is True
        assert result.value is None
        assert fake_transport.get.await_count == 1

    @pytest.mark.asyncio
    async def test_previous_after_done(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        fake_transport.get.side_effect = [
            make_page([{"id": 3}], previous="eth/transactions?page=1"),
            make_page([{"id": 1}], next="eth/transactions?page=2"),
        ]
        iterator = _pages(fake_transport)

        assert (await iterator.next()).done is False
        assert (await iterator.next()).done is True

        result = await iterator.previous()

        assert result.done is False
        assert result.value is not None
        assert result.value.items == ({"id": 1},)
        assert fake_transport.get.await_args_list[-1] == call("eth/transactions?page=1")

    @pytest.mark.asyncio
    async def test_previous_on_first_page_is_done(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        fake_transport.get.return_value = make_page([{"id": 1}], next="p2")
        iterator = _pages(fake_transport)

        await iterator.next()
        result = await iterator.previous()

        assert result.done is True
        assert fake_transport.get.await_count == 1

    @pytest.mark.asyncio
    async def test_async_for_walks_forward(
        self, fake_transport: MagicMock, make_page: Callable[..., dict]
    ) -> None:
        fake_transport.get.side_effect = [
            make_page([{"id": 1}], next="p2"),
            make_page([{"id": 2}], next="p3", previous="p1"),
            make_page([{"id": 3}], previous="p2"),
        ]

        pages = [page async for page in _pages(fake_transport)]

        assert [page.items for page in pages] == [({"id": 1},), ({"id": 2},), ({"id": 3},)]
        assert fake_transport.get.await_count == 3
