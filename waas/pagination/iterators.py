"""Async iterators over paginated search results."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Generic, TypeVar

from ..models import IteratorResult, ResultPage, SearchPage
from .conversion import ItemConverter, PageConverter
from .cursor import PageCursor

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ItemIterator(Generic[T]):
    """Yields one converted item per step and hides the API-side pagination.

    Each page is fetched once: all items of the current page are yielded
    before the next page is requested. The first page is fetched lazily and
    shared with :meth:`hits`, so whichever is used first performs the only
    request for it. The iterator is single-pass; start over with a new one.
    """

    def __init__(self, cursor: PageCursor, convert_item: ItemConverter[T]) -> None:
        self._cursor = cursor
        self._convert_item = convert_item
        self._first_page: SearchPage | None = None
        self._first_page_lock = asyncio.Lock()
        self._page: SearchPage | None = None
        self._index = 0
        self._exhausted = False

    async def hits(self) -> dict[str, Any]:
        """Statistics on how many resources matched, read from the first page."""
        page = await self._get_first_page()
        return page.hits

    async def _get_first_page(self) -> SearchPage:
        async with self._first_page_lock:
            if self._first_page is None:
                page = await self._cursor.fetch_next()
                self._first_page = page if page is not None else SearchPage(hits={}, items=())
            return self._first_page

    def __aiter__(self) -> ItemIterator[T]:
        return self

    async def __anext__(self) -> T:
        if self._exhausted:
            raise StopAsyncIteration

        if self._page is None:
            self._page = await self._get_first_page()

        while self._index >= len(self._page.items):
            if not self._page.next:
                self._exhausted = True
                logger.debug("Search %s exhausted", self._cursor.request.url)
                raise StopAsyncIteration
            next_page = await self._cursor.fetch_next()
            if next_page is None:
                self._exhausted = True
                raise StopAsyncIteration
            self._page = next_page
            self._index = 0

        item = self._page.items[self._index]
        self._index += 1
        try:
            return self._convert_item(item)
        except Exception:
            self._exhausted = True
            raise


class PageIterator(Generic[T]):
    """Walks a search page by page, forwards with ``next()`` and backwards with ``previous()``.

    ``done`` only reports that the requested direction has no page right now.
    After ``next()`` returned ``done=True``, ``previous()`` may still return a
    page, so ``done`` is not a permanent terminal state. ``async for`` walks
    forward until the next link runs out.
    """

    def __init__(self, cursor: PageCursor, convert_page: PageConverter[T]) -> None:
        self._cursor = cursor
        self._convert_page = convert_page

    async def next(self) -> IteratorResult[ResultPage[T]]:
        return self._to_result(await self._cursor.fetch_next())

    async def previous(self) -> IteratorResult[ResultPage[T]]:
        return self._to_result(await self._cursor.fetch_previous())

    def _to_result(self, page: SearchPage | None) -> IteratorResult[ResultPage[T]]:
        if page is None:
            return IteratorResult(value=None, done=True)
        return IteratorResult(value=self._convert_page(page), done=False)

    def __aiter__(self) -> PageIterator[T]:
        return self

    async def __anext__(self) -> ResultPage[T]:
        result = await self.next()
        if result.done:
            raise StopAsyncIteration
        return result.value  # type: ignore[return-value]
