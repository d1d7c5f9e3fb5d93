"""Pagination engine: cursor, iterators and item conversion."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from ..models import SearchRequest
from .conversion import ItemConverter, convert_page, find_get_link, match_link
from .cursor import PageCursor
from .iterators import ItemIterator, PageIterator

if TYPE_CHECKING:
    from ..client import Waas

T = TypeVar("T")


def list_items(
    waas: Waas,
    url: str,
    params: dict[str, Any] | None,
    convert_item: ItemConverter[T],
) -> ItemIterator[T]:
    """Iterate a search item by item, fetching further pages on demand."""
    cursor = PageCursor(waas.transport, SearchRequest(url, params), waas.wrap)
    return ItemIterator(cursor, convert_item)


def list_pages(
    waas: Waas,
    url: str,
    params: dict[str, Any] | None,
    convert_item: ItemConverter[T],
) -> PageIterator[T]:
    """Iterate a search page by page in both directions."""
    cursor = PageCursor(waas.transport, SearchRequest(url, params), waas.wrap)
    return PageIterator(cursor, convert_page(convert_item))


__all__ = [
    "ItemIterator",
    "PageCursor",
    "PageIterator",
    "convert_page",
    "find_get_link",
    "list_items",
    "list_pages",
    "match_link",
]
