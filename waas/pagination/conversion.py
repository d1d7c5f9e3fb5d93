"""Helpers that turn raw search result items into resource handles.

Search result items only carry a few scalar fields plus HATEOAS links. The
identifiers needed to address the resource again (a monitor's wallet, an
event's transaction hash and log index) are only available in the link path,
so converters locate the item's GET link and parse it.
"""
from __future__ import annotations

import re
from typing import Any, Callable, Iterable, TypeVar

from ..errors import LinkNotFoundError, LinkParseError
from ..models import HyperlinkRef, ResultPage, SearchPage

T = TypeVar("T")

ItemConverter = Callable[[dict[str, Any]], T]
PageConverter = Callable[[SearchPage], ResultPage[T]]


def find_get_link(links: Iterable[dict[str, Any]], expected_relation: str) -> str:
    """Return the href of the GET link pointing to ``expected_relation``."""
    for raw in links or ():
        link = HyperlinkRef.from_dict(raw)
        if link.type.upper() == "GET" and link.rel == expected_relation:
            return link.href
    raise LinkNotFoundError(
        f"A URL for a GET request for further information on '{expected_relation}' "
        "was expected, but none was found"
    )


def match_link(href: str, pattern: re.Pattern[str], description: str) -> re.Match[str]:
    """Match ``pattern`` against a link path or raise :class:`LinkParseError`."""
    match = pattern.search(href)
    if match is None:
        raise LinkParseError(
            f"Could not find out the relevant information for the {description} "
            f"returned by the API (link '{href}')"
        )
    return match


def convert_page(convert_item: ItemConverter[T]) -> PageConverter[T]:
    """Build a page converter applying ``convert_item`` to every list entry."""

    def _convert(page: SearchPage) -> ResultPage[T]:
        return ResultPage(
            hits=page.hits,
            items=tuple(convert_item(item) for item in page.items),
        )

    return _convert
