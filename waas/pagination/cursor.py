"""Link-following cursor over a paginated search endpoint."""
from __future__ import annotations

import logging

from ..interfaces import RequestWrapper, Transport, passthrough
from ..models import SearchPage, SearchRequest

logger = logging.getLogger(__name__)


class PageCursor:
    """Tracks the next/previous page links of one search and fetches neighbours.

    The query parameters of the initial request are sent with the first
    successful fetch only. From then on the server-supplied links, which
    already embed every filter, are followed as they are.
    """

    def __init__(
        self,
        transport: Transport,
        request: SearchRequest,
        wrap: RequestWrapper = passthrough,
    ) -> None:
        self._transport = transport
        self._wrap = wrap
        self.request = request
        self.next_url: str | None = request.url
        self.previous_url: str | None = None
        self.initial_request_consumed = False

    async def fetch_next(self) -> SearchPage | None:
        """Fetch the page behind the next link; ``None`` once there is none."""
        return await self._fetch(self.next_url)

    async def fetch_previous(self) -> SearchPage | None:
        """Fetch the page behind the previous link; ``None`` if there is none."""
        return await self._fetch(self.previous_url)

    async def _fetch(self, url: str | None) -> SearchPage | None:
        if not url:
            return None

        if self.initial_request_consumed or not self.request.params:
            raw = await self._wrap(lambda: self._transport.get(url))
        else:
            params = self.request.params
            raw = await self._wrap(lambda: self._transport.get(url, params=params))
        self.initial_request_consumed = True

        page = SearchPage.from_dict(raw or {})
        self.next_url = page.next
        self.previous_url = page.previous
        logger.debug(
            "Fetched page %s (%d items, next=%s, previous=%s)",
            url,
            len(page.items),
            page.next,
            page.previous,
        )
        return page
