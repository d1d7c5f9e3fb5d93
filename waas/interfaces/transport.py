"""Transport protocol: HTTP abstraction returning decoded JSON bodies."""
from typing import Any, Protocol


class Transport(Protocol):
    """Abstract interface for the HTTP calls the client issues."""

    async def get(self, url: str, params: Any = None) -> Any: ...

    async def post(self, url: str, json: Any = None) -> Any: ...

    async def patch(self, url: str, json: Any = None) -> Any: ...

    async def put(self, url: str, json: Any = None) -> Any: ...

    async def delete(self, url: str) -> Any: ...

    async def head(self, url: str) -> None: ...
