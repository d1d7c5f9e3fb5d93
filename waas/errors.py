"""Error taxonomy for the WaaS client."""
from __future__ import annotations

from typing import Any


class WaasError(Exception):
    """Base error for all client-side failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# HTTP errors (raised by the transport)
# ---------------------------------------------------------------------------


class HttpError(WaasError):
    """An API call was answered with an error status."""

    def __init__(self, message: str, status: int) -> None:
        super().__init__(message)
        self.status = status


class AuthenticationError(HttpError):
    def __init__(
        self, message: str = "Invalid authentication", activity_id: str | None = None
    ) -> None:
        super().__init__(message, 401)
        self.activity_id = activity_id


class ConflictError(HttpError):
    def __init__(
        self, message: str = "Cannot reset resource", activity_id: str | None = None
    ) -> None:
        super().__init__(message, 409)
        self.activity_id = activity_id


class NotFoundError(HttpError):
    def __init__(self, message: str = "Requested resource not found") -> None:
        super().__init__(message, 404)


class GeneralError(HttpError):
    def __init__(
        self, message: str, status: int = 400, activity_id: str | None = None
    ) -> None:
        super().__init__(message, status)
        self.activity_id = activity_id


class MiningError(HttpError):
    """A polled blockchain transaction ended up in the ``error`` state."""

    def __init__(
        self,
        tx_data: dict[str, Any],
        message: str = "Transaction was not mined due to an error",
    ) -> None:
        super().__init__(message, 400)
        self.tx_data = tx_data


# ---------------------------------------------------------------------------
# Client-side errors
# ---------------------------------------------------------------------------


class PollingTimeoutError(WaasError):
    """A polling loop ran out of time before the expected result arrived."""

    status = 408


class LinkNotFoundError(WaasError):
    """A search result item carries no GET link with the expected relation."""


class LinkParseError(WaasError):
    """A hyperlink was found but its path does not have the expected shape."""
