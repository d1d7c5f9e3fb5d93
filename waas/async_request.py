"""Handles for long-running asynchronous API requests."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .models import AsyncRequestStatus
from .polling import poll
from .resources.base import require_str
from .resources.btc import BtcTransactionAsync
from .resources.eth_transaction import EthTransactionAsync

if TYPE_CHECKING:
    from .client import Waas

logger = logging.getLogger(__name__)

OutputT = TypeVar("OutputT")


class AsyncRequest(Generic[OutputT]):
    """A server-side request addressed by the id the API assigned to it.

    Subclasses may convert a populated ``output`` into richer objects by
    overriding :meth:`_convert_output`; every other status field is returned
    as received.
    """

    def __init__(self, waas: Waas, request_id: str) -> None:
        self.waas = waas
        self.id = require_str(request_id, "request_id")

    async def get_status(self) -> AsyncRequestStatus[OutputT]:
        """Fetch the current status of the request once."""
        raw = await self.waas.wrap(lambda: self.waas.transport.get(f"request/{self.id}"))
        status = AsyncRequestStatus.from_dict(raw or {})
        logger.debug("Request %s: process=%s", self.id, status.process)
        if status.output is None:
            return status  # type: ignore[return-value]
        return status.with_output(self._convert_output(status.output))

    def _convert_output(self, output: Any) -> OutputT:
        return output

    async def wait(
        self, timeout: float | None = None, interval: float | None = None
    ) -> AsyncRequestStatus[OutputT]:
        """Poll the status until ``process`` is ``Completed``.

        Only the ``process`` discriminator ends the wait: a request that failed
        on the server side keeps being polled until ``timeout`` elapses.

        Args:
            timeout: Overall budget in seconds (default from the polling config).
            interval: Seconds between two status requests.

        Raises:
            PollingTimeoutError: The request did not complete in time.
        """
        polling = self.waas.config.polling
        return await poll(
            self.get_status,
            lambda status: status.is_completed,
            f"request {self.id}",
            polling.timeout if timeout is None else timeout,
            polling.interval if interval is None else interval,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"


class EthTransactionRequest(AsyncRequest[EthTransactionAsync]):
    """Asynchronous Ethereum send; the output becomes an :class:`EthTransactionAsync`."""

    def _convert_output(self, output: Any) -> EthTransactionAsync:
        details = {k: v for k, v in output.items() if k != "links"}
        return EthTransactionAsync(self.waas, details)


class BtcTransactionRequest(AsyncRequest[BtcTransactionAsync]):
    """Asynchronous Bitcoin send or sweep; the output becomes a :class:`BtcTransactionAsync`."""

    def _convert_output(self, output: Any) -> BtcTransactionAsync:
        details = {k: v for k, v in output.items() if k != "links"}
        return BtcTransactionAsync(self.waas, details)
