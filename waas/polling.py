"""Bounded-time polling of an async probe."""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Awaitable, Callable, TypeVar

from .errors import MiningError, PollingTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def poll(
    probe: Callable[[], Awaitable[T]],
    is_done: Callable[[T], bool],
    label: str,
    timeout: float,
    interval: float,
) -> T:
    """Call ``probe`` until ``is_done`` accepts its result or ``timeout`` elapses.

    The first probe runs immediately, later ones ``interval`` seconds after the
    previous one settled, so the probe never overlaps with itself. A probe
    failure (or an exception raised by ``is_done``) propagates unchanged.

    Args:
        probe: Coroutine factory performing one status check (e.g. an API call).
        is_done: Predicate that ends polling successfully.
        label: Summary of the polled activity for the timeout message.
        timeout: Overall budget in seconds.
        interval: Delay in seconds between two probes.

    Raises:
        ValueError: ``timeout`` is not positive.
        PollingTimeoutError: ``timeout`` elapsed before ``is_done`` was satisfied.
    """
    if timeout <= 0:
        raise ValueError(f"Polling timeout must be positive, got {timeout}")

    async def _loop() -> T:
        while True:
            result = await probe()
            if is_done(result):
                return result
            await asyncio.sleep(interval)

    task = asyncio.ensure_future(_loop())
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout)
        if task in done:
            return task.result()
        logger.warning("Polling %s timed out after %.2fs", label, timeout)
        raise PollingTimeoutError(f"Timeout when retrieving information for {label}")
    finally:
        # Runs on every exit path, including cancellation of the caller.
        if not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task


async def wait_for_tx_status(
    get_status: Callable[[], Awaitable[dict[str, Any]]],
    tx_hash: str | None,
    timeout: float,
    interval: float,
) -> dict[str, Any]:
    """Poll a blockchain transaction until it is confirmed.

    Raises:
        MiningError: The transaction status turned to ``error``.
        PollingTimeoutError: The transaction was still pending after ``timeout``.
    """

    def _is_confirmed(tx: dict[str, Any]) -> bool:
        status = tx.get("status")
        if status == "confirmed":
            return True
        if status == "error":
            raise MiningError(tx)
        return False

    return await poll(
        get_status, _is_confirmed, f"transaction status {tx_hash}", timeout, interval
    )
