"""Data models and API enumerations; all dataclasses are frozen."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class WalletSecurity(str, Enum):
    SOFTWARE = "software"
    HSM = "hsm"


class EthereumPublicNetwork(str, Enum):
    MAINNET = "mainnet"
    ROPSTEN = "ropsten"


class EthereumTxSpeed(str, Enum):
    DEFAULT = "default"
    FAST = "fast"
    SLOW = "slow"
    NONE = "none"


class BitcoinNetwork(str, Enum):
    BITCOIN = "bitcoin"
    TESTNET = "testnet"


class BlockchainTxConfirmations(str, Enum):
    NONE = "none"
    DEFAULT = "default"
    SECURE = "secure"


class BitcoinTxSpeed(str, Enum):
    SLOW = "slow"
    DEFAULT = "default"
    FAST = "fast"


class RequestProcess(str, Enum):
    """Values of the ``process`` discriminator of an asynchronous request."""

    RUNNING = "Running"
    COMPLETED = "Completed"
    FAILED = "Failed"


# ---------------------------------------------------------------------------
# Search / pagination
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SearchRequest:
    """Initial request of a paginated search.

    ``params`` are only sent with the first page request; the server-supplied
    page links already embed every filter.
    """

    url: str
    params: dict[str, Any] | None = None


@dataclass(frozen=True)
class HyperlinkRef:
    """A single HATEOAS link attached to a search result item."""

    href: str
    type: str
    rel: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> HyperlinkRef:
        return cls(
            href=str(raw.get("href", "")),
            type=str(raw.get("type", "")),
            rel=str(raw.get("rel", "")),
        )


@dataclass(frozen=True)
class SearchPage:
    """One page of a search response exactly as the API returned it."""

    hits: dict[str, Any]
    items: tuple[dict[str, Any], ...]
    next: str | None = None
    previous: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> SearchPage:
        links = raw.get("links") or {}
        return cls(
            hits=dict(raw.get("hits") or {}),
            items=tuple(raw.get("list") or ()),
            next=links.get("next"),
            previous=links.get("previous"),
        )


@dataclass(frozen=True)
class ResultPage(Generic[T]):
    """A search page whose raw items were converted into resource handles."""

    hits: dict[str, Any]
    items: tuple[T, ...] = ()


@dataclass(frozen=True)
class IteratorResult(Generic[T]):
    """Outcome of a single ``next()``/``previous()`` step of a page iterator."""

    value: T | None
    done: bool


# ---------------------------------------------------------------------------
# Asynchronous requests
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AsyncRequestStatus(Generic[T]):
    """Current state of a long-running server-side request.

    ``output`` stays ``None`` until ``process`` is ``Completed``.
    """

    process: str
    status: dict[str, Any] = field(default_factory=dict)
    created: str | None = None
    updated: str | None = None
    output: T | None = None

    @property
    def is_completed(self) -> bool:
        return self.process == RequestProcess.COMPLETED.value

    def with_output(self, output: U | None) -> AsyncRequestStatus[U]:
        """Return a copy carrying ``output`` with every other field unchanged."""
        return replace(self, output=output)  # type: ignore[return-value]

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> AsyncRequestStatus[Any]:
        return cls(
            process=str(raw.get("process", "")),
            status=dict(raw.get("status") or {}),
            created=raw.get("created"),
            updated=raw.get("updated"),
            output=raw.get("output"),
        )
