"""Async client for the Tangany Wallet-as-a-Service API."""
from .async_request import AsyncRequest, BtcTransactionRequest, EthTransactionRequest
from .client import Waas
from .config import ClientConfig, load_config
from .errors import (
    AuthenticationError,
    ConflictError,
    GeneralError,
    HttpError,
    LinkNotFoundError,
    LinkParseError,
    MiningError,
    NotFoundError,
    PollingTimeoutError,
    WaasError,
)
from .pagination import ItemIterator, PageCursor, PageIterator
from .polling import poll

__all__ = [
    "AsyncRequest",
    "AuthenticationError",
    "BtcTransactionRequest",
    "ClientConfig",
    "ConflictError",
    "EthTransactionRequest",
    "GeneralError",
    "HttpError",
    "ItemIterator",
    "LinkNotFoundError",
    "LinkParseError",
    "MiningError",
    "NotFoundError",
    "PageCursor",
    "PageIterator",
    "PollingTimeoutError",
    "Waas",
    "WaasError",
    "load_config",
    "poll",
]
