"""aiohttp-based transport for the WaaS REST API."""
from __future__ import annotations

import logging
import ssl
from typing import Any

import aiohttp
import certifi

from .config import ClientConfig
from .errors import (
    AuthenticationError,
    ConflictError,
    GeneralError,
    HttpError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def build_headers(config: ClientConfig) -> dict[str, str]:
    """Translate the client configuration into ``tangany-*`` request headers."""
    headers = {
        "Accept": "application/json",
        "tangany-client-id": config.client_id,
        "tangany-client-secret": config.client_secret,
        "tangany-subscription": config.subscription,
    }

    optional = {
        "tangany-vault-url": config.vault_url,
        "tangany-ethereum-network": config.ethereum.network,
        "tangany-ethereum-tx-confirmations": config.ethereum.tx_confirmations,
        "tangany-ethereum-tx-speed": config.ethereum.tx_speed,
        "tangany-ethereum-gas-price": config.ethereum.gas_price,
        "tangany-ethereum-gas": config.ethereum.gas,
        "tangany-ethereum-nonce": config.ethereum.nonce,
        "tangany-use-gas-tank": "true" if config.ethereum.use_gas_tank else None,
        "tangany-bitcoin-network": config.bitcoin.network,
        "tangany-bitcoin-tx-speed": config.bitcoin.tx_speed,
        "tangany-bitcoin-tx-confirmations": config.bitcoin.tx_confirmations,
        "tangany-bitcoin-max-fee-rate": config.bitcoin.max_fee_rate,
    }
    for name, value in optional.items():
        if value is not None and value != "":
            headers[name] = str(value)
    return headers


def flatten_params(params: Any) -> list[tuple[str, str]] | None:
    """Turn a params mapping into query pairs; list values repeat the key."""
    if params is None:
        return None
    if not isinstance(params, dict):
        return [(str(k), _scalar(v)) for k, v in params]

    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _scalar(v)) for v in value)
        else:
            pairs.append((key, _scalar(value)))
    return pairs


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def map_http_error(status: int, body: Any) -> HttpError:
    """Map an error status and the API error body to a typed exception."""
    message = ""
    activity_id = None
    if isinstance(body, dict):
        message = str(body.get("message", ""))
        activity_id = body.get("activityId")

    if status == 401:
        return AuthenticationError(message or "Invalid authentication", activity_id)
    if status == 409:
        return ConflictError(message or "Cannot reset resource", activity_id)
    if status == 404:
        return NotFoundError(message or "Requested resource not found")
    return GeneralError(message or f"HTTP {status}", status, activity_id)


class AiohttpTransport:
    """REST transport that resolves paths against the configured base URL."""

    def __init__(self, config: ClientConfig) -> None:
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.request_timeout
        self.headers = build_headers(config)
        self.cookie: str | None = None

    def resolve_url(self, url: str) -> str:
        """Absolute links are used as-is; paths are appended to the base URL."""
        if url.startswith(("http://", "https://")):
            return url
        return f"{self.base_url}/{url.lstrip('/')}"

    async def request(
        self,
        method: str,
        url: str,
        params: Any = None,
        json: Any = None,
    ) -> Any:
        """Issue one HTTP call and return the decoded JSON body."""
        full_url = self.resolve_url(url)
        headers = dict(self.headers)
        if self.cookie:
            headers["Cookie"] = self.cookie

        logger.debug("%s %s params=%s", method, full_url, params)

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)
        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.request(
                method,
                full_url,
                params=flatten_params(params),
                json=json,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                self._remember_cookie(response)
                body = await self._read_body(response)
                logger.debug("%s %s -> %s", method, full_url, response.status)

                if response.status >= 400:
                    raise map_http_error(response.status, body)
                return body

    @staticmethod
    async def _read_body(response: Any) -> Any:
        if response.status == 204:
            return None
        text = await response.text()
        if not text:
            return None
        try:
            return await response.json(content_type=None)
        except ValueError:
            return {"message": text}

    def _remember_cookie(self, response: Any) -> None:
        """Keep affinity cookies so later calls reach the same node."""
        raw_cookies = response.headers.getall("Set-Cookie", [])
        if raw_cookies:
            self.cookie = "; ".join(c.split(";")[0] for c in raw_cookies)

    async def get(self, url: str, params: Any = None) -> Any:
        return await self.request("GET", url, params=params)

    async def post(self, url: str, json: Any = None) -> Any:
        return await self.request("POST", url, json=json)

    async def patch(self, url: str, json: Any = None) -> Any:
        return await self.request("PATCH", url, json=json)

    async def put(self, url: str, json: Any = None) -> Any:
        return await self.request("PUT", url, json=json)

    async def delete(self, url: str) -> Any:
        return await self.request("DELETE", url)

    async def head(self, url: str) -> None:
        await self.request("HEAD", url)
