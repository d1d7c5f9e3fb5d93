"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from waas.client import Waas
from waas.config import ClientConfig, LimiterConfig, PollingConfig


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_config() -> ClientConfig:
    return ClientConfig(
        client_id="cid",
        client_secret="secret",
        subscription="sub",
        vault_url="https://vault.example.com",
        base_url="https://api.example.com/v1",
        limiter=LimiterConfig(enabled=True, max_concurrent=5),
        polling=PollingConfig(timeout=1.0, interval=0.01, btc_interval=0.01),
    )


# ---------------------------------------------------------------------------
# Client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_transport() -> MagicMock:
    """Transport whose HTTP verbs are AsyncMocks; set ``return_value``/``side_effect`` per test."""
    transport = MagicMock()
    for verb in ("get", "post", "patch", "put", "delete", "head"):
        setattr(transport, verb, AsyncMock(return_value=None))
    return transport


@pytest.fixture()
def waas(sample_config: ClientConfig, fake_transport: MagicMock) -> Waas:
    return Waas(sample_config, transport=fake_transport)


# ---------------------------------------------------------------------------
# Search response builders
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_item() -> Callable[..., dict[str, Any]]:
    def _make(rel: str, href: str, verb: str = "GET", **fields: Any) -> dict[str, Any]:
        return {**fields, "links": [{"href": href, "type": verb, "rel": rel}]}

    return _make


@pytest.fixture()
def make_page() -> Callable[..., dict[str, Any]]:
    def _make(
        items: list[dict[str, Any]],
        next: str | None = None,
        previous: str | None = None,
        total: int | None = None,
    ) -> dict[str, Any]:
        return {
            "hits": {"total": len(items) if total is None else total},
            "list": items,
            "links": {"next": next, "previous": previous},
        }

    return _make


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    client_id: "yaml-client"
    client_secret: "${TEST_WAAS_SECRET}"
    subscription: "yaml-sub"
    base_url: "https://api.example.com/v1"
    request_timeout: 10
    ethereum:
      network: ropsten
      tx_speed: fast
      gas: 21000
      use_gas_tank: true
    bitcoin:
      network: testnet
      max_fee_rate: 250
    limiter:
      enabled: false
      max_concurrent: 3
    polling:
      timeout: 30
      interval: 0.5
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("TEST_WAAS_SECRET", "yaml-secret")
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TANGANY_CLIENT_ID",
        "TANGANY_CLIENT_SECRET",
        "TANGANY_SUBSCRIPTION",
        "TANGANY_VAULT_URL",
    ):
        monkeypatch.delenv(name, raising=False)
