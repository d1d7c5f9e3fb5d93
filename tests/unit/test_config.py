"""Unit tests for config loading, env interpolation, and validation."""
from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from waas.config import (
    ClientConfig,
    LimiterConfig,
    PollingConfig,
    _interpolate_env,
    load_config,
    validate_config,
)
from waas.errors import AuthenticationError


class TestInterpolateEnv:
    def test_simple_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _interpolate_env("${MY_VAR}") == "hello"

    def test_missing_var_becomes_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR_XYZ", raising=False)
        assert _interpolate_env("${NONEXISTENT_VAR_XYZ}") == ""

    def test_nested_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TOK", "secret")
        result = _interpolate_env({"key": "${TOK}", "plain": "text"})
        assert result == {"key": "secret", "plain": "text"}

    def test_non_string_passthrough(self) -> None:
        assert _interpolate_env(42) == 42
        assert _interpolate_env(True) is True


class TestLoadConfig:
    def test_loads_valid_yaml(self, sample_yaml_path: Path, clean_env: None) -> None:
        cfg = load_config(sample_yaml_path)

        assert isinstance(cfg, ClientConfig)
        assert cfg.client_id == "yaml-client"
        assert cfg.client_secret == "yaml-secret"
        assert cfg.request_timeout == 10
        assert cfg.ethereum.network == "ropsten"
        assert cfg.ethereum.gas == 21000
        assert cfg.ethereum.use_gas_tank is True
        assert cfg.bitcoin.max_fee_rate == 250.0
        assert cfg.limiter == LimiterConfig(enabled=False, max_concurrent=3)
        assert cfg.polling == PollingConfig(timeout=30.0, interval=0.5, btc_interval=0.8)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_environment_only(self, clean_env: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TANGANY_CLIENT_ID", "env-id")
        monkeypatch.setenv("TANGANY_CLIENT_SECRET", "env-secret")
        monkeypatch.setenv("TANGANY_SUBSCRIPTION", "env-sub")

        cfg = load_config()

        assert (cfg.client_id, cfg.client_secret, cfg.subscription) == (
            "env-id",
            "env-secret",
            "env-sub",
        )
        assert cfg.base_url == "https://api.tangany.com/v1"
        assert cfg.polling == PollingConfig()

    def test_yaml_falls_back_to_environment(
        self, tmp_path: Path, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("TANGANY_CLIENT_SECRET", "env-secret")
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text('client_id: "a"\nsubscription: "s"\n')

        assert load_config(cfg_file).client_secret == "env-secret"


class TestValidation:
    @pytest.fixture()
    def valid(self) -> ClientConfig:
        return ClientConfig(client_id="a", client_secret="b", subscription="c")

    def test_valid_config_passes(self, valid: ClientConfig) -> None:
        validate_config(valid)

    @pytest.mark.parametrize(
        "field_name, variable",
        [
            ("client_id", "clientId"),
            ("client_secret", "clientSecret"),
            ("subscription", "subscription"),
        ],
    )
    def test_missing_credentials(self, valid: ClientConfig, field_name: str, variable: str) -> None:
        with pytest.raises(AuthenticationError, match=f"Missing variable '{variable}'"):
            validate_config(replace(valid, **{field_name: ""}))

    def test_non_positive_timeout(self, valid: ClientConfig) -> None:
        with pytest.raises(ValueError, match="polling.timeout"):
            validate_config(replace(valid, polling=PollingConfig(timeout=0)))

    def test_non_positive_interval(self, valid: ClientConfig) -> None:
        with pytest.raises(ValueError, match="intervals"):
            validate_config(replace(valid, polling=PollingConfig(interval=-1)))

    def test_non_positive_concurrency(self, valid: ClientConfig) -> None:
        with pytest.raises(ValueError, match="max_concurrent"):
            validate_config(replace(valid, limiter=LimiterConfig(max_concurrent=0)))


class TestFrozenConfigs:
    def test_client_config_immutable(self) -> None:
        c = ClientConfig()
        with pytest.raises(AttributeError):
            c.client_id = "x"  # type: ignore[misc]

    def test_polling_config_immutable(self) -> None:
        p = PollingConfig()
        with pytest.raises(AttributeError):
            p.timeout = 1.0  # type: ignore[misc]
