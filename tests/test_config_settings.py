"""Tests for configuration merge and settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from soajs_mesh.config import (
    ENV_ENV_CODE,
    ENV_REGISTRY_API_ADDRESS,
    AppSettings,
    MiddlewareConfig,
    SettingsLoadError,
    config_load_environment_overrides,
    config_load_settings,
    config_resolve_effective,
)


def test_config_resolve_effective_prefers_environment_for_registry_fields() -> None:
    """Let non-blank environment values win for address and env code only.

    Raises:
        AssertionError: Raised when merge precedence is incorrect.
    """

    config = MiddlewareConfig(service_name="orders", registry_api_address="config:5000", env_code="qa")

    effective_config = config_resolve_effective(
        config,
        {ENV_REGISTRY_API_ADDRESS: "env:5000", ENV_ENV_CODE: "dev", "SERVICE_NAME": "ignored"},
    )

    assert effective_config.registry_api_address == "env:5000"
    assert effective_config.env_code == "dev"
    assert effective_config.service_name == "orders"
    assert config.registry_api_address == "config:5000"


def test_config_resolve_effective_falls_back_to_config_for_blank_environment() -> None:
    """Keep explicit values when environment values are blank or absent."""

    config = MiddlewareConfig(registry_api_address="config:5000", env_code="qa")

    effective_config = config_resolve_effective(config, {ENV_REGISTRY_API_ADDRESS: "  "})

    assert effective_config.registry_api_address == "config:5000"
    assert effective_config.env_code == "qa"


def test_config_load_environment_overrides_reads_process_environment(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Read recognized registry variables from the process environment.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Working directory without a dotenv file.
    """

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(ENV_REGISTRY_API_ADDRESS, "registry:5000")
    monkeypatch.delenv(ENV_ENV_CODE, raising=False)

    overrides = config_load_environment_overrides()

    assert overrides == {ENV_REGISTRY_API_ADDRESS: "registry:5000", ENV_ENV_CODE: ""}


def test_config_app_settings_builds_middleware_config() -> None:
    """Project service identity and timeout onto middleware config."""

    settings = AppSettings(
        application_port=4100,
        service_name=" orders ",
        service_group="commerce",
        registry_request_timeout_seconds=5.0,
    )

    middleware_config = settings.settings_build_middleware_config()

    assert middleware_config.service_name == "orders"
    assert middleware_config.service_group == "commerce"
    assert middleware_config.service_port == 4100
    assert middleware_config.request_timeout_seconds == 5.0
    assert middleware_config.registry_api_address == ""
    assert middleware_config.env_code == ""


def test_config_load_settings_wraps_validation_errors(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Raise SettingsLoadError when environment holds invalid values.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Working directory without a dotenv file.
    """

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APPLICATION_PORT", "70000")

    with pytest.raises(SettingsLoadError, match="Startup configuration validation failed"):
        config_load_settings()
