"""Configuration package for middleware options and runtime settings."""

from .settings import (
    ENV_ENV_CODE,
    ENV_REGISTRY_API_ADDRESS,
    AppSettings,
    MeshEnvironmentSettings,
    MiddlewareConfig,
    SettingsLoadError,
    config_load_environment_overrides,
    config_load_settings,
    config_resolve_effective,
)

__all__ = [
    "AppSettings",
    "ENV_ENV_CODE",
    "ENV_REGISTRY_API_ADDRESS",
    "MeshEnvironmentSettings",
    "MiddlewareConfig",
    "SettingsLoadError",
    "config_load_environment_overrides",
    "config_load_settings",
    "config_resolve_effective",
]
