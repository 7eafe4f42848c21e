"""Typed middleware configuration, environment overrides and host app settings."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final, Mapping

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_REGISTRY_API_ADDRESS: Final[str] = "SOAJS_REGISTRY_API"
ENV_ENV_CODE: Final[str] = "SOAJS_ENV"


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


@dataclass(frozen=True)
class MiddlewareConfig:
    """Explicit bootstrap options supplied once at process startup.

    Attributes:
        service_name: Name the current service registers under.
        service_group: Optional service group label.
        service_version: Optional service version token.
        service_port: Optional port the current service listens on.
        service_ip: Optional address the current service is reachable at.
        service_type: Optional service type marker, for example `service` or `daemon`.
        registry_api_address: Registry API base address (`host:port`).
        env_code: Mesh environment code, for example `dev`.
        request_timeout_seconds: Timeout applied to the registry fetch.
    """

    service_name: str = ""
    service_group: str = ""
    service_version: str = ""
    service_port: int | None = None
    service_ip: str = ""
    service_type: str = ""
    registry_api_address: str = ""
    env_code: str = ""
    request_timeout_seconds: float = 30.0


class MeshEnvironmentSettings(BaseSettings):
    """Registry overrides read from the process environment and dotenv.

    Attributes:
        registry_api_address: Value of `SOAJS_REGISTRY_API`.
        env_code: Value of `SOAJS_ENV`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    registry_api_address: str = Field(default="", alias=ENV_REGISTRY_API_ADDRESS)
    env_code: str = Field(default="", alias=ENV_ENV_CODE)


class AppSettings(BaseSettings):
    """Settings for the host application serving the mesh middleware.

    Environment variable names map directly to field names in uppercase.
    Example: `service_name` reads from `SERVICE_NAME`.

    Attributes:
        application_host: Host interface for web server binding.
        application_port: Web server port.
        service_name: Name the service registers under.
        service_group: Service group label.
        service_version: Service version token.
        service_ip: Address the service is reachable at.
        service_type: Service type marker.
        registry_request_timeout_seconds: Timeout for the startup registry fetch.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    service_name: str = Field(default="")
    service_group: str = Field(default="")
    service_version: str = Field(default="1")
    service_ip: str = Field(default="")
    service_type: str = Field(default="service")
    registry_request_timeout_seconds: float = Field(default=30.0, gt=0)

    @field_validator("service_name", "service_group", "service_version", "service_ip", "service_type")
    @classmethod
    def _validate_stripped_string(cls, value: str) -> str:
        return value.strip()

    def settings_build_middleware_config(self) -> MiddlewareConfig:
        """Project host settings onto explicit middleware configuration.

        Returns:
            MiddlewareConfig: Config carrying service identity; registry address and
                env code stay empty so the environment overrides decide them.
        """

        return MiddlewareConfig(
            service_name=self.service_name,
            service_group=self.service_group,
            service_version=self.service_version,
            service_port=self.application_port,
            service_ip=self.service_ip,
            service_type=self.service_type,
            request_timeout_seconds=self.registry_request_timeout_seconds,
        )


def config_resolve_effective(config: MiddlewareConfig, environment: Mapping[str, str]) -> MiddlewareConfig:
    """Merge explicit config with environment overrides.

    A non-blank environment value wins over the explicit field for the registry
    API address and the env code. Every other field comes from `config`.

    Args:
        config: Explicit middleware configuration.
        environment: Environment lookup, typically `os.environ` or a test mapping.

    Returns:
        MiddlewareConfig: Effective configuration.
    """

    registry_api_address = (environment.get(ENV_REGISTRY_API_ADDRESS) or "").strip()
    env_code = (environment.get(ENV_ENV_CODE) or "").strip()
    return replace(
        config,
        registry_api_address=registry_api_address or config.registry_api_address.strip(),
        env_code=env_code or config.env_code.strip(),
    )


def config_load_environment_overrides() -> dict[str, str]:
    """Load registry overrides from process environment and dotenv.

    Returns:
        dict[str, str]: Mapping keyed by the recognized environment variable names.

    Raises:
        SettingsLoadError: Raised when the environment cannot be parsed.
    """

    try:
        environment_settings = MeshEnvironmentSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Registry environment validation failed. Update .env or environment variables. Details: {error}"
        ) from error

    return {
        ENV_REGISTRY_API_ADDRESS: environment_settings.registry_api_address,
        ENV_ENV_CODE: environment_settings.env_code,
    }


def config_load_settings() -> AppSettings:
    """Load and validate host application settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
