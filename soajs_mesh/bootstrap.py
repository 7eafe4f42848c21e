"""Application bootstrap wiring for startup validation and registry resolution."""

from fastapi import FastAPI

from soajs_mesh.api import create_api_application
from soajs_mesh.config import AppSettings, config_load_settings
from soajs_mesh.middleware import middleware_init


async def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after resolving the registry once.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
        RegistryError: Raised when the registry cannot be resolved.
    """

    resolved_settings = settings or config_load_settings()
    middleware_producer = await middleware_init(resolved_settings.settings_build_middleware_config())
    return create_api_application(middleware_producer=middleware_producer)
