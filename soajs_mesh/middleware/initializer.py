"""Startup orchestration resolving the registry and producing the mesh middleware."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from starlette.applications import Starlette
from starlette.types import ASGIApp

from soajs_mesh.config import MiddlewareConfig, config_load_environment_overrides, config_resolve_effective
from soajs_mesh.registry import Registry, RegistryFetcherPort, RegistryHttpFetcher

from .asgi import HeaderErrorHook, MeshContextMiddleware

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MeshMiddlewareProducer:
    """Ready-to-use middleware factory closing over the resolved registry.

    Attributes:
        registry: Registry resolved at startup.
        on_header_error: Optional hook receiving per-request header decode errors.
            A hook that raises is logged and does not fail the request.
    """

    registry: Registry
    on_header_error: HeaderErrorHook | None = None

    def middleware(self, app: ASGIApp) -> ASGIApp:
        """Wrap an ASGI application with mesh context injection.

        Args:
            app: Downstream ASGI application.

        Returns:
            ASGIApp: Wrapped application.
        """

        return MeshContextMiddleware(app, registry=self.registry, on_header_error=self.on_header_error)

    def middleware_install(self, application: Starlette) -> None:
        """Register mesh context injection on a Starlette or FastAPI application.

        Args:
            application: Application receiving the middleware.
        """

        application.add_middleware(
            MeshContextMiddleware,
            registry=self.registry,
            on_header_error=self.on_header_error,
        )


async def middleware_init(
    config: MiddlewareConfig,
    environment: Mapping[str, str] | None = None,
    fetcher: RegistryFetcherPort | None = None,
    on_header_error: HeaderErrorHook | None = None,
) -> MeshMiddlewareProducer:
    """Resolve the registry once and return the mesh middleware producer.

    When neither a registry API address nor an env code resolves, no registry
    server is in use and the producer carries the empty `Registry()`.

    Args:
        config: Explicit middleware configuration.
        environment: Environment lookup; defaults to process environment and dotenv.
        fetcher: Registry fetcher; defaults to `RegistryHttpFetcher`.
        on_header_error: Optional hook receiving per-request header decode errors.

    Returns:
        MeshMiddlewareProducer: Producer wrapping ASGI apps with the resolved registry.

    Raises:
        RegistryConfigurationError: Raised when service name or env code is missing.
        RegistryTransportError: Raised when the registry service cannot be reached.
        RegistryDecodeError: Raised when the registry response is malformed.
        SettingsLoadError: Raised when environment overrides cannot be loaded.
    """

    if environment is None:
        environment = config_load_environment_overrides()
    effective_config = config_resolve_effective(config, environment)

    if not effective_config.registry_api_address and not effective_config.env_code:
        logger.info("No registry address or env code configured; running without registry")
        return MeshMiddlewareProducer(registry=Registry(), on_header_error=on_header_error)

    registry_fetcher = fetcher or RegistryHttpFetcher(
        request_timeout_seconds=effective_config.request_timeout_seconds,
    )
    registry = await registry_fetcher.fetcher_fetch_registry(
        registry_api_address=effective_config.registry_api_address,
        service_name=effective_config.service_name,
        env_code=effective_config.env_code,
        query_parameters=_middleware_identity_parameters(effective_config),
    )
    logger.info(
        "Resolved registry %r for env %s with %d hosts",
        registry.name,
        effective_config.env_code,
        len(registry.hosts),
    )
    return MeshMiddlewareProducer(registry=registry, on_header_error=on_header_error)


def _middleware_identity_parameters(config: MiddlewareConfig) -> dict[str, str]:
    """Build optional identifying query parameters from effective config."""

    return {
        "serviceGroup": config.service_group,
        "serviceVersion": config.service_version,
        "servicePort": "" if config.service_port is None else str(config.service_port),
        "serviceIp": config.service_ip,
        "type": config.service_type,
    }
