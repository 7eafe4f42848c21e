"""FastAPI application factory for the mesh-enabled service.

This module composes the API surface and installs mesh context injection.
"""

from fastapi import FastAPI

from soajs_mesh.middleware import MeshMiddlewareProducer

from .routers import api_create_health_router, api_create_mesh_router


def create_api_application(middleware_producer: MeshMiddlewareProducer) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        middleware_producer: Producer returned by `middleware_init`.

    Returns:
        FastAPI: Framework application instance with mesh middleware installed.

    Raises:
        ValueError: Raised when middleware_producer is missing.
    """

    if middleware_producer is None:
        raise ValueError("middleware_producer must not be None")

    application = FastAPI(title="SOAJS Mesh Service")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal foundation response for bootstrap verification.

        Returns:
            dict[str, str]: Minimal response for API framework verification.
        """

        return {
            "service": middleware_producer.registry.name or "soajs-mesh",
            "status": "ready",
        }

    application.include_router(api_create_health_router(registry=middleware_producer.registry))
    application.include_router(api_create_mesh_router())
    middleware_producer.middleware_install(application)

    return application
