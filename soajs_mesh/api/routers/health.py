"""Health endpoint router composition for app and registry state."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from soajs_mesh.registry import Registry


def api_create_health_router(registry: Registry) -> APIRouter:
    """Create health-check router reporting the registry resolved at startup.

    Args:
        registry: Registry resolved at startup.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when registry is invalid.
    """

    if registry is None:
        raise ValueError("registry must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application and registry state.

        An empty registry name means the service runs without a registry server.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.
        """

        payload = {
            "status": "ok",
            "app": "up",
            "registry": "resolved" if registry.name else "disabled",
            "service": registry.name,
            "environment": registry.environment,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
