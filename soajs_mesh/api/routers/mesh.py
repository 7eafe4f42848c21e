"""Mesh diagnostics router exposing the injected request context."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from soajs_mesh.middleware import ContextData, mesh_context_dependency


def api_create_mesh_router() -> APIRouter:
    """Create router echoing the mesh context seen by downstream handlers.

    Returns:
        APIRouter: Router exposing `/mesh/context` endpoint.
    """

    router = APIRouter(prefix="/mesh", tags=["mesh"])

    @router.get("/context")
    def api_mesh_context(context_data: ContextData | None = Depends(mesh_context_dependency)) -> JSONResponse:
        """Return the mesh context for the current request.

        Args:
            context_data: Injected mesh context, or None when the request carried no mesh header.

        Returns:
            JSONResponse: `available` flag and the serialized context.
        """

        payload = {
            "available": context_data is not None,
            "context": None if context_data is None else context_data.model_dump(mode="json"),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
