"""SOAJS service-mesh registry bootstrap and request context middleware."""

from soajs_mesh.config import MiddlewareConfig
from soajs_mesh.middleware import (
    ContextData,
    HeaderInfo,
    MeshMiddlewareProducer,
    mesh_context_dependency,
    mesh_context_get,
    middleware_init,
)
from soajs_mesh.registry import Host, Registry

__all__ = [
    "ContextData",
    "HeaderInfo",
    "Host",
    "MeshMiddlewareProducer",
    "MiddlewareConfig",
    "Registry",
    "mesh_context_dependency",
    "mesh_context_get",
    "middleware_init",
]
