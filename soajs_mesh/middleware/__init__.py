"""Mesh middleware package for per-request context injection."""

from .asgi import HeaderErrorHook, MeshContextMiddleware
from .context import ContextData, mesh_context_dependency, mesh_context_get
from .header import HEADER_DATA_NAME, HEADER_PARSE_MESSAGE, HeaderDecodeError, HeaderInfo, header_decode_info
from .initializer import MeshMiddlewareProducer, middleware_init

__all__ = [
    "ContextData",
    "HEADER_DATA_NAME",
    "HEADER_PARSE_MESSAGE",
    "HeaderDecodeError",
    "HeaderErrorHook",
    "HeaderInfo",
    "MeshContextMiddleware",
    "MeshMiddlewareProducer",
    "header_decode_info",
    "mesh_context_dependency",
    "mesh_context_get",
    "middleware_init",
]
