"""Request-scoped mesh context storage and accessors."""

from __future__ import annotations

from contextvars import ContextVar, Token

from pydantic import ConfigDict

from soajs_mesh.registry import Registry

from .header import HeaderInfo


class ContextData(HeaderInfo):
    """Decoded mesh header fields combined with the shared registry.

    Attributes:
        reg: Registry resolved at startup, shared read-only across requests.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    reg: Registry = Registry()

    @classmethod
    def context_from_header(cls, header_info: HeaderInfo, registry: Registry) -> ContextData:
        """Compose context data from a decoded header and the registry."""

        return cls(**dict(header_info), reg=registry)


_CONTEXT_DATA: ContextVar[ContextData | None] = ContextVar("soajs_mesh_context_data", default=None)


def context_set(context_data: ContextData) -> Token[ContextData | None]:
    """Bind context data to the current request scope.

    Args:
        context_data: Per-request context data.

    Returns:
        Token: Reset token for `context_reset`.
    """

    return _CONTEXT_DATA.set(context_data)


def context_reset(token: Token[ContextData | None]) -> None:
    _CONTEXT_DATA.reset(token)


def mesh_context_get() -> ContextData | None:
    """Return mesh context for the current request.

    Returns:
        ContextData | None: Injected context, or None when no mesh data is available.
    """

    return _CONTEXT_DATA.get()


def mesh_context_dependency() -> ContextData | None:
    """FastAPI dependency resolving the current mesh context."""

    return mesh_context_get()
