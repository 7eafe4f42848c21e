"""ASGI middleware injecting mesh context into each HTTP request."""

from __future__ import annotations

import logging
from typing import Callable

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from soajs_mesh.registry import Registry

from .context import ContextData, context_reset, context_set
from .header import HeaderDecodeError, header_decode_info

HeaderErrorHook = Callable[[HeaderDecodeError], None]

logger = logging.getLogger(__name__)


class MeshContextMiddleware:
    """Decode the mesh header and expose `ContextData` to downstream handlers.

    A missing or malformed header never blocks the request; the handler then
    sees no mesh context. Decode errors go to `on_header_error` when provided.
    An exception raised by the hook is logged and the request still proceeds
    without mesh context.
    """

    def __init__(
        self,
        app: ASGIApp,
        registry: Registry,
        on_header_error: HeaderErrorHook | None = None,
    ):
        self.app = app
        self.registry = registry
        self.on_header_error = on_header_error

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        try:
            header_info = header_decode_info(Headers(scope=scope))
        except HeaderDecodeError as error:
            if self.on_header_error is not None:
                try:
                    self.on_header_error(error)
                except Exception:
                    logger.warning("Mesh header error hook failed", exc_info=True)
            header_info = None

        if header_info is None:
            await self.app(scope, receive, send)
            return

        token = context_set(ContextData.context_from_header(header_info, self.registry))
        try:
            await self.app(scope, receive, send)
        finally:
            context_reset(token)
