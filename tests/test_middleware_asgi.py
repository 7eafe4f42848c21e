"""Tests for per-request mesh context injection."""

from __future__ import annotations

import asyncio
import logging

import httpx
import pytest
from fastapi.testclient import TestClient
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from soajs_mesh.middleware import (
    HEADER_DATA_NAME,
    ContextData,
    HeaderDecodeError,
    MeshMiddlewareProducer,
    mesh_context_get,
)
from soajs_mesh.registry import Host, Registry


def _build_recording_application(observed_contexts: list[ContextData | None]) -> Starlette:
    """Create a downstream app recording the mesh context it observes.

    Args:
        observed_contexts: List receiving one entry per handled request.

    Returns:
        Starlette: Downstream application.
    """

    async def _endpoint(_request: Request) -> PlainTextResponse:
        observed_contexts.append(mesh_context_get())
        return PlainTextResponse("ok")

    return Starlette(routes=[Route("/", _endpoint)])


@pytest.mark.parametrize(
    ("header_value", "registry", "expected_context"),
    [
        ("nil", Registry(), None),
        ("", Registry(), None),
        ('{"device":"iPhone"}', Registry(name="ok"), ContextData(device="iPhone", reg=Registry(name="ok"))),
        ("null", Registry(name="ok"), ContextData(reg=Registry(name="ok"))),
    ],
)
def test_middleware_injects_context_only_for_decodable_header(
    header_value: str,
    registry: Registry,
    expected_context: ContextData | None,
) -> None:
    """Pass every request downstream and inject context only for valid headers.

    Args:
        header_value: Mesh header value sent with the request.
        registry: Registry the middleware closes over.
        expected_context: Context the downstream handler must observe.

    Raises:
        AssertionError: Raised when handler observes unexpected context.
    """

    observed_contexts: list[ContextData | None] = []
    application = MeshMiddlewareProducer(registry=registry).middleware(
        _build_recording_application(observed_contexts)
    )
    client = TestClient(application)

    response = client.get("/", headers={HEADER_DATA_NAME: header_value})

    assert response.status_code == 200
    assert response.text == "ok"
    assert observed_contexts == [expected_context]


def test_middleware_without_header_injects_nothing() -> None:
    """Pass a request without the mesh header downstream with no context."""

    observed_contexts: list[ContextData | None] = []
    application = MeshMiddlewareProducer(registry=Registry(name="ok")).middleware(
        _build_recording_application(observed_contexts)
    )

    response = TestClient(application).get("/")

    assert response.status_code == 200
    assert observed_contexts == [None]


def test_middleware_routes_decode_errors_to_hook() -> None:
    """Hand decode errors to the injected hook while the request succeeds."""

    received_errors: list[HeaderDecodeError] = []
    observed_contexts: list[ContextData | None] = []
    application = MeshMiddlewareProducer(registry=Registry(), on_header_error=received_errors.append).middleware(
        _build_recording_application(observed_contexts)
    )

    response = TestClient(application).get("/", headers={HEADER_DATA_NAME: "{broken"})

    assert response.status_code == 200
    assert observed_contexts == [None]
    assert [str(error) for error in received_errors] == ["unable to parse SOAJS header"]


def test_middleware_survives_failing_decode_error_hook(caplog: pytest.LogCaptureFixture) -> None:
    """Log a hook failure and still serve the request without mesh context.

    Args:
        caplog: Pytest log capture fixture.
    """

    def _failing_hook(_error: HeaderDecodeError) -> None:
        raise RuntimeError("hook exploded")

    observed_contexts: list[ContextData | None] = []
    application = MeshMiddlewareProducer(registry=Registry(), on_header_error=_failing_hook).middleware(
        _build_recording_application(observed_contexts)
    )

    with caplog.at_level(logging.WARNING, logger="soajs_mesh.middleware.asgi"):
        response = TestClient(application).get("/", headers={HEADER_DATA_NAME: "{broken"})

    assert response.status_code == 200
    assert response.text == "ok"
    assert observed_contexts == [None]
    assert "Mesh header error hook failed" in caplog.text
    assert "hook exploded" in caplog.text


def test_middleware_context_does_not_leak_after_request() -> None:
    """Reset the context once the downstream call finishes."""

    observed_contexts: list[ContextData | None] = []
    application = MeshMiddlewareProducer(registry=Registry(name="ok")).middleware(
        _build_recording_application(observed_contexts)
    )

    TestClient(application).get("/", headers={HEADER_DATA_NAME: '{"device":"iPhone"}'})

    assert observed_contexts[0] is not None
    assert mesh_context_get() is None


def test_middleware_concurrent_requests_share_unchanged_registry() -> None:
    """Serve concurrent requests without mutating the shared registry.

    Raises:
        AssertionError: Raised when a request observes a foreign device or changed registry.
    """

    registry = Registry(name="orders", environment="dev", hosts=(Host(host="10.0.0.4", port=4000),))
    registry_snapshot = registry.model_copy(deep=True)

    async def _endpoint(_request: Request) -> PlainTextResponse:
        await asyncio.sleep(0)
        context_data = mesh_context_get()
        assert context_data is not None
        return PlainTextResponse(f"{context_data.device}|{context_data.reg.name}|{context_data.reg is registry}")

    application = MeshMiddlewareProducer(registry=registry).middleware(Starlette(routes=[Route("/", _endpoint)]))

    async def _run_requests() -> list[str]:
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=application), base_url="http://mesh") as client:
            responses = await asyncio.gather(
                *(
                    client.get("/", headers={HEADER_DATA_NAME: f'{{"device":"device-{index}"}}'})
                    for index in range(25)
                )
            )
        return [response.text for response in responses]

    response_texts = asyncio.run(_run_requests())

    assert response_texts == [f"device-{index}|orders|True" for index in range(25)]
    assert registry == registry_snapshot


def test_middleware_passes_through_non_http_scopes() -> None:
    """Forward lifespan and websocket scopes untouched."""

    received_scopes: list[str] = []

    async def _downstream(scope, receive, send) -> None:
        _ = (receive, send)
        received_scopes.append(scope["type"])

    application = MeshMiddlewareProducer(registry=Registry()).middleware(_downstream)

    async def _receive() -> dict[str, str]:
        return {"type": "lifespan.startup"}

    async def _send(_message: dict[str, str]) -> None:
        return None

    asyncio.run(application({"type": "lifespan"}, _receive, _send))

    assert received_scopes == ["lifespan"]
