"""
Pytest configuration and fixtures for Eagle Compress tests.
"""
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import pytest
from fastapi.responses import PlainTextResponse, Response
from fastapi.testclient import TestClient
from starlette.datastructures import Headers

from eaglecompress import create_app
from eaglecompress.core.config import Settings

HELLO = b"hello world"
REPORT = "\n".join(f"line {i}: all systems nominal" for i in range(300))
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 4


class SendRecorder:
    """Stands in for the server's ``send`` and keeps every message."""

    def __init__(self):
        self.messages: List[Dict[str, Any]] = []

    async def __call__(self, message: Dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def start(self) -> Dict[str, Any]:
        return next(m for m in self.messages if m["type"] == "http.response.start")

    @property
    def headers(self) -> Headers:
        return Headers(raw=self.start["headers"])

    @property
    def body_messages(self) -> List[Dict[str, Any]]:
        return [m for m in self.messages if m["type"] == "http.response.body"]

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self.body_messages)


async def empty_receive() -> Dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


def make_scope(
    headers: Optional[Dict[str, str]] = None,
    method: str = "GET",
    path: str = "/",
) -> Dict[str, Any]:
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "query_string": b"",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
    }


def make_response_app(
    body: bytes = HELLO,
    content_type: Optional[str] = "text/plain; charset=utf-8",
    status: int = 200,
    extra_headers: Iterable[Tuple[str, str]] = (),
    chunks: Optional[Sequence[bytes]] = None,
) -> Callable:
    """Downstream ASGI app writing a fixed response, optionally in several chunks."""
    parts = list(chunks) if chunks is not None else [body]
    length = sum(len(part) for part in parts)

    async def app(scope, receive, send):
        headers = []
        if content_type is not None:
            headers.append((b"content-type", content_type.encode("latin-1")))
        headers.append((b"content-length", str(length).encode("latin-1")))
        headers.extend((k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in extra_headers)

        await send({"type": "http.response.start", "status": status, "headers": headers})
        for index, part in enumerate(parts):
            await send({
                "type": "http.response.body",
                "body": part,
                "more_body": index < len(parts) - 1,
            })

    return app


@pytest.fixture
def recorder() -> SendRecorder:
    return SendRecorder()


@pytest.fixture
def scope_factory() -> Callable[..., Dict[str, Any]]:
    return make_scope


@pytest.fixture
def response_app() -> Callable[..., Callable]:
    return make_response_app


@pytest.fixture
def receive() -> Callable:
    return empty_receive


def build_test_app(settings: Settings):
    """An application with one route per compression decision."""
    app = create_app(title="Eagle Compress Test App", settings=settings)

    @app.get("/text", response_class=PlainTextResponse)
    async def text():
        return REPORT

    @app.get("/json")
    async def json_route():
        return {"items": list(range(100))}

    @app.get("/png")
    async def png():
        return Response(content=PNG_BYTES, media_type="image/png")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("handler failed")

    return app


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def app(settings: Settings):
    return build_test_app(settings)


@pytest.fixture
def client(app):
    """Create a test client for the application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def client_factory():
    """Build a client for an application made from custom settings."""
    clients = []

    def factory(**overrides) -> TestClient:
        test_client = TestClient(build_test_app(Settings(_env_file=None, **overrides)))
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield factory

    for test_client in clients:
        test_client.__exit__(None, None, None)
