from collections.abc import AsyncIterator, Awaitable, Callable, Iterator

import pytest
import pytest_asyncio
import structlog
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient, Response
from starlette.requests import Request
from starlette.responses import Response as StarletteResponse
from structlog.testing import LogCapture

Endpoint = Callable[[Request], Awaitable[StarletteResponse]]


@pytest.fixture
def app() -> FastAPI:
    return FastAPI()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """HTTP client talking to ``app`` in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def serve(app: FastAPI, client: AsyncClient) -> Callable[[Endpoint], Awaitable[Response]]:
    """Mount an endpoint at /test and GET it once."""

    async def _serve(endpoint: Endpoint) -> Response:
        app.add_route("/test", endpoint, methods=["GET"])
        return await client.get("/test")

    return _serve


@pytest.fixture
def log_output() -> Iterator[LogCapture]:
    """Capture structlog events, request-scoped context included."""
    capture = LogCapture()
    structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
    yield capture
    structlog.reset_defaults()
