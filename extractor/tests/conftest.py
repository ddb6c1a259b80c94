from typing import Callable, Dict, List, Optional, Type

import httpx
import pytest

from extractor.app.core.config import Settings
from extractor.app.main import create_app


@pytest.fixture
def anyio_backend():
    return "asyncio"


class UpstreamStub:
    """
    In-memory stand-in for remote document hosts.

    Routes map an absolute URL to a callable building the response (or
    raising a transport error). Unknown URLs answer 404.
    """

    def __init__(self) -> None:
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def serve(
        self,
        url: str,
        content: bytes,
        status_code: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        def _respond(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                status_code,
                content=content,
                headers=headers or {"Content-Type": "application/pdf"},
            )

        self.routes[url] = _respond
        return url

    def redirect(self, url: str, location: str) -> str:
        return self.serve(url, b"", status_code=302, headers={"Location": location})

    def fail(self, url: str, error: Type[httpx.TransportError] = httpx.ConnectError) -> str:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise error("connection refused", request=request)

        self.routes[url] = _raise
        return url

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.scheme not in ("http", "https"):
            raise httpx.UnsupportedProtocol(
                "Request URL is missing an 'http://' or 'https://' protocol.",
                request=request,
            )
        route = self.routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, content=b"not found")
        return route(request)


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture
async def http_client(upstream):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(upstream.handler),
        follow_redirects=True,
    ) as client:
        yield client


@pytest.fixture
def app(http_client):
    application = create_app(Settings(_env_file=None))
    # ASGITransport does not run the lifespan; inject the client directly.
    application.state.http_client = http_client
    return application


@pytest.fixture
async def api(app):
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client
