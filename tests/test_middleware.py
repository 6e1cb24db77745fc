"""Tests for ASNGateMiddleware."""

import httpx
import pytest

from asngate.middleware import ASNGateMiddleware, client_address


async def hello_app(scope, receive, send) -> None:
    """Minimal ASGI app answering 200 to HTTP requests."""
    assert scope["type"] == "http"
    await send(
        {
            "type": "http.response.start",
            "status": 200,
            "headers": [(b"content-type", b"text/plain")],
        }
    )
    await send({"type": "http.response.body", "body": b"hello"})


def make_client(app, client: tuple[str, int]) -> httpx.AsyncClient:
    """Create an httpx client talking to an ASGI app as the given peer."""
    transport = httpx.ASGITransport(app=app, client=client)
    return httpx.AsyncClient(transport=transport, base_url="http://testserver")


class TestClientAddress:
    """Tests for client_address."""

    def test_ipv4(self) -> None:
        """Test IPv4 host:port formatting."""
        assert client_address({"client": ("8.8.8.8", 1234)}) == "8.8.8.8:1234"

    def test_ipv6(self) -> None:
        """Test IPv6 addresses are bracketed."""
        assert client_address({"client": ("::1", 1234)}) == "[::1]:1234"

    def test_missing_client(self) -> None:
        """Test that a missing client gives an empty string."""
        assert client_address({}) == ""
        assert client_address({"client": None}) == ""


class TestASNGateMiddleware:
    """Tests for ASNGateMiddleware over HTTP."""

    @pytest.mark.asyncio
    async def test_admitted_client_reaches_app(self, make_matcher) -> None:
        """Test that admitted clients get the app response."""
        app = ASNGateMiddleware(hello_app, make_matcher(deny=["spam"]))

        async with make_client(app, ("8.8.8.8", 5000)) as client:
            response = await client.get("/")

        assert response.status_code == 200
        assert response.text == "hello"

    @pytest.mark.asyncio
    async def test_denied_client_gets_403(self, make_matcher) -> None:
        """Test that rejected clients get 403 and the app is not called."""
        app = ASNGateMiddleware(hello_app, make_matcher(deny=["spam"]))

        async with make_client(app, ("198.51.100.7", 5000)) as client:
            response = await client.get("/")

        assert response.status_code == 403
        assert response.text == "Forbidden"

    @pytest.mark.asyncio
    async def test_unconfigured_matcher_rejects(self, make_matcher) -> None:
        """Test that a matcher without lists rejects every client."""
        app = ASNGateMiddleware(hello_app, make_matcher())

        async with make_client(app, ("8.8.8.8", 5000)) as client:
            response = await client.get("/")

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_ipv6_client(self, make_matcher) -> None:
        """Test that IPv6 peers are resolved."""
        app = ASNGateMiddleware(hello_app, make_matcher(allow=["google"]))

        async with make_client(app, ("2001:4860:4860::8888", 5000)) as client:
            response = await client.get("/")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_lifespan_passes_through(self, make_matcher, mock_resolver) -> None:
        """Test that non-HTTP scopes reach the app without a decision."""
        seen: list[str] = []

        async def lifespan_app(scope, receive, send) -> None:
            seen.append(scope["type"])

        app = ASNGateMiddleware(lifespan_app, make_matcher(deny=["spam"]))

        async def receive():
            return {"type": "lifespan.startup"}

        async def send(message) -> None:
            pass

        await app({"type": "lifespan"}, receive, send)

        assert seen == ["lifespan"]
        assert mock_resolver.lookups == []

    @pytest.mark.asyncio
    async def test_denied_websocket_is_closed(self, make_matcher) -> None:
        """Test that rejected WebSocket handshakes are closed with 1008."""
        sent: list[dict] = []

        async def ws_app(scope, receive, send) -> None:
            raise AssertionError("app must not be called")

        app = ASNGateMiddleware(ws_app, make_matcher(deny=["spam"]))

        async def receive():
            return {"type": "websocket.connect"}

        async def send(message) -> None:
            sent.append(message)

        await app({"type": "websocket", "client": ("198.51.100.7", 80)}, receive, send)

        assert sent == [{"type": "websocket.close", "code": 1008}]
