"""ASGI middleware that gates HTTP and WebSocket traffic by client ASN."""

import logging
from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any

from asngate.core.asn_matcher import ASNMatcher

logger = logging.getLogger(__name__)

Scope = MutableMapping[str, Any]
Message = MutableMapping[str, Any]
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]

FORBIDDEN_BODY = b"Forbidden"


def client_address(scope: Scope) -> str:
    """Build a host:port string from the ASGI client tuple.

    Args:
        scope: ASGI connection scope

    Returns:
        "host:port" ("[host]:port" for IPv6), or "" when the server did not
        report a client
    """
    client = scope.get("client")
    if not client:
        return ""
    host, port = client[0], client[1]
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


class ASNGateMiddleware:
    """Rejects connections whose client address the matcher does not admit.

    HTTP requests are answered with 403; WebSocket handshakes are closed
    with code 1008 (policy violation). Lifespan and other scopes pass
    through untouched.
    """

    def __init__(self, app: ASGIApp, matcher: ASNMatcher) -> None:
        """Initialize the middleware.

        Args:
            app: The wrapped ASGI application
            matcher: Matcher deciding on each client address
        """
        self.app = app
        self.matcher = matcher

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        address = client_address(scope)
        if self.matcher.matches(address):
            await self.app(scope, receive, send)
            return

        logger.info(f"Rejected {scope['type']} connection from {address or 'unknown client'}")
        if scope["type"] == "websocket":
            await send({"type": "websocket.close", "code": 1008})
            return

        await send(
            {
                "type": "http.response.start",
                "status": 403,
                "headers": [
                    (b"content-type", b"text/plain; charset=utf-8"),
                    (b"content-length", str(len(FORBIDDEN_BODY)).encode()),
                ],
            }
        )
        await send({"type": "http.response.body", "body": FORBIDDEN_BODY})
