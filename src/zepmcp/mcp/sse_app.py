"""
HTTP + SSE Binding
==================
Starlette application serving the MCP server over Server-Sent Events for
remote hosted integration.

Routes:
    GET  <sse_path>        open the event stream (default /sse)
    POST <messages_path>   client-to-server messages (default /mcp/)
    GET  /health           liveness probe

Every response carries permissive CORS headers, and every OPTIONS request is
answered 200 with an empty body.
"""

from typing import Iterable, List, Tuple

from loguru import logger
from mcp.server.lowlevel import Server
from mcp.server.sse import SseServerTransport
from starlette.applications import Starlette
from starlette.datastructures import Headers
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Mount, Route
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from zepmcp.core.config import ZepMCPConfig, get_config

ALLOW_METHODS = "GET, POST, OPTIONS"
ALLOW_HEADERS = "Content-Type"


class PermissiveCORSMiddleware:
    """
    Pure ASGI middleware so streaming SSE responses pass through untouched.
    """

    def __init__(self, app: ASGIApp, allow_origins: Iterable[str] = ("*",)):
        self.app = app
        self.allow_origins = list(allow_origins)
        self.allow_all = "*" in self.allow_origins

    def _cors_headers(self, scope: Scope) -> List[Tuple[bytes, bytes]]:
        headers = [
            (b"access-control-allow-methods", ALLOW_METHODS.encode()),
            (b"access-control-allow-headers", ALLOW_HEADERS.encode()),
        ]
        if self.allow_all:
            headers.append((b"access-control-allow-origin", b"*"))
            return headers

        origin = Headers(scope=scope).get("origin")
        if origin and origin in self.allow_origins:
            headers.append((b"access-control-allow-origin", origin.encode()))
            headers.append((b"vary", b"Origin"))
        return headers

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        cors_headers = self._cors_headers(scope)

        if scope["method"] == "OPTIONS":
            await send({
                "type": "http.response.start",
                "status": 200,
                "headers": cors_headers + [(b"content-length", b"0")],
            })
            await send({"type": "http.response.body", "body": b""})
            return

        async def send_with_cors(message: Message) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = list(message.get("headers", [])) + cors_headers
            await send(message)

        await self.app(scope, receive, send_with_cors)


def create_sse_app(server: Server, config: ZepMCPConfig | None = None) -> Starlette:
    cfg = config or get_config()
    sse = SseServerTransport(cfg.mcp.messages_path)

    async def handle_sse(request: Request) -> Response:
        logger.info(f"SSE connection opened from {request.client.host if request.client else 'unknown'}")
        async with sse.connect_sse(request.scope, request.receive, request._send) as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
        logger.info("SSE connection closed")
        return Response()

    async def health(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "server": cfg.mcp.server_name})

    return Starlette(
        routes=[
            Route(cfg.mcp.sse_path, endpoint=handle_sse, methods=["GET"]),
            Route("/health", endpoint=health, methods=["GET"]),
            Mount(cfg.mcp.messages_path, app=sse.handle_post_message),
        ],
        middleware=[
            Middleware(PermissiveCORSMiddleware, allow_origins=cfg.security.cors_origins),
        ],
    )
