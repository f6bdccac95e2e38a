"""ASGI server-side session middleware.

Reads the signed session ID from a cookie, resolves it into a Session via
SessionManager, and exposes it as ``request.state.session``. When the
response starts, the manager decides whether to save the session and the
returned cookie is appended to the response headers.
"""

from __future__ import annotations

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .config import SessionSettings
from .manager import RequestContext, SessionManager
from .store import SessionStore


class SessionMiddleware:
    """ASGI middleware for server-side sessions.

    Pass either a ready ``manager`` or the ``settings``/``store`` to build one.
    Store failures are not caught here: they abort the request.
    """

    def __init__(
        self,
        app: ASGIApp,
        manager: SessionManager | None = None,
        settings: SessionSettings | None = None,
        store: SessionStore | None = None,
    ) -> None:
        self.app = app
        self.manager = manager or SessionManager(settings, store=store)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        ctx = self._build_context(HTTPConnection(scope))
        await self.manager.resolve(ctx)

        # Attach session to scope so request.state.session works
        scope["state"] = scope.get("state", {})
        scope["state"]["session"] = ctx.session

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                cookie = await self.manager.persist(ctx)
                if cookie is not None:
                    headers = MutableHeaders(scope=message)
                    headers.append("set-cookie", cookie.header_value())

            await send(message)

        await self.app(scope, receive, send_wrapper)

    def _build_context(self, conn: HTTPConnection) -> RequestContext:
        return RequestContext(
            path=conn.url.path,
            cookie=conn.cookies.get(self.manager.cookie_name),
            encrypted=conn.url.scheme in ("https", "wss"),
            forwarded_proto=conn.headers.get("x-forwarded-proto"),
        )
