"""Test doubles and a minimal app shared by the session test modules."""

from __future__ import annotations

from typing import Any

from fastapi import Depends, FastAPI, Request

from signed_session import MemoryStore, Session, SessionManager, SessionMiddleware
from signed_session.dependencies import destroy_session, get_session, require_session

SECRET = "x" * 32


class RecordingStore(MemoryStore):
    """MemoryStore that remembers every call made to it."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[str, str]] = []

    async def get(self, session_id: str) -> dict[str, Any] | None:
        self.calls.append(("get", session_id))
        return await super().get(session_id)

    async def set(self, session_id: str, record: dict[str, Any]) -> None:
        self.calls.append(("set", session_id))
        await super().set(session_id, record)

    async def destroy(self, session_id: str) -> None:
        self.calls.append(("destroy", session_id))
        await super().destroy(session_id)

    def ops(self, name: str) -> list[str]:
        return [sid for op, sid in self.calls if op == name]


class FailingStore(MemoryStore):
    """Store whose selected operations raise the given exception."""

    def __init__(self, exc: Exception, fail_on: tuple[str, ...] = ("get", "set", "destroy")) -> None:
        super().__init__()
        self.exc = exc
        self.fail_on = fail_on

    async def get(self, session_id: str) -> dict[str, Any] | None:
        if "get" in self.fail_on:
            raise self.exc
        return await super().get(session_id)

    async def set(self, session_id: str, record: dict[str, Any]) -> None:
        if "set" in self.fail_on:
            raise self.exc
        await super().set(session_id, record)

    async def destroy(self, session_id: str) -> None:
        if "destroy" in self.fail_on:
            raise self.exc
        await super().destroy(session_id)


def build_app(manager: SessionManager) -> FastAPI:
    """Minimal app for exercising the session middleware."""
    app = FastAPI()

    @app.get("/set")
    async def set_value(session: Session = Depends(require_session)):
        session["key"] = "value"
        return {"ok": True}

    @app.get("/get")
    async def get_value(session: Session = Depends(require_session)):
        return {"key": session.get("key"), "is_new": session.is_new}

    @app.get("/destroy")
    async def destroy(request: Request):
        destroy_session(request)
        return {"ok": True}

    @app.get("/outside")
    async def outside(request: Request):
        return {"has_session": get_session(request) is not None}

    app.add_middleware(SessionMiddleware, manager=manager)
    return app
