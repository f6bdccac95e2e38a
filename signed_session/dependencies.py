"""FastAPI dependency injection: session access and teardown."""

from __future__ import annotations

from fastapi import HTTPException, Request

from .session import Session


def get_session(request: Request) -> Session | None:
    """Get the session from request state (None outside the cookie path)."""
    return getattr(request.state, "session", None)


def require_session(request: Request) -> Session:
    """Require a session; out-of-scope routes have none."""
    session = get_session(request)
    if session is None:
        raise HTTPException(status_code=500, detail={"error": "No session for this path"})
    return session


def destroy_session(request: Request) -> None:
    """Mark the session for destruction."""
    session = get_session(request)
    if session is not None:
        session.destroy()
