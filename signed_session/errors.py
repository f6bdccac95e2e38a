"""Exception taxonomy for session handling.

Only configuration problems and store failures ever leave this package.
Forged cookies, store misses and expired records are resolved internally
into a fresh session.
"""

from __future__ import annotations


class SessionError(Exception):
    """Base class for all session errors."""


class ConfigurationError(SessionError, ValueError):
    """Session settings are unusable (missing or short secret)."""


class SessionNotFound(SessionError, KeyError):
    """Raised by a store to signal a miss instead of returning None."""


class StoreError(SessionError):
    """A store backend failed to get, set or destroy a record."""

    def __init__(self, operation: str, session_id: str, message: str = "") -> None:
        self.operation = operation
        self.session_id = session_id
        super().__init__(message or f"session store {operation} failed")
