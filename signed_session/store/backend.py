"""Session store protocol and the in-memory reference store."""

from __future__ import annotations

import copy
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SessionStore(Protocol):
    """Protocol for server-side session storage.

    ``get`` returns None for a missing record; a backend may instead raise
    ``SessionNotFound``. Any other exception is a backend failure and is
    propagated to the caller.
    """

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Load a session record by its unsigned ID."""
        ...

    async def set(self, session_id: str, record: dict[str, Any]) -> None:
        """Insert or replace a session record."""
        ...

    async def destroy(self, session_id: str) -> None:
        """Delete a session record. Missing IDs are not an error."""
        ...


class MemoryStore:
    """In-memory session store for development/testing.

    Not suitable for production: sessions are lost on restart and not
    shared across processes. Each instance owns its own records.
    """

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}

    async def get(self, session_id: str) -> dict[str, Any] | None:
        record = self._records.get(session_id)
        if record is None:
            return None
        return copy.deepcopy(record)

    async def set(self, session_id: str, record: dict[str, Any]) -> None:
        self._records[session_id] = copy.deepcopy(record)

    async def destroy(self, session_id: str) -> None:
        self._records.pop(session_id, None)

    def clear(self) -> None:
        self._records.clear()

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._records

    def __len__(self) -> int:
        return len(self._records)
