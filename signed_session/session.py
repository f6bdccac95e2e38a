"""The per-request session entity."""

from __future__ import annotations

import time
from collections.abc import Iterator, MutableMapping
from typing import Any

from .config import CookieOptions


class Session(MutableMapping):
    """Session identity, cookie attributes, expiry and application data.

    The session behaves like a dict over the application payload. Identity
    (``session_id``/``signed_id``) is fixed at construction: rotating a
    session means building a new one. Any write to the payload sets
    ``modified``.
    """

    def __init__(
        self,
        session_id: str,
        signed_id: str,
        cookie: CookieOptions,
        *,
        expires: float | None = None,
        data: dict[str, Any] | None = None,
        is_new: bool = True,
    ) -> None:
        self._session_id = session_id
        self._signed_id = signed_id
        self.cookie = cookie
        self.expires = expires
        self._data: dict[str, Any] = dict(data or {})
        self.is_new = is_new
        self.modified = False
        self.destroyed = False

    @classmethod
    def create(cls, session_id: str, signed_id: str, cookie: CookieOptions) -> Session:
        """Mint a fresh session, deriving ``expires`` from ``cookie.max_age``."""
        expires = None
        if cookie.max_age is not None:
            expires = time.time() + cookie.max_age
        return cls(session_id, signed_id, cookie, expires=expires)

    @classmethod
    def from_record(
        cls,
        record: dict[str, Any],
        session_id: str,
        cookie: CookieOptions,
    ) -> Session:
        """Hydrate a session from a store record.

        Stored cookie attributes win over ``cookie``, which only fills in
        for records written without them.
        """
        stored_cookie = record.get("cookie")
        if stored_cookie is not None:
            cookie = CookieOptions.model_validate(stored_cookie)
        return cls(
            record.get("session_id") or session_id,
            record["signed_id"],
            cookie,
            expires=record.get("expires"),
            data=record.get("data"),
            is_new=False,
        )

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def signed_id(self) -> str:
        return self._signed_id

    @property
    def initialized(self) -> bool:
        """True once the session carries application data."""
        return self.modified or bool(self._data)

    def is_expired(self, now: float | None = None) -> bool:
        if self.expires is None:
            return False
        return self.expires <= (time.time() if now is None else now)

    def destroy(self) -> None:
        """Mark the session for deletion when the response is sent."""
        self.destroyed = True
        self._data.clear()

    def to_record(self) -> dict[str, Any]:
        return {
            "session_id": self._session_id,
            "signed_id": self._signed_id,
            "cookie": self.cookie.model_dump(),
            "expires": self.expires,
            "data": dict(self._data),
        }

    # MutableMapping interface over the payload

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value
        self.modified = True

    def __delitem__(self, key: str) -> None:
        del self._data[key]
        self.modified = True

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return (
            f"Session(session_id={self._session_id[:8]!r}..., "
            f"is_new={self.is_new}, modified={self.modified})"
        )
