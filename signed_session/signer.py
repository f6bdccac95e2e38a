"""Session identifier generation and cookie signing."""

from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import Any, NamedTuple

from itsdangerous import BadData, Signer

ID_BYTES = 24
SALT = "signed_session.cookie"


class SessionIds(NamedTuple):
    session_id: str
    signed_id: str


class IdentitySigner:
    """Mints random session ids and signs/unsigns them for the cookie.

    Signatures are HMAC-SHA256 via itsdangerous, appended to the id as
    ``<id>.<signature>``. ``verify`` is fed raw cookie values, so it never
    raises: anything that does not check out comes back as ``None``.
    """

    def __init__(self, secret: str | None = None) -> None:
        self.secret = secret

    def _signer(self, secret: str | None) -> Signer:
        key = secret if secret is not None else self.secret
        if not key:
            raise ValueError("a signing secret is required")
        return Signer(
            key,
            salt=SALT,
            key_derivation="hmac",
            digest_method=hashlib.sha256,
        )

    def generate(self, secret: str | None = None) -> SessionIds:
        session_id = secrets.token_urlsafe(ID_BYTES)
        return SessionIds(session_id, self.sign(session_id, secret))

    def sign(self, session_id: str, secret: str | None = None) -> str:
        return self._signer(secret).sign(session_id).decode("utf-8")

    def verify(self, signed_id: Any, secret: str | None = None) -> str | None:
        """Return the unsigned id, or None if ``signed_id`` is not genuine."""
        if not signed_id or not isinstance(signed_id, (str, bytes)):
            return None
        try:
            if isinstance(signed_id, bytes):
                signed_id = signed_id.decode("utf-8")
            value = self._signer(secret).unsign(signed_id).decode("utf-8")
        except (BadData, UnicodeError):
            return None
        # unsign() ignores the spare bits of the last base64 character, so
        # only the exact canonical encoding is accepted
        expected = self.sign(value, secret).encode("utf-8")
        if not hmac.compare_digest(expected, signed_id.encode("utf-8")):
            return None
        return value
