"""Session lifecycle: resolve a cookie into a session, persist it back.

``SessionManager.resolve`` runs before the application and always ends with
a session on the request context (or raises a store failure).
``SessionManager.persist`` runs when the response starts and decides whether
the session is written back and the cookie re-issued.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from email.utils import formatdate

from .config import CookieOptions, SessionSettings, check_secret, get_settings
from .errors import SessionNotFound
from .session import Session
from .signer import IdentitySigner
from .store import SessionStore, build_store

logger = logging.getLogger(__name__)


def _short(session_id: str) -> str:
    return session_id[:8]


@dataclass
class RequestContext:
    """What the manager needs to know about one request."""

    path: str
    cookie: str | None = None
    encrypted: bool = False
    forwarded_proto: str | None = None
    session: Session | None = None


@dataclass
class SetCookie:
    """A Set-Cookie instruction for the framework to emit."""

    name: str
    value: str
    options: CookieOptions
    expires: float | None = None
    delete: bool = False

    def header_value(self, now: float | None = None) -> str:
        parts = [f"{self.name}={self.value}", f"Path={self.options.path}"]
        if self.delete:
            parts.append("Max-Age=0")
            parts.append("Expires=Thu, 01 Jan 1970 00:00:00 GMT")
        elif self.expires is not None:
            # Max-Age wins over Expires in browsers, so it must track the
            # time left on the stored session
            remaining = self.expires - (time.time() if now is None else now)
            parts.append(f"Expires={formatdate(self.expires, usegmt=True)}")
            parts.append(f"Max-Age={max(0, round(remaining))}")
        elif self.options.max_age is not None:
            parts.append(f"Max-Age={self.options.max_age}")
        if self.options.domain:
            parts.append(f"Domain={self.options.domain}")
        if self.options.http_only:
            parts.append("HttpOnly")
        if self.options.secure:
            parts.append("Secure")
        if self.options.same_site:
            parts.append(f"SameSite={self.options.same_site}")
        return "; ".join(parts)


class SessionManager:
    """Resolves and persists sessions for one configured cookie.

    Args:
        settings: Session settings (default: ``get_settings()``).
        store: Session store (default: ``build_store(settings)``, a new store per manager).
        signer: Identity signer (default: one keyed with ``settings.secret``).
    """

    def __init__(
        self,
        settings: SessionSettings | None = None,
        *,
        store: SessionStore | None = None,
        signer: IdentitySigner | None = None,
    ) -> None:
        self.settings = settings if settings is not None else get_settings()
        # model_construct() skips validation, so check again
        check_secret(self.settings.secret)
        self.store = store if store is not None else build_store(self.settings)
        self.signer = signer or IdentitySigner(self.settings.secret)

    @property
    def cookie_name(self) -> str:
        return self.settings.cookie_name

    @property
    def cookie_options(self) -> CookieOptions:
        return self.settings.cookie

    def in_scope(self, path: str) -> bool:
        return path.startswith(self.cookie_options.path or "/")

    def new_session(self) -> Session:
        ids = self.signer.generate()
        return Session.create(ids.session_id, ids.signed_id, self.cookie_options)

    async def resolve(self, ctx: RequestContext) -> Session | None:
        """Attach a session to ``ctx``: the stored one if live, else a fresh one.

        Returns None without touching the store when the request path lies
        outside the cookie path. Store failures propagate.
        """
        if not self.in_scope(ctx.path):
            return None

        ctx.session = await self._load(ctx.cookie)
        return ctx.session

    async def _load(self, cookie: str | None) -> Session:
        if not cookie:
            return self._fresh("no cookie")

        session_id = self.signer.verify(cookie)
        if session_id is None:
            return self._fresh("invalid signature")

        try:
            record = await self.store.get(session_id)
        except SessionNotFound:
            record = None
        except Exception as e:
            logger.error("Session store get failed for %s: %s", _short(session_id), e)
            raise

        if record is None:
            return self._fresh("not found")

        session = Session.from_record(record, session_id, self.cookie_options)
        if session.is_expired():
            logger.info("Session %s expired, destroying", _short(session_id))
            await self._destroy(session_id)
            return self._fresh("expired")

        logger.debug("Session %s loaded", _short(session_id))
        return session

    def _fresh(self, reason: str) -> Session:
        session = self.new_session()
        logger.debug("New session %s (%s)", _short(session.session_id), reason)
        return session

    async def _destroy(self, session_id: str) -> None:
        try:
            await self.store.destroy(session_id)
        except Exception as e:
            logger.error("Session store destroy failed for %s: %s", _short(session_id), e)
            raise

    def should_save(self, ctx: RequestContext, session: Session) -> bool:
        if not self.settings.save_uninitialized and not session.initialized:
            return False
        if session.cookie.secure is not True:
            return True
        if ctx.encrypted:
            return True
        return self.settings.trust_proxy and ctx.forwarded_proto == "https"

    async def persist(self, ctx: RequestContext) -> SetCookie | None:
        """Write the session back if it should be saved.

        Returns the cookie to set on the response, or None when nothing is
        to be emitted. Store failures propagate.
        """
        session = ctx.session
        if session is None or not session.session_id:
            return None

        if session.destroyed:
            logger.info("Session %s destroyed by request", _short(session.session_id))
            await self._destroy(session.session_id)
            return SetCookie(self.cookie_name, "", session.cookie, delete=True)

        if not self.should_save(ctx, session):
            logger.debug("Session %s not saved", _short(session.session_id))
            return None

        try:
            # Shielded so a cancelled request cannot abandon a write midway
            await asyncio.shield(self.store.set(session.session_id, session.to_record()))
        except Exception as e:
            logger.error("Session store set failed for %s: %s", _short(session.session_id), e)
            raise

        return SetCookie(
            self.cookie_name,
            session.signed_id,
            session.cookie,
            expires=session.expires,
        )
