from .config import CookieOptions, SessionSettings, get_settings, override_settings
from .errors import ConfigurationError, SessionError, SessionNotFound, StoreError
from .manager import RequestContext, SessionManager, SetCookie
from .middleware import SessionMiddleware
from .session import Session
from .signer import IdentitySigner, SessionIds
from .store import DynamoDBStore, MemoryStore, SessionStore, build_store

__all__ = [
    "CookieOptions",
    "SessionSettings",
    "get_settings",
    "override_settings",
    "ConfigurationError",
    "SessionError",
    "SessionNotFound",
    "StoreError",
    "RequestContext",
    "SessionManager",
    "SetCookie",
    "SessionMiddleware",
    "Session",
    "IdentitySigner",
    "SessionIds",
    "DynamoDBStore",
    "MemoryStore",
    "SessionStore",
    "build_store",
]
