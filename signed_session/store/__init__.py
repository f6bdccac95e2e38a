from __future__ import annotations

from ..config import SessionSettings
from .backend import MemoryStore, SessionStore
from .dynamodb import DynamoDBStore


def build_store(settings: SessionSettings) -> SessionStore:
    """Create the store named by ``settings.backend``."""
    if settings.backend == "dynamodb":
        return DynamoDBStore(
            table_name=settings.dynamodb_table,
            endpoint_url=settings.dynamodb_endpoint,
            region_name=settings.dynamodb_region,
        )
    return MemoryStore()


__all__ = ["SessionStore", "MemoryStore", "DynamoDBStore", "build_store"]
