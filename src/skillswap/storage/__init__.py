"""Storage backends and the FastAPI dependency that picks one.

Learn: ``get_store`` is the single seam the API uses to reach storage.
Tests override it with ``app.dependency_overrides[get_store]``.
"""

from typing import AsyncIterator

from skillswap.config import settings
from skillswap.storage.base import DuplicateEmailError, Store
from skillswap.storage.memory import MemoryStore

__all__ = ["DuplicateEmailError", "MemoryStore", "Store", "get_store"]

# Process-wide arena for the "memory" backend.
_memory_store = MemoryStore()


async def get_store() -> AsyncIterator[Store]:
    """FastAPI dependency — yields a store per request."""
    if settings.storage_backend == "memory":
        yield _memory_store
        return

    from skillswap.db.engine import async_session_factory
    from skillswap.storage.sql import SqlStore

    async with async_session_factory() as session:
        try:
            yield SqlStore(session)
        finally:
            await session.close()
