"""Health check endpoint.

Learn: Simple GET endpoint that verifies the server is running
and the configured store is reachable.
"""

from fastapi import APIRouter, Depends

from skillswap import __version__
from skillswap.config import settings
from skillswap.storage import Store, get_store

router = APIRouter()


@router.get("/health")
async def health_check(store: Store = Depends(get_store)):
    """Check server health and storage connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        await store.ping()
        checks["storage"] = "ok"
    except Exception as e:
        checks["storage"] = f"error: {e}"

    status = "healthy" if checks["storage"] == "ok" else "degraded"
    return {"status": status, "backend": settings.storage_backend, **checks}
