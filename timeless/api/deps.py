"""Request-scoped accessors for the objects wired in the lifespan."""

from datetime import tzinfo

from fastapi import HTTPException, Request

from timeless.config import settings
from timeless.infrastructure.store.document_store import DocumentStore
from timeless.realtime.runtime import BoardRuntime
from timeless.utils.time import get_zone


def get_store(request: Request) -> DocumentStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Document store not initialized")
    return store


def get_runtime(request: Request) -> BoardRuntime:
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise HTTPException(status_code=503, detail="Board runtime not initialized")
    return runtime


def get_display_zone() -> tzinfo:
    """Zone for datetime-local values exchanged with the admin console"""
    return get_zone(settings.TIMEZONE)
