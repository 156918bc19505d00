"""
Store Factory
Build the document store for the configured backend
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from timeless.infrastructure.store.document_store import DocumentStore
from timeless.infrastructure.store.memory_store import MemoryInstrumentCollection, MemoryNewsCollection
from timeless.infrastructure.store.sql_store import SqlInstrumentCollection, SqlNewsCollection

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("sql", "memory")


def build_store(
    backend: str = "sql",
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> DocumentStore:
    """
    Create the news + instrument collections

    Args:
        backend: "sql" or "memory"
        session_factory: Required for "sql"
    """
    backend = (backend or "sql").strip().lower()
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(f"Unsupported STORE_BACKEND: {backend}")

    if backend == "memory":
        logger.info("Using in-memory document store")
        return DocumentStore(
            news=MemoryNewsCollection(),
            stocks=MemoryInstrumentCollection(),
            backend=backend,
        )

    if session_factory is None:
        raise ValueError("session_factory is required for the sql store")
    logger.info("Using SQL document store")
    return DocumentStore(
        news=SqlNewsCollection(session_factory),
        stocks=SqlInstrumentCollection(session_factory),
        backend=backend,
    )
