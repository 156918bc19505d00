"""SQL-backed collections: one session per store operation."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from timeless.domain.models import Instrument, NewsSlot
from timeless.infrastructure.db.repositories.instrument_repository import InstrumentRepository
from timeless.infrastructure.db.repositories.news_slot_repository import NewsSlotRepository
from timeless.infrastructure.store.document_store import InstrumentCollection, NewsCollection


class SqlNewsCollection(NewsCollection):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__()
        self._session_factory = session_factory

    async def _stored(self) -> List[NewsSlot]:
        async with self._session_factory() as session:
            return await NewsSlotRepository(session).list_all()

    async def _merge(self, slot_id: str, fields: Dict[str, Any]) -> NewsSlot:
        async with self._session_factory() as session:
            slot = await NewsSlotRepository(session).merge(slot_id, fields)
            await session.commit()
            return slot

    async def _merge_many(self, writes: Dict[str, Dict[str, Any]]) -> List[NewsSlot]:
        # one transaction: a failed slot rolls back the whole batch
        async with self._session_factory() as session:
            repo = NewsSlotRepository(session)
            slots = [await repo.merge(slot_id, fields) for slot_id, fields in writes.items()]
            await session.commit()
            return slots

    async def provision(self) -> int:
        async with self._session_factory() as session:
            created = await NewsSlotRepository(session).provision()
            await session.commit()
        if created:
            await self._changed()
        return created


class SqlInstrumentCollection(InstrumentCollection):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        super().__init__()
        self._session_factory = session_factory

    async def _load(self) -> List[Instrument]:
        async with self._session_factory() as session:
            return await InstrumentRepository(session).list_all()

    async def get(self, key: str) -> Optional[Instrument]:
        async with self._session_factory() as session:
            return await InstrumentRepository(session).get(key)

    async def _insert(self, key: str, fields: Dict[str, Any]) -> Optional[Instrument]:
        async with self._session_factory() as session:
            repo = InstrumentRepository(session)
            if await repo.get(key) is not None:
                return None
            instrument = await repo.create(key, fields)
            await session.commit()
            return instrument

    async def _update(self, key: str, fields: Dict[str, Any]) -> Optional[Instrument]:
        async with self._session_factory() as session:
            instrument = await InstrumentRepository(session).update(key, fields)
            if instrument is not None:
                await session.commit()
            return instrument

    async def _remove(self, key: str) -> bool:
        async with self._session_factory() as session:
            removed = await InstrumentRepository(session).delete(key)
            if removed:
                await session.commit()
            return removed

    async def next_order(self) -> int:
        async with self._session_factory() as session:
            last = await InstrumentRepository(session).max_order()
        return (last or 0) + 1
