"""
Document store
Per-collection get_all / get / subscribe / upsert / delete with push snapshots.

Each collection delivers its full current snapshot to a new subscriber right
away and to every subscriber after each successful write.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from timeless.domain.models import NEWS_SLOT_IDS, Instrument, NewsSlot
from timeless.infrastructure.store.subscriber_registry import SubscriberRegistry, deliver
from timeless.utils.time import now_utc

logger = logging.getLogger(__name__)

NEWS_COLLECTION = "news"
INSTRUMENT_COLLECTION = "stocks"

CLEARED_SLOT_FIELDS = {"headline": "", "body": "", "publish_at": None}

# Instrument text fields that are never stored as null
INSTRUMENT_TEXT_FIELDS = ("name", "description")

T = TypeVar("T")
Unsubscribe = Callable[[], Awaitable[None]]


class UnknownSlotError(LookupError):
    """Key is not one of the five fixed news slots"""


class DocumentNotFoundError(LookupError):
    """No document with this key"""


class DocumentExistsError(ValueError):
    """A document with this key already exists"""


@dataclass(frozen=True)
class Snapshot(Generic[T]):
    """Full state of one collection at one moment"""
    collection: str
    records: Tuple[T, ...]
    taken_at: datetime

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)


class Collection(ABC, Generic[T]):
    """Shared subscription plumbing for one named collection"""

    name: str = ""

    def __init__(self) -> None:
        self._registry = SubscriberRegistry()

    @abstractmethod
    async def _load(self) -> List[T]:
        """Records as stored"""

    @abstractmethod
    def _key_of(self, record: T) -> str:
        ...

    async def get_all(self) -> Snapshot[T]:
        records = await self._load()
        return Snapshot(collection=self.name, records=tuple(records), taken_at=now_utc())

    async def get(self, key: str) -> Optional[T]:
        snapshot = await self.get_all()
        for record in snapshot.records:
            if self._key_of(record) == key:
                return record
        return None

    async def subscribe(self, callback: Callable[[Snapshot[T]], Any]) -> Unsubscribe:
        """
        Register a snapshot callback (sync or async)

        The callback gets the current snapshot immediately, then a fresh one
        after every write. Returns an async unsubscribe function.
        """
        self._registry.subscribe(self.name, callback)
        await deliver(callback, await self.get_all())

        async def unsubscribe() -> None:
            self._registry.unsubscribe(self.name, callback)

        return unsubscribe

    def subscriber_count(self) -> int:
        return self._registry.count(self.name)

    async def _changed(self) -> None:
        snapshot = await self.get_all()
        logger.debug("Publishing %s snapshot (%d records)", self.name, len(snapshot))
        await self._registry.publish(self.name, snapshot)


# ------------------------------------------------------------------
# News
# ------------------------------------------------------------------

class NewsCollection(Collection[NewsSlot]):
    """
    Exactly five slots, n1..n5

    Snapshots always contain all five; slots missing from storage show up
    empty. delete() clears a slot instead of removing it.
    """

    name = NEWS_COLLECTION

    @abstractmethod
    async def _stored(self) -> List[NewsSlot]:
        ...

    @abstractmethod
    async def _merge(self, slot_id: str, fields: Dict[str, Any]) -> NewsSlot:
        ...

    @abstractmethod
    async def provision(self) -> int:
        """Create missing slots; returns how many were created"""

    def _key_of(self, record: NewsSlot) -> str:
        return record.slot_id

    async def _load(self) -> List[NewsSlot]:
        stored = {slot.slot_id: slot for slot in await self._stored()}
        return [stored.get(slot_id) or NewsSlot.empty(slot_id) for slot_id in NEWS_SLOT_IDS]

    @staticmethod
    def check_slot(slot_id: str) -> None:
        if slot_id not in NEWS_SLOT_IDS:
            raise UnknownSlotError(f"Unknown news slot: {slot_id}")

    async def upsert(self, slot_id: str, fields: Dict[str, Any]) -> NewsSlot:
        """Merge the given fields into one slot"""
        self.check_slot(slot_id)
        slot = await self._merge(slot_id, fields)
        await self._changed()
        return slot

    async def upsert_many(self, writes: Dict[str, Dict[str, Any]]) -> List[NewsSlot]:
        """Save several slots, publishing a single snapshot afterwards"""
        for slot_id in writes:
            self.check_slot(slot_id)
        slots = await self._merge_many(writes)
        await self._changed()
        return slots

    async def _merge_many(self, writes: Dict[str, Dict[str, Any]]) -> List[NewsSlot]:
        return [await self._merge(slot_id, fields) for slot_id, fields in writes.items()]

    async def delete(self, slot_id: str) -> NewsSlot:
        """Clear a slot; slots themselves are never removed"""
        return await self.upsert(slot_id, dict(CLEARED_SLOT_FIELDS))


# ------------------------------------------------------------------
# Instruments
# ------------------------------------------------------------------

class InstrumentCollection(Collection[Instrument]):
    """Variable set of instruments keyed by operator-chosen id"""

    name = INSTRUMENT_COLLECTION

    @abstractmethod
    async def _insert(self, key: str, fields: Dict[str, Any]) -> Optional[Instrument]:
        """Insert; None when the key is taken"""

    @abstractmethod
    async def _update(self, key: str, fields: Dict[str, Any]) -> Optional[Instrument]:
        """Update; None when the key is missing"""

    @abstractmethod
    async def _remove(self, key: str) -> bool:
        ...

    @abstractmethod
    async def next_order(self) -> int:
        """Display rank that appends after the current last instrument"""

    def _key_of(self, record: Instrument) -> str:
        return record.instrument_id

    async def create(self, key: str, fields: Dict[str, Any]) -> Instrument:
        instrument = await self._insert(key, _with_text_defaults(fields))
        if instrument is None:
            raise DocumentExistsError(f"Instrument already exists: {key}")
        await self._changed()
        return instrument

    async def upsert(self, key: str, fields: Dict[str, Any]) -> Instrument:
        """Update an existing instrument in place"""
        instrument = await self._update(key, _with_text_defaults(fields))
        if instrument is None:
            raise DocumentNotFoundError(f"Instrument not found: {key}")
        await self._changed()
        return instrument

    async def delete(self, key: str) -> None:
        if not await self._remove(key):
            raise DocumentNotFoundError(f"Instrument not found: {key}")
        await self._changed()


@dataclass
class DocumentStore:
    """The two collections the dashboard works with"""
    news: NewsCollection
    stocks: InstrumentCollection
    backend: str

    async def ping(self) -> bool:
        """Lightweight health check"""
        try:
            await self.news.get_all()
            return True
        except Exception:
            logger.exception("Document store health check failed")
            return False


def _with_text_defaults(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of ``fields`` with null name/description replaced by an empty string"""
    fields = dict(fields)
    for name in INSTRUMENT_TEXT_FIELDS:
        if name in fields and fields[name] is None:
            fields[name] = ""
    return fields
