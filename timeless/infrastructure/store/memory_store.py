"""
In-process collections.
Same semantics as the SQL store, nothing survives a restart.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Optional

from timeless.domain.models import INSTRUMENT_FIELDS, NEWS_SLOT_FIELDS, NEWS_SLOT_IDS, Instrument, NewsSlot
from timeless.infrastructure.store.document_store import InstrumentCollection, NewsCollection
from timeless.utils.numbers import to_number
from timeless.utils.time import now_utc


class MemoryNewsCollection(NewsCollection):
    def __init__(self) -> None:
        super().__init__()
        self._slots: Dict[str, NewsSlot] = {}

    async def _stored(self) -> List[NewsSlot]:
        return sorted(self._slots.values(), key=lambda s: s.order)

    async def _merge(self, slot_id: str, fields: Dict[str, Any]) -> NewsSlot:
        current = self._slots.get(slot_id) or NewsSlot.empty(slot_id)
        changes = {name: fields[name] for name in NEWS_SLOT_FIELDS if name in fields}
        for name in ("headline", "body"):
            if name in changes and changes[name] is None:
                changes[name] = ""
        slot = replace(current, **changes, updated_at=now_utc())
        self._slots[slot_id] = slot
        return slot

    async def provision(self) -> int:
        created = 0
        for slot_id in NEWS_SLOT_IDS:
            if slot_id not in self._slots:
                self._slots[slot_id] = replace(NewsSlot.empty(slot_id), updated_at=now_utc())
                created += 1
        if created:
            await self._changed()
        return created


class MemoryInstrumentCollection(InstrumentCollection):
    def __init__(self) -> None:
        super().__init__()
        # dicts keep insertion order, which stands in for fetch order
        self._instruments: Dict[str, Instrument] = {}

    async def _load(self) -> List[Instrument]:
        return list(self._instruments.values())

    async def get(self, key: str) -> Optional[Instrument]:
        return self._instruments.get(key)

    async def _insert(self, key: str, fields: Dict[str, Any]) -> Optional[Instrument]:
        if key in self._instruments:
            return None
        instrument = Instrument(instrument_id=key, updated_at=now_utc(), **_pick(fields))
        self._instruments[key] = instrument
        return instrument

    async def _update(self, key: str, fields: Dict[str, Any]) -> Optional[Instrument]:
        current = self._instruments.get(key)
        if current is None:
            return None
        instrument = replace(current, **_pick(fields), updated_at=now_utc())
        self._instruments[key] = instrument
        return instrument

    async def _remove(self, key: str) -> bool:
        return self._instruments.pop(key, None) is not None

    async def next_order(self) -> int:
        orders = [to_number(s.order) for s in self._instruments.values()]
        orders = [o for o in orders if o is not None]
        return int(max(orders)) + 1 if orders else 1


def _pick(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {name: fields[name] for name in INSTRUMENT_FIELDS if name in fields}
