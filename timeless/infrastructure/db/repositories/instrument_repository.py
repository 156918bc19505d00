"""
Instrument Repository
CRUD operations for the operator-managed stock list
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from typing import Any, Dict, List, Optional

from timeless.infrastructure.db.models import InstrumentModel
from timeless.domain.models import INSTRUMENT_FIELDS, Instrument
from timeless.utils.time import now_utc

WRITABLE_FIELDS = INSTRUMENT_FIELDS


class InstrumentRepository:
    """Repository for Instrument data access"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[Instrument]:
        """All instruments in fetch order (order ascending, then id)"""
        result = await self.session.execute(
            select(InstrumentModel).order_by(
                InstrumentModel.order.asc().nulls_last(),
                InstrumentModel.instrument_id.asc(),
            )
        )
        return [self._to_domain(model) for model in result.scalars().all()]

    async def get(self, instrument_id: str) -> Optional[Instrument]:
        model = await self.session.get(InstrumentModel, instrument_id)
        return self._to_domain(model) if model else None

    async def max_order(self) -> Optional[int]:
        result = await self.session.execute(select(func.max(InstrumentModel.order)))
        return result.scalar_one_or_none()

    async def create(self, instrument_id: str, fields: Dict[str, Any]) -> Instrument:
        """
        Insert a new instrument

        Args:
            instrument_id: Operator-chosen key (caller checks uniqueness)
            fields: Initial values for WRITABLE_FIELDS

        Returns:
            Created Instrument
        """
        model = InstrumentModel(instrument_id=instrument_id, updated_at=now_utc())
        self._apply(model, fields)
        self.session.add(model)
        await self.session.flush()
        return self._to_domain(model)

    async def update(self, instrument_id: str, fields: Dict[str, Any]) -> Optional[Instrument]:
        """
        Update given fields of an existing instrument

        Returns:
            Updated Instrument, or None if it does not exist
        """
        model = await self.session.get(InstrumentModel, instrument_id)
        if model is None:
            return None
        self._apply(model, fields)
        model.updated_at = now_utc()
        await self.session.flush()
        return self._to_domain(model)

    async def delete(self, instrument_id: str) -> bool:
        model = await self.session.get(InstrumentModel, instrument_id)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.flush()
        return True

    @staticmethod
    def _apply(model: InstrumentModel, fields: Dict[str, Any]) -> None:
        for name in WRITABLE_FIELDS:
            if name in fields:
                setattr(model, name, fields[name])

    @staticmethod
    def _to_domain(model: Optional[InstrumentModel]) -> Optional[Instrument]:
        """Convert database model to domain entity"""
        if model is None:
            return None

        return Instrument(
            instrument_id=model.instrument_id,
            name=model.name or "",
            description=model.description or "",
            sector=model.sector,
            base_price=model.base_price,
            delta_pct=model.delta_pct,
            order=model.order,
            is_published=model.is_published,
            scheduled_delta=model.scheduled_delta,
            apply_at=model.apply_at,
            updated_at=model.updated_at,
        )
