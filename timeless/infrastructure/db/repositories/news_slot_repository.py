"""
News Slot Repository
Read and merge-write the five fixed news slots
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Any, Dict, List, Optional

from timeless.infrastructure.db.models import NewsSlotModel
from timeless.domain.models import NEWS_SLOT_FIELDS, NEWS_SLOT_IDS, NewsSlot
from timeless.utils.time import now_utc

WRITABLE_FIELDS = NEWS_SLOT_FIELDS


class NewsSlotRepository:
    """Repository for NewsSlot data access"""

    def __init__(self, session: AsyncSession):
        """Initialize with database session"""
        self.session = session

    async def list_all(self) -> List[NewsSlot]:
        """
        Get all stored slots ordered by rank

        Returns:
            Stored slots (may be fewer than five before provisioning)
        """
        result = await self.session.execute(
            select(NewsSlotModel).order_by(NewsSlotModel.order.asc())
        )
        return [self._to_domain(model) for model in result.scalars().all()]

    async def get(self, slot_id: str) -> Optional[NewsSlot]:
        model = await self.session.get(NewsSlotModel, slot_id)
        return self._to_domain(model) if model else None

    async def provision(self) -> int:
        """
        Create any missing slot with empty content

        Returns:
            Number of slots created
        """
        result = await self.session.execute(select(NewsSlotModel.slot_id))
        existing = set(result.scalars().all())
        created = 0
        for index, slot_id in enumerate(NEWS_SLOT_IDS, start=1):
            if slot_id in existing:
                continue
            self.session.add(
                NewsSlotModel(
                    slot_id=slot_id,
                    order=index,
                    headline="",
                    body="",
                    publish_at=None,
                    updated_at=now_utc(),
                )
            )
            created += 1
        await self.session.flush()
        return created

    async def merge(self, slot_id: str, fields: Dict[str, Any]) -> NewsSlot:
        """
        Set-with-merge: only the given fields change, the slot is created if missing

        Args:
            slot_id: One of n1..n5
            fields: Any of headline, body, publish_at

        Returns:
            Slot as stored after the write
        """
        model = await self.session.get(NewsSlotModel, slot_id)
        if model is None:
            model = NewsSlotModel(
                slot_id=slot_id,
                order=NEWS_SLOT_IDS.index(slot_id) + 1,
                headline="",
                body="",
            )
            self.session.add(model)

        for name in WRITABLE_FIELDS:
            if name in fields:
                value = fields[name]
                if name != "publish_at" and value is None:
                    value = ""
                setattr(model, name, value)
        model.updated_at = now_utc()

        await self.session.flush()
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: Optional[NewsSlotModel]) -> Optional[NewsSlot]:
        """Convert database model to domain entity"""
        if model is None:
            return None

        return NewsSlot(
            slot_id=model.slot_id,
            order=model.order,
            headline=model.headline or "",
            body=model.body or "",
            publish_at=model.publish_at,
            updated_at=model.updated_at,
        )
