from datetime import datetime, timezone

import pytest

from timeless.infrastructure.db.repositories.instrument_repository import InstrumentRepository
from timeless.infrastructure.db.repositories.news_slot_repository import NewsSlotRepository
from timeless.utils.time import to_instant

PUBLISH_AT = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_news_slot_provision_is_idempotent(db_session):
    repo = NewsSlotRepository(db_session)
    assert await repo.provision() == 5
    assert await repo.provision() == 0
    await db_session.commit()

    slots = await repo.list_all()
    assert [s.slot_id for s in slots] == ["n1", "n2", "n3", "n4", "n5"]
    assert all(s.headline == "" and s.publish_at is None for s in slots)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_news_slot_merge_keeps_other_fields(db_session):
    repo = NewsSlotRepository(db_session)
    await repo.merge("n4", {"headline": "Rates cut", "body": "Details"})
    slot = await repo.merge("n4", {"publish_at": PUBLISH_AT, "headline": None})
    await db_session.commit()

    assert slot.order == 4
    assert slot.headline == ""
    assert slot.body == "Details"
    assert to_instant(slot.publish_at) == PUBLISH_AT

    stored = await repo.get("n4")
    assert to_instant(stored.publish_at) == PUBLISH_AT
    assert await repo.get("n1") is None


@pytest.mark.asyncio
@pytest.mark.integration
async def test_instrument_repository_crud(db_session):
    repo = InstrumentRepository(db_session)
    assert await repo.max_order() is None

    await repo.create("b", {"name": "Beta", "base_price": 50.0, "order": 2})
    await repo.create("none", {"name": "Unordered", "base_price": 1.0})
    created = await repo.create("a", {"name": "Alpha", "base_price": 1000.125, "order": 1, "sector": "Tech"})
    await db_session.commit()

    assert created.base_price == 1000.125
    assert created.sector == "Tech"
    assert await repo.max_order() == 2
    assert [i.instrument_id for i in await repo.list_all()] == ["a", "b", "none"]

    updated = await repo.update("a", {"delta_pct": -2.5, "is_published": False})
    assert updated.delta_pct == -2.5
    assert updated.is_published is False
    assert updated.name == "Alpha"
    assert await repo.update("ghost", {"name": "x"}) is None

    assert await repo.delete("b") is True
    assert await repo.delete("b") is False
    await db_session.commit()
    assert [i.instrument_id for i in await repo.list_all()] == ["a", "none"]
