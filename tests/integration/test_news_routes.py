import pytest

from timeless.domain.services.board_builder import NO_NEWS_MESSAGE


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_news_slots(client):
    resp = await client.get("/api/v1/news")
    assert resp.status_code == 200
    data = resp.json()
    assert [d["label"] for d in data] == ["N1", "N2", "N3", "N4", "N5"]
    assert all(d["publish_at"] is None and d["publish_at_input"] == "" for d in data)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_save_one_slot_merges(client):
    resp = await client.put(
        "/api/v1/news/n2",
        json={"headline": "Market opens", "body": "Bell rings", "publish_at": "2026-03-01T11:00"},
    )
    assert resp.status_code == 200
    assert resp.json()["publish_at_input"] == "2026-03-01T11:00"

    resp = await client.put("/api/v1/news/n2", json={"body": "Updated body"})
    data = resp.json()
    assert data["headline"] == "Market opens"
    assert data["body"] == "Updated body"
    assert data["publish_at_input"] == "2026-03-01T11:00"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_save_unknown_slot_is_404(client):
    resp = await client.put("/api/v1/news/n9", json={"headline": "nope"})
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_save_all_slots(client):
    resp = await client.put(
        "/api/v1/news",
        json=[
            {"slot_id": "n1", "headline": "First"},
            {"slot_id": "n3", "headline": "Third", "publish_at": "2026-03-01T09:00:00Z"},
        ],
    )
    assert resp.status_code == 200
    data = resp.json()
    assert len(data) == 5
    assert data[0]["headline"] == "First"
    assert data[2]["publish_at_input"] == "2026-03-01T09:00"

    resp = await client.put("/api/v1/news", json=[{"slot_id": "n1"}, {"slot_id": "n7", "headline": "x"}])
    assert resp.status_code == 404
    assert (await client.get("/api/v1/news")).json()[0]["headline"] == "First"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_clear_slot(client):
    await client.put("/api/v1/news/n4", json={"headline": "Temp", "publish_at": "2026-03-01T10:00"})
    resp = await client.delete("/api/v1/news/n4")
    assert resp.status_code == 200
    data = resp.json()
    assert data["headline"] == ""
    assert data["publish_at"] is None
    assert len((await client.get("/api/v1/news")).json()) == 5

    assert (await client.delete("/api/v1/news/zz")).status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_preview_follows_the_clock(client, clock):
    resp = await client.get("/api/v1/news/preview")
    assert resp.json()["message"] == NO_NEWS_MESSAGE
    assert resp.json()["current_news"] is None

    # clock is 12:00 UTC
    await client.put("/api/v1/news/n1", json={"headline": "Morning", "publish_at": "2026-03-01T08:00"})
    await client.put("/api/v1/news/n2", json={"headline": "Afternoon", "publish_at": "2026-03-01T13:00"})

    resp = await client.get("/api/v1/news/preview")
    assert resp.json()["message"] == "N1 — Morning"

    clock.advance(hours=1)
    resp = await client.get("/api/v1/news/preview")
    assert resp.json()["current_news"]["slot_id"] == "n2"
