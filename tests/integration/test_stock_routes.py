import re

import pytest

from timeless.api.routes.stocks import generate_instrument_id


def test_generated_ids_look_like_stock_keys():
    assert re.fullmatch(r"stock-[a-z0-9]{4}", generate_instrument_id())


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_with_defaults(client):
    resp = await client.post("/api/v1/stocks", json={})
    assert resp.status_code == 201
    data = resp.json()
    assert data["instrument_id"].startswith("stock-")
    assert data["name"] == "New stock"
    assert data["description"] == "Description"
    assert data["base_price"] == 1000.0
    assert data["order"] == 1
    assert data["is_published"] is True
    assert data["current_price"] == 1000.0
    assert data["price_label"] == "1,000.00"
    assert data["delta_label"] == "0%"
    assert data["trend"] == "flat"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_appends_order_and_rejects_duplicates(client):
    await client.post("/api/v1/stocks", json={"instrument_id": "first", "order": 3})
    resp = await client.post(
        "/api/v1/stocks", json={"instrument_id": "acme", "base_price": 200, "delta_pct": 5}
    )
    data = resp.json()
    assert data["order"] == 4
    assert data["current_price"] == 210.0
    assert data["trend"] == "up"

    resp = await client.post("/api/v1/stocks", json={"instrument_id": "acme"})
    assert resp.status_code == 409


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_applies_scheduled_delta(client):
    await client.post("/api/v1/stocks", json={"instrument_id": "acme", "base_price": 200})

    # clock is 12:00 UTC
    resp = await client.put(
        "/api/v1/stocks/acme",
        json={"scheduled_delta": -10, "apply_at": "2026-03-01T11:00", "sector": "Energy"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["effective_delta"] == -10.0
    assert data["current_price"] == 180.0
    assert data["delta_label"] == "-10%"
    assert data["trend"] == "down"
    assert data["sector"] == "Energy"
    assert data["apply_at_input"] == "2026-03-01T11:00"
    assert data["delta_pct"] == 0.0


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_missing_is_404(client):
    resp = await client.put("/api/v1/stocks/ghost", json={"name": "Ghost"})
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_requires_confirmation(client):
    await client.post("/api/v1/stocks", json={"instrument_id": "acme"})

    resp = await client.delete("/api/v1/stocks/acme")
    assert resp.status_code == 400

    resp = await client.delete("/api/v1/stocks/acme", params={"confirm": "true"})
    assert resp.status_code == 200
    assert resp.json() == {"status": "deleted", "instrument_id": "acme"}

    resp = await client.delete("/api/v1/stocks/acme", params={"confirm": "true"})
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_admin_list_includes_unpublished_in_order(client):
    await client.post("/api/v1/stocks", json={"instrument_id": "late", "order": 5})
    await client.post("/api/v1/stocks", json={"instrument_id": "hidden", "order": 1, "is_published": False})

    resp = await client.get("/api/v1/stocks")
    assert resp.status_code == 200
    data = resp.json()
    assert [d["instrument_id"] for d in data] == ["hidden", "late"]
    assert data[0]["is_published"] is False


@pytest.mark.asyncio
@pytest.mark.integration
async def test_update_with_null_text_fields_stores_empty_strings(client):
    await client.post("/api/v1/stocks", json={"instrument_id": "acme", "name": "Acme"})

    resp = await client.put("/api/v1/stocks/acme", json={"name": None, "description": None})
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == ""
    assert data["description"] == ""

    listed = (await client.get("/api/v1/stocks")).json()
    assert listed[0]["name"] == ""
