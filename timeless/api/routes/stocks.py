"""
Instrument API Routes
Create, edit and delete the synthetic stocks shown on the runner board
"""

from datetime import tzinfo
import logging
import secrets
import string
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Any, Dict, List

from timeless.api.deps import get_display_zone, get_runtime, get_store
from timeless.config import settings
from timeless.domain.schemas.instrument import InstrumentCreate, InstrumentResponse, InstrumentUpdate
from timeless.domain.services.board_builder import decorate_instrument
from timeless.domain.services.price_resolver import sort_by_order
from timeless.infrastructure.store.document_store import (
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentStore,
)
from timeless.realtime.runtime import BoardRuntime
from timeless.utils.time import to_instant

logger = logging.getLogger(__name__)

router = APIRouter()

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_instrument_id() -> str:
    """Default key in the form stock-xxxx"""
    return "stock-" + "".join(secrets.choice(_ID_ALPHABET) for _ in range(4))


def _localize_apply_at(fields: Dict[str, Any], tz: tzinfo) -> Dict[str, Any]:
    if "apply_at" in fields:
        fields["apply_at"] = to_instant(fields["apply_at"], naive_tz=tz)
    return fields


@router.get("", response_model=List[InstrumentResponse])
async def list_instruments(
    store: DocumentStore = Depends(get_store),
    runtime: BoardRuntime = Depends(get_runtime),
    tz: tzinfo = Depends(get_display_zone),
):
    """
    All instruments for the admin console, unpublished ones included
    """
    now = runtime.now()
    snapshot = await store.stocks.get_all()
    return [
        InstrumentResponse.from_domain(decorate_instrument(instrument, now), tz)
        for instrument in sort_by_order(snapshot.records)
    ]


@router.post("", response_model=InstrumentResponse, status_code=201)
async def create_instrument(
    payload: InstrumentCreate,
    store: DocumentStore = Depends(get_store),
    runtime: BoardRuntime = Depends(get_runtime),
    tz: tzinfo = Depends(get_display_zone),
):
    """
    Create an instrument with defaults for everything not given
    """
    instrument_id = (payload.instrument_id or "").strip() or generate_instrument_id()
    fields = payload.model_dump(exclude={"instrument_id"})
    if fields["base_price"] is None:
        fields["base_price"] = settings.DEFAULT_BASE_PRICE
    if fields["order"] is None:
        fields["order"] = await store.stocks.next_order()
    _localize_apply_at(fields, tz)

    try:
        instrument = await store.stocks.create(instrument_id, fields)
    except DocumentExistsError as e:
        raise HTTPException(status_code=409, detail=str(e))

    logger.info("Created instrument %s", instrument_id)
    return InstrumentResponse.from_domain(decorate_instrument(instrument, runtime.now()), tz)


@router.put("/{instrument_id}", response_model=InstrumentResponse)
async def update_instrument(
    instrument_id: str,
    payload: InstrumentUpdate,
    store: DocumentStore = Depends(get_store),
    runtime: BoardRuntime = Depends(get_runtime),
    tz: tzinfo = Depends(get_display_zone),
):
    """
    Update an instrument; fields left out of the request keep their value
    """
    fields = _localize_apply_at(payload.model_dump(exclude_unset=True), tz)
    try:
        instrument = await store.stocks.upsert(instrument_id, fields)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info("Updated instrument %s (%s)", instrument_id, ", ".join(sorted(fields)) or "no fields")
    return InstrumentResponse.from_domain(decorate_instrument(instrument, runtime.now()), tz)


@router.delete("/{instrument_id}")
async def delete_instrument(
    instrument_id: str,
    confirm: bool = Query(False, description="Must be true to delete"),
    store: DocumentStore = Depends(get_store),
):
    """
    Delete an instrument (requires confirm=true)
    """
    if not confirm:
        raise HTTPException(status_code=400, detail="Deletion requires confirm=true")

    try:
        await store.stocks.delete(instrument_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info("Deleted instrument %s", instrument_id)
    return {"status": "deleted", "instrument_id": instrument_id}
