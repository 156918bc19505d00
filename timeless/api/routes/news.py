"""
News Slot API Routes
Edit the five scheduled news slots

Slots are fixed (n1..n5): saving merges fields into a slot, deleting
clears it.
"""

from datetime import tzinfo
import logging
from fastapi import APIRouter, Depends, HTTPException
from typing import Any, Dict, List

from timeless.api.deps import get_display_zone, get_runtime, get_store
from timeless.domain.schemas.news import (
    AdminPreviewResponse,
    NewsSlotBulkWrite,
    NewsSlotResponse,
    NewsSlotWrite,
)
from timeless.domain.services.board_builder import build_admin_preview
from timeless.infrastructure.store.document_store import DocumentStore, UnknownSlotError
from timeless.realtime.runtime import BoardRuntime
from timeless.utils.time import to_instant

logger = logging.getLogger(__name__)

router = APIRouter()


def to_slot_fields(write: NewsSlotWrite, tz: tzinfo) -> Dict[str, Any]:
    """Fields present in the request, with publish_at stored as UTC"""
    fields = write.model_dump(exclude_unset=True, include={"headline", "body", "publish_at"})
    if "publish_at" in fields:
        fields["publish_at"] = to_instant(fields["publish_at"], naive_tz=tz)
    return fields


@router.get("", response_model=List[NewsSlotResponse])
async def list_news_slots(
    store: DocumentStore = Depends(get_store),
    tz: tzinfo = Depends(get_display_zone),
):
    """
    Get all five news slots in order
    """
    snapshot = await store.news.get_all()
    return [NewsSlotResponse.from_domain(slot, tz) for slot in snapshot.records]


@router.put("", response_model=List[NewsSlotResponse])
async def save_all_news_slots(
    writes: List[NewsSlotBulkWrite],
    store: DocumentStore = Depends(get_store),
    tz: tzinfo = Depends(get_display_zone),
):
    """
    Save several slots at once and return all five
    """
    payload = {write.slot_id: to_slot_fields(write, tz) for write in writes}
    try:
        await store.news.upsert_many(payload)
    except UnknownSlotError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info("Saved %d news slots", len(payload))
    snapshot = await store.news.get_all()
    return [NewsSlotResponse.from_domain(slot, tz) for slot in snapshot.records]


@router.put("/{slot_id}", response_model=NewsSlotResponse)
async def save_news_slot(
    slot_id: str,
    write: NewsSlotWrite,
    store: DocumentStore = Depends(get_store),
    tz: tzinfo = Depends(get_display_zone),
):
    """
    Save one slot (only the fields sent are changed)
    """
    try:
        slot = await store.news.upsert(slot_id, to_slot_fields(write, tz))
    except UnknownSlotError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info("Saved news slot %s", slot.label)
    return NewsSlotResponse.from_domain(slot, tz)


@router.delete("/{slot_id}", response_model=NewsSlotResponse)
async def clear_news_slot(
    slot_id: str,
    store: DocumentStore = Depends(get_store),
    tz: tzinfo = Depends(get_display_zone),
):
    """
    Clear a slot's headline, body and publish time
    """
    try:
        slot = await store.news.delete(slot_id)
    except UnknownSlotError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info("Cleared news slot %s", slot.label)
    return NewsSlotResponse.from_domain(slot, tz)


@router.get("/preview", response_model=AdminPreviewResponse)
async def preview_current_news(
    store: DocumentStore = Depends(get_store),
    runtime: BoardRuntime = Depends(get_runtime),
    tz: tzinfo = Depends(get_display_zone),
):
    """
    Which slot the runner shows right now
    """
    snapshot = await store.news.get_all()
    preview = build_admin_preview(snapshot.records, runtime.now())
    return AdminPreviewResponse(
        current_news=(
            NewsSlotResponse.from_domain(preview.current_news, tz)
            if preview.current_news is not None
            else None
        ),
        message=preview.message,
        generated_at=preview.generated_at,
    )
