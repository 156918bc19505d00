from pydantic import BaseModel, Field
from datetime import datetime, tzinfo
from typing import Optional

from timeless.domain.models import NewsSlot
from timeless.utils.time import to_instant, to_input_value, UTC


class NewsSlotWrite(BaseModel):
    """Fields an operator saves for one slot; omitted fields stay unchanged"""
    headline: Optional[str] = None
    body: Optional[str] = None
    publish_at: Optional[datetime] = Field(
        None, description="Naive values are read in the configured TIMEZONE"
    )


class NewsSlotBulkWrite(NewsSlotWrite):
    slot_id: str


class NewsSlotResponse(BaseModel):
    slot_id: str
    label: str
    order: int
    headline: str
    body: str
    publish_at: Optional[datetime]
    publish_at_input: str
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, slot: NewsSlot, tz: tzinfo = UTC) -> "NewsSlotResponse":
        return cls(
            slot_id=slot.slot_id,
            label=slot.label,
            order=slot.order,
            headline=slot.headline,
            body=slot.body,
            publish_at=to_instant(slot.publish_at),
            publish_at_input=to_input_value(slot.publish_at, tz),
            updated_at=to_instant(slot.updated_at),
        )


class AdminPreviewResponse(BaseModel):
    current_news: Optional[NewsSlotResponse]
    message: str
    generated_at: datetime
