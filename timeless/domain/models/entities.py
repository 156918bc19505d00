"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Tuple


NEWS_SLOT_IDS: Tuple[str, ...] = ("n1", "n2", "n3", "n4", "n5")

# Fields an operator may write
NEWS_SLOT_FIELDS: Tuple[str, ...] = ("headline", "body", "publish_at")
INSTRUMENT_FIELDS: Tuple[str, ...] = (
    "name",
    "description",
    "sector",
    "base_price",
    "delta_pct",
    "order",
    "is_published",
    "scheduled_delta",
    "apply_at",
)


class Trend(str, Enum):
    """Direction of an instrument's effective delta"""
    UP = "up"
    DOWN = "down"
    FLAT = "flat"


@dataclass(frozen=True)
class NewsSlot:
    """One of the five fixed news announcement slots"""
    slot_id: str
    order: int
    headline: str = ""
    body: str = ""
    publish_at: Any = None
    updated_at: Optional[datetime] = None

    @classmethod
    def empty(cls, slot_id: str) -> "NewsSlot":
        """Unscheduled slot with no content"""
        return cls(slot_id=slot_id, order=NEWS_SLOT_IDS.index(slot_id) + 1)

    @property
    def label(self) -> str:
        return self.slot_id.upper()


@dataclass(frozen=True)
class Instrument:
    """
    Synthetic stock shown on the runner board.

    Numeric and time fields hold whatever the store delivered; the
    resolver coerces them on every evaluation.
    """
    instrument_id: str
    name: str = ""
    description: str = ""
    sector: Optional[str] = None
    base_price: Any = None
    delta_pct: Any = 0
    order: Any = None
    is_published: Optional[bool] = True
    scheduled_delta: Any = None
    apply_at: Any = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class ResolvedPrice:
    """Effective delta and derived price at one instant; None means unavailable"""
    effective_delta: Optional[Decimal]
    current_price: Optional[Decimal]

    @property
    def is_available(self) -> bool:
        return self.current_price is not None


@dataclass(frozen=True)
class BoardStock:
    """Instrument decorated for display"""
    instrument: Instrument
    effective_delta: Optional[Decimal]
    current_price: Optional[Decimal]
    delta_label: str
    price_label: str
    trend: Trend


@dataclass(frozen=True)
class RunnerBoard:
    """Everything the runner screen shows at one instant"""
    current_news: Optional[NewsSlot]
    stocks: Tuple[BoardStock, ...]
    generated_at: datetime


@dataclass(frozen=True)
class AdminPreview:
    """Which news slot the runner would show right now"""
    current_news: Optional[NewsSlot]
    message: str
    generated_at: datetime
