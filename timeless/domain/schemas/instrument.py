from pydantic import BaseModel, Field
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Any, Optional

from timeless.domain.models import BoardStock, Instrument
from timeless.utils.numbers import to_number
from timeless.utils.time import to_instant, to_input_value, UTC

DEFAULT_NAME = "New stock"
DEFAULT_DESCRIPTION = "Description"


def as_float(value: Any) -> Optional[float]:
    """JSON-safe number: non-finite or non-numeric values become null"""
    number = value if isinstance(value, Decimal) else to_number(value)
    return float(number) if number is not None and number.is_finite() else None


def as_int(value: Any) -> Optional[int]:
    number = to_number(value)
    return int(number) if number is not None else None


class InstrumentCreate(BaseModel):
    instrument_id: Optional[str] = Field(
        None, max_length=64, description="Operator-chosen key; generated when omitted"
    )
    name: str = DEFAULT_NAME
    description: str = DEFAULT_DESCRIPTION
    sector: Optional[str] = None
    base_price: Optional[float] = Field(None, description="Defaults to DEFAULT_BASE_PRICE")
    delta_pct: float = 0.0
    order: Optional[int] = Field(None, description="Defaults to after the last instrument")
    is_published: bool = True
    scheduled_delta: Optional[float] = None
    apply_at: Optional[datetime] = None


class InstrumentUpdate(BaseModel):
    """Partial update; only fields present in the request change"""
    name: Optional[str] = None
    description: Optional[str] = None
    sector: Optional[str] = None
    base_price: Optional[float] = None
    delta_pct: Optional[float] = None
    order: Optional[int] = None
    is_published: Optional[bool] = None
    scheduled_delta: Optional[float] = None
    apply_at: Optional[datetime] = None


class BoardStockResponse(BaseModel):
    instrument_id: str
    name: str
    description: str
    sector: Optional[str]
    effective_delta: Optional[float]
    current_price: Optional[float] = Field(..., description="null when the price is unavailable")
    delta_label: str
    price_label: str
    trend: str

    @classmethod
    def from_domain(cls, stock: BoardStock) -> "BoardStockResponse":
        instrument = stock.instrument
        return cls(
            instrument_id=instrument.instrument_id,
            name=instrument.name or "",
            description=instrument.description or "",
            sector=instrument.sector or None,
            effective_delta=as_float(stock.effective_delta),
            current_price=as_float(stock.current_price),
            delta_label=stock.delta_label,
            price_label=stock.price_label,
            trend=stock.trend.value,
        )


class InstrumentResponse(BoardStockResponse):
    base_price: Optional[float]
    delta_pct: Optional[float]
    order: Optional[int]
    is_published: bool
    scheduled_delta: Optional[float]
    apply_at: Optional[datetime]
    apply_at_input: str
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, stock: BoardStock, tz: tzinfo = UTC) -> "InstrumentResponse":
        instrument: Instrument = stock.instrument
        return cls(
            **BoardStockResponse.from_domain(stock).model_dump(),
            base_price=as_float(instrument.base_price),
            delta_pct=as_float(instrument.delta_pct),
            order=as_int(instrument.order),
            is_published=instrument.is_published is not False,
            scheduled_delta=as_float(instrument.scheduled_delta),
            apply_at=to_instant(instrument.apply_at),
            apply_at_input=to_input_value(instrument.apply_at, tz),
            updated_at=to_instant(instrument.updated_at),
        )
