"""
Database Models (SQLAlchemy ORM)
One table per document collection
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Text

from timeless.infrastructure.db.database import Base
from timeless.utils.time import now_utc


class NewsSlotModel(Base):
    """Fixed news slot (n1..n5)"""
    __tablename__ = "news_slot"

    slot_id = Column(String(8), primary_key=True)
    order = Column(Integer, nullable=False, index=True)
    headline = Column(Text, nullable=False, default="")
    body = Column(Text, nullable=False, default="")
    publish_at = Column(DateTime(timezone=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)


class InstrumentModel(Base):
    """Operator-managed synthetic stock"""
    __tablename__ = "instrument"

    instrument_id = Column(String(64), primary_key=True)
    name = Column(String(200), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    sector = Column(String(100), nullable=True)
    base_price = Column(Float, nullable=True)
    delta_pct = Column(Float, nullable=True, default=0.0)
    order = Column(Integer, nullable=True, index=True)
    is_published = Column(Boolean, nullable=True, default=True)
    scheduled_delta = Column(Float, nullable=True)
    apply_at = Column(DateTime(timezone=True), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)
