"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Constants
    INSTRUMENT_FIELDS,
    NEWS_SLOT_FIELDS,
    NEWS_SLOT_IDS,

    # Enums
    Trend,

    # Entities
    AdminPreview,
    BoardStock,
    Instrument,
    NewsSlot,
    ResolvedPrice,
    RunnerBoard,
)

__all__ = [
    # Constants
    "INSTRUMENT_FIELDS",
    "NEWS_SLOT_FIELDS",
    "NEWS_SLOT_IDS",

    # Enums
    "Trend",

    # Entities
    "AdminPreview",
    "BoardStock",
    "Instrument",
    "NewsSlot",
    "ResolvedPrice",
    "RunnerBoard",
]
