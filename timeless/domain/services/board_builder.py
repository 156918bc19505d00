"""
BOARD BUILDER
Turn collection snapshots into the view models both screens render

Every function here is a pure transformation of (records, now); callers
hold the snapshots and decide when to rebuild.
"""

from datetime import datetime
from typing import Iterable, Optional

from timeless.domain.models import (
    AdminPreview,
    BoardStock,
    Instrument,
    NewsSlot,
    RunnerBoard,
)
from timeless.domain.services.news_selector import select_current_news
from timeless.domain.services.price_resolver import (
    delta_label,
    display_instruments,
    price_label,
    resolve_instrument,
    trend_of,
)

NO_NEWS_MESSAGE = "No news has been scheduled yet."


def decorate_instrument(instrument: Instrument, now: datetime) -> BoardStock:
    """Attach effective delta, price and display labels to an instrument"""
    resolved = resolve_instrument(instrument, now)
    return BoardStock(
        instrument=instrument,
        effective_delta=resolved.effective_delta,
        current_price=resolved.current_price,
        delta_label=delta_label(resolved.effective_delta),
        price_label=price_label(resolved.current_price),
        trend=trend_of(resolved.effective_delta),
    )


def build_runner_board(
    slots: Iterable[NewsSlot],
    instruments: Iterable[Instrument],
    now: datetime,
) -> RunnerBoard:
    """Current news plus published instruments in display order"""
    return RunnerBoard(
        current_news=select_current_news(slots, now),
        stocks=tuple(decorate_instrument(s, now) for s in display_instruments(instruments)),
        generated_at=now,
    )


def build_admin_preview(slots: Iterable[NewsSlot], now: datetime) -> AdminPreview:
    """What the operator sees under the slot editor"""
    current = select_current_news(slots, now)
    if current is None:
        message = NO_NEWS_MESSAGE
    else:
        message = f"{current.label} — {current.headline or '(untitled)'}"
    return AdminPreview(current_news=current, message=message, generated_at=now)


def board_signature(board: Optional[RunnerBoard]):
    """Comparable form of a board that ignores when it was generated"""
    if board is None:
        return None
    return (board.current_news, board.stocks)
