"""
Board runtime.
Keeps the latest news/instrument snapshots and pushes the runner board to
listeners whenever it changes, either because a collection changed or
because time moved past a publish/apply instant.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, List, Optional

from timeless.domain.models import Instrument, NewsSlot, RunnerBoard
from timeless.domain.services.board_builder import board_signature, build_runner_board
from timeless.infrastructure.store.document_store import DocumentStore, Snapshot, Unsubscribe
from timeless.infrastructure.store.subscriber_registry import SubscriberRegistry
from timeless.utils.time import now_utc

logger = logging.getLogger(__name__)

BOARD_TOPIC = "board"


class BoardRuntime:
    def __init__(self, store: DocumentStore, clock: Callable[[], datetime] = now_utc):
        self._store = store
        self._clock = clock
        self._slots: tuple[NewsSlot, ...] = ()
        self._instruments: tuple[Instrument, ...] = ()
        self._unsubscribes: List[Unsubscribe] = []
        self._listeners = SubscriberRegistry()
        self._last_signature: Any = None
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def now(self) -> datetime:
        return self._clock()

    async def start(self) -> None:
        if self._started:
            return
        self._unsubscribes.append(await self._store.news.subscribe(self._on_news))
        self._unsubscribes.append(await self._store.stocks.subscribe(self._on_stocks))
        self._started = True
        logger.info(
            "Board runtime started (%d slots, %d instruments)",
            len(self._slots),
            len(self._instruments),
        )

    async def stop(self) -> None:
        for unsubscribe in self._unsubscribes:
            await unsubscribe()
        self._unsubscribes.clear()
        self._started = False
        logger.info("Board runtime stopped")

    def listen(self, handler: Callable[[RunnerBoard], Any]) -> None:
        self._listeners.subscribe(BOARD_TOPIC, handler)

    def unlisten(self, handler: Callable[[RunnerBoard], Any]) -> None:
        self._listeners.unsubscribe(BOARD_TOPIC, handler)

    def listener_count(self) -> int:
        return self._listeners.count(BOARD_TOPIC)

    def current_board(self, now: Optional[datetime] = None) -> RunnerBoard:
        """Rebuild the runner board from the latest snapshots"""
        return build_runner_board(self._slots, self._instruments, now or self._clock())

    async def refresh(self) -> bool:
        """
        Re-evaluate against the clock and notify listeners if the board changed

        Returns:
            True when a new board was published
        """
        board = self.current_board()
        signature = board_signature(board)
        if signature == self._last_signature:
            return False
        self._last_signature = signature
        await self._listeners.publish(BOARD_TOPIC, board)
        return True

    async def _on_news(self, snapshot: Snapshot[NewsSlot]) -> None:
        self._slots = snapshot.records
        await self.refresh()

    async def _on_stocks(self, snapshot: Snapshot[Instrument]) -> None:
        self._instruments = snapshot.records
        await self.refresh()
