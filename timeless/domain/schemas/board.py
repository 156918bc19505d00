from pydantic import BaseModel
from datetime import datetime, tzinfo
from typing import List, Optional

from timeless.domain.models import RunnerBoard
from timeless.domain.schemas.instrument import BoardStockResponse
from timeless.domain.schemas.news import NewsSlotResponse
from timeless.utils.time import UTC


class RunnerBoardResponse(BaseModel):
    current_news: Optional[NewsSlotResponse]
    stocks: List[BoardStockResponse]
    generated_at: datetime

    @classmethod
    def from_domain(cls, board: RunnerBoard, tz: tzinfo = UTC) -> "RunnerBoardResponse":
        return cls(
            current_news=(
                NewsSlotResponse.from_domain(board.current_news, tz)
                if board.current_news is not None
                else None
            ),
            stocks=[BoardStockResponse.from_domain(stock) for stock in board.stocks],
            generated_at=board.generated_at,
        )
