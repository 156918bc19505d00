"""
Runner API Routes
Current board as JSON, plus a WebSocket that pushes every change
"""

from datetime import tzinfo
import logging
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from typing import Optional

from timeless.api.deps import get_display_zone, get_runtime
from timeless.domain.models import RunnerBoard
from timeless.domain.schemas.board import RunnerBoardResponse
from timeless.realtime.runtime import BoardRuntime

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/board", response_model=RunnerBoardResponse)
async def get_board(
    runtime: BoardRuntime = Depends(get_runtime),
    tz: tzinfo = Depends(get_display_zone),
):
    """
    Current news and published instruments, resolved at request time
    """
    return RunnerBoardResponse.from_domain(runtime.current_board(), tz)


@router.websocket("/ws")
async def board_stream(websocket: WebSocket):
    """
    Push the board on connect and whenever it changes
    """
    runtime: Optional[BoardRuntime] = getattr(websocket.app.state, "runtime", None)
    if runtime is None:
        await websocket.close(code=status.WS_1011_INTERNAL_ERROR, reason="Board runtime not initialized")
        return
    tz = get_display_zone()
    await websocket.accept()

    async def push(board: RunnerBoard) -> None:
        await websocket.send_json(RunnerBoardResponse.from_domain(board, tz).model_dump(mode="json"))

    await push(runtime.current_board())
    runtime.listen(push)
    logger.info("Runner connected (%d listening)", runtime.listener_count())
    try:
        while True:
            # Clients do not send anything meaningful; this detects disconnects
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        runtime.unlisten(push)
        logger.info("Runner disconnected (%d listening)", runtime.listener_count())
