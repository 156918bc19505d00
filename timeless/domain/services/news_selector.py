"""
NEWS SELECTOR
Pick the one news slot the runner shows at a given instant

RULES:
✅ Only slots with a publish time that has been reached are eligible
✅ The latest reached publish time wins, regardless of slot order
✅ Equal publish times: higher order wins, then higher slot id
✅ Pure calculation, input never mutated
"""

from datetime import datetime
from typing import Iterable, Optional

from timeless.domain.models import NewsSlot
from timeless.utils.time import to_instant


def select_current_news(slots: Iterable[NewsSlot], now: datetime) -> Optional[NewsSlot]:
    """
    Return the slot currently showing, or None

    Args:
        slots: News slots in any order (may be empty)
        now: Evaluation instant (naive values are read as UTC)

    Returns:
        The eligible slot with the latest reached publish_at
    """
    now_instant = to_instant(now)
    if now_instant is None:
        return None

    best: Optional[NewsSlot] = None
    best_key = None
    for slot in slots:
        published = to_instant(slot.publish_at)
        if published is None or published > now_instant:
            continue
        key = (published, _order_rank(slot.order), slot.slot_id)
        if best_key is None or key > best_key:
            best, best_key = slot, key
    return best


def _order_rank(order) -> int:
    # bool is an int subclass but never a usable rank
    if isinstance(order, int) and not isinstance(order, bool):
        return order
    return 0
