"""Registry for snapshot subscribers."""
import inspect
import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Any]


async def deliver(handler: Handler, event: Any) -> bool:
    """Call one handler (sync or async). Failures are logged and reported as False."""
    try:
        result = handler(event)
        if inspect.isawaitable(result):
            await result
        return True
    except Exception:
        logger.exception("Subscriber %r failed", getattr(handler, "__qualname__", handler))
        return False


class SubscriberRegistry:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, topic: str, handler: Handler) -> None:
        self._subscribers.setdefault(topic, []).append(handler)

    def unsubscribe(self, topic: str, handler: Handler) -> None:
        handlers = self._subscribers.get(topic, [])
        if handler in handlers:
            handlers.remove(handler)

    async def publish(self, topic: str, event: Any) -> None:
        # copy so handlers may unsubscribe while being notified
        for handler in list(self._subscribers.get(topic, [])):
            await deliver(handler, event)

    def count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, []))
