import threading
from typing import Callable, List

from reservation_ledger.logger_config import logger
from reservation_ledger.notifications.events import LedgerEvent

Subscriber = Callable[[LedgerEvent], None]


class EventBus:
    """In-process fan-out of committed ledger events to subscribers"""

    def __init__(self):
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that removes it again"""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, event: LedgerEvent):
        with self._lock:
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(event)
            except Exception:
                # The transition already committed; a broken subscriber cannot undo it
                logger.exception(f"Subscriber {callback!r} failed on {event.type}")
