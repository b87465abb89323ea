import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

log = logging.getLogger("inventory_dashboard.events")

# Topics published by the store, one per owned collection
SUPPLIERS = "suppliers"
PRODUCTS = "products"
ORDERS = "orders"
ACTIVITY_LOGS = "activity_logs"
NOTIFICATIONS = "notifications"
ALL_TOPICS = "*"

TOPICS = (SUPPLIERS, PRODUCTS, ORDERS, ACTIVITY_LOGS, NOTIFICATIONS)


@dataclass(frozen=True)
class ChangeEvent:
    """
    Describes one completed change to a store collection.
    e.g. ChangeEvent(topic="products", action="updated", entity_id="3")
    """
    topic: str
    action: str
    entity_id: Optional[str] = None


Callback = Callable[[ChangeEvent], None]


class ChangeDispatcher:
    """
    Routes change events to the callbacks subscribed to their topic.
    Subscribers to '*' receive every event.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callback]] = {}
        self._lock = threading.Lock()

    def subscribe(self, topic: str, callback: Callback) -> Callable[[], None]:
        """Registers a callback and returns a function that removes it again."""
        if topic != ALL_TOPICS and topic not in TOPICS:
            raise ValueError(f"Unknown topic: {topic}")

        with self._lock:
            self._subscribers.setdefault(topic, []).append(callback)

        def unsubscribe():
            with self._lock:
                callbacks = self._subscribers.get(topic, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return unsubscribe

    def publish(self, events: Iterable[ChangeEvent]) -> None:
        """
        Delivers each event to its topic subscribers, then to the '*' subscribers.
        A failing callback is logged and does not stop delivery to the others.
        """
        for event in events:
            with self._lock:
                callbacks = list(self._subscribers.get(event.topic, []))
                callbacks += self._subscribers.get(ALL_TOPICS, [])

            for callback in callbacks:
                try:
                    callback(event)
                except Exception:
                    log.exception(f"Subscriber {callback!r} failed handling {event.topic}.{event.action}")
