"""
event_bus.py - In-Process Event Publisher/Subscriber

PURPOSE:
    Delivers storefront state-change events to subscribers running on the same
    event loop. Publishing is synchronous: every handler has run by the time
    `publish` returns, so a subscriber always observes the state that produced
    the event.

ERROR HANDLING:
    - A failing handler is logged with its stack trace
    - Delivery continues with the remaining handlers
    - The publisher never sees a handler's exception

USAGE:
    bus = EventBus()
    unsubscribe = bus.subscribe("cart.item_added", on_cart_change)
    bus.publish("cart.item_added", CartItemAddedEvent(...))
    unsubscribe()

    # Wildcard subscription receives every topic
    bus.subscribe("*", on_any_event)
"""

import logging
from collections import defaultdict
from typing import Callable, DefaultDict, List

from shared.events import ALL_TOPICS, BaseEvent

logger = logging.getLogger(__name__)

WILDCARD = "*"

Handler = Callable[[BaseEvent], None]


class EventBus:
    """Topic-keyed handler registry with synchronous fan-out."""

    def __init__(self) -> None:
        self._handlers: DefaultDict[str, List[Handler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: Handler) -> Callable[[], None]:
        """Register handler for topic. Returns a callable that unsubscribes it."""
        if topic != WILDCARD and topic not in ALL_TOPICS:
            raise ValueError(f"Unknown topic: {topic}")
        self._handlers[topic].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[topic]:
                self._handlers[topic].remove(handler)

        return unsubscribe

    def publish(self, topic: str, event: BaseEvent) -> None:
        """Publish event to every handler of topic and to wildcard handlers."""
        # Copy so handlers may unsubscribe while being called
        handlers = list(self._handlers[topic]) + list(self._handlers[WILDCARD])
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(
                    f"Event handler failed for {topic}",
                    extra={"event_type": event.event_type},
                )

        logger.debug(f"Published event to {topic}", extra={"event_type": event.event_type})
