from __future__ import annotations

import logging
from typing import Any, Iterable

from upkeep.events.observer import EventObserver
from upkeep.events.types import EVENT_TYPE_MAP, Event

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Fans progress events from a run out to its observers."""

    def __init__(self, observers: Iterable[EventObserver] = ()) -> None:
        self._observers: list[EventObserver] = list(observers)

    def add_observer(self, observer: EventObserver) -> None:
        self._observers.append(observer)

    def emit(self, event_type: str, **data: Any) -> None:
        event_cls = EVENT_TYPE_MAP.get(event_type)
        if event_cls is None:
            logger.debug("Dropping unknown event type %s", event_type)
            return
        self.publish(event_cls(**data))

    def publish(self, event: Event) -> None:
        for observer in self._observers:
            observer.on_event(event)
