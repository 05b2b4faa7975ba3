"""
Typed event bus for decoupled notification.

Event types are Enum members, never strings, so subscribers and
publishers agree on names at import time.

Usage:
    class SheetEvent(Enum):
        LEVEL_UP = auto()

    bus.subscribe(SheetEvent.LEVEL_UP, on_level_up)
    bus.publish(SheetEvent.LEVEL_UP, old_level=3, new_level=4)
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """
    A published event.

    Attributes:
        type: Enum member identifying the event
        data: Keyword payload given to publish()
        consumed: Set by a handler to stop lower-priority handlers
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Stop propagation to the remaining handlers."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass(eq=False)
class _Subscription:
    priority: int
    target: Any
    one_shot: bool
    is_weak: bool

    def resolve(self) -> EventHandler | None:
        if self.is_weak:
            return self.target()
        return self.target


class EventBus:
    """
    Publish/subscribe dispatcher.

    Features:
    - Handlers ordered by priority (highest first, FIFO within a priority)
    - Weak references by default, so a dead listener drops out on its own
    - One-shot handlers
    - Consumption stops propagation
    - Events published from inside a handler are queued, not nested
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._pending: deque[Event] = deque()
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Register a handler.

        Args:
            event_type: Event to listen for
            handler: Callable receiving the Event
            priority: Higher runs earlier
            one_shot: Drop the handler after its first call
            weak: Hold only a weak reference to the handler
        """
        if weak:
            target = WeakMethod(handler) if hasattr(handler, '__self__') else ref(handler)
        else:
            target = handler

        subs = self._subscriptions.setdefault(event_type, [])
        position = len(subs)
        for index, existing in enumerate(subs):
            if priority > existing.priority:
                position = index
                break
        subs.insert(position, _Subscription(priority, target, one_shot, weak))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove every registration of handler for event_type."""
        subs = self._subscriptions.get(event_type)
        if not subs:
            return
        self._subscriptions[event_type] = [s for s in subs if s.resolve() != handler]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event.

        Returns:
            The Event, so callers can inspect .consumed
        """
        event = Event(type=event_type, data=data)
        self.publish_event(event)
        return event

    def publish_event(self, event: Event) -> None:
        """Publish an already-built event."""
        if self._dispatching:
            self._pending.append(event)
            return
        self._dispatch(event)
        while self._pending:
            self._dispatch(self._pending.popleft())

    def clear(self, event_type: Enum | None = None) -> None:
        """Drop handlers for one event type, or for all of them."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def handler_count(self, event_type: Enum) -> int:
        return len(self._subscriptions.get(event_type, []))

    def _dispatch(self, event: Event) -> None:
        subs = self._subscriptions.get(event.type)
        if not subs:
            return

        self._dispatching = True
        stale: list[_Subscription] = []
        try:
            for sub in list(subs):
                handler = sub.resolve()
                if handler is None:
                    stale.append(sub)
                    continue

                try:
                    handler(event)
                except Exception:
                    logger.exception(f"Handler failed for {event.type}")

                if sub.one_shot:
                    stale.append(sub)
                if event.consumed:
                    break
        finally:
            self._dispatching = False

        for sub in stale:
            if sub in subs:
                subs.remove(sub)
