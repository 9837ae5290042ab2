"""
Event bus for VAULTFALL.

Carries host input (pointer, buttons) into the session and game outcomes
(catch, miss, penalty) out of the engine. Dispatch is synchronous; the whole
game runs on one frame loop, so an emitted event is fully handled before
``emit`` returns.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Iterable
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Events exchanged between the window, the session and the engine."""
    # Player input
    POINTER_MOVE = auto()   # data: {"x": viewport pixels}
    BUTTON_PRESS = auto()   # Start / play again
    MODE_TOGGLE = auto()
    RESET = auto()

    # Raised by the engine once per resolved item
    ITEM_CAUGHT = auto()    # data: {"value": signed score delta}
    ITEM_MISSED = auto()
    PENALTY_HIT = auto()

    # Round lifecycle
    GAME_STARTED = auto()   # data: {"mode": mode name}
    GAME_OVER = auto()      # data: {"reason": "time" | "busted", "score": int}

    SHUTDOWN = auto()


@dataclass
class Event:
    """
    A single message on the bus.

    ``type`` may also be a plain string for ad-hoc events that have no
    EventType member.
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]
Unsubscribe = Callable[[], None]


def _remover(registry: list[Handler], handler: Handler, label: str) -> Unsubscribe:
    """Build an unsubscribe callback; calling it twice is harmless."""
    def unsubscribe() -> None:
        try:
            registry.remove(handler)
        except ValueError:
            return
        logger.debug(f"Handler removed from {label}")

    return unsubscribe


class EventBus:
    """
    Synchronous publish/subscribe hub with a bounded history.

    A failing handler is logged and skipped; the remaining handlers still
    run and the emitter never sees the exception.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._wildcard: list[Handler] = []
        self._history: deque[Event] = deque(maxlen=history_limit)

    @property
    def history_limit(self) -> int:
        return self._history.maxlen or 0

    def subscribe(self, event_type: EventType | str, handler: Handler) -> Unsubscribe:
        """
        Call ``handler`` for every event of ``event_type``.

        Returns:
            A callback that removes the subscription
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")
        return _remover(self._handlers[event_type], handler, str(event_type))

    def subscribe_all(self, handler: Handler) -> Unsubscribe:
        """Call ``handler`` for every event regardless of type."""
        self._wildcard.append(handler)
        return _remover(self._wildcard, handler, "all events")

    def emit(self, event: Event) -> None:
        """Record the event and deliver it to matching handlers, then wildcards."""
        self._history.append(event)
        # Snapshot so handlers may (un)subscribe while being called
        self._deliver(event, tuple(self._handlers.get(event.type, ())) + tuple(self._wildcard))

    def _deliver(self, event: Event, handlers: Iterable[Handler]) -> None:
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler for {event.type}: {e}")

    def get_history(self, event_type: EventType | str | None = None, limit: int = 10) -> list[Event]:
        """The most recent events, oldest first, optionally of one type."""
        events = [e for e in self._history if event_type is None or e.type == event_type]
        return events[-limit:] if limit > 0 else []

    def clear_history(self) -> None:
        self._history.clear()


def pointer_event(x: float, source: str = "pointer") -> Event:
    """Pointer moved to horizontal position ``x`` in viewport pixels."""
    return Event(EventType.POINTER_MOVE, data={"x": x}, source=source)


def button_press_event(source: str = "button") -> Event:
    """The start button was pressed."""
    return Event(EventType.BUTTON_PRESS, source=source)


def item_caught_event(value: int, source: str = "engine") -> Event:
    """An item landed in the bag, worth ``value`` (negative for the trap)."""
    return Event(EventType.ITEM_CAUGHT, data={"value": value}, source=source)
