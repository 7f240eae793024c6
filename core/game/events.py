"""Game events emitted by the engine."""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of game events."""

    # Round flow events
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # Card events
    CARD_DEALT = auto()
    SHOE_SHUFFLED = auto()

    # Player action events
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_SPLIT = auto()

    # Dealer events
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Outcome events
    PLAYER_BUSTS = auto()
    PLAYER_WINS = auto()
    PLAYER_LOSES = auto()
    PUSH = auto()

    # Refusal events
    INVALID_ACTION = auto()
    INSUFFICIENT_FUNDS = auto()
    SHOE_DEPLETED = auto()


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable game event.

    Events let a presentation layer follow a round (cards dealt, dealer
    draws, refusals) without polling engine state after every call.
    """

    event_type: EventType
    round_number: int = 0
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"[round {self.round_number}] {self.event_type.name}: {self.data}"


# Type alias for event handlers
EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Synchronous event dispatcher.

    Handlers registered for ``None`` receive every event. History is kept
    for the current round only; the engine clears it when a round starts.
    """

    def __init__(self) -> None:
        self._handlers: defaultdict[EventType | None, list[EventHandler]] = defaultdict(list)
        self._history: list[GameEvent] = []
        self.round_number = 0

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Register a handler.

        Args:
            handler: Called with each matching event
            event_type: Event type to listen for, or None for all events
        """
        self._handlers[event_type].append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> bool:
        """Remove a handler. Returns False if it was not registered."""
        handlers = self._handlers.get(event_type, [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def emit(self, event_type: EventType, **data: Any) -> GameEvent:
        """
        Create an event, record it and dispatch it to handlers.

        A handler that raises is logged and skipped; the remaining handlers
        still run and the emitting action carries on.
        """
        event = GameEvent(event_type=event_type, round_number=self.round_number, data=data)
        self._history.append(event)

        for handler in [*self._handlers.get(event_type, []), *self._handlers.get(None, [])]:
            try:
                handler(event)
            except Exception:
                logger.exception("Event handler %r failed on %s", handler, event.event_type.name)

        return event

    def start_round(self) -> None:
        """Advance the round counter and drop the previous round's history."""
        self.round_number += 1
        self._history.clear()

    @property
    def history(self) -> list[GameEvent]:
        """Return the events of the current round."""
        return self._history.copy()

    def of_type(self, event_type: EventType) -> list[GameEvent]:
        """Return the current round's events of one type."""
        return [event for event in self._history if event.event_type == event_type]
