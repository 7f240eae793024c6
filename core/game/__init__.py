"""Game engine and state management."""

from core.game.events import GameEvent, EventType
from core.game.results import ActionResult, RefusalReason
from core.game.state import GameState
from core.game.engine import BlackjackGame, RoundState

__all__ = [
    "GameEvent",
    "EventType",
    "ActionResult",
    "RefusalReason",
    "GameState",
    "BlackjackGame",
    "RoundState",
]
