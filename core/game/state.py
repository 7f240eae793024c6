"""Game state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Game state machine states.

    Flow: BETTING → PLAYER_TURN → DEALER_TURN → ROUND_OVER → PLAYER_TURN ...
    """

    # Initial state, before the first deal
    BETTING = auto()

    # Player acts on each of their hands in order
    PLAYER_TURN = auto()

    # Dealer draws to 17
    DEALER_TURN = auto()

    # Round settled, summary available
    ROUND_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()
