"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict
from typing import Literal


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stand", "double", "split"]


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    rank: str
    suit: str
    value: int
    display: str


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    value: int
    is_soft: bool
    is_busted: bool
    bet: int


class GameStateResponse(BaseModel):
    """Current game state."""

    state: str
    player_hands: list[HandResponse]
    current_hand_index: int
    dealer_hand: HandResponse
    bets: list[int]
    bankroll: int
    cards_remaining: int
    outcomes: list[str]
    outcome_summary: str | None
    can_hit: bool
    can_stand: bool
    can_double: bool
    can_split: bool


class RefusalResponse(BaseModel):
    """Body of a refused action."""

    reason: Literal["illegal_action", "insufficient_funds", "shoe_depleted"]
    message: str


class NewGameResponse(BaseModel):
    """Created session."""

    session_id: str
