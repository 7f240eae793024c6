"""Game API endpoints."""

import logging
from uuid import uuid4

from fastapi import APIRouter, HTTPException, Header
from typing import Annotated

from api.schemas import (
    ActionRequest,
    CardResponse,
    GameStateResponse,
    HandResponse,
    NewGameResponse,
    RefusalResponse,
)
from core.game import ActionResult, BlackjackGame
from core.hand import Hand

logger = logging.getLogger(__name__)

router = APIRouter()

# One live game per session; nothing survives a restart
_games: dict[str, BlackjackGame] = {}


def _get_game(session_id: str) -> BlackjackGame:
    """Look up the game for a session."""
    game = _games.get(session_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Unknown session")
    return game


def _hand_to_response(hand: Hand) -> HandResponse:
    """Convert a Hand to HandResponse."""
    return HandResponse(
        cards=[
            CardResponse(
                rank=str(c.rank),
                suit=c.suit.value,
                value=c.value,
                display=c.display,
            )
            for c in hand.cards
        ],
        value=hand.value,
        is_soft=hand.is_soft,
        is_busted=hand.is_busted,
        bet=hand.bet,
    )


def _game_state_response(game: BlackjackGame) -> GameStateResponse:
    """Convert game state to response."""
    return GameStateResponse(
        state=game.state.name,
        player_hands=[_hand_to_response(h) for h in game.player_hands],
        current_hand_index=game.current_hand_index,
        dealer_hand=_hand_to_response(game.dealer_hand),
        bets=game.bets,
        bankroll=game.bankroll,
        cards_remaining=game.shoe.cards_remaining,
        outcomes=[o.label for o in game.outcomes],
        outcome_summary=game.outcome_summary,
        can_hit=game.can_hit,
        can_stand=game.can_stand,
        can_double=game.can_double,
        can_split=game.can_split,
    )


def _check(result: ActionResult) -> None:
    """Turn a refused action into a 400 response."""
    if result:
        return
    refusal = RefusalResponse(reason=result.reason.value, message=result.message)
    raise HTTPException(status_code=400, detail=refusal.model_dump())


@router.post("/new")
async def new_game() -> NewGameResponse:
    """Create a new game session in the betting state."""
    session_id = str(uuid4())
    _games[session_id] = BlackjackGame()
    logger.info("Created game session %s", session_id)
    return NewGameResponse(session_id=session_id)


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Get current game state."""
    game = _get_game(session_id)
    return _game_state_response(game)


@router.post("/round")
async def start_round(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Shuffle a fresh shoe and deal a new round."""
    game = _get_game(session_id)
    _check(game.start_new_round())
    return _game_state_response(game)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Execute a player action."""
    game = _get_game(session_id)

    actions = {
        "hit": game.hit,
        "stand": game.stand,
        "double": game.double_down,
        "split": game.split,
    }

    _check(actions[request.action]())
    return _game_state_response(game)
