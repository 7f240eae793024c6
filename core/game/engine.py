"""Blackjack game engine with state machine."""

import logging
from dataclasses import dataclass, field
from random import Random
from typing import Callable

from transitions import Machine

from config import config
from core.cards import Card, Shoe
from core.hand import DEALER_STANDS_ON, Hand, HandOutcome, evaluate_hand, payout
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.results import ActionResult, RefusalReason
from core.game.state import GameState

logger = logging.getLogger(__name__)


@dataclass
class RoundState:
    """Everything that belongs to one round. Replaced wholesale on a new deal."""

    shoe: Shoe
    bankroll: int
    base_bet: int
    player_hands: list[Hand] = field(default_factory=list)
    dealer_hand: Hand = field(default_factory=Hand)
    current_hand_index: int = 0
    outcomes: list[HandOutcome] = field(default_factory=list)
    outcome_summary: str | None = None

    @property
    def current_hand(self) -> Hand | None:
        """Get the current active hand."""
        if 0 <= self.current_hand_index < len(self.player_hands):
            return self.player_hands[self.current_hand_index]
        return None

    @property
    def bets(self) -> list[int]:
        """Return one bet per player hand, in hand order."""
        return [hand.bet for hand in self.player_hands]


class BlackjackGame:
    """
    Single-player blackjack engine driven by a state machine.

    Every action runs to completion and returns an ActionResult. Dealer play
    and settlement happen inline inside the call that finishes the last
    player hand, so callers only ever observe PLAYER_TURN, ROUND_OVER or the
    initial BETTING state between calls.

    The opening bet of a round is not taken from the bankroll; only the
    extra stake of a double down or split is. Settlement credits twice the
    bet on a win and the bet itself on a push.

    Every round opens with the game's base bet. A doubled or split stake
    from the previous round does not carry over.

    Handlers subscribed to events run synchronously. Settlement is complete
    before any outcome event is emitted, and a handler that raises is logged
    by the emitter without interrupting the action.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "deal", "source": ["betting", "round_over"], "dest": "player_turn"},
        {"trigger": "player_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "settle", "source": "dealer_turn", "dest": "round_over"},
    ]

    def __init__(
        self,
        initial_bankroll: int | None = None,
        base_bet: int | None = None,
        rng: Random | None = None,
    ) -> None:
        """
        Initialize a new game in the betting state.

        Args:
            initial_bankroll: Starting bankroll (defaults to config.game)
            base_bet: Bet placed on the opening hand of every round
                (defaults to config.game)
            rng: Random number generator for reproducible shuffles
        """
        if initial_bankroll is None:
            initial_bankroll = config.game.starting_bankroll
        if base_bet is None:
            base_bet = config.game.base_bet
        if initial_bankroll < 0:
            raise ValueError("Bankroll cannot be negative")
        if base_bet < 1:
            raise ValueError("Bet must be a positive amount")

        self._rng = rng or Random()
        self.round = RoundState(
            shoe=Shoe(rng=self._rng),
            bankroll=initial_bankroll,
            base_bet=base_bet,
        )
        self.events = EventEmitter()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="betting",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    # Observable state

    @property
    def player_hands(self) -> list[Hand]:
        return self.round.player_hands

    @property
    def dealer_hand(self) -> Hand:
        return self.round.dealer_hand

    @property
    def current_hand_index(self) -> int:
        return self.round.current_hand_index

    @property
    def current_hand(self) -> Hand | None:
        return self.round.current_hand

    @property
    def bets(self) -> list[int]:
        return self.round.bets

    @property
    def bankroll(self) -> int:
        return self.round.bankroll

    @property
    def shoe(self) -> Shoe:
        return self.round.shoe

    @property
    def outcomes(self) -> list[HandOutcome]:
        return list(self.round.outcomes)

    @property
    def outcome_summary(self) -> str | None:
        """Settlement summary, set once the round is over."""
        return self.round.outcome_summary

    # Actions

    def start_new_round(self, shoe: Shoe | None = None) -> ActionResult:
        """
        Build a fresh shoe and deal two cards each to the player and dealer.

        Only allowed before the first round or after a round is over. While
        a round is in progress the call is refused with ILLEGAL_ACTION and
        the current hands and bets are left untouched.

        Args:
            shoe: Pre-built shoe to deal from as-is (not shuffled). A new
                shuffled 52-card shoe is used when omitted.
        """
        if self.state not in (GameState.BETTING, GameState.ROUND_OVER):
            return self._refuse(
                RefusalReason.ILLEGAL_ACTION,
                f"Cannot start a new round during {self.state}",
            )

        self.events.start_round()
        if shoe is None:
            shoe = Shoe(rng=self._rng)
            shoe.shuffle()
            self.events.emit(EventType.SHOE_SHUFFLED, cards=len(shoe))

        previous = self.round
        self.round = RoundState(
            shoe=shoe,
            bankroll=previous.bankroll,
            base_bet=previous.base_bet,
            player_hands=[Hand(bet=previous.base_bet)],
        )

        player_hand = self.round.player_hands[0]
        self._deal_card_to_hand(player_hand)
        self._deal_card_to_hand(self.round.dealer_hand)
        self._deal_card_to_hand(player_hand)
        self._deal_card_to_hand(self.round.dealer_hand)

        self.deal()
        self.events.emit(
            EventType.ROUND_STARTED,
            bet=player_hand.bet,
            bankroll=self.round.bankroll,
        )
        logger.debug("Round %d dealt: player %s", self.events.round_number, player_hand)
        return ActionResult.ok()

    def hit(self) -> ActionResult:
        """Player takes another card on the active hand."""
        if self.state != GameState.PLAYER_TURN:
            return self._refuse(RefusalReason.ILLEGAL_ACTION, "Cannot hit now")

        if self.round.shoe.is_empty:
            return self._refuse(
                RefusalReason.SHOE_DEPLETED,
                "Shoe depleted. Unable to draw more cards.",
            )

        hand = self.round.player_hands[self.round.current_hand_index]
        self._deal_card_to_hand(hand)
        self.events.emit(EventType.PLAYER_HIT, hand_index=self.round.current_hand_index, hand_value=hand.value)

        if hand.is_busted:
            self.events.emit(EventType.PLAYER_BUSTS, hand_index=self.round.current_hand_index)
            self._advance_to_next_hand()

        return ActionResult.ok()

    def stand(self) -> ActionResult:
        """Player keeps the active hand."""
        if self.state != GameState.PLAYER_TURN:
            return self._refuse(RefusalReason.ILLEGAL_ACTION, "Cannot stand now")

        hand = self.round.player_hands[self.round.current_hand_index]
        self.events.emit(EventType.PLAYER_STAND, hand_index=self.round.current_hand_index, hand_value=hand.value)
        self._advance_to_next_hand()
        return ActionResult.ok()

    def double_down(self) -> ActionResult:
        """Double the active hand's bet, take exactly one card and end the hand."""
        if self.state != GameState.PLAYER_TURN:
            return self._refuse(RefusalReason.ILLEGAL_ACTION, "Cannot double down now")

        hand = self.round.player_hands[self.round.current_hand_index]
        if not hand.can_double:
            return self._refuse(
                RefusalReason.ILLEGAL_ACTION,
                "Can only double down on an untouched two-card hand",
            )

        if hand.bet > self.round.bankroll:
            return self._refuse(
                RefusalReason.INSUFFICIENT_FUNDS,
                "Insufficient funds to double down.",
                required=hand.bet,
                available=self.round.bankroll,
            )

        if self.round.shoe.is_empty:
            return self._refuse(
                RefusalReason.SHOE_DEPLETED,
                "Shoe depleted. Unable to draw more cards.",
            )

        self.round.bankroll -= hand.bet
        hand.bet *= 2
        hand.is_doubled = True

        self._deal_card_to_hand(hand)
        self.events.emit(
            EventType.PLAYER_DOUBLE,
            hand_index=self.round.current_hand_index,
            hand_value=hand.value,
            new_bet=hand.bet,
        )

        if hand.is_busted:
            self.events.emit(EventType.PLAYER_BUSTS, hand_index=self.round.current_hand_index)

        self._advance_to_next_hand()
        return ActionResult.ok()

    def split(self) -> ActionResult:
        """Split a pair of equal-value cards into two hands."""
        if self.state != GameState.PLAYER_TURN:
            return self._refuse(RefusalReason.ILLEGAL_ACTION, "Cannot split now")

        hand = self.round.player_hands[self.round.current_hand_index]
        if not hand.is_splittable:
            return self._refuse(RefusalReason.ILLEGAL_ACTION, "Cannot split.")

        if hand.bet > self.round.bankroll:
            return self._refuse(
                RefusalReason.ILLEGAL_ACTION,
                "Cannot split.",
                required=hand.bet,
                available=self.round.bankroll,
            )

        if len(self.round.shoe) < 2:
            return self._refuse(
                RefusalReason.SHOE_DEPLETED,
                "Shoe depleted. Unable to split.",
            )

        self.round.bankroll -= hand.bet

        # Second card starts the new hand; each hand gets one fresh card
        second_card = hand.cards.pop()
        new_hand = Hand(cards=[second_card], bet=hand.bet)
        self.round.player_hands.append(new_hand)

        self._deal_card_to_hand(hand)
        self._deal_card_to_hand(new_hand)

        self.events.emit(
            EventType.PLAYER_SPLIT,
            hand_index=self.round.current_hand_index,
            new_hand_index=len(self.round.player_hands) - 1,
            hand1_value=hand.value,
            hand2_value=new_hand.value,
        )
        return ActionResult.ok()

    # Query helpers for the presentation layer

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return self.state == GameState.PLAYER_TURN and not self.round.shoe.is_empty

    @property
    def can_stand(self) -> bool:
        """Check if standing is allowed."""
        return self.state == GameState.PLAYER_TURN

    @property
    def can_double(self) -> bool:
        """Check if doubling is allowed."""
        if self.state != GameState.PLAYER_TURN:
            return False
        hand = self.round.current_hand
        if hand is None or not hand.can_double:
            return False
        return hand.bet <= self.round.bankroll and not self.round.shoe.is_empty

    @property
    def can_split(self) -> bool:
        """Check if splitting is allowed."""
        if self.state != GameState.PLAYER_TURN:
            return False
        hand = self.round.current_hand
        if hand is None or not hand.is_splittable:
            return False
        return hand.bet <= self.round.bankroll and len(self.round.shoe) >= 2

    # Internals

    def _refuse(self, reason: RefusalReason, message: str, **data) -> ActionResult:
        """Report a refused action without touching engine state."""
        event_type = {
            RefusalReason.ILLEGAL_ACTION: EventType.INVALID_ACTION,
            RefusalReason.INSUFFICIENT_FUNDS: EventType.INSUFFICIENT_FUNDS,
            RefusalReason.SHOE_DEPLETED: EventType.SHOE_DEPLETED,
        }[reason]
        self.events.emit(event_type, message=message, state=self.state.name, **data)
        logger.info("Refused (%s): %s", reason.value, message)
        return ActionResult.refused(reason, message)

    def _deal_card_to_hand(self, hand: Hand) -> Card:
        """Deal a card to a hand."""
        card = self.round.shoe.draw()
        hand.add_card(card)
        self.events.emit(
            EventType.CARD_DEALT,
            card=card.display,
            hand="dealer" if hand is self.round.dealer_hand else "player",
            hand_value=hand.value,
        )
        logger.debug("Dealt %s, %d left in shoe", card.display, len(self.round.shoe))
        return card

    def _advance_to_next_hand(self) -> None:
        """Move to the next hand or, after the last one, play the dealer."""
        if self.round.current_hand_index + 1 < len(self.round.player_hands):
            self.round.current_hand_index += 1
            return

        self.player_done()
        self._play_dealer()

    def _play_dealer(self) -> None:
        """Dealer draws while under 17, then the round is settled."""
        dealer = self.round.dealer_hand
        while dealer.value < DEALER_STANDS_ON and not self.round.shoe.is_empty:
            self._deal_card_to_hand(dealer)
            self.events.emit(EventType.DEALER_HITS, hand_value=dealer.value)

        if dealer.is_busted:
            self.events.emit(EventType.DEALER_BUSTS, hand_value=dealer.value)
        else:
            self.events.emit(EventType.DEALER_STANDS, hand_value=dealer.value)

        self._evaluate_outcomes()

    def _evaluate_outcomes(self) -> None:
        """Settle every player hand in order and record the summary."""
        outcome_events = {
            HandOutcome.WON: EventType.PLAYER_WINS,
            HandOutcome.PUSH: EventType.PUSH,
            HandOutcome.LOST: EventType.PLAYER_LOSES,
            HandOutcome.BUSTED: EventType.PLAYER_LOSES,
        }

        credits = []
        for hand in self.round.player_hands:
            outcome = evaluate_hand(hand, self.round.dealer_hand)
            credited = payout(outcome, hand.bet)
            self.round.bankroll += credited
            self.round.outcomes.append(outcome)
            credits.append(credited)

        self.round.outcome_summary = "Round Over: " + " ".join(
            f"Hand {i + 1} {outcome.value}" for i, outcome in enumerate(self.round.outcomes)
        )
        self.settle()

        for i, (outcome, credited) in enumerate(zip(self.round.outcomes, credits)):
            self.events.emit(outcome_events[outcome], hand_index=i, outcome=outcome.label, amount=credited)
        self.events.emit(
            EventType.ROUND_ENDED,
            summary=self.round.outcome_summary,
            bankroll=self.round.bankroll,
        )
        logger.info("%s Bankroll: %d", self.round.outcome_summary, self.round.bankroll)
