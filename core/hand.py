"""Hand evaluation for blackjack."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

from core.cards import Card

BLACKJACK = 21
DEALER_STANDS_ON = 17


def hand_value(cards: Iterable[Card]) -> int:
    """
    Score a sequence of cards.

    Non-Ace cards are summed first. Each Ace is then resolved in turn: it
    counts 11 if that keeps the running total at or below 21, otherwise 1.
    There is no look-ahead across later Aces, so the result can exceed 21
    (e.g. K-A-A scores 22).
    """
    total = 0
    aces = 0

    for card in cards:
        if card.is_ace:
            aces += 1
        else:
            total += card.value

    for _ in range(aces):
        if total + 11 > BLACKJACK:
            total += 1
        else:
            total += 11

    return total


@dataclass
class Hand:
    """A blackjack hand with its bet."""

    cards: list[Card] = field(default_factory=list)
    bet: int = 0
    is_doubled: bool = False

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    @property
    def value(self) -> int:
        """Return the greedy score of the hand."""
        return hand_value(self.cards)

    @property
    def is_soft(self) -> bool:
        """Check if an Ace in the hand is currently counted as 11."""
        aces = sum(1 for card in self.cards if card.is_ace)
        if aces == 0:
            return False
        hard_total = sum(card.value for card in self.cards if not card.is_ace)
        return hard_total + 11 <= BLACKJACK

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > BLACKJACK

    @property
    def is_splittable(self) -> bool:
        """Check for exactly two cards of equal base value."""
        return (
            len(self.cards) == 2
            and self.cards[0].value == self.cards[1].value
        )

    @property
    def can_double(self) -> bool:
        """Check if the hand is still untouched (two cards, not doubled)."""
        return len(self.cards) == 2 and not self.is_doubled

    @property
    def display(self) -> list[str]:
        """Return the display strings of the cards in order."""
        return [card.display for card in self.cards]

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


class HandOutcome(Enum):
    """Settlement outcome of one player hand, valued by its summary text."""

    WON = "Won!"
    LOST = "Lost."
    PUSH = "Push."
    BUSTED = "Busted."

    @property
    def label(self) -> str:
        return self.value.rstrip("!.")


def evaluate_hand(player_hand: Hand, dealer_hand: Hand) -> HandOutcome:
    """
    Settle one player hand against the dealer's final hand.

    A busted player hand loses even when the dealer also busts.
    """
    player_value = player_hand.value
    dealer_value = dealer_hand.value

    if player_value > BLACKJACK:
        return HandOutcome.BUSTED
    if dealer_value > BLACKJACK or player_value > dealer_value:
        return HandOutcome.WON
    if player_value == dealer_value:
        return HandOutcome.PUSH
    return HandOutcome.LOST


def payout(outcome: HandOutcome, bet: int) -> int:
    """Return the amount credited to the bankroll for a settled hand."""
    if outcome == HandOutcome.WON:
        return bet * 2
    if outcome == HandOutcome.PUSH:
        return bet
    return 0
