"""Pytest fixtures for blackjack engine tests."""

import pytest
from random import Random

from core.cards import Card, Shoe
from core.hand import Hand
from core.game import BlackjackGame


def _cards(*specs: str) -> list[Card]:
    """Build cards from short strings like 'AS', '10H', 'KC'."""
    return [Card.from_string(s) for s in specs]


def _stacked_shoe(player: list[str], dealer: list[str], draws: list[str] = ()) -> Shoe:
    """
    Build a shoe that deals the given opening hands, then ``draws`` in order.

    The engine deals player, dealer, player, dealer.
    """
    order = [player[0], dealer[0], player[1], dealer[1], *draws]
    return Shoe.stacked(_cards(*order))


@pytest.fixture
def cards():
    """Card builder: cards('AS', '10H')."""
    return _cards


@pytest.fixture
def stacked_shoe():
    """Shoe builder: stacked_shoe(player=[...], dealer=[...], draws=[...])."""
    return _stacked_shoe


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """A shuffled shoe."""
    s = Shoe(rng=rng)
    s.shuffle()
    return s


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """Ace-King."""
    return Hand(cards=_cards("AS", "KH"))


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand(cards=_cards("AS", "6H"))


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand(cards=_cards("10S", "6H"))


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return Hand(cards=_cards("8S", "8H"))


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand(cards=_cards("10S", "6H", "KC"))


@pytest.fixture
def game(rng):
    """A new game with 100 bankroll and a bet of 10."""
    return BlackjackGame(initial_bankroll=100, base_bet=10, rng=rng)
