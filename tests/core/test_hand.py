"""Tests for Hand scoring and settlement."""

import pytest
from hypothesis import given, strategies as st

from core.cards import Card, Rank, Suit
from core.hand import Hand, HandOutcome, evaluate_hand, hand_value, payout

card_strategy = st.builds(Card, st.sampled_from(list(Rank)), st.sampled_from(list(Suit)))


class TestHandValue:
    """Tests for greedy Ace resolution."""

    def test_empty_hand(self, empty_hand):
        """Test empty hand properties."""
        assert len(empty_hand) == 0
        assert empty_hand.value == 0
        assert not empty_hand.is_soft
        assert not empty_hand.is_busted

    def test_hard_hand_value(self, hard_16_hand):
        assert hard_16_hand.value == 16
        assert not hard_16_hand.is_soft

    def test_soft_hand_value(self, soft_17_hand):
        assert soft_17_hand.value == 17
        assert soft_17_hand.is_soft

    def test_ace_king(self, blackjack_hand):
        assert blackjack_hand.value == 21

    def test_two_aces(self, cards):
        """First Ace takes 11, the second would reach 22 so takes 1."""
        assert hand_value(cards("AS", "AH")) == 12

    def test_ace_king_king(self, cards):
        """Non-Aces total 20 first, so the Ace can only add 1."""
        assert hand_value(cards("AS", "KH", "KC")) == 21

    def test_three_aces(self, cards):
        assert hand_value(cards("AS", "AH", "AC")) == 13

    def test_greedy_order_can_bust_with_two_aces(self, cards):
        """
        Aces are resolved one at a time without look-ahead.

        K-A-A: the first Ace reaches 21 as 11, the second Ace then adds 1.
        """
        assert hand_value(cards("KS", "AH", "AC")) == 22
        assert Hand(cards=cards("KS", "AH", "AC")).is_busted

    def test_greedy_order_with_nine_and_three_aces(self, cards):
        assert hand_value(cards("AS", "AH", "AC", "9D")) == 22

    def test_soft_to_hard_transition(self, cards):
        """Test ace switching from 11 to 1."""
        hand = Hand(cards=cards("AS"))
        assert hand.value == 11
        assert hand.is_soft

        hand.add_card(Card(Rank.FIVE, Suit.HEARTS))
        assert hand.value == 16
        assert hand.is_soft

        hand.add_card(Card(Rank.EIGHT, Suit.CLUBS))
        assert hand.value == 14
        assert not hand.is_soft

    def test_many_aces(self):
        """Split-generated hands can hold more than four Aces."""
        hand = [Card(Rank.ACE, suit) for suit in Suit] * 3
        # First Ace counts 11, the other eleven count 1 each
        assert hand_value(hand) == 22

    def test_bust(self, bust_hand):
        assert bust_hand.is_busted
        assert bust_hand.value == 26

    @given(st.lists(card_strategy, max_size=10))
    def test_value_depends_only_on_cards(self, hand):
        """Scoring is a pure function of the card sequence."""
        assert hand_value(hand) == hand_value(list(hand))
        assert hand_value(hand) == hand_value(list(reversed(hand)))

    @given(st.lists(card_strategy, max_size=10))
    def test_value_bounds(self, hand):
        hard_total = sum(1 if c.is_ace else c.value for c in hand)
        value = hand_value(hand)
        assert hard_total <= value <= hard_total + 10
        if not any(c.is_ace for c in hand):
            assert value == hard_total


class TestHandProperties:
    """Tests for split and double eligibility."""

    def test_pair_is_splittable(self, pair_8s_hand):
        assert pair_8s_hand.is_splittable
        assert pair_8s_hand.value == 16

    def test_unequal_values_not_splittable(self, cards):
        assert not Hand(cards=cards("8S", "9H")).is_splittable

    def test_face_cards_split_by_value(self, cards):
        """Ten-value cards are interchangeable for splitting."""
        assert Hand(cards=cards("JS", "KH")).is_splittable
        assert Hand(cards=cards("10S", "QH")).is_splittable

    def test_aces_split_only_with_aces(self, cards):
        assert Hand(cards=cards("AS", "AH")).is_splittable
        assert not Hand(cards=cards("AS", "KH")).is_splittable

    def test_three_cards_not_splittable(self, cards):
        assert not Hand(cards=cards("8S", "8H", "2C")).is_splittable

    def test_can_double(self, cards):
        hand = Hand(cards=cards("5S", "6H"))
        assert hand.can_double

        hand.add_card(Card(Rank.TWO, Suit.CLUBS))
        assert not hand.can_double

    def test_doubled_hand_cannot_double_again(self, cards):
        hand = Hand(cards=cards("5S", "6H"), is_doubled=True)
        assert not hand.can_double

    def test_display(self, cards):
        assert Hand(cards=cards("AS", "10H")).display == ["A of Spades", "10 of Hearts"]

    def test_str_marks_bust(self, bust_hand):
        assert str(bust_hand).endswith("(BUST)")


class TestEvaluateHand:
    """Tests for settling one hand against the dealer."""

    @pytest.mark.parametrize(
        "player, dealer, expected",
        [
            (("10S", "9H"), ("10C", "8D"), HandOutcome.WON),
            (("10S", "7H"), ("10C", "9D"), HandOutcome.LOST),
            (("10S", "8H"), ("10C", "8D"), HandOutcome.PUSH),
            (("10S", "7H"), ("10C", "6D", "KS"), HandOutcome.WON),
            (("10S", "6H", "KC"), ("10D", "7S"), HandOutcome.BUSTED),
            (("10S", "6H", "KC"), ("10D", "6C", "QS"), HandOutcome.BUSTED),
        ],
    )
    def test_outcomes(self, cards, player, dealer, expected):
        assert evaluate_hand(Hand(cards=cards(*player)), Hand(cards=cards(*dealer))) == expected

    def test_payout(self):
        assert payout(HandOutcome.WON, 10) == 20
        assert payout(HandOutcome.PUSH, 10) == 10
        assert payout(HandOutcome.LOST, 10) == 0
        assert payout(HandOutcome.BUSTED, 10) == 0

    def test_outcome_labels(self):
        assert HandOutcome.WON.label == "Won"
        assert HandOutcome.BUSTED.label == "Busted"
