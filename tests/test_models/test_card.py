"""Tests for Card model and winner determination."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from hidden_trump.models.card import (
    DECK_POINTS,
    DECK_SIZE,
    Card,
    build_deck,
    determine_winner,
    highest_card,
)
from hidden_trump.models.enums import Rank, Suit


class TestCard:
    """Test Card model."""

    def test_strength_order(self):
        """Ranks order 7 < 8 < A < 10 < K < Q < 9 < J."""
        order = ["7", "8", "A", "10", "K", "Q", "9", "J"]
        strengths = [Card(Rank(rank), Suit.HEARTS).strength for rank in order]
        assert strengths == sorted(strengths)
        assert len(set(strengths)) == 8

    def test_points(self):
        """Jacks are worth 3, nines 2, honours 1 and low cards nothing."""
        assert Card(Rank.JACK, Suit.SPADES).points == 3
        assert Card(Rank.NINE, Suit.SPADES).points == 2
        for rank in (Rank.ACE, Rank.TEN, Rank.KING, Rank.QUEEN):
            assert Card(rank, Suit.SPADES).points == 1
        assert Card(Rank.EIGHT, Suit.SPADES).points == 0
        assert Card(Rank.SEVEN, Suit.SPADES).points == 0

    def test_str(self):
        assert str(Card(Rank.JACK, Suit.SPADES)) == "J♠"
        assert str(Card(Rank.TEN, Suit.DIAMONDS)) == "10♦"

    def test_to_dict(self):
        assert Card(Rank.ACE, Suit.HEARTS).to_dict() == {"rank": "A", "suit": "hearts"}

    @pytest.mark.parametrize(
        "payload",
        [
            {"rank": "J", "suit": "spades"},
            {"rank": "j", "suit": "♠"},
            "J♠",
            "J of ♠",
            "J of spades",
        ],
    )
    def test_parse_accepts_formats(self, payload):
        """Dicts, symbol strings and 'rank of suit' strings all parse."""
        assert Card.parse(payload) == Card(Rank.JACK, Suit.SPADES)

    @pytest.mark.parametrize("payload", [None, 42, "", "X♠", "J?", {"rank": "J"}])
    def test_parse_rejects_garbage(self, payload):
        with pytest.raises(ValueError):
            Card.parse(payload)


class TestDeckConstants:
    """Test the deck composition."""

    def test_deck_is_32_unique_cards(self):
        deck = build_deck()
        assert len(deck) == DECK_SIZE == 32
        assert len(set(deck)) == 32

    def test_deck_points(self):
        """Four suits of 3 + 2 + 4 * 1 points."""
        assert DECK_POINTS == 36
        assert sum(card.points for card in build_deck()) == DECK_POINTS

    def test_highest_card_empty(self):
        assert highest_card([]) is None


class TestWinnerDetermination:
    """Test winner determination logic."""

    def test_empty_trick(self):
        assert determine_winner([], None, None) is None

    def test_highest_lead_wins_without_trump(self):
        """Jack beats nine beats ace within the leading suit."""
        cards = [Card.parse("A♥"), Card.parse("9♥"), Card.parse("J♥"), Card.parse("7♥")]
        assert determine_winner(cards, Suit.HEARTS, None) == Card.parse("J♥")

    def test_off_suit_never_wins(self):
        """A jack of another suit loses to a seven of the leading suit."""
        cards = [Card.parse("7♥"), Card.parse("J♠"), Card.parse("J♣"), Card.parse("J♦")]
        assert determine_winner(cards, Suit.HEARTS, None) == Card.parse("7♥")

    def test_trump_beats_lead(self):
        """Any trump beats the strongest lead card."""
        cards = [Card.parse("J♥"), Card.parse("7♦"), Card.parse("9♥"), Card.parse("8♠")]
        assert determine_winner(cards, Suit.HEARTS, Suit.DIAMONDS) == Card.parse("7♦")

    def test_highest_trump_wins(self):
        cards = [Card.parse("J♥"), Card.parse("7♦"), Card.parse("Q♦"), Card.parse("A♦")]
        assert determine_winner(cards, Suit.HEARTS, Suit.DIAMONDS) == Card.parse("Q♦")

    def test_unplayed_trump_suit_falls_back_to_lead(self):
        """A trump suit nobody played does not change the winner; queen outranks king."""
        cards = [Card.parse("K♥"), Card.parse("Q♥"), Card.parse("J♠"), Card.parse("8♥")]
        assert determine_winner(cards, Suit.HEARTS, Suit.CLUBS) == Card.parse("Q♥")

    def test_lead_defaults_to_first_card(self):
        cards = [Card.parse("8♣"), Card.parse("7♣"), Card.parse("J♥")]
        assert determine_winner(cards, None, None) == Card.parse("8♣")


class TestWinnerProperties:
    """Property-based tests for trick resolution."""

    @given(
        trick=st.lists(st.sampled_from(build_deck()), min_size=1, max_size=4, unique=True),
        trump=st.one_of(st.none(), st.sampled_from(list(Suit))),
    )
    @settings(max_examples=200, deadline=None)
    def test_winner_is_highest_trump_else_highest_lead(self, trick, trump):
        """The winner is the strongest trump if one was played, else the strongest lead."""
        lead = trick[0].suit
        winner = determine_winner(trick, lead, trump)

        trumps = [card for card in trick if card.suit == trump]
        pool = trumps or [card for card in trick if card.suit == lead]

        assert winner in pool
        assert winner.strength == max(card.strength for card in pool)
