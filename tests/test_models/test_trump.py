"""Tests for the hidden trump state."""

import pytest

from hidden_trump.errors import RevealNotAvailable
from hidden_trump.models.card import Card
from hidden_trump.models.enums import Suit
from hidden_trump.models.trump import TrumpState


@pytest.fixture
def bound():
    trump = TrumpState(start_seat=1)
    trump.bind(1, Card.parse("A♦"))
    return trump


class TestTrumpSelection:
    """Tests for binding and passing."""

    def test_unbound_has_no_suit(self):
        trump = TrumpState()
        assert trump.suit is None
        assert not trump.is_hidden()

    def test_bound_suit_is_hidden(self, bound):
        """Binding keeps the suit out of the public view."""
        assert bound.is_hidden()
        assert bound.suit is None
        assert bound.binding.seat_index == 1

    def test_four_passes_means_no_trump(self):
        trump = TrumpState()
        assert [trump.record_pass() for _ in range(4)] == [False, False, False, True]
        assert trump.binding is None


class TestPublicReveal:
    """Tests for revealing the trump by playing it."""

    def test_playing_trump_card_reveals(self, bound):
        assert bound.reveal_if_trump(Card.parse("A♦"))
        assert bound.revealed
        assert bound.suit == Suit.DIAMONDS

    def test_other_card_of_same_suit_does_not_reveal(self, bound):
        assert not bound.reveal_if_trump(Card.parse("J♦"))
        assert bound.suit is None

    def test_reveal_happens_once(self, bound):
        bound.reveal_if_trump(Card.parse("A♦"))
        assert not bound.reveal_if_trump(Card.parse("A♦"))


class TestPrivateReveal:
    """Tests for the one-shot private reveal."""

    def test_claim_with_offer(self, bound):
        bound.offer_reveal(2)
        assert bound.claim_reveal(2, can_follow=False) == Suit.DIAMONDS
        assert bound.reveal_offer_seat is None
        assert not bound.revealed

    def test_offer_is_single_use(self, bound):
        bound.offer_reveal(2)
        bound.claim_reveal(2, can_follow=False)
        with pytest.raises(RevealNotAvailable):
            bound.claim_reveal(2, can_follow=False)

    def test_claim_by_other_seat(self, bound):
        bound.offer_reveal(2)
        with pytest.raises(RevealNotAvailable):
            bound.claim_reveal(3, can_follow=False)

    def test_claim_when_seat_can_follow(self, bound):
        bound.offer_reveal(2)
        with pytest.raises(RevealNotAvailable):
            bound.claim_reveal(2, can_follow=True)

    def test_claim_without_trump(self):
        trump = TrumpState()
        trump.offer_reveal(0)
        with pytest.raises(RevealNotAvailable):
            trump.claim_reveal(0, can_follow=False)

    def test_claim_after_public_reveal(self, bound):
        bound.reveal_if_trump(Card.parse("A♦"))
        bound.offer_reveal(2)
        with pytest.raises(RevealNotAvailable):
            bound.claim_reveal(2, can_follow=False)
