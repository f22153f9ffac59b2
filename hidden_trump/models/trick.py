"""Trick model for a single trick within a round."""

from dataclasses import dataclass, field
from typing import Any

from hidden_trump.constants import NUM_SEATS
from hidden_trump.models.card import Card, determine_winner
from hidden_trump.models.enums import Suit


@dataclass(frozen=True)
class PlayedCard:
    """Represents a card played by a seat in a trick."""

    seat_index: int
    card: Card

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"seat_index": self.seat_index, "card": self.card.to_dict()}


@dataclass
class Trick:
    """Represents a single trick within a round.

    A trick is one full rotation: each seat plays one card in turn order.
    The first card fixes the leading suit; the other seats must follow it
    when they can.

    Attributes:
        number: Trick number within the round (1-indexed)
        cards: Cards played so far, in order
        leading_suit: Suit of the first card, None until it is played

    """

    number: int = 1
    cards: list[PlayedCard] = field(default_factory=list)
    leading_suit: Suit | None = None

    def add_card(self, seat_index: int, card: Card) -> None:
        """Add a played card, fixing the leading suit on the first one."""
        if not self.cards:
            self.leading_suit = card.suit
        self.cards.append(PlayedCard(seat_index, card))

    def is_complete(self, num_seats: int = NUM_SEATS) -> bool:
        """Check if every seat has played."""
        return len(self.cards) >= num_seats

    def is_empty(self) -> bool:
        return not self.cards

    def get_all_cards(self) -> list[Card]:
        """Get all cards played in this trick."""
        return [played.card for played in self.cards]

    def points(self) -> int:
        """Sum of the point values of every card in the trick."""
        return sum(played.card.points for played in self.cards)

    def determine_winner(self, trump_suit: Suit | None) -> PlayedCard | None:
        """Determine the winning play of this trick.

        Args:
            trump_suit: Publicly revealed trump suit, if any

        Returns:
            The winning play, or None for an empty trick

        """
        winning_card = determine_winner(self.get_all_cards(), self.leading_suit, trump_suit)
        if winning_card is None:
            return None
        return next(played for played in self.cards if played.card == winning_card)

    def to_list(self) -> list[dict[str, Any]]:
        """Serialize the played cards."""
        return [played.to_dict() for played in self.cards]

    def __str__(self) -> str:
        """Return string representation of the trick."""
        played = ", ".join(f"{p.seat_index}:{p.card}" for p in self.cards)
        return f"Trick {self.number}: [{played}]"
