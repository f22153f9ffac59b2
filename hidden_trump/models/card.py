"""Card model and trick-winner logic."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from hidden_trump.models.enums import Rank, Suit

# Strength order is game law, not face value: 7 < 8 < A < 10 < K < Q < 9 < J
RANK_STRENGTH: dict[Rank, int] = {
    Rank.SEVEN: 0,
    Rank.EIGHT: 1,
    Rank.ACE: 2,
    Rank.TEN: 3,
    Rank.KING: 4,
    Rank.QUEEN: 5,
    Rank.NINE: 6,
    Rank.JACK: 7,
}

RANK_POINTS: dict[Rank, int] = {
    Rank.JACK: 3,
    Rank.NINE: 2,
    Rank.ACE: 1,
    Rank.TEN: 1,
    Rank.KING: 1,
    Rank.QUEEN: 1,
    Rank.EIGHT: 0,
    Rank.SEVEN: 0,
}


@dataclass(frozen=True)
class Card:
    """A single playing card.

    Attributes:
        rank: Card rank
        suit: Card suit

    """

    rank: Rank
    suit: Suit

    @property
    def strength(self) -> int:
        """Position of the rank in the strength order (higher wins)."""
        return RANK_STRENGTH[self.rank]

    @property
    def points(self) -> int:
        """Points this card is worth to the trick winner."""
        return RANK_POINTS[self.rank]

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"rank": self.rank.value, "suit": self.suit.value}

    @classmethod
    def parse(cls, value: Any) -> "Card":
        """Parse a card from a client payload.

        Accepts ``{"rank": "J", "suit": "spades"}``, ``"J♠"`` or ``"J of ♠"``.

        Raises:
            ValueError: If the payload does not describe a card.

        """
        if isinstance(value, dict):
            rank_raw, suit_raw = value.get("rank"), value.get("suit")
        elif isinstance(value, str):
            text = value.strip()
            if " of " in text:
                rank_raw, _, suit_raw = text.partition(" of ")
            else:
                rank_raw, suit_raw = text[:-1], text[-1:]
        else:
            raise ValueError(f"Unsupported card payload: {value!r}")

        if not isinstance(rank_raw, str) or not isinstance(suit_raw, str):
            raise ValueError(f"Unsupported card payload: {value!r}")

        return cls(Rank(rank_raw.strip().upper()), Suit.parse(suit_raw.strip()))

    def __str__(self) -> str:
        """Return string representation of card."""
        return f"{self.rank.value}{self.suit.symbol}"


def build_deck() -> list[Card]:
    """Build the 32-card deck, suit by suit."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


DECK_SIZE = len(Suit) * len(Rank)
DECK_POINTS = sum(card.points for card in build_deck())


def highest_card(cards: Iterable[Card]) -> Card | None:
    """Return the strongest card by rank, or None if there are none."""
    return max(cards, key=lambda card: card.strength, default=None)


def determine_winner(
    cards: list[Card], leading_suit: Suit | None, trump_suit: Suit | None
) -> Card | None:
    """Determine the winning card of a trick.

    Args:
        cards: Cards played, in order
        leading_suit: Suit of the first card
        trump_suit: Publicly revealed trump suit, if any

    Returns:
        The winning card, or None for an empty trick

    Rules:
        1. The strongest trump card wins if any trump was played
        2. Otherwise the strongest card of the leading suit wins
        3. Off-suit, non-trump cards never win

    """
    if not cards:
        return None

    if trump_suit is not None:
        trump_winner = highest_card(c for c in cards if c.suit == trump_suit)
        if trump_winner is not None:
            return trump_winner

    lead = leading_suit if leading_suit is not None else cards[0].suit
    return highest_card(c for c in cards if c.suit == lead)
