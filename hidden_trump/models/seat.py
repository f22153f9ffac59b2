"""Seat model."""

from dataclasses import dataclass, field
from typing import Any

from hidden_trump.models.card import Card
from hidden_trump.models.enums import Suit


@dataclass
class Seat:
    """Represents one of the four seats at a table.

    Attributes:
        identity: Connection identity holding the seat
        name: Display name
        ready: Whether the seat has readied up in the lobby
        hand: Cards currently held
        connected: Whether the seat's connection is still open

    """

    identity: str
    name: str
    ready: bool = False
    hand: list[Card] = field(default_factory=list)
    connected: bool = True

    def has_card(self, card: Card) -> bool:
        """Check if the seat holds a card."""
        return card in self.hand

    def has_suit(self, suit: Suit | None) -> bool:
        """Check if the seat holds any card of a suit."""
        return suit is not None and any(card.suit == suit for card in self.hand)

    def remove_card(self, card: Card) -> None:
        """Remove a card from the hand."""
        self.hand.remove(card)

    def to_public_dict(self, index: int) -> dict[str, Any]:
        """Seat info safe to show every player."""
        return {
            "index": index,
            "name": self.name,
            "ready": self.ready,
            "connected": self.connected,
            "is_host": index == 0,
            "cards_in_hand": len(self.hand),
        }

    def __str__(self) -> str:
        """Return string representation."""
        status = "" if self.connected else " (disconnected)"
        return f"{self.name}{status}"
