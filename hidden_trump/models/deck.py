"""Deck model for shuffling and dealing cards."""

import random
from typing import List

from hidden_trump.constants import NUM_SEATS
from hidden_trump.models.card import Card, build_deck


class Deck:
    """
    Represents the 32-card deck.

    Four suits of eight ranks each. A shuffled deck is dealt out completely,
    round-robin, so every deal empties it.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        """Initialize an empty deck."""
        self.cards: List[Card] = []
        self._rng = rng or random.Random()

    def fill(self) -> None:
        """Fill the deck with all 32 cards."""
        self.cards = build_deck()

    def shuffle(self) -> None:
        """Fill and shuffle the deck.

        ``random.Random.shuffle`` is a Fisher-Yates shuffle, so every
        permutation is equally likely.
        """
        self.fill()
        self._rng.shuffle(self.cards)

    def deal(self, num_seats: int = NUM_SEATS) -> List[List[Card]]:
        """
        Deal every card round-robin.

        Args:
            num_seats: Number of seats to deal to

        Returns:
            List of hands, where hand ``i`` belongs to seat ``i``
        """
        if not self.cards:
            self.shuffle()

        hands: List[List[Card]] = [[] for _ in range(num_seats)]
        for index, card in enumerate(self.cards):
            hands[index % num_seats].append(card)

        self.cards = []
        return hands

    def __len__(self) -> int:
        return len(self.cards)
