"""Random bot that makes random legal moves."""

import random

from hidden_trump.models.card import Card
from hidden_trump.models.room import Room


class RandomBot:
    """Bot that makes completely random decisions.

    Serves as a baseline opponent in simulations and drives whole games in
    tests. It never takes over a human seat.
    """

    def __init__(
        self, seat_index: int, rng: random.Random | None = None, trump_chance: float = 0.5
    ) -> None:
        """Initialize random bot.

        Args:
            seat_index: Seat the bot plays
            rng: Random source
            trump_chance: Probability of binding a trump when polled

        """
        self.seat_index = seat_index
        self.rng = rng or random.Random()
        self.trump_chance = trump_chance

    def choose_trump(self, room: Room) -> Card | None:
        """Pick a card to bind as trump, or None to pass."""
        hand = room.seats[self.seat_index].hand
        if not hand or self.rng.random() >= self.trump_chance:
            return None
        return self.rng.choice(hand)

    def pick_card(self, room: Room) -> Card:
        """Pick a random legal card."""
        return self.rng.choice(room.legal_cards(self.seat_index))

    def __str__(self) -> str:
        return f"RandomBot(seat={self.seat_index})"
