"""Game domain models."""

from hidden_trump.models.card import Card, build_deck, determine_winner
from hidden_trump.models.deck import Deck
from hidden_trump.models.enums import Command, Phase, Rank, Suit
from hidden_trump.models.room import PlayResult, Room, TrickResult
from hidden_trump.models.seat import Seat
from hidden_trump.models.trick import PlayedCard, Trick
from hidden_trump.models.trump import TrumpBinding, TrumpState

__all__ = [
    "Card",
    "Command",
    "Deck",
    "Phase",
    "PlayResult",
    "PlayedCard",
    "Rank",
    "Room",
    "Seat",
    "Suit",
    "Trick",
    "TrickResult",
    "TrumpBinding",
    "TrumpState",
    "build_deck",
    "determine_winner",
]
