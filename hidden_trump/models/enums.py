"""Enums for the game."""

from enum import Enum


class Phase(str, Enum):
    """Room phases during the lifecycle."""

    LOBBY = "lobby"
    TRUMP_SELECTION = "trump_selection"
    PLAY = "play"
    ROUND_END = "round_end"
    GAME_END = "game_end"


class Command(str, Enum):
    """WebSocket commands."""

    # Commands sent to players
    INIT = "INIT"
    SEATS_UPDATED = "SEATS_UPDATED"
    SEAT_LEFT = "SEAT_LEFT"
    SEAT_DISCONNECTED = "SEAT_DISCONNECTED"
    GAME_STARTED = "GAME_STARTED"
    DEAL = "DEAL"
    TRUMP_SET = "TRUMP_SET"
    TRUMP_BOUND = "TRUMP_BOUND"
    TRUMP_PASSED = "TRUMP_PASSED"
    CARD_PLAYED = "CARD_PLAYED"
    TRUMP_REVEALED = "TRUMP_REVEALED"
    REVEAL_AVAILABLE = "REVEAL_AVAILABLE"
    TRUMP_SUIT_PRIVATE = "TRUMP_SUIT_PRIVATE"
    TRICK_COMPLETE = "TRICK_COMPLETE"
    ROUND_ADVANCED = "ROUND_ADVANCED"
    GAME_OVER = "GAME_OVER"
    GAME_STATE = "GAME_STATE"
    REPORT_ERROR = "REPORT_ERROR"

    # Commands from client
    SET_READY = "SET_READY"
    START_GAME = "START_GAME"
    SET_TRUMP = "SET_TRUMP"
    PASS_TRUMP = "PASS_TRUMP"
    PLAY_CARD = "PLAY_CARD"
    ASK_REVEAL_TRUMP = "ASK_REVEAL_TRUMP"
    RENAME_SEAT = "RENAME_SEAT"
    SYNC_STATE = "SYNC_STATE"
    LEAVE = "LEAVE"

    # Server-scheduled commands
    RESOLVE_TRICK = "RESOLVE_TRICK"
    START_NEXT_ROUND = "START_NEXT_ROUND"
    CLOSE_ROOM = "CLOSE_ROOM"


class Suit(str, Enum):
    """Card suits."""

    HEARTS = "hearts"
    CLUBS = "clubs"
    SPADES = "spades"
    DIAMONDS = "diamonds"

    @property
    def symbol(self) -> str:
        """Unicode symbol for the suit."""
        return _SUIT_SYMBOLS[self]

    @classmethod
    def parse(cls, value: str) -> "Suit":
        """Parse a suit from its name or symbol."""
        for suit, symbol in _SUIT_SYMBOLS.items():
            if value == symbol:
                return suit
        return cls(value.lower())


_SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
    Suit.DIAMONDS: "♦",
}


class Rank(str, Enum):
    """Card ranks, declared weakest to strongest."""

    SEVEN = "7"
    EIGHT = "8"
    ACE = "A"
    TEN = "10"
    KING = "K"
    QUEEN = "Q"
    NINE = "9"
    JACK = "J"
