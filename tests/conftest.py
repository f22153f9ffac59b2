"""Shared fixtures for the test suite."""

import random

import pytest

from hidden_trump.config import Settings
from hidden_trump.models.card import Card
from hidden_trump.models.enums import Phase
from hidden_trump.models.room import Room
from hidden_trump.models.trick import Trick
from hidden_trump.models.trump import TrumpState


def parse_cards(text: str) -> list[Card]:
    """Parse a space separated hand such as ``"J♠ 9♥ 10♦"``."""
    return [Card.parse(token) for token in text.split()]


@pytest.fixture
def anyio_backend():
    """Configure anyio to use asyncio backend."""
    return "asyncio"


@pytest.fixture
def fast_settings():
    """Settings with no pacing delays and a two-round game."""
    return Settings(trick_resolve_delay=0, next_round_delay=0, game_end_linger=0, max_rounds=2)


@pytest.fixture
def lobby_room():
    """Lobby with four seated, unready players."""
    room = Room(code="ABCDEF", rng=random.Random(7))
    for i in range(4):
        room.add_seat(f"conn-{i}", f"Player {i + 1}")
    return room


@pytest.fixture
def ready_room(lobby_room):
    """Lobby with four ready players."""
    for i in range(4):
        lobby_room.set_ready(i)
    return lobby_room


@pytest.fixture
def started_room(ready_room):
    """Room that has just dealt round one."""
    ready_room.start_game(0)
    return ready_room


@pytest.fixture
def rig(started_room):
    """Replace the dealt hands with known ones and reopen trump selection.

    Usage: ``rig(["J♠ 9♥", "7♥ 8♠", ...], start_seat=0)``
    """

    def _rig(hands: list[str], start_seat: int = 0) -> Room:
        room = started_room
        for seat, hand in zip(room.seats, hands, strict=True):
            seat.hand = parse_cards(hand)
        room.played_cards = []
        room.tricks_played = 0
        room.trick = Trick(number=1)
        room.trump = TrumpState(start_seat=start_seat)
        room.current_seat_index = start_seat
        room.phase = Phase.TRUMP_SELECTION
        return room

    return _rig
