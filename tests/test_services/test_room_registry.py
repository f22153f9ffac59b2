"""Tests for the room registry."""

import itertools
import random

import pytest

from hidden_trump.constants import ROOM_CODE_ALPHABET
from hidden_trump.errors import GameAlreadyStarted, RoomCodeExhausted, RoomFull, RoomNotFound
from hidden_trump.models.enums import Phase
from hidden_trump.services.room_registry import RoomRegistry, generate_room_code


@pytest.fixture
def registry():
    return RoomRegistry(max_rounds=3)


class TestRoomCodes:
    """Tests for room code generation."""

    def test_code_alphabet(self):
        code = generate_room_code(6)
        assert len(code) == 6
        assert set(code) <= set(ROOM_CODE_ALPHABET)

    def test_no_lookalike_characters(self):
        assert not set("01IO") & set(ROOM_CODE_ALPHABET)

    def test_collisions_are_retried(self):
        codes = iter(["AAAAAA", "AAAAAA", "BBBBBB"])
        registry = RoomRegistry(code_factory=lambda _length: next(codes))

        first, _ = registry.create_room("One", "c1")
        second, _ = registry.create_room("Two", "c2")

        assert first.code == "AAAAAA"
        assert second.code == "BBBBBB"

    def test_exhausted(self):
        registry = RoomRegistry(code_factory=lambda _length: "SAMEEE")
        registry.create_room("One", "c1")
        with pytest.raises(RoomCodeExhausted):
            registry.create_room("Two", "c2")
        assert len(registry) == 1


class TestCreateAndJoin:
    """Tests for creating and joining rooms."""

    def test_create_seats_host(self, registry):
        room, seat = registry.create_room("Alice", "c0")

        assert seat == 0
        assert room.seats[0].name == "Alice"
        assert room.phase == Phase.LOBBY
        assert room.max_rounds == 3
        assert room.code in registry

    def test_blank_name_gets_default(self, registry):
        room, _ = registry.create_room("  ", "c0")
        _, seat = registry.join_room(room.code, "", "c1")
        assert [s.name for s in room.seats] == ["Player 1", "Player 2"]
        assert seat == 1

    def test_join_is_case_insensitive(self, registry):
        room, _ = registry.create_room("Alice", "c0")
        joined, seat = registry.join_room(f" {room.code.lower()} ", "Bob", "c1")
        assert joined is room
        assert seat == 1

    def test_join_unknown(self, registry):
        with pytest.raises(RoomNotFound):
            registry.join_room("NOPE42", "Bob", "c1")

    def test_join_full(self, registry):
        room, _ = registry.create_room("P0", "c0")
        for i in range(1, 4):
            registry.join_room(room.code, f"P{i}", f"c{i}")
        with pytest.raises(RoomFull):
            registry.join_room(room.code, "Late", "c9")

    def test_join_started(self, registry):
        room, _ = registry.create_room("P0", "c0")
        room.phase = Phase.TRUMP_SELECTION
        with pytest.raises(GameAlreadyStarted):
            registry.join_room(room.code, "Late", "c9")

    def test_rooms_get_independent_rngs(self):
        seeds = itertools.count()
        registry = RoomRegistry(rng_factory=lambda: random.Random(next(seeds)))
        first, _ = registry.create_room("A", "a")
        second, _ = registry.create_room("B", "b")
        assert first.rng is not second.rng


class TestLookup:
    """Tests for finding and removing rooms."""

    def test_get_and_remove(self, registry):
        room, _ = registry.create_room("Alice", "c0")

        assert registry.get(room.code.lower()) is room
        assert registry.remove(room.code) is room
        assert registry.get(room.code) is None
        assert registry.remove(room.code) is None

    def test_iteration_is_a_snapshot(self, registry):
        """Removing rooms while iterating is safe."""
        for i in range(3):
            registry.create_room(f"P{i}", f"c{i}")
        for room in registry:
            registry.remove(room.code)
        assert len(registry) == 0
