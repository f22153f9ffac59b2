"""Room registry: owns every live room, keyed by room code."""

import logging
import random
import secrets
from collections.abc import Callable, Iterator

from hidden_trump.constants import (
    MAX_ROUNDS,
    ROOM_CODE_ALPHABET,
    ROOM_CODE_LENGTH,
    ROOM_CODE_MAX_ATTEMPTS,
)
from hidden_trump.errors import RoomCodeExhausted, RoomNotFound
from hidden_trump.models.room import Room, default_seat_name

logger = logging.getLogger(__name__)


def generate_room_code(length: int = ROOM_CODE_LENGTH) -> str:
    """Generate a hard-to-guess room code without look-alike characters."""
    return "".join(secrets.choice(ROOM_CODE_ALPHABET) for _ in range(length))


class RoomRegistry:
    """Creates, finds and destroys rooms.

    One registry is built at application startup and handed to the connection
    manager; nothing else holds rooms. All methods are synchronous and never
    yield to the event loop, so a lookup-then-insert cannot interleave with
    another coroutine.
    """

    def __init__(
        self,
        code_length: int = ROOM_CODE_LENGTH,
        max_rounds: int = MAX_ROUNDS,
        code_factory: Callable[[int], str] = generate_room_code,
        rng_factory: Callable[[], random.Random] = random.Random,
    ) -> None:
        """Initialize an empty registry.

        Args:
            code_length: Length of generated room codes
            max_rounds: Full deals per game for new rooms
            code_factory: Builds a candidate code of the given length
            rng_factory: Builds the random source each room shuffles with

        """
        self.rooms: dict[str, Room] = {}
        self.code_length = code_length
        self.max_rounds = max_rounds
        self._code_factory = code_factory
        self._rng_factory = rng_factory

    def create_room(self, creator_name: str, identity: str) -> tuple[Room, int]:
        """Create a room with the creator in seat 0.

        Raises:
            RoomCodeExhausted: If no unused code turned up.

        """
        code = self._new_code()
        room = Room(code=code, max_rounds=self.max_rounds, rng=self._rng_factory())
        seat_index = room.add_seat(identity, creator_name.strip() or default_seat_name(0))
        self.rooms[code] = room

        logger.info("Room %s created by %s", code, creator_name)
        return room, seat_index

    def join_room(self, code: str, player_name: str, identity: str) -> tuple[Room, int]:
        """Seat a player in an existing room.

        Raises:
            RoomNotFound: Unknown code.
            RoomFull: All four seats are taken.
            GameAlreadyStarted: The room has left the lobby.

        """
        room = self.get(code)
        if room is None:
            raise RoomNotFound

        name = player_name.strip() or default_seat_name(len(room.seats))
        seat_index = room.add_seat(identity, name)

        logger.info("%s joined room %s in seat %d", player_name, room.code, seat_index)
        return room, seat_index

    def get(self, code: str) -> Room | None:
        """Get a room by code (case-insensitive)."""
        return self.rooms.get(code.strip().upper())

    def remove(self, code: str) -> Room | None:
        """Destroy a room."""
        room = self.rooms.pop(code.strip().upper(), None)
        if room is not None:
            logger.info("Room %s removed", room.code)
        return room

    def _new_code(self) -> str:
        for _ in range(ROOM_CODE_MAX_ATTEMPTS):
            code = self._code_factory(self.code_length)
            if code not in self.rooms:
                return code
        raise RoomCodeExhausted

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self.rooms.values()))

    def __len__(self) -> int:
        return len(self.rooms)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.strip().upper() in self.rooms
