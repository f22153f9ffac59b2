"""WebSocket connection manager and hub."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import uuid
from typing import TYPE_CHECKING, Any

from fastapi import WebSocket, WebSocketDisconnect

from hidden_trump.constants import CLOSE_GAME_STARTED, CLOSE_ROOM_FULL, CLOSE_ROOM_NOT_FOUND
from hidden_trump.errors import ErrorCode, GameError, RoomNotFound
from hidden_trump.models.enums import Command

if TYPE_CHECKING:
    from hidden_trump.api.game_handler import GameHandler
    from hidden_trump.api.responses import ScheduledCommand, ServerMessage
    from hidden_trump.models.room import Room
    from hidden_trump.services.room_registry import RoomRegistry

logger = logging.getLogger(__name__)

CONNECTION_ERRORS = (WebSocketDisconnect, RuntimeError, ConnectionError, OSError)

JOIN_CLOSE_CODES = {
    ErrorCode.ROOM_NOT_FOUND: CLOSE_ROOM_NOT_FOUND,
    ErrorCode.ROOM_FULL: CLOSE_ROOM_FULL,
    ErrorCode.GAME_ALREADY_STARTED: CLOSE_GAME_STARTED,
}

# (recipient identities, JSON payload)
Envelope = tuple[list[str], dict[str, Any]]


class ConnectionManager:
    """Manages WebSocket connections for game rooms.

    Handles:
    - Seat connections per room
    - The per-room lock every state change runs under
    - Timers that re-enter the room lock when they fire
    - Message delivery once the lock is released
    """

    def __init__(self, registry: RoomRegistry, game_handler: GameHandler) -> None:
        """Initialize the connection manager."""
        self.registry = registry
        self.game_handler = game_handler
        # room_code -> identity -> WebSocket
        self.active_connections: dict[str, dict[str, WebSocket]] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._timers: dict[str, set[asyncio.Task[None]]] = {}

    def lock_for(self, room_code: str) -> asyncio.Lock:
        """Get the lock serializing every change to a room.

        A code with no live room gets a throwaway lock, so late callers for a
        destroyed room never leave an entry behind.
        """
        lock = self._locks.get(room_code)
        if lock is None:
            lock = asyncio.Lock()
            if room_code in self.registry:
                self._locks[room_code] = lock
        return lock

    async def create_room(self, websocket: WebSocket, name: str) -> tuple[str, str] | None:
        """Accept a connection and seat it as host of a new room.

        Returns:
            (room_code, identity), or None if the room could not be created

        """
        await websocket.accept()
        identity = str(uuid.uuid4())

        try:
            room, seat_index = self.registry.create_room(name, identity)
        except GameError as e:
            await self._reject(websocket, e)
            return None

        self._register(room.code, identity, websocket)
        init = self.game_handler.init_message(room, seat_index)
        await self._send_all(room.code, self._address(room, [init]))
        return room.code, identity

    async def join_room(
        self, websocket: WebSocket, room_code: str, name: str
    ) -> tuple[str, str] | None:
        """Accept a connection and seat it in an existing room.

        Rejected joins get a REPORT_ERROR and the socket is closed with
        4004 (not found), 4003 (full) or 4005 (already started).

        Returns:
            (room_code, identity), or None if the join was rejected

        """
        # Must accept before closing to avoid HTTP 403
        await websocket.accept()
        identity = str(uuid.uuid4())

        room = self.registry.get(room_code)
        if room is None:
            await self._reject(websocket, RoomNotFound())
            return None

        envelopes: list[Envelope] = []
        async with self.lock_for(room.code):
            try:
                room, seat_index = self.registry.join_room(room.code, name, identity)
            except GameError as e:
                rejection: GameError | None = e
            else:
                rejection = None
                self._register(room.code, identity, websocket)
                envelopes = self._address(
                    room,
                    [
                        self.game_handler.init_message(room, seat_index),
                        self.game_handler.seats_updated(room),
                    ],
                )

        if rejection is not None:
            await self._reject(websocket, rejection)
            return None

        await self._send_all(room.code, envelopes)
        return room.code, identity

    def _register(self, room_code: str, identity: str, websocket: WebSocket) -> None:
        self.active_connections.setdefault(room_code, {})[identity] = websocket
        logger.info("Connection %s registered in room %s", identity, room_code)

    async def _reject(self, websocket: WebSocket, error: GameError) -> None:
        """Report a failed create/join and close the socket."""
        with contextlib.suppress(*CONNECTION_ERRORS):
            await websocket.send_json(
                {"command": Command.REPORT_ERROR.value, "content": error.to_dict()}
            )
            await websocket.close(
                code=JOIN_CLOSE_CODES.get(error.code, 1008), reason=error.message
            )

    async def execute(self, room_code: str, identity: str, command: str, content: Any) -> None:
        """Run a client command under the room lock, then deliver its messages."""
        async with self.lock_for(room_code):
            room = self.registry.get(room_code)
            if room is None:
                logger.warning("Room %s not found", room_code)
                return
            seat_index = room.seat_index_of(identity)
            if seat_index is None:
                logger.warning("Connection %s holds no seat in room %s", identity, room_code)
                return

            result = self.game_handler.handle_command(room, seat_index, command, content)
            envelopes = self._address(room, result.messages)
            self._schedule(room_code, result.scheduled)

        await self._send_all(room_code, envelopes)

    def _schedule(self, room_code: str, scheduled: list[ScheduledCommand]) -> None:
        for item in scheduled:
            task = asyncio.create_task(self._fire_later(room_code, item))
            tasks = self._timers.setdefault(room_code, set())
            tasks.add(task)
            task.add_done_callback(tasks.discard)

    async def _fire_later(self, room_code: str, scheduled: ScheduledCommand) -> None:
        """Wait, then run a server command under the same room lock as clients."""
        await asyncio.sleep(scheduled.delay)

        closing: list[WebSocket] = []
        async with self.lock_for(room_code):
            room = self.registry.get(room_code)
            if room is None:
                return
            result = self.game_handler.handle_timer(room, scheduled.command)
            envelopes = self._address(room, result.messages)
            self._schedule(room_code, result.scheduled)
            if result.close_room:
                closing = list(self.active_connections.get(room_code, {}).values())
                self._destroy(room_code)

        await self._send_all(room_code, envelopes)
        for websocket in closing:
            with contextlib.suppress(*CONNECTION_ERRORS):
                await websocket.close()

    async def disconnect(self, room_code: str, identity: str) -> None:
        """Drop a connection and update its seat.

        Pending timers keep running; the room is destroyed once no connected
        seat remains, or earlier by the CLOSE_ROOM timer of a finished game.
        """
        envelopes: list[Envelope] = []

        async with self.lock_for(room_code):
            connections = self.active_connections.get(room_code, {})
            if connections.pop(identity, None) is not None:
                logger.info("Connection %s left room %s", identity, room_code)

            room = self.registry.get(room_code)
            if room is not None:
                seat_index = room.seat_index_of(identity)
                if seat_index is not None:
                    result = self.game_handler.handle_disconnect(room, seat_index)
                    envelopes = self._address(room, result.messages)
                if room.is_abandoned():
                    self._destroy(room_code)

        await self._send_all(room_code, envelopes)

    def _destroy(self, room_code: str) -> None:
        self.registry.remove(room_code)
        current = asyncio.current_task()
        for task in self._timers.pop(room_code, set()):
            if task is not current:
                task.cancel()
        self.active_connections.pop(room_code, None)
        self._locks.pop(room_code, None)

    def _address(self, room: Room, messages: list[ServerMessage]) -> list[Envelope]:
        """Resolve each message's recipients while the room state is stable."""
        connected = self.active_connections.get(room.code, {})
        envelopes: list[Envelope] = []

        for message in messages:
            if message.is_broadcast():
                recipients = list(connected)
            else:
                receiver = _identity_at(room, message.receiver_seat)
                recipients = [receiver] if receiver in connected else []
            envelopes.append((recipients, message.to_dict()))

        return envelopes

    async def _send_all(self, room_code: str, envelopes: list[Envelope]) -> None:
        """Deliver addressed messages, dropping connections that fail."""
        lost: set[str] = set()

        for recipients, payload in envelopes:
            logger.debug("Dispatching %s to room %s", payload["command"], room_code)
            for identity in recipients:
                if identity in lost:
                    continue
                websocket = self.active_connections.get(room_code, {}).get(identity)
                if websocket is None:
                    continue
                try:
                    await websocket.send_json(payload)
                except CONNECTION_ERRORS:
                    logger.warning("Connection lost to %s", identity)
                    lost.add(identity)

        for identity in lost:
            await self.disconnect(room_code, identity)

    async def handle_player_message(
        self, websocket: WebSocket, room_code: str, identity: str
    ) -> None:
        """Handle incoming messages from a seat until it leaves.

        Args:
            websocket: WebSocket connection
            room_code: Room identifier
            identity: Connection identity

        """
        try:
            while True:
                data = await websocket.receive_text()
                message = json.loads(data)
                if not isinstance(message, dict):
                    logger.warning("Ignoring malformed message from %s", identity)
                    continue

                command = message.get("command", "")
                content = message.get("content", {})

                logger.info("Received %s from %s in room %s", command, identity, room_code)

                if command == Command.LEAVE.value:
                    with contextlib.suppress(*CONNECTION_ERRORS):
                        await websocket.close()
                    break

                await self.execute(room_code, identity, command, content)

        except WebSocketDisconnect:
            logger.info("Connection %s disconnected from room %s", identity, room_code)

        # KeyError: a binary frame has no "text" field
        except (RuntimeError, ConnectionError, OSError, KeyError, json.JSONDecodeError) as e:
            logger.warning("Error handling message from %s: %s", identity, e)

        finally:
            await self.disconnect(room_code, identity)

    async def shutdown(self) -> None:
        """Cancel every pending timer."""
        tasks = [task for tasks in self._timers.values() for task in tasks]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._timers.clear()


def _identity_at(room: Room, seat_index: int | None) -> str | None:
    if seat_index is None or not 0 <= seat_index < len(room.seats):
        return None
    return room.seats[seat_index].identity
