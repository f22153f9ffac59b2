"""API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket
from fastapi.requests import HTTPConnection

from hidden_trump.api.responses import (
    CardInfo,
    CardListResponse,
    RoomInfo,
    RoomListResponse,
    RoomSummary,
)
from hidden_trump.api.websocket import ConnectionManager
from hidden_trump.models.card import DECK_POINTS, build_deck
from hidden_trump.models.enums import Phase

router = APIRouter()


def get_manager(connection: HTTPConnection) -> ConnectionManager:
    """Connection manager built at application startup."""
    return connection.app.state.connection_manager


Manager = Annotated[ConnectionManager, Depends(get_manager)]


@router.websocket("/rooms/create")
async def create_room(
    websocket: WebSocket,
    manager: Manager,
    name: str = Query(default="", description="Creator display name"),
) -> None:
    """WebSocket endpoint that creates a room and seats the caller as host.

    The first message is INIT with the room code and seat index 0.
    """
    joined = await manager.create_room(websocket, name)
    if joined is None:
        return

    room_code, identity = joined
    await manager.handle_player_message(websocket, room_code, identity)


@router.websocket("/rooms/{room_code}/join")
async def join_room(
    websocket: WebSocket,
    room_code: str,
    manager: Manager,
    name: str = Query(default="", description="Player display name"),
) -> None:
    """WebSocket endpoint to join a room.

    Args:
        websocket: WebSocket connection
        room_code: Room to join
        manager: Connection manager
        name: Player display name

    """
    joined = await manager.join_room(websocket, room_code, name)
    if joined is None:
        return

    actual_code, identity = joined
    await manager.handle_player_message(websocket, actual_code, identity)


@router.get("/cards")
async def get_cards() -> CardListResponse:
    """Get all cards in the deck with their strength and points."""
    cards = [
        CardInfo(
            rank=card.rank.value,
            suit=card.suit.value,
            name=str(card),
            strength=card.strength,
            points=card.points,
        )
        for card in build_deck()
    ]
    return CardListResponse(cards=cards, deck_points=DECK_POINTS)


@router.get("/rooms")
async def get_rooms(manager: Manager) -> RoomListResponse:
    """Get rooms that can be joined or are in progress.

    Joinable rooms are listed first, then by seat count descending.
    """
    rooms = [
        RoomSummary(
            code=room.code,
            phase=room.phase.value,
            joinable=room.phase == Phase.LOBBY and not room.is_full(),
            seat_count=len(room.seats),
            seat_names=[seat.name for seat in room.seats],
            round_number=room.round_number,
        )
        for room in manager.registry
        if room.phase != Phase.GAME_END and room.seats
    ]
    rooms.sort(key=lambda r: (not r.joinable, -r.seat_count))

    return RoomListResponse(rooms=rooms, count=len(rooms))


@router.get("/rooms/{room_code}")
async def get_room(room_code: str, manager: Manager) -> RoomInfo:
    """Get public room state.

    Args:
        room_code: Room code (case-insensitive)
        manager: Connection manager

    """
    room = manager.registry.get(room_code)

    if not room:
        raise HTTPException(status_code=404, detail="Room not found")

    return RoomInfo.model_validate(room.to_public_dict())
