"""Response models and DTOs."""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from hidden_trump.errors import ErrorCode
from hidden_trump.models.enums import Command

__all__ = [
    "CardInfo",
    "CardListResponse",
    "Command",
    "ErrorCode",
    "HandlerResult",
    "RoomInfo",
    "RoomListResponse",
    "RoomSummary",
    "ScheduledCommand",
    "SeatInfo",
    "ServerMessage",
]


class SeatInfo(BaseModel):
    """Seat information for responses."""

    index: int
    name: str
    ready: bool
    connected: bool
    is_host: bool
    cards_in_hand: int


class RoomInfo(BaseModel):
    """Public room state."""

    code: str
    phase: str
    seats: list[SeatInfo]
    current_seat_index: int
    round_number: int
    max_rounds: int
    scores: list[int]
    trick_cards: list[dict[str, Any]]
    leading_suit: str | None
    trump_set: bool
    trump_revealed: bool
    trump_suit: str | None


class RoomSummary(BaseModel):
    """Room entry in the room list."""

    code: str
    phase: str
    joinable: bool
    seat_count: int
    seat_names: list[str]
    round_number: int


class RoomListResponse(BaseModel):
    """Response for the room list endpoint."""

    rooms: list[RoomSummary]
    count: int


class CardInfo(BaseModel):
    """Card definition."""

    rank: str
    suit: str
    name: str
    strength: int
    points: int


class CardListResponse(BaseModel):
    """Response for card list endpoint."""

    cards: list[CardInfo]
    deck_points: int


@dataclass
class ServerMessage:
    """Message sent from server to clients via WebSocket.

    Attributes:
        command: Command type
        room_code: Room identifier
        content: Message payload (varies by command)
        receiver_seat: Specific seat to receive (None = broadcast)

    """

    command: Command
    room_code: str
    content: Any
    receiver_seat: int | None = None

    def is_broadcast(self) -> bool:
        return self.receiver_seat is None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "command": self.command.value,
            "content": self.content,
        }


@dataclass(frozen=True)
class ScheduledCommand:
    """Server-driven command to run against a room after a delay."""

    command: Command
    delay: float


@dataclass
class HandlerResult:
    """Everything a handled command produced.

    Attributes:
        messages: Messages to deliver once the room lock is released
        scheduled: Follow-up commands to run later under the room lock
        close_room: Destroy the room and close its connections

    """

    messages: list[ServerMessage] = field(default_factory=list)
    scheduled: list[ScheduledCommand] = field(default_factory=list)
    close_room: bool = False

    def extend(self, other: "HandlerResult") -> None:
        self.messages.extend(other.messages)
        self.scheduled.extend(other.scheduled)
        self.close_room = self.close_room or other.close_room

    def commands(self) -> list[Command]:
        """Commands of every queued message, in order."""
        return [message.command for message in self.messages]
