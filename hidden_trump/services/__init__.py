"""Application services."""

from hidden_trump.services.room_registry import RoomRegistry

__all__ = ["RoomRegistry"]
