"""Game errors.

Every error rejects a single action against the current room state. Nothing is
mutated before the error is raised, so callers can report it and carry on.
"""

from enum import StrEnum


class ErrorCode(StrEnum):
    """Error codes for i18n translation on the frontend."""

    # Room errors
    ROOM_NOT_FOUND = "error.roomNotFound"
    ROOM_FULL = "error.roomFull"
    GAME_ALREADY_STARTED = "error.gameAlreadyStarted"
    ROOM_CODE_EXHAUSTED = "error.roomCodeExhausted"
    SEAT_NOT_FOUND = "error.seatNotFound"

    # Start errors
    NOT_HOST = "error.notHost"
    NOT_ENOUGH_PLAYERS = "error.notEnoughPlayers"
    PLAYERS_NOT_READY = "error.playersNotReady"

    # Turn errors
    WRONG_PHASE = "error.wrongPhase"
    NOT_YOUR_TURN = "error.notYourTurn"

    # Card errors
    INVALID_CARD = "error.invalidCard"
    MUST_FOLLOW_SUIT = "error.mustFollowSuit"

    # Trump errors
    REVEAL_NOT_AVAILABLE = "error.revealNotAvailable"

    # Protocol errors
    UNKNOWN_COMMAND = "error.unknownCommand"


class GameError(Exception):
    """Base class for rejected game actions."""

    code: ErrorCode = ErrorCode.WRONG_PHASE
    default_message = "Action not allowed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        """Convert to the REPORT_ERROR payload."""
        return {"code": self.code.value, "error": self.message}


class RoomNotFound(GameError):
    code = ErrorCode.ROOM_NOT_FOUND
    default_message = "Room not found"


class RoomFull(GameError):
    code = ErrorCode.ROOM_FULL
    default_message = "Room is full"


class GameAlreadyStarted(GameError):
    code = ErrorCode.GAME_ALREADY_STARTED
    default_message = "Game already started"


class RoomCodeExhausted(GameError):
    code = ErrorCode.ROOM_CODE_EXHAUSTED
    default_message = "Could not allocate a room code"


class SeatNotFound(GameError):
    code = ErrorCode.SEAT_NOT_FOUND
    default_message = "Seat not found"


class NotHost(GameError):
    code = ErrorCode.NOT_HOST
    default_message = "Only the host can start the game"


class NotEnoughPlayers(GameError):
    code = ErrorCode.NOT_ENOUGH_PLAYERS
    default_message = "Not enough players"


class PlayersNotReady(GameError):
    code = ErrorCode.PLAYERS_NOT_READY
    default_message = "Not all players are ready"


class WrongPhase(GameError):
    code = ErrorCode.WRONG_PHASE
    default_message = "Action not allowed in the current phase"


class NotYourTurn(GameError):
    code = ErrorCode.NOT_YOUR_TURN
    default_message = "Not your turn"


class InvalidCard(GameError):
    code = ErrorCode.INVALID_CARD
    default_message = "Invalid card"


class MustFollowSuit(GameError):
    code = ErrorCode.MUST_FOLLOW_SUIT
    default_message = "You must follow the leading suit"


class RevealNotAvailable(GameError):
    code = ErrorCode.REVEAL_NOT_AVAILABLE
    default_message = "Trump reveal not available"


class UnknownCommand(GameError):
    code = ErrorCode.UNKNOWN_COMMAND
    default_message = "Unknown command"
