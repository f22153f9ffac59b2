"""Game logic handler for WebSocket commands.

Every handler takes the room, the acting seat and the command payload and
returns a ``HandlerResult``: the messages to deliver and any follow-up
commands to schedule. Handlers never touch sockets or sleep; the connection
manager runs them under the room lock and delivers the result afterwards.
"""

import logging
from collections.abc import Callable
from typing import Any

from hidden_trump.api.responses import Command, HandlerResult, ScheduledCommand, ServerMessage
from hidden_trump.config import Settings, settings as default_settings
from hidden_trump.errors import GameError, InvalidCard, UnknownCommand, WrongPhase
from hidden_trump.models.card import Card
from hidden_trump.models.enums import Phase
from hidden_trump.models.room import Room

logger = logging.getLogger(__name__)

CommandHandler = Callable[[Room, int, dict[str, Any]], HandlerResult]
TimerHandler = Callable[[Room], HandlerResult]

# Commands a client may send; server-scheduled ones are excluded
CLIENT_COMMANDS = frozenset(
    {
        Command.SET_READY,
        Command.START_GAME,
        Command.SET_TRUMP,
        Command.PASS_TRUMP,
        Command.PLAY_CARD,
        Command.ASK_REVEAL_TRUMP,
        Command.RENAME_SEAT,
        Command.SYNC_STATE,
    }
)


class GameHandler:
    """Handles game logic for WebSocket commands.

    Processes client commands (SET_TRUMP, PLAY_CARD, ...) and server timers
    (RESOLVE_TRICK, START_NEXT_ROUND, CLOSE_ROOM) and generates the server messages.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize handler with game settings."""
        self.settings = settings or default_settings
        self._handlers: dict[Command, CommandHandler] = {
            Command.SET_READY: self._handle_set_ready,
            Command.START_GAME: self._handle_start_game,
            Command.SET_TRUMP: self._handle_set_trump,
            Command.PASS_TRUMP: self._handle_pass_trump,
            Command.PLAY_CARD: self._handle_play_card,
            Command.ASK_REVEAL_TRUMP: self._handle_ask_reveal_trump,
            Command.RENAME_SEAT: self._handle_rename_seat,
            Command.SYNC_STATE: self._handle_sync_state,
        }
        self._timers: dict[Command, TimerHandler] = {
            Command.RESOLVE_TRICK: self._resolve_trick,
            Command.START_NEXT_ROUND: self._start_next_round,
            Command.CLOSE_ROOM: self._close_room,
        }

    def handle_command(
        self, room: Room, seat_index: int, command: str, content: Any
    ) -> HandlerResult:
        """Route an incoming client command to its handler.

        Args:
            room: Room instance
            seat_index: Seat of the connection that sent the command
            command: Command type
            content: Command payload

        Returns:
            Messages to deliver; a rejected command yields a single
            REPORT_ERROR for the acting seat and leaves the room unchanged.

        """
        handler = self._handlers.get(_parse_command(command))
        if handler is None:
            logger.warning("Unknown command: %s", command)
            return self._error(room, seat_index, UnknownCommand(f"Unknown command: {command}"))

        payload = content if isinstance(content, dict) else {}
        try:
            return handler(room, seat_index, payload)
        except GameError as e:
            logger.info(
                "Rejected %s from seat %d in room %s: %s", command, seat_index, room.code, e
            )
            return self._error(room, seat_index, e)

    def handle_timer(self, room: Room, command: Command) -> HandlerResult:
        """Run a server-scheduled command."""
        try:
            return self._timers[command](room)
        except GameError as e:
            # The room moved on (e.g. it ended) before the timer fired
            logger.warning("Skipped %s in room %s: %s", command.value, room.code, e)
            return HandlerResult()

    def handle_disconnect(self, room: Room, seat_index: int) -> HandlerResult:
        """Vacate a lobby seat, or flag an in-game seat as disconnected."""
        if room.phase == Phase.LOBBY:
            room.remove_seat(seat_index)
            logger.info("Seat %d left room %s", seat_index, room.code)
            return HandlerResult(
                messages=[
                    self._broadcast(
                        room,
                        Command.SEAT_LEFT,
                        {"seat_index": seat_index, "seats": room.public_seats()},
                    )
                ]
            )

        room.mark_disconnected(seat_index)
        logger.info("Seat %d disconnected from room %s", seat_index, room.code)
        return HandlerResult(
            messages=[
                self._broadcast(room, Command.SEAT_DISCONNECTED, {"seat_index": seat_index})
            ]
        )

    def seats_updated(self, room: Room) -> ServerMessage:
        """Broadcast of the current seat list."""
        return self._broadcast(room, Command.SEATS_UPDATED, {"seats": room.public_seats()})

    def init_message(self, room: Room, seat_index: int) -> ServerMessage:
        """First message a seat receives after creating or joining a room."""
        return self._personal(
            room,
            seat_index,
            Command.INIT,
            {
                "room_code": room.code,
                "seat_index": seat_index,
                "seats": room.public_seats(),
            },
        )

    # ------------------------------------------------------------------
    # Lobby
    # ------------------------------------------------------------------

    def _handle_set_ready(
        self, room: Room, seat_index: int, _content: dict[str, Any]
    ) -> HandlerResult:
        """Handle SET_READY command."""
        room.set_ready(seat_index)
        return HandlerResult(messages=[self.seats_updated(room)])

    def _handle_rename_seat(
        self, room: Room, seat_index: int, content: dict[str, Any]
    ) -> HandlerResult:
        """Handle RENAME_SEAT command."""
        room.rename_seat(seat_index, str(content.get("name", "")))
        return HandlerResult(messages=[self.seats_updated(room)])

    def _handle_start_game(
        self, room: Room, seat_index: int, _content: dict[str, Any]
    ) -> HandlerResult:
        """Handle START_GAME command - deals and opens trump selection."""
        room.start_game(seat_index)

        logger.info(
            "Game started in room %s, seat %d chooses trump first",
            room.code,
            room.current_seat_index,
        )

        # Each seat only ever sees its own hand
        messages = [
            self._personal(
                room,
                index,
                Command.GAME_STARTED,
                {
                    "seat_index": index,
                    "hand": _cards(seat.hand),
                    "trump_phase_seat": room.current_seat_index,
                    "round_number": room.round_number,
                    "max_rounds": room.max_rounds,
                },
            )
            for index, seat in enumerate(room.seats)
        ]
        return HandlerResult(messages=messages)

    # ------------------------------------------------------------------
    # Trump selection
    # ------------------------------------------------------------------

    def _handle_set_trump(
        self, room: Room, seat_index: int, content: dict[str, Any]
    ) -> HandlerResult:
        """Handle SET_TRUMP command.

        The suit is withheld from the broadcast; only the setter is told
        which card was bound.
        """
        card = _parse_card(content)
        room.set_trump(seat_index, card)

        logger.info("Seat %d bound the trump in room %s", seat_index, room.code)

        return HandlerResult(
            messages=[
                self._broadcast(
                    room,
                    Command.TRUMP_SET,
                    {"seat_index": seat_index, "current_seat": room.current_seat_index},
                ),
                self._personal(room, seat_index, Command.TRUMP_BOUND, {"card": card.to_dict()}),
            ]
        )

    def _handle_pass_trump(
        self, room: Room, seat_index: int, _content: dict[str, Any]
    ) -> HandlerResult:
        """Handle PASS_TRUMP command."""
        no_trump = room.pass_trump(seat_index)

        if no_trump:
            logger.info("Every seat passed in room %s, playing without trump", room.code)

        return HandlerResult(
            messages=[
                self._broadcast(
                    room,
                    Command.TRUMP_PASSED,
                    {
                        "seat_index": seat_index,
                        "next_seat": room.current_seat_index,
                        "no_trump": no_trump,
                    },
                )
            ]
        )

    # ------------------------------------------------------------------
    # Tricks
    # ------------------------------------------------------------------

    def _handle_play_card(
        self, room: Room, seat_index: int, content: dict[str, Any]
    ) -> HandlerResult:
        """Handle PLAY_CARD command.

        Args:
            room: Room instance
            seat_index: Seat playing the card
            content: Must contain 'card'

        """
        card = _parse_card(content)
        play = room.play_card(seat_index, card)
        result = HandlerResult()

        logger.info("Seat %d played %s in room %s", seat_index, card, room.code)

        if play.trump_revealed:
            logger.info("Trump revealed in room %s: %s", room.code, card.suit.value)
            result.messages.append(
                self._broadcast(
                    room,
                    Command.TRUMP_REVEALED,
                    {"suit": card.suit.value, "seat_index": seat_index},
                )
            )

        result.messages.append(
            self._broadcast(
                room,
                Command.CARD_PLAYED,
                {
                    "seat_index": seat_index,
                    "card": card.to_dict(),
                    "trick_cards": play.trick.to_list(),
                    "leading_suit": play.trick.leading_suit.value
                    if play.trick.leading_suit
                    else None,
                    "next_seat": play.next_seat,
                },
            )
        )

        if play.reveal_offer_seat is not None:
            result.messages.append(
                self._personal(
                    room,
                    play.reveal_offer_seat,
                    Command.REVEAL_AVAILABLE,
                    {"seat_index": play.reveal_offer_seat},
                )
            )

        if play.trick_complete:
            result.scheduled.append(
                ScheduledCommand(Command.RESOLVE_TRICK, self.settings.trick_resolve_delay)
            )

        return result

    def _handle_ask_reveal_trump(
        self, room: Room, seat_index: int, _content: dict[str, Any]
    ) -> HandlerResult:
        """Handle ASK_REVEAL_TRUMP command - the answer goes to the asker alone."""
        suit = room.ask_reveal_trump(seat_index)
        logger.info("Seat %d privately saw the trump in room %s", seat_index, room.code)
        return HandlerResult(
            messages=[
                self._personal(room, seat_index, Command.TRUMP_SUIT_PRIVATE, {"suit": suit.value})
            ]
        )

    # ------------------------------------------------------------------
    # Scheduled
    # ------------------------------------------------------------------

    def _resolve_trick(self, room: Room) -> HandlerResult:
        """Score the full trick, then continue, end the round or end the game."""
        outcome = room.resolve_trick()
        result = HandlerResult()

        logger.info(
            "Trick %d in room %s won by seat %d for %d points",
            outcome.trick.number,
            room.code,
            outcome.winner_seat,
            outcome.points,
        )

        result.messages.append(
            self._broadcast(
                room,
                Command.TRICK_COMPLETE,
                {
                    "trick_number": outcome.trick.number,
                    "winner_seat": outcome.winner_seat,
                    "points": outcome.points,
                    "scores": list(room.scores),
                    "cards": outcome.trick.to_list(),
                },
            )
        )

        if outcome.game_over:
            result.extend(self._end_game(room))
        elif outcome.round_over:
            logger.info("Round %d finished in room %s", room.round_number - 1, room.code)
            result.scheduled.append(
                ScheduledCommand(Command.START_NEXT_ROUND, self.settings.next_round_delay)
            )

        return result

    def _start_next_round(self, room: Room) -> HandlerResult:
        """Deal a fresh round and reopen trump selection."""
        start_seat = room.start_next_round()

        logger.info("Starting round %d in room %s", room.round_number, room.code)

        messages = [
            self._broadcast(
                room,
                Command.ROUND_ADVANCED,
                {"round_number": room.round_number, "start_seat": start_seat},
            )
        ]
        messages.extend(
            self._personal(
                room,
                index,
                Command.DEAL,
                {
                    "hand": _cards(seat.hand),
                    "round_number": room.round_number,
                    "trump_phase_seat": start_seat,
                },
            )
            for index, seat in enumerate(room.seats)
        )
        return HandlerResult(messages=messages)

    def _end_game(self, room: Room) -> HandlerResult:
        """Announce the final winner."""
        winner_seat = room.winner_seat()

        logger.info("Game in room %s ended. Winner: seat %d", room.code, winner_seat)

        return HandlerResult(
            messages=[
                self._broadcast(
                    room,
                    Command.GAME_OVER,
                    {
                        "winner_seat": winner_seat,
                        "scores": list(room.scores),
                        "tied_seats": room.winners(),
                    },
                )
            ],
            scheduled=[ScheduledCommand(Command.CLOSE_ROOM, self.settings.game_end_linger)],
        )

    def _close_room(self, room: Room) -> HandlerResult:
        if room.phase != Phase.GAME_END:
            raise WrongPhase("Room is still in play")
        logger.info("Closing finished room %s", room.code)
        return HandlerResult(close_room=True)

    # ------------------------------------------------------------------
    # State sync
    # ------------------------------------------------------------------

    def _handle_sync_state(
        self, room: Room, seat_index: int, _content: dict[str, Any]
    ) -> HandlerResult:
        """Handle SYNC_STATE command - sends full room state to the requesting seat."""
        return HandlerResult(
            messages=[
                self._personal(
                    room, seat_index, Command.GAME_STATE, self.build_room_state(room, seat_index)
                )
            ]
        )

    def build_room_state(self, room: Room, seat_index: int) -> dict[str, Any]:
        """Build the room state as one seat is allowed to see it.

        Includes all public information plus the seat's own hand and, for
        the seat that bound it, the hidden trump card.
        """
        seat = room.get_seat(seat_index)
        binding = room.trump.binding

        state = room.to_public_dict()
        state.update(
            {
                "seat_index": seat_index,
                "hand": _cards(seat.hand),
                "trump_card": (
                    binding.card.to_dict()
                    if binding is not None and binding.seat_index == seat_index
                    else None
                ),
                "reveal_available": room.trump.reveal_offer_seat == seat_index,
            }
        )
        if room.phase == Phase.PLAY and room.current_seat_index == seat_index:
            state["legal_cards"] = _cards(room.legal_cards(seat_index))
        return state

    # ------------------------------------------------------------------
    # Message helpers
    # ------------------------------------------------------------------

    def _broadcast(self, room: Room, command: Command, content: dict[str, Any]) -> ServerMessage:
        return ServerMessage(command=command, room_code=room.code, content=content)

    def _personal(
        self, room: Room, seat_index: int, command: Command, content: dict[str, Any]
    ) -> ServerMessage:
        return ServerMessage(
            command=command, room_code=room.code, content=content, receiver_seat=seat_index
        )

    def _error(self, room: Room, seat_index: int, error: GameError) -> HandlerResult:
        """Send error message to the acting seat only."""
        return HandlerResult(
            messages=[self._personal(room, seat_index, Command.REPORT_ERROR, error.to_dict())]
        )


def _parse_command(command: str) -> Command | None:
    try:
        parsed = Command(command)
    except ValueError:
        return None
    return parsed if parsed in CLIENT_COMMANDS else None


def _parse_card(content: dict[str, Any]) -> Card:
    try:
        return Card.parse(content.get("card"))
    except ValueError as e:
        raise InvalidCard("Unrecognised card") from e


def _cards(cards: list[Card]) -> list[dict[str, str]]:
    return [card.to_dict() for card in cards]
