"""Room model: the authoritative state of one table."""

import random
from dataclasses import dataclass, field
from typing import Any

from hidden_trump.constants import HOST_SEAT, MAX_ROUNDS, NUM_SEATS
from hidden_trump.errors import (
    GameAlreadyStarted,
    InvalidCard,
    MustFollowSuit,
    NotEnoughPlayers,
    NotHost,
    NotYourTurn,
    PlayersNotReady,
    RevealNotAvailable,
    RoomFull,
    SeatNotFound,
    WrongPhase,
)
from hidden_trump.models.card import Card
from hidden_trump.models.deck import Deck
from hidden_trump.models.enums import Phase, Suit
from hidden_trump.models.seat import Seat
from hidden_trump.models.trick import PlayedCard, Trick
from hidden_trump.models.trump import TrumpState


@dataclass(frozen=True)
class PlayResult:
    """Outcome of a legal card play."""

    played: PlayedCard
    trick: Trick
    trick_complete: bool
    trump_revealed: bool
    next_seat: int | None
    reveal_offer_seat: int | None


@dataclass(frozen=True)
class TrickResult:
    """Outcome of scoring a full trick."""

    trick: Trick
    winner_seat: int
    points: int
    round_over: bool
    game_over: bool


@dataclass
class Room:
    """Represents one game room.

    A room seats exactly four players. Each round is one full deal of the
    32-card deck: trump selection, then eight tricks. The game ends once
    ``max_rounds`` rounds have been played.

    Every mutating method validates first and raises a ``GameError`` before
    touching any state, so a rejected action leaves the room unchanged.

    Attributes:
        code: Room code players use to join
        max_rounds: Number of full deals in a game
        phase: Current phase
        seats: Occupied seats in turn order; index is the seat id
        current_seat_index: Seat entitled to act next
        round_number: Current round (1-based once started)
        scores: Cumulative score per seat
        trick: Trick in progress
        trump: Trump state for the current round
        played_cards: Cards played so far this deal
        tricks_played: Tricks resolved this deal
        last_trick_winner: Winner of the most recent trick
        deck: Undealt cards

    """

    code: str
    max_rounds: int = MAX_ROUNDS
    phase: Phase = Phase.LOBBY
    seats: list[Seat] = field(default_factory=list)
    current_seat_index: int = 0
    round_number: int = 0
    scores: list[int] = field(default_factory=lambda: [0] * NUM_SEATS)
    trick: Trick = field(default_factory=Trick)
    trump: TrumpState = field(default_factory=TrumpState)
    played_cards: list[Card] = field(default_factory=list)
    tricks_played: int = 0
    last_trick_winner: int | None = None
    deck: Deck = field(default_factory=Deck)
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    # ------------------------------------------------------------------
    # Seats
    # ------------------------------------------------------------------

    def add_seat(self, identity: str, name: str) -> int:
        """Seat a new player at the lowest free index."""
        if self.is_full():
            raise RoomFull
        if self.phase != Phase.LOBBY:
            raise GameAlreadyStarted

        self.seats.append(Seat(identity=identity, name=name))
        return len(self.seats) - 1

    def remove_seat(self, seat_index: int) -> None:
        """Remove a seat from the lobby; later seats shift down one place."""
        if self.phase != Phase.LOBBY:
            raise WrongPhase("Seats can only be vacated in the lobby")
        self.get_seat(seat_index)
        self.seats.pop(seat_index)

    def mark_disconnected(self, seat_index: int) -> None:
        """Flag a seat as disconnected; its turn obligations remain."""
        self.get_seat(seat_index).connected = False

    def get_seat(self, seat_index: int) -> Seat:
        """Get a seat by index."""
        if not 0 <= seat_index < len(self.seats):
            raise SeatNotFound(f"No player in seat {seat_index}")
        return self.seats[seat_index]

    def seat_index_of(self, identity: str) -> int | None:
        """Find the seat held by a connection identity."""
        for index, seat in enumerate(self.seats):
            if seat.identity == identity:
                return index
        return None

    def set_ready(self, seat_index: int) -> None:
        """Mark a seat ready. Idempotent."""
        self.get_seat(seat_index).ready = True

    def rename_seat(self, seat_index: int, name: str) -> None:
        """Change a seat's display name."""
        self.get_seat(seat_index).name = name.strip() or default_seat_name(seat_index)

    def is_full(self) -> bool:
        """Check if every seat is taken."""
        return len(self.seats) >= NUM_SEATS

    def all_ready(self) -> bool:
        return bool(self.seats) and all(seat.ready for seat in self.seats)

    def is_abandoned(self) -> bool:
        """Check if no connected player remains."""
        return not any(seat.connected for seat in self.seats)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_game(self, seat_index: int) -> None:
        """Start the game: deal, pick a random first seat, enter trump selection."""
        if self.phase != Phase.LOBBY:
            raise GameAlreadyStarted
        if seat_index != HOST_SEAT:
            raise NotHost
        if len(self.seats) != NUM_SEATS:
            raise NotEnoughPlayers
        if not self.all_ready():
            raise PlayersNotReady

        self.scores = [0] * NUM_SEATS
        self.round_number = 1
        self.last_trick_winner = None
        self._deal_round(self.rng.randrange(NUM_SEATS))

    def start_next_round(self) -> int:
        """Deal the next round, led off by the last trick winner.

        Returns:
            The seat polled first for trump this round

        """
        self._require_phase(Phase.ROUND_END)
        start_seat = (
            self.last_trick_winner
            if self.last_trick_winner is not None
            else self.current_seat_index
        )
        self._deal_round(start_seat)
        return start_seat

    def _deal_round(self, start_seat: int) -> None:
        self.deck = Deck(self.rng)
        self.deck.shuffle()
        for seat, hand in zip(self.seats, self.deck.deal(NUM_SEATS), strict=True):
            seat.hand = hand

        self.played_cards = []
        self.tricks_played = 0
        self.trick = Trick(number=1)
        self.trump = TrumpState(start_seat=start_seat)
        self.current_seat_index = start_seat
        self.phase = Phase.TRUMP_SELECTION

    def winners(self) -> list[int]:
        """Seats sharing the highest cumulative score."""
        best = max(self.scores)
        return [index for index, score in enumerate(self.scores) if score == best]

    def winner_seat(self) -> int:
        """Final winner; ties go to the lowest seat index."""
        return self.winners()[0]

    # ------------------------------------------------------------------
    # Trump selection
    # ------------------------------------------------------------------

    def set_trump(self, seat_index: int, card: Card) -> None:
        """Bind a card from the current seat's hand as the hidden trump."""
        self._require_phase(Phase.TRUMP_SELECTION)
        self._require_turn(seat_index)
        if not self.seats[seat_index].has_card(card):
            raise InvalidCard("Card not in hand")

        self.trump.bind(seat_index, card)
        self.current_seat_index = seat_index
        self.phase = Phase.PLAY

    def pass_trump(self, seat_index: int) -> bool:
        """Pass on choosing trump.

        Returns:
            True if every seat has now passed and the round is played without trump.

        """
        self._require_phase(Phase.TRUMP_SELECTION)
        self._require_turn(seat_index)

        if self.trump.record_pass():
            self.current_seat_index = self.trump.start_seat
            self.phase = Phase.PLAY
            return True

        self.current_seat_index = (seat_index + 1) % NUM_SEATS
        return False

    # ------------------------------------------------------------------
    # Tricks
    # ------------------------------------------------------------------

    def legal_cards(self, seat_index: int) -> list[Card]:
        """Cards a seat may play right now, ignoring whose turn it is."""
        seat = self.get_seat(seat_index)
        lead = self.trick.leading_suit
        if seat.has_suit(lead):
            return [card for card in seat.hand if card.suit == lead]
        return list(seat.hand)

    def play_card(self, seat_index: int, card: Card) -> PlayResult:
        """Play a card into the current trick."""
        self._require_phase(Phase.PLAY)
        self._require_turn(seat_index)
        if self.trick.is_complete():
            raise NotYourTurn("Trick is being scored")

        seat = self.seats[seat_index]
        if not seat.has_card(card):
            raise InvalidCard("Card not in hand")

        lead = self.trick.leading_suit
        if lead is not None and card.suit != lead and seat.has_suit(lead):
            raise MustFollowSuit

        seat.remove_card(card)
        self.trick.add_card(seat_index, card)
        self.played_cards.append(card)
        revealed = self.trump.reveal_if_trump(card)
        self.trump.clear_offer()

        next_seat: int | None = None
        if not self.trick.is_complete():
            next_seat = (seat_index + 1) % NUM_SEATS
            self.current_seat_index = next_seat
            if self.trump.is_hidden() and not self.seats[next_seat].has_suit(
                self.trick.leading_suit
            ):
                self.trump.offer_reveal(next_seat)

        return PlayResult(
            played=self.trick.cards[-1],
            trick=self.trick,
            trick_complete=self.trick.is_complete(),
            trump_revealed=revealed,
            next_seat=next_seat,
            reveal_offer_seat=self.trump.reveal_offer_seat,
        )

    def ask_reveal_trump(self, seat_index: int) -> Suit:
        """Privately reveal the hidden trump suit to a seat that cannot follow."""
        if self.phase != Phase.PLAY or not 0 <= seat_index < len(self.seats):
            raise RevealNotAvailable
        can_follow = self.seats[seat_index].has_suit(self.trick.leading_suit)
        return self.trump.claim_reveal(seat_index, can_follow=can_follow)

    def resolve_trick(self) -> TrickResult:
        """Score the full trick and advance to the next trick, round or game end."""
        self._require_phase(Phase.PLAY)
        if not self.trick.is_complete():
            raise WrongPhase("Trick is not complete")

        trick = self.trick
        winner = trick.determine_winner(self.trump.suit)
        if winner is None:
            raise WrongPhase("Trick has no cards")

        points = trick.points()
        self.scores[winner.seat_index] += points
        self.tricks_played += 1
        self.last_trick_winner = winner.seat_index
        self.current_seat_index = winner.seat_index
        self.trump.clear_offer()
        self.trick = Trick(number=trick.number + 1)

        round_over = all(not seat.hand for seat in self.seats)
        game_over = False
        if round_over:
            self.round_number += 1
            game_over = self.round_number > self.max_rounds
            self.phase = Phase.GAME_END if game_over else Phase.ROUND_END

        return TrickResult(
            trick=trick,
            winner_seat=winner.seat_index,
            points=points,
            round_over=round_over,
            game_over=game_over,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def accounted_cards(self) -> list[Card]:
        """Every card of the current deal: in hands, played or undealt."""
        in_hands = [card for seat in self.seats for card in seat.hand]
        return in_hands + self.played_cards + list(self.deck.cards)

    def to_public_dict(self) -> dict[str, Any]:
        """Room info safe to show anyone."""
        return {
            "code": self.code,
            "phase": self.phase.value,
            "seats": self.public_seats(),
            "current_seat_index": self.current_seat_index,
            "round_number": self.round_number,
            "max_rounds": self.max_rounds,
            "scores": list(self.scores),
            "trick_cards": self.trick.to_list(),
            "leading_suit": self.trick.leading_suit.value if self.trick.leading_suit else None,
            "trump_set": self.trump.binding is not None,
            "trump_revealed": self.trump.revealed,
            "trump_suit": self.trump.suit.value if self.trump.suit else None,
        }

    def public_seats(self) -> list[dict[str, Any]]:
        return [seat.to_public_dict(index) for index, seat in enumerate(self.seats)]

    def _require_phase(self, phase: Phase) -> None:
        if self.phase != phase:
            raise WrongPhase(f"Action requires phase {phase.value}, room is {self.phase.value}")

    def _require_turn(self, seat_index: int) -> None:
        if seat_index != self.current_seat_index:
            raise NotYourTurn

    def __str__(self) -> str:
        """Return string representation."""
        return (
            f"Room {self.code}: {len(self.seats)} seats, "
            f"Round {self.round_number}, Phase: {self.phase.value}"
        )


def default_seat_name(seat_index: int) -> str:
    """Name given to a seat whose player did not pick one."""
    return f"Player {seat_index + 1}"
