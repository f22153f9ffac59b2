"""Hidden trump state: selection, public reveal and private reveal."""

from dataclasses import dataclass

from hidden_trump.constants import NUM_SEATS
from hidden_trump.errors import RevealNotAvailable
from hidden_trump.models.card import Card
from hidden_trump.models.enums import Suit


@dataclass(frozen=True)
class TrumpBinding:
    """The hidden trump card and the seat that chose it."""

    seat_index: int
    card: Card


@dataclass
class TrumpState:
    """Trump state for one round.

    Selection polls seats one at a time starting at ``start_seat``. The first
    seat to choose binds its card as the hidden trump; if every seat passes the
    round is played without trump.

    While the trump is hidden, a seat that cannot follow the leading suit may
    be offered a one-shot private look at the trump suit. Playing the trump
    card itself reveals the suit to everyone.

    Attributes:
        start_seat: Seat polled first this round
        passes: Number of seats that have passed so far
        binding: The bound trump card, None until chosen (or if all passed)
        revealed: Whether the trump suit is public
        reveal_offer_seat: Seat currently allowed to ask for a private reveal

    """

    start_seat: int = 0
    passes: int = 0
    binding: TrumpBinding | None = None
    revealed: bool = False
    reveal_offer_seat: int | None = None

    @property
    def suit(self) -> Suit | None:
        """Public trump suit; None while hidden or when there is no trump."""
        if self.revealed and self.binding is not None:
            return self.binding.card.suit
        return None

    def is_hidden(self) -> bool:
        """Check if a trump is bound but not yet public."""
        return self.binding is not None and not self.revealed

    def bind(self, seat_index: int, card: Card) -> None:
        """Bind the hidden trump card."""
        self.binding = TrumpBinding(seat_index, card)
        self.reveal_offer_seat = None

    def record_pass(self) -> bool:
        """Record a pass.

        Returns:
            True once every seat has passed.

        """
        self.passes += 1
        return self.passes >= NUM_SEATS

    def reveal_if_trump(self, card: Card) -> bool:
        """Reveal the trump publicly if ``card`` is the bound trump card.

        Returns:
            True if this play revealed the trump.

        """
        if self.is_hidden() and self.binding is not None and self.binding.card == card:
            self.revealed = True
            self.reveal_offer_seat = None
            return True
        return False

    def offer_reveal(self, seat_index: int) -> None:
        self.reveal_offer_seat = seat_index

    def clear_offer(self) -> None:
        self.reveal_offer_seat = None

    def claim_reveal(self, seat_index: int, *, can_follow: bool) -> Suit:
        """Use the private reveal offer.

        Args:
            seat_index: Seat asking for the reveal
            can_follow: Whether that seat holds the leading suit

        Returns:
            The hidden trump suit, for the asking seat only

        Raises:
            RevealNotAvailable: If the seat holds no live offer.

        """
        if (
            not self.is_hidden()
            or self.binding is None
            or self.reveal_offer_seat != seat_index
            or can_follow
        ):
            raise RevealNotAvailable

        self.reveal_offer_seat = None
        return self.binding.card.suit
