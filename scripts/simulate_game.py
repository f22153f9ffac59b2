#!/usr/bin/env python3
"""
CLI script to watch bots play Hidden Trump.

This script creates a room with four bot seats and drives a complete game
through the same command handler the server uses, printing each message.
"""

import argparse
import random

from hidden_trump.api.game_handler import GameHandler
from hidden_trump.api.responses import HandlerResult
from hidden_trump.bots import RandomBot
from hidden_trump.config import Settings
from hidden_trump.models.enums import Command, Phase
from hidden_trump.models.room import Room
from hidden_trump.services.room_registry import RoomRegistry


class BotGameSimulator:
    """Simulates a game between bot seats."""

    def __init__(self, rounds: int = 1, seed: int | None = None, verbose: bool = True) -> None:
        """
        Initialize simulator.

        Args:
            rounds: Full deals to play
            seed: Seed for shuffles and bot choices
            verbose: Print every server message
        """
        self.rng = random.Random(seed)
        self.handler = GameHandler(
            Settings(max_rounds=rounds, trick_resolve_delay=0, next_round_delay=0)
        )
        self.registry = RoomRegistry(
            max_rounds=rounds, rng_factory=lambda: random.Random(self.rng.random())
        )
        self.bots = [RandomBot(index, random.Random(self.rng.random())) for index in range(4)]
        self.verbose = verbose

    def run(self) -> list[int]:
        """Play a full game and return the final scores."""
        room, _ = self.registry.create_room("Bot1", "bot-0")
        for index in range(1, 4):
            self.registry.join_room(room.code, f"Bot{index + 1}", f"bot-{index}")
        for index in range(4):
            result = self.handler.handle_command(room, index, Command.SET_READY.value, {})
            self._show(room, result)

        self._show(room, self.handler.handle_command(room, 0, Command.START_GAME.value, {}))

        while room.phase != Phase.GAME_END:
            seat = room.current_seat_index
            bot = self.bots[seat]

            if room.phase == Phase.TRUMP_SELECTION:
                card = bot.choose_trump(room)
                if card is None:
                    result = self.handler.handle_command(room, seat, Command.PASS_TRUMP.value, {})
                else:
                    result = self.handler.handle_command(
                        room, seat, Command.SET_TRUMP.value, {"card": card.to_dict()}
                    )
            elif room.phase == Phase.PLAY:
                card = bot.pick_card(room)
                result = self.handler.handle_command(
                    room, seat, Command.PLAY_CARD.value, {"card": card.to_dict()}
                )
            else:
                break

            self._show(room, result)

        return list(room.scores)

    def _show(self, room: Room, result: HandlerResult) -> None:
        """Print messages, then run any scheduled follow-ups immediately."""
        for message in result.messages:
            if self.verbose:
                target = "all" if message.receiver_seat is None else f"seat {message.receiver_seat}"
                print(f"[{target}] {message.command.value}: {message.content}")

        for scheduled in result.scheduled:
            self._show(room, self.handler.handle_timer(room, scheduled.command))


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Watch bots play Hidden Trump")
    parser.add_argument("--rounds", type=int, default=1, help="Full deals to play")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--quiet", action="store_true", help="Only print final scores")
    args = parser.parse_args()

    scores = BotGameSimulator(rounds=args.rounds, seed=args.seed, verbose=not args.quiet).run()

    print(f"\n{'=' * 60}")
    print("FINAL SCORES")
    print(f"{'=' * 60}")
    for index, score in enumerate(scores):
        print(f"  Bot{index + 1}: {score}")


if __name__ == "__main__":
    main()
