"""Bots that play legal moves, for simulations and tests."""

from hidden_trump.bots.random_bot import RandomBot

__all__ = ["RandomBot"]
