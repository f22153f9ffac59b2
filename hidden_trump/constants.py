"""Game constants for Hidden Trump."""

# Table
NUM_SEATS = 4
HOST_SEAT = 0

# Rounds (one round = one full deal)
MAX_ROUNDS = 8

# Room codes
ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"  # no I, O, 0, 1
ROOM_CODE_LENGTH = 6
ROOM_CODE_MAX_ATTEMPTS = 100

# Presentation pacing (seconds)
TRICK_RESOLVE_DELAY = 2.0
NEXT_ROUND_DELAY = 3.0
GAME_END_LINGER = 30.0

# WebSocket close codes
CLOSE_ROOM_FULL = 4003
CLOSE_ROOM_NOT_FOUND = 4004
CLOSE_GAME_STARTED = 4005
