"""Hidden Trump: authoritative server for a four-player hidden-trump card game."""

__version__ = "1.0.0"
