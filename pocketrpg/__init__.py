"""Game rules and supporting pieces for a turn-based dungeon role-playing game."""

__version__ = "0.1.0"