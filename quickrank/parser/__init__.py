"""Parsers for players files."""

from .players import PLAYER_COLORS, PlayerFileParser, load_players

__all__ = [
    "PlayerFileParser",
    "PLAYER_COLORS",
    "load_players",
]
