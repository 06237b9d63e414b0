"""Exceptions raised by the ranking engine and the player loader."""

from __future__ import annotations


class QuickRankError(Exception):
    """Base class for all QuickRank errors."""


class InvalidRangeError(QuickRankError, ValueError):
    """A selection or partition was asked to work on an invalid sub-range.

    The ranker only ever selects over the full array, so this signals a
    defect in the engine rather than bad user input.
    """


class RankingError(QuickRankError):
    """A rank could not be assigned exactly once to every player."""


class PlayerFileError(QuickRankError, ValueError):
    """A players file could not be turned into a player list."""
