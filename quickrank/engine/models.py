"""Data model shared by the ranking engine and its collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StepKind(Enum):
    """What happened at one recorded trace step."""
    FOUND = "found"                  # Base case, single-element range
    PIVOT_CHOSEN = "pivot_chosen"
    PIVOT_MOVED = "pivot_moved"      # Pivot parked at the right end
    COMPARE = "compare"
    SWAP = "swap"                    # Higher score moved into the left partition
    KEEP = "keep"                    # Lower or equal score stays right
    PIVOT_PLACED = "pivot_placed"
    TARGET_FOUND = "target_found"
    SEARCH_LEFT = "search_left"
    SEARCH_RIGHT = "search_right"


# Steps that end one target rank's search
TERMINAL_KINDS = frozenset({StepKind.FOUND, StepKind.TARGET_FOUND})


@dataclass
class Player:
    """A scored player as supplied by the score-tracking side."""
    id: int
    name: str
    score: float
    color: str = ""


@dataclass
class RankedPlayer(Player):
    """A player plus the rank assigned to it (0 until resolved)."""
    rank: int = 0

    @classmethod
    def from_player(cls, player: Player) -> RankedPlayer:
        return cls(
            id=player.id,
            name=player.name,
            score=player.score,
            color=player.color,
        )


@dataclass(frozen=True)
class TraceStep:
    """One recorded snapshot of the algorithm state.

    ``players`` holds value copies taken when the step was recorded, so
    later swaps in the working array never show up in earlier steps.
    """
    players: tuple[RankedPlayer, ...]
    pivot_index: int
    left: int
    right: int
    description: str
    target_rank: int
    kind: StepKind

    @property
    def target_position(self) -> int:
        """Zero-based array position the current search is resolving."""
        return self.target_rank - 1

    @property
    def pivot(self) -> RankedPlayer:
        return self.players[self.pivot_index]

    def in_range(self, index: int) -> bool:
        return self.left <= index <= self.right

    def cell_status(self, index: int) -> str:
        """Display status of one array cell at this step.

        Returns:
            One of 'pivot', 'target', 'outside' or 'default'
        """
        if index == self.pivot_index:
            return "pivot"
        if index == self.target_position:
            return "target"
        if not self.in_range(index):
            return "outside"
        return "default"


def steps_for_rank(steps: list[TraceStep], target_rank: int) -> list[TraceStep]:
    """Return the steps recorded while searching for ``target_rank``."""
    return [step for step in steps if step.target_rank == target_rank]


def format_score(score: float) -> str:
    """Render a score without a trailing '.0' for whole numbers."""
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)
