"""Quickselect ranking engine.

Assigns ranks 1..N (highest score first) by running a full quickselect
for every rank, recording each pivot choice, comparison and swap so the
run can be replayed step by step.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from .errors import InvalidRangeError, RankingError
from .models import Player, RankedPlayer, StepKind, TraceStep, format_score
from .partition import check_range, choose_pivot, partition
from .trace import TraceRecorder

logger = logging.getLogger(__name__)


@dataclass
class RankingResult:
    """Players ordered by rank, plus the trace that produced the ranks."""
    ranked_players: list[RankedPlayer] = field(default_factory=list)
    steps: list[TraceStep] = field(default_factory=list)

    def __iter__(self) -> Iterator:
        # Allows ``ranked, steps = ranker.rank_all(players)``
        return iter((self.ranked_players, self.steps))

    def rank_of(self, player_id: int) -> int:
        for player in self.ranked_players:
            if player.id == player_id:
                return player.rank
        raise KeyError(player_id)


class Ranker:
    """Ranks players with one quickselect per rank."""

    def __init__(self, record_trace: bool = True):
        """Initialize ranker.

        Args:
            record_trace: If False, skip trace snapshots (ranks are unchanged)
        """
        self.record_trace = record_trace

    def rank_all(self, players: Sequence[Player]) -> RankingResult:
        """Rank every player, highest score first.

        Each rank is found by a fresh quickselect over a scratch copy of
        the full working array, so every search starts from the input
        layout. That costs O(N^2) overall instead of a single sort, but
        each rank's complete search shows up in the trace, and identical
        starting layouts guarantee the searches resolve to distinct
        players even when scores tie.

        Args:
            players: Players to rank; never modified

        Returns:
            RankingResult with players sorted by rank and the full trace

        Raises:
            RankingError: If ranks could not be assigned exactly once each
        """
        working = [RankedPlayer.from_player(p) for p in players]
        recorder = TraceRecorder(enabled=self.record_trace)

        position_by_id: dict[int, int] = {}
        for index, player in enumerate(working):
            if player.id in position_by_id:
                raise RankingError(f"Duplicate player id {player.id!r}")
            position_by_id[player.id] = index

        total = len(working)
        for target_rank in range(1, total + 1):
            scratch = list(working)
            found = self.select(scratch, 0, total - 1, target_rank - 1, recorder)

            index = position_by_id.get(found.id)
            if index is None:
                raise RankingError(f"Selected player id {found.id!r} is not in the working array")

            entry = working[index]
            if entry.rank:
                raise RankingError(
                    f"{entry.name} already holds rank {entry.rank}, "
                    f"cannot also take rank {target_rank}"
                )
            entry.rank = target_rank
            logger.debug("Rank %d -> %s (score %s)", target_rank, entry.name, format_score(entry.score))

        ranked = sorted(working, key=lambda p: p.rank)
        logger.debug("Ranked %d players with %d trace steps", total, len(recorder))

        return RankingResult(ranked_players=ranked, steps=recorder.steps)

    def select(
        self,
        players: list[RankedPlayer],
        left: int,
        right: int,
        k: int,
        recorder: TraceRecorder | None = None,
    ) -> RankedPlayer:
        """Find the player that belongs at position ``k`` of ``players[left..right]``.

        Positions count from the highest score. ``players`` is rearranged
        in place while narrowing the range.

        Args:
            players: Working array
            left: First index of the range
            right: Last index of the range
            k: Zero-based target position, within [left, right]
            recorder: Trace to append to (a new one is used if omitted)

        Returns:
            The player resolved at position k

        Raises:
            InvalidRangeError: If the range or k is invalid
        """
        if recorder is None:
            recorder = TraceRecorder(enabled=self.record_trace)

        check_range(players, left, right)
        if not left <= k <= right:
            raise InvalidRangeError(f"Target position {k} outside range [{left}, {right}]")

        target_rank = k + 1

        while left != right:
            pivot_index = choose_pivot(players, left, right)
            pivot = players[pivot_index]
            recorder.record(
                players, pivot_index, left, right,
                f"Chosen pivot: {pivot.name} with score {format_score(pivot.score)}",
                target_rank, StepKind.PIVOT_CHOSEN,
            )

            final_index = partition(players, left, right, pivot_index, target_rank, recorder)

            if k == final_index:
                player = players[final_index]
                recorder.record(
                    players, final_index, left, right,
                    f"Target found! {player.name} is at rank {target_rank} "
                    f"with score {format_score(player.score)}",
                    target_rank, StepKind.TARGET_FOUND,
                )
                return player

            if k < final_index:
                recorder.record(
                    players, final_index, left, right,
                    f"Target rank {target_rank} is in higher scores. "
                    f"Searching left partition [{left}, {final_index - 1}]",
                    target_rank, StepKind.SEARCH_LEFT,
                )
                right = final_index - 1
            else:
                recorder.record(
                    players, final_index, left, right,
                    f"Target rank {target_rank} is in lower scores. "
                    f"Searching right partition [{final_index + 1}, {right}]",
                    target_rank, StepKind.SEARCH_RIGHT,
                )
                left = final_index + 1

        player = players[left]
        recorder.record(
            players, left, left, right,
            f"Found player at rank {target_rank}: {player.name} "
            f"with score {format_score(player.score)}",
            target_rank, StepKind.FOUND,
        )
        return player


def rank_all(players: Sequence[Player], record_trace: bool = True) -> RankingResult:
    """Convenience function to rank players with a default Ranker.

    Args:
        players: Players to rank
        record_trace: Whether to record the step trace

    Returns:
        RankingResult with ranked players and trace
    """
    return Ranker(record_trace=record_trace).rank_all(players)
