"""Pivot selection and descending Lomuto partitioning.

Both functions work in place on a slice ``players[left..right]`` given by
index bounds; nothing is copied except by the trace recorder.
"""

from __future__ import annotations

from .errors import InvalidRangeError
from .models import RankedPlayer, StepKind, format_score
from .trace import TraceRecorder


def check_range(players: list[RankedPlayer], left: int, right: int) -> None:
    """Raise InvalidRangeError unless 0 <= left <= right < len(players)."""
    if left > right:
        raise InvalidRangeError(f"Empty range: left {left} > right {right}")
    if left < 0 or right >= len(players):
        raise InvalidRangeError(
            f"Range [{left}, {right}] outside array of length {len(players)}"
        )


def swap(players: list[RankedPlayer], i: int, j: int) -> None:
    players[i], players[j] = players[j], players[i]


def choose_pivot(players: list[RankedPlayer], left: int, right: int) -> int:
    """Choose a pivot index using median-of-three.

    Ranges of one or two players use ``left``. Otherwise left, mid and
    right are swapped into descending score order, which leaves the median
    at mid. Callers must expect ``players[left]`` and ``players[right]``
    to have changed.

    Returns:
        Index of the chosen pivot
    """
    check_range(players, left, right)

    if right - left < 2:
        return left

    mid = (left + right) // 2

    if players[left].score < players[mid].score:
        swap(players, left, mid)
    if players[left].score < players[right].score:
        swap(players, left, right)
    if players[mid].score < players[right].score:
        swap(players, mid, right)

    return mid


def partition(
    players: list[RankedPlayer],
    left: int,
    right: int,
    pivot_index: int,
    target_rank: int,
    recorder: TraceRecorder,
) -> int:
    """Partition ``players[left..right]`` around the pivot, highest first.

    Players scoring strictly above the pivot end up before it; players
    scoring the same or lower stay after it. Ties are therefore decided by
    where players happen to sit at partition time, not by input order.

    Args:
        players: Working array, modified in place
        left: First index of the range
        right: Last index of the range
        pivot_index: Index of the pivot inside the range
        target_rank: Rank being searched for (recorded on every step)
        recorder: Trace the partition steps are appended to

    Returns:
        Final index of the pivot
    """
    check_range(players, left, right)
    if not left <= pivot_index <= right:
        raise InvalidRangeError(
            f"Pivot index {pivot_index} outside range [{left}, {right}]"
        )

    pivot_score = players[pivot_index].score
    shown_pivot = format_score(pivot_score)

    # Park the pivot at the end while scanning
    swap(players, pivot_index, right)
    recorder.record(
        players, right, left, right,
        f"Moved pivot {players[right].name} (score: {shown_pivot}) to end for partitioning",
        target_rank, StepKind.PIVOT_MOVED,
    )

    store_index = left

    for i in range(left, right):
        current = players[i]
        recorder.record(
            players, right, left, right,
            f"Comparing {current.name}'s score ({format_score(current.score)}) "
            f"with pivot score ({shown_pivot})",
            target_rank, StepKind.COMPARE,
        )

        if current.score > pivot_score:
            if i != store_index:
                swap(players, i, store_index)
                moved = players[store_index]
                recorder.record(
                    players, right, left, right,
                    f"{moved.name}'s score ({format_score(moved.score)}) > {shown_pivot}, "
                    f"moved to left partition",
                    target_rank, StepKind.SWAP,
                )
            store_index += 1
        else:
            recorder.record(
                players, right, left, right,
                f"{current.name}'s score ({format_score(current.score)}) <= {shown_pivot}, "
                f"stays in right partition",
                target_rank, StepKind.KEEP,
            )

    swap(players, store_index, right)
    recorder.record(
        players, store_index, left, right,
        f"Pivot {players[store_index].name} (score: {shown_pivot}) "
        f"placed at final position {store_index}",
        target_rank, StepKind.PIVOT_PLACED,
    )

    return store_index
