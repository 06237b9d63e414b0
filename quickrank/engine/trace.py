"""Trace recording for the quickselect ranking engine."""

from __future__ import annotations

import copy
from collections.abc import Iterator

from .models import RankedPlayer, StepKind, TraceStep


class TraceRecorder:
    """Append-only log of trace steps for one ranking run."""

    def __init__(self, enabled: bool = True):
        """Initialize an empty trace.

        Args:
            enabled: If False, record() is a no-op and no snapshots are taken
        """
        self.enabled = enabled
        self._steps: list[TraceStep] = []

    def record(
        self,
        players: list[RankedPlayer],
        pivot_index: int,
        left: int,
        right: int,
        description: str,
        target_rank: int,
        kind: StepKind,
    ) -> None:
        """Append a snapshot of ``players`` to the trace.

        Every element is copied, so mutating ``players`` (or the objects
        in it) afterwards leaves the recorded step untouched.
        """
        if not self.enabled:
            return

        self._steps.append(
            TraceStep(
                players=tuple(copy.copy(p) for p in players),
                pivot_index=pivot_index,
                left=left,
                right=right,
                description=description,
                target_rank=target_rank,
                kind=kind,
            )
        )

    @property
    def steps(self) -> list[TraceStep]:
        return list(self._steps)

    def clear(self) -> None:
        self._steps.clear()

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[TraceStep]:
        return iter(self._steps)


def count_kinds(steps: list[TraceStep]) -> dict[StepKind, int]:
    """Count trace steps by kind, in StepKind declaration order."""
    counts = {kind: 0 for kind in StepKind}
    for step in steps:
        counts[step.kind] += 1
    return counts
