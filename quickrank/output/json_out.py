"""JSON output formatter for rankings.

Generates structured JSON for programmatic use, including the full trace
so another tool can replay the quickselect run.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any

from .. import __version__
from ..engine.models import RankedPlayer, TraceStep, steps_for_rank
from ..engine.ranker import RankingResult
from ..engine.trace import count_kinds


class JSONOutput:
    """JSON output formatter."""

    def generate(
        self,
        result: RankingResult,
        include_trace: bool = False,
        include_snapshots: bool = True,
        target_rank: int | None = None,
    ) -> dict:
        """Generate JSON-serializable dictionary.

        Args:
            result: Output of Ranker.rank_all()
            include_trace: Whether to include the trace steps
            include_snapshots: Whether each step carries its array snapshot
            target_rank: Limit the trace to one rank's search

        Returns:
            Dictionary ready for JSON serialization
        """
        data: dict[str, Any] = {
            "metadata": {
                "generated_at": datetime.now().isoformat(),
                "tool": "QuickRank",
                "version": __version__,
                "total_players": len(result.ranked_players),
                "total_steps": len(result.steps),
            },
            "rankings": [self._player_to_dict(p) for p in result.ranked_players],
        }

        if include_trace:
            steps = result.steps
            if target_rank is not None:
                steps = steps_for_rank(steps, target_rank)

            data["trace_summary"] = {
                kind.value: count for kind, count in count_kinds(steps).items()
            }
            data["trace"] = [
                self._step_to_dict(step, include_snapshots) for step in steps
            ]

        return data

    def to_json(self, result: RankingResult, indent: int = 2, **kwargs) -> str:
        """Generate JSON string.

        Args:
            result: Ranking result
            indent: JSON indentation level
            **kwargs: Additional arguments passed to generate()

        Returns:
            JSON formatted string
        """
        data = self.generate(result, **kwargs)
        return json.dumps(data, indent=indent, default=str)

    def save(self, result: RankingResult, output_path: str | Path, **kwargs) -> None:
        """Save JSON report to file."""
        content = self.to_json(result, **kwargs)
        Path(output_path).write_text(content, encoding='utf-8')

    def _player_to_dict(self, player: RankedPlayer) -> dict:
        return asdict(player)

    def _step_to_dict(self, step: TraceStep, include_snapshot: bool = True) -> dict:
        """Convert TraceStep to dictionary."""
        data: dict[str, Any] = {
            "kind": step.kind.value,
            "target_rank": step.target_rank,
            "left": step.left,
            "right": step.right,
            "pivot_index": step.pivot_index,
            "description": step.description,
        }

        if include_snapshot:
            data["players"] = [
                {"id": p.id, "name": p.name, "score": p.score}
                for p in step.players
            ]

        return data


def export_json(
    result: RankingResult,
    output_path: str | Path | None = None,
    **kwargs
) -> str | None:
    """Convenience function to export a ranking to JSON.

    Args:
        result: Ranking result
        output_path: Optional path to save file. If None, returns string.
        **kwargs: Additional arguments passed to JSONOutput.generate()

    Returns:
        JSON string if no output_path, None otherwise
    """
    output = JSONOutput()

    if output_path:
        output.save(result, output_path, **kwargs)
        return None
    else:
        return output.to_json(result, **kwargs)
