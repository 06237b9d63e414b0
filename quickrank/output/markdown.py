"""Markdown output formatter for rankings.

Generates a scoreboard table and, optionally, the quickselect trace
grouped by target rank.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

from .. import __version__
from ..engine.models import RankedPlayer, TraceStep, format_score, steps_for_rank
from ..engine.ranker import RankingResult
from ..engine.trace import count_kinds

_MD_SPECIAL = re.compile(r'([\\`*_\{\}\[\]()#+\-.!|])')

_MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


def _escape_md(text: str) -> str:
    """Escape markdown special characters in user-derived text."""
    return _MD_SPECIAL.sub(r'\\\1', text)


class MarkdownOutput:
    """Markdown output formatter."""

    def generate(
        self,
        result: RankingResult,
        include_trace: bool = False,
        target_rank: int | None = None,
    ) -> str:
        """Generate a markdown report.

        Args:
            result: Output of Ranker.rank_all()
            include_trace: Whether to append the trace section
            target_rank: Limit the trace to one rank's search

        Returns:
            Markdown formatted string
        """
        sections = [
            self._generate_header(result),
            self._generate_scoreboard(result.ranked_players),
        ]

        if include_trace:
            sections.append(self._generate_trace(result, target_rank))

        return "\n\n".join(sections) + "\n"

    def save(self, result: RankingResult, output_path: str | Path, **kwargs) -> None:
        """Save markdown report to file."""
        content = self.generate(result, **kwargs)
        Path(output_path).write_text(content, encoding='utf-8')

    def _generate_header(self, result: RankingResult) -> str:
        lines = [
            "# QuickRank Scoreboard",
            "",
            f"*Generated {datetime.now().strftime('%Y-%m-%d %H:%M')} by quickrank v{__version__}*",
            "",
            f"- **Players:** {len(result.ranked_players)}",
            f"- **Trace steps:** {len(result.steps)}",
        ]
        return "\n".join(lines)

    def _generate_scoreboard(self, players: list[RankedPlayer]) -> str:
        lines = ["## Scoreboard", ""]

        if not players:
            lines.append("*No players to rank.*")
            return "\n".join(lines)

        lines.append("| Rank | Player | Score |")
        lines.append("|-----:|--------|------:|")
        for player in players:
            medal = _MEDALS.get(player.rank, "")
            rank = f"{player.rank} {medal}".rstrip()
            lines.append(f"| {rank} | {_escape_md(player.name)} | {format_score(player.score)} |")

        return "\n".join(lines)

    def _generate_trace(self, result: RankingResult, target_rank: int | None) -> str:
        lines = ["## Quickselect Trace", ""]

        if not result.steps:
            lines.append("*No trace steps recorded.*")
            return "\n".join(lines)

        if target_rank is None:
            ranks = range(1, len(result.ranked_players) + 1)
        else:
            ranks = [target_rank]
        sections = {rank: steps_for_rank(result.steps, rank) for rank in ranks}

        counts = count_kinds([step for steps in sections.values() for step in steps])
        summary = ", ".join(
            f"{kind.value.replace('_', ' ')}: {count}"
            for kind, count in counts.items() if count
        )
        lines.append(f"**Steps by kind:** {summary}")

        for rank, steps in sections.items():
            lines.append("")
            lines.append(self._generate_rank_section(rank, steps))

        return "\n".join(lines)

    def _generate_rank_section(self, rank: int, steps: list[TraceStep]) -> str:
        lines = [f"### Rank {rank}", ""]

        if not steps:
            lines.append("*No steps for this rank.*")
            return "\n".join(lines)

        lines.append("| # | Step | Range | Pivot | Description |")
        lines.append("|--:|------|:-----:|------:|-------------|")
        for number, step in enumerate(steps, 1):
            lines.append(
                f"| {number} | {step.kind.value} | {step.left}-{step.right} "
                f"| {step.pivot_index} | {_escape_md(step.description)} |"
            )

        final = steps[-1]
        order = ", ".join(
            f"{_escape_md(p.name)} ({format_score(p.score)})" for p in final.players
        )
        lines.append("")
        lines.append(f"Final array: {order}")

        return "\n".join(lines)


def export_markdown(
    result: RankingResult,
    output_path: str | Path | None = None,
    **kwargs
) -> str | None:
    """Convenience function to export a ranking to markdown.

    Args:
        result: Ranking result
        output_path: Optional path to save file. If None, returns string.
        **kwargs: Additional arguments passed to MarkdownOutput.generate()

    Returns:
        Markdown string if no output_path, None otherwise
    """
    output = MarkdownOutput()

    if output_path:
        output.save(result, output_path, **kwargs)
        return None
    else:
        return output.generate(result, **kwargs)
