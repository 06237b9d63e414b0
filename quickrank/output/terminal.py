"""Rich terminal output for rankings and quickselect traces.

Provides formatted, color-coded terminal output using the Rich library.
Theme: Catppuccin Mocha (https://catppuccin.com/palette/)
"""

from __future__ import annotations

from rich.align import Align
from rich.box import ROUNDED
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from .. import __version__
from ..engine.models import RankedPlayer, StepKind, TraceStep, format_score, steps_for_rank
from ..engine.ranker import RankingResult
from ..engine.trace import count_kinds

# Catppuccin Mocha palette
MOCHA = {
    "rosewater": "#f5e0dc",
    "flamingo": "#f2cdcd",
    "pink": "#f5c2e7",
    "mauve": "#cba6f7",
    "red": "#f38ba8",
    "maroon": "#eba0ac",
    "peach": "#fab387",
    "yellow": "#f9e2af",
    "green": "#a6e3a1",
    "teal": "#94e2d5",
    "sky": "#89dceb",
    "sapphire": "#74c7ec",
    "blue": "#89b4fa",
    "lavender": "#b4befe",
    "text": "#cdd6f4",
    "subtext1": "#bac2de",
    "subtext0": "#a6adc8",
    "overlay2": "#9399b2",
    "overlay1": "#7f849c",
    "overlay0": "#6c7086",
    "surface2": "#585b70",
    "surface1": "#45475a",
    "surface0": "#313244",
    "base": "#1e1e2e",
    "mantle": "#181825",
    "crust": "#11111b",
}

# Rich theme for markup tags
MOCHA_THEME = Theme({
    "info": MOCHA["sapphire"],
    "warning": MOCHA["peach"],
    "danger": MOCHA["red"],
    "success": MOCHA["green"],
})

# Player colour names mapped onto the palette
PLAYER_COLORS = {
    "red": MOCHA["red"],
    "blue": MOCHA["blue"],
    "green": MOCHA["green"],
    "yellow": MOCHA["yellow"],
    "purple": MOCHA["mauve"],
    "pink": MOCHA["pink"],
    "indigo": MOCHA["lavender"],
    "orange": MOCHA["peach"],
}

MEDALS = {1: "gold", 2: "silver", 3: "bronze"}

MEDAL_COLORS = {
    1: MOCHA["yellow"],
    2: MOCHA["subtext1"],
    3: MOCHA["peach"],
}

STEP_COLORS = {
    StepKind.FOUND: MOCHA["mauve"],
    StepKind.PIVOT_CHOSEN: MOCHA["red"],
    StepKind.PIVOT_MOVED: MOCHA["maroon"],
    StepKind.COMPARE: MOCHA["yellow"],
    StepKind.SWAP: MOCHA["blue"],
    StepKind.KEEP: MOCHA["green"],
    StepKind.PIVOT_PLACED: MOCHA["red"],
    StepKind.TARGET_FOUND: MOCHA["mauve"],
    StepKind.SEARCH_LEFT: MOCHA["sapphire"],
    StepKind.SEARCH_RIGHT: MOCHA["sapphire"],
}

# Array cell styles by TraceStep.cell_status()
CELL_STYLES = {
    "pivot": f"bold {MOCHA['crust']} on {MOCHA['red']}",
    "target": f"bold {MOCHA['crust']} on {MOCHA['mauve']}",
    "outside": MOCHA["surface2"],
    "default": f"{MOCHA['text']} on {MOCHA['surface0']}",
}


# ── Badge / display helpers ──────────────────────────────────────────────


def player_color(color: str) -> str:
    """Resolve a player's colour name (or hex value) to a Rich colour."""
    if color.startswith("#"):
        return color
    return PLAYER_COLORS.get(color.lower(), MOCHA["subtext1"])


def _rank_badge(rank: int) -> Text:
    """Render a rank, with a medal colour for the podium places."""
    badge = Text()
    color = MEDAL_COLORS.get(rank)
    if color:
        badge.append(f" {rank} ", style=f"bold {MOCHA['crust']} on {color}")
        badge.append(f" {MEDALS[rank]}", style=color)
    else:
        badge.append(f" {rank} ", style=f"bold {MOCHA['text']}")
    return badge


def _score_bar(score: float, top_score: float, width: int = 20, color: str = MOCHA["green"]) -> Text:
    """Build a bar for a score relative to the top score.

    Returns a Rich Text object like: ████████████████░░░░ 85
    """
    fraction = score / top_score if top_score > 0 else 0.0
    filled = int(round(max(0.0, min(1.0, fraction)) * width))
    empty = width - filled

    bar = Text()
    bar.append("█" * filled, style=color)
    bar.append("░" * empty, style=MOCHA["surface2"])
    bar.append(f" {format_score(score)}", style=f"bold {color}")
    return bar


def _kind_badge(kind: StepKind) -> Text:
    color = STEP_COLORS.get(kind, MOCHA["subtext1"])
    badge = Text()
    badge.append(kind.value.replace("_", " "), style=f"bold {color}")
    return badge


def _array_view(step: TraceStep) -> Text:
    """Render a step's array snapshot as a row of coloured cells."""
    view = Text()
    for index, player in enumerate(step.players):
        style = CELL_STYLES[step.cell_status(index)]
        view.append(f" {player.name}:{format_score(player.score)} ", style=style)
        view.append(" ")

    view.append("\n")
    for index, player in enumerate(step.players):
        cell_width = len(player.name) + len(format_score(player.score)) + 3
        view.append(f"{index:^{cell_width}}", style=MOCHA["overlay1"])
        view.append(" ")
    return view


# ── Main output class ────────────────────────────────────────────────────


class TerminalOutput:
    """Rich terminal output formatter.

    Prints a bordered scoreboard, a step-by-step trace table and
    per-step array views.
    """

    def __init__(
        self,
        console: Console | None = None,
        no_color: bool = False,
    ):
        """Initialize terminal output.

        Args:
            console: Optional Rich console instance
            no_color: If True, disable colored output
        """
        if console:
            self.console = console
        elif no_color:
            self.console = Console(no_color=True, highlight=False)
        else:
            self.console = Console(theme=MOCHA_THEME)

    # ── Public API ────────────────────────────────────────────────────

    def print_header(self, result: RankingResult) -> None:
        """Print the banner and a one-line run summary."""
        self.console.print()
        self.console.print(
            Panel(
                Align.center(
                    Text(
                        "QUICKRANK - Quickselect Scoreboard",
                        style=f"bold {MOCHA['mauve']}",
                    )
                ),
                box=ROUNDED,
                border_style=MOCHA["mauve"],
                padding=(0, 1),
            )
        )

        summary = Text()
        summary.append(f"{len(result.ranked_players)} players", style=MOCHA["text"])
        summary.append(" | ", style=MOCHA["surface2"])
        summary.append(f"{len(result.steps)} trace steps", style=MOCHA["sapphire"])
        self.console.print(summary)
        self.console.print()

    def print_scoreboard(self, players: list[RankedPlayer]) -> None:
        """Print ranked players as a table with score bars.

        Args:
            players: Players in rank order
        """
        if not players:
            self.console.print(
                f"[{MOCHA['yellow']}]No players to rank[/{MOCHA['yellow']}]"
            )
            return

        top_score = max(p.score for p in players)

        table = Table(
            box=ROUNDED,
            border_style=MOCHA["surface1"],
            header_style=f"bold {MOCHA['subtext0']}",
        )
        table.add_column("Rank", justify="left", no_wrap=True)
        table.add_column("Player", style=f"bold {MOCHA['text']}")
        table.add_column("Score", justify="right")

        for player in players:
            color = player_color(player.color)
            name = Text()
            name.append("● ", style=color)
            name.append(player.name)
            table.add_row(
                _rank_badge(player.rank),
                name,
                _score_bar(player.score, top_score, color=color),
            )

        self.console.print(
            Panel(
                table,
                title=f"[bold {MOCHA['yellow']}]SCOREBOARD[/bold {MOCHA['yellow']}]",
                title_align="left",
                box=ROUNDED,
                border_style=MOCHA["yellow"],
                padding=(0, 1),
            )
        )
        self.console.print()

    def print_trace(
        self,
        steps: list[TraceStep],
        target_rank: int | None = None,
    ) -> None:
        """Print the trace as a table, one row per step.

        Args:
            steps: Trace steps in recording order
            target_rank: If given, only show the search for this rank
        """
        if target_rank is not None:
            steps = steps_for_rank(steps, target_rank)

        if not steps:
            self.console.print(
                f"[{MOCHA['yellow']}]No trace steps recorded[/{MOCHA['yellow']}]"
            )
            return

        table = Table(
            box=ROUNDED,
            border_style=MOCHA["surface2"],
            header_style=f"bold {MOCHA['subtext0']}",
        )
        table.add_column("#", justify="right", style=MOCHA["overlay1"])
        table.add_column("Rank", justify="right", style=MOCHA["lavender"])
        table.add_column("Step", no_wrap=True)
        table.add_column("Range", justify="center", style=MOCHA["subtext0"])
        table.add_column("Pivot", justify="right", style=MOCHA["subtext0"])
        table.add_column("Description", style=MOCHA["text"])

        for number, step in enumerate(steps, 1):
            table.add_row(
                str(number),
                str(step.target_rank),
                _kind_badge(step.kind),
                Text(f"[{step.left}, {step.right}]"),
                str(step.pivot_index),
                Text(step.description),
            )

        title = "TRACE" if target_rank is None else f"TRACE - RANK {target_rank}"
        self.console.print(
            Panel(
                table,
                title=f"[bold {MOCHA['sapphire']}]{title}[/bold {MOCHA['sapphire']}]",
                title_align="left",
                box=ROUNDED,
                border_style=MOCHA["sapphire"],
                padding=(0, 1),
            )
        )
        self.console.print()

    def print_step(self, step: TraceStep, number: int | None = None) -> None:
        """Print one step with its array snapshot.

        Cells are coloured by status: pivot, target position, outside the
        active range, or plain.
        """
        parts: list[RenderableType] = []

        heading = Text()
        heading.append_text(_kind_badge(step.kind))
        heading.append(f"  target rank {step.target_rank}", style=MOCHA["lavender"])
        heading.append(f"  range [{step.left}, {step.right}]", style=MOCHA["subtext0"])
        parts.append(heading)
        parts.append(Text(step.description, style=MOCHA["text"]))
        parts.append(Text(""))
        parts.append(_array_view(step))

        title = "STEP" if number is None else f"STEP {number}"
        self.console.print(
            Panel(
                Group(*parts),
                title=f"[bold {MOCHA['blue']}]{title}[/bold {MOCHA['blue']}]",
                title_align="left",
                box=ROUNDED,
                border_style=STEP_COLORS.get(step.kind, MOCHA["surface1"]),
                padding=(0, 1),
            )
        )

    def print_summary(self, result: RankingResult) -> None:
        """Print step counts by kind and the footer."""
        counts = count_kinds(result.steps)

        table = Table(
            title=f"[bold {MOCHA['sapphire']}]Steps by Kind[/bold {MOCHA['sapphire']}]",
            box=ROUNDED,
            show_header=False,
            border_style=MOCHA["surface2"],
            padding=(0, 1),
            min_width=26,
        )
        table.add_column("Kind")
        table.add_column("Count", justify="right", style=f"bold {MOCHA['text']}")

        for kind, count in counts.items():
            if count > 0:
                table.add_row(_kind_badge(kind), str(count))

        if result.steps:
            self.console.print(table)

        self.console.print()
        footer_parts = [
            f"quickrank v{__version__}",
            f"{len(result.ranked_players)} players",
            f"{len(result.steps)} steps",
        ]
        footer_text = f"[{MOCHA['overlay1']}]{' | '.join(footer_parts)}[/{MOCHA['overlay1']}]"

        self.console.print(Rule(style=MOCHA["surface2"]))
        self.console.print(Align.center(Text.from_markup(footer_text)))
        self.console.print()


def print_results(
    result: RankingResult,
    show_trace: bool = False,
    target_rank: int | None = None,
    step: int | None = None,
    no_color: bool = False,
    console: Console | None = None,
) -> None:
    """Convenience function to print a ranking result.

    Args:
        result: Output of Ranker.rank_all()
        show_trace: Also print the trace table
        target_rank: Limit the trace table to the search for this rank
        step: One-based number of a trace step to show as an array view
        no_color: Disable colored output
        console: Console to print to (a new one is created if omitted)
    """
    output = TerminalOutput(console=console, no_color=no_color)

    output.print_header(result)
    output.print_scoreboard(result.ranked_players)

    if show_trace:
        output.print_trace(result.steps, target_rank=target_rank)

    if step is not None:
        output.print_step(result.steps[step - 1], number=step)

    output.print_summary(result)
