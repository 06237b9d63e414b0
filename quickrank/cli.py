"""QuickRank CLI - quickselect scoreboard ranking.

Command-line interface for ranking a players file and replaying the trace.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .engine.models import Player
from .engine.ranker import Ranker
from .parser.players import PlayerFileParser


def load_input(input_arg: str) -> list[Player]:
    """Parse players from a file path or '-' for stdin."""
    parser = PlayerFileParser()
    if input_arg == '-':
        return parser.parse(sys.stdin.read())
    return parser.parse_file(input_arg)


def _check_choice(value: int | None, upper: int, label: str) -> str | None:
    """Return an error message if ``value`` is outside 1..upper."""
    if value is None:
        return None
    if upper == 0:
        return f"--{label} {value} given but there is nothing to show"
    if not 1 <= value <= upper:
        return f"--{label} must be between 1 and {upper}, got {value}"
    return None


def _emit(content: str, output: Path | None) -> None:
    if output:
        output.write_text(content, encoding='utf-8')
        print(f"Report saved to: {output}", file=sys.stderr)
    else:
        print(content)


def main(args: list[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog='quickrank',
        description='Rank players by score with quickselect and replay every step',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  quickrank players.json
  quickrank scores.txt --trace
  cat scores.txt | quickrank                       # pipe input
  quickrank players.json --rank 2                  # trace of the search for rank 2
  quickrank players.json --step 5                  # array view of step 5
  quickrank players.json --format json --trace --output run.json
        """
    )

    parser.add_argument(
        'input',
        nargs='?',
        help='Players file (JSON or "name score" lines), or "-" to read from stdin'
    )

    parser.add_argument(
        '-f', '--format',
        choices=['terminal', 'markdown', 'json'],
        default='terminal',
        help='Output format (default: terminal)'
    )

    parser.add_argument(
        '-o', '--output',
        type=Path,
        help='Output file for markdown/json (default: stdout)'
    )

    parser.add_argument(
        '--trace',
        action='store_true',
        help='Include the quickselect trace'
    )

    parser.add_argument(
        '--rank',
        metavar='N',
        type=int,
        help='Only show the trace of the search for rank N (implies --trace)'
    )

    parser.add_argument(
        '--step',
        metavar='N',
        type=int,
        help='Show the array snapshot of trace step N (terminal only)'
    )

    parser.add_argument(
        '--no-snapshots',
        action='store_true',
        help='Leave array snapshots out of JSON trace steps'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output (terminal only)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parsed_args = parser.parse_args(args)

    if parsed_args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    input_arg = parsed_args.input

    # Support piped stdin when no input argument is given
    if input_arg is None and not sys.stdin.isatty():
        input_arg = '-'

    if input_arg is None:
        parser.error('the following arguments are required: input (or pipe data via stdin)')

    if input_arg != '-':
        input_path = Path(input_arg)
        if not input_path.exists():
            print(f"Error: Input file not found: {input_arg}", file=sys.stderr)
            return 1
        if not input_path.is_file():
            print(f"Error: Input is not a file: {input_arg}", file=sys.stderr)
            return 1

    if parsed_args.step is not None and parsed_args.format != 'terminal':
        print("Error: --step is only supported with --format terminal", file=sys.stderr)
        return 1

    show_trace = parsed_args.trace or parsed_args.rank is not None

    try:
        if parsed_args.verbose:
            source = 'stdin' if input_arg == '-' else input_arg
            print(f"Reading players: {source}", file=sys.stderr)

        players = load_input(input_arg)

        if parsed_args.verbose:
            print(f"Loaded {len(players)} players", file=sys.stderr)

        record_trace = show_trace or parsed_args.step is not None
        result = Ranker(record_trace=record_trace).rank_all(players)

        if parsed_args.verbose:
            print(f"Recorded {len(result.steps)} trace steps", file=sys.stderr)

        for error in (
            _check_choice(parsed_args.rank, len(result.ranked_players), "rank"),
            _check_choice(parsed_args.step, len(result.steps), "step"),
        ):
            if error:
                print(f"Error: {error}", file=sys.stderr)
                return 1

        if parsed_args.format == 'terminal':
            from .output.terminal import print_results

            print_results(
                result,
                show_trace=show_trace,
                target_rank=parsed_args.rank,
                step=parsed_args.step,
                no_color=parsed_args.no_color,
            )

        elif parsed_args.format == 'markdown':
            from .output.markdown import MarkdownOutput

            content = MarkdownOutput().generate(
                result,
                include_trace=show_trace,
                target_rank=parsed_args.rank,
            )
            _emit(content, parsed_args.output)

        elif parsed_args.format == 'json':
            from .output.json_out import JSONOutput

            content = JSONOutput().to_json(
                result,
                include_trace=show_trace,
                include_snapshots=not parsed_args.no_snapshots,
                target_rank=parsed_args.rank,
            )
            _emit(content, parsed_args.output)

        return 0

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except (MemoryError, RecursionError):
        raise
    except Exception as e:
        print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
        if parsed_args.verbose:
            import traceback
            traceback.print_exc()
        else:
            print("Use --verbose for full traceback", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
