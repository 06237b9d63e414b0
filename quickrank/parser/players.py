"""Players file parser.

Turns a JSON document or a plain-text score list into Player objects for
the ranking engine.
"""

from __future__ import annotations

import json
import math
import logging
import re
from pathlib import Path
from typing import Any

from ..engine.errors import PlayerFileError
from ..engine.models import Player

logger = logging.getLogger(__name__)

# Colours handed out to players that do not bring their own
PLAYER_COLORS = [
    "red",
    "blue",
    "green",
    "yellow",
    "purple",
    "pink",
    "indigo",
    "orange",
]

# Text line: a name followed by a score, separated by whitespace, ',' or ':'
_LINE_PATTERN = re.compile(
    r'^\s*(?P<name>.+?)\s*[,:\s]\s*'
    r'(?P<score>[-+]?(?:\d+(?:\.\d*)?|\.\d+))\s*$'
)

_INTEGER_PATTERN = re.compile(r'^[-+]?\d+$')

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10 MB


def _to_score(value: Any, where: str) -> float:
    """Convert a raw JSON or text value into a numeric score."""
    if isinstance(value, bool):
        raise PlayerFileError(f"{where}: score must be a number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_PATTERN.match(text):
            return int(text)
        try:
            value = float(text)
        except ValueError:
            raise PlayerFileError(f"{where}: score must be a number, got {value!r}") from None
    if isinstance(value, float):
        if not math.isfinite(value):
            raise PlayerFileError(f"{where}: score must be a finite number, got {value!r}")
        return value
    raise PlayerFileError(f"{where}: score must be a number, got {value!r}")


class PlayerFileParser:
    """Parser for players files (JSON or one 'name score' per line)."""

    def __init__(self, colors: list[str] | None = None):
        self.colors = colors or PLAYER_COLORS
        self.skipped_lines: list[int] = []

    def parse(self, content: str) -> list[Player]:
        """Parse players file content.

        JSON is detected by a leading '[' or '{'; anything else is read as
        text.

        Args:
            content: Raw file content

        Returns:
            Players in file order

        Raises:
            PlayerFileError: If the content cannot be turned into players
        """
        self.skipped_lines = []

        stripped = content.lstrip()
        if stripped.startswith(("[", "{")):
            records = self._read_json(stripped)
        else:
            records = self._read_text(content)

        return self._build_players(records)

    def parse_file(self, path: str | Path) -> list[Player]:
        """Parse a players file from disk.

        Raises:
            PlayerFileError: If the file is too large or cannot be parsed
        """
        path = Path(path)
        file_size = path.stat().st_size
        if file_size > MAX_FILE_SIZE:
            raise PlayerFileError(
                f"File exceeds {MAX_FILE_SIZE // (1024 * 1024)}MB limit "
                f"({file_size // (1024 * 1024)}MB)"
            )

        for encoding in ['utf-8', 'utf-16', 'latin-1']:
            try:
                return self.parse(path.read_text(encoding=encoding))
            except UnicodeDecodeError:
                continue

        return self.parse(path.read_bytes().decode('utf-8', errors='replace'))

    def _read_json(self, content: str) -> list[dict]:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise PlayerFileError(f"Invalid JSON: {e}") from e

        if isinstance(data, dict):
            data = data.get("players")
        if not isinstance(data, list):
            raise PlayerFileError("JSON must be a list of players or an object with a 'players' list")

        records = []
        for position, item in enumerate(data, 1):
            if not isinstance(item, dict):
                raise PlayerFileError(f"Player #{position}: expected an object, got {type(item).__name__}")
            if "name" not in item or "score" not in item:
                raise PlayerFileError(f"Player #{position}: 'name' and 'score' are required")
            records.append(item)
        return records

    def _read_text(self, content: str) -> list[dict]:
        records = []
        for line_no, line in enumerate(content.splitlines(), 1):
            text = line.strip()
            if not text or text.startswith("#"):
                continue

            match = _LINE_PATTERN.match(text)
            if not match:
                logger.warning("Skipping line %d, expected 'name score': %r", line_no, text)
                self.skipped_lines.append(line_no)
                continue

            records.append({"name": match.group("name"), "score": match.group("score")})
        return records

    def _build_players(self, records: list[dict]) -> list[Player]:
        """Validate records and fill in missing ids and colours."""
        used_ids: set[int] = set()
        for position, record in enumerate(records, 1):
            if "id" not in record or record["id"] is None:
                continue
            player_id = record["id"]
            if isinstance(player_id, bool) or not isinstance(player_id, int):
                raise PlayerFileError(f"Player #{position}: id must be an integer, got {player_id!r}")
            if player_id in used_ids:
                raise PlayerFileError(f"Player #{position}: duplicate id {player_id}")
            used_ids.add(player_id)

        players = []
        next_id = 1
        for position, record in enumerate(records, 1):
            player_id = record.get("id")
            if player_id is None:
                while next_id in used_ids:
                    next_id += 1
                player_id = next_id
                used_ids.add(player_id)

            name = str(record["name"]).strip()
            if not name:
                raise PlayerFileError(f"Player #{position}: name must not be empty")

            players.append(
                Player(
                    id=player_id,
                    name=name,
                    score=_to_score(record["score"], f"Player #{position} ({name})"),
                    color=str(record.get("color") or self.colors[(position - 1) % len(self.colors)]),
                )
            )

        return players


def load_players(path: str | Path) -> list[Player]:
    """Convenience function to parse a players file."""
    return PlayerFileParser().parse_file(path)
