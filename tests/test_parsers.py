"""Tests for the players file parser."""

import json

import pytest

from quickrank.engine.errors import PlayerFileError
from quickrank.parser.players import PLAYER_COLORS, PlayerFileParser, load_players


class TestTextFormat:
    """Tests for 'name score' text input."""

    def test_separators(self):
        content = "Alice 10\nBob, 20\nCarol:15\n"
        players = PlayerFileParser().parse(content)

        assert [(p.name, p.score) for p in players] == [
            ("Alice", 10),
            ("Bob", 20),
            ("Carol", 15),
        ]

    def test_ids_and_colors_assigned_in_order(self):
        players = PlayerFileParser().parse("A 1\nB 2\nC 3\n")

        assert [p.id for p in players] == [1, 2, 3]
        assert [p.color for p in players] == PLAYER_COLORS[:3]

    def test_colors_cycle(self):
        content = "\n".join(f"P{i} {i}" for i in range(10))
        players = PlayerFileParser().parse(content)

        assert players[8].color == PLAYER_COLORS[0]
        assert players[9].color == PLAYER_COLORS[1]

    def test_names_with_spaces(self):
        players = PlayerFileParser().parse("Player 1 30\n")

        assert players[0].name == "Player 1"
        assert players[0].score == 30

    def test_float_and_negative_scores(self):
        players = PlayerFileParser().parse("A 10.5\nB -3\n")

        assert players[0].score == 10.5
        assert players[1].score == -3
        assert isinstance(players[1].score, int)

    def test_comments_and_blank_lines_ignored(self):
        players = PlayerFileParser().parse("# scores\n\nA 1\n   \nB 2\n")
        assert [p.name for p in players] == ["A", "B"]

    def test_malformed_lines_skipped(self, caplog):
        parser = PlayerFileParser()
        players = parser.parse("A 1\nno score here\nB 2\n")

        assert [p.name for p in players] == ["A", "B"]
        assert parser.skipped_lines == [2]
        assert "Skipping line 2" in caplog.text

    def test_empty_content(self):
        assert PlayerFileParser().parse("") == []


class TestJSONFormat:
    """Tests for JSON input."""

    def test_list_of_players(self):
        content = json.dumps([
            {"name": "A", "score": 3},
            {"name": "B", "score": 4},
        ])
        players = PlayerFileParser().parse(content)

        assert [(p.id, p.name, p.score) for p in players] == [(1, "A", 3), (2, "B", 4)]

    def test_players_object(self):
        content = json.dumps({"players": [
            {"id": 7, "name": "A", "score": 3, "color": "pink"},
            {"name": "B", "score": "4.5"},
        ]})
        players = PlayerFileParser().parse(content)

        assert players[0].id == 7
        assert players[0].color == "pink"
        assert players[1].id == 1
        assert players[1].score == 4.5
        assert players[1].color == PLAYER_COLORS[1]

    def test_missing_ids_skip_used_ones(self):
        content = json.dumps([
            {"name": "A", "score": 1},
            {"id": 2, "name": "B", "score": 1},
            {"name": "C", "score": 1},
        ])
        players = PlayerFileParser().parse(content)

        assert [p.id for p in players] == [1, 2, 3]

    def test_duplicate_ids_rejected(self):
        content = json.dumps([
            {"id": 1, "name": "A", "score": 1},
            {"id": 1, "name": "B", "score": 2},
        ])
        with pytest.raises(PlayerFileError, match="duplicate id"):
            PlayerFileParser().parse(content)

    def test_invalid_json(self):
        with pytest.raises(PlayerFileError, match="Invalid JSON"):
            PlayerFileParser().parse("[{")

    def test_wrong_shape(self):
        with pytest.raises(PlayerFileError):
            PlayerFileParser().parse('{"teams": []}')

    def test_missing_score(self):
        with pytest.raises(PlayerFileError, match="required"):
            PlayerFileParser().parse('[{"name": "A"}]')

    def test_non_numeric_score(self):
        with pytest.raises(PlayerFileError, match="score must be a number"):
            PlayerFileParser().parse('[{"name": "A", "score": "lots"}]')

    @pytest.mark.parametrize("score", ["NaN", "Infinity", "-Infinity", '"nan"', '"inf"'])
    def test_non_finite_score_rejected(self, score):
        content = f'[{{"name": "A", "score": 5}}, {{"name": "B", "score": {score}}}]'
        with pytest.raises(PlayerFileError, match="finite number"):
            PlayerFileParser().parse(content)

    def test_boolean_score_rejected(self):
        with pytest.raises(PlayerFileError):
            PlayerFileParser().parse('[{"name": "A", "score": true}]')

    def test_non_integer_id_rejected(self):
        with pytest.raises(PlayerFileError, match="id must be an integer"):
            PlayerFileParser().parse('[{"id": "x", "name": "A", "score": 1}]')

    def test_empty_name_rejected(self):
        with pytest.raises(PlayerFileError, match="name"):
            PlayerFileParser().parse('[{"name": "  ", "score": 1}]')


class TestParseFile:
    """Tests for reading players files from disk."""

    def test_load_players(self, tmp_path):
        path = tmp_path / "scores.txt"
        path.write_text("A 1\nB 2\n", encoding="utf-8")

        players = load_players(path)
        assert [p.name for p in players] == ["A", "B"]

    def test_utf16_file(self, tmp_path):
        path = tmp_path / "scores.txt"
        path.write_text("Zoë 4\n", encoding="utf-16")

        players = PlayerFileParser().parse_file(path)
        assert players[0].name == "Zoë"
