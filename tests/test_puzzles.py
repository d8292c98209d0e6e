"""Tests for puzzle parsing and the identifier-based store."""

from pathlib import Path

import pytest

from newdoku.puzzles.parsing import load_puzzle_file, parse_puzzle
from newdoku.puzzles.store import DEFAULT_PUZZLE_ID, PuzzleStore
from newdoku.solver.errors import InvalidInput, PuzzleNotFound
from newdoku.solver.grid import Grid

README_PUZZLE = (
    "xxxxxxx9xx9x7xx21xxx4x9xxxxx1xxx8xxx7xx42xxx5xx8xxxx748x1xxxx4xxxxxxxxxxxx9613xxx"
)


class TestParsing:
    """Tests for turning text into cell values."""

    def test_digits_are_clues_and_others_empty(self):
        assert parse_puzzle("1.x 0a9") == [1, None, None, None, None, None, 9]

    def test_newlines_are_ignored(self):
        rows = "\n".join(README_PUZZLE[i : i + 9] for i in range(0, 81, 9))

        assert parse_puzzle(rows + "\n") == parse_puzzle(README_PUZZLE)
        assert parse_puzzle(rows.replace("\n", "\r\n")) == parse_puzzle(README_PUZZLE)

    def test_parsed_puzzle_builds_grid(self):
        grid = Grid(parse_puzzle(README_PUZZLE))

        assert grid.to_string() == README_PUZZLE.replace("x", ".")

    def test_short_text_rejected_by_grid(self):
        with pytest.raises(InvalidInput):
            Grid(parse_puzzle(README_PUZZLE[:-1]))

    def test_load_puzzle_file(self, tmp_path: Path):
        path = tmp_path / "puzzle.txt"
        path.write_text(README_PUZZLE + "\n", encoding="utf-8")

        assert load_puzzle_file(path) == parse_puzzle(README_PUZZLE)

    def test_load_non_utf8_file_raises_invalid_input(self, tmp_path: Path):
        path = tmp_path / "puzzle.txt"
        path.write_bytes(b"\xff\xfe" + b"." * 79)

        with pytest.raises(InvalidInput):
            load_puzzle_file(path)

    def test_load_directory_raises_invalid_input(self, tmp_path: Path):
        with pytest.raises(InvalidInput):
            load_puzzle_file(tmp_path)


class TestPuzzleStore:
    """Tests for puzzle lookup by identifier."""

    def test_builtin_default_puzzle(self):
        store = PuzzleStore()

        assert store.load(DEFAULT_PUZZLE_ID) == parse_puzzle(README_PUZZLE)
        assert "classic" in store.ids()

    def test_directory_puzzles_listed_and_loaded(self, tmp_path: Path):
        (tmp_path / "daily-01.txt").write_text("1" + "." * 80, encoding="utf-8")
        (tmp_path / "notes.md").write_text("ignored", encoding="utf-8")
        store = PuzzleStore(tmp_path)

        assert "daily-01" in store.ids()
        assert "notes" not in store.ids()
        assert store.load("daily-01")[0] == 1
        assert "daily-01" in store

    def test_directory_overrides_builtin(self, tmp_path: Path):
        (tmp_path / "readme.txt").write_text("9" + "." * 80, encoding="utf-8")

        assert PuzzleStore(tmp_path).load("readme")[0] == 9

    def test_unknown_id_raises(self, tmp_path: Path):
        with pytest.raises(PuzzleNotFound):
            PuzzleStore(tmp_path).load("missing")

    @pytest.mark.parametrize("puzzle_id", ["../secret", "a b", "", "abc\n", "classic\n"])
    def test_malformed_id_raises(self, puzzle_id):
        with pytest.raises(InvalidInput):
            PuzzleStore().load(puzzle_id)

    def test_missing_root_still_serves_builtins(self, tmp_path: Path):
        store = PuzzleStore(tmp_path / "absent")

        assert store.ids() == ["classic", "readme"]
