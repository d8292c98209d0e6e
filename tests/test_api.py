"""Tests for the HTTP API."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from newdoku.api import routes
from newdoku.main import app
from newdoku.puzzles.parsing import parse_puzzle
from newdoku.puzzles.store import PuzzleStore
from newdoku.solver.grid import Grid

CLASSIC_ROWS = [
    [5, 3, 0, 0, 7, 0, 0, 0, 0],
    [6, 0, 0, 1, 9, 5, 0, 0, 0],
    [0, 9, 8, 0, 0, 0, 0, 6, 0],
    [8, 0, 0, 0, 6, 0, 0, 0, 3],
    [4, 0, 0, 8, 0, 3, 0, 0, 1],
    [7, 0, 0, 0, 2, 0, 0, 0, 6],
    [0, 6, 0, 0, 0, 0, 2, 8, 0],
    [0, 0, 0, 4, 1, 9, 0, 0, 5],
    [0, 0, 0, 0, 8, 0, 0, 7, 9],
]
CLASSIC_SOLUTION = (
    "534678912672195348198342567859761423426853791713924856961537284287419635345286179"
)


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(routes, "_PUZZLE_STORE", None)
    monkeypatch.delenv("SUDOKU_PUZZLE_DIR", raising=False)
    monkeypatch.delenv("SUDOKU_MAX_SOLUTIONS_LIMIT", raising=False)
    return TestClient(app)


def _solve(client, cells, max_solutions=1):
    response = client.post(
        "/api/v1/sudoku:solve",
        json={"grid": {"cells": cells}, "max_solutions": max_solutions},
    )
    assert response.status_code == 200
    return response.json()


class TestSolveEndpoint:
    """Tests for solving JSON grids."""

    def test_solves_classic_grid(self, client):
        body = _solve(client, CLASSIC_ROWS)

        assert body["success"] is True
        assert body["original"] == CLASSIC_ROWS
        assert body["solved"] == Grid(parse_puzzle(CLASSIC_SOLUTION)).to_rows()
        assert body["solution_count"] == 1
        assert body["message"] == "Puzzle solved successfully"

    def test_returns_multiple_solutions(self, client):
        empty = [[0] * 9 for _ in range(9)]

        body = _solve(client, empty, max_solutions=3)

        assert body["success"] is True
        assert body["solution_count"] == 3
        assert len(body["solutions"]) == 3
        assert body["solved"] == body["solutions"][0]

    def test_max_solutions_clamped_to_limit(self, client, monkeypatch):
        monkeypatch.setenv("SUDOKU_MAX_SOLUTIONS_LIMIT", "2")
        empty = [[0] * 9 for _ in range(9)]

        body = _solve(client, empty, max_solutions=0)

        assert body["solution_count"] == 2

    def test_invalid_format(self, client):
        body = _solve(client, [[0] * 9 for _ in range(8)])

        assert body["success"] is False
        assert body["message"].startswith("Invalid Sudoku grid format")

    def test_out_of_range_value(self, client):
        cells = [row[:] for row in CLASSIC_ROWS]
        cells[0][2] = 12

        body = _solve(client, cells)

        assert body["success"] is False
        assert body["message"].startswith("Invalid Sudoku grid format")

    def test_conflicting_clues(self, client):
        cells = [[0] * 9 for _ in range(9)]
        cells[0][0] = 5
        cells[0][5] = 5

        body = _solve(client, cells)

        assert body["success"] is False
        assert body["solved"] is None
        assert body["message"] == "Puzzle clues conflict"

    def test_no_solution(self, client):
        cells = [[0] * 9 for _ in range(9)]
        cells[0][:8] = [1, 2, 3, 4, 5, 6, 7, 8]
        cells[1][7] = 9

        body = _solve(client, cells)

        assert body["success"] is False
        assert body["message"] == "Puzzle has no solution"

    def test_negative_max_solutions_rejected(self, client):
        response = client.post(
            "/api/v1/sudoku:solve",
            json={"grid": {"cells": CLASSIC_ROWS}, "max_solutions": -1},
        )

        assert response.status_code == 422


class TestPuzzleEndpoints:
    """Tests for solving stored puzzles by identifier."""

    def test_list_puzzles(self, client):
        response = client.get("/api/v1/puzzles")

        assert response.status_code == 200
        assert response.json()["puzzles"] == ["classic", "readme"]

    def test_solve_unique_builtin(self, client):
        response = client.post("/api/v1/puzzles/classic:solve")

        assert response.status_code == 200
        body = response.json()
        assert body["puzzle_id"] == "classic"
        assert body["unique"] is True
        assert body["solution_count"] == 1
        assert body["original"] == CLASSIC_ROWS

    def test_solve_non_unique_puzzle_from_directory(self, client, monkeypatch, tmp_path: Path):
        (tmp_path / "blank.txt").write_text("." * 81, encoding="utf-8")
        monkeypatch.setattr(routes, "_PUZZLE_STORE", PuzzleStore(tmp_path))

        response = client.post("/api/v1/puzzles/blank:solve")

        body = response.json()
        assert body["success"] is True
        assert body["unique"] is False
        assert body["solution_count"] == 1
        assert body["message"] == "Puzzle has multiple solutions"

    def test_unknown_puzzle_is_404(self, client):
        response = client.post("/api/v1/puzzles/nothing-here:solve")

        assert response.status_code == 404

    def test_store_file_with_wrong_size_is_400(self, client, monkeypatch, tmp_path: Path):
        (tmp_path / "short.txt").write_text("123", encoding="utf-8")
        monkeypatch.setattr(routes, "_PUZZLE_STORE", PuzzleStore(tmp_path))

        response = client.post("/api/v1/puzzles/short:solve")

        assert response.status_code == 400

    def test_store_file_with_bad_encoding_is_400(self, client, monkeypatch, tmp_path: Path):
        (tmp_path / "garbled.txt").write_bytes(b"\xff" * 81)
        monkeypatch.setattr(routes, "_PUZZLE_STORE", PuzzleStore(tmp_path))

        response = client.post("/api/v1/puzzles/garbled:solve")

        assert response.status_code == 400


class TestHealth:
    """Tests for the health endpoint and store configuration."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["puzzle_count"] == 2

    def test_missing_puzzle_dir_degrades(self, client, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("SUDOKU_PUZZLE_DIR", str(tmp_path / "absent"))

        store, error = routes._get_puzzle_store()

        assert store is None
        assert "absent" in error
        assert client.get("/api/v1/puzzles").status_code == 503

    def test_invalid_limit_env_falls_back(self, monkeypatch):
        monkeypatch.setenv("SUDOKU_MAX_SOLUTIONS_LIMIT", "zero")
        assert routes.effective_max_solutions(0) == routes.DEFAULT_MAX_SOLUTIONS_LIMIT

        monkeypatch.setenv("SUDOKU_MAX_SOLUTIONS_LIMIT", "-3")
        assert routes.effective_max_solutions(500) == routes.DEFAULT_MAX_SOLUTIONS_LIMIT

        monkeypatch.setenv("SUDOKU_MAX_SOLUTIONS_LIMIT", "10")
        assert routes.effective_max_solutions(4) == 4
