"""API routes for the Sudoku solver application."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from fastapi import APIRouter, HTTPException, Query

from ..config import env_value
from ..models.schemas import (
    HealthResponse,
    PuzzleListResponse,
    PuzzleSolveResponse,
    SolveRequest,
    SolveResponse,
)
from ..puzzles.store import PuzzleStore
from ..solver.backtracking import SudokuSolver
from ..solver.errors import InvalidInput, PuzzleNotFound
from ..solver.grid import Grid

router = APIRouter()
_PUZZLE_STORE: PuzzleStore | None = None
_LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_SOLUTIONS_LIMIT = 100


def _max_solutions_limit() -> int:
    limit = env_value("SUDOKU_MAX_SOLUTIONS_LIMIT", DEFAULT_MAX_SOLUTIONS_LIMIT)
    if limit < 1:
        _LOGGER.warning(
            "Unsupported SUDOKU_MAX_SOLUTIONS_LIMIT=%s, fallback to %d",
            limit,
            DEFAULT_MAX_SOLUTIONS_LIMIT,
        )
        return DEFAULT_MAX_SOLUTIONS_LIMIT
    return limit


def effective_max_solutions(requested: int) -> int:
    """Clamp a requested solution count to the configured server limit."""
    limit = _max_solutions_limit()
    if requested == 0 or requested > limit:
        return limit
    return requested


def _get_puzzle_store() -> tuple[PuzzleStore | None, str | None]:
    global _PUZZLE_STORE

    if _PUZZLE_STORE is not None:
        return _PUZZLE_STORE, None

    root = os.getenv("SUDOKU_PUZZLE_DIR")
    if root and not Path(root).is_dir():
        return None, f"Puzzle directory not found: {root}"

    _PUZZLE_STORE = PuzzleStore(root)
    return _PUZZLE_STORE, None


def _require_store() -> PuzzleStore:
    store, error = _get_puzzle_store()
    if store is None:
        raise HTTPException(status_code=503, detail=error or "Puzzle store unavailable")
    return store


def solve_grid(grid: Grid, max_solutions: int) -> tuple[list[Grid], str]:
    """Solve ``grid`` and return its solutions with a status message."""
    if not grid.is_valid():
        return [], "Puzzle clues conflict"

    solutions = SudokuSolver().solve(grid, max_solutions=max_solutions).solutions
    if not solutions:
        return [], "Puzzle has no solution"
    if len(solutions) == 1:
        return solutions, "Puzzle solved successfully"
    return solutions, f"Found {len(solutions)} solutions"


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    store, error = _get_puzzle_store()

    return HealthResponse(
        status="healthy" if store is not None else f"degraded: {error}",
        puzzle_count=len(store.ids()) if store else 0,
        puzzle_dir=str(store.root) if store and store.root else None,
    )


@router.post("/api/v1/sudoku:solve", response_model=SolveResponse, tags=["Sudoku"])
def solve_sudoku(request: SolveRequest):
    """
    Solve a Sudoku puzzle from a JSON grid.

    Expected JSON format:
    {
        "grid": {
            "cells": [[row1], [row2], ...]
        },
        "max_solutions": 1
    }
    Where each row is a list of 9 integers (0 for empty).
    """
    cells = request.grid.cells
    try:
        grid = Grid.from_rows(cells)
    except InvalidInput as e:
        return SolveResponse(
            success=False,
            original=cells,
            solved=None,
            message=f"Invalid Sudoku grid format: {e}",
        )

    try:
        solutions, message = solve_grid(
            grid, effective_max_solutions(request.max_solutions)
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    rows = [solution.to_rows() for solution in solutions]
    return SolveResponse(
        success=bool(rows),
        original=cells,
        solved=rows[0] if rows else None,
        solutions=rows,
        solution_count=len(rows),
        message=message,
    )


@router.get("/api/v1/puzzles", response_model=PuzzleListResponse, tags=["Puzzles"])
def list_puzzles():
    """List the identifiers of every known puzzle."""
    return PuzzleListResponse(puzzles=_require_store().ids())


@router.post(
    "/api/v1/puzzles/{puzzle_id}:solve",
    response_model=PuzzleSolveResponse,
    tags=["Puzzles"],
)
def solve_puzzle_by_id(
    puzzle_id: str,
    max_solutions: int = Query(default=1, ge=0),
):
    """
    Solve a stored puzzle.

    Stored puzzles are not trusted to be unique: at least two solutions are
    searched for, and ``unique`` reports whether exactly one exists.
    """
    store = _require_store()
    try:
        grid = Grid(store.load(puzzle_id))
    except PuzzleNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))

    limit = effective_max_solutions(max_solutions)
    try:
        solutions, message = solve_grid(grid, max(2, limit))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    unique = len(solutions) == 1
    rows = [solution.to_rows() for solution in solutions[:limit]]
    return PuzzleSolveResponse(
        puzzle_id=puzzle_id,
        unique=unique,
        success=bool(rows),
        original=grid.to_rows(),
        solved=rows[0] if rows else None,
        solutions=rows,
        solution_count=len(rows),
        message=message if unique or not rows else "Puzzle has multiple solutions",
    )
