"""Solver module exports."""

from .backtracking import SolveResult, StepEvent, SudokuSolver, is_unique, solve
from .errors import (
    ConstraintViolation,
    InvalidInput,
    InvalidOperation,
    PuzzleNotFound,
    SudokuError,
)
from .grid import Cell, Grid

__all__ = [
    "Cell",
    "ConstraintViolation",
    "Grid",
    "InvalidInput",
    "InvalidOperation",
    "PuzzleNotFound",
    "SolveResult",
    "StepEvent",
    "SudokuError",
    "SudokuSolver",
    "is_unique",
    "solve",
]
