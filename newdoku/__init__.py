"""Sudoku solving engine with a terminal animator and an HTTP API."""

from .solver import Grid, SolveResult, StepEvent, SudokuSolver

__all__ = ["Grid", "SolveResult", "StepEvent", "SudokuSolver"]
__version__ = "1.0.0"
