"""Typed failures raised by the Sudoku engine."""

from __future__ import annotations


class SudokuError(Exception):
    """Base class for all engine errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(SudokuError, ValueError):
    """Malformed puzzle: wrong size, out-of-range digit or bad identifier."""


class ConstraintViolation(SudokuError):
    """Assignment conflicts with a row, column or box."""

    def __init__(self, message: str, row: int, col: int, value: int):
        super().__init__(message)
        self.row = row
        self.col = col
        self.value = value


class InvalidOperation(SudokuError):
    """Attempted mutation of a clue cell."""


class PuzzleNotFound(SudokuError, LookupError):
    """No puzzle is registered under the requested identifier."""
