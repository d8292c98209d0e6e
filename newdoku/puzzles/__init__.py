"""Puzzle input helpers."""

from .parsing import load_puzzle_file, parse_puzzle
from .store import DEFAULT_PUZZLE_ID, PuzzleStore

__all__ = ["DEFAULT_PUZZLE_ID", "PuzzleStore", "load_puzzle_file", "parse_puzzle"]
