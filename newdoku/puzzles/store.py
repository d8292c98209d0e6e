"""Resolve puzzle identifiers to cell values."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Optional

from ..solver.errors import InvalidInput, PuzzleNotFound
from .parsing import load_puzzle_file, parse_puzzle

_LOGGER = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
PUZZLE_SUFFIX = ".txt"

DEFAULT_PUZZLE_ID = "readme"

BUILTIN_PUZZLES = {
    "readme": (
        "xxxxxxx9xx9x7xx21xxx4x9xxxxx1xxx8xxx7xx42xxx5xx8xxxx748x1xxxx4xxxxxxxxxxxx9613xxx"
    ),
    "classic": (
        "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
    ),
}


class PuzzleStore:
    """
    Puzzle catalogue keyed by identifier.

    Files named ``<id>.txt`` under ``root`` take precedence over the
    built-in puzzles. Stored puzzles are not assumed to be unique; callers
    that care solve for two solutions and check.
    """

    def __init__(self, root: str | os.PathLike[str] | None = None):
        self.root = Path(root) if root else None

    def ids(self) -> list[str]:
        found = set(BUILTIN_PUZZLES)
        if self.root is not None and self.root.is_dir():
            for path in self.root.glob(f"*{PUZZLE_SUFFIX}"):
                if _ID_PATTERN.fullmatch(path.stem):
                    found.add(path.stem)
        return sorted(found)

    def load(self, puzzle_id: str) -> list[Optional[int]]:
        """Return the 81 cell values registered under ``puzzle_id``."""
        if not _ID_PATTERN.fullmatch(puzzle_id):
            raise InvalidInput(f"Malformed puzzle id: {puzzle_id!r}")

        path = self._path_for(puzzle_id)
        if path is not None:
            _LOGGER.debug("Loading puzzle %s from %s", puzzle_id, path)
            return load_puzzle_file(path)

        if puzzle_id in BUILTIN_PUZZLES:
            _LOGGER.debug("Loading built-in puzzle %s", puzzle_id)
            return parse_puzzle(BUILTIN_PUZZLES[puzzle_id])

        raise PuzzleNotFound(f"Unknown puzzle id: {puzzle_id}")

    def __contains__(self, puzzle_id: object) -> bool:
        return isinstance(puzzle_id, str) and puzzle_id in self.ids()

    def _path_for(self, puzzle_id: str) -> Optional[Path]:
        if self.root is None:
            return None
        candidate = self.root / f"{puzzle_id}{PUZZLE_SUFFIX}"
        return candidate if candidate.is_file() else None
