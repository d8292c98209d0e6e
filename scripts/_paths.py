"""Shared path utilities for the command line scripts."""

from __future__ import annotations

from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
DATA_PUZZLE_DIR = REPO_ROOT / "data" / "puzzles"


def resolve_puzzle_path(puzzle_ref: str) -> Path:
    """Locate a puzzle file from a user-supplied reference string.

    Searches in order:
      1. Absolute path (if *puzzle_ref* is absolute)
      2. Relative to the current working directory
      3. Relative to the repository root
      4. By filename inside ``data/puzzles/``

    Raises ``FileNotFoundError`` when no candidate matches.
    """
    ref = Path(puzzle_ref)
    candidates: list[Path] = []

    if ref.is_absolute():
        candidates.append(ref)
    else:
        candidates.append(Path.cwd() / ref)
        candidates.append(REPO_ROOT / ref)
        candidates.append(DATA_PUZZLE_DIR / ref.name)

    for candidate in candidates:
        if candidate.is_file():
            return candidate.resolve()

    searched = ", ".join(str(path) for path in candidates)
    raise FileNotFoundError(f"Puzzle not found. ref={puzzle_ref} searched=[{searched}]")
