"""Parse flat puzzle text into the 81 values a Grid is built from."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from ..solver.errors import InvalidInput

_CLUE_DIGITS = "123456789"


def parse_puzzle(text: str) -> list[Optional[int]]:
    """
    Turn puzzle text into a list of cell values.

    Digits 1-9 are clues, line breaks are ignored and any other character
    (``.``, ``0``, ``x``, space, ...) stands for an empty cell. The length is
    not checked here; ``Grid`` rejects anything other than 81 cells.
    """
    values: list[Optional[int]] = []
    for char in text:
        if char in "\r\n":
            continue
        values.append(int(char) if char in _CLUE_DIGITS else None)
    return values


def load_puzzle_file(path: str | os.PathLike[str]) -> list[Optional[int]]:
    """Read and parse a puzzle file; unreadable files raise ``InvalidInput``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except UnicodeDecodeError as exc:
        raise InvalidInput(f"Puzzle file {path} is not valid UTF-8") from exc
    except OSError as exc:
        raise InvalidInput(f"Cannot read puzzle file {path}: {exc}") from exc
    return parse_puzzle(text)
