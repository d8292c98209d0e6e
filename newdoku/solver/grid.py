"""9x9 Sudoku grid with incremental candidate tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

import numpy as np

from .errors import ConstraintViolation, InvalidInput, InvalidOperation

SIZE = 9
CELL_COUNT = SIZE * SIZE
DIGITS = tuple(range(1, SIZE + 1))

# Candidate sets are 9-bit masks, bit d-1 for digit d.
ALL_MASK = (1 << SIZE) - 1

_SEPARATOR = "+-------+-------+-------+"


def box_index(row: int, col: int) -> int:
    return (row // 3) * 3 + col // 3


def mask_to_digits(mask: int) -> set[int]:
    return {d for d in DIGITS if mask & (1 << (d - 1))}


@dataclass(frozen=True)
class Cell:
    """Snapshot of a single grid position."""

    row: int
    col: int
    value: Optional[int]
    fixed: bool
    candidates: frozenset[int]

    @property
    def index(self) -> int:
        return self.row * SIZE + self.col

    @property
    def box(self) -> int:
        return box_index(self.row, self.col)


class Grid:
    """
    Sudoku grid of 81 cells.

    Values live in a 9x9 numpy array (0 for empty) next to a boolean clue
    mask. Digits used by every row, column and box are kept as bitmasks and
    updated on each ``set``/``unset``, so candidate queries never rescan
    the board.
    """

    def __init__(self, values: Sequence[Optional[int]]):
        if len(values) != CELL_COUNT:
            raise InvalidInput(f"Expected {CELL_COUNT} cells, got {len(values)}")

        self._values = np.zeros((SIZE, SIZE), dtype=np.int8)
        self._fixed = np.zeros((SIZE, SIZE), dtype=bool)
        self._row_used = [0] * SIZE
        self._col_used = [0] * SIZE
        self._box_used = [0] * SIZE

        for idx, raw in enumerate(values):
            value = _coerce_value(raw, idx)
            if value == 0:
                continue
            row, col = divmod(idx, SIZE)
            self._values[row, col] = value
            self._fixed[row, col] = True
            self._mark(row, col, value)

    @classmethod
    def new(cls, values: Sequence[Optional[int]]) -> "Grid":
        return cls(values)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """Build a grid from 9 rows of 9 ints, 0 meaning empty."""
        if len(rows) != SIZE or any(len(row) != SIZE for row in rows):
            raise InvalidInput("Grid must be 9 rows of 9 cells")
        return cls([cell for row in rows for cell in row])

    @classmethod
    def empty(cls) -> "Grid":
        return cls([None] * CELL_COUNT)

    def copy(self) -> "Grid":
        clone = Grid.__new__(Grid)
        clone._values = self._values.copy()
        clone._fixed = self._fixed.copy()
        clone._row_used = list(self._row_used)
        clone._col_used = list(self._col_used)
        clone._box_used = list(self._box_used)
        return clone

    # Queries

    def value(self, row: int, col: int) -> Optional[int]:
        value = int(self._values[row, col])
        return value or None

    def is_fixed(self, row: int, col: int) -> bool:
        return bool(self._fixed[row, col])

    def cell(self, row: int, col: int) -> Cell:
        _check_position(row, col)
        return Cell(
            row=row,
            col=col,
            value=self.value(row, col),
            fixed=self.is_fixed(row, col),
            candidates=frozenset(self.candidates_of(row, col)),
        )

    def cells(self) -> Iterator[Cell]:
        for idx in range(CELL_COUNT):
            yield self.cell(*divmod(idx, SIZE))

    def candidates_of(self, row: int, col: int) -> set[int]:
        """Digits that can still go into (row, col); empty when resolved."""
        if self._values[row, col]:
            return set()
        return mask_to_digits(self._free_mask(row, col))

    def candidate_count(self, row: int, col: int) -> int:
        if self._values[row, col]:
            return 0
        return bin(self._free_mask(row, col)).count("1")

    def empty_positions(self) -> list[tuple[int, int]]:
        """Unresolved positions in row-major order."""
        rows, cols = np.nonzero(self._values == 0)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def clue_count(self) -> int:
        return int(np.count_nonzero(self._fixed))

    def is_complete(self) -> bool:
        return bool(np.all(self._values > 0))

    def is_valid(self) -> bool:
        for unit in self._units():
            filled = unit[unit > 0]
            if len(np.unique(filled)) != len(filled):
                return False
        return True

    def is_solved(self) -> bool:
        return self.is_complete() and self.is_valid()

    # Mutation

    def set(self, row: int, col: int, value: int) -> None:
        """Assign ``value`` to (row, col)."""
        _check_position(row, col)
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidInput(f"Value {value!r} is not an integer")
        value = int(value)
        if value not in DIGITS:
            raise InvalidInput(f"Value {value} out of range 1-9")

        current = int(self._values[row, col])
        if self._fixed[row, col]:
            if current == value:
                return
            raise ConstraintViolation(
                f"Cell ({row}, {col}) is a clue holding {current}", row, col, value
            )
        if current == value:
            return

        bit = 1 << (value - 1)
        used = (
            self._row_used[row] & ~self._own_bit(row, col),
            self._col_used[col] & ~self._own_bit(row, col),
            self._box_used[box_index(row, col)] & ~self._own_bit(row, col),
        )
        for unit_name, mask in zip(("row", "column", "box"), used):
            if mask & bit:
                raise ConstraintViolation(
                    f"{value} already in {unit_name} of ({row}, {col})", row, col, value
                )

        if current:
            self._unmark(row, col, current)
        self._values[row, col] = value
        self._mark(row, col, value)

    def unset(self, row: int, col: int) -> None:
        """Clear a non-clue cell back to unresolved."""
        _check_position(row, col)
        if self._fixed[row, col]:
            raise InvalidOperation(f"Cell ({row}, {col}) is a clue and cannot be cleared")
        current = int(self._values[row, col])
        if not current:
            return
        self._values[row, col] = 0
        self._unmark(row, col, current)

    # Output

    def render(self) -> str:
        """ASCII box layout with ``.`` for empty cells."""
        lines = []
        for row in range(SIZE):
            if row % 3 == 0:
                lines.append(_SEPARATOR)
            blocks = []
            for start in range(0, SIZE, 3):
                blocks.append(
                    " ".join(
                        str(self._values[row, col]) if self._values[row, col] else "."
                        for col in range(start, start + 3)
                    )
                )
            lines.append("| " + " | ".join(blocks) + " |")
        lines.append(_SEPARATOR)
        return "\n".join(lines)

    def to_string(self) -> str:
        return "".join(str(v) if v else "." for v in self._values.ravel())

    def to_rows(self) -> list[list[int]]:
        return self._values.astype(int).tolist()

    def to_array(self) -> np.ndarray:
        return self._values.copy()

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Grid({self.to_string()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return bool(np.array_equal(self._values, other._values))

    __hash__ = None  # type: ignore[assignment]

    # Internals

    def _units(self) -> Iterable[np.ndarray]:
        values = self._values
        boxes = values.reshape(3, 3, 3, 3).transpose(0, 2, 1, 3).reshape(SIZE, SIZE)
        yield from values
        yield from values.T
        yield from boxes

    def _free_mask(self, row: int, col: int) -> int:
        used = (
            self._row_used[row]
            | self._col_used[col]
            | self._box_used[box_index(row, col)]
        )
        return ALL_MASK & ~used

    def _own_bit(self, row: int, col: int) -> int:
        current = int(self._values[row, col])
        return 1 << (current - 1) if current else 0

    def _mark(self, row: int, col: int, value: int) -> None:
        bit = 1 << (value - 1)
        self._row_used[row] |= bit
        self._col_used[col] |= bit
        self._box_used[box_index(row, col)] |= bit

    def _unmark(self, row: int, col: int, value: int) -> None:
        # Only non-clue cells are cleared, and those never share a digit
        # with another cell of their units.
        bit = ~(1 << (value - 1))
        self._row_used[row] &= bit
        self._col_used[col] &= bit
        self._box_used[box_index(row, col)] &= bit


def _coerce_value(raw: Optional[int], idx: int) -> int:
    if raw is None:
        return 0
    if isinstance(raw, bool) or not isinstance(raw, (int, np.integer)):
        raise InvalidInput(f"Cell {idx} holds non-integer value {raw!r}")
    value = int(raw)
    if not 0 <= value <= SIZE:
        raise InvalidInput(f"Cell {idx} value {value} out of range 1-9")
    return value


def _check_position(row: int, col: int) -> None:
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise InvalidInput(f"Position ({row}, {col}) outside the 9x9 grid")
