"""Draw Sudoku grids in an ANSI terminal and animate the solving process."""

from __future__ import annotations

import sys
import time
from typing import Optional, TextIO

from colorama import Cursor, Fore, Style

from ..solver.backtracking import SolveResult, StepEvent, SudokuSolver
from ..solver.grid import Grid

# 13 grid lines plus the status line below them.
_FRAME_LINES = 14
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"


class TerminalAnimator:
    """Replays a solve on a terminal stream, redrawing the grid in place."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        step_ms: int = 0,
        quiet: bool = False,
        color: bool = True,
    ):
        self.stream = stream if stream is not None else sys.stdout
        self.step_ms = max(0, int(step_ms))
        self.quiet = quiet
        self.color = color

    def format_grid(self, grid: Grid) -> str:
        """Same layout as ``Grid.render`` with clues drawn bright."""
        if not self.color:
            return grid.render()

        lines = grid.render().split("\n")
        styled = []
        row = 0
        for line in lines:
            if line.startswith("+"):
                styled.append(line)
                continue
            cols = iter(range(9))
            chars = []
            for char in line:
                if char.isdigit() or char == ".":
                    col = next(cols)
                    if grid.is_fixed(row, col):
                        char = f"{Style.BRIGHT}{char}{Style.NORMAL}"
                chars.append(char)
            styled.append("".join(chars))
            row += 1
        return "\n".join(styled)

    def play(
        self,
        puzzle: Grid,
        max_solutions: int = 1,
        solver: Optional[SudokuSolver] = None,
    ) -> SolveResult:
        """Solve ``puzzle`` while drawing each step; returns the finished result."""
        solver = solver or SudokuSolver()
        self._write(self.format_grid(puzzle) + "\n")
        self._write(self._status("Solving...", Fore.LIGHTRED_EX) + "\n")

        result = solver.solve(puzzle, max_solutions=max_solutions, emit_steps=not self.quiet)
        if not self.quiet:
            display = puzzle.copy()
            if self.color:
                self._write(_HIDE_CURSOR)
            try:
                with result:
                    for event in result.steps:
                        self._apply(display, event)
                        self._redraw(display, "Solving...", Fore.LIGHTRED_EX)
                        if self.step_ms:
                            time.sleep(self.step_ms / 1000.0)
            finally:
                if self.color:
                    self._write(_SHOW_CURSOR)

        solutions = result.solutions
        if not solutions:
            self._redraw(puzzle, "No solution found", Fore.LIGHTRED_EX)
            return result

        self._redraw(solutions[0], "Done!", Fore.LIGHTGREEN_EX)
        for index, extra in enumerate(solutions[1:], start=2):
            self._write(f"\nSolution {index}:\n{self.format_grid(extra)}\n")
        return result

    def _apply(self, display: Grid, event: StepEvent) -> None:
        if event.cleared:
            display.unset(event.row, event.col)
        else:
            display.set(event.row, event.col, event.value)

    def _redraw(self, grid: Grid, status: str, color: str) -> None:
        frame = Cursor.UP(_FRAME_LINES) + "\r" if self.color else ""
        frame += self.format_grid(grid) + "\n" + self._status(status, color) + "\n"
        self._write(frame)

    def _status(self, text: str, color: str) -> str:
        if not self.color:
            return text
        return f"{color}{text}{Style.RESET_ALL}"

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()
