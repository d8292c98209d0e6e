"""Pydantic models for API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SudokuGrid(BaseModel):
    """A Sudoku grid."""

    cells: list[list[int]] = Field(description="9x9 grid (0 for empty cells)")

    class Config:
        json_schema_extra = {
            "example": [
                [5, 3, 0, 0, 7, 0, 0, 0, 0],
                [6, 0, 0, 1, 9, 5, 0, 0, 0],
                [0, 9, 8, 0, 0, 0, 0, 6, 0],
                [8, 0, 0, 0, 6, 0, 0, 0, 3],
                [4, 0, 0, 8, 0, 3, 0, 0, 1],
                [7, 0, 0, 0, 2, 0, 0, 0, 6],
                [0, 6, 0, 0, 0, 0, 2, 8, 0],
                [0, 0, 0, 4, 1, 9, 0, 0, 5],
                [0, 0, 0, 0, 8, 0, 0, 7, 9],
            ]
        }


class SolveRequest(BaseModel):
    """Request to solve a Sudoku grid."""

    grid: SudokuGrid = Field(description="The Sudoku puzzle to solve")
    max_solutions: int = Field(
        default=1, ge=0, description="Solutions to collect (0 for the server limit)"
    )


class SolveResponse(BaseModel):
    """Response from solving a Sudoku."""

    success: bool = Field(description="Whether the puzzle was solved")
    original: list[list[int]] = Field(description="Original grid")
    solved: list[list[int]] | None = Field(description="First solution (if any)")
    solutions: list[list[list[int]]] = Field(
        default_factory=list, description="Solutions in discovery order"
    )
    solution_count: int = Field(default=0, description="Number of solutions returned")
    message: str = Field(description="Status message")


class PuzzleSolveResponse(SolveResponse):
    """Response from solving a puzzle looked up by identifier."""

    puzzle_id: str = Field(description="Identifier the puzzle was loaded from")
    unique: bool | None = Field(
        default=None, description="Whether the puzzle has exactly one solution"
    )


class PuzzleListResponse(BaseModel):
    """Known puzzle identifiers."""

    puzzles: list[str] = Field(description="Sorted puzzle identifiers")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status")
    puzzle_count: int = Field(description="Number of puzzles the store can serve")
    puzzle_dir: str | None = Field(
        default=None, description="Configured puzzle directory"
    )
