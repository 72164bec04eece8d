"""Pydantic models for API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SudokuGrid(BaseModel):
    """A Sudoku grid."""

    cells: list[list[int]] = Field(description="N x N grid (0 for empty cells)")

    class Config:
        json_schema_extra = {
            "example": [
                [0, 0, 3, 0, 2, 0, 6, 0, 0],
                [9, 0, 0, 3, 0, 5, 0, 0, 1],
                [0, 0, 1, 8, 0, 6, 4, 0, 0],
                [0, 0, 8, 1, 0, 2, 9, 0, 0],
                [7, 0, 0, 0, 0, 0, 0, 0, 8],
                [0, 0, 6, 7, 0, 8, 2, 0, 0],
                [0, 0, 2, 6, 0, 9, 5, 0, 0],
                [8, 0, 0, 2, 0, 3, 0, 0, 9],
                [0, 0, 5, 0, 1, 0, 3, 0, 0],
            ]
        }


class SolveRequest(BaseModel):
    """Request to solve a grid."""

    grid: SudokuGrid = Field(description="The puzzle to solve")
    block_size: int = Field(
        default=3, ge=1, description="Block edge (3 for 9x9, 2 for 4x4, ...)"
    )
    strategies: str | None = Field(
        default=None,
        description="Propagation strategy keys, e.g. 'ruh'; server default if omitted",
    )


class SolveStringRequest(BaseModel):
    """Request to solve a puzzle written as a single line."""

    puzzle: str = Field(description="Puzzle digits row by row, 0 or '.' for blanks")
    block_size: int = Field(default=3, ge=1, description="Block edge")
    strategies: str | None = Field(
        default=None, description="Propagation strategy keys"
    )


class SolveResponse(BaseModel):
    """Response from solving a puzzle."""

    success: bool = Field(description="Whether the puzzle was solved")
    original: list[list[int]] | None = Field(description="Original grid")
    solved: list[list[int]] | None = Field(description="Solved grid (if successful)")
    message: str = Field(description="Status message")
    edge_size: int | None = Field(default=None, description="Grid edge size")
    strategies: str = Field(default="", description="Strategies actually used")
    search_count: int = Field(default=0, description="Search nodes visited")


class StrategyInfo(BaseModel):
    """A registered propagation strategy."""

    key: str = Field(description="One-character selector")
    name: str = Field(description="Strategy identifier")
    description: str = Field(description="What the strategy deduces")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status")
    strategies: list[str] = Field(description="Available strategy keys")
    max_searches: int = Field(description="Search cap applied to each solve")
