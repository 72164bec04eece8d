"""API routes for the Sudoku solver application."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Sequence, TypeVar

from fastapi import APIRouter, HTTPException

from ..models.schemas import (
    HealthResponse,
    SolveRequest,
    SolveResponse,
    SolveStringRequest,
    StrategyInfo,
)
from ..puzzles.loader import parse_grid_rows, parse_puzzle_string
from ..solver.backtracking import DEFAULT_MAX_SEARCHES, SolveOutcome, SudokuSolver
from ..solver.board import MAX_EDGE_SIZE, Board
from ..solver.errors import PuzzleFormatError, UnsupportedSizeError
from ..solver.registry import DEFAULT_REGISTRY

router = APIRouter()
_SETTINGS: SolverSettings | None = None
_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T", int, float, str)


def _env(name: str, default: _T) -> _T:
    """Read an environment variable, converting to the same type as *default*."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return type(default)(raw)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class SolverSettings:
    """Service-wide solver configuration read from the environment."""

    default_strategies: str = "ruh"
    max_searches: int = DEFAULT_MAX_SEARCHES
    max_block_size: int = 5


def _get_settings() -> tuple[SolverSettings | None, str | None]:
    global _SETTINGS

    if _SETTINGS is not None:
        return _SETTINGS, None

    settings = SolverSettings(
        default_strategies=DEFAULT_REGISTRY.normalize(
            _env("SUDOKU_DEFAULT_STRATEGIES", "ruh")
        ),
        max_searches=_env("SUDOKU_MAX_SEARCHES", DEFAULT_MAX_SEARCHES),
        max_block_size=_env("SUDOKU_MAX_BLOCK_SIZE", 5),
    )

    if settings.max_searches < 1:
        return None, "SUDOKU_MAX_SEARCHES must be positive"
    if settings.max_block_size < 1:
        return None, "SUDOKU_MAX_BLOCK_SIZE must be positive"
    if settings.max_block_size ** 2 > MAX_EDGE_SIZE:
        return None, (
            f"SUDOKU_MAX_BLOCK_SIZE={settings.max_block_size} exceeds the "
            f"{MAX_EDGE_SIZE}-wide bitmask limit"
        )

    _SETTINGS = settings
    return _SETTINGS, None


def _require_settings() -> SolverSettings:
    settings, error = _get_settings()
    if settings is None:
        raise HTTPException(status_code=500, detail=error)
    return settings


def _failure(
    message: str,
    *,
    original: list[list[int]] | None = None,
    edge_size: int | None = None,
    strategies: str = "",
    search_count: int = 0,
) -> SolveResponse:
    """Build an unsuccessful SolveResponse."""
    return SolveResponse(
        success=False,
        original=original,
        solved=None,
        message=message,
        edge_size=edge_size,
        strategies=strategies,
        search_count=search_count,
    )


def _check_block_size(block_size: int, settings: SolverSettings) -> SolveResponse | None:
    if block_size <= settings.max_block_size:
        return None
    _LOGGER.warning("Rejected block_size=%d (max %d)", block_size, settings.max_block_size)
    return _failure(
        f"Block size {block_size} is not supported (maximum {settings.max_block_size})"
    )


def solve_grid(
    cells: Sequence[Sequence[int]],
    block_size: int,
    strategies: str | None,
    settings: SolverSettings,
) -> SolveResponse:
    """Validate a grid, run the solver and build the response."""
    rejected = _check_block_size(block_size, settings)
    if rejected is not None:
        return rejected

    edge_size = block_size * block_size
    try:
        grid = parse_grid_rows(cells, edge_size)
        board = Board(block_size, grid)
    except UnsupportedSizeError as e:
        return _failure(str(e))
    except PuzzleFormatError as e:
        _LOGGER.warning("Rejected malformed grid: %s", e)
        return _failure(f"Invalid Sudoku grid format: {e}", edge_size=edge_size)

    selection = settings.default_strategies if strategies is None else strategies
    used = DEFAULT_REGISTRY.normalize(selection)

    solver = SudokuSolver(registry=DEFAULT_REGISTRY, max_searches=settings.max_searches)
    solved = solver.solve(board, used)

    if solved is None:
        if solver.last_outcome is SolveOutcome.SEARCH_EXHAUSTED:
            message = "Search limit reached before a solution was found"
        else:
            message = "Puzzle has no solution"
        return _failure(
            message,
            original=grid,
            edge_size=edge_size,
            strategies=used,
            search_count=solver.search_counter,
        )

    return SolveResponse(
        success=True,
        original=grid,
        solved=solved.to_grid(),
        message="Puzzle solved successfully",
        edge_size=edge_size,
        strategies=used,
        search_count=solver.search_counter,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    settings = _require_settings()

    return HealthResponse(
        status="healthy",
        strategies=list(DEFAULT_REGISTRY),
        max_searches=settings.max_searches,
    )


@router.get("/api/v1/strategies", response_model=list[StrategyInfo], tags=["Sudoku"])
async def list_strategies():
    """List the propagation strategies that can be selected by key."""
    return [StrategyInfo(**info) for info in DEFAULT_REGISTRY.describe()]


@router.post("/api/v1/sudoku:solve", response_model=SolveResponse, tags=["Sudoku"])
async def solve_sudoku(request: SolveRequest):
    """
    Solve a puzzle from a JSON grid.

    Expected JSON format:
    {
        "grid": {
            "cells": [[row1], [row2], ...]
        },
        "block_size": 3,
        "strategies": "ruh"
    }
    Where each row is a list of N = block_size ** 2 integers (0 for empty).
    """
    settings = _require_settings()
    try:
        return solve_grid(
            request.grid.cells, request.block_size, request.strategies, settings
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/api/v1/sudoku:solveString",
    response_model=SolveResponse,
    tags=["Sudoku"],
)
async def solve_sudoku_string(request: SolveStringRequest):
    """Solve a puzzle written as one line of digits (0 or '.' for blanks)."""
    settings = _require_settings()
    rejected = _check_block_size(request.block_size, settings)
    if rejected is not None:
        return rejected

    try:
        grid = parse_puzzle_string(request.puzzle, request.block_size)
    except PuzzleFormatError as e:
        _LOGGER.warning("Rejected puzzle string: %s", e)
        return _failure(str(e), edge_size=request.block_size ** 2)

    try:
        return solve_grid(grid, request.block_size, request.strategies, settings)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
