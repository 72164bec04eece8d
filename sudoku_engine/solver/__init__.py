"""Solver module exports."""

from .backtracking import DEFAULT_MAX_SEARCHES, SolveOutcome, SudokuSolver, solve
from .board import MAX_EDGE_SIZE, Board
from .errors import (
    PuzzleFormatError,
    SearchLimitExceeded,
    SudokuError,
    UnsupportedSizeError,
)
from .registry import DEFAULT_REGISTRY, StrategyRegistry
from .strategies import (
    CandidateReductionStrategy,
    HiddenPairStrategy,
    StrategyStatus,
    SudokuStrategy,
    UniqueCandidateStrategy,
)

__all__ = [
    "Board",
    "MAX_EDGE_SIZE",
    "SudokuSolver",
    "SolveOutcome",
    "DEFAULT_MAX_SEARCHES",
    "solve",
    "StrategyRegistry",
    "DEFAULT_REGISTRY",
    "SudokuStrategy",
    "StrategyStatus",
    "CandidateReductionStrategy",
    "UniqueCandidateStrategy",
    "HiddenPairStrategy",
    "SudokuError",
    "UnsupportedSizeError",
    "PuzzleFormatError",
    "SearchLimitExceeded",
]
