"""Sudoku solver using constraint propagation and backtracking search."""

from __future__ import annotations

import enum
import logging
from typing import Optional, Sequence

from .board import Board, Grid
from .errors import SearchLimitExceeded
from .registry import DEFAULT_REGISTRY, StrategyRegistry
from .strategies import StrategyStatus, SudokuStrategy

_LOGGER = logging.getLogger(__name__)

# Safety cap against runaway searches on pathological input.
DEFAULT_MAX_SEARCHES = 20_000_000


class SolveOutcome(enum.Enum):
    """How the last solve() call ended."""

    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    SEARCH_EXHAUSTED = "search_exhausted"


class SudokuSolver:
    """
    Solves boards by propagating strategies to a fixpoint, then branching.

    Branching picks the empty cell with the fewest candidates and tries its
    values in ascending order, each on its own clone of the board. The first
    branch that reaches a solved board wins.

    ``search_counter`` counts visited search nodes. It keeps growing across
    solve() calls until reset_counter() is called, and the search cap applies
    to that running total.
    """

    def __init__(
        self,
        registry: StrategyRegistry = DEFAULT_REGISTRY,
        max_searches: int = DEFAULT_MAX_SEARCHES,
    ):
        self.registry = registry
        self.max_searches = max_searches
        self.last_outcome: Optional[SolveOutcome] = None
        self._search_counter = 0

    @property
    def search_counter(self) -> int:
        """Number of search nodes visited since the last reset."""
        return self._search_counter

    def reset_counter(self) -> None:
        self._search_counter = 0

    def solve(self, board: Board, strategies: str = "") -> Optional[Board]:
        """
        Solve a board.

        The board passed in is used as the root of the search and may be
        filled in by propagation; branches never write to it. Boards whose
        givens already clash are rejected before any search.

        Args:
            board: Board to solve
            strategies: Strategy keys to propagate with, e.g. "ruh".
                Empty means plain backtracking.

        Returns:
            Solved board if a solution exists, None otherwise
        """
        selected = self.registry.resolve(strategies)
        _LOGGER.debug(
            "Solving %dx%d board with strategies=%r",
            board.edge_size,
            board.edge_size,
            "".join(s.key for s in selected),
        )

        if board.has_conflicts():
            _LOGGER.debug("Givens conflict, nothing to search")
            self.last_outcome = SolveOutcome.UNSOLVABLE
            return None

        try:
            result = self._solve_recursive(board, selected)
        except SearchLimitExceeded as exc:
            _LOGGER.warning("%s, giving up", exc)
            self.last_outcome = SolveOutcome.SEARCH_EXHAUSTED
            return None

        self.last_outcome = (
            SolveOutcome.SOLVED if result is not None else SolveOutcome.UNSOLVABLE
        )
        _LOGGER.debug(
            "Search finished: %s after %d searches",
            self.last_outcome.value,
            self._search_counter,
        )
        return result

    def propagate(self, board: Board, strategies: Sequence[SudokuStrategy]) -> bool:
        """
        Apply strategies until none of them changes the board.

        Any change restarts the pass from the first strategy, since one
        deduction can enable others anywhere on the board.

        Returns:
            False if a strategy found a contradiction, True at the fixpoint
        """
        progress = True
        while progress:
            progress = False
            for strategy in strategies:
                status = strategy.apply(board)
                if status is StrategyStatus.FAILED:
                    return False
                if status is StrategyStatus.CHANGED:
                    progress = True
                    break
        return True

    def _solve_recursive(
        self, board: Board, strategies: Sequence[SudokuStrategy]
    ) -> Optional[Board]:
        self._search_counter += 1
        if self._search_counter > self.max_searches:
            raise SearchLimitExceeded(self.max_searches)

        if board.is_solved():
            return board

        if not self.propagate(board, strategies):
            return None

        best = board.get_best_empty_cell()
        if best is None:
            return board if board.is_solved() else None

        row, col, count = best
        if count == 0:
            return None

        for value in board.get_candidates(row, col):
            branch = board.clone()
            branch.set_value(row, col, value)
            result = self._solve_recursive(branch, strategies)
            if result is not None:
                return result

        return None


def solve(
    grid: Sequence[Sequence[int]], block_size: int = 3, strategies: str = ""
) -> Optional[Grid]:
    """Convenience function to solve a grid given as a 2-D list."""
    solver = SudokuSolver()
    result = solver.solve(Board(block_size, grid), strategies)
    return result.to_grid() if result is not None else None
