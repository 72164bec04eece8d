"""Constraint propagation rules applied between search steps."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Iterator

from .board import Board, Cell, mask_to_values


class StrategyStatus(enum.Enum):
    """Outcome of one strategy pass over the board."""

    NO_CHANGE = "no_change"
    CHANGED = "changed"
    FAILED = "failed"


Region = tuple[Cell, ...]


@lru_cache(maxsize=None)
def region_layout(block_size: int) -> tuple[Region, ...]:
    """
    All units of a board as ordered cell tuples.

    Rows come first (cells left to right), then columns (top to bottom), then
    blocks in block-index order with their cells row-major. A cell's position
    inside its tuple is its intra-unit position.
    """
    edge = block_size * block_size
    rows = [tuple((r, c) for c in range(edge)) for r in range(edge)]
    cols = [tuple((r, c) for r in range(edge)) for c in range(edge)]
    blocks = []
    for b in range(edge):
        start_row = (b // block_size) * block_size
        start_col = (b % block_size) * block_size
        blocks.append(
            tuple(
                (start_row + offset // block_size, start_col + offset % block_size)
                for offset in range(edge)
            )
        )
    return tuple(rows + cols + blocks)


def iter_regions(board: Board) -> Iterator[Region]:
    """Iterate rows, columns and blocks of board in scan order."""
    return iter(region_layout(board.block_size))


class SudokuStrategy(ABC):
    """
    Base class for propagation strategies.

    Strategies are stateless; one instance can serve any number of boards.

    Attributes:
        key: One-character selector used in strategy strings
        name: Short identifier
        description: Human-readable summary
    """
    key: str = ""
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def apply(self, board: Board) -> StrategyStatus:
        """
        Run one pass of the rule over board, mutating it in place.

        Returns:
            CHANGED if anything was assigned or eliminated, FAILED if a
            contradiction was found, NO_CHANGE otherwise
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r})"


class CandidateReductionStrategy(SudokuStrategy):
    """Naked single: fill every empty cell that has exactly one candidate."""

    key = "r"
    name = "candidate_reduction"
    description = "Assign cells with a single remaining candidate"

    def apply(self, board: Board) -> StrategyStatus:
        changed = False
        edge = board.edge_size

        for row in range(edge):
            for col in range(edge):
                if board.is_assigned(row, col):
                    continue
                mask = board.get_candidates_mask(row, col)
                if mask == 0:
                    return StrategyStatus.FAILED
                if mask & (mask - 1) == 0:
                    board.set_value(row, col, mask.bit_length())
                    changed = True

        return StrategyStatus.CHANGED if changed else StrategyStatus.NO_CHANGE


class UniqueCandidateStrategy(SudokuStrategy):
    """Hidden single: place a value that fits only one cell of a unit."""

    key = "u"
    name = "unique_candidate"
    description = "Place values that have a single possible cell in a unit"

    def apply(self, board: Board) -> StrategyStatus:
        changed = False
        edge = board.edge_size

        for region in iter_regions(board):
            counts = [0] * (edge + 1)
            last_cell: list[Cell | None] = [None] * (edge + 1)
            placed = 0

            for row, col in region:
                value = board.get_value(row, col)
                if value:
                    placed |= 1 << (value - 1)
                    continue
                for candidate in mask_to_values(board.get_candidates_mask(row, col)):
                    counts[candidate] += 1
                    last_cell[candidate] = (row, col)

            for value in range(1, edge + 1):
                if placed & (1 << (value - 1)):
                    continue
                if counts[value] == 0:
                    return StrategyStatus.FAILED
                if counts[value] == 1:
                    row, col = last_cell[value]
                    # Two values forced into the same cell of this unit.
                    if board.is_assigned(row, col):
                        return StrategyStatus.FAILED
                    board.set_value(row, col, value)
                    changed = True

        return StrategyStatus.CHANGED if changed else StrategyStatus.NO_CHANGE


class HiddenPairStrategy(SudokuStrategy):
    """
    Hidden pair: two values confined to the same two cells of a unit.

    Those two cells cannot hold anything else, so every other candidate is
    banned from them.
    """

    key = "h"
    name = "hidden_pair"
    description = "Restrict two cells sharing the only spots of two values"

    def apply(self, board: Board) -> StrategyStatus:
        changed = False
        edge = board.edge_size

        for region in iter_regions(board):
            # positions[v] has bit p set when region[p] can still take v
            positions = [0] * (edge + 1)
            for position, (row, col) in enumerate(region):
                if board.is_assigned(row, col):
                    continue
                for candidate in mask_to_values(board.get_candidates_mask(row, col)):
                    positions[candidate] |= 1 << position

            for first_value in range(1, edge):
                pair_positions = positions[first_value]
                if pair_positions.bit_count() != 2:
                    continue
                for second_value in range(first_value + 1, edge + 1):
                    if positions[second_value] != pair_positions:
                        continue
                    keep = (1 << (first_value - 1)) | (1 << (second_value - 1))
                    for position in mask_to_values(pair_positions):
                        row, col = region[position - 1]
                        extra = board.get_candidates_mask(row, col) & ~keep
                        if extra == 0:
                            continue
                        board.remove_candidates(row, col, extra)
                        changed = True
                        if board.get_candidates_mask(row, col) == 0:
                            return StrategyStatus.FAILED

        return StrategyStatus.CHANGED if changed else StrategyStatus.NO_CHANGE
