"""Bitmask-constrained board for N x N Sudoku-style grids (N = block_size ** 2)."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional, Sequence

from .errors import UnsupportedSizeError

# Candidate masks hold one bit per value, bit v-1 for value v.
MAX_EDGE_SIZE = 32

Grid = list[list[int]]
Cell = tuple[int, int]
CellCount = tuple[int, int, int]

SYMBOLS = "0123456789ABCDEFGHIJKLMNOPQRSTUVW"


@lru_cache(maxsize=None)
def build_block_lookup(block_size: int) -> tuple[int, ...]:
    """Map every flat row-major cell index to its block id."""
    edge_size = block_size * block_size
    return tuple(
        (row // block_size) * block_size + (col // block_size)
        for row in range(edge_size)
        for col in range(edge_size)
    )


def mask_to_values(mask: int) -> list[int]:
    """Values whose bits are set in *mask*, ascending."""
    values = []
    while mask:
        low_bit = mask & -mask
        values.append(low_bit.bit_length())
        mask ^= low_bit
    return values


def value_to_symbol(value: int) -> str:
    """Single-character form of a cell value (0 for blank, A for 10, ...)."""
    return SYMBOLS[value]


class Board:
    """
    Sudoku board with bitmask unit constraints.

    Values live in a flat row-major list. For every row, column and block a
    mask records which values are already placed there, and every cell keeps a
    mask of candidates that have not been banned by a propagation rule. The
    candidates of an empty cell are the values free in all three of its units
    and still allowed by the cell mask.

    Coordinates are 0-based. Assignments are irreversible: search branches
    work on a ``clone()`` and simply drop it on failure.
    """

    def __init__(self, block_size: int, grid: Sequence[Sequence[int]]):
        """
        Build a board from an initial grid.

        Args:
            block_size: Edge of one block (3 for classic 9x9 Sudoku)
            grid: edge_size x edge_size values, 0 for empty cells

        Raises:
            ValueError: If block_size is not positive or a value is out of range
            UnsupportedSizeError: If the edge exceeds the bitmask width
        """
        if block_size < 1:
            raise ValueError(f"Block size must be positive, got {block_size}")

        edge_size = block_size * block_size
        if edge_size > MAX_EDGE_SIZE:
            raise UnsupportedSizeError(edge_size, MAX_EDGE_SIZE)

        self._block_size = block_size
        self._edge_size = edge_size
        self._total_cells = edge_size * edge_size
        self._all_ones_mask = (1 << edge_size) - 1

        self._values = [0] * self._total_cells
        self._cell_masks = [self._all_ones_mask] * self._total_cells
        self._row_masks = [0] * edge_size
        self._col_masks = [0] * edge_size
        self._block_masks = [0] * edge_size
        self._cell_to_block = build_block_lookup(block_size)
        self._conflicts = 0

        self._load(grid)

    @classmethod
    def from_string(cls, puzzle: str, block_size: int = 3) -> "Board":
        """
        Build a board from a flat puzzle string.

        Blank cells are ``0`` or ``.``; values above 9 use letters (A = 10).
        Characters outside that alphabet are ignored.
        """
        edge_size = block_size * block_size
        symbols = [ch for ch in puzzle.upper() if ch == "." or ch in SYMBOLS]
        if len(symbols) != edge_size * edge_size:
            raise ValueError(
                f"Expected {edge_size * edge_size} cells, found {len(symbols)}"
            )
        flat = [0 if ch == "." else SYMBOLS.index(ch) for ch in symbols]
        grid = [flat[r * edge_size:(r + 1) * edge_size] for r in range(edge_size)]
        return cls(block_size, grid)

    def _load(self, grid: Sequence[Sequence[int]]) -> None:
        for row in range(self._edge_size):
            for col in range(self._edge_size):
                value = int(grid[row][col])
                if value == 0:
                    continue
                if not 1 <= value <= self._edge_size:
                    raise ValueError(
                        f"Value {value} at ({row}, {col}) is outside 1..{self._edge_size}"
                    )
                # Clashing givens are kept and counted.
                if not self.is_legal_assignment(row, col, value):
                    self._conflicts += 1
                self.set_value(row, col, value)

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def edge_size(self) -> int:
        return self._edge_size

    @property
    def total_cells(self) -> int:
        return self._total_cells

    @property
    def all_ones_mask(self) -> int:
        """Mask with exactly the low edge_size bits set."""
        return self._all_ones_mask

    @property
    def row_masks(self) -> tuple[int, ...]:
        return tuple(self._row_masks)

    @property
    def col_masks(self) -> tuple[int, ...]:
        return tuple(self._col_masks)

    @property
    def block_masks(self) -> tuple[int, ...]:
        return tuple(self._block_masks)

    def block_of(self, row: int, col: int) -> int:
        """Block id of a cell, from the precomputed lookup."""
        return self._cell_to_block[row * self._edge_size + col]

    def get_value(self, row: int, col: int) -> int:
        """Value at (row, col), 0 if unassigned."""
        return self._values[row * self._edge_size + col]

    def is_assigned(self, row: int, col: int) -> bool:
        return self._values[row * self._edge_size + col] != 0

    def is_legal_assignment(self, row: int, col: int, value: int) -> bool:
        """
        Check that value is not already used by the cell's row, column or block.

        Args:
            row: Row index
            col: Column index
            value: Value to place (1..edge_size)

        Returns:
            True if the placement respects all three unit constraints
        """
        block = self._cell_to_block[row * self._edge_size + col]
        used = self._row_masks[row] | self._col_masks[col] | self._block_masks[block]
        return (used & (1 << (value - 1))) == 0

    def get_candidates_mask(self, row: int, col: int) -> int:
        """Bitmask of values still placeable at (row, col)."""
        index = row * self._edge_size + col
        used = (
            self._row_masks[row]
            | self._col_masks[col]
            | self._block_masks[self._cell_to_block[index]]
        )
        return ~used & self._all_ones_mask & self._cell_masks[index]

    def get_candidates(self, row: int, col: int) -> list[int]:
        """Candidate values for (row, col) in ascending order."""
        return mask_to_values(self.get_candidates_mask(row, col))

    def set_value(self, row: int, col: int, value: int) -> None:
        """
        Assign value to (row, col) and record it in the unit masks.

        The assignment is permanent for this board; callers that may need to
        undo it work on a clone.
        """
        index = row * self._edge_size + col
        value_mask = 1 << (value - 1)
        self._values[index] = value
        self._cell_masks[index] = value_mask
        self._row_masks[row] |= value_mask
        self._col_masks[col] |= value_mask
        self._block_masks[self._cell_to_block[index]] |= value_mask

    def remove_candidates(self, row: int, col: int, mask: int) -> bool:
        """
        Ban the values in mask from (row, col).

        Returns:
            True if at least one still-allowed value was removed
        """
        index = row * self._edge_size + col
        removed = self._cell_masks[index] & mask
        if removed == 0:
            return False
        self._cell_masks[index] &= ~removed
        return True

    def has_conflicts(self) -> bool:
        """Whether two givens share a value inside a row, column or block."""
        return self._conflicts > 0

    def is_solved(self) -> bool:
        full = self._all_ones_mask
        for i in range(self._edge_size):
            if (
                self._row_masks[i] != full
                or self._col_masks[i] != full
                or self._block_masks[i] != full
            ):
                return False
        return True

    def clone(self) -> "Board":
        """
        Return an independent copy of this board.

        Every mutable list is copied, so assignments on the copy never reach
        the original and vice versa. This O(total_cells) copy is the main cost
        of each search branch.
        """
        other = Board.__new__(Board)
        other._block_size = self._block_size
        other._edge_size = self._edge_size
        other._total_cells = self._total_cells
        other._all_ones_mask = self._all_ones_mask
        other._values = self._values[:]
        other._cell_masks = self._cell_masks[:]
        other._row_masks = self._row_masks[:]
        other._col_masks = self._col_masks[:]
        other._block_masks = self._block_masks[:]
        other._cell_to_block = self._cell_to_block
        other._conflicts = self._conflicts
        return other

    def list_unassigned_cells(self) -> list[Cell]:
        """All empty cells as (row, col), row-major."""
        edge = self._edge_size
        return [divmod(i, edge) for i, value in enumerate(self._values) if value == 0]

    def list_unassigned_cells_with_counts(self) -> Optional[list[CellCount]]:
        """
        All empty cells with their candidate counts, row-major.

        Returns:
            List of (row, col, count), or None if some empty cell has no
            candidates left (the board is contradictory)
        """
        cells: list[CellCount] = []
        edge = self._edge_size
        for index, value in enumerate(self._values):
            if value != 0:
                continue
            row, col = divmod(index, edge)
            count = self.get_candidates_mask(row, col).bit_count()
            if count == 0:
                return None
            cells.append((row, col, count))
        return cells

    def get_best_empty_cell(self) -> Optional[CellCount]:
        """
        Pick the empty cell with the fewest candidates (MRV).

        The scan is row-major and stops early on a cell with zero candidates
        (count 0, caller must fail) or exactly one (forced move). Ties keep
        the first cell found.

        Returns:
            (row, col, count), or None if every cell is assigned
        """
        edge = self._edge_size
        full = self._all_ones_mask
        best: Optional[CellCount] = None

        for index, value in enumerate(self._values):
            if value != 0:
                continue
            row, col = divmod(index, edge)
            used = (
                self._row_masks[row]
                | self._col_masks[col]
                | self._block_masks[self._cell_to_block[index]]
            )
            count = (~used & full & self._cell_masks[index]).bit_count()
            if count <= 1:
                return row, col, count
            if best is None or count < best[2]:
                best = (row, col, count)

        return best

    def to_grid(self) -> Grid:
        """Copy of the values as a 2-D list."""
        edge = self._edge_size
        return [self._values[r * edge:(r + 1) * edge] for r in range(edge)]

    def __str__(self) -> str:
        return "".join(value_to_symbol(value) for value in self._values)

    def __repr__(self) -> str:
        return f"Board(block_size={self._block_size}, values={str(self)!r})"
