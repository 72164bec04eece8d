"""Exceptions raised by the solver core and the puzzle loader."""

from __future__ import annotations


class SudokuError(Exception):
    """Base class for solver errors."""


class UnsupportedSizeError(SudokuError, ValueError):
    """Board edge does not fit in the candidate bitmask width."""

    def __init__(self, edge_size: int, max_edge_size: int):
        self.edge_size = edge_size
        self.max_edge_size = max_edge_size
        super().__init__(
            f"Edge size {edge_size} is not supported, "
            f"bitmask constraints allow at most {max_edge_size}"
        )


class PuzzleFormatError(SudokuError, ValueError):
    """Puzzle text or grid could not be turned into a valid grid."""


class SearchLimitExceeded(SudokuError):
    """Search counter passed the configured cap."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Search aborted after {limit} searches")
