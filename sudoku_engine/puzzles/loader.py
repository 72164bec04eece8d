"""Load puzzles from digit strings, one-line files and grid files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from ..solver.board import SYMBOLS, Grid
from ..solver.errors import PuzzleFormatError

_LOGGER = logging.getLogger(__name__)

_BLANKS = {".", "0"}
_MAX_PATH_LENGTH = 260


def _symbol_value(symbol: str, edge_size: int) -> int | None:
    """Cell value of one puzzle-string character, None if not a cell."""
    if symbol == ".":
        return 0
    index = SYMBOLS.find(symbol.upper())
    # Letters only count as cells on boards wider than 9.
    limit = 9 if edge_size <= 9 else edge_size
    return index if 0 <= index <= limit else None


def parse_puzzle_string(text: str, block_size: int = 3) -> Grid:
    """
    Parse a single-line puzzle such as ``"003020600900..."``.

    Digits are values and ``0``/``.`` are blanks; boards wider than 9 also
    accept letters (A = 10). Other characters (spaces, separators) are skipped.

    Raises:
        PuzzleFormatError: If the number of cells is not edge_size ** 2
    """
    edge_size = block_size * block_size
    values = [
        value
        for value in (_symbol_value(ch, edge_size) for ch in text)
        if value is not None
    ]
    expected = edge_size * edge_size
    if len(values) != expected:
        raise PuzzleFormatError(
            f"Invalid puzzle string: expected {expected} cells, found {len(values)}"
        )
    too_large = [value for value in values if value > edge_size]
    if too_large:
        raise PuzzleFormatError(
            f"Invalid puzzle string: value {too_large[0]} is outside 0..{edge_size}"
        )
    return [values[r * edge_size:(r + 1) * edge_size] for r in range(edge_size)]


def parse_grid_rows(rows: Sequence[Sequence[int]], edge_size: int) -> Grid:
    """
    Validate a 2-D grid and return a clean copy of it.

    Raises:
        PuzzleFormatError: If dimensions or values are wrong
    """
    if len(rows) != edge_size:
        raise PuzzleFormatError(f"Expected {edge_size} rows, found {len(rows)}")

    grid: Grid = []
    for r, row in enumerate(rows):
        if len(row) != edge_size:
            raise PuzzleFormatError(
                f"Row {r} has {len(row)} values, expected {edge_size}"
            )
        clean = []
        for c, raw in enumerate(row):
            try:
                value = int(raw)
            except (TypeError, ValueError):
                raise PuzzleFormatError(
                    f"Cell ({r}, {c}) is not a number: {raw!r}"
                ) from None
            if not 0 <= value <= edge_size:
                raise PuzzleFormatError(
                    f"Cell ({r}, {c}) value {value} is outside 0..{edge_size}"
                )
            clean.append(value)
        grid.append(clean)
    return grid


def _split_grid_line(line: str) -> list[str]:
    return ["0" if token in _BLANKS else token for token in line.split()]


def _is_one_line_format(first_line: str, edge_size: int) -> bool:
    return len(first_line.strip()) >= edge_size * edge_size


def _content_lines(lines: Iterable[str]) -> Iterator[tuple[int, str]]:
    for number, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        yield number, stripped


def iter_puzzles_from_lines(lines: Iterable[str], block_size: int = 3) -> Iterator[Grid]:
    """
    Parse every puzzle in an iterable of text lines.

    The first content line decides the format: when it holds at least
    edge_size ** 2 characters every line is a one-line puzzle, otherwise
    each group of edge_size lines is one whitespace-separated grid.
    Blank lines and ``#`` comments are skipped.
    """
    edge_size = block_size * block_size
    content = _content_lines(lines)

    first = next(content, None)
    if first is None:
        return

    if _is_one_line_format(first[1], edge_size):
        for number, line in [first, *content]:
            try:
                yield parse_puzzle_string(line, block_size)
            except PuzzleFormatError as exc:
                raise PuzzleFormatError(f"Line {number}: {exc}") from None
        return

    pending: list[list[str]] = []
    for number, line in [first, *content]:
        tokens = _split_grid_line(line)
        if len(tokens) != edge_size:
            raise PuzzleFormatError(
                f"Line {number}: row does not contain {edge_size} numbers"
            )
        pending.append(tokens)
        if len(pending) == edge_size:
            yield parse_grid_rows(pending, edge_size)
            pending = []

    if pending:
        raise PuzzleFormatError(
            f"Incomplete grid at end of input: {len(pending)} of {edge_size} rows"
        )


def load_all_puzzles(path: str | os.PathLike[str], block_size: int = 3) -> Iterator[Grid]:
    """Yield every puzzle stored in a text file."""
    file_path = Path(path)
    _LOGGER.debug("Reading puzzles from %s", file_path)
    with file_path.open("r", encoding="utf-8") as handle:
        yield from iter_puzzles_from_lines(handle, block_size)


def is_puzzle_file(source: str) -> bool:
    """Whether source names an existing file rather than a puzzle string."""
    return len(source) < _MAX_PATH_LENGTH and os.path.isfile(source)


def load_puzzle(source: str, block_size: int = 3) -> Grid:
    """
    Load one puzzle from a file path or a puzzle string.

    Args:
        source: Path to a puzzle file, or the puzzle itself
        block_size: Edge of one block (3 for 9x9)

    Returns:
        edge_size x edge_size grid, 0 for blanks

    Raises:
        PuzzleFormatError: If the text is not a valid puzzle
        OSError: If the file cannot be read
    """
    if is_puzzle_file(source):
        for grid in load_all_puzzles(source, block_size):
            return grid
        raise PuzzleFormatError(f"File {source} contains no puzzles")
    return parse_puzzle_string(source, block_size)
