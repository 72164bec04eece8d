"""Puzzle input/output exports."""

from .loader import (
    load_all_puzzles,
    load_puzzle,
    parse_grid_rows,
    parse_puzzle_string,
)
from .renderer import render_board

__all__ = [
    "load_all_puzzles",
    "load_puzzle",
    "parse_grid_rows",
    "parse_puzzle_string",
    "render_board",
]
