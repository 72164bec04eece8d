"""Solve puzzles from a file or a puzzle string and report timings."""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from sudoku_engine.puzzles.loader import is_puzzle_file, load_all_puzzles, parse_puzzle_string
from sudoku_engine.puzzles.renderer import render_board
from sudoku_engine.solver.backtracking import DEFAULT_MAX_SEARCHES, SudokuSolver
from sudoku_engine.solver.board import Board, Grid
from sudoku_engine.solver.errors import SudokuError

LOGGER = logging.getLogger("solve_puzzles")


@dataclass
class RunConfig:
    source: str
    block_size: int = 3
    strategies: str = ""
    show: bool = False
    max_searches: int = DEFAULT_MAX_SEARCHES
    debug: bool = False


@dataclass
class PuzzleReport:
    index: int
    solution: Optional[Board]
    search_count: int
    seconds: float

    @property
    def solved(self) -> bool:
        return self.solution is not None


def iter_source_puzzles(source: str, block_size: int) -> Iterator[Grid]:
    """Puzzles from a file path, or the single puzzle written in source."""
    if is_puzzle_file(source):
        LOGGER.info("Reading from file: %s", Path(source).name)
        yield from load_all_puzzles(source, block_size)
    else:
        LOGGER.info("Solving puzzle string")
        yield parse_puzzle_string(source, block_size)


def solve_one(grid: Grid, index: int, config: RunConfig) -> PuzzleReport:
    solver = SudokuSolver(max_searches=config.max_searches)
    board = Board(config.block_size, grid)

    start = time.perf_counter()
    solution = solver.solve(board, config.strategies)
    elapsed = time.perf_counter() - start

    return PuzzleReport(
        index=index,
        solution=solution,
        search_count=solver.search_counter,
        seconds=elapsed,
    )


def format_report(report: PuzzleReport, show: bool) -> list[str]:
    if not report.solved:
        lines = [f"Puzzle #{report.index}: no solution ({report.search_count} ops)"]
    else:
        lines = [f"Puzzle #{report.index}: solved ({report.search_count} ops)"]
        if show:
            lines.append(render_board(report.solution))
        else:
            lines.append(f"Solution: {report.solution}")
    lines.append(f"Solved in {report.seconds:.4f} seconds")
    return lines


def summarize(reports: list[PuzzleReport], total_seconds: float) -> str:
    if not reports:
        return "File was found but contained no puzzles"
    solved = sum(1 for report in reports if report.solved)
    longest = max(report.seconds for report in reports)
    return (
        f"{len(reports)} puzzles processed ({solved} solved) in "
        f"{total_seconds:.4f} seconds total, longest {longest:.4f} seconds"
    )


def run(config: RunConfig) -> int:
    _configure_logging(config.debug)

    reports: list[PuzzleReport] = []
    start = time.perf_counter()
    try:
        for index, grid in enumerate(
            iter_source_puzzles(config.source, config.block_size), start=1
        ):
            report = solve_one(grid, index, config)
            reports.append(report)
            for line in format_report(report, config.show):
                print(line)
    except (SudokuError, ValueError, OSError) as exc:
        LOGGER.error("Failed to load puzzles: %s", exc)
        return 1

    print(summarize(reports, time.perf_counter() - start))
    return 0


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _parse_args(argv: Optional[list[str]] = None) -> RunConfig:
    parser = argparse.ArgumentParser(description="Solve Sudoku puzzles")
    parser.add_argument(
        "source",
        help="Path to a .txt puzzle file (one-line puzzles or grids) or a puzzle string",
    )
    parser.add_argument(
        "--block-size",
        type=int,
        default=3,
        help="Block edge: 3 for a standard 9x9 board, 2 for 4x4, ...",
    )
    parser.add_argument(
        "--strategies",
        default=os.getenv("SUDOKU_DEFAULT_STRATEGIES", ""),
        help="r = candidate reduction, u = unique candidate, h = hidden pair; "
        "empty for plain backtracking",
    )
    parser.add_argument(
        "--max-searches",
        type=int,
        default=int(os.getenv("SUDOKU_MAX_SEARCHES", str(DEFAULT_MAX_SEARCHES))),
    )
    parser.add_argument("--show", action="store_true", help="Render solved boards")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    if args.block_size < 1:
        parser.error("block size must be positive")

    return RunConfig(
        source=args.source,
        block_size=args.block_size,
        strategies=args.strategies,
        show=args.show,
        max_searches=args.max_searches,
        debug=args.debug,
    )


def main(argv: Optional[list[str]] = None) -> int:
    return run(_parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
