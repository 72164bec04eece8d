"""Tests for puzzle loading and rendering."""

import pytest

from sudoku_engine.puzzles.loader import (
    is_puzzle_file,
    iter_puzzles_from_lines,
    load_all_puzzles,
    load_puzzle,
    parse_grid_rows,
    parse_puzzle_string,
)
from sudoku_engine.puzzles.renderer import render_board
from sudoku_engine.solver.board import Board
from sudoku_engine.solver.errors import PuzzleFormatError


EASY = "003020600900305001001806400008102900700000008006708200002609500800203009005010300"

GRID_FILE = """\
0 0 3 0 2 0 6 0 0
9 0 0 3 0 5 0 0 1
0 0 1 8 0 6 4 0 0
0 0 8 1 0 2 9 0 0
7 0 0 0 0 0 0 0 8
0 0 6 7 0 8 2 0 0
0 0 2 6 0 9 5 0 0
8 0 0 2 0 3 0 0 9
0 0 5 0 1 0 3 0 0
"""


class TestParsePuzzleString:
    """Tests for single-line puzzle strings."""

    def test_digits(self):
        grid = parse_puzzle_string(EASY)

        assert len(grid) == 9
        assert grid[0] == [0, 0, 3, 0, 2, 0, 6, 0, 0]
        assert grid[8] == [0, 0, 5, 0, 1, 0, 3, 0, 0]

    def test_dots_are_blanks(self):
        grid = parse_puzzle_string(EASY.replace("0", "."))

        assert grid == parse_puzzle_string(EASY)

    def test_small_board(self):
        grid = parse_puzzle_string("1200340000430021", block_size=2)

        assert grid == [[1, 2, 0, 0], [3, 4, 0, 0], [0, 0, 4, 3], [0, 0, 2, 1]]

    def test_letters_on_wide_boards(self):
        grid = parse_puzzle_string("AG" + "0" * 254, block_size=4)

        assert grid[0][:3] == [10, 16, 0]

    def test_wrong_cell_count(self):
        with pytest.raises(PuzzleFormatError, match="expected 81 cells, found 80"):
            parse_puzzle_string(EASY[:-1])

    def test_value_above_edge(self):
        with pytest.raises(PuzzleFormatError, match="outside 0..4"):
            parse_puzzle_string("5" + "0" * 15, block_size=2)

    def test_non_ascii_digits_are_not_cells(self):
        with pytest.raises(PuzzleFormatError, match="expected 81 cells, found 80"):
            parse_puzzle_string("\u00b2" + "0" * 80)

    def test_letters_are_skipped_on_narrow_boards(self):
        grid = parse_puzzle_string("A" + EASY)

        assert grid == parse_puzzle_string(EASY)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_puzzle_string("12")


class TestParseGridRows:
    """Tests for 2-D grid validation."""

    def test_returns_copy(self):
        rows = [[1, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 4]]

        grid = parse_grid_rows(rows, 4)
        grid[0][0] = 2

        assert rows[0][0] == 1

    def test_accepts_numeric_strings(self):
        grid = parse_grid_rows([["1", "0"], ["0", "2"]], 2)

        assert grid == [[1, 0], [0, 2]]

    @pytest.mark.parametrize(
        "rows,message",
        [
            ([[0] * 4] * 3, "Expected 4 rows"),
            ([[0] * 4, [0] * 3, [0] * 4, [0] * 4], "Row 1 has 3 values"),
            ([[0] * 4, [0] * 4, [0, 0, 9, 0], [0] * 4], r"Cell \(2, 2\) value 9"),
            ([[0] * 4, [0] * 4, [0] * 4, [0, 0, 0, "x"]], "not a number"),
        ],
    )
    def test_rejects_bad_grids(self, rows, message):
        with pytest.raises(PuzzleFormatError, match=message):
            parse_grid_rows(rows, 4)


class TestFiles:
    """Tests for puzzle files in both layouts."""

    def test_one_line_file(self, tmp_path):
        path = tmp_path / "puzzles.txt"
        path.write_text(f"# sample\n{EASY}\n\n{EASY.replace('3', '0')}\n", encoding="utf-8")

        grids = list(load_all_puzzles(path))

        assert len(grids) == 2
        assert grids[0] == parse_puzzle_string(EASY)
        assert grids[1][0][2] == 0

    def test_grid_file(self, tmp_path):
        path = tmp_path / "grids.txt"
        path.write_text(GRID_FILE + "\n" + GRID_FILE.replace("0", "."), encoding="utf-8")

        grids = list(load_all_puzzles(path))

        assert len(grids) == 2
        assert grids[0] == parse_puzzle_string(EASY)
        assert grids[1] == grids[0]

    def test_incomplete_grid(self):
        lines = GRID_FILE.splitlines()[:5]

        with pytest.raises(PuzzleFormatError, match="5 of 9 rows"):
            list(iter_puzzles_from_lines(lines))

    def test_short_grid_row(self):
        lines = GRID_FILE.splitlines()
        lines[3] = "0 0 8 1"

        with pytest.raises(PuzzleFormatError, match="Line 4"):
            list(iter_puzzles_from_lines(lines))

    def test_bad_one_line_puzzle_reports_line(self):
        lines = [EASY, EASY[:-2] + "x"]

        with pytest.raises(PuzzleFormatError, match="Line 2"):
            list(iter_puzzles_from_lines(lines))

    def test_empty_input(self):
        assert list(iter_puzzles_from_lines(["", "# nothing"])) == []

    def test_load_puzzle_from_file(self, tmp_path):
        path = tmp_path / "puzzles.txt"
        path.write_text(GRID_FILE, encoding="utf-8")

        assert is_puzzle_file(str(path)) is True
        assert load_puzzle(str(path)) == parse_puzzle_string(EASY)

    def test_load_puzzle_from_string(self):
        assert is_puzzle_file(EASY) is False
        assert load_puzzle(EASY) == parse_puzzle_string(EASY)

    def test_load_puzzle_from_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("\n", encoding="utf-8")

        with pytest.raises(PuzzleFormatError, match="contains no puzzles"):
            load_puzzle(str(path))


def test_render_small_board():
    board = Board(2, [[1, 0, 0, 2], [0, 0, 0, 0], [0, 0, 3, 0], [4, 0, 0, 0]])

    assert render_board(board) == (
        " 1 . | . 2\n"
        " . . | . .\n"
        "-----+----\n"
        " . . | 3 .\n"
        " 4 . | . ."
    )


def test_render_wide_board_uses_wider_cells():
    grid = [[0] * 16 for _ in range(16)]
    grid[0][0] = 16
    board = Board(4, grid)

    first_line = render_board(board).splitlines()[0]

    assert first_line.startswith(" 16  .  .  . |")
