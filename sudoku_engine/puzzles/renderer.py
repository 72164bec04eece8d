"""Plain-text rendering of boards."""

from __future__ import annotations

from ..solver.board import Board


def render_board(board: Board) -> str:
    """
    Render board as a grid with block separators.

    Example (4x4):
         1 . | . 2
         . . | . .
        -----+----
         . . | . .
         . . | . .
    """
    n = board.edge_size
    b = board.block_size
    width = 2 if n <= 9 else 3

    lines = []
    for row in range(n):
        groups = []
        for start in range(0, n, b):
            cells = []
            for col in range(start, start + b):
                value = board.get_value(row, col)
                display = "." if value == 0 else str(value)
                cells.append(f"{display:>{width}}")
            groups.append("".join(cells))
        lines.append(" |".join(groups))

        if (row + 1) % b == 0 and row != n - 1:
            lines.append("-+".join("-" * (width * b) for _ in range(0, n, b)))

    return "\n".join(lines)
