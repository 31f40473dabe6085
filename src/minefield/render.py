"""
Text rendering for the minefield engine.

Turns board snapshots into plain strings for terminals and the
gymnasium `ansi` render mode.
"""
from typing import Optional

from .board import Board
from .cell import CellView

HIDDEN_SYMBOL = "."
FLAG_SYMBOL = "F"
MINE_SYMBOL = "*"
EMPTY_SYMBOL = " "


def format_counter(value: int) -> str:
    """Three-character counter display, e.g. 7 -> '007', -3 -> '-03'."""
    value = max(-99, min(999, value))
    return f"{value:03d}"


def cell_symbol(view: CellView, reveal_mines: bool = False) -> str:
    """Single character for one cell."""
    if view.is_flagged:
        return FLAG_SYMBOL
    if view.is_mine and (view.is_revealed or reveal_mines):
        return MINE_SYMBOL
    if not view.is_revealed:
        return HIDDEN_SYMBOL
    if view.neighbor_mines == 0:
        return EMPTY_SYMBOL
    return str(view.neighbor_mines)


def render_header(mines_remaining: int, seconds: int) -> str:
    return f"Mines: {format_counter(mines_remaining)}  Time: {format_counter(seconds)}"


def render_board(board: Board, reveal_mines: Optional[bool] = None) -> str:
    """
    Render the board as an ASCII grid with row and column labels.

    Args:
        board: Board to draw.
        reveal_mines: Show every mine. Defaults to True after a loss.

    Returns:
        Multi-line string.
    """
    if reveal_mines is None:
        reveal_mines = board.is_lost

    width = len(str(board.config.cols - 1))
    label_width = len(str(board.config.rows - 1))

    header = " " * (label_width + 1) + " ".join(
        str(col).rjust(width) for col in range(board.config.cols)
    )
    lines = [header]
    for row, views in enumerate(board.snapshot()):
        cells = " ".join(
            cell_symbol(view, reveal_mines).rjust(width) for view in views
        )
        lines.append(f"{str(row).rjust(label_width)} {cells}")

    return "\n".join(lines)
