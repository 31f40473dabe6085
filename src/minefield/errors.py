"""
Exceptions raised by the minefield engine.
"""


class MinefieldError(Exception):
    """Base class for all engine errors."""


class InvalidConfiguration(MinefieldError, ValueError):
    """Board dimensions or mine count are out of range."""


class CellOutOfRange(MinefieldError, IndexError):
    """A (row, col) position outside the board was addressed."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is outside a {rows}x{cols} board"
        )
        self.row = row
        self.col = col
