"""
Cell module for the minefield engine.

Represents individual cells on the board with their state
(hidden/revealed/flagged) and content (mine/number).
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visible states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Observation codes shared by the renderer and the gymnasium adapter
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MINE = 9


# ============================================================================
# Cell Snapshot
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """Read-only copy of a cell handed to presentation code."""

    row: int
    col: int
    is_mine: bool
    is_revealed: bool
    is_flagged: bool
    neighbor_mines: int


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single cell in the minefield grid.

    Attributes:
        is_mine: Whether this cell contains a mine. Set once at placement.
        neighbor_mines: Count of mines among the 8 neighbours (0-8).
        state: Current visible state (hidden, revealed, or flagged).
    """

    is_mine: bool = False
    neighbor_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell was revealed, False if it was already
            revealed or is flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle the flag on this cell.

        Returns:
            True if the flag was toggled, False if the cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Hidden and not flagged."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    def view(self, row: int, col: int) -> CellView:
        """Snapshot this cell at the given position."""
        return CellView(
            row=row,
            col=col,
            is_mine=self.is_mine,
            is_revealed=self.is_revealed,
            is_flagged=self.is_flagged,
            neighbor_mines=self.neighbor_mines,
        )

    def to_observation(self) -> int:
        """
        Convert the cell to its observation code.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with neighbouring mine count
            9: Revealed mine (lost game)
        """
        if self.state == CellState.HIDDEN:
            return OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.is_mine:
            return OBS_MINE
        return self.neighbor_mines
