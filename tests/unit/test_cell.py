"""
Unit tests for Cell class.

Tests cell state management, reveal/flag behavior, and observation conversion.
"""
import pytest
from minefield import Cell, CellState, CellView


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        cell = Cell()
        assert cell.is_mine is False

    def test_default_cell_is_hidden(self) -> None:
        cell = Cell()
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True
        assert cell.is_revealed is False
        assert cell.is_flagged is False

    def test_default_cell_has_zero_neighbor_mines(self) -> None:
        assert Cell().neighbor_mines == 0


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        assert hidden_cell.reveal() is True
        assert hidden_cell.state == CellState.REVEALED

    def test_reveal_is_one_way(self, hidden_cell: Cell) -> None:
        """A revealed cell stays revealed."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_revealed is True

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_changes_state_to_flagged(self, hidden_cell: Cell) -> None:
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.state == CellState.FLAGGED
        assert hidden_cell.is_hidden is False

    def test_unflag_returns_to_hidden(self, hidden_cell: Cell) -> None:
        hidden_cell.toggle_flag()
        hidden_cell.toggle_flag()
        assert hidden_cell.state == CellState.HIDDEN


# ============================================================================
# Cell Snapshot Tests
# ============================================================================

class TestCellView:
    """Test read-only snapshots."""

    def test_view_copies_fields(self) -> None:
        cell = Cell(is_mine=False, neighbor_mines=3)
        cell.reveal()
        view = cell.view(2, 5)
        assert view == CellView(
            row=2, col=5, is_mine=False, is_revealed=True,
            is_flagged=False, neighbor_mines=3,
        )

    def test_view_is_frozen(self, hidden_cell: Cell) -> None:
        view = hidden_cell.view(0, 0)
        with pytest.raises(AttributeError):
            view.is_revealed = True

    def test_view_does_not_follow_later_changes(self, hidden_cell: Cell) -> None:
        view = hidden_cell.view(0, 0)
        hidden_cell.toggle_flag()
        assert view.is_flagged is False


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell observation codes."""

    def test_hidden_cell_observation_is_negative_one(
        self, hidden_cell: Cell
    ) -> None:
        assert hidden_cell.to_observation() == -1

    def test_flagged_cell_observation_is_negative_two(
        self, hidden_cell: Cell
    ) -> None:
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_observation_matches_neighbor_count(
        self, count: int
    ) -> None:
        cell = Cell(neighbor_mines=count)
        cell.reveal()
        assert cell.to_observation() == count

    def test_revealed_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9
