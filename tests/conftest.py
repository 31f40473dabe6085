"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell, GameSession


class FixedLayout:
    """Stand-in generator that always 'samples' the given mine positions."""

    def __init__(self, mines: Iterable[Tuple[int, int]]) -> None:
        self.mines = list(mines)
        self.population: List[Tuple[int, int]] = []

    def sample(self, population, k):
        assert k == len(self.mines)
        self.population = list(population)
        missing = [pos for pos in self.mines if pos not in self.population]
        assert not missing, f"mines inside the safe zone: {missing}"
        return list(self.mines)

    def seed(self, value) -> None:
        pass


def make_rigged_board(
    rows: int, cols: int, mines: Iterable[Tuple[int, int]]
) -> Board:
    """Board whose first reveal places mines exactly at `mines`."""
    mines = list(mines)
    board = Board(BoardConfig(rows, cols, len(mines)))
    board._rng = FixedLayout(mines)
    return board


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board()


@pytest.fixture
def seeded_board() -> Board:
    """Beginner board with a reproducible layout."""
    return Board(BoardConfig(9, 9, 10), seed=1234)


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


@pytest.fixture
def rigged_board():
    """Factory for boards with a chosen mine layout."""
    return make_rigged_board


@pytest.fixture
def wall_board() -> Board:
    """
    5x5 board with a wall of mines down column 2.

    Revealing (2, 0) opens columns 0-1; revealing (2, 4) then wins.
    """
    return make_rigged_board(5, 5, [(row, 2) for row in range(5)])


@pytest.fixture
def chord_board() -> Board:
    """
    3x5 board with mines at (0, 2) and (2, 2).

    Revealing (1, 0) opens columns 0-1 and leaves (1, 2) hidden.
    """
    return make_rigged_board(3, 5, [(0, 2), (2, 2)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session(fake_clock: FakeClock) -> GameSession:
    """Beginner session on a fake clock."""
    return GameSession(difficulty="easy", seed=7, clock=fake_clock)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)
