"""
Board module for the minefield engine.

Implements the game board with deferred mine placement, flood-fill
revealing, flag bookkeeping and win/loss detection. The board only
produces plain data; drawing and timing belong to the host.
"""
import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, CellView
from .errors import CellOutOfRange, InvalidConfiguration

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Phases of a single game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        """True once the game has been won or lost."""
        return self in (GameState.WON, GameState.LOST)


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a minefield board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mine_count: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.mine_count < 0:
            raise InvalidConfiguration("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - 1
        if self.mine_count > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Cells that must be revealed to win."""
        return self.total_cells - self.mine_count


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)

DIFFICULTIES: Dict[str, BoardConfig] = {
    "easy": BEGINNER,
    "medium": INTERMEDIATE,
    "hard": EXPERT,
}


def get_preset(name: str) -> BoardConfig:
    """Look up a named difficulty preset."""
    try:
        return DIFFICULTIES[name]
    except KeyError:
        choices = ", ".join(sorted(DIFFICULTIES))
        raise InvalidConfiguration(
            f"Unknown difficulty {name!r} (choose from {choices})"
        ) from None


# ============================================================================
# Command Results
# ============================================================================

@dataclass(frozen=True)
class RevealResult:
    """
    Outcome of a reveal or chord command.

    Attributes:
        changed: Positions whose revealed state flipped, in reveal order.
        phase: Game phase after the command.
        started: True if this command started the game.
        mines: Every mine position, filled in only when the game was lost.
    """

    changed: Tuple[Position, ...] = ()
    phase: GameState = GameState.NOT_STARTED
    started: bool = False
    mines: Tuple[Position, ...] = ()

    @property
    def is_no_op(self) -> bool:
        return not self.changed


@dataclass(frozen=True)
class FlagResult:
    """Outcome of a flag toggle."""

    flagged: bool
    mines_remaining: int
    toggled: bool


@dataclass(frozen=True)
class Status:
    """
    Snapshot of the session state.

    `timer_running` tells the host whether its elapsed-time counter
    should be ticking.
    """

    phase: GameState
    mines_remaining: int
    timer_running: bool


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minefield game board.

    Manages the grid of cells, mine placement, revealing logic,
    and win/lose conditions. Each board owns its own random generator,
    so independent boards never share state.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    seed: Optional[int] = None
    _grid: List[List[Cell]] = field(default_factory=list, init=False, repr=False)
    _game_state: GameState = field(default=GameState.NOT_STARTED, init=False)
    _mines_placed: bool = field(default=False, init=False)
    _safe_revealed: int = field(default=0, init=False)
    _flags_placed: int = field(default=0, init=False)
    _rng: random.Random = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Initialize the generator and grid after dataclass creation."""
        if not isinstance(self.config, BoardConfig):
            raise InvalidConfiguration(
                f"Expected BoardConfig, got {type(self.config).__name__}"
            )
        self._rng = random.Random(self.seed)
        self.reset()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create an empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.cols)]
            for _ in range(self.config.rows)
        ]

    def _place_mines(self, exclude: Position) -> None:
        """
        Place mines randomly, keeping the first click's neighbourhood clear.

        Args:
            exclude: (row, col) of the first revealed cell.
        """
        positions = self._get_valid_mine_positions(exclude)
        mine_positions = self._rng.sample(positions, self.config.mine_count)
        for row, col in mine_positions:
            self._grid[row][col].is_mine = True
        self._mines_placed = True
        logger.debug(
            "Placed %d mines on %dx%d board avoiding %s",
            self.config.mine_count, self.config.rows, self.config.cols, exclude,
        )

    def _get_valid_mine_positions(self, exclude: Position) -> List[Position]:
        """
        Get all positions a mine may occupy.

        Cells within Chebyshev distance 1 of `exclude` are skipped. When
        that leaves too few cells, only `exclude` itself is skipped.
        """
        center_row, center_col = exclude
        positions = [
            (row, col)
            for row in range(self.config.rows)
            for col in range(self.config.cols)
            if max(abs(row - center_row), abs(col - center_col)) > 1
        ]
        if len(positions) >= self.config.mine_count:
            return positions

        logger.debug(
            "Safe zone too small for %d mines, excluding only %s",
            self.config.mine_count, exclude,
        )
        return [
            (row, col)
            for row in range(self.config.rows)
            for col in range(self.config.cols)
            if (row, col) != exclude
        ]

    def _calculate_neighbor_mines(self) -> None:
        """Calculate neighbouring mine counts for all safe cells."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if not self._grid[row][col].is_mine:
                    count = self._count_neighbor_mines(row, col)
                    self._grid[row][col].neighbor_mines = count

    def _count_neighbor_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get in-bounds neighbouring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples, at most 8.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def _check_position(self, row: int, col: int) -> None:
        if not self._is_valid_position(row, col):
            raise CellOutOfRange(row, col, self.config.rows, self.config.cols)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def configure(self, config: BoardConfig) -> None:
        """Discard the current game and start a fresh one with `config`."""
        if not isinstance(config, BoardConfig):
            raise InvalidConfiguration(
                f"Expected BoardConfig, got {type(config).__name__}"
            )
        self.config = config
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the board to a new game with the current configuration.

        Args:
            seed: If given, reseed the board's generator first.
        """
        if seed is not None:
            self.seed = seed
            self._rng.seed(seed)
        self._init_grid()
        self._game_state = GameState.NOT_STARTED
        self._mines_placed = False
        self._safe_revealed = 0
        self._flags_placed = 0
        logger.debug(
            "New game: %dx%d with %d mines",
            self.config.rows, self.config.cols, self.config.mine_count,
        )

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Reveal a cell at the given position.

        On the first reveal, places mines around this cell and starts the
        game. Revealing a zero cell floods outward until numbered cells
        are reached. Revealing a mine loses the game.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            The changed positions and resulting phase. Empty if the game
            is over or the cell is already revealed or flagged.

        Raises:
            CellOutOfRange: If the position is not on the board.
        """
        self._check_position(row, col)
        if not self._can_reveal(row, col):
            return self._no_op()

        started = False
        if not self._mines_placed:
            self._handle_first_click(row, col)
            started = True

        cell = self._grid[row][col]
        if cell.is_mine:
            cell.reveal()
            self._lose(row, col)
            return RevealResult(
                changed=((row, col),),
                phase=self._game_state,
                started=started,
                mines=tuple(self.mine_positions()),
            )

        changed = self._flood_reveal(row, col)
        self._check_win_condition()
        return RevealResult(
            changed=tuple(changed), phase=self._game_state, started=started
        )

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self._game_state.is_terminal:
            return False
        return self._grid[row][col].is_hidden

    def _handle_first_click(self, row: int, col: int) -> None:
        """Start the game: place mines and calculate counts."""
        self._place_mines((row, col))
        self._calculate_neighbor_mines()
        self._set_state(GameState.IN_PROGRESS)

    def _flood_reveal(self, row: int, col: int) -> List[Position]:
        """
        Reveal a safe cell and, through zero cells, its connected region.

        Uses an explicit stack and a visited set keyed by row*cols+col,
        so large boards do not depend on recursion depth.

        Returns:
            Positions revealed by this call, each exactly once.
        """
        cols = self.config.cols
        changed = []
        stack = [(row, col)]
        visited: Set[int] = {row * cols + col}

        while stack:
            current_row, current_col = stack.pop()
            cell = self._grid[current_row][current_col]
            if not cell.reveal():
                continue
            self._safe_revealed += 1
            changed.append((current_row, current_col))

            if cell.neighbor_mines > 0:
                continue

            for neighbor_row, neighbor_col in self._get_neighbors(
                current_row, current_col
            ):
                key = neighbor_row * cols + neighbor_col
                if key in visited:
                    continue
                if self._grid[neighbor_row][neighbor_col].is_hidden:
                    visited.add(key)
                    stack.append((neighbor_row, neighbor_col))

        return changed

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are revealed."""
        if self._safe_revealed == self.config.safe_cells:
            self._set_state(GameState.WON)

    def _lose(self, row: int, col: int) -> None:
        logger.debug("Mine hit at (%d, %d)", row, col)
        self._set_state(GameState.LOST)

    def _set_state(self, state: GameState) -> None:
        if state != self._game_state:
            logger.debug("Phase %s -> %s", self._game_state.name, state.name)
        self._game_state = state

    def _no_op(self) -> RevealResult:
        return RevealResult(phase=self._game_state)

    def toggle_flag(self, row: int, col: int) -> FlagResult:
        """
        Toggle the flag on a cell.

        Flagging does not check whether the cell holds a mine, and is
        allowed before the first reveal.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The cell's flag state and the updated remaining-mine count.

        Raises:
            CellOutOfRange: If the position is not on the board.
        """
        self._check_position(row, col)
        cell = self._grid[row][col]
        toggled = False
        if not self._game_state.is_terminal:
            toggled = cell.toggle_flag()
        if toggled:
            self._flags_placed += 1 if cell.is_flagged else -1
        return FlagResult(
            flagged=cell.is_flagged,
            mines_remaining=self.mines_remaining,
            toggled=toggled,
        )

    def chord(self, row: int, col: int) -> RevealResult:
        """
        Chord action: reveal all unflagged neighbours if flag count matches.

        Only applies to a revealed numbered cell whose adjacent flag count
        equals its number. A wrongly placed flag can make this lose.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            The changed positions and resulting phase.

        Raises:
            CellOutOfRange: If the position is not on the board.
        """
        self._check_position(row, col)
        if not self._can_chord(row, col):
            return self._no_op()

        changed: List[Position] = []
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            neighbor = self._grid[neighbor_row][neighbor_col]
            if not neighbor.is_hidden:
                continue
            if neighbor.is_mine:
                neighbor.reveal()
                changed.append((neighbor_row, neighbor_col))
                self._lose(neighbor_row, neighbor_col)
                return RevealResult(
                    changed=tuple(changed),
                    phase=self._game_state,
                    mines=tuple(self.mine_positions()),
                )
            changed.extend(self._flood_reveal(neighbor_row, neighbor_col))

        self._check_win_condition()
        return RevealResult(changed=tuple(changed), phase=self._game_state)

    def _can_chord(self, row: int, col: int) -> bool:
        """Check if chord action is valid."""
        if self._game_state != GameState.IN_PROGRESS:
            return False
        cell = self._grid[row][col]
        if not cell.is_revealed or cell.neighbor_mines == 0:
            return False
        return self._count_neighbor_flags(row, col) == cell.neighbor_mines

    def _count_neighbor_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_flagged:
                count += 1
        return count

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def status(self) -> Status:
        """Current phase and counters. Has no side effects."""
        return Status(
            phase=self._game_state,
            mines_remaining=self.mines_remaining,
            timer_running=self._game_state == GameState.IN_PROGRESS,
        )

    @property
    def game_state(self) -> GameState:
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if the game still accepts commands."""
        return not self._game_state.is_terminal

    @property
    def is_won(self) -> bool:
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._game_state == GameState.LOST

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    @property
    def mines_remaining(self) -> int:
        """Mine count minus flags placed; negative when over-flagged."""
        return self.config.mine_count - self._flags_placed

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells, including an exploded mine."""
        return sum(
            1 for row in self._grid for cell in row if cell.is_revealed
        )

    def get_cell(self, row: int, col: int) -> Cell:
        """
        Get the cell at a position.

        Raises:
            CellOutOfRange: If the position is not on the board.
        """
        self._check_position(row, col)
        return self._grid[row][col]

    def cell_view(self, row: int, col: int) -> CellView:
        """Read-only snapshot of one cell."""
        return self.get_cell(row, col).view(row, col)

    def snapshot(self) -> List[List[CellView]]:
        """Read-only snapshot of the whole grid, row by row."""
        return [
            [cell.view(row, col) for col, cell in enumerate(cells)]
            for row, cells in enumerate(self._grid)
        ]

    def mine_positions(self) -> List[Position]:
        """All mine positions in row-major order, flagged or not."""
        return [
            (row, col)
            for row in range(self.config.rows)
            for col in range(self.config.cols)
            if self._grid[row][col].is_mine
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with neighbouring mine count
                9 = revealed mine
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get the cells that can still be revealed.

        Returns:
            List of (row, col) positions that are hidden and unflagged.
        """
        if self._game_state.is_terminal:
            return []
        actions = []
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if self._grid[row][col].is_hidden:
                    actions.append((row, col))
        return actions
