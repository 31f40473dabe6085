"""
Minefield game engine.

Provides the board engine (mine placement, flood-fill reveal, flags,
win/loss detection) and thin hosts that drive it.
"""
from .cell import Cell, CellState, CellView
from .board import (
    Board,
    BoardConfig,
    GameState,
    RevealResult,
    FlagResult,
    Status,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DIFFICULTIES,
    get_preset,
)
from .errors import MinefieldError, InvalidConfiguration, CellOutOfRange
from .session import GameSession, SessionTimer
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "GameState",
    "RevealResult",
    "FlagResult",
    "Status",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTIES",
    "get_preset",
    "MinefieldError",
    "InvalidConfiguration",
    "CellOutOfRange",
    "GameSession",
    "SessionTimer",
    "MinesweeperEnv",
]
