"""
Session host for the minefield engine.

Wraps a Board with the pieces a front end needs but the engine must not
own: an elapsed-time counter and serialisation of commands coming from
more than one input source.
"""
import logging
import threading
import time
from typing import Callable, Optional

from .board import Board, BoardConfig, FlagResult, RevealResult, Status, get_preset

logger = logging.getLogger(__name__)


# ============================================================================
# Timer
# ============================================================================

class SessionTimer:
    """
    Host-side elapsed-time counter.

    Reads a monotonic clock instead of running a background tick, so it
    never touches the board.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started_at: Optional[float] = None
        self._accumulated = 0.0

    @property
    def running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed(self) -> float:
        """Seconds counted so far."""
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + (self._clock() - self._started_at)

    @property
    def seconds(self) -> int:
        """Whole seconds, as shown on a game clock."""
        return int(self.elapsed)

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def stop(self) -> None:
        if self._started_at is not None:
            self._accumulated += self._clock() - self._started_at
            self._started_at = None

    def reset(self) -> None:
        self._started_at = None
        self._accumulated = 0.0


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    One player's game: a board, its timer and a command lock.

    Every command runs under the lock, so callers on different threads
    see each command applied whole.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        difficulty: str = "easy",
        seed: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the session.

        Args:
            config: Explicit board configuration; overrides `difficulty`.
            difficulty: Preset name used when no config is given.
            seed: Random seed for reproducible mine layouts.
            clock: Monotonic clock for the timer.
        """
        self._lock = threading.Lock()
        self.board = Board(config or get_preset(difficulty), seed=seed)
        self.timer = SessionTimer(clock)

    @property
    def config(self) -> BoardConfig:
        return self.board.config

    @property
    def elapsed_seconds(self) -> int:
        return self.timer.seconds

    def new_game(
        self,
        difficulty: Optional[str] = None,
        config: Optional[BoardConfig] = None,
    ) -> None:
        """
        Start over, optionally with new settings.

        Args:
            difficulty: Preset name to switch to.
            config: Explicit configuration to switch to; wins over
                `difficulty`.
        """
        if config is None and difficulty is not None:
            config = get_preset(difficulty)
        with self._lock:
            if config is not None:
                self.board.configure(config)
            else:
                self.board.reset()
            self.timer.reset()
        logger.info(
            "Session reset to %dx%d with %d mines",
            self.config.rows, self.config.cols, self.config.mine_count,
        )

    def reveal(self, row: int, col: int) -> RevealResult:
        with self._lock:
            result = self.board.reveal(row, col)
            self._sync_timer(result)
        return result

    def chord(self, row: int, col: int) -> RevealResult:
        with self._lock:
            result = self.board.chord(row, col)
            self._sync_timer(result)
        return result

    def toggle_flag(self, row: int, col: int) -> FlagResult:
        with self._lock:
            return self.board.toggle_flag(row, col)

    def status(self) -> Status:
        with self._lock:
            return self.board.status()

    def _sync_timer(self, result: RevealResult) -> None:
        """Start the timer on the first reveal and stop it at game end."""
        if result.started:
            self.timer.start()
        if result.phase.is_terminal and self.timer.running:
            self.timer.stop()
            logger.info(
                "Game %s after %d seconds",
                result.phase.name.lower(), self.timer.seconds,
            )
