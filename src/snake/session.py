"""
Game session controller: the state machine around the simulation.

    IDLE / GAME_OVER --start--> RUNNING --pause--> PAUSED --start--> RUNNING
    any --reset--> IDLE (fresh game)

The session knows nothing about timers. Whoever drives it (see src/services/game_loop.py)
calls `tick()` every `interval_ms` milliseconds while `is_running` holds.
"""

import logging
import random
import time
from dataclasses import replace
from typing import Callable, Optional

from src.core.exceptions import GameStateError
from src.core.models import GameSnapshot, LeaderboardEntryModel
from src.core.shared_types import Direction, Outcome, SessionStatus
from src.leaderboard.entries import build_entry, normalize_player_name
from src.snake.engine import StepResult, step
from src.snake.game_state import GameState
from src.snake.rules import GameRules

logger = logging.getLogger(__name__)

Clock = Callable[[], float]  # seconds, only differences matter
GameOverCallback = Callable[[LeaderboardEntryModel], None]


class GameSession:
    """One player's game, from start to game over (and again, after a reset)."""

    def __init__(
        self,
        rules: GameRules,
        rng: Optional[random.Random] = None,
        clock: Clock = time.monotonic,
        on_game_over: Optional[GameOverCallback] = None,
        player_name: Optional[str] = None,
    ) -> None:
        self.rules = rules
        self.rng = rng or random.Random()
        self.clock = clock
        self.on_game_over = on_game_over
        self.player_name = normalize_player_name(player_name)

        self.state = GameState.new_game(rules, self.rng)
        self.status = SessionStatus.IDLE
        self.pending_direction: Optional[Direction] = None
        self.last_entry: Optional[LeaderboardEntryModel] = None

        # time spent in RUNNING, excluding pauses
        self._elapsed = 0.0
        self._running_since: Optional[float] = None

    # --- lifecycle ---
    @property
    def is_running(self) -> bool:
        return self.status == SessionStatus.RUNNING

    @property
    def interval_ms(self) -> float:
        """Current tick interval. Shrinks with every food eaten."""
        return self.state.speed

    def start(self) -> None:
        if self.status == SessionStatus.RUNNING:
            return
        if self.status == SessionStatus.GAME_OVER:
            self.reset()
        self.status = SessionStatus.RUNNING
        self._running_since = self.clock()

    def pause(self) -> None:
        if self.status != SessionStatus.RUNNING:
            return
        self._stop_clock()
        self.status = SessionStatus.PAUSED

    def reset(self) -> None:
        self.state = GameState.new_game(self.rules, self.rng)
        self.status = SessionStatus.IDLE
        self.pending_direction = None
        self._elapsed = 0.0
        self._running_since = None

    def rename(self, player_name: Optional[str]) -> None:
        self.player_name = normalize_player_name(player_name)

    # --- input ---
    def set_direction(self, direction: Direction | str) -> bool:
        """
        Buffer a direction change for the next tick. Only the latest input before a tick counts.
        Returns False when the input is ignored (game not running).
        """
        try:
            direction = Direction(direction)
        except ValueError as exc:
            raise GameStateError(f"Unknown direction: {direction!r}") from exc

        if not self.is_running:
            return False
        self.pending_direction = direction
        return True

    # --- simulation ---
    def tick(self) -> Optional[StepResult]:
        """Advance the game by one step. Does nothing unless running."""
        if not self.is_running:
            return None

        self._apply_pending_direction()
        result = step(self.state, self.rules, self.rng)
        self.state = result.state

        if result.outcome.is_terminal:
            self._finish(result.outcome)
        return result

    def snapshot(self) -> GameSnapshot:
        return self.state.to_snapshot(self.status)

    def duration_seconds(self) -> int:
        running = (
            self.clock() - self._running_since
            if self._running_since is not None
            else 0.0
        )
        return int(self._elapsed + running)

    # --- internal helpers ---
    def _apply_pending_direction(self) -> None:
        """Opposite of the current direction would mean running into your own neck: ignore it."""
        pending = self.pending_direction
        self.pending_direction = None
        if pending is None or pending == self.state.direction.opposite:
            return
        self.state = replace(self.state, direction=pending)

    def _stop_clock(self) -> None:
        if self._running_since is not None:
            self._elapsed += self.clock() - self._running_since
            self._running_since = None

    def _finish(self, outcome: Outcome) -> None:
        self._stop_clock()
        self.status = SessionStatus.GAME_OVER
        entry = build_entry(
            player_name=self.player_name,
            score=self.state.score,
            foods_eaten=self.state.foods_eaten,
            level=self.state.level,
            duration=self.duration_seconds(),
        )
        self.last_entry = entry
        logger.info(
            "Game over for %s (%s): score %d, level %d",
            self.player_name,
            outcome,
            entry.score,
            entry.level,
        )
        if self.on_game_over is not None:
            self.on_game_over(entry)
