from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np

from .board import Board
from .clock import GameClock, ManualScheduler
from .pieces import ActivePiece, PieceCatalog, RandomSource
from .rules import ScoringRules, ScoreState, apply_clear_event
from .state import GameState, GameStateMachine


logger = logging.getLogger(__name__)


class Action(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    DOWN = 3
    ROTATE = 4
    PAUSE = 5
    RESTART = 6


class Direction(Enum):
    LEFT = (-1, 0)
    RIGHT = (1, 0)
    DOWN = (0, 1)


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None


class FallingBlockGame:
    """Falling-block puzzle engine.

    Keyboard input, the gravity clock and agents all go through the action
    methods below. Each call runs to completion (validate, mutate, rescore,
    rearm the clock) before returning. Rejected actions are silent no-ops.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[RandomSource] = None,
        scheduler: Optional[ManualScheduler] = None,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.catalog = PieceCatalog(rng=rng, seed=self.config.random_seed)
        self.machine = GameStateMachine()
        self.on_close = on_close
        self.clock: Optional[GameClock] = GameClock(scheduler, self.tick) if scheduler is not None else None
        self.mounted = False
        self.board = Board.empty(self.config.width, self.config.height)
        self.scores = ScoreState()
        self.active: Optional[ActivePiece] = None
        self._spawn_serial = 0
        self._clock_key: Optional[Tuple[Any, ...]] = None
        self._spawn_piece()

    # -- read-only views -------------------------------------------------

    @property
    def state(self) -> GameState:
        return self.machine.state

    @property
    def score(self) -> int:
        return self.scores.score

    @property
    def level(self) -> int:
        return self.scores.level

    @property
    def lines(self) -> int:
        return self.scores.lines

    @property
    def game_over(self) -> bool:
        return self.machine.state is GameState.GAME_OVER

    def spawn_position(self) -> Tuple[int, int]:
        return self.config.width // 2 - 1, 0

    # -- internals -------------------------------------------------------

    def _spawn_piece(self) -> None:
        x, y = self.spawn_position()
        self.active = ActivePiece(self.catalog.draw(), x, y)
        self._spawn_serial += 1
        logger.debug("spawned %s at (%d, %d)", self.active.piece.kind.name, x, y)

    def _land(self) -> None:
        assert self.active is not None
        landed = self.active
        placed = self.board.place_piece(landed.shape(), landed.x, landed.y, landed.piece.token)
        result = placed.clear_lines()
        self.board = result.board
        previous_level = self.scores.level
        self.scores = apply_clear_event(
            self.scores.score, self.scores.lines, result.lines_cleared, self.scores.level, self.rules
        )
        logger.debug("landed %s at (%d, %d), cleared %d", landed.piece.kind.name, landed.x, landed.y,
                     result.lines_cleared)
        if self.scores.level != previous_level:
            logger.info("level %d -> %d", previous_level, self.scores.level)

        if landed.y <= 0:
            self.machine.finish()
            logger.info("game over: score=%d lines=%d level=%d", self.score, self.lines, self.level)
            return
        self._spawn_piece()

    def _sync_clock(self) -> None:
        if self.clock is None or not self.mounted:
            return
        # Any change to the active piece (orientation or anchor) restarts the period
        active = (self.active.piece.rotation, self.active.x, self.active.y) if self.active is not None else None
        key = (self._spawn_serial, active, self.scores.level, self.machine.state)
        if key == self._clock_key:
            return
        self._clock_key = key
        if self.machine.state is GameState.ACTIVE:
            self.clock.start(self.rules.tick_interval_ms(self.scores.level))
        else:
            self.clock.stop()

    # -- actions ---------------------------------------------------------

    def move(self, direction: Direction) -> bool:
        """Translate the active piece; True when it actually moved.

        A blocked downward move lands the piece: merge, clear, score, then
        either spawn the next piece or end the game.
        """
        if self.active is None or not self.machine.accepts_moves:
            return False
        dx, dy = direction.value
        candidate = self.active.moved(dx, dy)
        if self.board.is_valid_move(candidate.shape(), candidate.x, candidate.y):
            self.active = candidate
            self._sync_clock()
            return True
        if direction is Direction.DOWN:
            self._land()
            self._sync_clock()
        return False

    def rotate(self) -> bool:
        if self.active is None or not self.machine.accepts_moves:
            return False
        candidate = self.active.rotated()
        if not self.board.is_valid_move(candidate.shape(), candidate.x, candidate.y):
            return False
        self.active = candidate
        self._sync_clock()
        return True

    def tick(self) -> None:
        if self.machine.state is GameState.ACTIVE:
            self.move(Direction.DOWN)

    def restart(self) -> None:
        self.board = Board.empty(self.config.width, self.config.height)
        self.scores = ScoreState()
        self._spawn_piece()
        self.machine.reset()
        logger.debug("restarted")
        self._sync_clock()

    def press_pause(self) -> None:
        """Pause key: toggles while playing, restarts once paused or over."""
        if self.machine.restarts_on_pause_key:
            self.restart()
        else:
            self.machine.toggle_pause()
            self._sync_clock()

    def toggle_pause(self) -> bool:
        """Pause button: plain pause/resume that never restarts."""
        changed = self.machine.toggle_pause()
        self._sync_clock()
        return changed

    def dispatch(self, action: Action) -> bool:
        if action == Action.LEFT:
            return self.move(Direction.LEFT)
        if action == Action.RIGHT:
            return self.move(Direction.RIGHT)
        if action == Action.DOWN:
            return self.move(Direction.DOWN)
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.PAUSE:
            self.press_pause()
            return True
        if action == Action.RESTART:
            self.restart()
            return True
        return False

    # -- host container --------------------------------------------------

    def mount(self) -> None:
        self.mounted = True
        self._clock_key = None
        self._sync_clock()

    def unmount(self) -> None:
        self.mounted = False
        self._clock_key = None
        if self.clock is not None:
            self.clock.stop()

    def close(self) -> None:
        self.unmount()
        if self.on_close is not None:
            self.on_close()

    # -- observation -----------------------------------------------------

    def display_grid(self) -> np.ndarray:
        # Overlay the falling piece on a copy of the board, negated
        state = self.board.to_array()
        if self.active is not None and not self.game_over:
            for x, y in self.active.cells():
                if 0 <= y < self.board.height and 0 <= x < self.board.width:
                    state[y, x] = -self.active.piece.token
        return state

    def snapshot(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level,
            "lines": self.lines,
            "state": self.state.value,
        }
