from __future__ import annotations

import logging
from enum import Enum


logger = logging.getLogger(__name__)


class GameState(Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameStateMachine:
    """Run state of a game: ACTIVE, PAUSED or GAME_OVER.

    GAME_OVER only leaves through ``reset``.
    """

    def __init__(self) -> None:
        self.state = GameState.ACTIVE

    @property
    def accepts_moves(self) -> bool:
        return self.state is GameState.ACTIVE

    @property
    def restarts_on_pause_key(self) -> bool:
        # The pause key restarts from PAUSED as well as from GAME_OVER.
        return self.state in (GameState.PAUSED, GameState.GAME_OVER)

    def _transition(self, new_state: GameState) -> None:
        if new_state is not self.state:
            logger.debug("state %s -> %s", self.state.value, new_state.value)
            self.state = new_state

    def toggle_pause(self) -> bool:
        if self.state is GameState.ACTIVE:
            self._transition(GameState.PAUSED)
            return True
        if self.state is GameState.PAUSED:
            self._transition(GameState.ACTIVE)
            return True
        return False

    def finish(self) -> None:
        self._transition(GameState.GAME_OVER)

    def reset(self) -> None:
        self._transition(GameState.ACTIVE)
