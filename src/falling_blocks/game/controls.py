from __future__ import annotations

import logging
from typing import Dict, Optional

from .core import Action, FallingBlockGame


logger = logging.getLogger(__name__)


# Key names follow DOM KeyboardEvent.key values.
KEY_TO_ACTION: Dict[str, Action] = {
    "ArrowLeft": Action.LEFT,
    "ArrowRight": Action.RIGHT,
    "ArrowDown": Action.DOWN,
    "ArrowUp": Action.ROTATE,
    "x": Action.ROTATE,
    "X": Action.ROTATE,
    " ": Action.PAUSE,
}


class InputController:
    """Translates key presses into engine actions.

    While the game is paused or over only the pause key is honoured.
    Returns True when the key was consumed.
    """

    def __init__(self, game: FallingBlockGame, keymap: Optional[Dict[str, Action]] = None) -> None:
        self.game = game
        self.keymap = dict(keymap) if keymap is not None else dict(KEY_TO_ACTION)

    def action_for(self, key: Optional[str]) -> Optional[Action]:
        if key is None:
            return None
        action = self.keymap.get(key)
        if action is None:
            return None
        if not self.game.machine.accepts_moves and action != Action.PAUSE:
            return None
        return action

    def handle_key(self, key: Optional[str]) -> bool:
        action = self.action_for(key)
        if action is None:
            return False
        logger.debug("key %r -> %s", key, action.name)
        self.game.dispatch(action)
        return True
