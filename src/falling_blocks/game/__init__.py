"""Game module for Falling Blocks.

Exports the puzzle engine and supporting classes:
- Board: Immutable playfield snapshot with collision, placement and line clearing
- Piece / ActivePiece: Tetromino orientation and the falling piece's anchor
- PieceCatalog: Uniform random piece selection
- ScoringRules / ScoreState: Scoring, leveling and gravity speed
- GameClock / ManualScheduler: Cancellable gravity timer
- GameStateMachine: Active / paused / game-over transitions
- FallingBlockGame: Engine composing all of the above
- InputController: Keyboard mapping onto engine actions
"""

from .board import Board, ClearResult
from .pieces import ActivePiece, Piece, PieceCatalog, TetrominoType, COLORS
from .rules import ScoringRules, ScoreState, apply_clear_event
from .clock import GameClock, ManualScheduler
from .state import GameState, GameStateMachine
from .core import FallingBlockGame, GameConfig, Action, Direction
from .controls import InputController, KEY_TO_ACTION

__all__ = [
    "Board",
    "ClearResult",
    "ActivePiece",
    "Piece",
    "PieceCatalog",
    "TetrominoType",
    "COLORS",
    "ScoringRules",
    "ScoreState",
    "apply_clear_event",
    "GameClock",
    "ManualScheduler",
    "GameState",
    "GameStateMachine",
    "FallingBlockGame",
    "GameConfig",
    "Action",
    "Direction",
    "InputController",
    "KEY_TO_ACTION",
]
