from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import COLORS, Action, FallingBlockGame, GameConfig, TetrominoType


def _rgb_for_value(v: int) -> Tuple[int, int, int]:
    # Falling cells are negative tokens; same palette
    if v == 0:
        return (26, 26, 46)
    try:
        hex_color = COLORS[TetrominoType(abs(v))]
    except ValueError:
        return (200, 200, 200)
    return tuple(int(hex_color[i : i + 2], 16) for i in (1, 3, 5))  # type: ignore[return-value]


# Agent-facing subset of the engine actions; pause/restart are host concerns.
ENV_ACTIONS: Tuple[Action, ...] = (Action.NONE, Action.LEFT, Action.RIGHT, Action.DOWN, Action.ROTATE)


class FallingBlockEnv(gym.Env):
    """Each step applies one agent action followed by one gravity tick."""

    metadata = {"render_modes": ["rgb_array"], "render_fps": 10}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 5000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.game = FallingBlockGame(self.config)

        n_kinds = len(TetrominoType)
        self.observation_space = spaces.Box(
            low=-n_kinds, high=n_kinds, shape=(self.config.height, self.config.width), dtype=np.int8
        )
        self.action_space = spaces.Discrete(len(ENV_ACTIONS))
        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.display_grid().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        info = self.game.snapshot()
        info["steps"] = self._steps
        info["max_height"] = self.game.board.max_height()
        return info

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        game_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.game = FallingBlockGame(
            GameConfig(width=self.config.width, height=self.config.height, random_seed=game_seed)
        )
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise ValueError(f"invalid action {action!r} for {self.action_space}")
        score_before = self.game.score

        self.game.dispatch(ENV_ACTIONS[int(action)])
        self.game.tick()
        self._steps += 1

        reward = float(self.game.score - score_before)
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self._get_obs()
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = _rgb_for_value(int(grid[y, x]))
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
