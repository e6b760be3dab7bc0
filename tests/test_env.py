import gymnasium as gym
import numpy as np
import pytest

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_block_env import ENV_ACTIONS, FallingBlockEnv
from falling_blocks.game import COLORS, Action


def test_reset_returns_board_observation():
    env = FallingBlockEnv()
    obs, info = env.reset(seed=0)
    assert obs.shape == (20, 10)
    assert obs.dtype == np.int8
    assert env.observation_space.contains(obs)
    assert info["score"] == 0 and info["state"] == "active"
    assert int((obs < 0).sum()) == 4


def test_seeded_resets_are_reproducible():
    a, b = FallingBlockEnv(), FallingBlockEnv()
    obs_a, _ = a.reset(seed=11)
    obs_b, _ = b.reset(seed=11)
    assert np.array_equal(obs_a, obs_b)
    for action in [1, 4, 2, 3, 0]:
        obs_a, *_ = a.step(action)
        obs_b, *_ = b.step(action)
        assert np.array_equal(obs_a, obs_b)


def test_step_applies_action_then_gravity():
    env = FallingBlockEnv()
    env.reset(seed=3)
    y_before = env.game.active.y
    _, reward, terminated, truncated, info = env.step(ENV_ACTIONS.index(Action.NONE))
    assert env.game.active.y == y_before + 1
    assert reward == 0.0
    assert not terminated and not truncated
    assert info["steps"] == 1


def test_dropping_in_place_terminates():
    env = FallingBlockEnv()
    env.reset(seed=5)
    down = ENV_ACTIONS.index(Action.DOWN)
    terminated = False
    for _ in range(2000):
        _, _, terminated, truncated, _ = env.step(down)
        if terminated or truncated:
            break
    assert terminated


def test_truncates_after_step_limit():
    env = FallingBlockEnv(max_episode_steps=3)
    env.reset(seed=1)
    results = [env.step(0)[3] for _ in range(3)]
    assert results == [False, False, True]


def test_invalid_action_rejected():
    env = FallingBlockEnv()
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step(9)


def test_registered_environment():
    env = gym.make("FallingBlocks-10x20-v0")
    obs, info = env.reset(seed=2)
    obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
    assert obs.shape == (20, 10)
    env.close()


def test_rgb_render():
    env = FallingBlockEnv(render_mode="rgb_array")
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (240, 120, 3)


def test_random_agent_runs(capsys):
    from falling_blocks.rl.random_agent import run_random

    total = run_random(steps=300, seed=0)
    assert total >= 0.0
    assert "Random agent total reward" in capsys.readouterr().out


def test_rgb_render_uses_piece_palette():
    env = FallingBlockEnv(render_mode="rgb_array")
    env.reset(seed=0)
    kind = env.game.active.piece.kind
    x, y = env.game.active.cells()[0]
    img = env.render()
    hex_color = COLORS[kind]
    expected = [int(hex_color[i : i + 2], 16) for i in (1, 3, 5)]
    assert img[y * 12 + 1, x * 12 + 1].tolist() == expected
    assert img[19 * 12 + 1, 0 * 12 + 1].tolist() == [26, 26, 46]
