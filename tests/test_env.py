"""
Tests for the Gymnasium environment and its wrappers.
"""

import gymnasium as gym
import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

import cube2048.env  # noqa: F401
from cube2048.env.cube_env import Cube2048Env, render_layers
from cube2048.env.wrappers import OneHotObservationWrapper, ResampleInvalidActionWrapper
from cube2048.game import DIRECTIONS, Direction, GameConfig

from boards import place


def _env_with(values, **kwargs) -> Cube2048Env:
    env = Cube2048Env(GameConfig(random_seed=5), **kwargs)
    env.reset(seed=5)
    env.game.load(place(env.game.engine, values))
    return env


class TestCube2048Env:
    """Tests for the single-agent environment."""

    def test_passes_env_checker(self):
        check_env(Cube2048Env(), skip_render_check=True)

    def test_registered(self):
        env = gym.make("Cube2048-4x4x4-v0")
        obs, info = env.reset(seed=0)

        assert obs.shape == (4, 4, 4)
        assert env.action_space.n == 6
        assert "action_mask" in info
        env.close()

    def test_observation_is_log2(self):
        env = _env_with({(0, 0, 0): 2, (1, 2, 3): 256})

        obs = env._get_obs()

        assert obs[0, 0, 0] == 1
        assert obs[1, 2, 3] == 8
        assert int(obs.sum()) == 9

    def test_action_mask_matches_valid_directions(self):
        env = _env_with({(0, 0, 0): 2})

        mask = env.get_action_mask()

        expected = {Direction.RIGHT, Direction.UP, Direction.BACK}
        assert [DIRECTIONS[i] for i in np.flatnonzero(mask)] == [d for d in DIRECTIONS if d in expected]

    def test_invalid_move_penalized(self):
        env = _env_with({(0, 0, 0): 2}, invalid_move_penalty=-2.0)

        obs, reward, terminated, truncated, info = env.step(Direction.LEFT.index)

        assert reward == -2.0
        assert not info["moved"]
        assert not terminated

    def test_merge_reward(self):
        env = _env_with({(0, 0, 0): 4, (3, 0, 0): 4}, reward_scale=0.5)

        _, reward, _, _, info = env.step(Direction.LEFT.index)

        assert info["engine_score_delta"] == 8
        assert reward == 4.0
        assert info["score"] == 8

    def test_observation_space_contract(self):
        env = Cube2048Env()

        assert env.observation_space.dtype == np.int16
        assert (env.observation_space.high == 4 ** 3 + 1).all()
        assert (env.observation_space.low == 0).all()

    def test_noop_actions_count_towards_truncation(self):
        """Truncation counts env steps, including ones that change nothing."""
        env = Cube2048Env(GameConfig(random_seed=5, max_episode_steps=2))
        env.reset(seed=5)
        env.game.load(place(env.game.engine, {(0, 0, 0): 2}))

        _, _, _, first, info = env.step(Direction.LEFT.index)
        _, _, _, second, _ = env.step(Direction.LEFT.index)

        assert not info["moved"]
        assert not first
        assert second
        assert env.game.step_count == 0

    def test_truncates_at_step_limit(self):
        env = Cube2048Env(GameConfig(max_episode_steps=3))
        env.reset(seed=1)

        truncated = False
        for _ in range(3):
            _, _, _, truncated, _ = env.step(Direction.LEFT.index)

        assert truncated

    def test_rgb_render(self):
        env = Cube2048Env(render_mode="rgb_array")
        env.reset(seed=0)

        img = env.render()

        assert img.dtype == np.uint8
        assert img.ndim == 3 and img.shape[2] == 3

    def test_render_layers_places_tiles(self):
        board = np.zeros((2, 2, 2), dtype=np.int64)
        board[0, 1, 1] = 2

        img = render_layers(board, cell=10, gap=5)

        # layer z=1 starts at 5 + 20 + 5; y=1 is the top row
        assert tuple(img[5, 30]) == (0, 255, 255)


class TestWrappers:
    def test_resample_replaces_invalid_direction(self):
        env = ResampleInvalidActionWrapper(_env_with({(0, 0, 0): 2}))

        _, _, _, _, info = env.step(Direction.LEFT.index)

        assert info["moved"]

    def test_resample_keeps_valid_direction(self):
        env = ResampleInvalidActionWrapper(_env_with({(0, 0, 0): 2, (1, 0, 0): 2}))

        _, _, _, _, info = env.step(Direction.LEFT.index)

        assert info["engine_score_delta"] == 4

    def test_one_hot_observation(self):
        env = OneHotObservationWrapper(Cube2048Env())

        obs, _ = env.reset(seed=0)

        assert obs.shape == (66, 4, 4, 4)
        assert (obs.sum(axis=0) == 1).all()
        assert int(obs[0].sum()) == 62
        assert env.observation_space.contains(obs)

    def test_one_hot_keeps_large_tiles_apart(self):
        """2**15 and 2**16 land on their own planes."""
        inner = _env_with({(0, 0, 0): 2 ** 15, (1, 0, 0): 2 ** 16})
        env = OneHotObservationWrapper(inner)

        encoded = env.observation(inner._get_obs())

        assert encoded[15, 0, 0, 0] == 1
        assert encoded[16, 1, 0, 0] == 1
        assert not (encoded[:, 0, 0, 0] == encoded[:, 1, 0, 0]).all()

    def test_one_hot_rejects_too_few_channels(self):
        with pytest.raises(ValueError):
            OneHotObservationWrapper(Cube2048Env(), channels=16)
