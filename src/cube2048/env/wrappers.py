from __future__ import annotations

from typing import Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If a chosen direction would not change the board, pick a valid one instead.

    Useful when training with vanilla PPO (no action masking).
    """

    def step(self, action):  # type: ignore[override]
        mask = self.get_action_mask()
        if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
            valid_idxs = np.flatnonzero(mask)
            if valid_idxs.size > 0:
                action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)

    def get_action_mask(self) -> np.ndarray:
        if hasattr(self.env, "get_action_mask"):
            return getattr(self.env, "get_action_mask")()
        return self.env.unwrapped.get_action_mask()


class OneHotObservationWrapper(gym.ObservationWrapper):
    """Expand the (N, N, N) exponent board into (C, N, N, N) one-hot channels.

    Channel 0 marks empty cells, channel k marks tiles of value 2**k. By
    default there is one channel per exponent the wrapped space allows.
    """

    def __init__(self, env: gym.Env, channels: Optional[int] = None):
        super().__init__(env)
        assert isinstance(env.observation_space, spaces.Box)
        needed = int(env.observation_space.high.max()) + 1
        if channels is None:
            channels = needed
        elif channels < needed:
            raise ValueError(f"{channels} channels cannot encode exponents up to {needed - 1}")
        self.channels = int(channels)
        shape = (self.channels,) + tuple(env.observation_space.shape)
        self.observation_space = spaces.Box(low=0, high=1, shape=shape, dtype=np.uint8)

    def observation(self, observation: np.ndarray) -> np.ndarray:
        exponents = observation.astype(np.int64)
        planes = np.arange(self.channels).reshape((-1,) + (1,) * exponents.ndim)
        return (planes == exponents[np.newaxis]).astype(np.uint8)
