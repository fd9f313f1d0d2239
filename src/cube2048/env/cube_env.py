from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from cube2048.game import DIRECTIONS, Cube2048Game, Direction, GameConfig
from cube2048.visualization.palette import BACKGROUND_COLOR, color_for_value


def _compute_action_mask(game: Cube2048Game) -> np.ndarray:
    mask = np.zeros((len(DIRECTIONS),), dtype=np.bool_)
    for direction in game.valid_directions():
        mask[direction.index] = True
    return mask


def render_layers(board: np.ndarray, cell: int = 12, gap: int = 6) -> np.ndarray:
    """Draw an (N, N, N) value board as N z-layers laid out left to right."""
    n = board.shape[0]
    layer_px = n * cell
    width = n * layer_px + (n + 1) * gap
    height = layer_px + 2 * gap
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :, :] = BACKGROUND_COLOR
    for z in range(n):
        left = gap + z * (layer_px + gap)
        for x in range(n):
            for y in range(n):
                # +y is up on screen
                row = gap + (n - 1 - y) * cell
                col = left + x * cell
                img[row : row + cell - 1, col : col + cell - 1, :] = color_for_value(int(board[x, y, z]))
    return img


class Cube2048Env(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 5}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 reward_scale: float = 1.0,
                 invalid_move_penalty: float = -1.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = Cube2048Game(config)
        self.render_mode = render_mode

        self.reward_scale = float(reward_scale)
        self.invalid_move_penalty = float(invalid_move_penalty)
        self.terminal_penalty = float(terminal_penalty)

        size = self.game.config.size
        # A board of n^3 cells can at most build 2^(n^3 + 1)
        self.max_exponent = size ** 3 + 1
        self.observation_space = spaces.Box(
            low=0, high=self.max_exponent, shape=(size, size, size), dtype=np.int16
        )
        self.action_space = spaces.Discrete(len(DIRECTIONS))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.engine.lattice(self.game.tiles).exponents()

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "max_tile": self.game.max_tile(),
            "won": self.game.won,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        direction = Direction.from_index(int(action))
        _, gained, terminated, step_info = self.game.step(direction)

        reward_components: Dict[str, float] = {"merge": self.reward_scale * float(gained)}
        if not step_info["moved"]:
            reward_components["invalid"] = self.invalid_move_penalty
        if terminated:
            reward_components["terminal"] = self.terminal_penalty
        reward = float(sum(reward_components.values()))

        self._steps += 1
        truncated = self._steps >= self.game.config.max_episode_steps

        info = self._get_info()
        info["moved"] = step_info["moved"]
        info["reward_components"] = reward_components
        info["engine_score_delta"] = gained
        return self._get_obs(), reward, bool(terminated), bool(truncated), info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            return render_layers(self.game.get_board())
        return None

    def close(self) -> None:
        pass
