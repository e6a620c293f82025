"""
Gymnasium environment wrapper for Minesweeper.

Provides a standard RL interface on top of the minefield engine.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .minefield import Minefield, MinefieldConfig
from .render import render_text


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array indexed [row, col] where:
        - -1 = hidden tile
        - -2 = hidden tile flagged as mine
        - -3 = hidden tile flagged with a question mark
        - 0-8 = visible tile with adjacent mine count
        - 9 = visible mine

    Actions:
        Discrete action space of size rows * cols.
        Action i uncovers the tile with linear index i
        (column-major: i = col * rows + row).

    Rewards:
        - +1 for revealing a safe tile
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already visible)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[MinefieldConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 16x30, 20% mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or MinefieldConfig()
        self.minefield = Minefield.from_config(self.config)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-3,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        # One action per tile
        self.action_space = spaces.Discrete(self.config.num_tiles)

        self._steps = 0
        self._total_safe_tiles = self.config.num_tiles - self.config.num_mines

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: ``{"mine_locations": [...]}`` fixes the layout.

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.minefield.reseed(seed)

        mine_locations = (options or {}).get("mine_locations")
        self.minefield.reset(mine_locations)
        self._steps = 0
        self._total_safe_tiles = (
            self.config.num_tiles - len(self.minefield.mine_locations)
        )

        return self.minefield.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Linear index of the tile to uncover.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        reward = self._calculate_reward(int(action))

        observation = self.minefield.get_observation()
        # Agents never flag, so clearing every safe tile ends the episode
        terminated = self.minefield.is_lost or self._all_safe_revealed()
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _calculate_reward(self, action: int) -> float:
        """
        Uncover a tile and score the result.

        Args:
            action: Linear tile index.

        Returns:
            Reward value.
        """
        if not self.minefield.tile_is_hidden(action):
            return -0.1

        self.minefield.uncover_tile(action)

        if self.minefield.is_lost:
            return -10.0
        if self._all_safe_revealed():
            return 10.0
        return 1.0

    def _all_safe_revealed(self) -> bool:
        hidden = set(self.minefield.hidden_tiles())
        return hidden <= self.minefield.mine_locations

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        hidden = self.minefield.hidden_tiles()
        if self.minefield.is_lost:
            game_state = "LOST"
        elif self._all_safe_revealed():
            game_state = "WON"
        else:
            game_state = "PLAYING"

        return {
            "steps": self._steps,
            "revealed": self.config.num_tiles - len(hidden),
            "total_safe": self._total_safe_tiles,
            "game_state": game_state,
            "valid_actions": len(hidden),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_text(self.minefield)
        if self.render_mode == "human":
            print(render_text(self.minefield))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = tile still hidden.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        mask[self.minefield.hidden_tiles()] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[MinefieldConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for parallel rollouts.

    Args:
        n_envs: Number of parallel environments.
        config: Board configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=config)

    return gym.vector.AsyncVectorEnv([make_env for _ in range(n_envs)])
