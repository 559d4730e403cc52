"""
Random agent for Minehunt.

Serves as a baseline in both modes: in the classic mode it reveals a
random hidden cell, in the secret mode it picks a random command that
keeps the player on the grid.
"""
from typing import Optional

import numpy as np

from ..game.cell import PLAYER_CODE
from ..game.config import GameConfig
from ..game.environment import SecretAction, action_target
from .base_agent import BaseAgent


# ============================================================================
# Random Agent
# ============================================================================

class RandomAgent(BaseAgent):
    """
    Agent that selects valid actions uniformly at random.

    Without an action mask from the environment, valid actions are read
    from the observation: hidden cells in the classic mode, and commands
    that do not walk off the grid in the secret mode.
    """

    def __init__(
        self,
        rows: int = 20,
        cols: int = 30,
        num_actions: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the random agent.

        Args:
            rows: Number of rows in the grid.
            cols: Number of columns in the grid.
            num_actions: Size of the action space (default: one per cell).
            seed: Random seed for reproducibility.
        """
        super().__init__(rows, cols, num_actions)
        self.rng = np.random.default_rng(seed)

    @classmethod
    def for_config(
        cls, config: GameConfig, seed: Optional[int] = None
    ) -> "RandomAgent":
        """Build an agent sized for the action space of a round config."""
        num_actions = len(SecretAction) if config.is_secret else None
        return cls(config.grid.rows, config.grid.cols, num_actions, seed)

    @property
    def plays_secret_mode(self) -> bool:
        return self.num_actions == len(SecretAction)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select a random valid action.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Random action index from valid actions, or 0 (a rejected
            action) if there is none.
        """
        if valid_actions is None:
            if self.plays_secret_mode:
                valid_actions = self._secret_actions_from_obs(observation)
            else:
                valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.where(valid_actions)[0]
        if len(valid_indices) == 0:
            return 0
        return int(self.rng.choice(valid_indices))

    def _secret_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """Mask out moves that would leave the grid from the player's cell."""
        mask = np.ones(self.num_actions, dtype=bool)
        found = np.argwhere(observation == PLAYER_CODE)
        if len(found) == 0:
            return mask
        row, col = (int(value) for value in found[0])
        for action in SecretAction:
            target = action_target(action, row, col)
            if target is not None:
                target_row, target_col = target
                mask[action] = (
                    0 <= target_row < self.rows and 0 <= target_col < self.cols
                )
        return mask
