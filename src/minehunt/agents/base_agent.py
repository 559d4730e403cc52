"""
Base agent interface for Minehunt players.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Minehunt agents.

    All agents must implement the select_action method to choose an
    action of ``MinehuntEnv`` based on the current observation.
    """

    def __init__(
        self, rows: int, cols: int, num_actions: Optional[int] = None
    ) -> None:
        """
        Initialize the agent.

        Args:
            rows: Number of rows in the grid.
            cols: Number of columns in the grid.
            num_actions: Size of the action space (default: one
                action per cell, as in the classic mode).
        """
        self.rows = rows
        self.cols = cols
        self.num_actions = num_actions if num_actions is not None else rows * cols

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 2D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index.
        """

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return action // self.cols, action % self.cols

    def position_to_action(self, row: int, col: int) -> int:
        """Convert (row, col) position to flat action index."""
        return row * self.cols + col

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get valid actions mask from observation.

        Only meaningful in the classic mode, where hidden cells (value
        -1) are the valid actions. Otherwise every action is allowed.
        """
        if self.num_actions != self.rows * self.cols:
            return np.ones(self.num_actions, dtype=bool)
        return observation.flatten() == -1

    def reset(self) -> None:
        """Reset agent state for new episode."""
