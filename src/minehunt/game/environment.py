"""
Gymnasium environment wrapper for Minehunt.

Provides a standard RL interface for training agents on either the
classic difficulties or the secret (monster) mode.
"""
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .adversary import Direction
from .config import GameConfig
from .controller import RoundController, TurnEvents, new_round


# ============================================================================
# Constants
# ============================================================================

class SecretAction(IntEnum):
    """Discrete actions of the secret mode."""

    WAIT = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4
    BOOST_UP = 5
    BOOST_DOWN = 6
    BOOST_LEFT = 7
    BOOST_RIGHT = 8
    REVEAL = 9


_MOVES = {
    SecretAction.UP: (Direction.UP, False),
    SecretAction.DOWN: (Direction.DOWN, False),
    SecretAction.LEFT: (Direction.LEFT, False),
    SecretAction.RIGHT: (Direction.RIGHT, False),
    SecretAction.BOOST_UP: (Direction.UP, True),
    SecretAction.BOOST_DOWN: (Direction.DOWN, True),
    SecretAction.BOOST_LEFT: (Direction.LEFT, True),
    SecretAction.BOOST_RIGHT: (Direction.RIGHT, True),
}


def action_target(
    action: SecretAction, row: int, col: int
) -> Optional[Tuple[int, int]]:
    """Cell a move leads to from (row, col), or None for WAIT and REVEAL."""
    if action not in _MOVES:
        return None
    direction, boosted = _MOVES[action]
    steps = 2 if boosted else 1
    return row + direction.d_row * steps, col + direction.d_col * steps


WIN_REWARD = 10.0
LOSS_REWARD = -10.0
DEFEAT_REWARD = 10.0
STEP_REWARD = 1.0
INVALID_REWARD = -0.1


# ============================================================================
# Minehunt Environment
# ============================================================================

class MinehuntEnv(gym.Env):
    """
    Gymnasium environment for Minehunt.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine
        - 10/11/12 = player/monster/bullet (secret mode only)

    Actions:
        Classic mode: discrete action space of size rows * cols.
        Action i reveals cell (i // cols, i % cols).
        Secret mode: one of ``SecretAction``.

    Rewards:
        - +1 for revealing a safe cell or surviving a turn
        - +10 for winning the round or destroying a monster
        - -10 for losing the round
        - -0.1 for a rejected action
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minehunt environment.

        Args:
            config: Round configuration (default: easy 20x30 grid).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or GameConfig()
        self.render_mode = render_mode
        rows, cols = self.config.grid.rows, self.config.grid.cols

        self.observation_space = spaces.Box(
            low=-2,
            high=12,
            shape=(rows, cols),
            dtype=np.int8,
        )

        if self.config.is_secret:
            self.action_space = spaces.Discrete(len(SecretAction))
        else:
            self.action_space = spaces.Discrete(rows * cols)

        self.controller: RoundController = new_round(self.config)
        self._steps = 0

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
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        round_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.controller = new_round(self.config, seed=round_seed)
        self._steps = 0

        return self._get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index or ``SecretAction`` value.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        events = self._apply(int(action))
        reward = self._calculate_reward(events)

        terminated = self.controller.is_over
        truncated = False

        return (
            self._get_observation(), reward, terminated, truncated,
            self._get_info(),
        )

    def _apply(self, action: int) -> TurnEvents:
        """Translate an action into a controller command."""
        if not self.config.is_secret:
            row, col = self._action_to_position(action)
            return self.controller.reveal(row, col)

        action = SecretAction(action)
        if action is SecretAction.WAIT:
            return self.controller.advance_tick()
        if action is SecretAction.REVEAL:
            return self.controller.reveal(*self.controller.player_position)
        direction, boosted = _MOVES[action]
        return self.controller.move(direction, boosted)

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        cols = self.config.grid.cols
        return action // cols, action % cols

    def _calculate_reward(self, events: TurnEvents) -> float:
        """
        Calculate reward for the outcome of one command.

        Args:
            events: What the command did.

        Returns:
            Reward value.
        """
        if not events.accepted:
            return INVALID_REWARD
        if self.controller.is_won:
            return WIN_REWARD
        if self.controller.is_lost:
            return LOSS_REWARD
        return STEP_REWARD + DEFEAT_REWARD * len(events.defeated)

    def _get_observation(self) -> np.ndarray:
        return self.controller.grid.get_observation(
            overlay=self.config.is_secret
        )

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        grid = self.controller.grid
        return {
            "steps": self._steps,
            "revealed": grid.cells_revealed,
            "safe_remaining": grid.remaining_hidden_safe_cells(),
            "game_state": self.controller.state.name,
            "turns": self.controller.turns,
            "boost_meter": self.controller.boost_meter,
            "defeated": self.controller.adversaries_defeated,
            "valid_actions": int(self.get_action_mask().sum()),
        }

    def render(self) -> Optional[str]:
        """Render the current grid state."""
        if self.render_mode == "ansi":
            return self.controller.grid.render_ascii()
        if self.render_mode == "human":
            print(self.controller.grid.render_ascii())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.controller.is_over:
            return mask
        if not self.config.is_secret:
            cols = self.config.grid.cols
            for row, col in self.controller.grid.get_valid_actions():
                mask[row * cols + col] = True
            return mask

        grid = self.controller.grid
        row, col = self.controller.player_position
        mask[SecretAction.WAIT] = True
        mask[SecretAction.REVEAL] = not grid.get_cell(row, col).is_revealed
        can_boost = (
            self.controller.boost_meter >= self.config.rules.boost_step_cost
        )
        for action, (_, boosted) in _MOVES.items():
            mask[action] = (
                grid.is_valid_position(*action_target(action, row, col))
                and (can_boost or not boosted)
            )
        return mask
