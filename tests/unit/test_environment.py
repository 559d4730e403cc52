"""
Unit tests for MinehuntEnv.

Tests the Gymnasium interface in the classic and secret modes.
"""
import numpy as np
import pytest
from minehunt.game import (
    Difficulty,
    GameConfig,
    GridConfig,
    MinehuntEnv,
    SecretAction,
)
from minehunt.game.cell import PLAYER_CODE


@pytest.fixture
def classic_env() -> MinehuntEnv:
    """Easy mode on a small grid."""
    return MinehuntEnv(GameConfig(Difficulty.EASY, grid=GridConfig(5, 5, 4)))


@pytest.fixture
def mine_free_env() -> MinehuntEnv:
    return MinehuntEnv(GameConfig(Difficulty.EASY, grid=GridConfig(5, 5, 0)))


@pytest.fixture
def secret_env() -> MinehuntEnv:
    """Secret mode on a mine-free 5x5 grid; the player starts at (1, 2)."""
    return MinehuntEnv(GameConfig(Difficulty.SECRET, grid=GridConfig(5, 5, 0)))


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:

    def test_classic_action_space_is_one_per_cell(
        self, classic_env: MinehuntEnv
    ) -> None:
        assert classic_env.action_space.n == 25
        assert classic_env.observation_space.shape == (5, 5)

    def test_secret_action_space(self, secret_env: MinehuntEnv) -> None:
        assert secret_env.action_space.n == len(SecretAction)

    def test_reset_observation_in_space(self, classic_env: MinehuntEnv) -> None:
        obs, info = classic_env.reset(seed=0)
        assert classic_env.observation_space.contains(obs)
        assert np.all(obs == -1)
        assert info["steps"] == 0
        assert info["game_state"] == "NOT_STARTED"

    def test_reset_with_seed_is_reproducible(
        self, classic_env: MinehuntEnv
    ) -> None:
        classic_env.reset(seed=4)
        classic_env.controller.grid.reveal_all_mines()
        first = classic_env.controller.grid.get_observation()
        classic_env.reset(seed=4)
        classic_env.controller.grid.reveal_all_mines()
        assert np.array_equal(
            first, classic_env.controller.grid.get_observation()
        )


# ============================================================================
# Classic Step Tests
# ============================================================================

class TestClassicStep:

    def test_mine_free_grid_won_in_one_step(
        self, mine_free_env: MinehuntEnv
    ) -> None:
        mine_free_env.reset(seed=0)
        obs, reward, terminated, truncated, info = mine_free_env.step(0)
        assert reward == 10.0
        assert terminated is True
        assert truncated is False
        assert info["game_state"] == "WON"
        assert info["safe_remaining"] == 0
        assert np.all(obs == 0)

    def test_repeat_action_penalized(self, classic_env: MinehuntEnv) -> None:
        classic_env.reset(seed=1)
        grid = classic_env.controller.grid
        row, col = next(
            (r, c) for r, c in grid.positions()
            if not grid.get_cell(r, c).is_mine
            and grid.get_cell(r, c).adjacent_mines > 0
        )
        classic_env.step(row * 5 + col)
        _, reward, terminated, _, _ = classic_env.step(row * 5 + col)
        assert reward == -0.1
        assert terminated is False

    def test_mine_ends_episode(self, classic_env: MinehuntEnv) -> None:
        classic_env.reset(seed=2)
        grid = classic_env.controller.grid
        row, col = next(
            (r, c) for r, c in grid.positions() if grid.get_cell(r, c).is_mine
        )
        _, reward, terminated, _, info = classic_env.step(row * 5 + col)
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"

    def test_action_mask_tracks_hidden_cells(
        self, classic_env: MinehuntEnv
    ) -> None:
        classic_env.reset(seed=3)
        assert classic_env.get_action_mask().sum() == 25
        grid = classic_env.controller.grid
        row, col = next(
            (r, c) for r, c in grid.positions()
            if not grid.get_cell(r, c).is_mine
        )
        classic_env.step(row * 5 + col)
        mask = classic_env.get_action_mask()
        if classic_env.controller.is_over:
            assert not mask.any()
        else:
            assert not mask[row * 5 + col]
            assert mask.sum() == len(grid.get_valid_actions())

    def test_render_ansi(self) -> None:
        env = MinehuntEnv(
            GameConfig(grid=GridConfig(5, 5, 0)), render_mode="ansi"
        )
        env.reset(seed=0)
        assert env.render().split("\n")[0] == ". . . . ."


# ============================================================================
# Secret Step Tests
# ============================================================================

class TestSecretStep:

    def test_observation_shows_player(self, secret_env: MinehuntEnv) -> None:
        obs, _ = secret_env.reset(seed=0)
        assert obs[1, 2] == PLAYER_CODE

    def test_initial_action_mask(self, secret_env: MinehuntEnv) -> None:
        secret_env.reset(seed=0)
        mask = secret_env.get_action_mask()
        assert mask[SecretAction.WAIT]
        assert mask[SecretAction.REVEAL]
        assert mask[SecretAction.UP]
        assert mask[SecretAction.LEFT]
        assert not mask[SecretAction.BOOST_UP]
        assert not mask[SecretAction.BOOST_DOWN]

    def test_wait_survives_one_turn(self, secret_env: MinehuntEnv) -> None:
        secret_env.reset(seed=0)
        obs, reward, terminated, _, info = secret_env.step(SecretAction.WAIT)
        assert reward == 1.0
        assert terminated is False
        assert info["turns"] == 1
        assert (obs == 11).sum() == 1

    def test_move_changes_player_cell(self, secret_env: MinehuntEnv) -> None:
        secret_env.reset(seed=0)
        obs, *_ = secret_env.step(SecretAction.UP)
        assert obs[0, 2] == PLAYER_CODE
        assert secret_env.controller.player_position == (0, 2)

    def test_blocked_move_penalized(self, secret_env: MinehuntEnv) -> None:
        secret_env.reset(seed=0)
        secret_env.step(SecretAction.UP)
        _, reward, *_ = secret_env.step(SecretAction.UP)
        assert reward == -0.1

    def test_reveal_on_mine_free_grid_wins(
        self, secret_env: MinehuntEnv
    ) -> None:
        secret_env.reset(seed=0)
        _, reward, terminated, _, _ = secret_env.step(SecretAction.REVEAL)
        assert reward == 10.0
        assert terminated is True
        assert not secret_env.get_action_mask().any()
