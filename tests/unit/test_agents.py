"""
Unit tests for the random agent and the evaluator.
"""
import numpy as np
import pytest
from minehunt.agents import BaseAgent, EpisodeStats, Evaluator, RandomAgent
from minehunt.game import (
    Difficulty,
    GameConfig,
    GridConfig,
    MinehuntEnv,
    SecretAction,
    preset,
)
from minehunt.game.cell import PLAYER_CODE


class WaitingAgent(BaseAgent):
    """Always stands still in the secret mode."""

    def select_action(self, observation, valid_actions=None) -> int:
        return 0


@pytest.fixture
def mine_free_config() -> GameConfig:
    return GameConfig(Difficulty.EASY, grid=GridConfig(5, 5, 0))


class TestRandomAgent:

    def test_picks_only_valid_actions(self) -> None:
        agent = RandomAgent(5, 5, seed=0)
        mask = np.zeros(25, dtype=bool)
        mask[[3, 17]] = True
        for _ in range(20):
            assert agent.select_action(np.full((5, 5), -1), mask) in (3, 17)

    def test_reads_hidden_cells_from_observation(self) -> None:
        agent = RandomAgent(2, 2, seed=0)
        obs = np.array([[1, -1], [0, 2]])
        assert agent.select_action(obs) == 1

    def test_no_valid_action_falls_back_to_zero(self) -> None:
        agent = RandomAgent(2, 2, seed=0)
        assert agent.select_action(np.zeros((2, 2)), np.zeros(4, dtype=bool)) == 0

    def test_secret_action_space_allows_everything(self) -> None:
        agent = RandomAgent(5, 5, num_actions=10, seed=0)
        mask = agent.get_valid_actions_from_obs(np.full((5, 5), -1))
        assert mask.shape == (10,)
        assert mask.all()

    def test_sized_for_config(self) -> None:
        classic = RandomAgent.for_config(preset(Difficulty.HARD))
        secret = RandomAgent.for_config(preset(Difficulty.SECRET))
        assert classic.num_actions == 600
        assert secret.num_actions == len(SecretAction)
        assert (secret.rows, secret.cols) == (20, 30)

    def test_secret_mode_stays_on_grid(self) -> None:
        agent = RandomAgent(3, 3, num_actions=len(SecretAction), seed=0)
        obs = np.full((3, 3), -1)
        obs[0, 0] = PLAYER_CODE
        allowed = {
            SecretAction.WAIT, SecretAction.REVEAL, SecretAction.DOWN,
            SecretAction.RIGHT, SecretAction.BOOST_DOWN,
            SecretAction.BOOST_RIGHT,
        }
        for _ in range(50):
            assert SecretAction(agent.select_action(obs)) in allowed

    def test_secret_mode_without_player_allows_everything(self) -> None:
        agent = RandomAgent(3, 3, num_actions=len(SecretAction), seed=0)
        mask = agent._secret_actions_from_obs(np.full((3, 3), -1))
        assert mask.all()

    def test_position_conversion(self) -> None:
        agent = RandomAgent(4, 7)
        assert agent.position_to_action(2, 3) == 17
        assert agent.action_to_position(17) == (2, 3)

    def test_same_seed_same_choices(self) -> None:
        mask = np.ones(25, dtype=bool)
        obs = np.full((5, 5), -1)
        first = RandomAgent(5, 5, seed=9)
        second = RandomAgent(5, 5, seed=9)
        assert [first.select_action(obs, mask) for _ in range(5)] == [
            second.select_action(obs, mask) for _ in range(5)
        ]


class TestEvaluator:

    def test_mine_free_grid_always_won(self, mine_free_config) -> None:
        evaluator = Evaluator(mine_free_config, num_episodes=3, seed=0)
        results = evaluator.evaluate(RandomAgent(5, 5, seed=0))
        assert results["win_rate"] == 1.0
        assert results["avg_steps"] == 1.0
        assert results["avg_reward"] == 10.0
        assert results["avg_revealed"] == 25.0

    def test_run_episode_respects_step_limit(self) -> None:
        config = GameConfig(Difficulty.SECRET, grid=GridConfig(20, 30, 0))
        evaluator = Evaluator(config, max_steps=3)
        env = MinehuntEnv(config)
        stats = evaluator.run_episode(env, WaitingAgent(20, 30, 10), seed=0)
        assert isinstance(stats, EpisodeStats)
        assert stats.steps == 3
        assert stats.won is False
        assert stats.total_reward == pytest.approx(3.0)

    def test_compare_runs_every_agent(self, mine_free_config) -> None:
        evaluator = Evaluator(mine_free_config, num_episodes=2, seed=0)
        results = evaluator.compare({
            "a": RandomAgent(5, 5, seed=0),
            "b": RandomAgent(5, 5, seed=1),
        })
        assert set(results) == {"a", "b"}
        assert results["b"]["win_rate"] == 1.0
