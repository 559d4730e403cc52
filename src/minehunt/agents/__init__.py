"""
Minehunt agents module.

Provides agents that play rounds through ``MinehuntEnv``:
- RandomAgent: Baseline random selection
- Evaluator: Plays rounds and aggregates results
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .evaluator import EpisodeStats, Evaluator

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "EpisodeStats",
    "Evaluator",
]
