"""
Minehunt game module.

Provides the core simulation: grid and cell state, reveal propagation,
monsters, and the round controller.
"""
from .cell import Cell, CellState
from .config import (
    AdversaryRules,
    Difficulty,
    GameConfig,
    GridConfig,
    SecretRules,
    preset,
)
from .grid import Grid, RevealOutcome
from .reveal import RevealPropagator
from .adversary import Adversary, AdversaryState, Bullet, Direction, manhattan
from .controller import (
    LossCause,
    RoundController,
    RoundState,
    RoundStatus,
    TurnEvents,
    new_round,
)
from .environment import MinehuntEnv, SecretAction

__all__ = [
    "Cell",
    "CellState",
    "AdversaryRules",
    "Difficulty",
    "GameConfig",
    "GridConfig",
    "SecretRules",
    "preset",
    "Grid",
    "RevealOutcome",
    "RevealPropagator",
    "Adversary",
    "AdversaryState",
    "Bullet",
    "Direction",
    "manhattan",
    "LossCause",
    "RoundController",
    "RoundState",
    "RoundStatus",
    "TurnEvents",
    "new_round",
    "MinehuntEnv",
    "SecretAction",
]
