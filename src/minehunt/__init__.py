"""
Minehunt - Minesweeper with an adversarial monster mode.

Subpackages:
- game: grid, reveal propagation, monsters, round controller, environment
- leaderboard: ranked score lists and the score record codec
- agents: baseline agents and evaluation
"""
__version__ = "0.1.0"
