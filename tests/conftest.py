"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minehunt.game import (
    Cell,
    Difficulty,
    GameConfig,
    Grid,
    GridConfig,
    RoundController,
    SecretRules,
)


# ============================================================================
# Deterministic Sources
# ============================================================================

class FixedRandom:
    """Random source whose draws are always ``min(result, stop - 1)``."""

    def __init__(self, result: int) -> None:
        self.result = result

    def randrange(self, stop: int) -> int:
        return min(self.result, stop - 1)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def firing_rng() -> FixedRandom:
    """Monsters in range always fire; ties always move along rows."""
    return FixedRandom(0)


@pytest.fixture
def calm_rng() -> FixedRandom:
    """Monsters never fire; ties always move along columns."""
    return FixedRandom(99)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def default_grid() -> Grid:
    """Create a default 20x30 grid without mines."""
    return Grid()


@pytest.fixture
def scenario_grid() -> Grid:
    """
    5x5 grid with mines at (0,4), (2,4) and (4,0).

    Adjacent counts (M = mine):
        0 0 0 1 M
        0 0 0 2 2
        0 0 0 1 M
        1 1 0 1 1
        M 1 0 0 0
    """
    grid = Grid(GridConfig(5, 5, 3))
    for row, col in [(0, 4), (2, 4), (4, 0)]:
        grid.place_mine(row, col)
    return grid


@pytest.fixture
def empty_grid() -> Grid:
    """Create a grid with no mines for cascade testing."""
    return Grid(GridConfig(5, 5, 0))


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Controller Fixtures
# ============================================================================

@pytest.fixture
def classic_round(scenario_grid: Grid, clock: FakeClock) -> RoundController:
    """Easy-mode round on the 5x5 scenario grid."""
    config = GameConfig(Difficulty.EASY, grid=scenario_grid.config)
    return RoundController(scenario_grid, config, clock=clock)


def make_secret_round(
    grid_config: GridConfig,
    rng,
    clock=None,
    mines=(),
    **rules,
) -> RoundController:
    """Secret-mode round with mines planted at fixed positions."""
    config = GameConfig(
        Difficulty.SECRET, grid=grid_config, rules=SecretRules(**rules)
    )
    grid = Grid(grid_config)
    for row, col in mines:
        grid.place_mine(row, col)
    controller = RoundController(
        grid, config, rng=rng, clock=clock or FakeClock()
    )
    controller.setup()
    return controller


@pytest.fixture
def secret_factory():
    """Factory for secret-mode rounds, see ``make_secret_round``."""
    return make_secret_round
