"""
Configuration for Minehunt rounds.

Grid dimensions, difficulty tiers and the adversary-mode rules, each as
a dataclass validated on construction.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


# ============================================================================
# Difficulty Tiers
# ============================================================================

class Difficulty(Enum):
    """Difficulty tiers. Values are the names used in score records."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    SECRET = "secret"

    @property
    def is_secret(self) -> bool:
        """Check if this tier plays the adversary mode."""
        return self is Difficulty.SECRET

    @classmethod
    def parse(cls, name: str) -> Optional["Difficulty"]:
        """
        Look up a tier by its exact, case-sensitive name.

        Returns:
            The matching tier, or None if the name is unknown.
        """
        for difficulty in cls:
            if difficulty.value == name:
                return difficulty
        return None


# ============================================================================
# Grid Configuration
# ============================================================================

@dataclass
class GridConfig:
    """
    Configuration for a Minehunt grid.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Total mines to deploy.
    """

    rows: int = 20
    cols: int = 30
    num_mines: int = 60

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Grid dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        if self.num_mines > self.total_cells:
            raise ValueError(f"Too many mines (max {self.total_cells})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols


# ============================================================================
# Adversary Mode Rules
# ============================================================================

@dataclass
class AdversaryRules:
    """
    Behaviour constants of a single monster.

    Attributes:
        fire_distance: Minimum Manhattan distance to the player before
            a monster may shoot instead of walking.
        fire_odds: A monster in range fires with probability
            1 / fire_odds per turn.
        bullet_speed: Cells a projectile travels per turn.
        align_window: A projectile this close to the player on its
            travel axis may turn toward them.
        retarget_offset: A projectile only turns when the player is
            further than this on the perpendicular axis.
    """

    fire_distance: int = 16
    fire_odds: int = 6
    bullet_speed: int = 3
    align_window: int = 1
    retarget_offset: int = 3

    def __post_init__(self) -> None:
        if self.fire_odds < 1:
            raise ValueError("fire_odds must be at least 1")
        if self.bullet_speed < 1:
            raise ValueError("bullet_speed must be at least 1")
        if self.fire_distance < 0 or self.align_window < 0:
            raise ValueError("Distances cannot be negative")
        if self.retarget_offset < 0:
            raise ValueError("Distances cannot be negative")


@dataclass
class SecretRules:
    """
    Rules of the adversary ("secret") mode.

    Attributes:
        boost_cap: Maximum boost meter.
        boost_step_cost: Boost spent by a double-step move.
        teleport_cost: Boost spent by a teleport.
        spawn_interval: A new monster appears every this many turns.
        regen_interval: One boost point regenerates every this many turns.
        roster_cap: Maximum number of monsters ever spawned. Destroying
            this many wins the round.
        player_start: Spawn cell of the player, or None for the cell
            just above and right of the grid center.
        adversary: Per-monster behaviour.
    """

    boost_cap: int = 8
    boost_step_cost: int = 2
    teleport_cost: int = 4
    spawn_interval: int = 8
    regen_interval: int = 2
    roster_cap: int = 101
    player_start: Optional[Tuple[int, int]] = None
    adversary: AdversaryRules = field(default_factory=AdversaryRules)

    def __post_init__(self) -> None:
        if self.spawn_interval < 1 or self.regen_interval < 1:
            raise ValueError("Intervals must be positive")
        if self.roster_cap < 1:
            raise ValueError("roster_cap must be positive")
        if min(self.boost_cap, self.boost_step_cost, self.teleport_cost) < 0:
            raise ValueError("Boost values cannot be negative")

    def start_position(self, grid: GridConfig) -> Tuple[int, int]:
        """Resolve the player's spawn cell for a grid."""
        if self.player_start is not None:
            return self.player_start
        return max(grid.rows // 2 - 1, 0), grid.cols // 2


# ============================================================================
# Game Configuration
# ============================================================================

@dataclass
class GameConfig:
    """
    Everything needed to set up one round.

    Attributes:
        difficulty: Tier used for the leaderboard and mode selection.
        grid: Grid dimensions and mine count.
        rules: Adversary-mode rules (ignored outside the secret tier).
    """

    difficulty: Difficulty = Difficulty.EASY
    grid: GridConfig = field(default_factory=GridConfig)
    rules: SecretRules = field(default_factory=SecretRules)

    def __post_init__(self) -> None:
        if self.difficulty.is_secret:
            row, col = self.rules.start_position(self.grid)
            if not (0 <= row < self.grid.rows and 0 <= col < self.grid.cols):
                raise ValueError("Player start must lie on the grid")
            if self.grid.num_mines > self.grid.total_cells - 1:
                raise ValueError(
                    f"Too many mines (max {self.grid.total_cells - 1})"
                )

    @property
    def is_secret(self) -> bool:
        return self.difficulty.is_secret


# Preset difficulty levels on the reference 20x30 grid
MINES_PER_DIFFICULTY = {
    Difficulty.EASY: 60,
    Difficulty.MEDIUM: 90,
    Difficulty.HARD: 120,
    Difficulty.SECRET: 101,
}


def preset(difficulty: Difficulty) -> GameConfig:
    """Build the reference configuration for a difficulty tier."""
    grid = GridConfig(20, 30, MINES_PER_DIFFICULTY[difficulty])
    return GameConfig(difficulty=difficulty, grid=grid)
