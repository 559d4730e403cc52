"""
Adversary module for Minehunt.

Each monster chases the player one orthogonal step per turn and, when
far enough away, fires a projectile that travels several cells per turn
and bends toward the player once it lines up with them.
"""
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

from .config import AdversaryRules

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class Direction(Enum):
    """Orthogonal directions as (row delta, column delta)."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def d_row(self) -> int:
        return self.value[0]

    @property
    def d_col(self) -> int:
        return self.value[1]

    @property
    def is_vertical(self) -> bool:
        return self.d_col == 0


class AdversaryState(Enum):
    """States of the per-monster state machine."""

    SEEKING = auto()
    PROJECTILE_IN_FLIGHT = auto()


def manhattan(a: Position, b: Position) -> int:
    """Manhattan distance between two positions."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


# ============================================================================
# Projectile
# ============================================================================

@dataclass
class Bullet:
    """
    A projectile in flight.

    Attributes:
        position: Current cell.
        direction: Direction of travel.
        previous_position: Cell before the last jump, or None right
            after launch.
    """

    position: Position
    direction: Direction
    previous_position: Optional[Position] = None

    def path(self) -> List[Position]:
        """
        Cells on the straight segment covered by the last jump.

        Both ends are included. Right after launch only the current
        cell is returned.
        """
        if self.previous_position is None:
            return [self.position]
        start_row, start_col = self.previous_position
        end_row, end_col = self.position
        step_row = (end_row > start_row) - (end_row < start_row)
        step_col = (end_col > start_col) - (end_col < start_col)
        length = max(abs(end_row - start_row), abs(end_col - start_col))
        return [
            (start_row + step_row * i, start_col + step_col * i)
            for i in range(length + 1)
        ]

    def trail(self) -> List[Position]:
        """Cells the projectile left behind on its last jump."""
        return self.path()[:-1]

    def hits(self, target: Position) -> bool:
        """Check if the last jump crossed the target cell."""
        return target in self.path()


# ============================================================================
# Adversary
# ============================================================================

class Adversary:
    """
    One roaming monster.

    Holds at most one projectile. While it has none the monster is
    SEEKING; once fired it stays PROJECTILE_IN_FLIGHT until the
    projectile leaves the board.
    """

    def __init__(
        self,
        position: Position,
        rules: Optional[AdversaryRules] = None,
    ) -> None:
        self.position = position
        self.rules = rules or AdversaryRules()
        self.alive = True
        self.bullet: Optional[Bullet] = None

    def __repr__(self) -> str:
        return (
            f"Adversary(position={self.position}, alive={self.alive}, "
            f"bullet={self.bullet})"
        )

    @property
    def state(self) -> AdversaryState:
        if self.bullet is None:
            return AdversaryState.SEEKING
        return AdversaryState.PROJECTILE_IN_FLIGHT

    def kill(self) -> None:
        self.alive = False
        self.bullet = None

    def tick(
        self,
        player: Position,
        rng: random.Random,
        rows: int,
        cols: int,
    ) -> None:
        """
        Advance the monster by one turn.

        Args:
            player: Player's current position.
            rng: Random source for firing and tie-breaking.
            rows: Number of grid rows.
            cols: Number of grid columns.
        """
        if not self.alive:
            return
        if self.bullet is None:
            self._seek(player, rng)
        else:
            self._fly(player, rows, cols)

    # ========================================================================
    # Seeking
    # ========================================================================

    def _seek(self, player: Position, rng: random.Random) -> None:
        distance = manhattan(self.position, player)
        if (distance >= self.rules.fire_distance
                and rng.randrange(self.rules.fire_odds) == 0):
            self._fire(player)
            return

        delta_row = player[0] - self.position[0]
        delta_col = player[1] - self.position[1]
        if delta_row == 0 and delta_col == 0:
            return

        if delta_row != 0 and delta_col != 0:
            along_rows = rng.randrange(2) == 0
        else:
            along_rows = delta_row != 0

        row, col = self.position
        if along_rows:
            row += 1 if delta_row > 0 else -1
        else:
            col += 1 if delta_col > 0 else -1
        self.position = (row, col)

    def _fire(self, player: Position) -> None:
        delta_row = player[0] - self.position[0]
        delta_col = player[1] - self.position[1]
        if abs(delta_row) > abs(delta_col):
            direction = Direction.DOWN if delta_row > 0 else Direction.UP
        else:
            direction = Direction.RIGHT if delta_col > 0 else Direction.LEFT
        self.bullet = Bullet(position=self.position, direction=direction)

    # ========================================================================
    # Projectile Flight
    # ========================================================================

    def _fly(self, player: Position, rows: int, cols: int) -> None:
        bullet = self.bullet
        bullet.direction = self._retarget(bullet, player)

        row, col = bullet.position
        new_row = row + bullet.direction.d_row * self.rules.bullet_speed
        new_col = col + bullet.direction.d_col * self.rules.bullet_speed
        if not (0 <= new_row < rows and 0 <= new_col < cols):
            self.bullet = None
            return

        bullet.previous_position = bullet.position
        bullet.position = (new_row, new_col)

    def _retarget(self, bullet: Bullet, player: Position) -> Direction:
        """Turn toward the player once the travel axis lines up with them."""
        row, col = bullet.position
        if bullet.direction.is_vertical:
            aligned = abs(player[0] - row) <= self.rules.align_window
            offset = player[1] - col
            if aligned and abs(offset) > self.rules.retarget_offset:
                return Direction.LEFT if offset < 0 else Direction.RIGHT
        else:
            aligned = abs(player[1] - col) <= self.rules.align_window
            offset = player[0] - row
            if aligned and abs(offset) > self.rules.retarget_offset:
                return Direction.UP if offset < 0 else Direction.DOWN
        return bullet.direction
