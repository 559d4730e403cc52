"""
Cell module for Minehunt.

Represents individual cells on the game grid with their state
(hidden/revealed/flagged), content (mine/number), and the occupancy
markers used by the adversary mode.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# Observation codes for the occupancy overlay
PLAYER_CODE = 10
MONSTER_CODE = 11
BULLET_CODE = 12


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minehunt grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
        has_player: Whether the player stands on this cell.
        monster_count: Number of monsters on this cell. Monsters may
            stack while a turn is being resolved.
        has_bullet: Whether a projectile currently sits on this cell.
        bullet_trailing: Whether a projectile passed over this cell on
            its last jump.
        mine_consumed: Whether this mine was already used to destroy
            a monster.
        killed_by_mine: Whether this is the mine that ended the game.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN
    has_player: bool = False
    monster_count: int = 0
    has_bullet: bool = False
    bullet_trailing: bool = False
    mine_consumed: bool = False
    killed_by_mine: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell, clearing any flag on it.

        Returns:
            True if cell was revealed, False if it already was.
        """
        if self.state == CellState.REVEALED:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    def flag(self) -> None:
        """Plant a flag unless the cell is already revealed."""
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_clear(self) -> bool:
        """Check if no neighboring cell holds a mine."""
        return self.adjacent_mines == 0

    @property
    def has_monster(self) -> bool:
        return self.monster_count > 0

    def to_observation(self, overlay: bool = False) -> int:
        """
        Convert cell to observation value for ML agent.

        Args:
            overlay: Whether to show player, monsters and bullets
                on top of the cell contents.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
            10-12: Player, monster, bullet (overlay only)
        """
        if overlay:
            if self.has_player:
                return PLAYER_CODE
            if self.has_monster:
                return MONSTER_CODE
            if self.has_bullet:
                return BULLET_CODE
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines
