"""
Grid module for Minehunt.

Implements the game grid with mine deployment, neighbor counting,
flagging, revealing and the occupancy markers of the adversary mode.
"""
import logging
import random
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellState
from .config import GridConfig
from .reveal import RevealPropagator

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class RevealOutcome(Enum):
    """Result of revealing a single cell."""

    ALREADY_REVEALED = auto()
    REVEALED_MINE = auto()
    REVEALED_SAFE = auto()
    OUT_OF_BOUNDS = auto()


# ============================================================================
# Grid Class
# ============================================================================

class Grid:
    """
    Minehunt game grid.

    Owns the row-major array of cells and the counters derived from it.
    Win and loss are decided by the round controller, not here.
    """

    def __init__(self, config: Optional[GridConfig] = None) -> None:
        self.config = config or GridConfig()
        self._propagator = RevealPropagator(self)
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._cells = [
            [Cell() for _ in range(self.config.cols)]
            for _ in range(self.config.rows)
        ]
        self.mines_deployed = 0
        self.cells_revealed = 0

    def deploy_mines(
        self,
        count: int,
        excluded: Optional[Position] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Deploy mines at distinct random positions.

        Positions are drawn uniformly and redrawn on collision. Each
        placed mine bumps the adjacent count of its neighbors.

        Args:
            count: Number of mines to add.
            excluded: (row, col) position to keep mine-free.
            rng: Random source; the module-level one when omitted.

        Raises:
            ValueError: If fewer than ``count`` mine-free cells remain.
        """
        rng = rng or random
        free = self.total_cells - self.mines_deployed
        if excluded is not None and self.is_valid_position(*excluded):
            if not self._cells[excluded[0]][excluded[1]].is_mine:
                free -= 1
        if count < 0 or count > free:
            raise ValueError(
                f"Cannot deploy {count} mines: only {free} free cells"
            )

        for _ in range(count):
            while True:
                row = rng.randrange(self.rows)
                col = rng.randrange(self.cols)
                if (row, col) != excluded and self.place_mine(row, col):
                    break
        logger.debug("Deployed %d mines on %dx%d grid",
                     count, self.rows, self.cols)

    def place_mine(self, row: int, col: int) -> bool:
        """
        Plant a mine at a specific position.

        Returns:
            True if a mine was planted, False if the position is off
            the grid or already holds one.
        """
        if not self.is_valid_position(row, col):
            return False
        cell = self._cells[row][col]
        if cell.is_mine:
            return False
        cell.is_mine = True
        self.mines_deployed += 1
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            self._cells[neighbor_row][neighbor_col].adjacent_mines += 1
        return True

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the up to 8 valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    def positions(self) -> Iterable[Position]:
        """Iterate over every position in row-major order."""
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a single cell without cascading.

        The caller is expected to run ``flood_reveal`` when a safe cell
        with no adjacent mines comes up.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            What the reveal uncovered.
        """
        if not self.is_valid_position(row, col):
            return RevealOutcome.OUT_OF_BOUNDS
        cell = self._cells[row][col]
        if not cell.reveal():
            return RevealOutcome.ALREADY_REVEALED
        if cell.is_mine:
            return RevealOutcome.REVEALED_MINE
        self.cells_revealed += 1
        return RevealOutcome.REVEALED_SAFE

    def flood_reveal(self, row: int, col: int) -> List[Position]:
        """
        Propagate a reveal outward from an already revealed cell.

        Returns:
            Positions newly revealed, not including the seed.
        """
        revealed = self._propagator.reveal_region(row, col)
        self.cells_revealed += len(revealed)
        return revealed

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if not self.is_valid_position(row, col):
            return False
        return self._cells[row][col].toggle_flag()

    def reveal_all_mines(self) -> None:
        """Show every mine, for end-of-game disclosure."""
        for cell in self._iter_cells():
            if cell.is_mine:
                cell.reveal()

    def place_flags_on_all_mines(self) -> None:
        """Flag every hidden mine, for win disclosure."""
        for cell in self._iter_cells():
            if cell.is_mine:
                cell.flag()

    def _iter_cells(self) -> Iterable[Cell]:
        for row in self._cells:
            yield from row

    # ========================================================================
    # Occupancy Markers
    # ========================================================================

    def set_player(self, row: int, col: int, present: bool) -> None:
        """Place or lift the player marker."""
        self._cells[row][col].has_player = present

    def add_monster(self, row: int, col: int) -> None:
        self._cells[row][col].monster_count += 1

    def remove_monster(self, row: int, col: int) -> None:
        cell = self._cells[row][col]
        if cell.monster_count > 0:
            cell.monster_count -= 1

    def set_bullet(self, row: int, col: int, present: bool) -> None:
        """Place or lift a projectile marker."""
        self._cells[row][col].has_bullet = present

    def set_trailing(self, cells: Iterable[Position], present: bool) -> None:
        """Mark or clear the corridor a projectile just crossed."""
        for row, col in cells:
            if self.is_valid_position(row, col):
                self._cells[row][col].bullet_trailing = present

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def total_cells(self) -> int:
        return self.config.rows * self.config.cols

    @property
    def cells_remaining(self) -> int:
        """Number of cells not yet revealed as safe."""
        return self.total_cells - self.cells_revealed

    def remaining_hidden_safe_cells(self) -> int:
        """Number of safe cells still to reveal; zero means the grid is cleared."""
        return self.total_cells - self.mines_deployed - self.cells_revealed

    def count_flags(self) -> int:
        return sum(1 for cell in self._iter_cells() if cell.is_flagged)

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._cells[row][col]

    def get_observation(self, overlay: bool = False) -> np.ndarray:
        """
        Get grid state as numpy array for ML agent.

        Args:
            overlay: Whether to encode player, monsters and bullets.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
                10/11/12 = player/monster/bullet (overlay only)
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for row, col in self.positions():
            obs[row, col] = self._cells[row][col].to_observation(overlay)
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of (row, col) positions that are hidden.
        """
        return [
            (row, col) for row, col in self.positions()
            if self._cells[row][col].state == CellState.HIDDEN
        ]

    def render_ascii(self) -> str:
        """Render the grid as text, one line per row."""
        symbols = {-1: ".", -2: "F", 9: "*", 0: " ", 10: "@", 11: "M", 12: "o"}
        obs = self.get_observation(overlay=True)
        lines = []
        for row in range(self.rows):
            lines.append(" ".join(
                symbols.get(int(val), str(int(val))) for val in obs[row]
            ))
        return "\n".join(lines)

    def reset(self) -> None:
        """Reset grid to an empty state for a new round."""
        self._init_grid()
