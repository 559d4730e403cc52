"""
Reveal propagation for Minehunt.

Opens the contiguous region of mine-free cells around a revealed cell
that has no adjacent mines.
"""
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from .grid import Grid


ORTHOGONAL_STEPS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class RevealPropagator:
    """
    Flood fill over a grid.

    Traverses 4-connected cells from a seed with no adjacent mines.
    Every cell reached is revealed; cells with adjacent mines form the
    border of the region and are revealed but not expanded. Revealed
    cells stop the traversal, so repeated calls do no further work.
    """

    def __init__(self, grid: "Grid") -> None:
        self.grid = grid

    def propagate(self, row: int, col: int) -> int:
        """
        Reveal the region around a seed the caller already revealed.

        Args:
            row: Seed row.
            col: Seed column.

        Returns:
            Number of cells revealed by this call, excluding the seed.
        """
        return len(self.reveal_region(row, col))

    def reveal_region(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Same traversal as ``propagate``.

        Returns:
            Positions revealed by this call, in visiting order.
        """
        seed = self.grid.get_cell(row, col)
        if seed is None or not seed.is_clear or seed.is_mine:
            return []

        revealed = []
        stack: List[Tuple[int, int]] = self._adjacent(row, col)
        while stack:
            current_row, current_col = stack.pop()
            cell = self.grid.get_cell(current_row, current_col)
            if cell is None or cell.is_revealed:
                continue
            cell.reveal()
            revealed.append((current_row, current_col))
            if cell.is_clear and not cell.is_mine:
                stack.extend(self._adjacent(current_row, current_col))
        return revealed

    @staticmethod
    def _adjacent(row: int, col: int) -> List[Tuple[int, int]]:
        return [(row + d_row, col + d_col) for d_row, d_col in ORTHOGONAL_STEPS]
