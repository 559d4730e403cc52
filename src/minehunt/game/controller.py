"""
Round controller for Minehunt.

Drives one round from setup to a terminal state: validates player
commands, resolves adversary turns in the secret mode, and decides win
or loss. Illegal commands are rejected without changing anything.
"""
import logging
import random
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

from .adversary import Adversary, Direction
from .cell import Cell
from .config import GameConfig
from .grid import Grid, RevealOutcome

if TYPE_CHECKING:
    from ..leaderboard.ranked import Leaderboard

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class RoundState(Enum):
    """Possible states of a round."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


class LossCause(Enum):
    """What ended a lost round."""

    MINE = auto()
    SHOT = auto()
    MAULED = auto()


# ============================================================================
# Results
# ============================================================================

@dataclass
class TurnEvents:
    """
    Outcome of one command.

    Attributes:
        accepted: False if the command was illegal and changed nothing.
        state: Round state after the command.
        revealed: Cells revealed by the command.
        spawned: Roster slots of monsters that appeared this turn.
        defeated: Roster slots of monsters destroyed this turn.
        loss_cause: Why the round was lost, if it was lost this turn.
    """

    accepted: bool = False
    state: RoundState = RoundState.NOT_STARTED
    revealed: List[Position] = field(default_factory=list)
    spawned: List[int] = field(default_factory=list)
    defeated: List[int] = field(default_factory=list)
    loss_cause: Optional[LossCause] = None


@dataclass
class RoundStatus:
    """Aggregate snapshot of a round for display."""

    state: RoundState
    mines_deployed: int
    cells_remaining: int
    boost_meter: int
    turns: int
    elapsed_seconds: int
    adversaries_defeated: int
    flags_placed: int


# ============================================================================
# Round Controller
# ============================================================================

class RoundController:
    """
    Orchestrates a single round on a grid it is given.

    In classic difficulties the player reveals and flags any cell. In
    the secret difficulty the player walks the grid, acts on their own
    cell only, and every move advances the monsters by one turn.
    """

    def __init__(
        self,
        grid: Grid,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the controller.

        Args:
            grid: Grid to play on. Mines are deployed by ``setup``.
            config: Difficulty and rules of the round.
            rng: Shared random source; seed it for reproducible rounds.
            clock: Time source in seconds, used for the score.
        """
        self.grid = grid
        self.config = config or GameConfig(grid=grid.config)
        self.rules = self.config.rules
        self.rng = rng or random.Random()
        self._clock = clock

        self._state = RoundState.NOT_STARTED
        self._started_at: Optional[float] = None
        self._finished_at: Optional[float] = None
        self._loss_cause: Optional[LossCause] = None
        self._closed = False
        self._score_submitted = False

        self.adversaries: List[Adversary] = []
        self.turns = 0
        self.boost_meter = 0
        self.adversaries_defeated = 0
        self._teleport_pending = False
        self._player: Optional[Position] = None
        if self.is_secret:
            self._player = self.rules.start_position(grid.config)

    def setup(self) -> None:
        """Deploy the configured mines and place the player, if any."""
        self.grid.deploy_mines(
            self.grid.config.num_mines, excluded=self._player, rng=self.rng
        )
        if self._player is not None:
            self.grid.set_player(*self._player, True)

    # ========================================================================
    # Commands
    # ========================================================================

    def reveal(self, row: int, col: int) -> TurnEvents:
        """
        Reveal a cell.

        A flagged cell is unflagged instead. In the secret mode only the
        player's own cell can be revealed.
        """
        if not self._accepting() or not self._targets_own_cell(row, col):
            return self._rejected()
        cell = self.grid.get_cell(row, col)
        if cell is None or cell.is_revealed:
            return self._rejected()

        self._mark_started()
        events = TurnEvents(accepted=True)
        if cell.is_flagged:
            cell.toggle_flag()
            return self._finish(events)

        outcome = self.grid.reveal(row, col)
        events.revealed.append((row, col))
        if outcome is RevealOutcome.REVEALED_MINE:
            cell.killed_by_mine = True
            self._lose(LossCause.MINE, events)
            return self._finish(events)

        if cell.is_clear:
            events.revealed.extend(self.grid.flood_reveal(row, col))
        if self.grid.remaining_hidden_safe_cells() == 0:
            self._win()
        return self._finish(events)

    def toggle_flag(self, row: int, col: int) -> TurnEvents:
        """Flag or unflag a hidden cell. Never decides the round."""
        if not self._accepting() or not self._targets_own_cell(row, col):
            return self._rejected()
        if not self.grid.toggle_flag(row, col):
            return self._rejected()
        self._mark_started()
        return self._finish(TurnEvents(accepted=True))

    def move(self, direction: Direction, boosted: bool = False) -> TurnEvents:
        """
        Move the player one cell, or two cells when boosted.

        A boosted move spends boost points. Either kind of move uses up
        one turn, after which every monster acts.
        """
        if not self.is_secret or not self._accepting():
            return self._rejected()
        cost = self.rules.boost_step_cost if boosted else 0
        if self.boost_meter < cost:
            return self._rejected()
        steps = 2 if boosted else 1
        row = self._player[0] + direction.d_row * steps
        col = self._player[1] + direction.d_col * steps
        if not self.grid.is_valid_position(row, col):
            return self._rejected()

        self._mark_started()
        self.boost_meter -= cost
        self._relocate_player((row, col))
        return self._advance_turn()

    def advance_tick(self) -> TurnEvents:
        """Stand still for one turn while the monsters act."""
        if not self.is_secret or not self._accepting():
            return self._rejected()
        self._mark_started()
        return self._advance_turn()

    def request_teleport(self) -> TurnEvents:
        """Arm a teleport; the next ``teleport_to`` performs it."""
        if not self.is_secret or not self._accepting():
            return self._rejected()
        if self.boost_meter < self.rules.teleport_cost:
            return self._rejected()
        self._mark_started()
        self._teleport_pending = True
        return self._finish(TurnEvents(accepted=True))

    def teleport_to(self, row: int, col: int) -> TurnEvents:
        """
        Jump to any cell after ``request_teleport``. Uses no turn.

        If boost was spent since the request and the meter no longer
        covers the cost, the teleport is rejected and disarmed.
        """
        if not self._teleport_pending or not self._accepting():
            return self._rejected()
        if self.boost_meter < self.rules.teleport_cost:
            self._teleport_pending = False
            return self._rejected()
        if not self.grid.is_valid_position(row, col):
            return self._rejected()
        self._teleport_pending = False
        self.boost_meter -= self.rules.teleport_cost
        self._relocate_player((row, col))
        return self._finish(TurnEvents(accepted=True))

    def quit(self) -> TurnEvents:
        """Close the round. Always accepted, even after it ended."""
        self._closed = True
        if self._finished_at is None and self._started_at is not None:
            self._finished_at = self._clock()
        return self._finish(TurnEvents(accepted=True))

    def submit_score(self, leaderboard: "Leaderboard", name: str) -> Optional[int]:
        """
        Record a won round on the leaderboard, at most once.

        Returns:
            1-indexed rank of the new entry, or None if nothing was
            recorded or the score did not make the list.
        """
        if self._state is not RoundState.WON or self._score_submitted:
            return None
        self._score_submitted = True
        return leaderboard.insert(
            self.config.difficulty, self.score, name, mark_as_recent=True
        )

    # ========================================================================
    # Turn Resolution
    # ========================================================================

    def _advance_turn(self) -> TurnEvents:
        events = TurnEvents(accepted=True)
        self.turns += 1
        if (self.turns % self.rules.regen_interval == 0
                and self.boost_meter < self.rules.boost_cap):
            self.boost_meter += 1
        if not self.adversaries or (
            self.turns % self.rules.spawn_interval == 0
            and len(self.adversaries) < self.rules.roster_cap
        ):
            events.spawned.append(self._spawn())

        for slot, adversary in enumerate(self.adversaries):
            if adversary.alive:
                self._resolve_adversary(slot, adversary, events)

        if events.defeated:
            self.grid.get_cell(*self._player).mine_consumed = True
            if self.adversaries_defeated >= self.rules.roster_cap:
                self._win()
        logger.debug("Turn %d: %d monsters, boost %d",
                     self.turns, len(self.adversaries), self.boost_meter)
        return self._finish(events)

    def _spawn(self) -> int:
        """Spawn a monster in the corner diagonally opposite the player."""
        row, col = self._player
        top = row < self.grid.rows // 2
        left = col < self.grid.cols // 2
        corner = (
            self.grid.rows - 1 if top else 0,
            self.grid.cols - 1 if left else 0,
        )
        adversary = Adversary(corner, self.rules.adversary)
        self.adversaries.append(adversary)
        self.grid.add_monster(*corner)
        logger.debug("Spawned monster %d at %s", len(self.adversaries) - 1, corner)
        return len(self.adversaries) - 1

    def _resolve_adversary(
        self, slot: int, adversary: Adversary, events: TurnEvents
    ) -> None:
        self.grid.remove_monster(*adversary.position)
        self._clear_bullet_markers(adversary)

        adversary.tick(self._player, self.rng, self.grid.rows, self.grid.cols)

        bullet = adversary.bullet
        if bullet is not None:
            self.grid.set_trailing(bullet.trail(), True)
            self.grid.set_bullet(*bullet.position, True)
        self.grid.add_monster(*adversary.position)

        if (bullet is not None and bullet.previous_position is not None
                and bullet.hits(self._player)):
            self._lose(LossCause.SHOT, events)

        if adversary.position != self._player:
            return
        cell = self.grid.get_cell(*self._player)
        if self.grid.reveal(*self._player) is RevealOutcome.REVEALED_SAFE:
            events.revealed.append(self._player)
        if cell.is_mine and not cell.mine_consumed:
            self._clear_bullet_markers(adversary)
            adversary.kill()
            self.grid.remove_monster(*adversary.position)
            self.adversaries_defeated += 1
            events.defeated.append(slot)
        else:
            self._lose(LossCause.MAULED, events)

    def _clear_bullet_markers(self, adversary: Adversary) -> None:
        bullet = adversary.bullet
        if bullet is None:
            return
        self.grid.set_bullet(*bullet.position, False)
        self.grid.set_trailing(bullet.trail(), False)

    def _relocate_player(self, target: Position) -> None:
        self.grid.set_player(*self._player, False)
        self._player = target
        self.grid.set_player(*target, True)

    # ========================================================================
    # State Transitions
    # ========================================================================

    def _accepting(self) -> bool:
        return not self._closed and not self.is_over

    def _targets_own_cell(self, row: int, col: int) -> bool:
        return not self.is_secret or (row, col) == self._player

    def _mark_started(self) -> None:
        if self._state is RoundState.NOT_STARTED:
            self._state = RoundState.IN_PROGRESS
            self._started_at = self._clock()

    def _win(self) -> None:
        if self.is_over:
            return
        self._state = RoundState.WON
        self._finished_at = self._clock()
        self.grid.place_flags_on_all_mines()
        logger.info("Round won in %d seconds", self.elapsed_seconds)

    def _lose(self, cause: LossCause, events: TurnEvents) -> None:
        if self.is_over:
            return
        self._state = RoundState.LOST
        self._loss_cause = cause
        self._finished_at = self._clock()
        events.loss_cause = cause
        self.grid.reveal_all_mines()
        logger.info("Round lost: %s", cause.name.lower())

    def _rejected(self) -> TurnEvents:
        return TurnEvents(accepted=False, state=self._state)

    def _finish(self, events: TurnEvents) -> TurnEvents:
        events.state = self._state
        return events

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def is_secret(self) -> bool:
        return self.config.is_secret

    @property
    def is_won(self) -> bool:
        return self._state is RoundState.WON

    @property
    def is_lost(self) -> bool:
        return self._state is RoundState.LOST

    @property
    def is_over(self) -> bool:
        """Check if the round reached a terminal state."""
        return self._state in (RoundState.WON, RoundState.LOST)

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def loss_cause(self) -> Optional[LossCause]:
        return self._loss_cause

    @property
    def player_position(self) -> Optional[Position]:
        """Player's cell in the secret mode, None otherwise."""
        return self._player

    @property
    def teleport_pending(self) -> bool:
        return self._teleport_pending

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds since the first accepted command."""
        if self._started_at is None:
            return 0
        end = self._finished_at if self._finished_at is not None else self._clock()
        return int(end - self._started_at)

    @property
    def score(self) -> int:
        """Leaderboard score; lower is better."""
        return self.elapsed_seconds

    def adversary(self, slot: int) -> Optional[Adversary]:
        """Get the monster in a roster slot, or None if no such slot."""
        if 0 <= slot < len(self.adversaries):
            return self.adversaries[slot]
        return None

    def living_adversaries(self) -> List[Adversary]:
        return [adversary for adversary in self.adversaries if adversary.alive]

    def cell(self, row: int, col: int) -> Optional[Cell]:
        """Snapshot of a cell, or None if off the grid."""
        return self.grid.get_cell(row, col)

    def status(self) -> RoundStatus:
        return RoundStatus(
            state=self._state,
            mines_deployed=self.grid.mines_deployed,
            cells_remaining=self.grid.cells_remaining,
            boost_meter=self.boost_meter,
            turns=self.turns,
            elapsed_seconds=self.elapsed_seconds,
            adversaries_defeated=self.adversaries_defeated,
            flags_placed=self.grid.count_flags(),
        )


# ============================================================================
# Factory
# ============================================================================

def new_round(
    config: Optional[GameConfig] = None,
    seed: Optional[int] = None,
    clock: Callable[[], float] = time.monotonic,
) -> RoundController:
    """
    Create a grid and a controller for it, with mines deployed.

    Args:
        config: Round configuration (default: easy preset grid).
        seed: Seed for the round's random source.
        clock: Time source in seconds.

    Returns:
        A controller ready for its first command.
    """
    config = config or GameConfig()
    controller = RoundController(
        Grid(config.grid), config, random.Random(seed), clock
    )
    controller.setup()
    return controller
