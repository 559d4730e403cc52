"""
Ranked score lists for the Minehunt leaderboard.

Scores are elapsed seconds, so lower is better. Each difficulty keeps
its own bounded list, and the entry submitted last can be highlighted.
"""
from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional

from ..game.config import Difficulty
from .records import ScoreRecord


MAX_NUM_SCORES = 10


# ============================================================================
# Ranked Score List
# ============================================================================

@dataclass
class ScoreEntry:
    """One leaderboard line."""

    score: int
    name: str
    is_most_recent: bool = False


class RankedScoreList:
    """
    Scores kept in ascending order and capped in length.

    Positions used by the query methods are 1-indexed. Querying past
    the end returns None.
    """

    def __init__(self, capacity: int = MAX_NUM_SCORES) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._entries: List[ScoreEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ScoreEntry]:
        return iter(list(self._entries))

    def insert(
        self,
        score: int,
        name: str,
        mark_as_recent: bool = False,
        ahead_of_ties: bool = True,
    ) -> Optional[int]:
        """
        Insert a score, keeping the list sorted and within capacity.

        The entry goes in front of any equal scores, or behind them when
        ``ahead_of_ties`` is False. Marking it as most recent clears the
        mark on every other entry, unless the new entry was immediately
        cut off by the capacity.

        Args:
            score: Elapsed seconds.
            name: Player name.
            mark_as_recent: Whether to highlight this entry.
            ahead_of_ties: Whether to rank above entries with the same
                score.

        Returns:
            1-indexed rank of the new entry, or None if it did not make
            the list.
        """
        keys = [entry.score for entry in self._entries]
        locate = bisect_left if ahead_of_ties else bisect_right
        index = locate(keys, score)
        entry = ScoreEntry(score, name)
        self._entries.insert(index, entry)
        del self._entries[self.capacity:]

        if index >= self.capacity:
            return None
        if mark_as_recent:
            for other in self._entries:
                other.is_most_recent = False
            entry.is_most_recent = True
        return index + 1

    @property
    def count(self) -> int:
        return len(self._entries)

    def _entry_at(self, position: int) -> Optional[ScoreEntry]:
        if 1 <= position <= len(self._entries):
            return self._entries[position - 1]
        return None

    def score_at(self, position: int) -> Optional[int]:
        """Get the score at a 1-indexed position, or None."""
        entry = self._entry_at(position)
        return entry.score if entry is not None else None

    def name_at(self, position: int) -> Optional[str]:
        """Get the name at a 1-indexed position, or None."""
        entry = self._entry_at(position)
        return entry.name if entry is not None else None

    def index_of_most_recent(self) -> Optional[int]:
        """Get the 1-indexed position of the highlighted entry, or None."""
        for position, entry in enumerate(self._entries, start=1):
            if entry.is_most_recent:
                return position
        return None

    def entries(self) -> List[ScoreEntry]:
        return list(self._entries)


# ============================================================================
# Leaderboard
# ============================================================================

class Leaderboard:
    """One ranked score list per difficulty tier."""

    def __init__(self, capacity: int = MAX_NUM_SCORES) -> None:
        self._tiers: Dict[Difficulty, RankedScoreList] = {
            difficulty: RankedScoreList(capacity) for difficulty in Difficulty
        }

    def tier(self, difficulty: Difficulty) -> RankedScoreList:
        return self._tiers[difficulty]

    def insert(
        self,
        difficulty: Difficulty,
        score: int,
        name: str,
        mark_as_recent: bool = False,
    ) -> Optional[int]:
        """Insert a score into a tier. See ``RankedScoreList.insert``."""
        return self._tiers[difficulty].insert(score, name, mark_as_recent)

    def load(self, records: Iterable[ScoreRecord]) -> None:
        """
        Insert previously saved records, without highlighting any.

        Records are in rank order, so each one goes behind equal scores
        already loaded.
        """
        for record in records:
            self._tiers[record.difficulty].insert(
                record.score, record.name, ahead_of_ties=False
            )

    def records(self) -> List[ScoreRecord]:
        """All entries as records, tier by tier in rank order."""
        return [
            ScoreRecord(difficulty, entry.score, entry.name)
            for difficulty in Difficulty
            for entry in self._tiers[difficulty]
        ]
