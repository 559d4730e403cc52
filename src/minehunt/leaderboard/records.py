"""
Score record codec.

One record per line: ``difficulty score name``, separated by single
spaces. The name is the rest of the line and may contain spaces.
Lines that do not parse are skipped so one bad line never loses the
rest of a leaderboard.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..game.config import Difficulty

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreRecord:
    """A persisted leaderboard entry."""

    difficulty: Difficulty
    score: int
    name: str


def parse_record(line: str) -> Optional[ScoreRecord]:
    """
    Parse one record line.

    Args:
        line: Text of the line, with or without its line ending.

    Returns:
        The record, or None if the line is malformed.
    """
    parts = line.rstrip("\r\n").split(" ", 2)
    if len(parts) != 3:
        return None
    difficulty_name, score_text, name = parts

    difficulty = Difficulty.parse(difficulty_name)
    if difficulty is None or not name.strip():
        return None
    if not (score_text.isascii() and score_text.isdigit()):
        return None
    return ScoreRecord(difficulty, int(score_text), name)


def parse_records(lines: Iterable[str]) -> List[ScoreRecord]:
    """
    Parse every well-formed record, skipping the rest.

    Args:
        lines: Lines of a leaderboard file.

    Returns:
        Records in file order.
    """
    records = []
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        record = parse_record(line)
        if record is None:
            logger.warning("Skipping malformed score record on line %d: %r",
                           number, line.rstrip("\r\n"))
            continue
        records.append(record)
    return records


def format_record(record: ScoreRecord) -> str:
    """Format a record as one line, without a line ending."""
    return f"{record.difficulty.value} {record.score} {record.name}"


def format_records(records: Iterable[ScoreRecord]) -> str:
    """Format records as newline-terminated lines."""
    return "".join(f"{format_record(record)}\n" for record in records)
