"""
Leaderboard module.

Provides bounded ranked score lists per difficulty and the line codec
used to save and load them.
"""
from .records import ScoreRecord, parse_record, parse_records, format_record, format_records
from .ranked import MAX_NUM_SCORES, Leaderboard, RankedScoreList, ScoreEntry

__all__ = [
    "ScoreRecord",
    "parse_record",
    "parse_records",
    "format_record",
    "format_records",
    "MAX_NUM_SCORES",
    "Leaderboard",
    "RankedScoreList",
    "ScoreEntry",
]
