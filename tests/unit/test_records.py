"""
Unit tests for the score record codec.
"""
import logging

import pytest
from minehunt.game import Difficulty
from minehunt.leaderboard import (
    Leaderboard,
    ScoreRecord,
    format_record,
    format_records,
    parse_record,
    parse_records,
)


class TestParseRecord:

    def test_simple_line(self) -> None:
        assert parse_record("easy 42 Ann\n") == ScoreRecord(
            Difficulty.EASY, 42, "Ann"
        )

    def test_name_keeps_spaces(self) -> None:
        record = parse_record("secret 7 Jo  van Dyke\r\n")
        assert record.difficulty is Difficulty.SECRET
        assert record.name == "Jo  van Dyke"

    @pytest.mark.parametrize("line", [
        "",
        "easy",
        "easy 5",
        "Easy 5 Ann",
        "extreme 5 Ann",
        "easy five Ann",
        "easy -5 Ann",
        "easy 5.0 Ann",
        "easy 5  ",
        "easy  5 Ann",
    ])
    def test_malformed_lines(self, line: str) -> None:
        assert parse_record(line) is None


class TestParseRecords:

    def test_skips_bad_and_blank_lines(self, caplog) -> None:
        lines = [
            "easy 10 Ann\n",
            "\n",
            "medium x Bob\n",
            "hard 3 Cid\n",
        ]
        with caplog.at_level(logging.WARNING):
            records = parse_records(lines)
        assert [record.name for record in records] == ["Ann", "Cid"]
        assert "line 3" in caplog.text

    def test_empty_input(self) -> None:
        assert parse_records([]) == []


class TestFormat:

    def test_format_record(self) -> None:
        record = ScoreRecord(Difficulty.MEDIUM, 12, "Ann Lee")
        assert format_record(record) == "medium 12 Ann Lee"

    def test_format_records_terminates_lines(self) -> None:
        text = format_records([
            ScoreRecord(Difficulty.EASY, 1, "a"),
            ScoreRecord(Difficulty.HARD, 2, "b"),
        ])
        assert text == "easy 1 a\nhard 2 b\n"

    def test_saved_leaderboard_reloads(self) -> None:
        leaderboard = Leaderboard()
        leaderboard.insert(Difficulty.EASY, 30, "Ann Lee")
        leaderboard.insert(Difficulty.SECRET, 99, "Bob")
        text = format_records(leaderboard.records())

        reloaded = Leaderboard()
        reloaded.load(parse_records(text.splitlines(keepends=True)))
        assert reloaded.records() == leaderboard.records()

    def test_reload_keeps_order_of_tied_scores(self) -> None:
        leaderboard = Leaderboard()
        leaderboard.insert(Difficulty.EASY, 30, "Ann")
        leaderboard.insert(Difficulty.EASY, 30, "Bob")
        text = format_records(leaderboard.records())
        assert text == "easy 30 Bob\neasy 30 Ann\n"

        for _ in range(2):
            reloaded = Leaderboard()
            reloaded.load(parse_records(text.splitlines(keepends=True)))
            assert reloaded.records() == leaderboard.records()
            text = format_records(reloaded.records())
