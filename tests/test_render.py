"""Tests for console and workbook rendering."""

import pytest
from openpyxl import load_workbook
from tests.conftest import make_competitor

from leaderboard.ranking import rank_competitors
from leaderboard.render import (
    format_leaderboard,
    format_stats,
    write_detailed_leaderboard,
    write_leaderboard,
    write_summary,
)


@pytest.fixture
def leaderboard():
    """
              E1  E2  E3   Spending   Rank
    Winner    30  20  10   $10.50     1
    Ava       10  10  10   $0         2 (tied)
    Ben       10  10  10   $0         2 (tied)
    Last       5   0   0   $0         4
    """
    return rank_competitors([
        make_competitor("Ben", [10, 10, 10]),
        make_competitor("Winner", [30, 20, 10], [10.5, 0, 0]),
        make_competitor("Last", [5, 0, 0]),
        make_competitor("Ava", [10, 10, 10]),
    ])


class TestFormatLeaderboard:
    def test_rows(self, leaderboard):
        lines = format_leaderboard(leaderboard).splitlines()
        assert lines[1] == "FINAL LEADERBOARD"
        assert lines[3].startswith("Rank  Player")
        assert lines[5] == "1     Winner                   60        $10.50"
        assert lines[6] == "2     Ava                      30        $0.00       TIED"
        assert lines[-1] == "=" * 80

    def test_truncates_long_names(self):
        board = rank_competitors([make_competitor("X" * 40, [1])])
        row = format_leaderboard(board).splitlines()[5]
        assert "X" * 24 + " " in row
        assert "X" * 25 not in row


class TestFormatStats:
    def test_stats(self, leaderboard):
        text = format_stats(leaderboard.stats)
        assert "Total Players: 4" in text
        assert "Highest Score: 60" in text
        assert "Lowest Score: 5" in text
        assert "Average Score: 31.25" in text
        assert "Tied Players: 2" in text


class TestWriteLeaderboard:
    def test_contents(self, leaderboard, tmp_path):
        path = tmp_path / "out" / "sorted.xlsx"
        write_leaderboard(leaderboard, path)

        sheet = load_workbook(path).active
        assert sheet.title == "Sorted Leaderboard"
        rows = list(sheet.iter_rows(values_only=True))
        assert rows[0] == ("Rank", "Player Name", "Total Points", "Total Spending", "Status")
        assert rows[1] == (1, "Winner", 60, "$10.50", None)
        assert rows[2] == (2, "Ava", 30, "$0.00", "TIED")
        assert rows[4] == (4, "Last", 5, "$0.00", None)

    def test_styles(self, leaderboard, tmp_path):
        path = tmp_path / "sorted.xlsx"
        write_leaderboard(leaderboard, path)

        sheet = load_workbook(path).active
        assert sheet["A1"].font.bold
        assert sheet["A1"].fill.fgColor.rgb == "FF4472C4"
        # Tied rows are red
        assert sheet["B3"].fill.fgColor.rgb == "FFFF0000"
        # Non-tied even ranks are shaded
        assert sheet["B5"].fill.fgColor.rgb == "FFF2F2F2"
        assert sheet["B2"].border.top.style == "thin"


class TestWriteDetailedLeaderboard:
    def test_contents(self, leaderboard, tmp_path):
        path = tmp_path / "detailed.xlsx"
        write_detailed_leaderboard(leaderboard, path)

        sheet = load_workbook(path).active
        assert sheet.title == "Detailed Leaderboard"
        rows = list(sheet.iter_rows(values_only=True))
        assert rows[0] == (
            "Rank", "Player Name", "Event 1", "Event 2", "Event 3",
            "Total Points", "Total Spending", "Status",
        )
        assert rows[1] == (1, "Winner", 30, 20, 10, 60, "$10.50", None)
        assert sheet["A3"].fill.fgColor.rgb == "FFFF0000"


class TestWriteSummary:
    def test_contents(self, leaderboard, tmp_path):
        path = tmp_path / "summary.xlsx"
        write_summary(leaderboard, path)

        sheet = load_workbook(path).active
        assert sheet["A1"].value == "LEADERBOARD SUMMARY"
        assert sheet["B3"].value == 4
        assert sheet["B6"].value == "31.25"
        assert sheet["B7"].value == 2


class TestLargeTotals:
    """Totals with more than six significant digits print in full."""

    def setup_method(self):
        self.leaderboard = rank_competitors([
            make_competitor("A", [12345.67], [0]),
            make_competitor("B", [12345.65], [0]),
        ])

    def test_table_row(self):
        lines = format_leaderboard(self.leaderboard).splitlines()
        assert lines[5] == "1     A                        12345.67  $0.00"
        assert lines[6] == "2     B                        12345.65  $0.00"

    def test_stats(self):
        text = format_stats(self.leaderboard.stats)
        assert "Highest Score: 12345.67" in text
        assert "Lowest Score: 12345.65" in text
        assert "Average Score: 12345.66" in text
