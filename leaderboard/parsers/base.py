"""Abstract base class for leaderboard parsers and the shared sheet reader."""

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

from leaderboard.config import (
    DISQUALIFIED_MARKERS,
    EMPTY_MARKERS,
    EVENT_COLUMNS,
    NAME_COLUMN,
    POINTS_ROWS,
    SPENDING_ROWS,
)
from leaderboard.models import Competitor, round_amount

logger = logging.getLogger(__name__)

# Leading decimal number, e.g. "12.5" in "12.5 pts"
LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class SheetLayout:
    """Where the two tables live in a leaderboard sheet.

    Rows and columns are 0-indexed; ranges are (start, end) with the end
    excluded. Both tables share the same column layout.
    """
    points_rows: tuple[int, int] = POINTS_ROWS
    spending_rows: tuple[int, int] = SPENDING_ROWS
    name_column: int = NAME_COLUMN
    event_columns: tuple[int, int] = EVENT_COLUMNS


def _leading_number(value: str) -> float:
    match = LEADING_NUMBER.match(value)
    if not match:
        return 0.0
    return round_amount(float(match.group(1)))


def parse_score(value: str) -> float:
    """Convert a score cell to a number ("-", "D$Q" and blanks are 0)."""
    value = value.strip()
    if value in EMPTY_MARKERS or any(m in value for m in DISQUALIFIED_MARKERS):
        return 0.0
    return _leading_number(value)


def parse_spending(value: str) -> float:
    """Convert a spending cell like "$1,250.00" to a number."""
    value = value.strip()
    if value in EMPTY_MARKERS:
        return 0.0
    return _leading_number(value.replace("$", "").replace(",", ""))


def _cell_text(cell: Any) -> str:
    return str(cell).strip() if cell is not None else ""


def is_player_name(name: str) -> bool:
    """Check whether a name cell holds a player rather than a header or total row."""
    lowered = name.lower()
    return bool(name) and "total" not in lowered and lowered != "player"


def _read_table(
    grid: Sequence[Sequence[Any]], rows: tuple[int, int], layout: SheetLayout
) -> list[tuple[str, list[str]]]:
    """Read (name, event cells) pairs from one table of the grid."""
    start, end = rows
    first_col, last_col = layout.event_columns
    entries = []

    for i in range(start, min(end, len(grid))):
        row = grid[i]
        if not row or len(row) <= layout.name_column:
            continue

        name = _cell_text(row[layout.name_column])
        if not is_player_name(name):
            continue

        values = []
        for j in range(first_col, min(last_col, len(row))):
            cell = row[j]
            values.append(_cell_text(cell) if cell is not None else "0")
        entries.append((name, values))

    return entries


def read_leaderboard_grid(
    grid: Sequence[Sequence[Any]], layout: SheetLayout | None = None
) -> list[Competitor]:
    """Build competitors from a sheet laid out as a points and a spending table.

    Args:
        grid: Sheet rows, each a sequence of cell values (0-indexed)
        layout: Table positions; defaults to the standard leaderboard layout

    Returns:
        Competitors in points-table order. Players missing from the
        spending table are skipped.
    """
    layout = layout or SheetLayout()
    points_table = _read_table(grid, layout.points_rows, layout)
    spending_table = _read_table(grid, layout.spending_rows, layout)
    logger.info(
        "Points table: %d rows, spending table: %d rows",
        len(points_table), len(spending_table),
    )

    spending_by_name: dict[str, list[str]] = {}
    for name, values in spending_table:
        spending_by_name.setdefault(name.lower(), values)

    competitors = []
    for name, score_cells in points_table:
        spending_cells = spending_by_name.get(name.lower())
        if spending_cells is None:
            logger.warning("No spending data found for player: %s", name)
            continue

        competitors.append(Competitor.from_events(
            name,
            event_scores=[parse_score(v) for v in score_cells],
            event_spending=[parse_spending(v) for v in spending_cells],
        ))

    logger.info("Parsed %d players", len(competitors))
    return competitors


class LeaderboardParser(ABC):
    """Abstract base class for parsing leaderboard sources.

    Each parser implementation handles one kind of source (a file format or
    a hosting service). Parsers are registered via the @register_parser
    decorator in leaderboard/parsers/__init__.py.
    """

    def __init__(self, layout: SheetLayout | None = None):
        self.layout = layout or SheetLayout()

    @abstractmethod
    def can_parse(self, source: str) -> bool:
        """Check if this parser can handle the given URL or filename."""
        pass

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Check if this parser can handle the given file content.

        Used for uploads where there is no URL to match against.
        Subclasses should override this to look for tell-tale signs of
        their format.
        """
        return False

    @abstractmethod
    def parse(self, source: str, content: bytes) -> list[Competitor]:
        """Parse the content into competitors.

        Args:
            source: Original URL or filename (for context)
            content: Raw bytes of the file/page content

        Returns:
            Competitors with scores, spending and totals populated

        Raises:
            ValueError: If the content cannot be parsed
        """
        pass

    def _competitors_from_grid(self, grid: Sequence[Sequence[Any]]) -> list[Competitor]:
        competitors = read_leaderboard_grid(grid, self.layout)
        if not competitors:
            raise ValueError("No players found in the leaderboard")
        return competitors
