"""Shared fixtures for parser tests.

Leaderboards are built in memory in the standard sheet layout:

    row 0       title
    row 1       Pos | Player | Event 1 .. Event 22
    rows 2-26   points table
    row 27      totals
    row 31      spending header
    rows 32-56  spending table
    row 57      totals
"""

from html import escape
from io import BytesIO

import pytest
from openpyxl import Workbook

NUM_EVENTS = 22
NUM_COLUMNS = NUM_EVENTS + 2


def _table_row(position, name, cells):
    padded = list(cells) + ["-"] * (NUM_EVENTS - len(cells))
    return [position, name] + padded


def leaderboard_rows(points: dict, spending: dict) -> list[list]:
    """Lay out points and spending tables as sheet rows (None = empty cell)."""
    rows = [[None] * NUM_COLUMNS for _ in range(58)]
    header = ["Pos", "Player"] + [f"Event {i}" for i in range(1, NUM_EVENTS + 1)]
    rows[0][0] = "Season Leaderboard"
    rows[1] = list(header)
    for offset, (name, cells) in enumerate(points.items()):
        rows[2 + offset] = _table_row(offset + 1, name, cells)
    rows[27][1] = "Total"
    rows[31] = list(header)
    rows[31][0] = "Spending"
    for offset, (name, cells) in enumerate(spending.items()):
        rows[32 + offset] = _table_row(offset + 1, name, cells)
    rows[57][1] = "Totals"
    return rows


def workbook_bytes(rows: list[list]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Leaderboard"
    for i, row in enumerate(rows, start=1):
        for j, value in enumerate(row, start=1):
            if value is not None:
                sheet.cell(row=i, column=j, value=value)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def published_html(rows: list[list]) -> bytes:
    """Render rows the way a published spreadsheet page does.

    Column B is frozen, so every row carries an extra freezebar cell after
    it, and a horizontal freeze bar row follows the header rows.
    """
    letters = [chr(ord("A") + i) for i in range(NUM_COLUMNS)]
    out = [
        "<html><head><title>Leaderboard</title></head><body>",
        '<div id="sheets-viewport"><div class="ritz grid-container">',
        '<table class="waffle" cellspacing="0" cellpadding="0">',
        '<thead><tr><th class="row-header freezebar-origin-ltr"></th>',
    ]
    out += [f'<th class="column-headers-background">{c}</th>' for c in letters]
    out.append("</tr></thead><tbody>")

    for index, row in enumerate(rows):
        cells = ["" if v is None else escape(str(v)) for v in row]
        tds = [f'<td class="s0">{v}</td>' for v in cells]
        tds.insert(2, '<td class="freezebar-cell"></td>')
        out.append(
            f'<tr style="height: 20px"><th id="0R{index}" class="row-headers-background">'
            f'<div class="row-header-wrapper">{index + 1}</div></th>{"".join(tds)}</tr>'
        )
        if index == 1:
            out.append(
                '<tr><th class="freezebar-cell freezebar-horizontal-handle"></th>'
                '<td class="freezebar-cell freezebar-horizontal"></td></tr>'
            )

    out.append("</tbody></table></div></div></body></html>")
    return "".join(out).encode("utf-8")


# --- Sample leaderboard ---

SAMPLE_POINTS = {
    "Alice": [10, 15, "D$Q", 20],
    "Bob": [15, 10, 20, "-"],
    "Cara": ["12.5", 0, 5, 7.25],
}

SAMPLE_SPENDING = {
    "alice": ["$100", "$1,250.50", "-", 0],
    "Bob": [200, "$50", None, "$10.25"],
    "CARA": ["$0", "-", "$75", "$25"],
}


@pytest.fixture
def sample_rows():
    return leaderboard_rows(SAMPLE_POINTS, SAMPLE_SPENDING)


@pytest.fixture
def sample_xlsx(sample_rows):
    return workbook_bytes(sample_rows)


@pytest.fixture
def sample_html(sample_rows):
    return published_html(sample_rows)


@pytest.fixture
def missing_spending_rows():
    """Dan has points but no spending row."""
    points = dict(SAMPLE_POINTS, Dan=[1, 2, 3])
    return leaderboard_rows(points, SAMPLE_SPENDING)


@pytest.fixture
def empty_rows():
    return leaderboard_rows({}, {})
