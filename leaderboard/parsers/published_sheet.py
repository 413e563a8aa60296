"""Parser for Google Sheets pages published to the web."""

import logging
import re
from bs4 import BeautifulSoup

from leaderboard.models import Competitor
from leaderboard.parsers import register_parser
from leaderboard.parsers.base import LeaderboardParser

logger = logging.getLogger(__name__)


@register_parser
class PublishedSheetParser(LeaderboardParser):
    """Parser for a leaderboard sheet published as an HTML page.

    Published pages render each worksheet as a <table class="waffle">.
    Every row starts with a <th> holding the 1-indexed sheet row number,
    followed by one <td> per column. Frozen rows/columns add extra
    "freezebar" cells, which are ignored. The first grid on the page is
    the first worksheet.

    Expected URL format:
        https://docs.google.com/spreadsheets/d/e/<id>/pubhtml
    """

    URL_PATTERN = re.compile(
        r"^https?://docs\.google\.com/spreadsheets/d/e/[\w-]+"
        r"/pubhtml(?:[/?#].*)?$"
    )

    EXAMPLE_SOURCE = "https://docs.google.com/spreadsheets/d/e/<id>/pubhtml"

    def can_parse(self, source: str) -> bool:
        """Check if this is a published Google Sheets URL."""
        return bool(self.URL_PATTERN.match(source))

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Check if this looks like a published spreadsheet page.

        Tell-tale sign: a <table> with the "waffle" grid class.
        """
        html = content.decode("utf-8", errors="replace")
        return "<table" in html and re.search(r'class="[^"]*\bwaffle\b', html) is not None

    def parse(self, source: str, content: bytes) -> list[Competitor]:
        """Parse the first published worksheet into competitors."""
        html = content.decode("utf-8", errors="replace")
        soup = BeautifulSoup(html, "lxml")

        table = soup.find("table", class_="waffle")
        if table is None:
            raise ValueError("No spreadsheet grid found in page")

        grid = self._extract_grid(table)
        logger.info("Processing published sheet (%d rows)", len(grid))
        return self._competitors_from_grid(grid)

    def _extract_grid(self, table) -> list[list[str]]:
        """Rebuild the sheet rows, placing each row by its row number."""
        rows_by_index: dict[int, list[str]] = {}

        for tr in table.find_all("tr"):
            header = tr.find("th")
            if header is None:
                continue
            row_number = header.get_text(strip=True)
            if not row_number.isdigit():
                continue  # Column-letter header or freeze bar

            cells = [
                td.get_text(strip=True)
                for td in tr.find_all("td")
                if "freezebar-cell" not in td.get("class", [])
            ]
            rows_by_index[int(row_number) - 1] = cells

        if not rows_by_index:
            return []
        return [rows_by_index.get(i, []) for i in range(max(rows_by_index) + 1)]
