"""Parser for Excel (.xlsx) leaderboard workbooks."""

import logging
import re
from io import BytesIO

import openpyxl

from leaderboard.models import Competitor
from leaderboard.parsers import register_parser
from leaderboard.parsers.base import LeaderboardParser

logger = logging.getLogger(__name__)

ZIP_MAGIC = b"PK\x03\x04"


@register_parser
class WorkbookParser(LeaderboardParser):
    """Parser for leaderboard workbooks saved as .xlsx.

    Only the first worksheet is read. Formula cells contribute the value
    last calculated by the spreadsheet application, so a workbook saved by
    a script without recalculation reads those cells as empty.

    Accepted sources:
        leaderboard.xlsx (any filename or URL ending in .xlsx)
        https://docs.google.com/spreadsheets/d/<id>/export?format=xlsx
    """

    EXPORT_URL_PATTERN = re.compile(
        r"^https?://docs\.google\.com/spreadsheets/d/[\w-]+"
        r"/export\?(?:.*&)?format=xlsx(?:&.*)?$"
    )

    EXAMPLE_SOURCE = "leaderboard.xlsx"

    def can_parse(self, source: str) -> bool:
        """Check if this is an .xlsx file or a Google Sheets xlsx export."""
        return (
            source.lower().endswith(".xlsx")
            or bool(self.EXPORT_URL_PATTERN.match(source))
        )

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Check if the content is a workbook openpyxl can open.

        Tell-tale sign: .xlsx files are ZIP archives.
        """
        if not content.startswith(ZIP_MAGIC):
            return False
        try:
            workbook = openpyxl.load_workbook(BytesIO(content), read_only=True)
            workbook.close()
        except Exception:
            return False
        return True

    def parse(self, source: str, content: bytes) -> list[Competitor]:
        """Parse the first worksheet of the workbook."""
        try:
            workbook = openpyxl.load_workbook(BytesIO(content), data_only=True)
        except Exception as e:
            raise ValueError(f"Could not open workbook: {e}") from e

        try:
            if not workbook.worksheets:
                raise ValueError("Workbook contains no sheets")
            sheet = workbook.worksheets[0]
            grid = [list(row) for row in sheet.iter_rows(values_only=True)]
        finally:
            workbook.close()

        logger.info("Processing sheet %r (%d rows)", sheet.title, len(grid))
        return self._competitors_from_grid(grid)
