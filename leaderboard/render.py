"""Render ranked leaderboards as console tables and Excel workbooks."""

import logging
from io import BytesIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from leaderboard.models import Competitor, Leaderboard, LeaderboardStats, format_points

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(fill_type="solid", fgColor="FF4472C4")
TIED_FILL = PatternFill(fill_type="solid", fgColor="FFFF0000")
STRIPE_FILL = PatternFill(fill_type="solid", fgColor="FFF2F2F2")
WHITE_BOLD = Font(bold=True, color="FFFFFFFF")
THIN = Side(style="thin")
THIN_BORDER = Border(top=THIN, left=THIN, bottom=THIN, right=THIN)

RULE_WIDTH = 80


def _format_spending(amount: float) -> str:
    return f"${amount:.2f}"


def _status(competitor: Competitor) -> str:
    return "TIED" if competitor.is_tied else ""


def format_leaderboard(leaderboard: Leaderboard) -> str:
    """Format the leaderboard as a fixed-width console table."""
    lines = [
        "=" * RULE_WIDTH,
        "FINAL LEADERBOARD",
        "=" * RULE_WIDTH,
        f"{'Rank':<6}{'Player':<25}{'Points':<10}{'Spending':<12}Status",
        "-" * RULE_WIDTH,
    ]
    for competitor in leaderboard.competitors:
        rank = str(competitor.rank) if competitor.rank is not None else "?"
        lines.append(
            f"{rank:<6}"
            f"{competitor.name[:24]:<25}"
            f"{format_points(competitor.total_points):<10}"
            f"{_format_spending(competitor.total_spending):<12}"
            f"{_status(competitor)}".rstrip()
        )
    lines.append("=" * RULE_WIDTH)
    return "\n".join(lines)


def format_stats(stats: LeaderboardStats) -> str:
    return "\n".join([
        "Statistics:",
        f"  Total Players: {stats.total_competitors}",
        f"  Highest Score: {format_points(stats.highest_score)}",
        f"  Lowest Score: {format_points(stats.lowest_score)}",
        f"  Average Score: {stats.average_score:.2f}",
        f"  Tied Players: {stats.tied_count}",
    ])


def _style_header(row) -> None:
    for cell in row:
        cell.fill = HEADER_FILL
        cell.font = WHITE_BOLD
        cell.alignment = Alignment(vertical="center", horizontal="center")


def _style_tied(row) -> None:
    for cell in row:
        cell.fill = TIED_FILL
        cell.font = WHITE_BOLD
def _save(workbook: Workbook, path: Path | str, description: str) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)
    logger.info("%s written to: %s", description, path)


def workbook_to_bytes(workbook: Workbook) -> bytes:
    """Serialize a workbook to .xlsx bytes without touching the filesystem."""
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def build_leaderboard_workbook(leaderboard: Leaderboard) -> Workbook:
    """Build the sorted leaderboard, highlighting tied players in red."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Sorted Leaderboard"

    for column, width in enumerate([8, 25, 12, 15, 12], start=1):
        sheet.column_dimensions[get_column_letter(column)].width = width

    sheet.append(["Rank", "Player Name", "Total Points", "Total Spending", "Status"])
    _style_header(sheet[1])

    for competitor in leaderboard.competitors:
        sheet.append([
            competitor.rank,
            competitor.name,
            competitor.total_points,
            _format_spending(competitor.total_spending),
            _status(competitor) or None,
        ])
        row = sheet[sheet.max_row]
        if competitor.is_tied:
            _style_tied(row)
        elif (competitor.rank or 0) % 2 == 0:
            # Alternate shading by rank for readability
            for cell in row:
                cell.fill = STRIPE_FILL

    for row in sheet.iter_rows():
        for cell in row:
            cell.border = THIN_BORDER

    return workbook


def build_detailed_workbook(leaderboard: Leaderboard) -> Workbook:
    """Build the leaderboard with every event score."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Detailed Leaderboard"

    num_events = leaderboard.num_events
    headers = ["Rank", "Player Name"]
    headers += [f"Event {i}" for i in range(1, num_events + 1)]
    headers += ["Total Points", "Total Spending", "Status"]
    sheet.append(headers)
    _style_header(sheet[1])

    for competitor in leaderboard.competitors:
        sheet.append([
            competitor.rank,
            competitor.name,
            *competitor.event_scores,
            competitor.total_points,
            _format_spending(competitor.total_spending),
            _status(competitor) or None,
        ])
        if competitor.is_tied:
            _style_tied(sheet[sheet.max_row])

    for column in range(1, len(headers) + 1):
        sheet.column_dimensions[get_column_letter(column)].width = 12
    sheet.column_dimensions["B"].width = 25

    return workbook


def build_summary_workbook(leaderboard: Leaderboard) -> Workbook:
    """Build a one-sheet summary of the leaderboard statistics."""
    stats = leaderboard.stats
    if stats is None:
        raise ValueError("Leaderboard has no statistics to summarize")

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Summary"

    sheet.append(["LEADERBOARD SUMMARY"])
    sheet["A1"].font = Font(bold=True)
    sheet.append([])
    sheet.append(["Total Players:", stats.total_competitors])
    sheet.append(["Highest Score:", stats.highest_score])
    sheet.append(["Lowest Score:", stats.lowest_score])
    sheet.append(["Average Score:", f"{stats.average_score:.2f}"])
    sheet.append(["Tied Players:", stats.tied_count])

    return workbook


def write_leaderboard(leaderboard: Leaderboard, path: Path | str) -> None:
    _save(build_leaderboard_workbook(leaderboard), path, "Sorted leaderboard")


def write_detailed_leaderboard(leaderboard: Leaderboard, path: Path | str) -> None:
    _save(build_detailed_workbook(leaderboard), path, "Detailed leaderboard")


def write_summary(leaderboard: Leaderboard, path: Path | str) -> None:
    _save(build_summary_workbook(leaderboard), path, "Summary")
