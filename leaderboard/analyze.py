"""Orchestrator: parse a leaderboard source and rank its competitors."""

from dataclasses import dataclass
from typing import Any

from leaderboard.models import Leaderboard
from leaderboard.parsers import detect_parser, detect_parser_by_content, get_supported_formats
from leaderboard.ranking import LeaderboardSorter, RankingError

# Import parsers to register them
from leaderboard.parsers import published_sheet  # noqa: F401
from leaderboard.parsers import workbook  # noqa: F401


@dataclass
class AnalysisResult:
    """A parsed and ranked leaderboard, along with where it came from."""
    source: str
    leaderboard: Leaderboard

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "source": self.source,
            "num_competitors": len(self.leaderboard.competitors),
            "num_events": self.leaderboard.num_events,
            **self.leaderboard.to_dict(),
        }


class AnalysisError(Exception):
    """Error while parsing or ranking a leaderboard."""
    pass


class UnknownFormatError(AnalysisError):
    """No registered parser recognises the source or its content."""
    pass


class UnrankableLeaderboardError(AnalysisError):
    """The leaderboard parsed, but its competitors break the ranking contract."""
    pass


def analyze_leaderboard(source: str, content: bytes) -> AnalysisResult:
    """Parse a leaderboard and rank it with the full tiebreaker cascade.

    Args:
        source: URL or filename (used to detect the appropriate parser)
        content: Raw bytes of the leaderboard file/page

    Returns:
        AnalysisResult with the ranked leaderboard

    Raises:
        AnalysisError: If no parser is found, parsing fails, or the parsed
            competitors cannot be ranked
    """
    # Find appropriate parser: try source matching first, then content detection
    parser = detect_parser(source)
    if parser is None:
        parser = detect_parser_by_content(content, source)
    if parser is None:
        raise UnknownFormatError(
            f"We couldn't determine the leaderboard format.\n\n"
            f"{get_supported_formats()}"
        )

    try:
        competitors = parser.parse(source, content)
    except Exception as e:
        raise AnalysisError(f"Failed to parse leaderboard: {e}") from e

    try:
        leaderboard = LeaderboardSorter().rank(competitors)
    except RankingError as e:
        raise UnrankableLeaderboardError(f"Could not rank this leaderboard: {e}") from e

    return AnalysisResult(source=source, leaderboard=leaderboard)
