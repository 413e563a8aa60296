"""Leaderboard parsers for the supported spreadsheet sources."""

from .base import LeaderboardParser

# Parser registry - import parsers here to register them
_parsers: list[type[LeaderboardParser]] = []


def register_parser(parser_class: type[LeaderboardParser]) -> type[LeaderboardParser]:
    """Decorator to register a parser class."""
    _parsers.append(parser_class)
    return parser_class


def get_all_parsers() -> list[type[LeaderboardParser]]:
    """Return all registered parser classes."""
    return _parsers.copy()


def detect_parser(source: str) -> LeaderboardParser | None:
    """Auto-detect and return an appropriate parser instance for the given source."""
    for parser_class in get_all_parsers():
        parser = parser_class()
        if parser.can_parse(source):
            return parser
    return None


def detect_parser_by_content(content: bytes, filename: str) -> LeaderboardParser | None:
    """Return a parser instance that recognises the given file content."""
    if not content:
        return None
    for parser_class in get_all_parsers():
        parser = parser_class()
        if parser.can_parse_content(content, filename):
            return parser
    return None


def get_supported_formats() -> str:
    """Return a user-friendly description of supported sources."""
    lines = ["We currently support leaderboards from:"]
    for parser_class in get_all_parsers():
        example = getattr(parser_class, "EXAMPLE_SOURCE", None)
        if example:
            lines.append(f"  - {example}")
    return "\n".join(lines)
