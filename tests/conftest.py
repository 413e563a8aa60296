"""Shared test helpers."""

from leaderboard.models import Competitor, Leaderboard


def make_competitor(
    name: str, scores: list[float], spending: list[float] | None = None
) -> Competitor:
    """Build a Competitor from per-event scores.

    Args:
        name: Player name
        scores: Points per event
        spending: Spending per event; defaults to nothing spent

    Returns:
        Competitor with both totals derived.
    """
    if spending is None:
        spending = [0] * len(scores)
    return Competitor.from_events(name, scores, spending)


def ranking_names(leaderboard: Leaderboard) -> list[str]:
    """Competitor names in ranked order."""
    return [c.name for c in leaderboard.competitors]


def ranking_table(leaderboard: Leaderboard) -> list[tuple[str, int, bool]]:
    """(name, rank, tied) for each competitor in ranked order."""
    return [(c.name, c.rank, c.is_tied) for c in leaderboard.competitors]
