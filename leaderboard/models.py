"""Core data models for competitors and ranked leaderboards."""

from dataclasses import dataclass, field
from typing import Any, Self

from leaderboard.config import PRECISION


def round_amount(value: float) -> float:
    """Round a score or spending amount to the leaderboard precision."""
    return round(float(value), PRECISION)


def format_points(value: float) -> str:
    """Format points at full precision: "45", "12.5", "12345.67"."""
    value = round_amount(value)
    return str(int(value)) if value.is_integer() else str(value)


@dataclass
class Competitor:
    """A competitor's results across every event of the competition.

    Attributes:
        name: Player name, unique (case-insensitively) within a leaderboard
        event_scores: Points per event; 0 means the player did not score
        event_spending: Amount spent per event, same length as event_scores
        total_points: Sum of event_scores
        total_spending: Sum of event_spending
        rank: 1-indexed rank, None until the leaderboard has been ranked
        is_tied: Whether the player is still tied after every tiebreaker

    Example:
        >>> alice = Competitor.from_events(
        ...     "Alice",
        ...     event_scores=[10, 0, 25.5],
        ...     event_spending=[100, 0, 250],
        ... )
        >>> alice.total_points
        35.5
    """
    name: str
    event_scores: list[float]
    event_spending: list[float]
    total_points: float
    total_spending: float
    rank: int | None = None
    is_tied: bool = False

    @classmethod
    def from_events(
        cls, name: str, event_scores: list[float], event_spending: list[float]
    ) -> Self:
        """Build a competitor from per-event values, deriving both totals.

        Every value is rounded to PRECISION decimals before summing so that
        equal totals compare exactly equal.
        """
        scores = [round_amount(s) for s in event_scores]
        spending = [round_amount(s) for s in event_spending]
        return cls(
            name=name,
            event_scores=scores,
            event_spending=spending,
            total_points=round_amount(sum(scores)),
            total_spending=round_amount(sum(spending)),
        )

    @property
    def num_events(self) -> int:
        return len(self.event_scores)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "rank": self.rank,
            "tied": self.is_tied,
            "total_points": self.total_points,
            "total_spending": self.total_spending,
            "event_scores": list(self.event_scores),
            "event_spending": list(self.event_spending),
        }


@dataclass
class TieGroup:
    """Competitors that no tiebreaker could separate.

    Attributes:
        competitors: Members of the group, in alphabetical order
        total_points: Shared total points
        total_spending: Shared total spending
    """
    competitors: list[Competitor]
    total_points: float
    total_spending: float

    @property
    def names(self) -> list[str]:
        return [c.name for c in self.competitors]

    def to_dict(self) -> dict[str, Any]:
        return {
            "names": self.names,
            "total_points": self.total_points,
            "total_spending": self.total_spending,
        }


@dataclass
class LeaderboardStats:
    """Summary statistics over a ranked leaderboard."""
    total_competitors: int
    highest_score: float
    lowest_score: float
    average_score: float
    tied_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_competitors": self.total_competitors,
            "highest_score": self.highest_score,
            "lowest_score": self.lowest_score,
            "average_score": self.average_score,
            "tied_count": self.tied_count,
        }


@dataclass
class Leaderboard:
    """Result of ranking a set of competitors.

    Attributes:
        competitors: Ranked copies of the input competitors, 1st to last
        tie_groups: Groups of competitors still tied after all tiebreakers
        stats: Summary statistics for the ranked competitors
    """
    competitors: list[Competitor]
    tie_groups: list[TieGroup] = field(default_factory=list)
    stats: LeaderboardStats | None = None

    @property
    def num_events(self) -> int:
        return self.competitors[0].num_events if self.competitors else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "competitors": [c.to_dict() for c in self.competitors],
            "tie_groups": [g.to_dict() for g in self.tie_groups],
            "stats": self.stats.to_dict() if self.stats else None,
        }
