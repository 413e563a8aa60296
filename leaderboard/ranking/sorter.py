"""Leaderboard ranking engine.

Competitors are ordered by four levels, each consulted only when every
level above it is equal:

1. Total points (higher is better)
2. Total spending (lower is better)
3. Countback over the per-event scores
4. Name, case-insensitive (presentation order only, never breaks a tie)

Ranks follow competition ranking (1, 2, 2, 4). Competitors that the first
three levels cannot separate form a tie group and are flagged as tied.
"""

import logging
import math
from dataclasses import replace
from functools import cmp_to_key
from typing import Sequence

from leaderboard.models import Competitor, Leaderboard, LeaderboardStats, TieGroup, round_amount
from leaderboard.ranking.countback import countback_compare, describe_countback

logger = logging.getLogger(__name__)


class RankingError(ValueError):
    """Raised when a set of competitors violates the ranking contract.

    Ranking is all-or-nothing: a batch that fails validation produces no
    partial leaderboard.
    """
    pass


def _name_key(name: str) -> tuple[str, str]:
    return (name.casefold(), name)


def _totals(competitor: Competitor) -> tuple[float, float]:
    return round_amount(competitor.total_points), round_amount(competitor.total_spending)


def compare_competitors(a: Competitor, b: Competitor) -> int:
    """Order two competitors: negative if a ranks above b, positive if below."""
    points_a, spending_a = _totals(a)
    points_b, spending_b = _totals(b)

    if points_a != points_b:
        return -1 if points_a > points_b else 1

    if spending_a != spending_b:
        return -1 if spending_a < spending_b else 1

    countback = countback_compare(a, b)
    if countback != 0:
        return countback

    key_a, key_b = _name_key(a.name), _name_key(b.name)
    return (key_a > key_b) - (key_a < key_b)


def are_fully_tied(a: Competitor, b: Competitor) -> bool:
    """Check whether no tiebreaker separates two competitors.

    Name is deliberately not considered: it orders tied competitors but
    does not resolve the tie.
    """
    return _totals(a) == _totals(b) and countback_compare(a, b) == 0


def _is_finite_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def validate_competitors(competitors: Sequence[Competitor]) -> None:
    """Reject a batch that cannot be ranked reliably.

    Raises:
        RankingError: If the batch is empty, a name or event list is missing,
            event counts disagree, a numeric field is missing or not finite,
            or two names collide
    """
    if not competitors:
        raise RankingError("No competitors to rank")

    num_events = None
    seen: dict[str, str] = {}

    for competitor in competitors:
        name = competitor.name
        if not isinstance(name, str):
            raise RankingError(f"Competitor name must be a string, got {name!r}")
        for field_name in ("event_scores", "event_spending"):
            if not isinstance(getattr(competitor, field_name), (list, tuple)):
                raise RankingError(f"{name}: {field_name} must be a list of numbers")

        if len(competitor.event_scores) != len(competitor.event_spending):
            raise RankingError(
                f"{name}: {len(competitor.event_scores)} scores but "
                f"{len(competitor.event_spending)} spending entries"
            )
        if num_events is None:
            num_events = len(competitor.event_scores)
        elif len(competitor.event_scores) != num_events:
            raise RankingError(
                f"{name}: has {len(competitor.event_scores)} events, "
                f"expected {num_events}"
            )

        values = [
            competitor.total_points,
            competitor.total_spending,
            *competitor.event_scores,
            *competitor.event_spending,
        ]
        if not all(_is_finite_number(v) for v in values):
            raise RankingError(f"{name}: scores and spending must be finite numbers")

        key = name.casefold()
        if key in seen:
            raise RankingError(f"Duplicate competitor name: {seen[key]!r} and {name!r}")
        seen[key] = name


def assign_ranks(ordered: list[Competitor]) -> None:
    """Set competition ranks on an already sorted list.

    A competitor shares its predecessor's rank when points, spending and
    countback are all equal; otherwise its rank is its 1-indexed position.
    """
    for position, competitor in enumerate(ordered, start=1):
        if position > 1:
            previous = ordered[position - 2]
            if are_fully_tied(previous, competitor):
                competitor.rank = previous.rank
                continue
        competitor.rank = position


def find_tie_groups(ordered: list[Competitor]) -> list[TieGroup]:
    """Find all groups of competitors still tied after every tiebreaker.

    Each unprocessed competitor is compared against every later unprocessed
    competitor; matches join its group. Members of each group are sorted
    alphabetically. Only groups of two or more are returned.
    """
    tie_groups: list[TieGroup] = []
    processed: set[int] = set()

    for i, competitor in enumerate(ordered):
        if i in processed:
            continue
        processed.add(i)
        group = [competitor]

        for j in range(i + 1, len(ordered)):
            if j in processed:
                continue
            if are_fully_tied(competitor, ordered[j]):
                group.append(ordered[j])
                processed.add(j)

        if len(group) > 1:
            group.sort(key=lambda c: _name_key(c.name))
            tie_groups.append(TieGroup(
                competitors=group,
                total_points=competitor.total_points,
                total_spending=competitor.total_spending,
            ))

    return tie_groups


def compute_stats(competitors: Sequence[Competitor]) -> LeaderboardStats:
    """Summarize the total points of a ranked leaderboard."""
    if not competitors:
        raise RankingError("Cannot compute statistics without competitors")

    scores = [c.total_points for c in competitors]
    return LeaderboardStats(
        total_competitors=len(competitors),
        highest_score=max(scores),
        lowest_score=min(scores),
        average_score=sum(scores) / len(scores),
        tied_count=sum(1 for c in competitors if c.is_tied),
    )


class LeaderboardSorter:
    """Ranks competitors with the full tiebreaker cascade.

    The competitors passed in are never modified; the returned leaderboard
    holds ranked copies.
    """

    def rank(self, competitors: Sequence[Competitor]) -> Leaderboard:
        validate_competitors(competitors)
        logger.info("Ranking %d competitors", len(competitors))

        ordered = sorted(
            (self._fresh_copy(c) for c in competitors),
            key=cmp_to_key(compare_competitors),
        )
        if logger.isEnabledFor(logging.DEBUG):
            self._log_countback_decisions(ordered)

        assign_ranks(ordered)
        tie_groups = find_tie_groups(ordered)
        self._mark_tied(tie_groups)

        return Leaderboard(
            competitors=ordered,
            tie_groups=tie_groups,
            stats=compute_stats(ordered),
        )

    @staticmethod
    def _fresh_copy(competitor: Competitor) -> Competitor:
        return replace(
            competitor,
            event_scores=list(competitor.event_scores),
            event_spending=list(competitor.event_spending),
            rank=None,
            is_tied=False,
        )

    @staticmethod
    def _mark_tied(tie_groups: list[TieGroup]) -> None:
        if not tie_groups:
            logger.info("No unresolved ties")
            return

        logger.warning("Found %d tie group(s) after all tiebreakers", len(tie_groups))
        for group in tie_groups:
            logger.warning("Tied players: %s", ", ".join(group.names))
            for competitor in group.competitors:
                competitor.is_tied = True

    @staticmethod
    def _log_countback_decisions(ordered: list[Competitor]) -> None:
        for current, following in zip(ordered, ordered[1:]):
            if _totals(current) == _totals(following) and not are_fully_tied(current, following):
                logger.debug(describe_countback(current, following))


def rank_competitors(competitors: Sequence[Competitor]) -> Leaderboard:
    """Rank competitors and return the resulting leaderboard."""
    return LeaderboardSorter().rank(competitors)
