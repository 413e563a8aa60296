"""Ranking engine: tiebreaker cascade, competition ranks and tie detection."""

from .countback import countback_compare, describe_countback, performance_profile, score_frequency
from .sorter import (
    LeaderboardSorter,
    RankingError,
    are_fully_tied,
    assign_ranks,
    compare_competitors,
    compute_stats,
    find_tie_groups,
    rank_competitors,
    validate_competitors,
)

__all__ = [
    "LeaderboardSorter",
    "RankingError",
    "are_fully_tied",
    "assign_ranks",
    "compare_competitors",
    "compute_stats",
    "countback_compare",
    "describe_countback",
    "find_tie_groups",
    "performance_profile",
    "rank_competitors",
    "score_frequency",
    "validate_competitors",
]
