"""Countback tiebreaker: compare two competitors by the shape of their scores."""

from collections import Counter

from leaderboard.models import Competitor, format_points, round_amount


def performance_profile(competitor: Competitor) -> list[float]:
    """Return a competitor's scored events, best first.

    Events without a positive score ("did not score") are left out.
    """
    scores = (round_amount(s) for s in competitor.event_scores)
    return sorted((s for s in scores if s > 0), reverse=True)


def score_frequency(competitor: Competitor) -> dict[float, int]:
    """Map each score in a competitor's profile to how often it occurs."""
    return dict(Counter(performance_profile(competitor)))


def countback_compare(a: Competitor, b: Competitor) -> int:
    """Compare two competitors using countback.

    The performance profiles are walked from the best score down. At the
    first position where the scores differ, the higher score wins. Where
    the scores match, whoever scored that value more often wins. A shorter
    profile reads as 0 past its end.

    Returns:
        -1 if a ranks higher, 1 if b ranks higher, 0 if still tied
    """
    profile_a = performance_profile(a)
    profile_b = performance_profile(b)
    counts_a = Counter(profile_a)
    counts_b = Counter(profile_b)

    for i in range(max(len(profile_a), len(profile_b))):
        score_a = profile_a[i] if i < len(profile_a) else 0
        score_b = profile_b[i] if i < len(profile_b) else 0

        if score_a > score_b:
            return -1
        if score_b > score_a:
            return 1

        if score_a > 0:
            if counts_a[score_a] > counts_b[score_b]:
                return -1
            if counts_b[score_b] > counts_a[score_a]:
                return 1

    return 0


def describe_countback(a: Competitor, b: Competitor) -> str:
    """Explain a countback comparison in a few lines of text."""
    result = countback_compare(a, b)
    if result < 0:
        outcome = f"{a.name} wins"
    elif result > 0:
        outcome = f"{b.name} wins"
    else:
        outcome = "Still tied"

    lines = ["Countback details:"]
    for competitor in (a, b):
        profile = ", ".join(format_points(s) for s in performance_profile(competitor))
        lines.append(
            f"  {competitor.name}: [{profile}] "
            f"total={format_points(competitor.total_points)} "
            f"spending=${competitor.total_spending:.2f}"
        )
    lines.append(f"  Result: {outcome}")
    return "\n".join(lines)
