"""Per-player statistics from resolved score records."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from wordle_stats.models import ScoreRecord, UserRef, UserStats


def group_by_user(records: Iterable[ScoreRecord]) -> dict[UserRef, list[ScoreRecord]]:
    """Group records by their (resolved) user, in first-seen order."""
    groups: dict[UserRef, list[ScoreRecord]] = {}
    for record in records:
        groups.setdefault(record.user, []).append(record)
    return groups


def compute_user_stats(user: UserRef, records: Sequence[ScoreRecord]) -> UserStats:
    """Compute games, wins, winrate and average score for one user.

    Any numeric score counts as a win (it is the number of guesses); X/6 is a
    loss. avg_score is None when the user has no numeric score at all.
    """
    games = len(records)
    scores = [r.score for r in records if r.score is not None]
    wins = len(scores)
    winrate = wins / games if games > 0 else 0.0
    avg_score = sum(scores) / wins if wins > 0 else None
    return UserStats(user=user, games=games, wins=wins, winrate=winrate, avg_score=avg_score)


def aggregate(records: Iterable[ScoreRecord]) -> list[UserStats]:
    """One UserStats per distinct user. Order follows first appearance, not rank."""
    return [compute_user_stats(user, group) for user, group in group_by_user(records).items()]


def rank(stats: Iterable[UserStats]) -> list[UserStats]:
    """Sort by winrate descending. Ties keep their grouping order (stable sort)."""
    return sorted(stats, key=lambda s: -s.winrate)
