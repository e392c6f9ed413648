"""
Leaderboard aggregation and ranking.

Per (user, division, topic) statistics recomputed from practice attempts.

Dependencies: None (pure domain layer)
System role: Leaderboard row derivation and ordering
"""

from dataclasses import dataclass
from typing import Any, Iterable, Literal, Sequence

OrderBy = Literal["average_score", "points"]


@dataclass(frozen=True)
class AttemptStats:
    user_id: Any
    division: str
    topic: str
    attempts: int
    total_correct: int
    average_score: float
    perfect_scores: int
    questions_attempted: int


@dataclass(frozen=True)
class RankedEntry:
    rank: int
    entry: Any


def aggregate_attempts(attempts: Iterable[Any]) -> dict[tuple[Any, str, str], AttemptStats]:
    """
    Aggregate attempt rows per (user_id, division, topic).

    perfect_scores counts distinct questions answered correctly at least
    once; questions_attempted counts distinct questions tried.
    """
    groups: dict[tuple[Any, str, str], dict[str, Any]] = {}
    for attempt in attempts:
        key = (attempt.user_id, attempt.division, attempt.topic)
        group = groups.setdefault(
            key, {"attempts": 0, "correct": 0, "questions": set(), "solved": set()}
        )
        group["attempts"] += 1
        group["questions"].add(attempt.question_id)
        if attempt.is_correct:
            group["correct"] += 1
            group["solved"].add(attempt.question_id)

    return {
        key: AttemptStats(
            user_id=key[0],
            division=key[1],
            topic=key[2],
            attempts=g["attempts"],
            total_correct=g["correct"],
            average_score=round(g["correct"] / g["attempts"] * 100, 2) if g["attempts"] else 0.0,
            perfect_scores=len(g["solved"]),
            questions_attempted=len(g["questions"]),
        )
        for key, g in groups.items()
    }


def rank_entries(entries: Sequence[Any], order_by: OrderBy = "average_score") -> list[RankedEntry]:
    """
    Order leaderboard rows best-first and number them from 1.

    Ties fall back to more attempts, then username.
    """
    ordered = sorted(
        entries,
        key=lambda e: (-float(getattr(e, order_by) or 0), -(e.attempts or 0), e.username),
    )
    return [RankedEntry(rank=i, entry=e) for i, e in enumerate(ordered, start=1)]
