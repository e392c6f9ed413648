"""
Practice streaks.

Day streaks from session completion times and answer streaks from
sequences of graded answers.

Dependencies: mathprep.core.clock
System role: Streak computation for profiles, badges and feedback
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Sequence

from mathprep.core.clock import ensure_utc, utc_date


@dataclass(frozen=True)
class StreakSummary:
    current_streak: int
    best_streak: int
    last_practice_date: datetime | None


@dataclass(frozen=True)
class AnswerStreak:
    current: int
    best: int


def _runs(days: Sequence[date]) -> list[tuple[date, int]]:
    """Consecutive-day runs over sorted unique days as (last_day, length)."""
    runs: list[tuple[date, int]] = []
    for day in days:
        if runs and day - runs[-1][0] == timedelta(days=1):
            runs[-1] = (day, runs[-1][1] + 1)
        else:
            runs.append((day, 1))
    return runs


def compute_streak(completed_at: Iterable[datetime], today: date) -> StreakSummary:
    """
    Summarize practice-day streaks.

    Several sessions on the same calendar day count once. The current
    streak stays alive while the latest practice day is today or yesterday.

    Args:
        completed_at: Completion timestamps of practice sessions
        today: Reference calendar date (UTC)

    Returns:
        StreakSummary: Current streak, best streak and last practice time
    """
    timestamps = [ensure_utc(ts) for ts in completed_at]
    if not timestamps:
        return StreakSummary(current_streak=0, best_streak=0, last_practice_date=None)

    days = sorted({utc_date(ts) for ts in timestamps})
    runs = _runs(days)
    best = max(length for _, length in runs)

    last_day, last_length = runs[-1]
    current = last_length if (today - last_day).days in (0, 1) else 0

    return StreakSummary(
        current_streak=current,
        best_streak=best,
        last_practice_date=max(timestamps),
    )


def answer_streak(results: Iterable[bool]) -> AnswerStreak:
    """Trailing and best runs of correct answers."""
    current = best = 0
    for is_correct in results:
        current = current + 1 if is_correct else 0
        best = max(best, current)
    return AnswerStreak(current=current, best=best)
