"""
Adaptive question selection.

Spaced-repetition-like scoring that combines recency, difficulty distance
and a review weight, recomputed from the user's attempts on every request.
Nothing derived here is persisted.

Dependencies: mathprep.core.clock
System role: Question ordering for adaptive practice sessions
"""

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping, Protocol, Sequence
from uuid import UUID

from mathprep.core.clock import ensure_utc

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 10
DEFAULT_TARGET = 5
DIFFICULTY_SPREAD = 2

# Accuracy band treated as the productive learning zone
TARGET_ACCURACY_LOW = 0.6
TARGET_ACCURACY_HIGH = 0.8

SECONDS_PER_DAY = 60 * 60 * 24


class Candidate(Protocol):
    """Anything with an id and an integer difficulty (ORM rows, DTOs)."""

    id: Any
    difficulty: int


class AttemptRow(Protocol):
    question_id: Any
    user_answer: str
    is_correct: bool
    created_at: datetime


@dataclass
class QuestionHistory:
    """Folded attempt history for one question."""

    attempts: int = 0
    last_attempt: datetime | None = None
    last_correct: bool = False
    user_answers: list[str] = field(default_factory=list)
    is_completed: bool = False


@dataclass(frozen=True)
class DifficultyAccuracy:
    correct: int
    total: int
    accuracy: float


@dataclass(frozen=True)
class DifficultyRange:
    """Inclusive difficulty window around a target."""

    min: int
    max: int
    target: int

    def contains(self, difficulty: int) -> bool:
        return self.min <= difficulty <= self.max


@dataclass
class ScoredQuestion:
    """A candidate question with its selection weights."""

    question: Any
    spaced_repetition_score: float
    difficulty_weight: float
    review_weight: float

    @property
    def final_score(self) -> float:
        return self.spaced_repetition_score * self.difficulty_weight * self.review_weight


@dataclass
class AdaptiveSelection:
    """Result of an adaptive selection pass."""

    questions: list[Any]
    difficulty_range: DifficultyRange
    scored: list[ScoredQuestion]
    fallback: bool = False


def build_question_history(attempts: Iterable[AttemptRow]) -> dict[UUID, QuestionHistory]:
    """
    Fold attempt rows into per-question history.

    Attempts are replayed in chronological order so the last attempt wins
    for last_attempt, last_correct and is_completed.

    Args:
        attempts: Practice attempt rows (any order)

    Returns:
        dict[UUID, QuestionHistory]: History keyed by question id
    """
    history: dict[UUID, QuestionHistory] = {}
    for attempt in sorted(attempts, key=lambda a: ensure_utc(a.created_at)):
        entry = history.setdefault(attempt.question_id, QuestionHistory())
        entry.attempts += 1
        entry.last_attempt = ensure_utc(attempt.created_at)
        entry.last_correct = attempt.is_correct
        entry.user_answers.append(attempt.user_answer)
        entry.is_completed = attempt.is_correct
    return history


def accuracy_by_difficulty(
    history: Mapping[Any, QuestionHistory],
    questions: Sequence[Candidate],
) -> dict[int, DifficultyAccuracy]:
    """
    Accuracy per difficulty level over the attempted questions.

    Only questions present in both history and questions count. A question
    counts as correct when its most recent attempt was correct.
    """
    by_id = {q.id: q for q in questions}
    tallies: dict[int, list[int]] = {}
    for question_id, entry in history.items():
        question = by_id.get(question_id)
        if question is None:
            continue
        tally = tallies.setdefault(question.difficulty, [0, 0])
        tally[1] += 1
        if entry.last_correct:
            tally[0] += 1

    return {
        difficulty: DifficultyAccuracy(
            correct=correct,
            total=total,
            accuracy=correct / total if total > 0 else 0.0,
        )
        for difficulty, (correct, total) in tallies.items()
    }


def optimal_difficulty_range(accuracy: Mapping[int, DifficultyAccuracy]) -> DifficultyRange:
    """
    Pick the difficulty window to practise in.

    The target is the easiest difficulty whose accuracy sits in the learning
    zone, nudged up when the user is coasting and down when struggling.
    """
    if not accuracy:
        return DifficultyRange(min=3, max=7, target=DEFAULT_TARGET)

    target = DEFAULT_TARGET
    for difficulty in sorted(accuracy):
        if TARGET_ACCURACY_LOW <= accuracy[difficulty].accuracy <= TARGET_ACCURACY_HIGH:
            target = difficulty
            break

    stats = accuracy.get(target)
    if stats is not None:
        if stats.accuracy > TARGET_ACCURACY_HIGH:
            target = min(target + 1, MAX_DIFFICULTY)
        elif stats.accuracy < TARGET_ACCURACY_LOW:
            target = max(target - 1, MIN_DIFFICULTY)

    return DifficultyRange(
        min=max(MIN_DIFFICULTY, target - DIFFICULTY_SPREAD),
        max=min(MAX_DIFFICULTY, target + DIFFICULTY_SPREAD),
        target=target,
    )


def spaced_repetition_score(entry: QuestionHistory | None, now: datetime) -> float:
    """
    Review priority for one question.

    New questions score 1.0. Correctly answered questions decay over a
    7-30 day interval that widens with attempts; missed questions come back
    within 1-3 days and never drop below 0.5.
    """
    if entry is None or entry.last_attempt is None:
        return 1.0

    elapsed = ensure_utc(now) - ensure_utc(entry.last_attempt)
    days = elapsed.total_seconds() / SECONDS_PER_DAY

    if entry.last_correct:
        interval = min(30.0, 7 * 1.5 ** (entry.attempts - 1))
        return max(0.1, 1 - days / interval)

    interval = max(1, 3 - entry.attempts)
    return max(0.5, 1 - days / interval)


def score_questions(
    questions: Sequence[Candidate],
    history: Mapping[Any, QuestionHistory],
    target: int,
    now: datetime,
) -> list[ScoredQuestion]:
    """Attach spaced-repetition, difficulty and review weights to each question."""
    return [
        ScoredQuestion(
            question=q,
            spaced_repetition_score=spaced_repetition_score(history.get(q.id), now),
            difficulty_weight=1 - abs(q.difficulty - target) / MAX_DIFFICULTY,
            review_weight=0.8 if q.id in history else 1.0,
        )
        for q in questions
    ]


def shuffle_in_place(items: list, rng: random.Random) -> list:
    """Fisher-Yates shuffle driven by the given random source."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def select_adaptive_questions(
    questions: Sequence[Candidate],
    history: Mapping[Any, QuestionHistory],
    now: datetime,
    target_count: int = 10,
    rng: random.Random | None = None,
) -> AdaptiveSelection:
    """
    Select and order questions for an adaptive session.

    Args:
        questions: Candidate questions (already scoped to division/topics)
        history: Per-question history for the same scope
        now: Reference time for recency
        target_count: Number of questions to return
        rng: Random source for the final shuffle

    Returns:
        AdaptiveSelection: Chosen questions plus the window and scores used
    """
    rng = rng or random.Random()
    window = optimal_difficulty_range(accuracy_by_difficulty(history, questions))

    in_window = [q for q in questions if window.contains(q.difficulty)]
    if not in_window:
        return AdaptiveSelection(
            questions=list(questions[:target_count]),
            difficulty_range=window,
            scored=[],
            fallback=True,
        )

    scored = score_questions(in_window, history, window.target, now)
    # sorted() is stable, so equal scores keep candidate order
    ranked = sorted(scored, key=lambda s: s.final_score, reverse=True)
    chosen = ranked[:target_count]

    selected = shuffle_in_place([s.question for s in chosen], rng)
    return AdaptiveSelection(questions=selected, difficulty_range=window, scored=ranked)
