"""
Answer grading and session points.

Dependencies: mathprep.core.exceptions
System role: Correctness checks, attempt outcomes and point totals
"""

import math
import string
from dataclasses import dataclass
from typing import Any

from mathprep.core.exceptions import ValidationError

POINTS_PER_CORRECT = 10
STREAK_POINTS = 5
STREAK_BONUS_CAP = 50
COMPLETION_POINTS = 2
COMPLETION_BONUS_CAP = 20


@dataclass(frozen=True)
class AttemptOutcome:
    """Feedback state after one answer attempt."""

    is_correct: bool
    finished: bool
    attempts_remaining: int
    reveal_answer: bool

    @property
    def feedback(self) -> str:
        if self.is_correct:
            return "correct"
        if self.finished:
            return "incorrect_revealed"
        return "incorrect_retry"


def resolve_choice(options: list[str], answer: str) -> str:
    """Map an option letter (A, B, ...) to its text; other answers pass through."""
    value = answer.strip()
    if len(value) == 1 and value.upper() in string.ascii_uppercase:
        index = string.ascii_uppercase.index(value.upper())
        if index < len(options):
            return options[index].strip()
    return value


def grade_answer(question: Any, answer: str) -> bool:
    """Whether the submitted answer matches the question's correct answer."""
    submitted = resolve_choice(list(question.options or []), answer)
    return submitted == (question.answer or "").strip()


def attempt_outcome(is_correct: bool, attempts_used: int, max_attempts: int = 2) -> AttemptOutcome:
    """
    Decide whether a question is finished after an attempt.

    Args:
        is_correct: Result of this attempt
        attempts_used: Attempts made on the question including this one
        max_attempts: Attempts allowed before the answer is revealed
    """
    finished = is_correct or attempts_used >= max_attempts
    return AttemptOutcome(
        is_correct=is_correct,
        finished=finished,
        attempts_remaining=0 if finished else max_attempts - attempts_used,
        reveal_answer=finished,
    )


def question_closed(attempts_used: int, answered_correctly: bool, max_attempts: int = 2) -> bool:
    """True once a question takes no more answers in a session."""
    return answered_correctly or attempts_used >= max_attempts


def accuracy_percent(score: int, total: int) -> float:
    """Percentage of correct answers; 0 for an empty session."""
    if total <= 0:
        return 0.0
    return score / total * 100


def calculate_points(
    score: int,
    total_questions: int,
    answer_streak: int,
    topic_completion_count: int,
) -> int:
    """
    Points for a finished session.

    10 per correct answer, up to 50 for accuracy, 5 per streak step capped
    at 50, and 2 per earlier completion of the topic capped at 20.
    """
    correct_points = score * POINTS_PER_CORRECT
    accuracy_bonus = math.floor(accuracy_percent(score, total_questions) / 2)
    streak_bonus = min(answer_streak * STREAK_POINTS, STREAK_BONUS_CAP)
    completion_bonus = min(topic_completion_count * COMPLETION_POINTS, COMPLETION_BONUS_CAP)
    return correct_points + accuracy_bonus + streak_bonus + completion_bonus


def validate_session_result(score: int, total_questions: int, answer_streak: int) -> None:
    """Reject impossible session results before anything is saved."""
    if total_questions < 0:
        raise ValidationError("Total questions cannot be negative", field="total_questions")
    if score < 0 or score > total_questions:
        raise ValidationError(
            "Invalid score value",
            field="score",
            details={"score": score, "total_questions": total_questions},
        )
    if answer_streak < 0:
        raise ValidationError("Invalid streak value", field="answer_streak")
