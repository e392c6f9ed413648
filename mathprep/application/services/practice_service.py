"""
Practice service orchestrator.

Builds standard and adaptive sessions, grades answers (attempt log,
leaderboard refresh, XP), completes sessions (points, streak, rewards)
and reports session results.

Dependencies: mathprep.boundary.db.CRUD, mathprep.core, tenacity
System role: Practice use case orchestration
"""

import logging
import random
import uuid
from datetime import datetime, timedelta
from typing import Callable, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from mathprep.application.services.profile_service import streak_to_dict
from mathprep.application.services.reward_service import RewardService
from mathprep.boundary.db.CRUD import (
    attempt_crud,
    leaderboard_crud,
    profile_crud,
    progress_crud,
    question_crud,
)
from mathprep.boundary.db.models import (
    PracticeSessionModel,
    ProfileModel,
    QuestionModel,
    SessionType,
)
from mathprep.configs.practice import PracticeSettings
from mathprep.core.adaptive import QuestionHistory, build_question_history, select_adaptive_questions
from mathprep.core.clock import utcnow
from mathprep.core.exceptions import ConflictError, NotFoundError
from mathprep.core.leaderboard import aggregate_attempts
from mathprep.core.leveling import apply_xp, xp_for_answer
from mathprep.core.rewards import RewardContext
from mathprep.core.scoring import (
    accuracy_percent,
    attempt_outcome,
    calculate_points,
    grade_answer,
    question_closed,
    validate_session_result,
)
from mathprep.core.streaks import compute_streak

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return uuid.uuid4().hex


def history_to_dict(entry: QuestionHistory | None) -> dict | None:
    if entry is None:
        return None
    return {
        "attempts": entry.attempts,
        "last_attempt": entry.last_attempt,
        "last_correct": entry.last_correct,
        "is_completed": entry.is_completed,
        "user_answers": list(entry.user_answers),
    }


def practice_question_to_dict(question: QuestionModel, history: dict | None = None) -> dict:
    """Question as served to a learner; the answer is withheld."""
    return {
        "id": question.id,
        "question_text": question.question_text,
        "options": list(question.options or []),
        "division": question.division,
        "topic": question.topic,
        "difficulty": question.difficulty,
        "history": history_to_dict(history.get(question.id)) if history else None,
    }


class PracticeService:
    """Practice service orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        settings: PracticeSettings | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        """
        Args:
            db: Async SQLAlchemy session
            settings: Practice tunables (defaults when omitted)
            rng: Random source for adaptive shuffles
            clock: Returns the current aware UTC time
        """
        self.db = db
        self.settings = settings or PracticeSettings()
        self.rng = rng or random.Random()
        self.clock = clock

    async def _require_profile(self, user_id: UUID) -> ProfileModel:
        profile = await profile_crud.get_by_id(self.db, user_id)
        if profile is None:
            raise NotFoundError("Profile", user_id)
        return profile

    async def start_standard_session(
        self,
        user_id: UUID,
        division: str,
        topic: str,
        limit: int | None = None,
    ) -> dict:
        """
        Up to N questions for a division and topic, ordered by id.

        Each question carries the caller's history with it.
        """
        questions = await question_crud.query(
            self.db,
            division=division,
            topics=[topic],
            limit=limit or self.settings.standard_session_size,
        )
        attempts = await attempt_crud.list_for_user(
            self.db, user_id, question_ids=[q.id for q in questions]
        )
        history = build_question_history(attempts)

        logger.info(
            "Standard session started",
            extra={"user_id": str(user_id), "division": division, "topic": topic, "questions": len(questions)},
        )
        return {
            "session_id": new_session_id(),
            "division": division,
            "questions": [practice_question_to_dict(q, history) for q in questions],
        }

    async def start_adaptive_session(
        self,
        user_id: UUID,
        division: str,
        topics: Sequence[str] | None = None,
    ) -> dict:
        """
        Adaptive selection over the candidate pool for a division.

        Returns:
            dict: Session id, chosen questions, difficulty window and
            new/review counts
        """
        candidates = await question_crud.query(
            self.db,
            division=division,
            topics=topics,
            limit=self.settings.adaptive_candidate_pool,
        )
        attempts = await attempt_crud.list_for_user(self.db, user_id, division=division, topics=topics)
        history = build_question_history(attempts)

        selection = select_adaptive_questions(
            candidates,
            history,
            now=self.clock(),
            target_count=self.settings.adaptive_session_size,
            rng=self.rng,
        )
        review = sum(1 for q in selection.questions if q.id in history)

        logger.info(
            "Adaptive session started",
            extra={
                "user_id": str(user_id),
                "division": division,
                "candidates": len(candidates),
                "target": selection.difficulty_range.target,
                "fallback": selection.fallback,
            },
        )
        return {
            "session_id": new_session_id(),
            "division": division,
            "questions": [practice_question_to_dict(q, history) for q in selection.questions],
            "difficulty_range": {
                "min": selection.difficulty_range.min,
                "max": selection.difficulty_range.max,
                "target": selection.difficulty_range.target,
            },
            "new_questions": len(selection.questions) - review,
            "review_questions": review,
            "fallback": selection.fallback,
        }

    async def _save_progress(
        self,
        user_id: UUID,
        session_id: str,
        defaults: dict,
        updates: dict | None = None,
    ) -> PracticeSessionModel:
        """
        Create or update the progress row for a session and commit.

        defaults only apply when the row is created; updates apply either
        way, and completed_at is always touched.

        A concurrent insert of the same (user_id, session_id) raises
        IntegrityError; the save is retried with completed_at pushed one
        second further per attempt, and the retry finds and updates the row.
        """
        updates = updates or {}
        base_time = self.clock()

        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(IntegrityError),
            stop=stop_after_attempt(self.settings.progress_save_retries + 1),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:_save_progress - Retry {retry_state.attempt_number}/"
                f"{self.settings.progress_save_retries} after unique conflict",
                extra={"user_id": str(user_id), "session_id": session_id},
            ),
            reraise=True,
        ):
            with attempt:
                offset = timedelta(seconds=attempt.retry_state.attempt_number - 1)
                try:
                    row = await progress_crud.get_by_session_id(self.db, user_id, session_id)
                    if row is None:
                        row = await progress_crud.create(
                            self.db,
                            user_id=user_id,
                            session_id=session_id,
                            completed_at=base_time + offset,
                            **{**defaults, **updates},
                        )
                    else:
                        row = await progress_crud.update_by_id(
                            self.db, row.id, completed_at=base_time + offset, **updates
                        )
                    await self.db.commit()
                except IntegrityError:
                    await self.db.rollback()
                    raise
        return row

    async def _refresh_leaderboard(self, profile: ProfileModel, division: str, topic: str) -> None:
        """Recompute the caller's (division, topic) row from attempts."""
        attempts = await attempt_crud.list_for_scope(self.db, profile.id, division, topic)
        stats = aggregate_attempts(attempts).get((profile.id, division, topic))
        if stats is None:
            return

        values = {
            "username": profile.username,
            "grade_level": profile.grade_level,
            "average_score": stats.average_score,
            "attempts": stats.attempts,
            "perfect_scores": stats.perfect_scores,
            "questions_attempted": stats.questions_attempted,
        }
        entry = await leaderboard_crud.get_entry(self.db, profile.id, division, topic)
        if entry is None:
            await leaderboard_crud.create(self.db, user_id=profile.id, division=division, topic=topic, **values)
        else:
            await leaderboard_crud.update_by_id(self.db, entry.id, **values)

    async def submit_answer(
        self,
        user_id: UUID,
        session_id: str,
        question_id: UUID,
        answer: str,
        answer_streak: int = 0,
    ) -> dict:
        """
        Grade one answer and apply its side effects.

        Records the attempt, keeps a progress row for the session, refreshes
        the leaderboard row and awards XP with level-ups.

        Args:
            user_id: Profile id
            session_id: Client session id
            question_id: Question answered
            answer: Option text or letter
            answer_streak: Correct answers in a row before this one

        Returns:
            dict: Feedback, XP and level state, and the new answer streak

        Raises:
            NotFoundError: Unknown question or profile
            ConflictError: The question is already finished in this session
        """
        question = await question_crud.get_by_id(self.db, question_id)
        if question is None:
            raise NotFoundError("Question", question_id)
        profile = await self._require_profile(user_id)
        grade_level = profile.grade_level

        attempts_used, answered_correctly = await attempt_crud.session_question_state(
            self.db, user_id, session_id, question_id
        )
        if question_closed(attempts_used, answered_correctly, self.settings.max_attempts_per_question):
            raise ConflictError(
                "Question already finished in this session",
                details={"session_id": session_id, "question_id": str(question_id)},
            )

        await self._save_progress(
            user_id,
            session_id,
            defaults={
                "division": question.division,
                "topic": question.topic,
                "grade_level": grade_level,
                "type": SessionType.PRACTICE,
            },
        )
        # the save may have rolled back; reload what we use next
        question = await question_crud.get_by_id(self.db, question_id)
        profile = await self._require_profile(user_id)

        is_correct = grade_answer(question, answer)
        await attempt_crud.create(
            self.db,
            user_id=user_id,
            question_id=question.id,
            user_answer=answer,
            is_correct=is_correct,
            session_id=session_id,
            division=question.division,
            topic=question.topic,
        )
        attempts_used = await attempt_crud.count_for_question_in_session(
            self.db, user_id, session_id, question.id
        )
        outcome = attempt_outcome(is_correct, attempts_used, self.settings.max_attempts_per_question)

        await self._refresh_leaderboard(profile, question.division, question.topic)

        gained = xp_for_answer(question, is_correct, answer_streak)
        state = apply_xp(profile.level, profile.xp, gained)
        new_streak = answer_streak + 1 if is_correct else 0

        answered, correct = await attempt_crud.totals_for_user(self.db, user_id)
        profile.level = state.level
        profile.xp = state.xp
        profile.accuracy = round(accuracy_percent(correct, answered), 2)
        profile.stamina = max(profile.stamina, new_streak)
        await self.db.commit()

        logger.info(
            "Answer submitted",
            extra={
                "user_id": str(user_id),
                "question_id": str(question_id),
                "session_id": session_id,
                "is_correct": is_correct,
                "xp_gained": gained,
                "leveled_up": state.leveled_up,
            },
        )
        return {
            "is_correct": is_correct,
            "feedback": outcome.feedback,
            "attempts_remaining": outcome.attempts_remaining,
            "correct_answer": question.answer if outcome.reveal_answer else None,
            "xp_gained": gained,
            "level": state.level,
            "xp": state.xp,
            "xp_to_next_level": state.xp_to_next_level,
            "leveled_up": state.leveled_up,
            "answer_streak": new_streak,
        }

    async def complete_session(
        self,
        user_id: UUID,
        session_id: str,
        division: str,
        topic: str,
        score: int,
        total_questions: int,
        answer_streak: int = 0,
    ) -> dict:
        """
        Finish a practice session.

        Computes points, saves the progress row, credits the profile and
        leaderboard entry, and awards badges and achievements.

        Raises:
            ValidationError: Impossible score or streak
            NotFoundError: Unknown profile
            ConflictError: The session was already completed
        """
        validate_session_result(score, total_questions, answer_streak)
        profile = await self._require_profile(user_id)

        existing = await progress_crud.get_by_session_id(self.db, user_id, session_id)
        if existing is not None and existing.total_questions > 0:
            raise ConflictError(f"Session {session_id} was already completed", details={"session_id": session_id})

        prior_completions = await progress_crud.count_topic_completions(
            self.db, user_id, division, topic, exclude_session_id=session_id
        )
        points = calculate_points(score, total_questions, answer_streak, prior_completions)

        await self._save_progress(
            user_id,
            session_id,
            defaults={"grade_level": profile.grade_level, "type": SessionType.PRACTICE},
            updates={
                "division": division,
                "topic": topic,
                "score": score,
                "total_questions": total_questions,
                "points": points,
                "answer_streak": answer_streak,
            },
        )

        profile = await profile_crud.add_points(self.db, user_id, points)
        entry = await leaderboard_crud.get_entry(self.db, user_id, division, topic)
        if entry is None:
            await leaderboard_crud.create(
                self.db,
                user_id=user_id,
                username=profile.username,
                grade_level=profile.grade_level,
                division=division,
                topic=topic,
                points=points,
            )
        else:
            await leaderboard_crud.update_by_id(self.db, entry.id, points=entry.points + points)

        streak = compute_streak(await progress_crud.completion_times(self.db, user_id), self.clock().date())
        rewards = await RewardService(self.db).award_session_rewards(
            user_id,
            RewardContext(
                accuracy=accuracy_percent(score, total_questions),
                current_streak=streak.current_streak,
                topic_completion_count=prior_completions + 1,
            ),
        )
        await self.db.commit()

        logger.info(
            "Practice session completed",
            extra={
                "user_id": str(user_id),
                "session_id": session_id,
                "score": score,
                "total_questions": total_questions,
                "points": points,
            },
        )
        return {
            "session_id": session_id,
            "points": points,
            "total_points": profile.total_points,
            "streak": streak_to_dict(streak),
            "new_badges": rewards["badges"],
            "new_achievements": rewards["achievements"],
        }

    async def get_session_results(self, user_id: UUID, session_id: str) -> dict:
        attempts = await attempt_crud.list_for_session(self.db, user_id, session_id)
        if not attempts:
            raise NotFoundError("Practice session", session_id)

        correct = sum(1 for a in attempts if a.is_correct)
        return {
            "session_id": session_id,
            "attempts": [
                {
                    "question_id": a.question_id,
                    "user_answer": a.user_answer,
                    "is_correct": a.is_correct,
                    "created_at": a.created_at,
                }
                for a in attempts
            ],
            "total": len(attempts),
            "correct": correct,
            "percentage": round(accuracy_percent(correct, len(attempts)), 2),
        }

    async def get_streak(self, user_id: UUID) -> dict:
        completed = await progress_crud.completion_times(self.db, user_id)
        return streak_to_dict(compute_streak(completed, self.clock().date()))
