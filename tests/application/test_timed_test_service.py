"""
Test suite for timed test generation and grading.

System role: Verification of test use case orchestration
"""

import random
import uuid

import pytest

from mathprep.application.services.test_service import TestService
from mathprep.boundary.db.CRUD import progress_crud
from mathprep.boundary.db.models import SessionType
from mathprep.core.exceptions import (
    ConflictError,
    InsufficientQuestionsError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def test_service(test_async_db) -> TestService:
    return TestService(test_async_db, rng=random.Random(99))


class TestGenerateTest:
    @pytest.mark.asyncio
    async def test_draws_requested_number_without_answers(self, test_service, make_question) -> None:
        # Arrange
        for _ in range(5):
            await make_question()

        # Act
        result = await test_service.generate_test(uuid.uuid4(), "Algebra", ["Arithmetic"], 1, 10, 3)

        # Assert
        assert len(result["questions"]) == 3
        assert len({q["id"] for q in result["questions"]}) == 3
        assert all("answer" not in q for q in result["questions"])
        assert result["topics"] == ["Arithmetic"]

    @pytest.mark.asyncio
    async def test_no_matching_questions(self, test_service, make_question) -> None:
        await make_question(difficulty=9)

        with pytest.raises(InsufficientQuestionsError):
            await test_service.generate_test(uuid.uuid4(), "Algebra", ["Arithmetic"], 1, 3, 5)

    @pytest.mark.asyncio
    async def test_requires_topics(self, test_service) -> None:
        with pytest.raises(ValidationError):
            await test_service.generate_test(uuid.uuid4(), "Algebra", [], 1, 10, 5)

    @pytest.mark.asyncio
    async def test_rejects_inverted_difficulty_range(self, test_service) -> None:
        with pytest.raises(ValidationError):
            await test_service.generate_test(uuid.uuid4(), "Algebra", ["Arithmetic"], 8, 2, 5)


class TestGradeSubmittedTest:
    @pytest.mark.asyncio
    async def test_grades_and_records_test_progress(
        self, test_service, test_async_db, make_profile, make_question
    ) -> None:
        # Arrange
        profile = await make_profile()
        q1 = await make_question()
        q2 = await make_question()
        q3 = await make_question()

        # Act
        result = await test_service.grade_submitted_test(
            profile.id, "test-1", "Algebra", "Arithmetic", {q1.id: "4", q2.id: "B", q3.id: "6"}
        )

        # Assert
        assert result["score"] == 2
        assert result["total_questions"] == 3
        assert result["percentage"] == 66.67
        row = await progress_crud.get_by_session_id(test_async_db, profile.id, "test-1")
        assert row.type == SessionType.TEST
        # 20 correct + floor(66.67 / 2)
        assert row.points == 53
        assert profile.total_points == 53

    @pytest.mark.asyncio
    async def test_same_test_cannot_be_graded_twice(self, test_service, make_profile, make_question) -> None:
        # Arrange
        profile = await make_profile()
        question = await make_question()
        await test_service.grade_submitted_test(profile.id, "test-1", "Algebra", "Arithmetic", {question.id: "4"})

        # Act / Assert
        with pytest.raises(ConflictError):
            await test_service.grade_submitted_test(
                profile.id, "test-1", "Algebra", "Arithmetic", {question.id: "4"}
            )

    @pytest.mark.asyncio
    async def test_unknown_question_ids(self, test_service, make_profile) -> None:
        profile = await make_profile()

        with pytest.raises(ValidationError):
            await test_service.grade_submitted_test(profile.id, "t", "Algebra", "Arithmetic", {uuid.uuid4(): "4"})

    @pytest.mark.asyncio
    async def test_empty_answers(self, test_service, make_profile) -> None:
        profile = await make_profile()

        with pytest.raises(ValidationError):
            await test_service.grade_submitted_test(profile.id, "t", "Algebra", "Arithmetic", {})

    @pytest.mark.asyncio
    async def test_unknown_profile(self, test_service, make_question) -> None:
        question = await make_question()

        with pytest.raises(NotFoundError):
            await test_service.grade_submitted_test(uuid.uuid4(), "t", "Algebra", "Arithmetic", {question.id: "4"})
