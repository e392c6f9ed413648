"""
Test suite for practice and timed test endpoints.

System role: Verification of session, answer, completion and test routes
"""

import uuid
from datetime import datetime, timezone

from mathprep.api.deps import get_practice_service, get_test_service
from mathprep.core.exceptions import ConflictError, InsufficientQuestionsError, NotFoundError

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def served_question(**overrides) -> dict:
    payload = {
        "id": uuid.uuid4(),
        "question_text": "What is 2 + 2?",
        "options": ["3", "4"],
        "division": "Algebra",
        "topic": "Arithmetic",
        "difficulty": 5,
        "history": None,
    }
    payload.update(overrides)
    return payload


class TestPracticeEndpoints:
    def test_standard_session(self, client, override, user_id, headers):
        # Arrange
        service = override(get_practice_service)
        service.start_standard_session.return_value = {
            "session_id": "abc",
            "division": "Algebra",
            "questions": [served_question()],
        }

        # Act
        response = client.post("/api/v1/practice/sessions", json={"division": "Algebra"}, headers=headers)

        # Assert
        assert response.status_code == 201
        assert "answer" not in response.json()["questions"][0]
        service.start_standard_session.assert_awaited_once_with(user_id, "Algebra", "All Topics", None)

    def test_adaptive_session(self, client, override, headers):
        # Arrange
        service = override(get_practice_service)
        history = {
            "attempts": 1,
            "last_attempt": NOW,
            "last_correct": False,
            "is_completed": False,
            "user_answers": ["3"],
        }
        service.start_adaptive_session.return_value = {
            "session_id": "abc",
            "division": "Algebra",
            "questions": [served_question(history=history)],
            "difficulty_range": {"min": 3, "max": 7, "target": 5},
            "new_questions": 0,
            "review_questions": 1,
            "fallback": False,
        }

        # Act
        response = client.post(
            "/api/v1/practice/adaptive", json={"division": "Algebra", "topics": ["Arithmetic"]}, headers=headers
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["difficulty_range"]["target"] == 5
        assert body["questions"][0]["history"]["user_answers"] == ["3"]

    def test_submit_answer(self, client, override, user_id, headers):
        # Arrange
        service = override(get_practice_service)
        question_id = uuid.uuid4()
        service.submit_answer.return_value = {
            "is_correct": False,
            "feedback": "incorrect_retry",
            "attempts_remaining": 1,
            "correct_answer": None,
            "xp_gained": 10,
            "level": 1,
            "xp": 10,
            "xp_to_next_level": 100,
            "leveled_up": False,
            "answer_streak": 0,
        }

        # Act
        response = client.post(
            "/api/v1/practice/attempts",
            json={"session_id": "abc", "question_id": str(question_id), "answer": "A", "answer_streak": 2},
            headers=headers,
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["feedback"] == "incorrect_retry"
        service.submit_answer.assert_awaited_once_with(
            user_id, session_id="abc", question_id=question_id, answer="A", answer_streak=2
        )

    def test_submit_answer_rejects_negative_streak(self, client, override, headers):
        override(get_practice_service)

        response = client.post(
            "/api/v1/practice/attempts",
            json={"session_id": "abc", "question_id": str(uuid.uuid4()), "answer": "A", "answer_streak": -1},
            headers=headers,
        )

        assert response.status_code == 422

    def test_complete_session(self, client, override, headers):
        # Arrange
        service = override(get_practice_service)
        service.complete_session.return_value = {
            "session_id": "abc",
            "points": 115,
            "total_points": 115,
            "streak": {"current_streak": 1, "best_streak": 1, "last_practice_date": NOW},
            "new_badges": [{"id": uuid.uuid4(), "name": "Perfect Round", "description": "100%", "icon": "💯"}],
            "new_achievements": [],
        }

        # Act
        response = client.post(
            "/api/v1/practice/sessions/abc/complete",
            json={"division": "Algebra", "topic": "Arithmetic", "score": 5, "total_questions": 5, "answer_streak": 3},
            headers=headers,
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["points"] == 115
        assert service.complete_session.await_args.kwargs["session_id"] == "abc"

    def test_answer_on_finished_question_conflicts(self, client, override, headers):
        service = override(get_practice_service)
        service.submit_answer.side_effect = ConflictError("Question already finished in this session")

        response = client.post(
            "/api/v1/practice/attempts",
            json={"session_id": "abc", "question_id": str(uuid.uuid4()), "answer": "A"},
            headers=headers,
        )

        assert response.status_code == 409

    def test_session_results_not_found(self, client, override, headers):
        service = override(get_practice_service)
        service.get_session_results.side_effect = NotFoundError("Practice session", "missing")

        response = client.get("/api/v1/practice/sessions/missing", headers=headers)

        assert response.status_code == 404

    def test_streak(self, client, override, headers):
        service = override(get_practice_service)
        service.get_streak.return_value = {"current_streak": 0, "best_streak": 0, "last_practice_date": None}

        response = client.get("/api/v1/practice/streak", headers=headers)

        assert response.status_code == 200
        assert response.json()["last_practice_date"] is None


class TestTimedTestEndpoints:
    def test_generate(self, client, override, headers):
        # Arrange
        service = override(get_test_service)
        service.generate_test.return_value = {
            "test_id": "t1",
            "division": "Algebra",
            "topics": ["Arithmetic"],
            "questions": [served_question()],
        }

        # Act
        response = client.post(
            "/api/v1/tests",
            json={"division": "Algebra", "topics": ["Arithmetic"], "num_problems": 1},
            headers=headers,
        )

        # Assert
        assert response.status_code == 201
        assert response.json()["test_id"] == "t1"

    def test_generate_rejects_inverted_range(self, client, override, headers):
        override(get_test_service)

        response = client.post(
            "/api/v1/tests",
            json={"division": "Algebra", "topics": ["Arithmetic"], "min_difficulty": 9, "max_difficulty": 2},
            headers=headers,
        )

        assert response.status_code == 422

    def test_generate_with_no_questions(self, client, override, headers):
        service = override(get_test_service)
        service.generate_test.side_effect = InsufficientQuestionsError()

        response = client.post(
            "/api/v1/tests", json={"division": "Algebra", "topics": ["Arithmetic"]}, headers=headers
        )

        assert response.status_code == 400

    def test_grade(self, client, override, headers):
        # Arrange
        service = override(get_test_service)
        question_id = uuid.uuid4()
        service.grade_submitted_test.return_value = {
            "test_id": "t1",
            "score": 1,
            "total_questions": 1,
            "percentage": 100.0,
            "results": [
                {"question_id": question_id, "submitted": "4", "correct_answer": "4", "is_correct": True}
            ],
        }

        # Act
        response = client.post(
            "/api/v1/tests/grade",
            json={"test_id": "t1", "division": "Algebra", "topic": "Arithmetic", "answers": {str(question_id): "4"}},
            headers=headers,
        )

        # Assert
        assert response.status_code == 200
        assert service.grade_submitted_test.await_args.kwargs["answers"] == {question_id: "4"}

    def test_grade_twice_conflicts(self, client, override, headers):
        service = override(get_test_service)
        service.grade_submitted_test.side_effect = ConflictError("Test t1 was already graded")

        response = client.post(
            "/api/v1/tests/grade",
            json={"test_id": "t1", "division": "Algebra", "topic": "Arithmetic", "answers": {str(uuid.uuid4()): "4"}},
            headers=headers,
        )

        assert response.status_code == 409
