"""
Test suite for test assembly, grading and question import normalization.

System role: Verification of randomized tests and bulk import preparation
"""

import random
import uuid
from types import SimpleNamespace

import pytest

from mathprep.core.exceptions import InsufficientQuestionsError, ValidationError
from mathprep.core.importer import batched, normalize_question, normalize_questions
from mathprep.core.test_builder import (
    assemble_test,
    candidate_limit,
    grade_test,
    validate_difficulty_range,
)


def question(options=None, answer="4"):
    return SimpleNamespace(id=uuid.uuid4(), options=options if options is not None else ["3", "4"], answer=answer)


class TestAssembleTest:
    @pytest.mark.parametrize("num,expected", [(1, 3), (10, 30), (34, 100), (50, 100)])
    def test_candidate_limit(self, num: int, expected: int) -> None:
        assert candidate_limit(num) == expected

    def test_takes_requested_number_from_candidates(self) -> None:
        pool = [question() for _ in range(9)]

        chosen = assemble_test(pool, 3, random.Random(3))

        assert len(chosen) == 3
        assert {q.id for q in chosen} <= {q.id for q in pool}

    def test_returns_what_exists_when_pool_is_small(self) -> None:
        pool = [question() for _ in range(2)]

        assert len(assemble_test(pool, 5)) == 2

    def test_drops_questions_with_bad_options(self) -> None:
        good = question()
        bad = question(options="3,4")

        assert assemble_test([bad, good], 5) == [good]

    def test_no_usable_candidates(self) -> None:
        with pytest.raises(InsufficientQuestionsError):
            assemble_test([], 5)

    def test_non_positive_count(self) -> None:
        with pytest.raises(ValidationError):
            assemble_test([question()], 0)

    def test_difficulty_range_validation(self) -> None:
        validate_difficulty_range(1, 10)
        with pytest.raises(ValidationError):
            validate_difficulty_range(7, 3)


class TestGradeTest:
    def test_scores_and_percentage(self) -> None:
        q1, q2, q3 = question(), question(), question()
        answers = {q1.id: "4", q2.id: "B", q3.id: "3"}

        result = grade_test([q1, q2, q3], answers)

        assert result.score == 2
        assert result.total_questions == 3
        assert result.percentage == 66.67

    def test_missing_answer_is_wrong(self) -> None:
        q1 = question()

        result = grade_test([q1], {})

        assert result.graded[0].is_correct is False
        assert result.graded[0].submitted is None


class TestImporter:
    def test_answer_choices_are_mapped_and_defaults_applied(self) -> None:
        record = {
            "question_text": "1 + 1?",
            "answer_choices": {"A": "1", "B": "2", "C": "3", "D": "4", "E": "5"},
            "answer": "B",
        }

        row = normalize_question(record)

        assert row["options"] == ["1", "2", "3", "4", "5"]
        assert row["answer"] == "2"
        assert row["division"] == "Uncategorized"
        assert row["topic"] == "General"
        assert row["difficulty"] == 1

    def test_options_list_and_optional_fields(self) -> None:
        record = {
            "question_text": "x?",
            "options": ["a", "b"],
            "answer": "a",
            "division": "Geometry",
            "topic": "Angles",
            "difficulty": 7,
            "xp_reward": 20,
        }

        row = normalize_question(record)

        assert row["division"] == "Geometry"
        assert row["xp_reward"] == 20
        assert "stamina_bonus" not in row

    def test_missing_question_text(self) -> None:
        with pytest.raises(ValidationError):
            normalize_question({"options": ["a"], "answer": "a"}, position=3)

    def test_missing_options(self) -> None:
        with pytest.raises(ValidationError):
            normalize_question({"question_text": "x?", "answer": "a"})

    def test_difficulty_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            normalize_question({"question_text": "x?", "options": ["a"], "answer": "a", "difficulty": 11})

    @pytest.mark.parametrize("field", ["difficulty", "xp_reward", "stamina_bonus"])
    def test_non_numeric_fields_are_rejected(self, field: str) -> None:
        record = {"question_text": "x?", "options": ["a"], "answer": "a", field: "hard"}

        with pytest.raises(ValidationError) as exc_info:
            normalize_question(record, position=4)

        assert exc_info.value.details["field"] == field
        assert exc_info.value.details["position"] == 4

    def test_non_numeric_record_fails_the_whole_payload(self) -> None:
        payload = [
            {"question_text": "x?", "options": ["a"], "answer": "a"},
            {"question_text": "y?", "options": ["a"], "answer": "a", "level": [1]},
        ]

        with pytest.raises(ValidationError, match="Question 1 level"):
            normalize_questions(payload)

    def test_payload_must_be_a_list(self) -> None:
        with pytest.raises(ValidationError):
            normalize_questions({"question_text": "x?"})

    def test_batched(self) -> None:
        rows = [{"n": i} for i in range(250)]

        assert [len(b) for b in batched(rows, 100)] == [100, 100, 50]
