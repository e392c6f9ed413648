"""
Question import normalization.

Turns uploaded question records into rows ready for insertion.

Dependencies: mathprep.core.exceptions, mathprep.core.scoring
System role: Bulk question import preparation
"""

from typing import Any, Iterator, Sequence

from mathprep.core.exceptions import ValidationError
from mathprep.core.scoring import resolve_choice

DEFAULT_DIVISION = "Uncategorized"
DEFAULT_TOPIC = "General"
DEFAULT_DIFFICULTY = 1


def _options_from(record: dict[str, Any], position: int) -> list[str]:
    if isinstance(record.get("options"), list):
        return [str(option) for option in record["options"]]
    choices = record.get("answer_choices")
    if isinstance(choices, dict):
        return [str(choices[letter]) for letter in sorted(choices)]
    raise ValidationError(
        f"Question {position} has no options or answer_choices",
        field="options",
        details={"position": position},
    )


def _as_int(value: Any, field: str, position: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"Question {position} {field} must be an integer",
            field=field,
            details={"position": position, field: str(value)[:64]},
        )


def normalize_question(record: Any, position: int = 0) -> dict[str, Any]:
    """
    Normalize one import record into question column values.

    Args:
        record: Raw record (dict) from the import payload
        position: Index of the record, for error messages

    Returns:
        dict: Column values for QuestionModel
    """
    if not isinstance(record, dict):
        raise ValidationError(f"Question {position} must be an object", details={"position": position})

    text = str(record.get("question_text") or "").strip()
    if not text:
        raise ValidationError(
            f"Question {position} is missing question_text",
            field="question_text",
            details={"position": position},
        )

    options = _options_from(record, position)
    answer = resolve_choice(options, str(record.get("answer") or ""))

    difficulty = _as_int(record.get("difficulty") or DEFAULT_DIFFICULTY, "difficulty", position)
    if not 1 <= difficulty <= 10:
        raise ValidationError(
            f"Question {position} difficulty must be between 1 and 10",
            field="difficulty",
            details={"position": position, "difficulty": difficulty},
        )

    row = {
        "question_text": text,
        "options": options,
        "answer": answer,
        "division": record.get("division") or DEFAULT_DIVISION,
        "topic": record.get("topic") or DEFAULT_TOPIC,
        "difficulty": difficulty,
    }
    for optional in ("level", "xp_reward", "accuracy_bonus", "stamina_bonus"):
        if record.get(optional) is not None:
            row[optional] = _as_int(record[optional], optional, position)
    return row


def normalize_questions(payload: Any) -> list[dict[str, Any]]:
    """Validate the payload is a list and normalize every record."""
    if not isinstance(payload, list):
        raise ValidationError("Import payload must contain an array of questions")
    return [normalize_question(record, i) for i, record in enumerate(payload)]


def batched(rows: Sequence[dict[str, Any]], size: int) -> Iterator[Sequence[dict[str, Any]]]:
    """Yield consecutive slices of at most size rows."""
    if size <= 0:
        raise ValueError("batch size must be positive")
    for start in range(0, len(rows), size):
        yield rows[start:start + size]
