"""Resolution and validation of submitted profile responses.

Every (categoryId, questionId) pair in a submitted map must name an active
question of that category, and each value must fit the question's type:
a string for TEXT and CHOICE, a list of strings for MULTICHOICE, with
choice values drawn from the question's choices.
"""

from __future__ import annotations

from typing import Union

from workwithme.logic import questions
from workwithme.logic.errors import ValidationError
from workwithme.models.answers import Answer, ChoiceAnswer, MultiChoiceAnswer, TextAnswer
from workwithme.models.catalog import Question, QuestionType
from workwithme.models.profile import ResponseEntry, ResponseMap


def resolve_answer(question: Question, entry: ResponseEntry) -> Answer:
    qid = question.id
    value = entry.value
    if question.type == QuestionType.TEXT:
        if not isinstance(value, str):
            raise ValidationError(f"Question '{qid}' expects a text answer")
        return TextAnswer(question_id=qid, value=value, answered_at=entry.answered_at)
    allowed = set(question.choices or [])
    if question.type == QuestionType.CHOICE:
        if not isinstance(value, str):
            raise ValidationError(f"Question '{qid}' expects a single choice")
        if value not in allowed:
            raise ValidationError(f"'{value}' is not a valid choice for question '{qid}'")
        return ChoiceAnswer(question_id=qid, value=value, answered_at=entry.answered_at)
    if not isinstance(value, list):
        raise ValidationError(f"Question '{qid}' expects a list of choices")
    unknown = [v for v in value if v not in allowed]
    if unknown:
        raise ValidationError(f"'{unknown[0]}' is not a valid choice for question '{qid}'")
    return MultiChoiceAnswer(question_id=qid, value=list(value), answered_at=entry.answered_at)


def to_entry(answer: Union[TextAnswer, ChoiceAnswer, MultiChoiceAnswer]) -> ResponseEntry:
    return ResponseEntry(value=answer.value, answered_at=answer.answered_at)


def validate_responses(responses: ResponseMap) -> dict[str, dict[str, Answer]]:
    """Check every pair against the active catalog and return typed answers.

    Raises ValidationError naming the first unknown pair or ill-typed value.
    """
    resolved: dict[str, dict[str, Answer]] = {}
    for category_id, entries in responses.items():
        bucket = resolved.setdefault(category_id, {})
        for question_id, entry in entries.items():
            question = questions.find_active_in_category(category_id, question_id)
            if question is None:
                raise ValidationError(f"Question '{question_id}' not found in category '{category_id}'")
            bucket[question_id] = resolve_answer(question, entry)
    return resolved


__all__ = ["resolve_answer", "to_entry", "validate_responses"]
