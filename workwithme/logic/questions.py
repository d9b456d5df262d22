"""Question service: catalog CRUD and soft delete for questions.

CHOICE and MULTICHOICE questions must carry a non-empty choice list; TEXT
questions never keep one. Soft delete leaves every stored profile response
untouched.
"""

from __future__ import annotations

import logging
from typing import Sequence

from workwithme.db.base import read_only, transaction
from workwithme.logic import repository_categories as category_repo
from workwithme.logic import repository_questions as repo
from workwithme.logic.errors import InvalidCategoryError, NotFoundError, ValidationError
from workwithme.logic.ids import later_than, new_object_id, utc_now
from workwithme.models.catalog import Question, QuestionType

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 500


def _clean_text(text: object) -> str:
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Question text cannot be empty")
    cleaned = text.strip()
    if len(cleaned) > MAX_TEXT_LENGTH:
        raise ValidationError(f"Question text cannot exceed {MAX_TEXT_LENGTH} characters")
    return cleaned


def _check_order(order: object) -> int:
    if isinstance(order, bool) or not isinstance(order, int) or order < 0:
        raise ValidationError("Question order must be a non-negative integer")
    return order


def _check_shape(qtype: str, choices: Sequence[str] | None) -> list[str] | None:
    """Validate the type/choices pairing and return the choices to store."""
    if qtype not in QuestionType.ALL:
        raise ValidationError(f"Question type must be one of {', '.join(QuestionType.ALL)}")
    if qtype not in QuestionType.WITH_CHOICES:
        return None
    cleaned = [c.strip() for c in (choices or []) if isinstance(c, str) and c.strip()]
    if not cleaned:
        raise ValidationError(f"Questions of type {qtype} require at least one choice")
    if len(set(cleaned)) != len(cleaned):
        raise ValidationError("Question choices must be unique")
    return cleaned


def _clean_placeholder(placeholder: str | None) -> str | None:
    if placeholder is None:
        return None
    return placeholder.strip() or None


def _missing_category(category_id: str) -> InvalidCategoryError:
    return InvalidCategoryError(f"Category with id '{category_id}' does not exist")


def create_question(
    text: str,
    category_id: str,
    order: int = 0,
    type: str = QuestionType.TEXT,
    choices: Sequence[str] | None = None,
    placeholder: str | None = None,
) -> Question:
    cleaned = _clean_text(text)
    order = _check_order(order)
    stored_choices = _check_shape(type, choices)
    now = utc_now()
    question = Question(
        id=new_object_id(),
        category_id=category_id,
        text=cleaned,
        type=type,
        choices=stored_choices,
        placeholder=_clean_placeholder(placeholder),
        order=order,
        active=True,
        created_at=now,
        updated_at=now,
    )
    with transaction("question.create") as conn:
        if category_repo.fetch_category(conn, category_id) is None:
            raise _missing_category(category_id)
        repo.insert_question(conn, question)
    logger.info("question_created id=%s category_id=%s type=%s", question.id, category_id, type)
    return question


def list_questions(category_id: str | None = None, include_inactive: bool = True) -> list[Question]:
    with read_only("question.list") as conn:
        return repo.list_questions(conn, category_id=category_id, include_inactive=include_inactive)


def list_active_questions() -> list[Question]:
    return list_questions(include_inactive=False)


def get_question(question_id: str) -> Question | None:
    with read_only("question.get") as conn:
        return repo.fetch_question(conn, question_id)


def update_question(
    question_id: str,
    text: str | None = None,
    category_id: str | None = None,
    order: int | None = None,
    type: str | None = None,
    choices: Sequence[str] | None = None,
    placeholder: str | None = None,
) -> Question:
    changes: dict = {}
    with transaction("question.update") as conn:
        current = repo.fetch_question(conn, question_id)
        if current is None:
            raise NotFoundError("Question not found")
        if text is not None:
            cleaned = _clean_text(text)
            if cleaned != current.text:
                changes["text"] = cleaned
        if category_id is not None and category_id != current.category_id:
            if category_repo.fetch_category(conn, category_id) is None:
                raise _missing_category(category_id)
            changes["category_id"] = category_id
        if order is not None and _check_order(order) != current.order:
            changes["order"] = order
        if type is not None or choices is not None:
            new_type = type or current.type
            new_choices = _check_shape(new_type, choices if choices is not None else current.choices)
            if new_type != current.type:
                changes["type"] = new_type
            if new_choices != current.choices:
                changes["choices"] = new_choices
        if placeholder is not None and _clean_placeholder(placeholder) != current.placeholder:
            changes["placeholder"] = _clean_placeholder(placeholder)
        if not changes:
            return current
        changes["updated_at"] = later_than(current.updated_at)
        updated = current.model_copy(update=changes)
        repo.save_question(conn, updated)
    logger.info("question_updated id=%s fields=%s", question_id, sorted(k for k in changes if k != "updated_at"))
    return updated


def soft_delete_question(question_id: str) -> bool:
    with transaction("question.soft_delete") as conn:
        current = repo.fetch_question(conn, question_id)
        if current is None:
            return False
        repo.deactivate_question(conn, question_id, later_than(current.updated_at))
    logger.info("question_soft_deleted id=%s", question_id)
    return True


def find_active_in_category(category_id: str, question_id: str) -> Question | None:
    with read_only("question.find_active_in_category") as conn:
        return repo.find_active_in_category(conn, category_id, question_id)


__all__ = [
    "MAX_TEXT_LENGTH",
    "create_question",
    "list_questions",
    "list_active_questions",
    "get_question",
    "update_question",
    "soft_delete_question",
    "find_active_in_category",
]
