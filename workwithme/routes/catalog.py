"""Public catalog endpoints: active questions and categories."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter

from workwithme.logic import categories, questions
from workwithme.models.catalog import Category, Question

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


@router.get(
    "/questions",
    response_model=List[Question],
    summary="List active questions",
    operation_id="listQuestions",
)
def list_questions() -> List[Question]:
    return questions.list_active_questions()


@router.get(
    "/categories",
    response_model=List[Category],
    summary="List active categories in display order",
    operation_id="listCategories",
)
def list_categories() -> List[Category]:
    return categories.list_categories(include_inactive=False)


__all__ = ["router"]
