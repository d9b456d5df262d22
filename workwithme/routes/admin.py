"""Admin catalog endpoints.

`POST /api/admin/auth` checks a password from the body. Every other route
here sits behind the HTTP Basic dependency, so a bad credential yields 401
before ids are parsed or the store is touched.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from workwithme.http.auth import check_admin_password, require_admin
from workwithme.http.params import parse_object_id
from workwithme.logic import categories, questions
from workwithme.logic.errors import InvalidCategoryError, NotFoundError
from workwithme.logic.ids import is_object_id
from workwithme.models.catalog import (
    Category,
    CreateCategoryRequest,
    CreateQuestionRequest,
    Question,
    UpdateCategoryRequest,
    UpdateQuestionRequest,
)
from workwithme.models.profile import AuthRequest, AuthResponse

auth_router = APIRouter(prefix="/api/admin")
router = APIRouter(prefix="/api/admin", dependencies=[Depends(require_admin)])
logger = logging.getLogger(__name__)


def _category_ref(raw: str) -> str:
    if not is_object_id(raw):
        raise InvalidCategoryError("Invalid category ID format")
    return raw.strip().lower()


@auth_router.post(
    "/auth",
    response_model=AuthResponse,
    summary="Check the admin password",
    operation_id="adminAuth",
)
def authenticate(payload: AuthRequest, request: Request) -> AuthResponse:
    check_admin_password(request, payload.password)
    logger.info("admin_authenticated")
    return AuthResponse(authenticated=True, message="Authentication successful")


# Categories


@router.get("/categories", response_model=List[Category], operation_id="adminListCategories")
def list_categories() -> List[Category]:
    return categories.list_categories(include_inactive=True)


@router.post("/categories", response_model=Category, status_code=201, operation_id="adminCreateCategory")
def create_category(payload: CreateCategoryRequest) -> Category:
    return categories.create_category(payload.name, payload.order)


@router.put("/categories/{category_id}", response_model=Category, operation_id="adminUpdateCategory")
def update_category(category_id: str, payload: UpdateCategoryRequest) -> Category:
    cid = parse_object_id(category_id, "category")
    return categories.update_category(cid, name=payload.name, order=payload.order)


@router.delete("/categories/{category_id}", status_code=204, operation_id="adminDeleteCategory")
def delete_category(category_id: str, cascade: bool = False) -> Response:
    cid = parse_object_id(category_id, "category")
    if not categories.soft_delete_category(cid, cascade=cascade):
        raise NotFoundError("Category not found")
    return Response(status_code=204)


# Questions


@router.get("/questions", response_model=List[Question], operation_id="adminListQuestions")
def list_questions(category_id: Optional[str] = Query(default=None, alias="categoryId")) -> List[Question]:
    cid = parse_object_id(category_id, "category") if category_id is not None else None
    return questions.list_questions(category_id=cid, include_inactive=True)


@router.post("/questions", response_model=Question, status_code=201, operation_id="adminCreateQuestion")
def create_question(payload: CreateQuestionRequest) -> Question:
    return questions.create_question(
        payload.text,
        _category_ref(payload.category_id),
        payload.order,
        type=payload.type,
        choices=payload.choices,
        placeholder=payload.placeholder,
    )


@router.put("/questions/{question_id}", response_model=Question, operation_id="adminUpdateQuestion")
def update_question(question_id: str, payload: UpdateQuestionRequest) -> Question:
    qid = parse_object_id(question_id, "question")
    return questions.update_question(
        qid,
        text=payload.text,
        category_id=_category_ref(payload.category_id) if payload.category_id is not None else None,
        order=payload.order,
        type=payload.type,
        choices=payload.choices,
        placeholder=payload.placeholder,
    )


@router.delete("/questions/{question_id}", status_code=204, operation_id="adminDeleteQuestion")
def delete_question(question_id: str) -> Response:
    qid = parse_object_id(question_id, "question")
    if not questions.soft_delete_question(qid):
        raise NotFoundError("Question not found")
    return Response(status_code=204)


__all__ = ["router", "auth_router"]
