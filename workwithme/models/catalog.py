"""Pydantic models for the category/question catalog.

Wire names are camelCase (`categoryId`, `createdAt`); Python attributes stay
snake_case and either form is accepted on input.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


QuestionTypeName = Literal["TEXT", "CHOICE", "MULTICHOICE"]


class QuestionType:
    TEXT = "TEXT"
    CHOICE = "CHOICE"
    MULTICHOICE = "MULTICHOICE"

    ALL = (TEXT, CHOICE, MULTICHOICE)
    WITH_CHOICES = (CHOICE, MULTICHOICE)


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Category(ApiModel):
    id: str
    name: str
    order: int
    active: bool = True
    created_at: str
    updated_at: str


class Question(ApiModel):
    id: str
    category_id: str
    text: str
    type: QuestionTypeName = "TEXT"
    choices: Optional[List[str]] = None
    placeholder: Optional[str] = None
    order: int
    active: bool = True
    created_at: str
    updated_at: str


class CreateCategoryRequest(ApiModel):
    name: str
    order: int = 0


class UpdateCategoryRequest(ApiModel):
    name: Optional[str] = None
    order: Optional[int] = None


class CreateQuestionRequest(ApiModel):
    text: str
    category_id: str
    order: int = 0
    type: QuestionTypeName = "TEXT"
    choices: Optional[List[str]] = None
    placeholder: Optional[str] = None


class UpdateQuestionRequest(ApiModel):
    text: Optional[str] = None
    category_id: Optional[str] = None
    order: Optional[int] = None
    type: Optional[QuestionTypeName] = None
    choices: Optional[List[str]] = None
    placeholder: Optional[str] = None


__all__ = [
    "QuestionTypeName",
    "QuestionType",
    "ApiModel",
    "Category",
    "Question",
    "CreateCategoryRequest",
    "UpdateCategoryRequest",
    "CreateQuestionRequest",
    "UpdateQuestionRequest",
]
