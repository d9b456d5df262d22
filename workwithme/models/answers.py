"""Typed answer values.

A stored `ResponseEntry` carries an untyped `str | list[str]`; once the owning
question is known it is resolved to exactly one of these variants.
"""

from __future__ import annotations

from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field


class TextAnswer(BaseModel):
    kind: Literal["TEXT"] = "TEXT"
    question_id: str
    value: str
    answered_at: str


class ChoiceAnswer(BaseModel):
    kind: Literal["CHOICE"] = "CHOICE"
    question_id: str
    value: str
    answered_at: str


class MultiChoiceAnswer(BaseModel):
    kind: Literal["MULTICHOICE"] = "MULTICHOICE"
    question_id: str
    value: List[str]
    answered_at: str


Answer = Annotated[Union[TextAnswer, ChoiceAnswer, MultiChoiceAnswer], Field(discriminator="kind")]


__all__ = ["TextAnswer", "ChoiceAnswer", "MultiChoiceAnswer", "Answer"]
