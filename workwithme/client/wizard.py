"""Questionnaire wizard state machine.

Flow: name entry, then one screen per active category in category order,
then a summary with the share link. Answers stay in memory until the last
category's `next()`, which writes the complete map in a single update.
Abandoning the wizard before that discards the unsaved answers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union

from workwithme.client.api import ApiClient
from workwithme.logic.answers import resolve_answer, to_entry
from workwithme.logic.errors import ValidationError
from workwithme.logic.ids import format_timestamp
from workwithme.models.catalog import Category, Question
from workwithme.models.profile import Profile, ResponseEntry

logger = logging.getLogger(__name__)

AnswerValue = Union[str, List[str]]


class WizardStep:
    NAME_ENTRY = "NAME_ENTRY"
    CATEGORY = "CATEGORY"
    SUMMARY = "SUMMARY"


@dataclass
class CategoryScreen:
    category: Category
    questions: List[Question]


@dataclass
class QuestionnaireWizard:
    api: ApiClient
    frontend_base_url: str = "http://localhost:5173"
    step: str = WizardStep.NAME_ENTRY
    profile: Optional[Profile] = None
    screens: List[CategoryScreen] = field(default_factory=list)
    index: int = 0
    responses: Dict[str, Dict[str, ResponseEntry]] = field(default_factory=dict)

    # Entry points

    def start(self, name: str) -> CategoryScreen | None:
        """Create the profile and move to the first category screen."""
        if self.step != WizardStep.NAME_ENTRY:
            raise RuntimeError("The questionnaire has already started")
        if not name or not name.strip():
            raise ValidationError("Name cannot be empty")
        self.profile = self.api.create_profile(name.strip())
        self._load_screens()
        return self._enter_categories()

    def resume(self, profile_id: str) -> CategoryScreen | None:
        """Edit an existing profile, pre-filled with its saved responses.

        Saved answers to questions no longer in the active catalog are dropped;
        the server would reject them on submit.
        """
        self.profile = self.api.get_profile(profile_id)
        self._load_screens()
        on_screen = {s.category.id: {q.id for q in s.questions} for s in self.screens}
        self.responses = {
            cat: {qid: entry for qid, entry in entries.items() if qid in on_screen.get(cat, ())}
            for cat, entries in self.profile.responses.items()
        }
        return self._enter_categories()

    def _load_screens(self) -> None:
        questions = self.api.get_questions()
        self.screens = [
            CategoryScreen(
                category=category,
                questions=sorted((q for q in questions if q.category_id == category.id), key=lambda q: (q.order, q.id)),
            )
            for category in self.api.get_categories()
        ]

    def _enter_categories(self) -> CategoryScreen | None:
        self.index = 0
        if not self.screens:
            self._submit()
            return None
        self.step = WizardStep.CATEGORY
        return self.current

    # Category screens

    @property
    def current(self) -> CategoryScreen:
        if self.step != WizardStep.CATEGORY:
            raise RuntimeError("No category screen is active")
        return self.screens[self.index]

    @property
    def progress(self) -> tuple[int, int]:
        return self.index + 1, len(self.screens)

    def current_answers(self) -> Dict[str, AnswerValue]:
        saved = self.responses.get(self.current.category.id, {})
        return {qid: entry.value for qid, entry in saved.items()}

    def answer(self, question_id: str, value: AnswerValue) -> None:
        """Record an answer on the current screen; blank values clear it."""
        screen = self.current
        question = next((q for q in screen.questions if q.id == question_id), None)
        if question is None:
            raise ValidationError(f"Question '{question_id}' is not on this screen")
        bucket = self.responses.setdefault(screen.category.id, {})
        if value in ("", [], None):
            bucket.pop(question_id, None)
            return
        entry = ResponseEntry(value=value, answered_at=format_timestamp(datetime.now(timezone.utc)))
        bucket[question_id] = to_entry(resolve_answer(question, entry))

    def back(self) -> CategoryScreen:
        if self.index > 0:
            self.index -= 1
        return self.current

    def next(self) -> CategoryScreen | None:
        """Advance; on the last category submit everything and show the summary.

        A failed submit leaves the wizard on the last category with answers
        intact and re-raises the ApiError.
        """
        if self.step != WizardStep.CATEGORY:
            raise RuntimeError("No category screen is active")
        if self.index < len(self.screens) - 1:
            self.index += 1
            return self.current
        self._submit()
        return None

    def _submit(self) -> None:
        if self.profile is None:
            raise RuntimeError("No profile yet")
        payload = {cat: entries for cat, entries in self.responses.items() if entries}
        self.profile = self.api.update_profile(self.profile.id, payload)
        self.step = WizardStep.SUMMARY
        logger.info("questionnaire_submitted profile_id=%s categories=%s", self.profile.id, len(payload))

    # Summary

    @property
    def share_url(self) -> str:
        if self.profile is None:
            raise RuntimeError("No profile yet")
        return f"{self.frontend_base_url.rstrip('/')}/share/{self.profile.shareable_id}"


@dataclass
class SharedSection:
    title: str
    items: List[tuple[str, AnswerValue]]


@dataclass
class SharedProfileView:
    name: str
    sections: List[SharedSection]


def view_shared_profile(api: ApiClient, shareable_id: str) -> SharedProfileView:
    """Fetch a shared profile and label its answers from the public catalog.

    Answers to questions no longer in the catalog keep their stored id as
    the label so nothing the user wrote is hidden.
    """
    profile = api.get_shared_profile(shareable_id)
    categories = {c.id: c for c in api.get_categories()}
    questions = {q.id: q for q in api.get_questions()}

    def _position(category_id: str) -> tuple[int, str]:
        cat = categories.get(category_id)
        return (cat.order if cat else 1_000_000, category_id)

    sections: List[SharedSection] = []
    for category_id in sorted(profile.responses, key=_position):
        entries = profile.responses[category_id]
        if not entries:
            continue
        ordered = sorted(
            entries.items(),
            key=lambda kv: (questions[kv[0]].order if kv[0] in questions else 1_000_000, kv[0]),
        )
        items = [(questions[qid].text if qid in questions else qid, entry.value) for qid, entry in ordered]
        title = categories[category_id].name if category_id in categories else category_id
        sections.append(SharedSection(title=title, items=items))
    return SharedProfileView(name=profile.name, sections=sections)


__all__ = [
    "WizardStep",
    "CategoryScreen",
    "QuestionnaireWizard",
    "SharedSection",
    "SharedProfileView",
    "view_shared_profile",
]
