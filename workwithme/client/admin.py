"""Admin back-office session over the HTTP API."""

from __future__ import annotations

import logging
from typing import List, Sequence

from workwithme.client.api import ApiClient, ApiError, BasicAuth
from workwithme.models.catalog import Category, Question

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"


class AdminSession:
    """Holds the admin credentials for the lifetime of one back-office session.

    Credentials are kept only after `/api/admin/auth` accepts the password;
    every catalog call then sends them as HTTP Basic auth.
    """

    def __init__(self, api: ApiClient) -> None:
        self.api = api
        self._auth: BasicAuth | None = None

    @property
    def authenticated(self) -> bool:
        return self._auth is not None

    def login(self, password: str) -> None:
        self.api.admin_auth(password)
        self._auth = (ADMIN_USERNAME, password)
        logger.info("admin_login")

    def logout(self) -> None:
        self._auth = None

    def _credentials(self) -> BasicAuth:
        if self._auth is None:
            raise ApiError(401, "Not authenticated")
        return self._auth

    def _call(self, method, *args, **kwargs):
        try:
            return method(self._credentials(), *args, **kwargs)
        except ApiError as exc:
            # Server rejected the stored password (changed or rotated).
            if exc.status_code == 401:
                self._auth = None
            raise

    # Categories

    def categories(self) -> List[Category]:
        return self._call(self.api.list_categories)

    def create_category(self, name: str, order: int = 0) -> Category:
        return self._call(self.api.create_category, name, order)

    def rename_category(self, category_id: str, name: str) -> Category:
        return self._call(self.api.update_category, category_id, name=name)

    def move_category(self, category_id: str, order: int) -> Category:
        return self._call(self.api.update_category, category_id, order=order)

    def delete_category(self, category_id: str, *, cascade: bool = False) -> None:
        self._call(self.api.delete_category, category_id, cascade=cascade)

    # Questions

    def questions(self, category_id: str | None = None) -> List[Question]:
        return self._call(self.api.list_questions, category_id)

    def create_question(self, text: str, category_id: str, **fields) -> Question:
        if "order" not in fields:
            existing = self.questions(category_id)
            fields["order"] = max((q.order for q in existing), default=-1) + 1
        return self._call(self.api.create_question, text=text, category_id=category_id, **fields)

    def update_question(self, question_id: str, **fields) -> Question:
        return self._call(self.api.update_question, question_id, **fields)

    def delete_question(self, question_id: str) -> None:
        self._call(self.api.delete_question, question_id)

    def reorder_questions(self, category_id: str, ordered_ids: Sequence[str]) -> List[Question]:
        """Assign orders 0..n-1 following `ordered_ids`; only changed rows are sent."""
        current = {q.id: q for q in self.questions(category_id)}
        missing = [qid for qid in ordered_ids if qid not in current]
        if missing:
            raise ApiError(404, f"Question '{missing[0]}' is not in this category")
        updated: List[Question] = []
        for position, question_id in enumerate(ordered_ids):
            question = current[question_id]
            if question.order != position:
                question = self.update_question(question_id, order=position)
            updated.append(question)
        return updated


__all__ = ["ADMIN_USERNAME", "AdminSession"]
