"""HTTP client for the How to Work With Me API.

Thin wrapper over `httpx.Client` with one method per endpoint. Responses are
parsed into the same pydantic models the server uses. Any non-2xx response
raises `ApiError` carrying the server's `error` string so callers can show
it to the user directly.
"""

from __future__ import annotations

import logging
import os
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import httpx

from workwithme.models.catalog import Category, Question
from workwithme.models.profile import AuthResponse, Profile, ResponseEntry

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8080"

BasicAuth = Tuple[str, str]


class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        return self.message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"HTTP {response.status_code}: {response.reason_phrase}"


def _dump_responses(responses: Mapping[str, Mapping[str, Any]]) -> dict:
    dumped: dict = {}
    for category_id, entries in responses.items():
        dumped[category_id] = {
            qid: entry.model_dump(by_alias=True) if isinstance(entry, ResponseEntry) else dict(entry)
            for qid, entry in entries.items()
        }
    return dumped


class ApiClient:
    """Synchronous API client.

    Pass `client` to reuse an existing `httpx.Client` (for example a FastAPI
    `TestClient`); otherwise one is created for `base_url` and closed by
    `close()` or the context manager.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        client: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = (base_url or os.getenv("WORKWITHME_API_URL") or DEFAULT_API_URL).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=self.base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict] = None,
        auth: Optional[BasicAuth] = None,
    ) -> httpx.Response:
        try:
            response = self._client.request(method, path, json=json, params=params, auth=auth)
        except httpx.HTTPError as exc:
            logger.error("api_request_failed method=%s path=%s", method, path, exc_info=True)
            raise ApiError(0, f"Could not reach the API: {exc}") from exc
        if response.is_error:
            message = _error_message(response)
            logger.info("api_error method=%s path=%s status=%s error=%s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message)
        return response

    # Public

    def get_questions(self) -> List[Question]:
        return [Question.model_validate(q) for q in self._request("GET", "/api/questions").json()]

    def get_categories(self) -> List[Category]:
        return [Category.model_validate(c) for c in self._request("GET", "/api/categories").json()]

    def create_profile(self, name: str) -> Profile:
        return Profile.model_validate(self._request("POST", "/api/profiles", json={"name": name}).json())

    def get_profile(self, profile_id: str) -> Profile:
        return Profile.model_validate(self._request("GET", f"/api/profiles/{profile_id}").json())

    def update_profile(self, profile_id: str, responses: Mapping[str, Mapping[str, Any]]) -> Profile:
        body = {"responses": _dump_responses(responses)}
        return Profile.model_validate(self._request("PUT", f"/api/profiles/{profile_id}", json=body).json())

    def get_shared_profile(self, shareable_id: str) -> Profile:
        return Profile.model_validate(self._request("GET", f"/api/profiles/share/{shareable_id}").json())

    def health(self) -> str:
        return self._request("GET", "/health").text

    # Admin

    def admin_auth(self, password: str) -> AuthResponse:
        return AuthResponse.model_validate(self._request("POST", "/api/admin/auth", json={"password": password}).json())

    def list_categories(self, auth: BasicAuth) -> List[Category]:
        return [Category.model_validate(c) for c in self._request("GET", "/api/admin/categories", auth=auth).json()]

    def create_category(self, auth: BasicAuth, name: str, order: int) -> Category:
        body = {"name": name, "order": order}
        return Category.model_validate(self._request("POST", "/api/admin/categories", json=body, auth=auth).json())

    def update_category(
        self, auth: BasicAuth, category_id: str, *, name: str | None = None, order: int | None = None
    ) -> Category:
        body = {k: v for k, v in {"name": name, "order": order}.items() if v is not None}
        response = self._request("PUT", f"/api/admin/categories/{category_id}", json=body, auth=auth)
        return Category.model_validate(response.json())

    def delete_category(self, auth: BasicAuth, category_id: str, *, cascade: bool = False) -> None:
        params = {"cascade": "true" if cascade else "false"}
        self._request("DELETE", f"/api/admin/categories/{category_id}", params=params, auth=auth)

    def list_questions(self, auth: BasicAuth, category_id: str | None = None) -> List[Question]:
        params = {"categoryId": category_id} if category_id else None
        response = self._request("GET", "/api/admin/questions", params=params, auth=auth)
        return [Question.model_validate(q) for q in response.json()]

    def create_question(
        self,
        auth: BasicAuth,
        *,
        text: str,
        category_id: str,
        order: int,
        type: str = "TEXT",
        choices: Sequence[str] | None = None,
        placeholder: str | None = None,
    ) -> Question:
        body: dict = {"text": text, "categoryId": category_id, "order": order, "type": type}
        if choices is not None:
            body["choices"] = list(choices)
        if placeholder is not None:
            body["placeholder"] = placeholder
        return Question.model_validate(self._request("POST", "/api/admin/questions", json=body, auth=auth).json())

    def update_question(self, auth: BasicAuth, question_id: str, **fields: Any) -> Question:
        names = {"category_id": "categoryId"}
        body = {names.get(k, k): v for k, v in fields.items() if v is not None}
        response = self._request("PUT", f"/api/admin/questions/{question_id}", json=body, auth=auth)
        return Question.model_validate(response.json())

    def delete_question(self, auth: BasicAuth, question_id: str) -> None:
        self._request("DELETE", f"/api/admin/questions/{question_id}", auth=auth)


__all__ = ["ApiClient", "ApiError", "BasicAuth", "DEFAULT_API_URL"]
