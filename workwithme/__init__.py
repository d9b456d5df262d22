"""How to Work With Me: questionnaire profiles with shareable links.

This package exposes a FastAPI application factory. Cross-cutting concerns
(logging, error bodies, request ids, CORS) are wired in `main`; business
logic lives in `logic/`, route handlers in `routes/`, and a Python client
for the API in `client/`.
"""

from __future__ import annotations

from workwithme.main import create_app

__all__ = ["create_app"]
