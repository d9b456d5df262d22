"""Default catalog seeding.

Inserts the starter categories and questions only into an empty catalog, so
running it repeatedly is harmless.
"""

from __future__ import annotations

import logging

from workwithme.db.base import read_only
from workwithme.logic import categories, questions
from workwithme.logic import repository_categories as category_repo
from workwithme.models.catalog import QuestionType

logger = logging.getLogger(__name__)


DEFAULT_CATALOG: list[dict] = [
    {
        "name": "Communication Preferences",
        "questions": [
            {
                "text": "What's your preferred communication channel?",
                "type": QuestionType.CHOICE,
                "choices": ["Slack", "Email", "Video call", "In-person", "Mix - depends on urgency"],
            },
            {
                "text": "What are your typical response time expectations?",
                "placeholder": "e.g., Within 24 hours for email, 1 hour for Slack during work hours",
            },
            {
                "text": "When do you prefer to schedule meetings?",
                "placeholder": "e.g., Afternoons, no meetings before 10 AM",
            },
        ],
    },
    {
        "name": "Work Style",
        "questions": [
            {"text": "When are your deep focus hours?", "placeholder": "e.g., 9-11 AM daily, no interruptions please"},
            {"text": "How do you prefer to collaborate?", "placeholder": "e.g., Async first, sync when needed"},
            {"text": "What's your timezone and typical working hours?", "placeholder": "e.g., EST, 9 AM - 5 PM"},
        ],
    },
    {
        "name": "Feedback Style",
        "questions": [
            {
                "text": "How do you prefer to receive feedback?",
                "type": QuestionType.CHOICE,
                "choices": ["Direct and concise", "Diplomatic with context", "Mix of both", "Written first, then discuss"],
            },
            {
                "text": "How often do you like to receive feedback?",
                "placeholder": "e.g., Regular 1:1s, real-time, after projects",
            },
        ],
    },
    {
        "name": "Strengths & Growing Areas",
        "questions": [
            {
                "text": "What are your key strengths?",
                "placeholder": "e.g., Strategic thinking, problem-solving, mentoring",
            },
            {
                "text": "What areas are you currently focused on developing?",
                "placeholder": "e.g., Public speaking, delegation, technical depth",
            },
        ],
    },
    {
        "name": "Pet Peeves & Energizers",
        "questions": [
            {
                "text": "What are your workplace pet peeves?",
                "placeholder": "e.g., Last-minute meetings, unclear objectives",
            },
            {
                "text": "What energizes you at work?",
                "type": QuestionType.MULTICHOICE,
                "choices": [
                    "Solving complex problems",
                    "Helping teammates grow",
                    "Shipping to users",
                    "Learning new tools",
                ],
            },
        ],
    },
    {
        "name": "Personal Context",
        "questions": [
            {
                "text": "What are your hobbies or interests outside of work?",
                "placeholder": "e.g., Hiking, photography, cooking",
            },
            {
                "text": "Any fun facts you'd like to share?",
                "placeholder": "e.g., Lived in 3 countries, speak 4 languages",
            },
        ],
    },
]


def seed_catalog(catalog: list[dict] | None = None) -> int:
    """Seed the catalog when no category exists yet; return questions created."""
    with read_only("seed.count") as conn:
        existing = category_repo.count_categories(conn)
    if existing > 0:
        logger.info("seed_skipped existing_categories=%s", existing)
        return 0

    created = 0
    for position, entry in enumerate(catalog or DEFAULT_CATALOG):
        category = categories.create_category(entry["name"], position)
        for order, q in enumerate(entry.get("questions", [])):
            questions.create_question(
                q["text"],
                category.id,
                order,
                type=q.get("type", QuestionType.TEXT),
                choices=q.get("choices"),
                placeholder=q.get("placeholder"),
            )
            created += 1
    logger.info("seed_completed categories=%s questions=%s", len(catalog or DEFAULT_CATALOG), created)
    return created


__all__ = ["DEFAULT_CATALOG", "seed_catalog"]
