"""Command-line entry point.

Usage:
    workwithme serve --port 8080
    workwithme seed
    workwithme questionnaire
    workwithme questionnaire --profile <profileId>
    workwithme share <shareableId>
    workwithme admin categories
    workwithme admin add-category "Feedback" --order 7
    workwithme admin questions --category <categoryId>
    workwithme admin add-question <categoryId> "How do you like feedback?" --type CHOICE --choice Written --choice Live
    workwithme admin delete-category <categoryId> --cascade
    workwithme admin delete-question <questionId>
    workwithme admin reorder <categoryId> <questionId> <questionId> ...

The admin password is read from ADMIN_PASSWORD unless --password is given.
"""

from __future__ import annotations

import argparse
import getpass
import logging
import os
import sys
from typing import Sequence

from dotenv import load_dotenv

from workwithme.client.admin import AdminSession
from workwithme.client.api import ApiClient, ApiError
from workwithme.client.terminal import render_shared_profile, run_questionnaire
from workwithme.client.wizard import QuestionnaireWizard, view_shared_profile
from workwithme.logging_setup import configure_logging
from workwithme.models.catalog import QuestionType

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="workwithme",
        description="How to Work With Me: API server and terminal client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--api-url", help="API base URL (default: WORKWITHME_API_URL or http://localhost:8080)")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=int(os.getenv("PORT", "8080")))
    serve.add_argument("--reload", action="store_true")

    sub.add_parser("seed", help="Insert the default catalog into an empty store")

    questionnaire = sub.add_parser("questionnaire", help="Fill in the questionnaire interactively")
    questionnaire.add_argument("--profile", help="Edit an existing profile instead of creating one")
    questionnaire.add_argument("--frontend-url", default=os.getenv("FRONTEND_BASE_URL", "http://localhost:5173"))

    share = sub.add_parser("share", help="Print a shared profile")
    share.add_argument("shareable_id")

    admin = sub.add_parser("admin", help="Manage categories and questions")
    admin.add_argument("--password", help="Admin password (default: ADMIN_PASSWORD)")
    actions = admin.add_subparsers(dest="action", required=True)
    actions.add_parser("categories")
    add_category = actions.add_parser("add-category")
    add_category.add_argument("name")
    add_category.add_argument("--order", type=int, default=0)
    rename = actions.add_parser("rename-category")
    rename.add_argument("category_id")
    rename.add_argument("name")
    delete_category = actions.add_parser("delete-category")
    delete_category.add_argument("category_id")
    delete_category.add_argument("--cascade", action="store_true")
    list_questions = actions.add_parser("questions")
    list_questions.add_argument("--category")
    add_question = actions.add_parser("add-question")
    add_question.add_argument("category_id")
    add_question.add_argument("text")
    add_question.add_argument("--type", choices=sorted(QuestionType.ALL), default=QuestionType.TEXT)
    add_question.add_argument("--choice", action="append", dest="choices")
    add_question.add_argument("--placeholder")
    delete_question = actions.add_parser("delete-question")
    delete_question.add_argument("question_id")
    reorder = actions.add_parser("reorder")
    reorder.add_argument("category_id")
    reorder.add_argument("question_ids", nargs="+")

    return parser.parse_args(argv)


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("workwithme.main:create_app", factory=True, host=args.host, port=args.port, reload=args.reload)
    return 0


def _seed() -> int:
    from workwithme.config import load_config
    from workwithme.db.base import get_engine
    from workwithme.db.migrations_runner import apply_migrations
    from workwithme.logic.seeder import seed_catalog

    config = load_config()
    apply_migrations(get_engine(config.database.url))
    created = seed_catalog()
    print(f"Seeded {created} questions" if created else "Catalog already present; nothing seeded")
    return 0


def _admin(api: ApiClient, args: argparse.Namespace) -> int:
    password = args.password or os.getenv("ADMIN_PASSWORD") or getpass.getpass("Admin password: ")
    session = AdminSession(api)
    session.login(password)

    if args.action == "categories":
        for c in session.categories():
            state = "" if c.active else " (inactive)"
            print(f"{c.order:>3}  {c.id}  {c.name}{state}")
    elif args.action == "add-category":
        c = session.create_category(args.name, args.order)
        print(f"Created category {c.id}")
    elif args.action == "rename-category":
        session.rename_category(args.category_id, args.name)
    elif args.action == "delete-category":
        session.delete_category(args.category_id, cascade=args.cascade)
    elif args.action == "questions":
        for q in session.questions(args.category):
            state = "" if q.active else " (inactive)"
            print(f"{q.order:>3}  {q.id}  [{q.type}] {q.text}{state}")
    elif args.action == "add-question":
        q = session.create_question(
            args.text, args.category_id, type=args.type, choices=args.choices, placeholder=args.placeholder
        )
        print(f"Created question {q.id}")
    elif args.action == "delete-question":
        session.delete_question(args.question_id)
    elif args.action == "reorder":
        session.reorder_questions(args.category_id, args.question_ids)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    configure_logging()
    args = parse_args(argv)

    if args.command == "serve":
        return _serve(args)
    if args.command == "seed":
        return _seed()

    with ApiClient(args.api_url) as api:
        try:
            if args.command == "questionnaire":
                wizard = QuestionnaireWizard(api, frontend_base_url=args.frontend_url)
                if args.profile:
                    wizard.resume(args.profile)
                    # resume() jumps straight to the first category
                    run_questionnaire(wizard, skip_name=True)
                else:
                    run_questionnaire(wizard)
            elif args.command == "share":
                render_shared_profile(view_shared_profile(api, args.shareable_id))
            elif args.command == "admin":
                return _admin(api, args)
        except ApiError as exc:
            print(f"Error: {exc.message}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
