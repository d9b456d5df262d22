"""Line-based terminal front end for the questionnaire and shared profiles."""

from __future__ import annotations

from typing import Callable, List, Sequence

from workwithme.client.api import ApiError
from workwithme.client.wizard import QuestionnaireWizard, SharedProfileView, WizardStep
from workwithme.logic.errors import CatalogError
from workwithme.models.catalog import Question, QuestionType

Prompt = Callable[[str], str]
Echo = Callable[[str], None]


def _parse_choices(raw: str, choices: Sequence[str]) -> List[str]:
    """Turn "1,3" or "Slack, Email" into choice values; unknown picks are skipped."""
    picked: List[str] = []
    for token in (t.strip() for t in raw.split(",")):
        if not token:
            continue
        if token.isdigit() and 1 <= int(token) <= len(choices):
            value = choices[int(token) - 1]
        elif token in choices:
            value = token
        else:
            continue
        if value not in picked:
            picked.append(value)
    return picked


def ask_question(question: Question, current, prompt: Prompt, echo: Echo):
    echo(question.text)
    choices = question.choices or []
    for number, choice in enumerate(choices, start=1):
        echo(f"  {number}. {choice}")
    hint = question.placeholder or ""
    if current:
        hint = f"current: {', '.join(current) if isinstance(current, list) else current}"
    raw = prompt(f"> ({hint}) " if hint else "> ").strip()
    if not raw:
        return current if current else ""
    if question.type == QuestionType.TEXT:
        return raw
    picked = _parse_choices(raw, choices)
    if question.type == QuestionType.CHOICE:
        return picked[0] if picked else ""
    return picked


def run_questionnaire(
    wizard: QuestionnaireWizard,
    prompt: Prompt = input,
    echo: Echo = print,
    *,
    skip_name: bool = False,
) -> str | None:
    """Drive the wizard to the summary; returns the share URL, or None on abort.

    With `skip_name` the wizard must already be past name entry (see `resume`).
    """
    screen = wizard.current if skip_name and wizard.step == WizardStep.CATEGORY else None
    while not skip_name:
        name = prompt("Your name: ").strip()
        try:
            screen = wizard.start(name)
            break
        except CatalogError as exc:
            echo(exc.message)
    while screen is not None:
        step, total = wizard.progress
        echo(f"\n[{step}/{total}] {screen.category.name}")
        answers = wizard.current_answers()
        for question in screen.questions:
            wizard.answer(question.id, ask_question(question, answers.get(question.id), prompt, echo))
        action = prompt("[n]ext, [b]ack, [q]uit: ").strip().lower() or "n"
        if action.startswith("q"):
            echo("Questionnaire abandoned; answers were not saved.")
            return None
        if action.startswith("b"):
            screen = wizard.back()
            continue
        try:
            screen = wizard.next()
        except ApiError as exc:
            echo(f"Could not save your answers: {exc.message}")
    echo(f"\nThanks, {wizard.profile.name}! Share your profile: {wizard.share_url}")
    return wizard.share_url


def render_shared_profile(view: SharedProfileView, echo: Echo = print) -> None:
    echo(f"How to work with {view.name}")
    if not view.sections:
        echo("No answers yet.")
    for section in view.sections:
        echo(f"\n{section.title}")
        for label, value in section.items:
            shown = ", ".join(value) if isinstance(value, list) else value
            echo(f"  {label}")
            echo(f"    {shown}")


__all__ = ["ask_question", "run_questionnaire", "render_shared_profile"]
