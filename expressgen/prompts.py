"""Interactive collection of a :class:`FeatureSelection`."""

from __future__ import annotations

from typing import Any

from rich.prompt import Confirm, Prompt

from expressgen.config import CURRENT_DIR, FeatureSelection, Language
from expressgen.utils import console

# (answer key, question, default) in the order they are asked
_CONFIRMS: tuple[tuple[str, str, bool], ...] = (
    ("env_file", "Do you want an .env file?", True),
    ("enable_cors", "Enable CORS?", True),
    ("database", "Set up a basic database connection?", False),
    ("gitignore", "Create a .gitignore file?", True),
    ("nodemon", "Do you want to use nodemon?", False),
    ("dockerfile", "Create a Dockerfile?", False),
)


def default_answers(project_name: str = CURRENT_DIR) -> dict[str, Any]:
    """Answers used by ``--defaults``: every question at its default."""
    answers: dict[str, Any] = {
        "project_name": project_name,
        "language": Language.TYPESCRIPT.value,
    }
    for key, _question, default in _CONFIRMS:
        answers[key] = default
    answers["ts_config"] = False
    return answers


def collect_selection(project_name: str | None = None) -> FeatureSelection:
    """Ask the user every question and validate the answers.

    The ``tsconfig.json`` question is only asked for TypeScript projects.

    Raises:
        ValidationError: If the answers are not usable.
    """
    answers: dict[str, Any] = {}
    if project_name is None:
        project_name = Prompt.ask(
            "Project name ('.' for the current directory)",
            default=CURRENT_DIR,
            console=console,
        )
    answers["project_name"] = project_name
    answers["language"] = Prompt.ask(
        "Select the language",
        choices=[lang.value for lang in Language],
        default=Language.TYPESCRIPT.value,
        console=console,
    )
    for key, question, default in _CONFIRMS:
        answers[key] = Confirm.ask(question, default=default, console=console)

    answers["ts_config"] = False
    if answers["language"] == Language.TYPESCRIPT.value:
        answers["ts_config"] = Confirm.ask(
            "Do you want to create a tsconfig.json file?",
            default=False,
            console=console,
        )
    return FeatureSelection.from_answers(answers)
