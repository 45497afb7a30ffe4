"""Interactive prompting behind a small capability interface.

Release operations only ask the user for values the caller left out. They
receive a ``Prompter`` so tests can script the answers with
``MockPrompter``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

__all__ = ["MockPrompter", "Prompter", "TyperPrompter"]


class Prompter(Protocol):
    def ask(
        self,
        question: str,
        *,
        default: str | None = None,
        choices: Sequence[str] | None = None,
    ) -> str: ...

    def confirm(self, question: str, *, default: bool = False) -> bool: ...


class TyperPrompter:
    """Prompter for an interactive terminal."""

    def ask(
        self,
        question: str,
        *,
        default: str | None = None,
        choices: Sequence[str] | None = None,
    ) -> str:
        import click
        import typer

        if choices:
            answer: str = typer.prompt(
                question,
                default=default,
                type=click.Choice(list(choices)),
                show_choices=True,
            )
        else:
            answer = typer.prompt(question, default=default)
        return answer.strip()

    def confirm(self, question: str, *, default: bool = False) -> bool:
        import typer

        return typer.confirm(question, default=default)


def _empty_answers() -> list[str | bool]:
    return []


def _empty_questions() -> list[str]:
    return []


@dataclass
class MockPrompter:
    """Prompter that replays scripted answers in order and records questions.

    ``ask`` falls back to ``default`` when the script is exhausted; running
    out otherwise is a test bug and raises AssertionError.
    """

    answers: list[str | bool] = field(default_factory=_empty_answers)
    questions: list[str] = field(default_factory=_empty_questions)

    def ask(
        self,
        question: str,
        *,
        default: str | None = None,
        choices: Sequence[str] | None = None,
    ) -> str:
        self.questions.append(question)
        if not self.answers:
            if default is not None:
                return default
            raise AssertionError(f"unexpected question: {question}")
        answer = self.answers.pop(0)
        if not isinstance(answer, str):
            raise AssertionError(f"scripted a bool for question: {question}")
        if choices and answer not in choices:
            raise AssertionError(f"{answer!r} is not one of {list(choices)}")
        return answer

    def confirm(self, question: str, *, default: bool = False) -> bool:
        self.questions.append(question)
        if not self.answers:
            raise AssertionError(f"unexpected confirmation: {question}")
        answer = self.answers.pop(0)
        if not isinstance(answer, bool):
            raise AssertionError(f"scripted a string for confirmation: {question}")
        return answer
