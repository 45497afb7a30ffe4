from __future__ import annotations

import pytest

from miniship.services.release.prompts import MockPrompter, TyperPrompter


def test_mock_prompter_replays_answers_in_order() -> None:
    prompter = MockPrompter(answers=["Staging", True])

    assert prompter.ask("Deployment name", choices=["Staging", "Production"]) == "Staging"
    assert prompter.confirm("Copy?") is True
    assert prompter.questions == ["Deployment name", "Copy?"]


def test_mock_prompter_uses_default_when_exhausted() -> None:
    assert MockPrompter().ask("Platform name", default="ios") == "ios"


def test_mock_prompter_rejects_answer_outside_choices() -> None:
    prompter = MockPrompter(answers=["QA"])
    with pytest.raises(AssertionError):
        prompter.ask("Deployment name", choices=["Staging", "Production"])


def test_mock_prompter_unexpected_confirmation() -> None:
    with pytest.raises(AssertionError):
        MockPrompter().confirm("Copy?")


def test_typer_prompter_forwards_to_typer(monkeypatch: pytest.MonkeyPatch) -> None:
    import typer

    seen: dict[str, object] = {}

    def fake_prompt(text: str, default: object = None, **kwargs: object) -> str:
        seen["text"] = text
        seen["default"] = default
        seen["type"] = kwargs.get("type")
        return "  Production "

    def fake_confirm(text: str, default: bool = False) -> bool:
        return True

    monkeypatch.setattr(typer, "prompt", fake_prompt)
    monkeypatch.setattr(typer, "confirm", fake_confirm)

    prompter = TyperPrompter()
    assert prompter.ask("Deployment name", choices=["Staging", "Production"]) == "Production"
    assert seen["text"] == "Deployment name"
    assert seen["type"] is not None
    assert prompter.ask("Application name", default="Shop") == "Production"
    assert seen["default"] == "Shop"
    assert prompter.confirm("Copy?") is True
