"""Collaborator protocols consumed by the merge orchestrator."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class Choice(str, Enum):
    """Answer to a proceed/cancel confirmation."""

    PROCEED = "proceed"
    CANCEL = "cancel"


class ClipboardSource(Protocol):
    def read_text(self) -> str | None:
        """Return clipboard text, or None when no text payload is present."""


class ClipboardSink(Protocol):
    def write_text(self, text: str) -> None:
        """Place text on the clipboard, best effort."""


class ConfirmationPrompt(Protocol):
    def confirm(self, message: str) -> Choice:
        """Ask a proceed/cancel question and wait for the answer."""

    def choose(self, message: str, options: Sequence[str]) -> str | None:
        """Ask the user to pick one option; None when dismissed."""


class StatusSink(Protocol):
    def log(self, message: str) -> None:
        """Record a fire-and-forget status message."""


@dataclass(slots=True)
class MemoryClipboard:
    """In-process clipboard usable as both source and sink."""

    text: str | None = None
    writes: list[str] = field(default_factory=list)

    def read_text(self) -> str | None:
        return self.text

    def write_text(self, text: str) -> None:
        self.text = text
        self.writes.append(text)


@dataclass(slots=True, frozen=True)
class PromptExchange:
    """One question asked through a ScriptedPrompt and the answer given."""

    message: str
    options: tuple[str, ...]
    answer: str | None


class ScriptedPrompt:
    """Confirmation prompt answering from a pre-recorded list of responses.

    Answers are consumed in order. Once they run out every confirmation is
    cancelled and every choice is dismissed.
    """

    def __init__(self, answers: Iterable[str] = ()) -> None:
        self._answers = list(answers)
        self._position = 0
        self._transcript: list[PromptExchange] = []

    @property
    def transcript(self) -> tuple[PromptExchange, ...]:
        return tuple(self._transcript)

    def confirm(self, message: str) -> Choice:
        answer = self._next_answer()
        choice = Choice.CANCEL
        if answer is not None and answer.lower() == Choice.PROCEED.value:
            choice = Choice.PROCEED
        self._transcript.append(
            PromptExchange(
                message=message,
                options=(Choice.PROCEED.value, Choice.CANCEL.value),
                answer=choice.value,
            )
        )
        return choice

    def choose(self, message: str, options: Sequence[str]) -> str | None:
        answer = self._next_answer()
        picked: str | None = None
        if answer is not None:
            for option in options:
                if option.lower() == answer.lower():
                    picked = option
                    break
        self._transcript.append(
            PromptExchange(message=message, options=tuple(options), answer=picked)
        )
        return picked

    def _next_answer(self) -> str | None:
        if self._position >= len(self._answers):
            return None
        answer = self._answers[self._position]
        self._position += 1
        return answer
