"""
Print Document.

A Document collects the rendered commands of one print job. Commands are
checked against the document's mode and rendered as they are appended.
A document is handed over exactly once: take() empties it and marks it
spent, so a second dispatch cannot resend the same commands.
"""

from typing import Iterable

from .codec import render
from .commands import Command, Mode
from .errors import DocumentSpent, IllegalForMode


class Document:
    """Ordered, append-only buffer of rendered commands for one mode."""

    def __init__(self, mode: Mode = Mode.NORMAL):
        self.mode = Mode(mode)
        self._fragments: list[str] = []
        self._spent = False

    def append(self, command: Command) -> "Document":
        """
        Validate, render and queue a command.

        Raises:
            IllegalForMode: If the command kind is not legal in this mode
            InvalidPayload: If the command content is out of range
            DocumentSpent: If the document was already dispatched
        """
        if self._spent:
            raise DocumentSpent("Document was already dispatched; start a new one")
        if not command.allowed_in(self.mode):
            raise IllegalForMode(command.kind, self.mode.value)
        command.validate(self.mode)
        self._fragments.append(render(command))
        return self

    def extend(self, commands: Iterable[Command]) -> "Document":
        """Append several commands in order."""
        for command in commands:
            self.append(command)
        return self

    def take(self) -> list[str]:
        """Hand over the rendered commands and mark the document spent."""
        if self._spent:
            raise DocumentSpent("Document was already dispatched")
        fragments, self._fragments = self._fragments, []
        self._spent = True
        return fragments

    @property
    def fragments(self) -> tuple[str, ...]:
        """Rendered commands queued so far."""
        return tuple(self._fragments)

    @property
    def spent(self) -> bool:
        return self._spent

    def __len__(self) -> int:
        return len(self._fragments)

    def __repr__(self) -> str:
        state = "spent" if self._spent else f"{len(self._fragments)} commands"
        return f"Document({self.mode.value}, {state})"
