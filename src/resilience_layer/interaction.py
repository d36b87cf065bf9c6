"""
Yes/no confirmation capability.

The fallback prompt is modelled as a pluggable async capability so that
non-interactive environments can supply a canned answer instead of
blocking on standard input.
"""

import asyncio
from typing import Protocol

import click


class Confirmer(Protocol):
    """Asks the operator a yes/no question and shows informational notices."""

    async def confirm(self, question: str) -> bool:
        ...

    def notify(self, message: str) -> None:
        ...


class ConsoleConfirmer:
    """
    Interactive confirmer on standard input/output.

    Only a case-insensitive "y" counts as yes; empty input or anything else
    is a no. The blocking read runs in a worker thread so pending tasks on
    the event loop keep running.
    """

    async def confirm(self, question: str) -> bool:
        answer = await asyncio.to_thread(
            click.prompt,
            question,
            default="",
            show_default=False,
            prompt_suffix="",
        )
        return answer.strip().lower() == "y"

    def notify(self, message: str) -> None:
        click.echo(message)


class StaticConfirmer:
    """
    Non-interactive confirmer returning a fixed answer.

    Questions and notices are recorded for inspection. With echo=True
    notices are also written to standard output.
    """

    def __init__(self, answer: bool = False, echo: bool = False):
        self.answer = answer
        self.echo = echo
        self.questions: list[str] = []
        self.notices: list[str] = []

    async def confirm(self, question: str) -> bool:
        self.questions.append(question)
        return self.answer

    def notify(self, message: str) -> None:
        self.notices.append(message)
        if self.echo:
            click.echo(message)
