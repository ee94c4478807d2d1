"""Terminal prompt and browser helpers used by the CLI."""

from __future__ import annotations

import asyncio

import click


def open_external(url: str) -> None:
    """Open *url* in the user's default browser."""
    click.launch(url)


class ConsolePrompter:
    """Interactive prompt: prints a warning and asks which action to take.

    Prompts are serialised so concurrent advisories never share the terminal.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()

    async def show_warning(self, message: str, *labels: str) -> str | None:
        async with self._lock:
            return await asyncio.to_thread(self._ask, message, labels)

    @staticmethod
    def _ask(message: str, labels: tuple[str, ...]) -> str | None:
        click.secho(f"\nWarning: {message}", fg="yellow", err=True)
        click.echo("  [0] Dismiss", err=True)
        for i, label in enumerate(labels, start=1):
            click.echo(f"  [{i}] {label}", err=True)
        choice = click.prompt(
            "Select an action",
            type=click.IntRange(0, len(labels)),
            default=0,
            err=True,
        )
        if choice == 0:
            return None
        return labels[choice - 1]


class AutoPrompter:
    """Non-interactive prompt that always answers with the same label.

    A *choice* of None, or one that is not offered, dismisses the warning.
    """

    def __init__(self, choice: str | None = None) -> None:
        self.choice = choice
        self.shown: list[str] = []

    async def show_warning(self, message: str, *labels: str) -> str | None:
        self.shown.append(message)
        if self.choice is not None and self.choice in labels:
            return self.choice
        return None
