"""Terminal prompts and messages on top of rich.

Every prompt returns ``None`` when the user cancels (Ctrl-C or EOF), so the
interactive flows can stop without a traceback. Tests substitute a scripted
prompter with the same methods.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

Validator = Callable[[str], str | None]


@dataclass(frozen=True)
class Option:
    value: str
    label: str
    hint: str = ""


class Prompter:
    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def text(
        self,
        message: str,
        *,
        default: str | None = None,
        validate: Validator | None = None,
        password: bool = False,
    ) -> str | None:
        """Ask until ``validate`` accepts the answer (it returns an error or None)."""
        kwargs = {"default": default} if default is not None else {}
        while True:
            try:
                value = Prompt.ask(message, console=self.console, password=password, **kwargs)
            except (KeyboardInterrupt, EOFError):
                self.console.print()
                return None
            value = (value or "").strip()
            error = validate(value) if validate else None
            if error:
                self.console.print(f"[red]✗ {error}[/red]")
                continue
            return value

    def confirm(self, message: str, default: bool = False) -> bool | None:
        try:
            return Confirm.ask(message, console=self.console, default=default)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None

    def select(self, message: str, options: Sequence[Option]) -> str | None:
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(style="cyan", justify="right")
        table.add_column()
        table.add_column(style="dim")
        for index, option in enumerate(options, 1):
            table.add_row(str(index), option.label, option.hint)
        self.console.print(f"\n[bold]{message}[/bold]")
        self.console.print(table)

        choices = [str(i) for i in range(1, len(options) + 1)]
        try:
            answer = Prompt.ask("Choose", console=self.console, choices=choices, show_choices=False)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None
        return options[int(answer) - 1].value

    def pause(self) -> None:
        try:
            Prompt.ask("[dim]Press Enter to continue[/dim]", console=self.console, default="", show_default=False)
        except (KeyboardInterrupt, EOFError):
            self.console.print()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def note(self, message: str, title: str | None = None) -> None:
        self.console.print(Panel(message, title=title, title_align="left", border_style="blue", expand=False))

    def info(self, message: str) -> None:
        self.console.print(message)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓ {message}[/green]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {message}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗ {message}[/red]")


def select_shop(prompter: Prompter, shops: Sequence[str], message: str, hint: str = "") -> str | None:
    options = [Option(shop, shop, hint.format(shop=shop) if hint else "") for shop in shops]
    return prompter.select(message, options)


ENVIRONMENT_OPTIONS = [
    Option("staging", "Staging", "Safe for development"),
    Option("production", "Production", "Live store - be careful!"),
]


def select_environment(prompter: Prompter) -> str | None:
    return prompter.select("Select environment:", ENVIRONMENT_OPTIONS)
