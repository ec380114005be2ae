"""Console output for the CLI.

All CLI output goes through this module so it stays consistent.
"""

from rich.console import Console as RichConsole


class Console:
    """Thin wrapper over rich for CLI messages."""

    def __init__(self) -> None:
        self._out = RichConsole()
        self._err = RichConsole(stderr=True)

    def print(self, *args, **kwargs) -> None:
        self._out.print(*args, **kwargs)

    def success(self, message: str) -> None:
        self._out.print(f"[green]✓[/green] {message}")

    def error(self, message: str, hint: str | None = None) -> None:
        self._err.print(f"[bold red]Error:[/bold red] {message}")
        if hint:
            self._err.print(f"[dim]{hint}[/dim]")


_console: Console | None = None


def get_console() -> Console:
    global _console
    if _console is None:
        _console = Console()
    return _console
