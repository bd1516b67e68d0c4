"""Styling helpers for terminal output.

Helpers return rich console markup; user-supplied text is escaped so that
brackets in terms are never read as markup. Whether colours are actually
emitted is decided by the :class:`rich.console.Console` that prints them.
"""

from rich.console import Console
from rich.markup import escape


class Colors:
    """Rich markup for the message kinds used by nbe-lang."""

    @staticmethod
    def success(text: str) -> str:
        """Format success message."""
        return f"[green]✓[/green] {escape(text)}"

    @staticmethod
    def error(text: str) -> str:
        """Format error message."""
        return f"[red]✗[/red] {escape(text)}"

    @staticmethod
    def info(text: str) -> str:
        return f"[blue]ℹ[/blue] {escape(text)}"

    @staticmethod
    def hint(text: str) -> str:
        return f"[cyan]{escape(text)}[/cyan]"

    @staticmethod
    def bold(text: str) -> str:
        return f"[bold]{escape(text)}[/bold]"

    @staticmethod
    def dim(text: str) -> str:
        return f"[dim]{escape(text)}[/dim]"

    @staticmethod
    def type_name(text: str) -> str:
        """Format a pretty-printed type."""
        return f"[cyan]{escape(text)}[/cyan]"

    @staticmethod
    def var_name(text: str) -> str:
        return f"[magenta]{escape(text)}[/magenta]"

    @staticmethod
    def term(text: str) -> str:
        """Format a pretty-printed term."""
        return f"[green]{escape(text)}[/green]"


def make_console(color: bool = True, stderr: bool = False) -> Console:
    """Create a console; ``color=False`` strips all styling."""
    return Console(
        stderr=stderr,
        no_color=not color,
        highlight=False,
        soft_wrap=True,
    )
