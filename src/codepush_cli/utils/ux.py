"""User experience utilities for the CodePush CLI."""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# Define a custom theme for consistent styling
CUSTOM_THEME = Theme(
    {
        "info": "bold cyan",
        "error": "bold red",
    }
)

# Create console for terminal output
console = Console(theme=CUSTOM_THEME)

# Spinners go to stderr so machine-readable stdout stays clean
err_console = Console(theme=CUSTOM_THEME, stderr=True)

logger = logging.getLogger("codepush-cli")


def print_error(
    message: str,
    *args: Any,
    log: bool = True,
    console_output: bool = True,
    **kwargs: Any,
) -> None:
    """Print an error message."""
    if console_output:
        err_console.print(f"[error]ERROR:[/error] {message}", *args, **kwargs)
    if log:
        logger.error(Text.from_markup(message).plain)


@contextmanager
def progress(message: str) -> Iterator[None]:
    """Show a spinner with ``message`` while the wrapped block runs."""
    with err_console.status(f"[bold green]{message}", spinner="dots"):
        yield


def print_table(titles: Sequence[str], rows: List[Sequence[str]]) -> None:
    """Print rows under cyan column titles."""
    table = Table(show_header=True, header_style="cyan", border_style="blue", expand=False)
    for title in titles:
        table.add_column(title)

    for row in rows:
        table.add_row(*row)

    console.print(table)
