import sys

from rich.console import Console
from rich.markup import escape

console = Console(soft_wrap=True, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, emoji=False)


def fail(error: Exception):
    """Print a fatal error to stderr and exit with status 1."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    sys.exit(1)
