"""
CLI Utilities for Server-Backup

Rich-based helpers for console output.
Progress lines and the final report are written here, never via logging.
"""

from rich.console import Console
from rich.markup import escape

console = Console()


def print_error(message: str):
    """Print error message with red X"""
    console.print(f"[red]✗[/red] {escape(message)}")


def print_warning(message: str):
    """Print warning message with yellow warning symbol"""
    console.print(f"[yellow]⚠[/yellow]  {escape(message)}")


def print_plain(message: str = "", end: str = "\n"):
    """
    Print text exactly as given.

    Used for progress lines and subprocess output, which may contain
    brackets or long lines that must not be styled or wrapped.
    """
    console.print(message, end=end, markup=False, emoji=False, highlight=False, soft_wrap=True)


def print_command(command_line: str):
    """Print a rendered subprocess command line (never its environment)"""
    print_plain(command_line)
