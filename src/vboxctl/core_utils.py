"""
Core utility functions for vboxctl.

This module provides the console helpers shared by every part of the tool.
Machine-readable output (the names printed by `list`) goes through
print_plain so it can be redirected into a file and fed back as a target.
"""
import sys

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console()
# Create a dedicated console for printing errors to stderr
error_console = Console(stderr=True, style="bold red")

# --- Text and Styling ---

def print_header(text):
    """Prints a styled header to the console."""
    console.print(Panel(f"[bold cyan]{escape(text)}[/]", expand=False, border_style="blue"))

def print_info(text):
    """Prints an informational message to the console."""
    console.print(f"[cyan]ℹ️  {escape(text)}[/]", highlight=False)

def print_success(text):
    """Prints a success message to the console."""
    console.print(f"[green]✅ {escape(text)}[/]", highlight=False)

def print_warning(text):
    """Prints a warning message to the console."""
    console.print(f"[yellow]⚠️  {escape(text)}[/]", highlight=False)

def print_error(text):
    """
    Prints raw, unformatted text to stderr so VM names containing square
    brackets are never taken for rich markup.
    """
    print(f"❌ {text}", file=sys.stderr)

def print_plain(text):
    """Prints one line of undecorated output to stdout."""
    sys.stdout.write(f"{text}\n")
    sys.stdout.flush()
