"""Interactive utilities for CLI commands"""

from rich.prompt import Confirm

from .output import console


def confirm(question: str) -> bool:
    """Ask a yes/no question on the terminal, defaulting to no"""
    return Confirm.ask(f"[cyan]{question}[/cyan]", console=console, default=False)
