"""Interactive prompts used when the CLI is not run with ``--yes``."""

from __future__ import annotations

from rich.prompt import Confirm, Prompt

from create_velox_app.utils import console


def text(prompt: str, default: str | None = None) -> str:
    """Ask for a line of text; blank input falls back to *default*."""
    answer = Prompt.ask(
        f"[bold]?[/bold] {prompt}",
        console=console,
        default=default or "",
        show_default=default is not None,
    )
    return answer.strip() or (default or "")


def confirm(prompt: str, default: bool = False) -> bool:
    """Ask a yes/no question."""
    return Confirm.ask(f"[bold]?[/bold] {prompt}", console=console, default=default)
