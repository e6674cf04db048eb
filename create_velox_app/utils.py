"""Shared utility functions for create-velox-app.

Provides synchronous command execution, the string normalisation helpers
that turn a user-supplied project name into package and module names, and
Rich-based console output.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()

DEFAULT_PACKAGE_NAME = "velox-app"
DEFAULT_MODULE_NAME = "VeloxApp"

# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------


def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int | None = None,
    capture: bool = True,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command and wait for it to finish.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        capture: Whether to capture stdout/stderr (if ``False`` they inherit
            the parent's streams).
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A command that cannot be
        started or times out reports ``-1`` with the reason in *stderr*.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            env=merged_env,
            capture_output=capture,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        return (-1, "", str(exc))
    except subprocess.TimeoutExpired:
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (completed.stdout or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (completed.stderr or b"").decode("utf-8", errors="replace").strip()
    return (completed.returncode, stdout_str, stderr_str)


def is_cli_installed(tool: str, arg: str = "--version") -> bool:
    """Return ``True`` if ``tool arg`` runs and exits with status 0."""
    returncode, _, _ = run_command([tool, arg])
    return returncode == 0


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


def is_valid_package_name(name: str) -> bool:
    """Check whether *name* can be used verbatim as a package name.

    A valid name is non-empty, does not start with a digit, has no uppercase
    letters, and contains only alphanumerics, ``-`` and ``_``.
    """
    if not name or name[0].isdecimal():
        return False
    for char in name:
        if char.isupper():
            return False
        if not (char.isalnum() or char in "-_"):
            return False
    return True


def to_valid_package_name(name: str) -> str:
    """Turn an arbitrary project name into a package name.

    Examples::

        to_valid_package_name("My App")     -> "my-app"
        to_valid_package_name("2fa.tool")   -> "fatool"
        to_valid_package_name("...")        -> "velox-app"
    """
    result = name.strip().lower()
    for char in ":; ~":
        result = result.replace(char, "-")
    for char in ".\\/":
        result = result.replace(char, "")

    index = 0
    while index < len(result) and (result[index].isnumeric() or result[index] == "-"):
        index += 1
    result = result[index:]

    return result or DEFAULT_PACKAGE_NAME


def to_pascal_case(name: str) -> str:
    """Convert ``my-app`` or ``my app`` to ``MyApp``.

    Any run of non-alphanumeric characters starts a new word.  A result that
    would be empty or start with a digit gets the ``VeloxApp`` prefix.
    """
    parts: list[str] = []
    capitalize_next = True
    for char in name:
        if char.isalnum():
            parts.append(char.upper() if capitalize_next else char)
            capitalize_next = False
        else:
            capitalize_next = True

    result = "".join(parts)
    if not result:
        return DEFAULT_MODULE_NAME
    if result[0].isdecimal():
        return DEFAULT_MODULE_NAME + result
    return result


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]x[/bold red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
