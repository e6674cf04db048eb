"""Exceptions raised by the LTE template engine and the directory renderer.

Every error derives from ``TemplateError`` so callers can catch a single type.
The engine is deterministic, so none of these are worth retrying.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class TemplateError(Exception):
    """Base class for every templating failure."""

    prefix = "Failed to parse template: "

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"{self.prefix}{message}")


class LexError(TemplateError):
    """An invalid character was found inside a ``{% ... %}`` directive."""

    def __init__(self, column: int, char: str) -> None:
        self.column = column
        self.char = char
        super().__init__(f"invalid token {char} at {column}")


class ParseError(TemplateError):
    """The token stream does not match the directive grammar."""

    def __init__(self, message: str, token: Any = None) -> None:
        self.token = token
        super().__init__(message)


class UnresolvedVariableError(TemplateError):
    """A directive referenced a name missing from the binding map."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unrecognized variable: {name}")


class TemplateIOError(TemplateError):
    """A filesystem operation failed while rendering a template tree."""

    prefix = ""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class TemplateNotFoundError(TemplateError):
    """No bundled template exists under the requested name."""

    prefix = ""

    def __init__(self, name: str, path: str | Path) -> None:
        self.name = name
        self.path = Path(path)
        super().__init__(f"Template not found: {self.path}")
