"""Token and statement types for the LTE template engine.

Tokens are produced by :mod:`create_velox_app.lte.lexer` and are transient.
Statements form the tree built by :mod:`create_velox_app.lte.parser`; the
root of a template is a ``list[Statement]`` whose order is output order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

class TokenKind(str, Enum):
    """Every kind of token the lexer can emit."""
    OPEN_BRACKET = "open_bracket"
    CLOSE_BRACKET = "close_bracket"
    BANG = "bang"
    IF = "if"
    ELSE = "else"
    ENDIF = "endif"
    VARIABLE = "variable"
    TEXT = "text"
    INVALID = "invalid"


KEYWORDS: dict[str, TokenKind] = {
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "endif": TokenKind.ENDIF,
}


@dataclass(frozen=True)
class Token:
    """A single lexed token.

    ``value`` holds the variable name, the text content, or the offending
    character, depending on ``kind``.  ``position`` is only meaningful for
    ``INVALID`` tokens and is the 1-based column of the character.
    """

    kind: TokenKind
    value: str = ""
    position: int = 0

    def __str__(self) -> str:
        if self.kind is TokenKind.OPEN_BRACKET:
            return "{%"
        if self.kind is TokenKind.CLOSE_BRACKET:
            return "%}"
        if self.kind is TokenKind.BANG:
            return "!"
        if self.kind is TokenKind.VARIABLE:
            return f"{self.value} (variable)"
        if self.kind is TokenKind.TEXT:
            return "(text)"
        if self.kind is TokenKind.INVALID:
            return f"invalid token {self.value} at {self.position}"
        return self.kind.value


OPEN_BRACKET = Token(TokenKind.OPEN_BRACKET)
CLOSE_BRACKET = Token(TokenKind.CLOSE_BRACKET)
BANG = Token(TokenKind.BANG)


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Text:
    """Literal text copied to the output."""
    content: str


@dataclass(frozen=True)
class Variable:
    """Interpolation of a bound value."""
    name: str


@dataclass(frozen=True)
class Conditional:
    """An ``if`` / optional ``else`` / ``endif`` block.

    ``falsy`` is ``None`` when the template had no ``else`` clause, which is
    distinct from an empty ``else`` clause.
    """

    var_name: str
    negated: bool
    truthy: tuple["Statement", ...]
    falsy: Optional[tuple["Statement", ...]] = None


Statement = Union[Text, Variable, Conditional]
