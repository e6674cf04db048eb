"""Tokenizer for LTE templates.

The lexer is a two-state machine.  Outside a bracket region everything up
to the next ``{%`` is a single ``TEXT`` token.  Inside a region whitespace is
skipped and the directive is split into brackets, ``!``, keywords and
variable names.  Unknown characters become ``INVALID`` tokens and scanning
continues; the parser decides whether that is fatal.

Character classes use ``str`` predicates, so letters and whitespace outside
ASCII are classified the same way the rest of Python does.
"""

from __future__ import annotations

from collections.abc import Iterator

from create_velox_app.lte.models import (
    BANG,
    CLOSE_BRACKET,
    KEYWORDS,
    OPEN_BRACKET,
    Token,
    TokenKind,
)

OPEN_DELIMITER = "{%"
CLOSE_DELIMITER = "%}"


def _is_symbol_start(char: str) -> bool:
    return char.isalpha() or char == "_"


def _is_symbol(char: str) -> bool:
    return char.isalnum() or char == "_"


class Lexer:
    """Stateful tokenizer over a single template string.

    Usage::

        tokens = Lexer("Hello {% name %}!").tokens()
    """

    def __init__(self, template: str) -> None:
        self._text = template
        self._length = len(template)
        self._cursor = 0
        self._in_bracket = False

    # -- Iteration ---------------------------------------------------------

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self._next_token()
        if token is None:
            raise StopIteration
        return token

    def tokens(self) -> list[Token]:
        """Consume the remaining input and return every token."""
        return list(self)

    # -- Scanning ----------------------------------------------------------

    def _starts_with(self, delimiter: str) -> bool:
        return self._text.startswith(delimiter, self._cursor)

    def _skip_whitespace(self) -> None:
        while self._cursor < self._length and self._text[self._cursor].isspace():
            self._cursor += 1

    def _read_symbol(self) -> str:
        start = self._cursor
        while self._cursor < self._length and _is_symbol(self._text[self._cursor]):
            self._cursor += 1
        return self._text[start:self._cursor]

    def _next_token(self) -> Token | None:
        if self._in_bracket:
            self._skip_whitespace()

        if self._cursor >= self._length:
            return None

        if self._in_bracket:
            return self._scan_inside()
        return self._scan_outside()

    def _scan_outside(self) -> Token:
        if self._starts_with(OPEN_DELIMITER):
            self._in_bracket = True
            self._cursor += len(OPEN_DELIMITER)
            return OPEN_BRACKET

        end = self._text.find(OPEN_DELIMITER, self._cursor)
        if end == -1:
            end = self._length
        content = self._text[self._cursor:end]
        self._cursor = end
        return Token(TokenKind.TEXT, content)

    def _scan_inside(self) -> Token:
        if self._starts_with(CLOSE_DELIMITER):
            self._in_bracket = False
            self._cursor += len(CLOSE_DELIMITER)
            return CLOSE_BRACKET

        char = self._text[self._cursor]
        if char == "!":
            self._cursor += 1
            return BANG

        if _is_symbol_start(char):
            symbol = self._read_symbol()
            kind = KEYWORDS.get(symbol)
            if kind is not None:
                return Token(kind)
            return Token(TokenKind.VARIABLE, symbol)

        self._cursor += 1
        return Token(TokenKind.INVALID, char, self._cursor)


def tokenize(template: str) -> list[Token]:
    """Tokenize *template* eagerly."""
    return Lexer(template).tokens()
