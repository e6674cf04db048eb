"""Recursive-descent parser turning LTE tokens into a statement tree.

Grammar::

    Stmt        := Text | Variable | Conditional
    Conditional := 'if' ['!'] Variable Stmt* ('else' Stmt*)? 'endif'

Bracket tokens carry no meaning once the input is tokenized and are skipped
wherever they appear.
"""

from __future__ import annotations

from collections.abc import Sequence

from create_velox_app.lte.errors import LexError, ParseError
from create_velox_app.lte.lexer import tokenize
from create_velox_app.lte.models import (
    Conditional,
    Statement,
    Text,
    Token,
    TokenKind,
    Variable,
)

_BRACKETS = (TokenKind.OPEN_BRACKET, TokenKind.CLOSE_BRACKET)
_BRANCH_END = (TokenKind.ELSE, TokenKind.ENDIF)


def _describe(token: Token | None) -> str:
    return "end of input" if token is None else str(token)


class Parser:
    """Single-pass parser with a forward-only cursor."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self._cursor = 0

    @property
    def _current(self) -> Token | None:
        if self._cursor < len(self._tokens):
            return self._tokens[self._cursor]
        return None

    def _at(self, *kinds: TokenKind) -> bool:
        token = self._current
        return token is not None and token.kind in kinds

    def _skip_brackets(self) -> None:
        while self._at(*_BRACKETS):
            self._cursor += 1

    def parse(self) -> list[Statement]:
        """Parse the entire token sequence into top-level statements.

        Raises:
            LexError: An ``INVALID`` token was reached.
            ParseError: The tokens do not form a valid template, including a
                ``!``, ``else`` or ``endif`` outside an open conditional.
        """
        statements: list[Statement] = []
        while True:
            self._skip_brackets()
            if self._current is None:
                return statements
            statements.append(self._statement())

    def _statement(self) -> Statement:
        self._skip_brackets()
        token = self._current
        if token is None:
            raise ParseError("unexpected end of input")

        if token.kind is TokenKind.INVALID:
            raise LexError(token.position, token.value)
        if token.kind is TokenKind.TEXT:
            self._cursor += 1
            return Text(token.value)
        if token.kind is TokenKind.VARIABLE:
            self._cursor += 1
            return Variable(token.value)
        if token.kind is TokenKind.IF:
            return self._conditional()

        raise ParseError(f"unexpected token: {token}", token)

    def _branch(self, *terminators: TokenKind) -> tuple[Statement, ...]:
        statements: list[Statement] = []
        while True:
            self._skip_brackets()
            if self._current is None or self._at(*terminators):
                return tuple(statements)
            statements.append(self._statement())

    def _conditional(self) -> Conditional:
        self._cursor += 1  # 'if'

        negated = self._at(TokenKind.BANG)
        if negated:
            self._cursor += 1

        token = self._current
        if token is not None and token.kind is TokenKind.INVALID:
            raise LexError(token.position, token.value)
        if token is None or token.kind is not TokenKind.VARIABLE:
            raise ParseError(
                f"expected variable after if, found: {_describe(token)}", token
            )
        var_name = token.value
        self._cursor += 1

        truthy = self._branch(*_BRANCH_END)

        falsy = None
        if self._at(TokenKind.ELSE):
            self._cursor += 1
            falsy = self._branch(TokenKind.ENDIF)

        if not self._at(TokenKind.ENDIF):
            token = self._current
            raise ParseError(f"expected endif, found: {_describe(token)}", token)
        self._cursor += 1

        return Conditional(var_name, negated, truthy, falsy)


def parse(template: str) -> list[Statement]:
    """Tokenize and parse *template* into its top-level statements."""
    return Parser(tokenize(template)).parse()
