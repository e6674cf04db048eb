"""Unit tests for the LTE lexer (create_velox_app.lte.lexer).

Tests cover:
- Text outside directives, including multi-byte characters and stray ``%}``
- Brackets, bang, keywords and variables inside directives
- Unicode-aware whitespace and identifier classification
- Invalid characters (reported with a 1-based column, scanning continues)
- Token descriptions used in error messages
"""

from __future__ import annotations

import pytest

from create_velox_app.lte.lexer import Lexer, tokenize
from create_velox_app.lte.models import Token, TokenKind


def kinds(template: str) -> list[TokenKind]:
    return [token.kind for token in tokenize(template)]


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


class TestText:
    @pytest.mark.unit
    def test_empty_template_has_no_tokens(self):
        assert tokenize("") == []

    @pytest.mark.unit
    def test_plain_text_is_one_token(self):
        assert tokenize("just text\n") == [Token(TokenKind.TEXT, "just text\n")]

    @pytest.mark.unit
    def test_close_delimiter_outside_is_text(self):
        assert tokenize("50%} off") == [Token(TokenKind.TEXT, "50%} off")]

    @pytest.mark.unit
    def test_lone_brace_is_text(self):
        assert tokenize("fn() { return }") == [Token(TokenKind.TEXT, "fn() { return }")]

    @pytest.mark.unit
    def test_multibyte_text_passes_through(self):
        tokens = tokenize("héllo → 日本 {% x %}")
        assert tokens[0] == Token(TokenKind.TEXT, "héllo → 日本 ")

    @pytest.mark.unit
    def test_text_stops_at_open_delimiter(self):
        tokens = tokenize("Hello {% name %}!")
        assert tokens == [
            Token(TokenKind.TEXT, "Hello "),
            Token(TokenKind.OPEN_BRACKET),
            Token(TokenKind.VARIABLE, "name"),
            Token(TokenKind.CLOSE_BRACKET),
            Token(TokenKind.TEXT, "!"),
        ]


# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------


class TestDirectives:
    @pytest.mark.unit
    def test_keywords(self):
        assert kinds("{% if a %}{% else %}{% endif %}") == [
            TokenKind.OPEN_BRACKET, TokenKind.IF, TokenKind.VARIABLE, TokenKind.CLOSE_BRACKET,
            TokenKind.OPEN_BRACKET, TokenKind.ELSE, TokenKind.CLOSE_BRACKET,
            TokenKind.OPEN_BRACKET, TokenKind.ENDIF, TokenKind.CLOSE_BRACKET,
        ]

    @pytest.mark.unit
    def test_bang(self):
        assert kinds("{% if !flag %}") == [
            TokenKind.OPEN_BRACKET,
            TokenKind.IF,
            TokenKind.BANG,
            TokenKind.VARIABLE,
            TokenKind.CLOSE_BRACKET,
        ]

    @pytest.mark.unit
    def test_keyword_prefix_is_a_variable(self):
        assert tokenize("{%iffy%}")[1] == Token(TokenKind.VARIABLE, "iffy")
        assert tokenize("{% endif_x %}")[1] == Token(TokenKind.VARIABLE, "endif_x")

    @pytest.mark.unit
    def test_variable_with_digits_and_underscores(self):
        assert tokenize("{% _v2_name %}")[1] == Token(TokenKind.VARIABLE, "_v2_name")

    @pytest.mark.unit
    def test_no_whitespace_needed(self):
        assert kinds("{%name%}") == [
            TokenKind.OPEN_BRACKET,
            TokenKind.VARIABLE,
            TokenKind.CLOSE_BRACKET,
        ]

    @pytest.mark.unit
    def test_unicode_identifier(self):
        assert tokenize("{% café %}")[1] == Token(TokenKind.VARIABLE, "café")

    @pytest.mark.unit
    def test_unicode_whitespace_is_skipped(self):
        assert kinds("{% x　\n%}") == [
            TokenKind.OPEN_BRACKET,
            TokenKind.VARIABLE,
            TokenKind.CLOSE_BRACKET,
        ]

    @pytest.mark.unit
    def test_unterminated_directive_ends_with_input(self):
        assert kinds("{% x") == [TokenKind.OPEN_BRACKET, TokenKind.VARIABLE]

    @pytest.mark.unit
    def test_whitespace_inside_directive_is_dropped(self):
        assert tokenize("a{%  x  %}b") == [
            Token(TokenKind.TEXT, "a"),
            Token(TokenKind.OPEN_BRACKET),
            Token(TokenKind.VARIABLE, "x"),
            Token(TokenKind.CLOSE_BRACKET),
            Token(TokenKind.TEXT, "b"),
        ]


# ---------------------------------------------------------------------------
# Invalid characters
# ---------------------------------------------------------------------------


class TestInvalid:
    @pytest.mark.unit
    def test_invalid_character_reports_column(self):
        tokens = tokenize("{% a-b %}")
        assert tokens[2] == Token(TokenKind.INVALID, "-", 5)

    @pytest.mark.unit
    def test_scanning_continues_after_invalid(self):
        assert kinds("{% a-b %}") == [
            TokenKind.OPEN_BRACKET,
            TokenKind.VARIABLE,
            TokenKind.INVALID,
            TokenKind.VARIABLE,
            TokenKind.CLOSE_BRACKET,
        ]

    @pytest.mark.unit
    def test_leading_digit_is_invalid(self):
        tokens = tokenize("{% 2x %}")
        assert tokens[1] == Token(TokenKind.INVALID, "2", 4)
        assert tokens[2] == Token(TokenKind.VARIABLE, "x")

    @pytest.mark.unit
    def test_open_delimiter_inside_directive_is_not_a_bracket(self):
        result = kinds("{%{%")
        assert result.count(TokenKind.OPEN_BRACKET) == 1
        assert result == [TokenKind.OPEN_BRACKET, TokenKind.INVALID, TokenKind.INVALID]

    @pytest.mark.unit
    def test_column_counts_characters_not_bytes(self):
        tokens = tokenize("é{% ? %}")
        assert tokens[2] == Token(TokenKind.INVALID, "?", 5)


# ---------------------------------------------------------------------------
# Lexer object & descriptions
# ---------------------------------------------------------------------------


class TestLexerProtocol:
    @pytest.mark.unit
    def test_iterates_lazily(self):
        lexer = Lexer("a{% b %}")
        assert next(lexer) == Token(TokenKind.TEXT, "a")
        assert next(lexer) == Token(TokenKind.OPEN_BRACKET)
        assert lexer.tokens() == [
            Token(TokenKind.VARIABLE, "b"),
            Token(TokenKind.CLOSE_BRACKET),
        ]

    @pytest.mark.unit
    def test_exhausted_lexer_stops(self):
        lexer = Lexer("")
        with pytest.raises(StopIteration):
            next(lexer)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            (Token(TokenKind.OPEN_BRACKET), "{%"),
            (Token(TokenKind.CLOSE_BRACKET), "%}"),
            (Token(TokenKind.BANG), "!"),
            (Token(TokenKind.IF), "if"),
            (Token(TokenKind.ENDIF), "endif"),
            (Token(TokenKind.VARIABLE, "name"), "name (variable)"),
            (Token(TokenKind.TEXT, "abc"), "(text)"),
            (Token(TokenKind.INVALID, "$", 7), "invalid token $ at 7"),
        ],
    )
    def test_token_description(self, token: Token, expected: str):
        assert str(token) == expected
