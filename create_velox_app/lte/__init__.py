"""LTE -- a small logic-less template engine.

Supports ``{% name %}`` interpolation and ``{% if [!]name %} ... {% else %}
... {% endif %}`` conditionals.  There are no loops, filters or includes.

Quick usage::

    from create_velox_app.lte import render

    render("Hello {% name %}!", {"name": "World"})  # "Hello World!"
"""

from create_velox_app.lte.errors import (
    LexError,
    ParseError,
    TemplateError,
    TemplateIOError,
    TemplateNotFoundError,
    UnresolvedVariableError,
)
from create_velox_app.lte.interpreter import execute, execute_all, is_truthy, render
from create_velox_app.lte.lexer import Lexer, tokenize
from create_velox_app.lte.models import (
    Conditional,
    Statement,
    Text,
    Token,
    TokenKind,
    Variable,
)
from create_velox_app.lte.parser import Parser, parse

__all__ = [
    "Conditional",
    "LexError",
    "Lexer",
    "ParseError",
    "Parser",
    "Statement",
    "TemplateError",
    "TemplateIOError",
    "TemplateNotFoundError",
    "Text",
    "Token",
    "TokenKind",
    "UnresolvedVariableError",
    "Variable",
    "execute",
    "execute_all",
    "is_truthy",
    "parse",
    "render",
    "tokenize",
]
