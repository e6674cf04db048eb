"""Evaluation of LTE statement trees against a binding map."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from create_velox_app.lte.errors import UnresolvedVariableError
from create_velox_app.lte.models import Conditional, Statement, Text, Variable
from create_velox_app.lte.parser import parse


def is_truthy(value: str) -> bool:
    """Interpret a bound string as a boolean.

    ``"true"`` and ``"false"`` are taken literally; any other value is true
    when non-empty.
    """
    if value == "true":
        return True
    if value == "false":
        return False
    return value != ""


def _lookup(bindings: Mapping[str, str], name: str) -> str:
    try:
        return bindings[name]
    except KeyError:
        raise UnresolvedVariableError(name) from None


def execute(statement: Statement, bindings: Mapping[str, str]) -> str:
    """Render a single statement.

    Only the branch selected by a conditional is visited, so names used
    exclusively in the other branch do not have to be bound.
    """
    if isinstance(statement, Text):
        return statement.content
    if isinstance(statement, Variable):
        return _lookup(bindings, statement.name)
    if isinstance(statement, Conditional):
        truthy = is_truthy(_lookup(bindings, statement.var_name))
        if truthy != statement.negated:
            return execute_all(statement.truthy, bindings)
        return execute_all(statement.falsy or (), bindings)
    raise TypeError(f"Unknown statement type: {type(statement).__name__}")


def execute_all(statements: Iterable[Statement], bindings: Mapping[str, str]) -> str:
    """Render a statement sequence and concatenate the parts in order."""
    return "".join(execute(statement, bindings) for statement in statements)


def render(template: str, bindings: Mapping[str, str]) -> str:
    """Render *template* with *bindings*.

    The template is fully parsed before anything is evaluated, so syntax
    errors surface even when they sit in a branch that would not be taken.

    Args:
        template: Template source text.
        bindings: Variable name to string value.

    Returns:
        The rendered text.

    Raises:
        LexError: An invalid character appears inside a directive.
        ParseError: The directive structure is malformed.
        UnresolvedVariableError: An evaluated directive names an unbound
            variable.
    """
    return execute_all(parse(template), bindings)
