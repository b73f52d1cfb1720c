"""AST types for parsed search queries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class QueryInternalError(Exception):
    """Raised when the parser breaks one of its own invariants.

    User input never triggers this; it signals a bug such as a placeholder
    index that does not resolve against its table.
    """


class OperatorType(Enum):
    """Boolean operators joining conditions."""

    AND = "And"
    OR = "Or"


@dataclass
class Keyword:
    """A bare search term.

    Attributes:
        value: The term as typed by the user.
    """

    value: str


@dataclass
class PhraseKeyword:
    """An exact-phrase term (quoted in the query).

    Attributes:
        value: The text between the quotes, whitespace preserved.
    """

    value: str


@dataclass
class Not:
    """Negation expression.

    Attributes:
        operand: The condition to negate.
    """

    operand: Condition


@dataclass
class Operator:
    """AND / OR expression.

    Attributes:
        op: Which boolean operator joins the conditions.
        conditions: Ordered child conditions.
    """

    op: OperatorType
    conditions: list[Condition]


# Union of all condition types (None is the blank condition)
Condition = Keyword | PhraseKeyword | Not | Operator | None


def to_dict(condition: Condition) -> Any:
    """Convert a condition into plain JSON-serializable data.

    The layout is an externally tagged union:

        None                 -> "None"
        Keyword("a")         -> {"Keyword": "a"}
        PhraseKeyword("a b") -> {"PhraseKeyword": "a b"}
        Not(c)               -> {"Not": <c>}
        Operator(AND, [...]) -> {"Operator": ["And", [...]]}
    """
    if condition is None:
        return "None"
    if isinstance(condition, Keyword):
        return {"Keyword": condition.value}
    if isinstance(condition, PhraseKeyword):
        return {"PhraseKeyword": condition.value}
    if isinstance(condition, Not):
        return {"Not": to_dict(condition.operand)}
    if isinstance(condition, Operator):
        return {
            "Operator": [
                condition.op.value,
                [to_dict(child) for child in condition.conditions],
            ]
        }
    raise TypeError(f"Unknown condition type: {type(condition)}")


def to_canonical_string(condition: Condition) -> str:
    """Convert a condition to its canonical query string.

    This produces a normalized form with:
    - Explicit uppercase AND / OR keywords
    - Quoted phrases and "-" negation prefixes
    - Parentheses only where precedence requires them

    Args:
        condition: The condition to convert.

    Returns:
        The canonical string (empty for the blank condition).

    Examples:
        >>> to_canonical_string(Keyword("foo"))
        'foo'
        >>> to_canonical_string(Operator(OperatorType.AND, [Keyword("a"), Keyword("b")]))
        'a AND b'
    """
    if condition is None:
        return ""

    if isinstance(condition, Keyword):
        return condition.value

    if isinstance(condition, PhraseKeyword):
        return f'"{condition.value}"'

    if isinstance(condition, Not):
        inner = to_canonical_string(condition.operand)
        if isinstance(condition.operand, Operator):
            return f"-({inner})"
        return f"-{inner}"

    if isinstance(condition, Operator):
        parts = []
        for child in condition.conditions:
            inner = to_canonical_string(child)
            # Wrap the other operator kind to keep its grouping explicit
            if isinstance(child, Operator) and child.op is not condition.op:
                inner = f"({inner})"
            parts.append(inner)
        return f" {condition.op.name} ".join(parts)

    raise TypeError(f"Unknown condition type: {type(condition)}")
