"""Canonicalization of condition trees.

After simplify():
    - no Operator has fewer than two children
    - no Not wraps None or another Not
    - no Keyword / PhraseKeyword is blank
    - no Operator has a direct child Operator with the same op
"""

from .text import is_not_blank
from .types import Condition, Keyword, Not, Operator, PhraseKeyword


def simplify(condition: Condition) -> Condition:
    """Rewrite a condition tree into canonical form, bottom-up.

    Args:
        condition: Any condition tree.

    Returns:
        The canonical tree; None when nothing meaningful is left.

    Raises:
        TypeError: If the condition type is unknown.
    """
    if isinstance(condition, Not):
        return simplify_node(Not(simplify(condition.operand)))
    if isinstance(condition, Operator):
        return simplify_node(
            Operator(condition.op, [simplify(c) for c in condition.conditions])
        )
    return simplify_node(condition)


def simplify_node(condition: Condition) -> Condition:
    """Canonicalize the top node of a tree whose children are already canonical.

    Does not descend, so it is safe on arbitrarily deep trees built bottom-up.

    Raises:
        TypeError: If the condition type is unknown.
    """
    if condition is None:
        return None

    if isinstance(condition, (Keyword, PhraseKeyword)):
        return condition if is_not_blank(condition.value) else None

    if isinstance(condition, Not):
        operand = condition.operand
        if operand is None:
            return None
        if isinstance(operand, Not):
            # Double negation cancels out
            return operand.operand
        return condition

    if isinstance(condition, Operator):
        children = [child for child in condition.conditions if child is not None]
        if not children:
            return None
        if len(children) == 1:
            return children[0]

        flattened: list[Condition] = []
        for child in children:
            if isinstance(child, Operator) and child.op is condition.op:
                flattened.extend(child.conditions)
            else:
                flattened.append(child)
        return Operator(condition.op, flattened)

    raise TypeError(f"Unknown condition type: {type(condition)}")
