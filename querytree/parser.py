"""Parser for Google-style advanced search queries.

Pipeline:
    raw text -> normalize quotes -> extract phrases -> normalize symbols
    -> layer brackets -> restore phrases per segment
    -> tokenize segments + re-tokenize the skeleton -> simplify

Bracket groups are joined to their neighbors by re-running the segment
tokenizer over a synthetic "skeleton" string of integer placeholders:

    'a or (b c) d'
    segments/groups:  'a or '  ->  0     (b c)  ->  1     ' d'  ->  2
    skeleton:         ' and 0 or  1  and 2 and '
    tokenized:        OR[0, AND[1, 2]]
    substituted:      OR[a, AND[AND[b, c], d]]  ->  simplified OR[a, AND[b, c, d]]

so AND / OR precedence between groups follows exactly the same grammar as
inside a segment.
"""

import logging

from .config import ParserConfig
from .layering import Group, LayeredNode, NegatedGroup, TextSegment, parse_layered
from .simplify import simplify_node
from .text import QueryText
from .tokenizer import tokenize_segment
from .types import Condition, Keyword, Not, Operator, QueryInternalError

logger = logging.getLogger(__name__)


def _resolve(index: str, conditions: list[Condition]) -> Condition:
    """Look up the real condition behind a skeleton placeholder."""
    if not index.isdigit() or int(index) >= len(conditions):
        raise QueryInternalError(
            f"Unresolvable skeleton placeholder {index!r} "
            f"({len(conditions)} conditions recorded)"
        )
    return conditions[int(index)]


def _substitute(skeleton: Condition, conditions: list[Condition]) -> Condition:
    """Replace every Keyword(index) leaf of the skeleton condition."""
    if skeleton is None:
        return None
    if isinstance(skeleton, Keyword):
        return _resolve(skeleton.value, conditions)
    if isinstance(skeleton, Operator):
        return simplify_node(
            Operator(
                skeleton.op,
                [_substitute(child, conditions) for child in skeleton.conditions],
            )
        )
    raise QueryInternalError(f"Unexpected skeleton node: {skeleton!r}")


def _combine(
    nodes: list[LayeredNode], resolved: dict[int, Condition]
) -> Condition:
    """Join one level of layered nodes through the skeleton tokenizer.

    Args:
        nodes: One level of the layered tree.
        resolved: Conditions of the groups on this level, keyed by id().
    """
    conditions: list[Condition] = []
    skeleton_parts: list[str] = []

    for node in nodes:
        if isinstance(node, TextSegment):
            starts_with_or, condition, ends_with_or = tokenize_segment(node.text)
            left = "or" if starts_with_or else "and"
            right = "or" if ends_with_or else "and"
            skeleton_parts.append(f" {left} {len(conditions)} {right} ")
            conditions.append(condition)
        elif isinstance(node, (Group, NegatedGroup)):
            skeleton_parts.append(f" {len(conditions)} ")
            conditions.append(resolved[id(node)])
        else:
            raise TypeError(f"Unknown layered node type: {type(node)}")

    skeleton = "".join(skeleton_parts)
    logger.debug("Skeleton %r for %d condition(s)", skeleton, len(conditions))
    _, skeleton_condition, _ = tokenize_segment(QueryText(skeleton))
    return _substitute(skeleton_condition, conditions)


def to_condition(nodes: list[LayeredNode]) -> Condition:
    """Convert a layered tree into a simplified condition.

    Groups are combined innermost first without recursion, so the depth of
    the layered tree is not bounded by the interpreter stack.

    Args:
        nodes: Layered nodes, as built by parse_layered().

    Returns:
        The simplified condition tree.

    Raises:
        QueryInternalError: If a skeleton placeholder does not resolve.
    """
    # Pre-order: every group is listed before the groups nested inside it
    groups: list[Group | NegatedGroup] = []
    pending = [nodes]
    while pending:
        for node in pending.pop():
            if isinstance(node, (Group, NegatedGroup)):
                groups.append(node)
                pending.append(node.nodes)

    resolved: dict[int, Condition] = {}
    for group in reversed(groups):
        condition = _combine(group.nodes, resolved)
        if isinstance(group, NegatedGroup):
            condition = simplify_node(Not(condition))
        resolved[id(group)] = condition

    return _combine(nodes, resolved)


def parse(query: str, config: ParserConfig | None = None) -> Condition:
    """Parse a search query into a condition tree.

    Never raises for user input: unbalanced brackets, empty groups, stray
    operators and unterminated quotes all resolve to some condition.

    Args:
        query: The raw query string.
        config: Parser configuration (defaults when omitted).

    Returns:
        The condition tree, or None for a blank query.

    Examples:
        >>> parse("a b")
        Operator(op=<OperatorType.AND: 'And'>, conditions=[Keyword(value='a'), Keyword(value='b')])
        >>> parse('-"a b"')
        Not(operand=PhraseKeyword(value='a b'))
        >>> parse("  ") is None
        True
    """
    return to_condition(parse_layered(query, config))
