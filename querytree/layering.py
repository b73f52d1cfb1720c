"""Bracket layering: split query text into plain segments and groups.

Innermost bracket pairs are collapsed into numbered placeholders, one
nesting level per pass, until no matched pair is left:

    'a (b (c d)) -(e)'  ->  'a （3） -（2）'    brackets: ['c d', 'e', 'b （1）']

The placeholder string is then walked left to right to build a tree of
TextSegment / Group / NegatedGroup nodes. Full-width parentheses are free to
use as placeholder delimiters because normalization has already turned every
user-typed one into ASCII.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .config import ParserConfig
from .phrases import PhraseTables, extract_phrases, reinsert_phrases
from .text import QueryText, is_not_blank
from .types import QueryInternalError

logger = logging.getLogger(__name__)

_INNERMOST_BRACKET_RE = re.compile(r"\(([^()]*)\)")
_LAYER_RE = re.compile(r"([^（）]*)（(\d+)）")


@dataclass
class TextSegment:
    """A run of plain query text between groups.

    Attributes:
        text: The segment text, with quoted phrases restored.
    """

    text: QueryText


@dataclass
class Group:
    """A bracketed sub-query.

    Attributes:
        nodes: The layered content of the brackets.
    """

    nodes: list[LayeredNode]


@dataclass
class NegatedGroup:
    """A bracketed sub-query preceded by "-".

    Attributes:
        nodes: The layered content of the brackets.
    """

    nodes: list[LayeredNode]


# Union of all layered node types
LayeredNode = TextSegment | Group | NegatedGroup


def collapse_brackets(text: QueryText, brackets: list[QueryText]) -> QueryText:
    """Collapse matched bracket pairs into placeholders until none are left.

    Blank pairs are deleted along with their content. Non-blank content is
    appended to ``brackets`` and the pair replaced with ``（n）`` where n is
    the 1-based table index. Unmatched or reversed brackets never form a
    pair and stay in the text.

    Args:
        text: Phrase-protected, symbol-normalized query text.
        brackets: Bracket table, extended in place.

    Returns:
        The text with every matched pair collapsed.
    """

    def _replace(match: re.Match[str]) -> str:
        body = match.group(1)
        if not is_not_blank(body):
            return ""
        brackets.append(QueryText(body))
        return f"（{len(brackets)}）"

    value = text.value
    while True:
        collapsed = _INNERMOST_BRACKET_RE.sub(_replace, value)
        if collapsed == value:
            return QueryText(value)
        value = collapsed


def _lookup_bracket(brackets: list[QueryText], index: int) -> QueryText:
    if not 1 <= index <= len(brackets):
        raise QueryInternalError(
            f"Unresolvable bracket placeholder （{index}） "
            f"(table holds {len(brackets)} entries)"
        )
    return brackets[index - 1]


def _append_segment(
    nodes: list[LayeredNode], value: str, phrases: PhraseTables
) -> None:
    text = reinsert_phrases(QueryText(value), phrases)
    if text.is_not_blank():
        nodes.append(TextSegment(text))


def _layout(
    text: QueryText, brackets: list[QueryText], phrases: PhraseTables
) -> list[LayeredNode]:
    """Build layered nodes from collapsed text.

    Group bodies are laid out from an explicit work stack, so nesting depth
    is limited only by memory.
    """
    root: list[LayeredNode] = []
    pending: list[tuple[QueryText, list[LayeredNode]]] = [(text, root)]
    while pending:
        current, nodes = pending.pop()
        end = 0
        for match in _LAYER_RE.finditer(current.value):
            run = match.group(1)
            negated = False
            if is_not_blank(run):
                if run.endswith("-"):
                    negated = True
                    run = run[:-1]
                _append_segment(nodes, run, phrases)

            body = _lookup_bracket(brackets, int(match.group(2)))
            group: Group | NegatedGroup = NegatedGroup([]) if negated else Group([])
            nodes.append(group)
            pending.append((body, group.nodes))
            end = match.end()

        _append_segment(nodes, current.value[end:], phrases)
    return root


def layer_by_bracket(
    text: QueryText, phrases: PhraseTables, config: ParserConfig | None = None
) -> list[LayeredNode]:
    """Lay out phrase-protected text into a tree of segments and groups.

    Args:
        text: Phrase-protected, symbol-normalized query text.
        phrases: Phrase tables used to restore quoted text in each segment.
        config: Parser configuration (defaults when omitted).

    Returns:
        The layered tree, in textual order. Empty for blank input.
    """
    if config is None:
        config = ParserConfig()

    brackets: list[QueryText] = []
    collapsed = collapse_brackets(text, brackets)
    if config.drop_unmatched_brackets:
        collapsed = QueryText(collapsed.value.replace("(", "").replace(")", ""))
    logger.debug("Collapsed %d bracket pair(s): %r", len(brackets), collapsed.value)

    return _layout(collapsed, brackets, phrases)


def parse_layered(query: str, config: ParserConfig | None = None) -> list[LayeredNode]:
    """Run normalization, phrase extraction and bracket layering on a query.

    Examples:
        >>> parse_layered("a -(b or c)")
        [TextSegment(text=QueryText(value='a ')), NegatedGroup(nodes=[...])]
    """
    protected, phrases = extract_phrases(QueryText(query).normalize_quotes())
    return layer_by_bracket(protected.normalize_symbols(), phrases, config)
