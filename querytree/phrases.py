"""Quoted phrase extraction and reinsertion.

Quoted spans are swapped for short placeholder tokens before anything else
looks at the query, so that brackets, AND / OR and whitespace inside a
phrase are never mistaken for query structure:

    'a "b (c) or d" -"e f"'  ->  'a  <PK:1>   <NPK:1> '

(shown with "<" and ">" standing in for the private-use delimiters). The
placeholders contain no whitespace, brackets or quotes, so they survive
symbol normalization and bracket layering untouched.
"""

import logging
import re
from dataclasses import dataclass, field

from .text import QueryText, is_not_blank
from .types import Not, PhraseKeyword, QueryInternalError

logger = logging.getLogger(__name__)

NEGATIVE_PHRASE_TAG = "NPK"
PHRASE_TAG = "PK"

# Private-use code points delimit placeholders; they are stripped from user
# input first so a placeholder can only come from extract_phrases().
PLACEHOLDER_OPEN = "\ue000"
PLACEHOLDER_CLOSE = "\ue001"

_NEGATIVE_PHRASE_RE = re.compile(r'-"([^"]*)"')
_PHRASE_RE = re.compile(f'"([^"{PLACEHOLDER_OPEN}]*)"')
_PLACEHOLDER_RE = re.compile(
    f"{PLACEHOLDER_OPEN}({NEGATIVE_PHRASE_TAG}|{PHRASE_TAG}):(\\d+){PLACEHOLDER_CLOSE}"
)


@dataclass
class PhraseTables:
    """Phrase bodies captured from one query, indexed from 1.

    Attributes:
        negative: Bodies of negated phrases (-"...").
        positive: Bodies of plain phrases ("...").
    """

    negative: list[str] = field(default_factory=list)
    positive: list[str] = field(default_factory=list)

    def _table(self, tag: str) -> list[str]:
        return self.negative if tag == NEGATIVE_PHRASE_TAG else self.positive

    def add(self, tag: str, body: str) -> str:
        """Store a phrase body and return its placeholder token."""
        table = self._table(tag)
        table.append(body)
        return placeholder(tag, len(table))

    def lookup(self, tag: str, index: int) -> str:
        """Return the phrase body behind a placeholder.

        Raises:
            QueryInternalError: If the index does not exist in the table.
        """
        table = self._table(tag)
        if not 1 <= index <= len(table):
            raise QueryInternalError(
                f"Unresolvable phrase placeholder {tag}:{index} "
                f"(table holds {len(table)} entries)"
            )
        return table[index - 1]


def placeholder(tag: str, index: int) -> str:
    """Build the placeholder token for a phrase table entry."""
    return f"{PLACEHOLDER_OPEN}{tag}:{index}{PLACEHOLDER_CLOSE}"


def extract_phrases(text: QueryText) -> tuple[QueryText, PhraseTables]:
    """Replace quoted spans with placeholder tokens.

    Negated phrases are swept over the whole string before plain phrases, so
    a -"..." span is always captured as negated. A plain phrase never spans
    a negated phrase's placeholder; the quotes around it stay literal text,
    as in '"x -"y" z"'. Blank phrases are deleted.
    An unterminated quote is left in place as ordinary text.

    Args:
        text: Query text with quotes already normalized to ASCII.

    Returns:
        Tuple of (rewritten text, captured phrase tables).
    """
    tables = PhraseTables()
    value = text.value.replace(PLACEHOLDER_OPEN, "").replace(PLACEHOLDER_CLOSE, "")
    for regex, tag in (
        (_NEGATIVE_PHRASE_RE, NEGATIVE_PHRASE_TAG),
        (_PHRASE_RE, PHRASE_TAG),
    ):

        def _replace(match: re.Match[str], tag: str = tag) -> str:
            body = match.group(1)
            if not is_not_blank(body):
                return ""
            return f" {tables.add(tag, body)} "

        value = regex.sub(_replace, value)

    if tables.negative or tables.positive:
        logger.debug(
            "Extracted %d phrase(s) and %d negated phrase(s)",
            len(tables.positive),
            len(tables.negative),
        )
    return QueryText(value), tables


def reinsert_phrases(text: QueryText, tables: PhraseTables) -> QueryText:
    """Put literal quoted phrases back in place of their placeholders."""

    def _replace(match: re.Match[str]) -> str:
        tag, index = match.group(1), int(match.group(2))
        body = tables.lookup(tag, index)
        if tag == NEGATIVE_PHRASE_TAG:
            return f' -"{body}" '
        return f' "{body}" '

    return QueryText(_PLACEHOLDER_RE.sub(_replace, text.value))


def phrase_condition(token: str, tables: PhraseTables) -> PhraseKeyword | Not | None:
    """Build the condition for a token that is exactly one placeholder.

    Returns:
        PhraseKeyword or Not(PhraseKeyword), or None when the token is not
        a placeholder.
    """
    match = _PLACEHOLDER_RE.fullmatch(token)
    if match is None:
        return None
    tag, index = match.group(1), int(match.group(2))
    phrase = PhraseKeyword(tables.lookup(tag, index))
    if tag == NEGATIVE_PHRASE_TAG:
        return Not(phrase)
    return phrase
