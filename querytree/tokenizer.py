"""Boolean tokenizer for one plain-text query segment.

Precedence (tightest to loosest):
    1. - (NOT), attached to a single keyword or phrase
    2. AND (explicit, or implicit via whitespace)
    3. OR

AND / OR are case-insensitive and every letter may independently be ASCII or
full-width Latin ("ＡnＤ"). They are only operators when delimited by
whitespace on both sides; "ANDROID" and "color" stay keywords.
"""

import logging
import re
from typing import NamedTuple

from .phrases import extract_phrases, phrase_condition
from .simplify import simplify
from .text import QueryText
from .types import Condition, Keyword, Not, Operator, OperatorType

logger = logging.getLogger(__name__)

_AND = "[AaＡａ][NnＮｎ][DdＤｄ]"
_OR = "[OoＯｏ][RrＲｒ]"

_AND_RE = re.compile(rf"(?<=\s){_AND}(?=\s)")
_OR_SPLIT_RE = re.compile(rf"(?<=\s){_OR}(?=\s)")
_ONLY_OR_RE = re.compile(rf"\s*{_OR}\s*")
_STARTS_WITH_OR_RE = re.compile(rf"\s*{_OR}\s+")
_ENDS_WITH_OR_RE = re.compile(rf"\s+{_OR}\s*$")
_OPERATOR_TOKEN_RE = re.compile(rf"{_AND}|{_OR}")


class SegmentCondition(NamedTuple):
    """Result of tokenizing one segment.

    Attributes:
        starts_with_or: The segment began with a standalone OR.
        condition: The simplified condition for the segment.
        ends_with_or: The segment ended with a standalone OR.
    """

    starts_with_or: bool
    condition: Condition
    ends_with_or: bool


def _or_flags(value: str) -> tuple[bool, bool]:
    """Check whether the text starts and/or ends with a standalone OR."""
    if _ONLY_OR_RE.fullmatch(value):
        return True, True
    return (
        _STARTS_WITH_OR_RE.match(value) is not None,
        _ENDS_WITH_OR_RE.search(value) is not None,
    )


def tokenize_segment(text: QueryText) -> SegmentCondition:
    """Tokenize a plain segment (no brackets) into a condition.

    Args:
        text: Segment text. Quoted phrases may appear literally.

    Returns:
        SegmentCondition with the OR boundary flags and the condition, which
        is None when the segment holds nothing but operators.

    Examples:
        >>> tokenize_segment(QueryText("a b or -c"))
        SegmentCondition(starts_with_or=False, condition=Operator(op=<OperatorType.OR: 'Or'>, conditions=[...]), ends_with_or=False)
        >>> tokenize_segment(QueryText(" or "))
        SegmentCondition(starts_with_or=True, condition=None, ends_with_or=True)
    """
    protected, phrases = extract_phrases(text)
    value = _AND_RE.sub(" ", protected.value)
    starts_with_or, ends_with_or = _or_flags(value)

    or_conditions: list[Condition] = []
    for chunk in _OR_SPLIT_RE.split(f" {value} "):
        tokens = chunk.split()
        if not tokens:
            continue
        and_conditions: list[Condition] = []
        for token in tokens:
            phrase = phrase_condition(token, phrases)
            if phrase is not None:
                and_conditions.append(phrase)
            elif len(token) == 1:
                # A lone "-" has nothing to negate
                and_conditions.append(Keyword(token))
            elif _OPERATOR_TOKEN_RE.fullmatch(token):
                # Stray operator with nothing to bind
                continue
            elif token.startswith("-"):
                and_conditions.append(Not(Keyword(token[1:])))
            else:
                and_conditions.append(Keyword(token))
        or_conditions.append(Operator(OperatorType.AND, and_conditions))

    condition = simplify(Operator(OperatorType.OR, or_conditions))
    return SegmentCondition(starts_with_or, condition, ends_with_or)
