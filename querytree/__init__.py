"""Parse Google-style advanced search queries into boolean condition trees.

Query Language Examples:
    foo bar                  - Both keywords (implicit AND)
    foo AND bar              - Same as above
    foo OR bar               - Either keyword
    "foo bar"                - Exact phrase
    -foo / -"foo bar"        - Exclude a keyword / phrase
    (foo OR bar) -(baz qux)  - Grouped expressions, negated groups

Precedence (tightest to loosest):
    1. - (NOT)
    2. AND (explicit or implicit via whitespace)
    3. OR
    Parentheses override precedence.

Full-width brackets, quotes, spaces and AND / OR letters are accepted too.
Malformed input never raises: empty groups disappear, stray operators are
dropped and unmatched brackets or quotes are kept as plain text.
"""

from .config import ConfigError, ParserConfig, load_parser_config
from .parser import parse
from .simplify import simplify
from .types import (
    Condition,
    Keyword,
    Not,
    Operator,
    OperatorType,
    PhraseKeyword,
    QueryInternalError,
    to_canonical_string,
    to_dict,
)

__all__ = [
    # Parser
    "parse",
    "simplify",
    "QueryInternalError",
    # Config
    "ParserConfig",
    "ConfigError",
    "load_parser_config",
    # Types
    "Condition",
    "Keyword",
    "PhraseKeyword",
    "Not",
    "Operator",
    "OperatorType",
    "to_canonical_string",
    "to_dict",
]
