"""Query text value and symbol normalization."""

from dataclasses import dataclass

IDEOGRAPHIC_SPACE = "　"

# Full-width symbols and their ASCII replacements. Quotes form their own
# pass, applied before phrase extraction.
_QUOTE_REPLACEMENTS = (("”", '"'),)
_SYMBOL_REPLACEMENTS = (
    ("（", "("),
    ("）", ")"),
    (IDEOGRAPHIC_SPACE, " "),
)


@dataclass(frozen=True)
class QueryText:
    """An immutable piece of query text.

    Attributes:
        value: The raw string.
    """

    value: str

    def normalize_quotes(self) -> "QueryText":
        """Replace full-width quotes with ASCII double quotes."""
        return QueryText(_replace_all(self.value, _QUOTE_REPLACEMENTS))

    def normalize_symbols(self) -> "QueryText":
        """Replace full-width brackets and ideographic spaces (not quotes)."""
        return QueryText(_replace_all(self.value, _SYMBOL_REPLACEMENTS))

    def is_not_blank(self) -> bool:
        """Check whether the text has anything besides spaces."""
        return bool(self.value.replace(IDEOGRAPHIC_SPACE, " ").strip())


def _replace_all(value: str, replacements: tuple[tuple[str, str], ...]) -> str:
    for old, new in replacements:
        value = value.replace(old, new)
    return value


def is_not_blank(value: str) -> bool:
    """Shorthand for QueryText(value).is_not_blank()."""
    return QueryText(value).is_not_blank()
