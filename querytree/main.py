"""querytree - Parse a search query and print its condition tree."""

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from .config import ConfigError, load_parser_config
from .parser import parse
from .types import (
    Condition,
    Keyword,
    Not,
    Operator,
    PhraseKeyword,
    to_canonical_string,
    to_dict,
)

console = Console()


def _condition_label(condition: Condition) -> Text:
    """Get the styled label for one condition node."""
    text = Text()
    if condition is None:
        text.append("None", style="dim")
    elif isinstance(condition, Keyword):
        text.append("Keyword ", style="bold")
        text.append(repr(condition.value))
    elif isinstance(condition, PhraseKeyword):
        text.append("PhraseKeyword ", style="bold green")
        text.append(repr(condition.value))
    elif isinstance(condition, Not):
        text.append("Not", style="bold red")
    else:
        text.append(condition.op.name, style="bold cyan")
    return text


def build_tree(condition: Condition, tree: Tree | None = None) -> Tree:
    """Build a rich Tree mirroring the condition tree."""
    label = _condition_label(condition)
    node = Tree(label) if tree is None else tree.add(label)
    if isinstance(condition, Not):
        build_tree(condition.operand, node)
    elif isinstance(condition, Operator):
        for child in condition.conditions:
            build_tree(child, node)
    return node


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the querytree command."""
    parser = argparse.ArgumentParser(
        description="Parse a Google-style search query into a condition tree"
    )
    parser.add_argument(
        "query",
        nargs="*",
        help="Query words (joined with spaces). Reads STDIN when omitted.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the condition tree as JSON",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Config file (default: ~/.config/querytree/querytree.yml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each parsing stage",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_parser_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    query = " ".join(args.query) if args.query else sys.stdin.read()
    condition = parse(query, config)

    if args.json:
        print(json.dumps(to_dict(condition), ensure_ascii=False))
        return 0

    canonical = to_canonical_string(condition)
    if canonical:
        console.print(canonical, markup=False, highlight=False)
    else:
        console.print("[dim](empty query)[/dim]")
    console.print(build_tree(condition))
    return 0


if __name__ == "__main__":
    sys.exit(main())
