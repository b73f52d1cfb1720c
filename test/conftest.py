"""Pytest configuration for querytree tests."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path so we can import querytree
sys.path.insert(0, str(Path(__file__).parent.parent))

from querytree.types import (  # noqa: E402
    Condition,
    Keyword,
    Not,
    Operator,
    OperatorType,
    PhraseKeyword,
)


def and_(*conditions: Condition) -> Operator:
    """Shorthand for an AND operator node."""
    return Operator(OperatorType.AND, list(conditions))


def or_(*conditions: Condition) -> Operator:
    """Shorthand for an OR operator node."""
    return Operator(OperatorType.OR, list(conditions))


def assert_canonical(condition: Condition) -> None:
    """Assert that a condition tree satisfies the simplified-form invariants."""
    if condition is None:
        return
    if isinstance(condition, (Keyword, PhraseKeyword)):
        assert condition.value.replace("　", " ").strip()
    elif isinstance(condition, Not):
        assert condition.operand is not None
        assert not isinstance(condition.operand, Not)
        assert_canonical(condition.operand)
    elif isinstance(condition, Operator):
        assert len(condition.conditions) >= 2
        for child in condition.conditions:
            assert child is not None
            assert not (isinstance(child, Operator) and child.op is condition.op)
            assert_canonical(child)
    else:
        raise AssertionError(f"Unexpected node: {condition!r}")


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Fixture that provides a path for a throwaway querytree.yml."""
    return tmp_path / "querytree.yml"
