"""Tests for the querytree command line entry point."""

import io
import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from querytree.main import build_tree, main
from querytree.types import Keyword, Not


@pytest.fixture(autouse=True)
def _no_user_config() -> Iterator[None]:
    """Keep the user's real config file out of the tests."""
    with patch(
        "querytree.config._get_config_path",
        return_value="/nonexistent/path/querytree.yml",
    ):
        yield


def test_main_json_output(capsys: pytest.CaptureFixture[str]) -> None:
    """Test --json prints the tagged condition tree."""
    assert main(["--json", "--", "a", "-b"]) == 0
    out = capsys.readouterr().out
    assert json.loads(out) == {
        "Operator": ["And", [{"Keyword": "a"}, {"Not": {"Keyword": "b"}}]]
    }


def test_main_json_keeps_non_ascii(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that --json does not escape non-ASCII text."""
    assert main(["--json", "検索１"]) == 0
    assert capsys.readouterr().out.strip() == '{"Keyword": "検索１"}'


def test_main_json_blank_query(capsys: pytest.CaptureFixture[str]) -> None:
    """Test that a blank query prints the None condition."""
    assert main(["--json", "   "]) == 0
    assert json.loads(capsys.readouterr().out) == "None"


def test_main_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that the query is read from stdin when no words are given."""
    monkeypatch.setattr("sys.stdin", io.StringIO("(a or b) c\n"))
    assert main(["--json"]) == 0
    result = json.loads(capsys.readouterr().out)
    assert result["Operator"][0] == "And"


def test_main_tree_output(capsys: pytest.CaptureFixture[str]) -> None:
    """Test the default canonical string and tree output."""
    assert main(["(a", "or", "b)", "c"]) == 0
    out = capsys.readouterr().out
    assert "(a OR b) AND c" in out
    assert "Keyword" in out
    assert "AND" in out


def test_main_empty_query_output(capsys: pytest.CaptureFixture[str]) -> None:
    """Test the default output for a blank query."""
    assert main(["()"]) == 0
    assert "(empty query)" in capsys.readouterr().out


def test_main_config_option(
    config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that -c loads parser settings from the given file."""
    config_path.write_text("parser:\n  drop_unmatched_brackets: true\n")
    assert main(["--json", "-c", str(config_path), "(a"]) == 0
    assert json.loads(capsys.readouterr().out) == {"Keyword": "a"}


def test_main_config_error(
    config_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that a broken config file exits with status 1."""
    config_path.write_text("parser:\n  drop_unmatched_brackets: sometimes\n")
    assert main(["-c", str(config_path), "a"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_main_missing_config_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test that -c with a missing file is reported instead of ignored."""
    assert main(["-c", str(tmp_path / "missing.yml"), "a"]) == 1
    assert "Cannot read" in capsys.readouterr().err


def test_build_tree_labels() -> None:
    """Test that keyword values are shown verbatim, markup included."""
    tree = build_tree(Not(Keyword("[bold]x")))
    assert str(tree.label) == "Not"
    child = tree.children[0]
    assert str(child.label) == "Keyword '[bold]x'"


def test_main_verbose_keeps_json_on_stdout(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Test that -v debug logging does not mix into the JSON output."""
    assert main(["-v", "--json", "(a", "b)"]) == 0
    assert json.loads(capsys.readouterr().out) == {
        "Operator": ["And", [{"Keyword": "a"}, {"Keyword": "b"}]]
    }
