"""Tests for the config module."""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from querytree.config import ConfigError, ParserConfig, load_parser_config


def test_load_parser_config_all_fields() -> None:
    """Test loading config with all fields present."""
    yaml_content = """
parser:
  drop_unmatched_brackets: true
"""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yml", delete=False) as f:
        f.write(yaml_content)
        config_path = f.name

    with patch("querytree.config._get_config_path", return_value=config_path):
        config = load_parser_config()

    assert config.drop_unmatched_brackets is True

    Path(config_path).unlink()


def test_load_parser_config_missing_fields(config_path: Path) -> None:
    """Test loading config with an unrelated key uses defaults."""
    config_path.write_text("parser:\n  unknown_option: 3\n")

    assert load_parser_config(str(config_path)) == ParserConfig()


def test_load_parser_config_no_parser_section(config_path: Path) -> None:
    """Test loading config with no parser section returns all defaults."""
    config_path.write_text("other:\n  key: value\n")

    assert load_parser_config(str(config_path)) == ParserConfig()


def test_load_parser_config_empty_sections(config_path: Path) -> None:
    """Test that an empty file or empty parser section gives defaults."""
    config_path.write_text("")
    assert load_parser_config(str(config_path)) == ParserConfig()

    config_path.write_text("parser:\n")
    assert load_parser_config(str(config_path)) == ParserConfig()


def test_load_parser_config_missing_default_file() -> None:
    """Test that a missing default config file returns all defaults."""
    with patch(
        "querytree.config._get_config_path",
        return_value="/nonexistent/path/querytree.yml",
    ):
        config = load_parser_config()

    assert config == ParserConfig()


def test_load_parser_config_missing_explicit_file(tmp_path: Path) -> None:
    """Test that an explicitly given file must exist."""
    with pytest.raises(ConfigError, match="Cannot read"):
        load_parser_config(str(tmp_path / "missing.yml"))


def test_load_parser_config_unreadable_file(tmp_path: Path) -> None:
    """Test that a path that cannot be opened raises ConfigError."""
    with pytest.raises(ConfigError, match="Cannot read"):
        load_parser_config(str(tmp_path))


def test_load_parser_config_unreadable_default_file(tmp_path: Path) -> None:
    """Test that an unreadable default path is reported, not ignored."""
    with patch("querytree.config._get_config_path", return_value=str(tmp_path)):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_parser_config()


def test_load_parser_config_invalid_yaml(config_path: Path) -> None:
    """Test that malformed YAML raises ConfigError."""
    config_path.write_text("parser: [unclosed\n")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_parser_config(str(config_path))


def test_load_parser_config_section_not_mapping(config_path: Path) -> None:
    """Test that a non-mapping parser section raises ConfigError."""
    config_path.write_text("parser:\n  - drop_unmatched_brackets\n")

    with pytest.raises(ConfigError, match="must be a mapping"):
        load_parser_config(str(config_path))


@pytest.mark.parametrize("value", ["sometimes", "1", "0", "null"])
def test_load_parser_config_bad_drop_flag(config_path: Path, value: str) -> None:
    """Test that a non-boolean drop_unmatched_brackets raises ConfigError."""
    config_path.write_text(f"parser:\n  drop_unmatched_brackets: {value}\n")

    with pytest.raises(ConfigError, match="drop_unmatched_brackets"):
        load_parser_config(str(config_path))
