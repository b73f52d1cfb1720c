"""Parser configuration loading."""

import os
from dataclasses import dataclass

import yaml  # type: ignore[import-untyped]


class ConfigError(Exception):
    """Raised when the config file cannot be used."""


@dataclass
class ParserConfig:
    """Configuration for the query parser."""

    drop_unmatched_brackets: bool = False


def _get_config_path() -> str:
    """Get the path to the querytree config file."""
    return os.path.expanduser("~/.config/querytree/querytree.yml")


def load_parser_config(config_path: str | None = None) -> ParserConfig:
    """Load parser config from querytree.yml.

    The default file is optional and yields defaults when missing. An
    explicitly given file must exist.

    Args:
        config_path: Explicit config file. Defaults to
            ~/.config/querytree/querytree.yml.

    Returns:
        The loaded ParserConfig.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML or a value
            has the wrong type.
    """
    if config_path is None:
        config_path = _get_config_path()
        if not os.path.exists(config_path):
            return ParserConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict) or "parser" not in data:
        return ParserConfig()

    parser_data = data["parser"]
    if parser_data is None:
        return ParserConfig()
    if not isinstance(parser_data, dict):
        raise ConfigError(f"'parser' section in {config_path} must be a mapping")

    drop_unmatched_brackets = parser_data.get(
        "drop_unmatched_brackets", ParserConfig.drop_unmatched_brackets
    )
    if not isinstance(drop_unmatched_brackets, bool):
        raise ConfigError(
            "drop_unmatched_brackets must be true or false, "
            f"got {drop_unmatched_brackets!r}"
        )

    return ParserConfig(drop_unmatched_brackets=drop_unmatched_brackets)
