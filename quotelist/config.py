#!/usr/bin/env python3
"""
Configuration loading for quote_join.

Settings live in quotelist.yaml at the repository root:

    max_output_length: 200    # null disables the cap
    max_input_length: 32767   # null disables the cap
    empty_policy: empty       # empty | quotes | error
    escape_quotes: true

Every key is optional; missing keys keep the QuoteJoinConfig defaults.
"""

from pathlib import Path
from typing import Any, Dict

import yaml

from quotelist.quoter import EMPTY_POLICIES, QuoteJoinConfig

CONFIG_FILENAME = "quotelist.yaml"


class ValidationError(Exception):
    """Raised when a YAML file doesn't meet the expected schema."""
    pass


def validate_config_yaml(data: Dict[str, Any], filename: str) -> None:
    """
    Validate that a configuration YAML file meets the schema.

    Optional fields:
    - max_output_length: positive integer or null
    - max_input_length: positive integer or null
    - empty_policy: one of empty, quotes, error
    - escape_quotes: boolean

    Args:
        data: Parsed YAML data
        filename: Name of the file being validated (for error messages)

    Raises:
        ValidationError: If validation fails
    """
    allowed_fields = ["max_output_length", "max_input_length", "empty_policy", "escape_quotes"]

    non_string_keys = [key for key in data if not isinstance(key, str)]
    if non_string_keys:
        raise ValidationError(
            f"{filename}: Field names must be strings (got {', '.join(repr(k) for k in non_string_keys)})"
        )

    for field in ("max_output_length", "max_input_length"):
        if field not in data or data[field] is None:
            continue
        value = data[field]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{filename}: Field '{field}' must be an integer or null")
        if value <= 0:
            raise ValidationError(f"{filename}: Field '{field}' must be positive")

    if "empty_policy" in data and data["empty_policy"] not in EMPTY_POLICIES:
        raise ValidationError(
            f"{filename}: Field 'empty_policy' must be one of {', '.join(EMPTY_POLICIES)}"
        )

    if "escape_quotes" in data and not isinstance(data["escape_quotes"], bool):
        raise ValidationError(f"{filename}: Field 'escape_quotes' must be true or false")

    unexpected_fields = set(data.keys()) - set(allowed_fields)
    if unexpected_fields:
        print(f"Warning: {filename} contains unexpected fields: {', '.join(sorted(unexpected_fields))}")


def load_config(path: Path) -> QuoteJoinConfig:
    """
    Load quote_join settings from a YAML file.

    Args:
        path: Path to the configuration file

    Returns:
        QuoteJoinConfig built from the file (defaults for missing keys)

    Raises:
        ValidationError: If the file can't be read or doesn't meet the schema
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValidationError(f"{path.name}: Invalid YAML syntax - {e}")
    except OSError as e:
        raise ValidationError(f"{path.name}: Error reading file - {e}")

    # An empty file means "all defaults"
    if data is None:
        return QuoteJoinConfig()

    if not isinstance(data, dict):
        raise ValidationError(f"{path.name}: Invalid YAML structure (expected dictionary)")

    validate_config_yaml(data, path.name)

    # null limits are meaningful (no cap), so pass them through as given
    known = {
        key: data[key]
        for key in ("max_output_length", "max_input_length", "empty_policy", "escape_quotes")
        if key in data
    }
    return QuoteJoinConfig(**known)


def find_config(root_dir: Path = None) -> QuoteJoinConfig:
    """
    Load quotelist.yaml from root_dir if present, otherwise return defaults.

    Args:
        root_dir: Directory to look in (defaults to the current directory)

    Returns:
        QuoteJoinConfig for that directory
    """
    if root_dir is None:
        root_dir = Path.cwd()
    config_path = Path(root_dir) / CONFIG_FILENAME
    if not config_path.exists():
        return QuoteJoinConfig()
    return load_config(config_path)
