"""Load round definitions from YAML or JSON files."""

import json
from pathlib import Path
from typing import Any

import yaml

from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError
from golfbets.models.round import Round
from golfbets.utils.logging_utils import get_logger

logger = get_logger(__name__)

JSON_SUFFIXES = {'.json'}


def read_round_data(path: str | Path) -> dict[str, Any]:
    """Parse a round file into a dictionary.

    Files ending in ``.json`` are parsed as JSON, anything else as YAML.

    Raises:
        ConfigError: If the file is missing or cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(
            f"Round file not found: {path}",
            ErrorCode.CONFIG_MISSING,
            {"file": str(path)}
        )

    with open(path, encoding="utf-8") as f:
        try:
            if path.suffix.lower() in JSON_SUFFIXES:
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(
                f"Could not parse round file {path}: {e}",
                ErrorCode.CONFIG_INVALID,
                {"file": str(path)}
            ) from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Round file must contain a mapping: {path}",
            ErrorCode.CONFIG_INVALID,
            {"file": str(path)}
        )
    logger.debug(f"Loaded round data from {path}")
    return data


def load_round(path: str | Path) -> Round:
    """Load a round definition file."""
    return Round.from_dict(read_round_data(path))
