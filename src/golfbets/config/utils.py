"""Configuration utility functions."""

import os
from copy import deepcopy
from pathlib import Path
from typing import Any
from typing import TypeVar


T = TypeVar('T', bound=dict[str, Any])

def deep_merge(base: T, override: T) -> T:
    """Deep merge two dictionaries.
    
    Args:
        base: Base dictionary
        override: Dictionary to override base values
        
    Returns:
        Merged dictionary
    """
    result = deepcopy(base)
    
    for key, value in override.items():
        if (
            key in result and
            isinstance(result[key], dict) and
            isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)
    
    return result

def resolve_path(
    path: str | Path,
    base_dir: str | Path | None = None
) -> Path:
    """Resolve path relative to base directory."""
    if isinstance(path, str):
        path = Path(path)
    
    if not path.is_absolute() and base_dir is not None:
        path = Path(base_dir) / path
    
    return path

def get_config_dir(config_dir: str | Path | None = None) -> Path:
    """Get configuration directory, honouring ``GOLFBETS_CONFIG_DIR``."""
    if config_dir is None:
        config_dir = os.getenv("GOLFBETS_CONFIG_DIR", os.getcwd())
    return resolve_path(config_dir)
