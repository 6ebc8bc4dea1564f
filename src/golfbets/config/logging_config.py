"""Logging configuration types and loading utilities."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

@dataclass
class FileConfig:
    """File logging configuration."""
    enabled: bool = False
    path: str = 'logs/golfbets.log'
    max_size_mb: int = 10
    backup_count: int = 5
    format: str = 'json'
    include_timestamp: bool = True

@dataclass
class ConsoleConfig:
    """Console logging configuration."""
    enabled: bool = True
    format: str = 'text'
    include_timestamp: bool = True
    color: bool = True

@dataclass
class ErrorAggregationConfig:
    """Error aggregation configuration."""
    enabled: bool = True
    error_threshold: int = 5
    time_threshold: int = 300
    categorize_by: List[str] = field(default_factory=lambda: ['service', 'message'])

@dataclass
class LoggingConfig:
    """Complete logging configuration."""
    default_level: str = 'WARNING'
    dev_level: str = 'INFO'
    verbose_level: str = 'DEBUG'
    file: FileConfig = field(default_factory=FileConfig)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)
    loggers: Dict[str, str] = field(default_factory=dict)
    libraries: Dict[str, str] = field(default_factory=lambda: {'yaml': 'WARNING'})
    error_aggregation: ErrorAggregationConfig = field(default_factory=ErrorAggregationConfig)

def load_logging_config(config_path: Optional[Union[str, Path]] = None) -> LoggingConfig:
    """Load logging configuration from a YAML file.

    Missing files and missing sections fall back to defaults.
    """
    if config_path is None or not Path(config_path).exists():
        return LoggingConfig()

    with open(config_path, 'r', encoding='utf-8') as f:
        config_dict = yaml.safe_load(f) or {}

    return LoggingConfig(
        default_level=config_dict.get('default_level', 'WARNING'),
        dev_level=config_dict.get('dev_level', 'INFO'),
        verbose_level=config_dict.get('verbose_level', 'DEBUG'),
        file=FileConfig(**config_dict.get('file', {})),
        console=ConsoleConfig(**config_dict.get('console', {})),
        loggers=config_dict.get('loggers', {}),
        libraries=config_dict.get('libraries', {'yaml': 'WARNING'}),
        error_aggregation=ErrorAggregationConfig(**config_dict.get('error_aggregation', {}))
    )
