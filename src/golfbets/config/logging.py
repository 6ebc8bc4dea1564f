"""Logging configuration utilities."""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime
from pathlib import Path

from golfbets.config.error_aggregator import init_error_aggregator
from golfbets.config.logging_config import LoggingConfig


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, include_timestamp: bool = True):
        """Initialize formatter.

        Args:
            include_timestamp: Whether to include timestamp in output
        """
        self.include_timestamp = include_timestamp
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        data = {
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if self.include_timestamp:
            data['timestamp'] = datetime.fromtimestamp(record.created).isoformat()

        if record.exc_info:
            data['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            data.update(record.extra_fields)

        return json.dumps(data, default=str)

class ColoredFormatter(logging.Formatter):
    """Formatter that adds color to console output."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = True):
        self.use_color = use_color
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with color."""
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S,%f')[:-3]
        msg = record.getMessage()

        context = ""
        if hasattr(record, 'extra_fields'):
            fields = [f"\n    {key}: {value}" for key, value in record.extra_fields.items()]
            if fields:
                context = " |" + "".join(fields)

        if record.exc_info:
            msg = f"{msg}\n{self.formatException(record.exc_info)}"

        line = f"{timestamp} - {record.name} - {record.levelname} - {msg}{context}"
        if not self.use_color:
            return line
        color = self.COLORS.get(record.levelname, self.RESET)
        return f"{color}{line}{self.RESET}"

def get_console_handler(formatter: logging.Formatter) -> logging.StreamHandler:
    """Create console handler."""
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    return console_handler

def get_file_handler(
    log_file: str | Path,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int
) -> logging.handlers.RotatingFileHandler:
    """Create rotating file handler.

    Args:
        log_file: Path to log file
        formatter: Formatter to use
        max_bytes: Maximum file size in bytes
        backup_count: Number of backup files to keep

    Returns:
        Configured file handler
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count
    )
    file_handler.setFormatter(formatter)
    return file_handler

def setup_logging(
    config: LoggingConfig | None = None,
    dev_mode: bool = False,
    verbose: bool = False,
    log_file: str | None = None,
    json_output: bool = False
) -> None:
    """Set up logging configuration."""
    config = config or LoggingConfig()

    if verbose:
        level_name = config.verbose_level
    elif dev_mode:
        level_name = config.dev_level
    else:
        level_name = config.default_level
    level = getattr(logging, level_name.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if config.console.enabled:
        if json_output or config.console.format == 'json':
            console_formatter: logging.Formatter = JsonFormatter(config.console.include_timestamp)
        else:
            console_formatter = ColoredFormatter(use_color=config.console.color)
        console_handler = get_console_handler(console_formatter)
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    file_path = log_file or (config.file.path if config.file.enabled else None)
    if file_path:
        if config.file.format == 'json':
            file_formatter: logging.Formatter = JsonFormatter(config.file.include_timestamp)
        else:
            file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler = get_file_handler(
            file_path,
            file_formatter,
            config.file.max_size_mb * 1024 * 1024,
            config.file.backup_count
        )
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    for logger_name, logger_level in {**config.libraries, **config.loggers}.items():
        logging.getLogger(logger_name).setLevel(getattr(logging, logger_level.upper(), logging.WARNING))

    init_error_aggregator(config.error_aggregation)
