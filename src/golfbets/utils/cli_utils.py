"""
Utility functions and decorators for CLI argument handling.
"""

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from golfbets.config.types import EngineSettings


@dataclass
class CLIContext:
    """Context object for CLI command execution."""
    args: argparse.Namespace
    logger: logging.Logger
    settings: EngineSettings
    parser: argparse.ArgumentParser

class CommandCategory(Enum):
    """Categories for organizing commands."""
    SHOW = auto()
    SETTLE = auto()
    CHECK = auto()

@dataclass
class CommandMetadata:
    """Metadata for command registration."""
    name: str
    help_text: str
    category: CommandCategory
    handler: Callable[[CLIContext], int]
    options: list[dict[str, Any]]

class CLIOptionFactory:
    """Factory for creating common CLI options with consistent validation."""

    @staticmethod
    def create_round_file_option() -> dict[str, Any]:
        return {
            'name': 'round_file',
            'help': 'Round definition file (YAML, or JSON with a .json suffix)'
        }

    @staticmethod
    def create_format_option() -> dict[str, Any]:
        return {
            'name': '--format',
            'choices': ['text', 'json'],
            'default': 'text',
            'help': 'Output format: human-readable text or machine-readable JSON (default: text)'
        }

    @staticmethod
    def create_hole_option() -> dict[str, Any]:
        return {
            'name': '--hole',
            'type': int,
            'help': 'Hole number (1-18)',
            'validator': lambda x: 1 <= x <= 18
        }

class CommandRegistry:
    """Registry for CLI commands with metadata."""

    _commands: dict[str, CommandMetadata] = {}
    _categories: dict[CommandCategory, list[str]] = {}

    @classmethod
    def clear(cls) -> None:
        """Clear all registered commands."""
        cls._commands.clear()
        cls._categories.clear()

    @classmethod
    def register(cls,
                name: str,
                help_text: str,
                category: CommandCategory,
                options: list[dict[str, Any]] | None = None) -> Callable[[Callable[[CLIContext], int]], Callable[[CLIContext], int]]:
        """Register a command handler."""
        def decorator(handler: Callable[[CLIContext], int]) -> Callable[[CLIContext], int]:
            cls._commands[name] = CommandMetadata(
                name=name,
                help_text=help_text,
                category=category,
                handler=handler,
                options=options or []
            )
            commands = cls._categories.setdefault(category, [])
            if name not in commands:
                commands.append(name)
            return handler
        return decorator

    @classmethod
    def get_command(cls, name: str) -> CommandMetadata | None:
        """Get command metadata by name."""
        return cls._commands.get(name)

    @classmethod
    def get_category_commands(cls, category: CommandCategory) -> list[str]:
        """Get all commands in a category."""
        return cls._categories.get(category, [])

    @classmethod
    def all_commands(cls) -> list[CommandMetadata]:
        return list(cls._commands.values())

class ArgumentValidator:
    """Validator for CLI arguments."""

    @staticmethod
    def validate_option(option: dict[str, Any], value: Any) -> bool:
        """Validate a single option value."""
        if 'validator' not in option:
            return True
        try:
            return bool(option['validator'](value))
        except (TypeError, ValueError):
            return False

    @staticmethod
    def validate_args(args: argparse.Namespace, command: CommandMetadata) -> list[str]:
        """Validate all arguments for a command."""
        errors = []
        for option in command.options:
            value = getattr(args, option['name'].lstrip('-').replace('-', '_'), None)
            if value is not None and not ArgumentValidator.validate_option(option, value):
                errors.append(f"Invalid value for {option['name']}: {value}")
        return errors

def add_common_options(parser: argparse.ArgumentParser) -> None:
    """Add common global options to a parser."""
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging output'
    )
    parser.add_argument(
        '--log-file',
        help='Path to write log output (default: logs to stderr only)'
    )
    parser.add_argument(
        '--json-logs',
        action='store_true',
        help='Emit console logs as JSON'
    )
    parser.add_argument(
        '--config-dir',
        help='Directory holding settings.yaml (default: $GOLFBETS_CONFIG_DIR or the current directory)'
    )

class CLIBuilder:
    """Builder for constructing CLI parsers with consistent formatting."""

    # Custom option fields that should not be passed to argparse
    _CUSTOM_FIELDS = {'validator'}

    def __init__(self, description: str):
        """Initialize CLI builder."""
        self.parser = argparse.ArgumentParser(prog='golfbets', description=description)
        add_common_options(self.parser)
        self.subparsers = self.parser.add_subparsers(dest='command')

    def add_command(self, command: CommandMetadata) -> None:
        """Add a command to the parser."""
        parser = self.subparsers.add_parser(command.name, help=command.help_text)
        for option in command.options:
            option_copy = option.copy()
            name = option_copy.pop('name')
            option_dict = {k: v for k, v in option_copy.items() if k not in self._CUSTOM_FIELDS}
            parser.add_argument(name, **option_dict)
        parser.set_defaults(func=command.handler)

    def build(self) -> argparse.ArgumentParser:
        """Build and return the parser."""
        return self.parser
