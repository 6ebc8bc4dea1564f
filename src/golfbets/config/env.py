"""Environment variable handling for configuration."""

import os
from typing import Any


class EnvConfig:
    """Environment variable configuration."""

    # Mapping of environment variables to configuration paths
    ENV_MAPPING = {
        'GOLFBETS_HANDICAP_ROUNDING': ('handicap', 'rounding'),
        'GOLFBETS_DEFAULT_SLOPE': ('handicap', 'default_slope'),
        'GOLFBETS_INCLUDE_COURSE_RATING': ('handicap', 'include_course_rating'),
        'GOLFBETS_CURRENCY_PLACES': ('betting', 'currency_places'),
        'GOLFBETS_MAX_PRESSES': ('betting', 'max_presses_per_segment'),
        'GOLFBETS_PRESS_DOWN_THRESHOLD': ('betting', 'press_down_threshold'),
        'GOLFBETS_LOG_LEVEL': ('logging', 'level'),
        'GOLFBETS_LOG_FILE': ('logging', 'file'),
        'GOLFBETS_LOGGING_CONFIG': ('logging', 'config_file'),
    }

    BOOLEAN_VARS = {'GOLFBETS_INCLUDE_COURSE_RATING'}

    @staticmethod
    def get_env_value(env_var: str, default: Any | None = None) -> Any | None:
        """Get value from environment variable with default."""
        return os.getenv(env_var, default)

    @staticmethod
    def _set_nested_value(config: dict[str, Any], path: tuple, value: Any) -> None:
        """Set value in nested dictionary using path tuple."""
        current = config
        for part in path[:-1]:
            if part not in current:
                current[part] = {}
            current = current[part]
        current[path[-1]] = value

    @classmethod
    def update_config_from_env(cls, config: dict[str, Any]) -> None:
        """Update configuration dictionary with environment variables.

        Args:
            config: Configuration dictionary to update
        """
        for env_var, path in cls.ENV_MAPPING.items():
            value = cls.get_env_value(env_var)
            if value is None:
                continue
            if env_var in cls.BOOLEAN_VARS:
                value = value.strip().lower() in ('1', 'true', 'yes', 'on')
            cls._set_nested_value(config, path, value)

    @classmethod
    def get_settings_config(cls) -> dict[str, Any]:
        """Get settings dictionary populated only from the environment."""
        config: dict[str, Any] = {}
        cls.update_config_from_env(config)
        return config
