"""Configuration validation utilities."""

import logging

from golfbets.config.types import HALF_EVEN, HALF_UP, EngineSettings
from golfbets.error_codes import ErrorCode
from golfbets.exceptions import ConfigError


VALID_ROUNDING = (HALF_UP, HALF_EVEN)

def validate_settings(settings: EngineSettings) -> None:
    """
    Validate engine settings.
    
    Args:
        settings: EngineSettings object to validate
        
    Raises:
        ConfigError: If settings are invalid
    """
    if settings.handicap_rounding not in VALID_ROUNDING:
        raise ConfigError(
            f"Unknown handicap rounding mode: {settings.handicap_rounding}",
            details={"allowed": list(VALID_ROUNDING)}
        )

    if not 55 <= settings.default_slope <= 155:
        raise ConfigError(
            "Default slope must be between 55 and 155",
            details={"default_slope": settings.default_slope}
        )

    if not 0 <= settings.currency_places <= 4:
        raise ConfigError(
            "Currency places must be between 0 and 4",
            details={"currency_places": settings.currency_places}
        )

    if settings.max_presses_per_segment < 0:
        raise ConfigError(
            "Maximum presses per segment cannot be negative",
            ErrorCode.INVALID_PRESS,
            {"max_presses_per_segment": settings.max_presses_per_segment}
        )

    if settings.press_down_threshold < 1:
        raise ConfigError(
            "Press threshold must be at least one stroke",
            ErrorCode.INVALID_PRESS,
            {"press_down_threshold": settings.press_down_threshold}
        )

    if not isinstance(logging.getLevelName(settings.log_level.upper()), int):
        raise ConfigError(
            f"Unknown log level: {settings.log_level}",
            details={"log_level": settings.log_level}
        )
