"""Configuration type definitions."""

from dataclasses import dataclass, asdict
from typing import Any, Optional, TypedDict

HALF_UP = "half_up"
HALF_EVEN = "half_even"

class LoggingSettings(TypedDict):
    """Logging section of the settings file."""
    level: str
    file: Optional[str]
    config_file: Optional[str]

@dataclass
class EngineSettings:
    """Engine configuration.

    ``handicap_rounding`` applies to course, 9-hole and prorated handicaps.
    """
    handicap_rounding: str = HALF_UP
    default_slope: int = 113
    include_course_rating: bool = False
    currency_places: int = 2
    max_presses_per_segment: int = 3
    press_down_threshold: int = 2
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    logging_config_file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EngineSettings":
        """Build settings from a nested settings dictionary."""
        handicap = data.get('handicap', {})
        betting = data.get('betting', {})
        logging_section = data.get('logging', {})
        defaults = cls()
        return cls(
            handicap_rounding=handicap.get('rounding', defaults.handicap_rounding),
            default_slope=int(handicap.get('default_slope', defaults.default_slope)),
            include_course_rating=bool(handicap.get('include_course_rating', defaults.include_course_rating)),
            currency_places=int(betting.get('currency_places', defaults.currency_places)),
            max_presses_per_segment=int(betting.get('max_presses_per_segment', defaults.max_presses_per_segment)),
            press_down_threshold=int(betting.get('press_down_threshold', defaults.press_down_threshold)),
            log_level=logging_section.get('level', defaults.log_level),
            log_file=logging_section.get('file', defaults.log_file),
            logging_config_file=logging_section.get('config_file', defaults.logging_config_file)
        )

    def as_dict(self) -> dict[str, Any]:
        """Return settings as a flat dictionary."""
        return asdict(self)
