"""
Golf betting engine: handicap strokes, game results and settlements.
"""

__version__ = '0.1.0'

from .exceptions import (
    ConfigError,
    GolfBetsError,
    InvariantViolation,
    PlayoffError,
    ScoreError,
    ValidationError,
)

__all__ = [
    'ConfigError',
    'GolfBetsError',
    'InvariantViolation',
    'PlayoffError',
    'ScoreError',
    'ValidationError',
]
