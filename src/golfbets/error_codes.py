"""Error codes for the golf betting engine."""

from enum import Enum

class ErrorCode(Enum):
    """Enumeration of all possible error codes."""
    # Configuration Errors
    CONFIG_INVALID = "config_invalid"
    CONFIG_MISSING = "config_missing"
    
    # Round Setup Errors
    INVALID_HOLES = "invalid_holes"
    INVALID_PLAYERS = "invalid_players"
    INVALID_STAKES = "invalid_stakes"
    INVALID_GAME = "invalid_game"
    INVALID_PRESS = "invalid_press"
    
    # Data Errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_SCORE = "invalid_score"
    
    # Programming Errors
    INVARIANT_VIOLATION = "invariant_violation"
    
    # Playoff Errors
    PLAYOFF_STATE = "playoff_state"
