"""Centralized error definitions for the golf betting engine."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from golfbets.config.error_aggregator import aggregate_error
from golfbets.error_codes import ErrorCode


logger = logging.getLogger(__name__)

@dataclass
class GolfBetsError(Exception):
    """Base exception for all golf betting engine errors."""
    message: str
    code: ErrorCode
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Code: {self.code.value}, Details: {self.details})"
        return f"{self.message} (Code: {self.code.value})"

class ConfigError(GolfBetsError):
    """Invalid configuration.

    Raised at the boundary for malformed settings or round setups (hole lists,
    player lists, stakes, game/player count mismatches) before any evaluation.
    """
    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
        details: dict[str, Any] | None = None
    ):
        super().__init__(message, code, details)

class ValidationError(GolfBetsError):
    """Validation error."""
    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_FAILED,
        details: dict[str, Any] | None = None
    ):
        super().__init__(message, code, details)

class ScoreError(ValidationError):
    """Rejected score upsert."""
    def __init__(self, message: str, player_id: str, hole_number: Any, details: dict[str, Any] | None = None):
        details = details or {}
        details["player_id"] = player_id
        details["hole_number"] = hole_number
        super().__init__(message, ErrorCode.INVALID_SCORE, details)

class InvariantViolation(GolfBetsError):
    """Internal invariant broken; indicates a bug in an evaluator."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.INVARIANT_VIOLATION, details)

class PlayoffError(GolfBetsError):
    """Illegal playoff state transition."""
    def __init__(self, message: str, state: str, details: dict[str, Any] | None = None):
        details = details or {}
        details["state"] = state
        super().__init__(message, ErrorCode.PLAYOFF_STATE, details)

@contextmanager
def handle_errors(
    error_type: type[GolfBetsError],
    service: str,
    operation: str
) -> Iterator[None]:
    """Report errors raised inside the block to the error aggregator.

    Args:
        error_type: The error type expected from the block
        service: The service name
        operation: The operation name

    Errors are always re-raised.
    """
    try:
        yield
    except error_type as e:
        aggregate_error(str(e), service, e.__traceback__)
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error in {service}.{operation}: {e}",
            exc_info=True
        )
        aggregate_error(str(e), service, e.__traceback__)
        raise
