"""Error aggregation and reporting utilities."""

import logging
import threading
import traceback
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from types import TracebackType
from typing import DefaultDict, Optional, Set, Union

from golfbets.config.logging_config import ErrorAggregationConfig

@dataclass
class ErrorGroup:
    """Group of similar errors."""
    message: str
    count: int = 0
    first_seen: datetime = field(default_factory=datetime.now)
    last_seen: datetime = field(default_factory=datetime.now)
    services: Set[str] = field(default_factory=set)
    stack_traces: Set[str] = field(default_factory=set)

    def update(self, service: str, stack_trace: Optional[str] = None) -> None:
        """Update error group with new occurrence."""
        self.count += 1
        self.last_seen = datetime.now()
        self.services.add(service)
        if stack_trace:
            self.stack_traces.add(stack_trace)

class ErrorAggregator:
    """Aggregates repeated errors and reports them once a threshold is hit.

    The engine is synchronous, so reporting happens inline on ``add_error`` and
    on ``flush`` rather than from a background thread.
    """

    def __init__(self, config: ErrorAggregationConfig):
        """Initialize error aggregator.

        Args:
            config: Error aggregation configuration
        """
        self._errors: DefaultDict[str, ErrorGroup] = defaultdict(ErrorGroup)
        self._lock = threading.Lock()
        self._config = config
        self.logger = logging.getLogger('error_aggregator')

    def add_error(
        self,
        message: str,
        service: str,
        stack_trace: Union[str, TracebackType, None] = None
    ) -> None:
        """Add error occurrence to aggregator.

        Args:
            message: Error message
            service: Service where error occurred
            stack_trace: Optional stack trace or traceback object
        """
        if not self._config.enabled:
            return

        if isinstance(stack_trace, TracebackType):
            stack_trace = ''.join(traceback.format_tb(stack_trace))

        with self._lock:
            if message not in self._errors:
                self._errors[message] = ErrorGroup(message=message)
            self._errors[message].update(service, stack_trace)

            error_group = self._errors[message]
            if (
                error_group.count >= self._config.error_threshold or
                (datetime.now() - error_group.first_seen).seconds >= self._config.time_threshold
            ):
                self._report_error_group(message, error_group)
                del self._errors[message]

    def _report_error_group(self, message: str, error_group: ErrorGroup) -> None:
        """Report a single error group."""
        self.logger.error(
            f"{message} (occurrences: {error_group.count}, services: {sorted(error_group.services)})"
        )
        for trace in error_group.stack_traces:
            if trace.strip():
                self.logger.debug(f"Stack trace:\n{trace}")

    def flush(self) -> None:
        """Report and clear everything collected so far."""
        with self._lock:
            for message, group in self._errors.items():
                self._report_error_group(message, group)
            self._errors.clear()

# Global error aggregator instance
_error_aggregator: Optional[ErrorAggregator] = None

def init_error_aggregator(config: ErrorAggregationConfig) -> None:
    """Initialize global error aggregator with configuration.

    Args:
        config: Error aggregation configuration
    """
    global _error_aggregator
    _error_aggregator = ErrorAggregator(config)

def get_error_aggregator() -> ErrorAggregator:
    """Get global error aggregator instance, creating a default one if needed."""
    if _error_aggregator is None:
        init_error_aggregator(ErrorAggregationConfig())
    assert _error_aggregator is not None
    return _error_aggregator

def aggregate_error(
    message: str,
    service: str,
    stack_trace: Union[str, TracebackType, None] = None
) -> None:
    """Add error to global aggregator.

    Args:
        message: Error message
        service: Service where error occurred
        stack_trace: Optional stack trace
    """
    aggregator = get_error_aggregator()
    aggregator.add_error(message, service, stack_trace)
