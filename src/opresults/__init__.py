"""opresults - Operation results carrying severity-tagged messages.

Return expected failures as data instead of raising them.

Quick Start:
    >>> from opresults import Message, OperationResult, Severity, ValueResult
    >>>
    >>> def find_user(user_id: int) -> ValueResult[str]:
    ...     if user_id <= 0:
    ...         return ValueResult.failure(Message(Severity.ERROR, {"user_id": user_id}))
    ...     return ValueResult.success("ada")
    >>>
    >>> find_user(1).value
    'ada'
    >>> find_user(0).succeeded
    False

Converting up a call chain:
    >>> outcome = find_user(0).to_result()
    >>> outcome.messages.has_error()
    True

Problem details (RFC 7807):
    >>> from opresults import ProblemDetails
    >>> result = OperationResult.failure(ProblemDetails(title="Not found", status=404))
    >>> result.messages[0].details["status"]
    404
"""

from __future__ import annotations

__version__ = "0.1.0"

from .collection import MessageCollection
from .combinators import (
    collect_values,
    convert_to,
    merge,
    on,
    on_failure,
    on_success,
    to_result,
    to_value_result,
    try_operation,
    try_value,
)
from .errors import ArgumentError
from .messages import Message, MessageKind, ProblemDetails, Severity
from .result import OperationResult, ValueResult
from .settings import OpResultsSettings, clear_settings_cache, get_settings
from .telemetry import LoggingTelemetryClient, TelemetryClient, configure_logging, track_failures

__all__ = [
    # Messages
    "Severity", "MessageKind", "Message", "ProblemDetails", "MessageCollection",
    # Results
    "OperationResult", "ValueResult",
    # Combinators
    "convert_to", "to_result", "to_value_result", "merge", "collect_values",
    "on", "on_success", "on_failure", "try_operation", "try_value",
    # Errors
    "ArgumentError",
    # Configuration
    "OpResultsSettings", "get_settings", "clear_settings_cache",
    # Telemetry
    "TelemetryClient", "LoggingTelemetryClient", "track_failures", "configure_logging",
]
