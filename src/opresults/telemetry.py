"""Forward failed results to telemetry, backed by stdlib logging.

The result model itself never logs. Callers that want failures reported
hand a result to track_failures() with a TelemetryClient.

Quick Start:
    >>> from opresults import OperationResult
    >>> from opresults.telemetry import LoggingTelemetryClient, configure_logging, track_failures
    >>> _ = configure_logging()
    >>> result = OperationResult.failure(RuntimeError("disk full"))
    >>> track_failures(result, LoggingTelemetryClient())
    1
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import orjson

from .errors import require
from .messages import EXCEPTION_KEYS, MessageKind
from .settings import OpResultsSettings, get_settings

if TYPE_CHECKING:
    from .result import OperationResult

logger = logging.getLogger("opresults.telemetry")


@runtime_checkable
class TelemetryClient(Protocol):
    """Sink for exceptions carried by failed results."""

    def track_exception(
        self,
        exception: BaseException,
        properties: Mapping[str, str] | None = None,
        metrics: Mapping[str, float] | None = None,
    ) -> None: ...


@dataclass(slots=True)
class LoggingTelemetryClient:
    """TelemetryClient that logs each exception at ERROR level.

    Properties and metrics are attached to the log record as the
    ``properties`` and ``metrics`` extras.
    """

    log: logging.Logger = field(default_factory=lambda: logger)

    def track_exception(
        self,
        exception: BaseException,
        properties: Mapping[str, str] | None = None,
        metrics: Mapping[str, float] | None = None,
    ) -> None:
        self.log.error(
            f"{type(exception).__name__}: {exception}",
            exc_info=exception if exception.__traceback__ is not None else None,
            extra={"properties": dict(properties or {}), "metrics": dict(metrics or {})},
        )


def track_failures(result: OperationResult, client: TelemetryClient) -> int:
    """Send every exception message of result to client. Returns how many were sent.

    Detail entries besides the exception's own are split into string
    properties and numeric metrics.
    """
    require(result, "result")
    require(client, "client")
    tracked = 0
    for msg in result.messages:
        if msg is None or msg.kind is not MessageKind.EXCEPTION:
            continue
        extra = {k: v for k, v in msg.details.items() if k not in EXCEPTION_KEYS}
        metrics = {k: float(v) for k, v in extra.items() if isinstance(v, (int, float)) and not isinstance(v, bool)}
        properties = {k: str(v) for k, v in extra.items() if k not in metrics}
        client.track_exception(msg.exception, properties or None, metrics or None)  # type: ignore[arg-type]
        tracked += 1
    return tracked


# ─────────────────────────────────────────────────────────────────────────────
# Logging setup
# ─────────────────────────────────────────────────────────────────────────────


class JsonFormatter(logging.Formatter):
    """One JSON object per record, rendered with orjson."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": record.getMessage(),
        }
        for key in ("properties", "metrics"):
            if value := getattr(record, key, None):
                entry[key] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return orjson.dumps(entry, default=str, option=orjson.OPT_NON_STR_KEYS).decode()


_HANDLER_NAME = "opresults"


def configure_logging(settings: OpResultsSettings | None = None) -> logging.Logger:
    """Attach a stderr handler to the ``opresults`` logger per settings.

    Calling again replaces the handler installed by a previous call.
    """
    cfg = (settings or get_settings()).logging
    root = logging.getLogger("opresults")
    root.setLevel(cfg.level)
    for h in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JsonFormatter() if cfg.format == "json"
        else logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    )
    root.addHandler(handler)
    return root
