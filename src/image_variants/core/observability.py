"""Per-request log context for pipeline operations.

Each public pipeline call gets a short correlation id. Every line logged for
that call carries the id, the operation name, the image id and any extra
fields (size label, artifact path, duration), rendered as::

    [resize] [3f9c0a1b2d4e] Completed resize (size=large, image_id=image_..., duration_ms=41.2)
"""

import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from .logging_config import setup_logger


def _new_correlation_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class LogContext:
    """Fields attached to every log line of one pipeline call."""

    correlation_id: str = field(default_factory=_new_correlation_id)
    operation: str = ""
    image_id: Optional[str] = None
    started_at: float = field(default_factory=time.monotonic)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def with_operation(self, operation: str) -> "LogContext":
        return replace(self, operation=operation, metadata=dict(self.metadata))

    def with_metadata(self, **kwargs: Any) -> "LogContext":
        return replace(self, metadata={**self.metadata, **kwargs})

    @property
    def elapsed_ms(self) -> float:
        return round((time.monotonic() - self.started_at) * 1000, 1)

    def fields(self, **extra: Any) -> Dict[str, Any]:
        """Metadata, image id and ``extra`` in rendering order."""
        rendered = dict(self.metadata)
        if self.image_id:
            rendered["image_id"] = self.image_id
        rendered.update(extra)
        return rendered


def _render(message: str, context: Optional[LogContext], extra: Dict[str, Any]) -> str:
    if context is None:
        fields = extra
    else:
        fields = context.fields(**extra)
        message = f"[{context.correlation_id}] {message}"
        if context.operation:
            message = f"[{context.operation}] {message}"
    if fields:
        message += " (" + ", ".join(f"{k}={v}" for k, v in fields.items()) + ")"
    return message


class StructuredLogger:
    """Logger that renders a LogContext into each message."""

    def __init__(self, name: str, level: Optional[str] = None):
        self._logger = setup_logger(name, level=level)

    @property
    def name(self) -> str:
        return self._logger.name

    def debug(self, message: str, context: Optional[LogContext] = None, **kwargs: Any) -> None:
        self._logger.debug(_render(message, context, kwargs))

    def info(self, message: str, context: Optional[LogContext] = None, **kwargs: Any) -> None:
        self._logger.info(_render(message, context, kwargs))

    def warning(self, message: str, context: Optional[LogContext] = None, **kwargs: Any) -> None:
        self._logger.warning(_render(message, context, kwargs))

    def error(self, message: str, context: Optional[LogContext] = None, **kwargs: Any) -> None:
        self._logger.error(_render(message, context, kwargs))


def log_operation_start(
    operation: str,
    logger: StructuredLogger,
    context: Optional[LogContext] = None,
    **metadata: Any,
) -> LogContext:
    """Log the start of ``operation`` and return the context to finish it with."""
    operation_context = (context or LogContext()).with_operation(operation)
    if metadata:
        operation_context = operation_context.with_metadata(**metadata)

    logger.info(f"Starting {operation}", operation_context)
    return operation_context


def log_operation_end(
    operation: str,
    logger: StructuredLogger,
    context: LogContext,
    success: bool = True,
    error_message: Optional[str] = None,
    **metadata: Any,
) -> None:
    """Log completion or failure of ``operation`` with its duration."""
    if metadata:
        context = context.with_metadata(**metadata)

    if success:
        logger.info(f"Completed {operation}", context, duration_ms=context.elapsed_ms)
    else:
        logger.error(
            f"Failed {operation}: {error_message}",
            context,
            duration_ms=context.elapsed_ms,
        )
