"""Structured logging helpers with correlation IDs.

This module provides a :class:`LoggerAdapter` that injects the structured
fields every resolver log line carries (``correlation_id``, ``operation``,
``status``), a :class:`JsonFormatter` for machine-readable build logs, and
module-level loggers with :class:`logging.NullHandler` so the library never
configures handlers on behalf of its caller.

Examples
--------
>>> from sitenav.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Index built", extra={"operation": "content_index", "entry_count": 12})
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
from typing import TYPE_CHECKING, Any, Self

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping
    from types import TracebackType

__all__ = [
    "CorrelationContext",
    "JsonFormatter",
    "LoggerAdapter",
    "get_correlation_id",
    "get_logger",
    "set_correlation_id",
    "setup_logging",
    "with_fields",
]

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "sitenav_correlation_id", default=None
)

_STRUCTURED_FIELDS = ("correlation_id", "operation", "status", "duration_ms")

# Attributes present on every LogRecord; anything else came from ``extra``.
_RECORD_ATTRIBUTES = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    The payload always contains ``ts``, ``level``, ``name`` and ``message``.
    Structured fields supplied through ``extra`` (or injected by
    :class:`LoggerAdapter`) are copied verbatim when JSON-compatible. The
    correlation ID is taken from the context variable when the record does not
    carry one.

    Examples
    --------
    >>> import logging
    >>> handler = logging.StreamHandler()
    >>> handler.setFormatter(JsonFormatter())
    """

    def format(self, record: logging.LogRecord) -> str:
        """Render ``record`` as JSON.

        Parameters
        ----------
        record : logging.LogRecord
            Record to format.

        Returns
        -------
        str
            JSON-encoded log entry.
        """
        data: dict[str, object] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S") + f".{int(record.msecs):03d}Z",
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for field in _STRUCTURED_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                data[field] = value
        if "correlation_id" not in data:
            ctx_correlation_id = _correlation_id.get()
            if ctx_correlation_id is not None:
                data["correlation_id"] = ctx_correlation_id

        for key, value in record.__dict__.items():
            if (
                key not in _RECORD_ATTRIBUTES
                and key not in data
                and not key.startswith("_")
                and value is not None
                and isinstance(value, (str, int, float, bool, list, dict))
            ):
                data[key] = value

        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class LoggerAdapter(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Logger adapter that injects structured context fields.

    Fields bound on the adapter are merged into each call's ``extra`` without
    overriding values passed explicitly. ``operation`` defaults to
    ``"unknown"`` and ``status`` is inferred from the level when absent.

    Parameters
    ----------
    logger : logging.Logger
        Base logger instance to wrap.
    extra : Mapping[str, object] | None, optional
        Fields to bind to every log entry. Defaults to None.
    """

    logger: logging.Logger

    def __init__(self, logger: logging.Logger, extra: Mapping[str, object] | None = None) -> None:
        super().__init__(logger, dict(extra or {}))

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:  # noqa: ANN401
        """Merge bound fields and the context correlation ID into ``extra``.

        Parameters
        ----------
        msg : Any
            Log message.
        kwargs : MutableMapping[str, Any]
            Keyword arguments of the logging call.

        Returns
        -------
        tuple[Any, MutableMapping[str, Any]]
            Message and updated keyword arguments.
        """
        extra = dict(kwargs.get("extra") or {})
        for key, value in (self.extra or {}).items():
            extra.setdefault(key, value)
        if "correlation_id" not in extra:
            ctx_correlation_id = _correlation_id.get()
            if ctx_correlation_id is not None:
                extra["correlation_id"] = ctx_correlation_id
        extra.setdefault("operation", "unknown")
        kwargs["extra"] = extra
        return msg, kwargs

    def log(self, level: int, msg: object, *args: object, **kwargs: Any) -> None:  # noqa: ANN401
        """Log ``msg`` at ``level`` with an inferred ``status`` field."""
        if not self.isEnabledFor(level):
            return
        msg, kwargs = self.process(msg, kwargs)
        extra = kwargs["extra"]
        if "status" not in extra:
            if level >= logging.ERROR:
                extra["status"] = "error"
            elif level >= logging.WARNING:
                extra["status"] = "warning"
            else:
                extra["status"] = "success"
        self.logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: object, *args: object, **kwargs: Any) -> None:  # noqa: ANN401
        """Log a debug message with structured fields."""
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: object, *args: object, **kwargs: Any) -> None:  # noqa: ANN401
        """Log an info message with structured fields."""
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: object, *args: object, **kwargs: Any) -> None:  # noqa: ANN401
        """Log a warning message with structured fields."""
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: object, *args: object, **kwargs: Any) -> None:  # noqa: ANN401
        """Log an error message with structured fields."""
        self.log(logging.ERROR, msg, *args, **kwargs)

    def exception(self, msg: object, *args: object, exc_info: Any = True, **kwargs: Any) -> None:  # noqa: ANN401
        """Log an error with traceback using structured fields."""
        self.log(logging.ERROR, msg, *args, exc_info=exc_info, **kwargs)

    def critical(self, msg: object, *args: object, **kwargs: Any) -> None:  # noqa: ANN401
        """Log a critical message with structured fields."""
        self.log(logging.CRITICAL, msg, *args, **kwargs)


def get_logger(name: str) -> LoggerAdapter:
    """Return a structured logger adapter for ``name``.

    A :class:`logging.NullHandler` is attached when the logger has no handlers
    so importing the library never produces "no handler" warnings.

    Parameters
    ----------
    name : str
        Logger name (typically ``__name__``).

    Returns
    -------
    LoggerAdapter
        Adapter with structured field injection.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return LoggerAdapter(logger, {})


def with_fields(logger: logging.Logger | LoggerAdapter, **fields: object) -> LoggerAdapter:
    """Return an adapter with ``fields`` bound on top of ``logger``'s fields.

    Parameters
    ----------
    logger : logging.Logger | LoggerAdapter
        Base logger or an existing adapter.
    **fields : object
        Structured fields to inject into every entry.

    Returns
    -------
    LoggerAdapter
        New adapter; the original is left unchanged.

    Examples
    --------
    >>> adapter = with_fields(get_logger(__name__), operation="tree_builder")
    >>> adapter.info("Resolving sidebar")
    """
    if isinstance(logger, LoggerAdapter):
        merged = {**dict(logger.extra or {}), **fields}
        return LoggerAdapter(logger.logger, merged)
    return LoggerAdapter(logger, fields)


def setup_logging(level: int | str = logging.INFO, *, json_output: bool = True) -> None:
    """Configure the root logger for an application boundary such as the CLI.

    Parameters
    ----------
    level : int | str, optional
        Logging level threshold. Defaults to ``logging.INFO``.
    json_output : bool, optional
        Emit :class:`JsonFormatter` output when True, plain text otherwise.
        Defaults to True.
    """
    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logging.basicConfig(level=level, handlers=[handler], force=True)


def set_correlation_id(correlation_id: str | None) -> None:
    """Set the correlation ID injected into subsequent log entries."""
    _correlation_id.set(correlation_id)


def get_correlation_id() -> str | None:
    """Return the correlation ID of the current context, if any."""
    return _correlation_id.get()


class CorrelationContext:
    """Scope a correlation ID to a ``with`` block.

    The previous correlation ID is restored on exit.

    Parameters
    ----------
    correlation_id : str | None
        Correlation ID to set for the duration of the block.

    Examples
    --------
    >>> with CorrelationContext("build-42"):
    ...     get_logger(__name__).info("Build started")
    """

    def __init__(self, correlation_id: str | None) -> None:
        self.correlation_id = correlation_id
        self._token: contextvars.Token[str | None] | None = None

    def __enter__(self) -> Self:
        self._token = _correlation_id.set(self.correlation_id)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._token is not None:
            _correlation_id.reset(self._token)
            self._token = None
