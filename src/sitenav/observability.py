"""Prometheus metrics and structured logging for resolver stages.

Metrics follow Prometheus naming conventions: ``sitenav_stage_runs_total``
counts stage executions and ``sitenav_stage_duration_seconds`` records their
duration, both labelled by ``stage`` and ``status``.
"""

from __future__ import annotations

import time
import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING, Final

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

from sitenav.logging import CorrelationContext, get_correlation_id, get_logger, with_fields

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = [
    "STAGES",
    "ResolverMetrics",
    "get_metrics_registry",
    "new_correlation_id",
    "record_stage_metrics",
    "reset_metrics_registry",
]

_LOGGER = get_logger(__name__)

STAGES: Final[tuple[str, ...]] = (
    "validate_config",
    "content_index",
    "build_tree",
    "sequence_pages",
)

_DURATION_BUCKETS: Final[tuple[float, ...]] = (0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0)


class ResolverMetrics:
    """Metrics registry for resolver stages.

    Parameters
    ----------
    registry : CollectorRegistry | None, optional
        Prometheus registry to register collectors with. Defaults to the
        process-wide default registry; tests pass a fresh one.

    Attributes
    ----------
    stage_runs_total : Counter
        Stage executions by ``stage`` and ``status``.
    stage_duration_seconds : Histogram
        Stage durations by ``stage`` and ``status``.
    empty_directories_total : Counter
        Autogenerate directives that matched no content.

    Examples
    --------
    >>> metrics = ResolverMetrics(CollectorRegistry())
    >>> metrics.stage_runs_total.labels(stage="build_tree", status="success").inc()
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry if registry is not None else REGISTRY
        self.stage_runs_total = Counter(
            "sitenav_stage_runs_total",
            "Total number of resolver stage executions",
            ["stage", "status"],
            registry=self.registry,
        )
        self.stage_duration_seconds = Histogram(
            "sitenav_stage_duration_seconds",
            "Duration of resolver stages in seconds",
            ["stage", "status"],
            buckets=_DURATION_BUCKETS,
            registry=self.registry,
        )
        self.empty_directories_total = Counter(
            "sitenav_empty_directories_total",
            "Autogenerate directives that matched no content",
            registry=self.registry,
        )


_METRICS: dict[str, ResolverMetrics] = {}


def get_metrics_registry() -> ResolverMetrics:
    """Return the process-wide :class:`ResolverMetrics`, creating it on first use."""
    metrics = _METRICS.get("default")
    if metrics is None:
        metrics = ResolverMetrics()
        _METRICS["default"] = metrics
    return metrics


def reset_metrics_registry(metrics: ResolverMetrics | None = None) -> ResolverMetrics | None:
    """Replace the process-wide metrics, returning the previous instance.

    Passing None clears it so the next :func:`get_metrics_registry` call
    creates a new one.
    """
    previous = _METRICS.pop("default", None)
    if metrics is not None:
        _METRICS["default"] = metrics
    return previous


def new_correlation_id() -> str:
    """Return a correlation ID in the form ``urn:sitenav:build:<uuid>``."""
    return f"urn:sitenav:build:{uuid.uuid4().hex}"


@contextmanager
def record_stage_metrics(stage: str, *, correlation_id: str | None = None) -> Iterator[None]:
    """Record duration and outcome of a resolver stage.

    The status label becomes ``"error"`` when the block raises; the exception
    propagates unchanged.

    Parameters
    ----------
    stage : str
        Stage name, one of :data:`STAGES`.
    correlation_id : str | None, optional
        Build correlation ID. Defaults to the ID already in context, or a new one.

    Yields
    ------
    None
        Control to the wrapped stage.
    """
    resolved_id = correlation_id or get_correlation_id() or new_correlation_id()
    metrics = get_metrics_registry()
    logger = with_fields(_LOGGER, operation=stage, correlation_id=resolved_id)
    status = "success"
    start = time.monotonic()
    with CorrelationContext(resolved_id):
        try:
            yield
        except Exception:
            status = "error"
            raise
        finally:
            duration = time.monotonic() - start
            metrics.stage_runs_total.labels(stage=stage, status=status).inc()
            metrics.stage_duration_seconds.labels(stage=stage, status=status).observe(duration)
            logger.info(
                "Resolver stage completed",
                extra={"status": status, "duration_ms": round(duration * 1000, 3)},
            )
