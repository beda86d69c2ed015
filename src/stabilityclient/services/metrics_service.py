"""Metrics service for tracking generation calls in memory."""

import logging
from typing import Any

from stabilityclient.models.metrics import GenerationMetrics

logger = logging.getLogger(__name__)


class MetricsService:
    """Collects GenerationMetrics and summarizes them."""

    def __init__(self):
        self._metrics: list[GenerationMetrics] = []

    def record(self, metrics: GenerationMetrics) -> None:
        """Record one generation call."""
        self._metrics.append(metrics)
        logger.debug(
            f"📊 [MetricsService] {metrics.operation} on {metrics.engine_id}: "
            f"duration={metrics.duration_ms}ms, artifacts={metrics.artifact_count}, success={metrics.success}"
        )

    def get_all(self) -> list[GenerationMetrics]:
        """Get all recorded metrics."""
        return self._metrics.copy()

    def clear(self) -> None:
        """Clear all recorded metrics."""
        self._metrics.clear()

    def summary(self) -> dict[str, Any]:
        """Get a summary of recorded metrics."""
        if not self._metrics:
            return {
                "count": 0,
                "failed": 0,
                "total_duration_ms": 0,
                "total_artifacts": 0,
                "avg_duration_ms": 0,
            }

        total_duration = sum(m.duration_ms for m in self._metrics)
        return {
            "count": len(self._metrics),
            "failed": sum(1 for m in self._metrics if not m.success),
            "total_duration_ms": total_duration,
            "total_artifacts": sum(m.artifact_count for m in self._metrics),
            "avg_duration_ms": total_duration / len(self._metrics),
        }
