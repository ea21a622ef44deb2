"""Thread-safe in-memory storage of metric values."""

from __future__ import annotations

import threading
from typing import Protocol, Union

from osmetrics.log import Logger
from osmetrics.metric import Metric
from osmetrics.model import CounterMetricModel, GaugeMetricModel


def _wrap_int64(value: int) -> int:
    return (value + 2**63) % 2**64 - 2**63


def _format_value(value: Union[int, float]) -> str:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


class Storage(Protocol):
    """Operations the request handlers need from a metric store."""

    def save_gauge(self, model: GaugeMetricModel) -> GaugeMetricModel: ...

    def get_gauge(self, metric: Metric) -> GaugeMetricModel | None: ...

    def save_counter(self, model: CounterMetricModel) -> CounterMetricModel: ...

    def get_counter(self, metric: Metric) -> CounterMetricModel | None: ...

    def known_metrics(self) -> list[str]: ...


class MemStorage:
    """Keeps the latest gauge values and accumulated counters, keyed by name."""

    def __init__(self, log: Logger) -> None:
        self.log = log
        self._lock = threading.RLock()
        self._metrics: dict[str, GaugeMetricModel | CounterMetricModel] = {}

    def known_metrics(self) -> list[str]:
        with self._lock:
            return list(self._metrics)

    def get_gauge(self, metric: Metric) -> GaugeMetricModel | None:
        with self._lock:
            found = self._metrics.get(str(metric))
        if isinstance(found, GaugeMetricModel):
            self.log.info(
                f"GET gauge_metric name={found.name} value={_format_value(found.value)}"
            )
            return found
        return None

    def get_counter(self, metric: Metric) -> CounterMetricModel | None:
        with self._lock:
            found = self._metrics.get(str(metric))
        if isinstance(found, CounterMetricModel):
            self.log.info(f"GET counter_metric name={found.name} value={found.value}")
            return found
        return None

    def save_gauge(self, model: GaugeMetricModel) -> GaugeMetricModel:
        with self._lock:
            self._metrics[str(model.name)] = model
            self.log.info(
                f"SAVE gauge_metric name={model.name} value={_format_value(model.value)}"
            )
            return model

    def save_counter(self, model: CounterMetricModel) -> CounterMetricModel:
        """Add to an existing counter of the same name, or store a new one."""
        with self._lock:
            existing = self.get_counter(model.name)
            if existing is not None:
                existing.value = _wrap_int64(existing.value + model.value)
                self.log.info(
                    f"UPDATE counter_metric name={existing.name} value={existing.value}"
                )
                return existing
            self._metrics[str(model.name)] = model
            self.log.info(f"SAVE counter_metric name={model.name} value={model.value}")
            return model