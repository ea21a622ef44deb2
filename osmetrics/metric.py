"""Metric identities: a name and a kind."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MetricType(str, Enum):
    """The kind of a metric."""

    COUNTER = "Counter"
    GAUGE = "Gauge"


@dataclass(frozen=True)
class Metric:
    """A named metric of a given kind."""

    name: str
    type: MetricType

    def __str__(self) -> str:
        return self.name


class InvalidMetricError(ValueError):
    """Raised when a metric name cannot be accepted."""


def parse_metric_name(s: str) -> Metric:
    """Turn a raw name into a gauge metric; blank names are rejected."""
    if not s.strip():
        raise InvalidMetricError(f"invalid Metric: {s}")
    return Metric(s, MetricType.GAUGE)


def _gauge(name: str) -> Metric:
    return Metric(name, MetricType.GAUGE)


ALLOC = _gauge("Alloc")
BUCK_HASH_SYS = _gauge("BuckHashSys")
FREES = _gauge("Frees")
GC_CPU_FRACTION = _gauge("GCCPUFraction")
GC_SYS = _gauge("GCSys")
HEAP_ALLOC = _gauge("HeapAlloc")
HEAP_IDLE = _gauge("HeapIdle")
HEAP_INUSE = _gauge("HeapInuse")
HEAP_OBJECTS = _gauge("HeapObjects")
HEAP_RELEASED = _gauge("HeapReleased")
HEAP_SYS = _gauge("HeapSys")
LAST_GC = _gauge("LastGC")
LOOKUPS = _gauge("Lookups")
MCACHE_INUSE = _gauge("MCacheInuse")
MCACHE_SYS = _gauge("MCacheSys")
MSPAN_INUSE = _gauge("MSpanInuse")
MSPAN_SYS = _gauge("MSpanSys")
MALLOCS = _gauge("Mallocs")
NEXT_GC = _gauge("NextGC")
NUM_FORCED_GC = _gauge("NumForcedGC")
NUM_GC = _gauge("NumGC")
OTHER_SYS = _gauge("OtherSys")
PAUSE_TOTAL_NS = _gauge("PauseTotalNs")
STACK_INUSE = _gauge("StackInuse")
STACK_SYS = _gauge("StackSys")
SYS = _gauge("Sys")
TOTAL_ALLOC = _gauge("TotalAlloc")
POLL_COUNT = Metric("PollCount", MetricType.COUNTER)
RANDOM_VALUE = _gauge("RandomValue")