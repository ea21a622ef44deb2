"""Agent that polls runtime statistics and reports them to the metrics server."""

from __future__ import annotations

import gc
import random
import sys
import threading
import tracemalloc
import urllib.error
import urllib.request
from datetime import timedelta
from http import HTTPStatus
from typing import Callable, Protocol, Sequence, Union

from osmetrics import metric as m
from osmetrics.config import AgentConfig, load_agent_config
from osmetrics.log import Logger, StdoutLogger
from osmetrics.metric import Metric, MetricType

try:
    import resource
except ImportError:  # pragma: no cover - not available on Windows
    resource = None  # type: ignore[assignment]


MetricValue = Union[int, float]


class Client(Protocol):
    """Anything that can POST to a URL and report the response status."""

    def post(self, url: str) -> int: ...


class HttpClient:
    """Sends bodiless plain-text POST requests over HTTP."""

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout

    def post(self, url: str) -> int:
        """POST to ``url`` and return the response status code."""
        request = urllib.request.Request(
            url, data=b"", method="POST", headers={"Content-Type": "text/plain"}
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                response.read()
                return response.status
        except urllib.error.HTTPError as err:
            err.close()
            return err.code


class SendError(Exception):
    """Raised when the server answers a metric update with a non-OK status."""


def _max_rss_bytes() -> float:
    if resource is None:
        return 0.0
    usage = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    return float(usage if sys.platform == "darwin" else usage * 1024)


def _read_runtime_stats() -> dict[Metric, float]:
    """Snapshot of interpreter memory and collector statistics."""
    gc_stats = gc.get_stats()
    collections = sum(stat["collections"] for stat in gc_stats)
    collected = sum(stat["collected"] for stat in gc_stats)
    threshold = gc.get_threshold()[0]
    pending = gc.get_count()[0]
    blocks = float(sys.getallocatedblocks())
    traced_current, traced_peak = tracemalloc.get_traced_memory()
    rss = _max_rss_bytes()
    return {
        m.ALLOC: float(traced_current),
        m.BUCK_HASH_SYS: 0.0,
        m.FREES: float(collected),
        m.GC_CPU_FRACTION: 0.0,
        m.GC_SYS: float(sum(gc.get_count())),
        m.HEAP_ALLOC: float(traced_current),
        m.HEAP_IDLE: 0.0,
        m.HEAP_INUSE: float(traced_current),
        m.HEAP_OBJECTS: blocks,
        m.HEAP_RELEASED: 0.0,
        m.HEAP_SYS: rss,
        m.LAST_GC: 0.0,
        m.LOOKUPS: 0.0,
        m.MCACHE_INUSE: 0.0,
        m.MCACHE_SYS: 0.0,
        m.MSPAN_INUSE: 0.0,
        m.MSPAN_SYS: 0.0,
        m.MALLOCS: blocks,
        m.NEXT_GC: float(max(threshold - pending, 0)),
        m.NUM_FORCED_GC: float(collections),
        m.OTHER_SYS: 0.0,
        m.PAUSE_TOTAL_NS: 0.0,
        m.STACK_INUSE: 0.0,
        m.STACK_SYS: 0.0,
        m.SYS: rss,
        m.TOTAL_ALLOC: float(traced_peak),
    }


class MetricService:
    """Collects metrics locally and pushes them to the server."""

    def __init__(self, log: Logger, client: Client, config: AgentConfig) -> None:
        self.log = log
        self.client = client
        self.config = config
        self.metrics: dict[Metric, MetricValue] = {}
        self._lock = threading.Lock()

    def collect_metrics(self) -> None:
        """Refresh every gauge and count one more poll."""
        self.log.info("Start process for collecting metrics")
        stats = _read_runtime_stats()
        with self._lock:
            self.metrics.update(stats)
            self.metrics[m.POLL_COUNT] = int(self.metrics.get(m.POLL_COUNT, 0)) + 1
            self.metrics[m.RANDOM_VALUE] = random.random()

    def send_metrics(self) -> None:
        """Send every metric; counters sent successfully start again from zero."""
        self.log.info("Start process for sending metrics")
        with self._lock:
            snapshot = list(self.metrics.items())
        for metric, value in snapshot:
            try:
                if metric.type is MetricType.GAUGE:
                    self._send("gauge", metric.name, f"{float(value):f}")
                elif metric.type is MetricType.COUNTER:
                    self._send("counter", metric.name, str(int(value)))
                    with self._lock:
                        self.metrics[metric] = 0
            except (OSError, SendError) as err:
                self.log.error(f"Failed to send metric {metric.name}: {err}\n")

    def _send(self, kind: str, name: str, value: str) -> None:
        url = f"http://{self.config.address}/update/{kind}/{name}/{value}"
        status = self.client.post(url)
        if status != HTTPStatus.OK:
            raise SendError(f"bad response for metric {name}: {status}")


def _repeat(interval: timedelta, action: Callable[[], None], stop: threading.Event) -> None:
    seconds = interval.total_seconds()
    while not stop.wait(seconds):
        action()


def run(config: AgentConfig, service: MetricService, stop_event: threading.Event) -> None:
    """Poll and report on their own intervals until ``stop_event`` is set."""
    for interval in (config.poll_interval, config.report_interval):
        if interval.total_seconds() <= 0:
            raise ValueError("non-positive interval for ticker")
    workers = [
        threading.Thread(
            target=_repeat,
            args=(config.poll_interval, service.collect_metrics, stop_event),
            daemon=True,
        ),
        threading.Thread(
            target=_repeat,
            args=(config.report_interval, service.send_metrics, stop_event),
            daemon=True,
        ),
    ]
    for worker in workers:
        worker.start()
    for worker in workers:
        while worker.is_alive():
            worker.join(0.5)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the agent and run until interrupted."""
    config = load_agent_config(sys.argv[1:] if argv is None else argv)
    log = StdoutLogger()
    service = MetricService(log, HttpClient(), config)
    stop_event = threading.Event()
    try:
        run(config, service, stop_event)
    except KeyboardInterrupt:
        stop_event.set()


if __name__ == "__main__":
    main()