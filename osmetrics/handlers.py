"""Request handlers for reading, updating and listing metrics."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from http import HTTPStatus

from osmetrics.log import Logger
from osmetrics.metric import InvalidMetricError, parse_metric_name
from osmetrics.model import parse_counter, parse_gauge
from osmetrics.storage import Storage

TEXT_PLAIN = "text/plain; charset=utf-8"
TEXT_HTML = "text/html"

GAUGE = "gauge"
COUNTER = "counter"


@dataclass(frozen=True)
class Response:
    """What a handler answers: a status, a body and its content type."""

    status: int
    body: str = ""
    content_type: str | None = TEXT_PLAIN


def _format_gauge(value: float) -> str:
    """Shortest decimal form of a float, never in exponent notation."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _unsupported_type(log: Logger, metric_type: str) -> Response:
    log.error(f"Metric type={metric_type} is unsupported")
    return Response(HTTPStatus.BAD_REQUEST, "Metric type is unsupported")


class CommonHandler:
    """Answers requests that no other handler supports."""

    def __init__(self, log: Logger) -> None:
        self.log = log

    def handle(self, method: str, uri: str) -> Response:
        self.log.error(f"Request is unsupported: url: {uri}; method: {method}")
        return Response(HTTPStatus.NOT_FOUND, "Request is unsupported")


class MetricGetHandler:
    """Returns the current value of one stored metric."""

    def __init__(self, storage: Storage, log: Logger) -> None:
        self.storage = storage
        self.log = log

    def handle(self, uri: str, metric_type: str, name: str) -> Response:
        self.log.info(f"Handle request {uri}")
        if metric_type == GAUGE:
            return self._get_gauge(name)
        if metric_type == COUNTER:
            return self._get_counter(name)
        return _unsupported_type(self.log, metric_type)

    def _name_error(self, err: InvalidMetricError) -> Response:
        self.log.error(str(err))
        return Response(HTTPStatus.NOT_FOUND, "Metric name is unsupported")

    def _get_counter(self, raw_name: str) -> Response:
        try:
            metric = parse_metric_name(raw_name)
        except InvalidMetricError as err:
            return self._name_error(err)
        model = self.storage.get_counter(metric)
        if model is None:
            self.log.error(f"The counter_metric name={metric} not found")
            return Response(HTTPStatus.NOT_FOUND, "Metric not found")
        return Response(HTTPStatus.OK, str(model.value), TEXT_HTML)

    def _get_gauge(self, raw_name: str) -> Response:
        try:
            metric = parse_metric_name(raw_name)
        except InvalidMetricError as err:
            return self._name_error(err)
        model = self.storage.get_gauge(metric)
        if model is None:
            self.log.error(f"The gauge_metric name={metric} not found")
            return Response(HTTPStatus.NOT_FOUND, "Metric not found")
        return Response(HTTPStatus.OK, _format_gauge(model.value), TEXT_HTML)


class MetricPostHandler:
    """Stores a gauge value or adds to a counter."""

    def __init__(self, storage: Storage, log: Logger) -> None:
        self.storage = storage
        self.log = log

    def handle(self, uri: str, metric_type: str, name: str, value: str) -> Response:
        self.log.info(f"Handle request {uri}")
        try:
            if metric_type == GAUGE:
                self.storage.save_gauge(parse_gauge(name, value))
            elif metric_type == COUNTER:
                self.storage.save_counter(parse_counter(name, value))
            else:
                return _unsupported_type(self.log, metric_type)
        except ValueError as err:
            self.log.error(str(err))
            return Response(HTTPStatus.BAD_REQUEST, str(err))
        return Response(HTTPStatus.OK, content_type=None)


class MetricListHandler:
    """Renders an HTML page listing every known metric name."""

    def __init__(self, storage: Storage, log: Logger) -> None:
        self.storage = storage
        self.log = log

    def handle(self, uri: str) -> Response:
        self.log.info(f"Handle request {uri}")
        items = "".join(f"<li>{name}</li>" for name in self.storage.known_metrics())
        html = (
            "<html><head><title>Список метрик</title></head><body>"
            "<h1>List of known metrics:</h1>"
            f"<ul>{items}</ul>"
            "</body></html>"
        )
        return Response(HTTPStatus.OK, html, TEXT_HTML)