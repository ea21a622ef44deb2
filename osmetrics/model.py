"""Counter and gauge values with parsing from raw strings."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from osmetrics.metric import Metric, parse_metric_name

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DEC_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT_RE = re.compile(
    r"([+-]?)0[xX]((?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+)"
)
_SPECIAL_FLOAT_RE = re.compile(r"[+-]?(?:inf|infinity)|nan", re.IGNORECASE)


@dataclass
class CounterMetricModel:
    """A counter metric and its accumulated integer value."""

    name: Metric
    value: int


@dataclass
class GaugeMetricModel:
    """A gauge metric and its latest float value."""

    name: Metric
    value: float


def _parse_int64(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f'strconv.ParseInt: parsing "{text}": invalid syntax')
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f'strconv.ParseInt: parsing "{text}": value out of range')
    return value


def _parse_float64(text: str) -> float:
    if _SPECIAL_FLOAT_RE.fullmatch(text):
        return float(text)
    hex_match = _HEX_FLOAT_RE.fullmatch(text)
    try:
        if hex_match:
            sign, body = hex_match.groups()
            value = float.fromhex(f"{sign}0x{body}")
        elif _DEC_FLOAT_RE.fullmatch(text):
            value = float(text)
        else:
            raise ValueError(f'strconv.ParseFloat: parsing "{text}": invalid syntax')
    except OverflowError:
        value = math.inf
    if math.isinf(value):
        raise ValueError(f'strconv.ParseFloat: parsing "{text}": value out of range')
    return value


def parse_counter(name_raw: str, value_raw: str) -> CounterMetricModel:
    """Build a counter from a raw name and a base-10 64-bit integer string."""
    name = parse_metric_name(name_raw)
    return CounterMetricModel(name, _parse_int64(value_raw))


def parse_gauge(name_raw: str, value_raw: str) -> GaugeMetricModel:
    """Build a gauge from a raw name and a 64-bit float string."""
    name = parse_metric_name(name_raw)
    return GaugeMetricModel(name, _parse_float64(value_raw))