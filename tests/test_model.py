import math

import pytest

from osmetrics.metric import InvalidMetricError, MetricType
from osmetrics.model import parse_counter, parse_gauge

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)


def test_parse_counter_round_trip():
    model = parse_counter("PollCount", "42")
    assert model.name.name == "PollCount"
    assert model.name.type is MetricType.GAUGE
    assert model.value == int("42")


@pytest.mark.parametrize("raw", ["+7", "-7", "0"])
def test_parse_counter_signed(raw):
    assert parse_counter("c", raw).value == int(raw)


def test_parse_counter_int64_bounds():
    assert parse_counter("c", str(INT64_MAX)).value == INT64_MAX
    assert parse_counter("c", str(INT64_MIN)).value == INT64_MIN


@pytest.mark.parametrize("raw", [str(INT64_MAX + 1), str(INT64_MIN - 1)])
def test_parse_counter_out_of_range(raw):
    with pytest.raises(ValueError, match="value out of range"):
        parse_counter("c", raw)


@pytest.mark.parametrize("raw", ["", "abc", "1.5", " 1", "1_000", "0x10", "1e3"])
def test_parse_counter_invalid_syntax(raw):
    with pytest.raises(ValueError, match="invalid syntax"):
        parse_counter("c", raw)


def test_parse_counter_blank_name():
    with pytest.raises(InvalidMetricError):
        parse_counter("  ", "1")


def test_parse_gauge_round_trip():
    model = parse_gauge("Alloc", "123.45")
    assert model.name.name == "Alloc"
    assert model.value == float("123.45")


@pytest.mark.parametrize("raw", ["-1e3", ".5", "5.", "+2.5E-3", "10"])
def test_parse_gauge_decimal_forms(raw):
    assert parse_gauge("g", raw).value == float(raw)


def test_parse_gauge_hex_float():
    assert parse_gauge("g", "0x1p-2").value == 0.25


def test_parse_gauge_special_values():
    assert math.isnan(parse_gauge("g", "NaN").value)
    assert parse_gauge("g", "-Inf").value == -math.inf
    assert parse_gauge("g", "infinity").value == math.inf


@pytest.mark.parametrize("raw", ["1e400", "-1e400"])
def test_parse_gauge_out_of_range(raw):
    with pytest.raises(ValueError, match="value out of range"):
        parse_gauge("g", raw)


@pytest.mark.parametrize("raw", ["", "abc", " 1.0", "1_0", "0x1", "1e"])
def test_parse_gauge_invalid_syntax(raw):
    with pytest.raises(ValueError, match="invalid syntax"):
        parse_gauge("g", raw)


def test_parse_gauge_blank_name():
    with pytest.raises(InvalidMetricError):
        parse_gauge("", "1.0")