# osmetrics

A metrics server that keeps gauges and counters in memory, and an agent
that samples interpreter statistics and reports them to the server over
HTTP. Only the standard library is used.

## Installation

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## The server

    osmetrics-server [-a HOST:PORT]

| Option            | Environment | Default          |
|-------------------|-------------|------------------|
| `-a`, `--address` | `ADDRESS`   | `localhost:8080` |

A command-line flag takes precedence over the environment. The environment
takes precedence over the default. An unknown option or a bad value prints
a message and exits with status 1. The server handles each request in its
own thread. It serves until interrupted.

Routes:

- `POST /update/<type>/<name>/<value>` stores a metric. `<type>` is `gauge`
  or `counter`.
  - A gauge value is a 64-bit float. It replaces the stored value.
  - A counter value is a base-10 64-bit integer. It is added to the stored
    value, and the sum wraps around on overflow.
  - An unknown type gives `400`. A blank name gives `400`. A value that
    does not parse gives `400`, and the response body holds the parse error.
- `GET /value/<type>/<name>` returns the stored value as the response body.
  A gauge is written in plain decimal form with no exponent. An unknown type
  gives `400`. A metric that is not stored under that type gives `404`.
- `GET /` returns an HTML page that lists the names of all known metrics.
- `/<segment>/`, with any method, gives `404` with the body
  `Request is unsupported`.
- A request that would match a route with a trailing slash added or taken
  away is redirected. For `GET` this is a `301`; for other methods it is a
  `307`.
- Anything else gives `404 page not found`.

Example:

    curl -X POST http://localhost:8080/update/counter/PollCount/5
    curl http://localhost:8080/value/counter/PollCount

The server can also be used as a WSGI application. `create_app(log)` in
`osmetrics.server` returns a `MetricsApp` backed by a fresh `MemStorage`.
`MetricsApp(storage, log)` accepts any object with the methods of the
`osmetrics.storage.Storage` protocol.

## The agent

    osmetrics-agent [-a HOST:PORT] [-r SECONDS] [-p SECONDS]

| Option            | Environment       | Default          | Meaning                 |
|-------------------|-------------------|------------------|-------------------------|
| `-a`, `--address` | `ADDRESS`         | `localhost:8080` | address of the server   |
| `-r`, `--report`  | `REPORT_INTERVAL` | `10`             | seconds between reports |
| `-p`, `--poll`    | `POLL_INTERVAL`   | `2`              | seconds between samples |

On every poll, `MetricService.collect_metrics` records a fixed set of
gauges. The values come from the interpreter's garbage collector, its
allocated-block count, `tracemalloc` and the process's peak resident size.
Several of these gauges are always `0`, and the `tracemalloc` figures are
`0` unless tracing has been started. The agent also records a `RandomValue`
gauge and adds one to the `PollCount` counter.

On every report, `MetricService.send_metrics` posts each metric to
`/update/...` on the server. After a counter is sent, it is set back to zero.
A failure to connect, or a response other than `200`, is logged and the
agent moves on to the next metric.

`osmetrics.agent.run(config, service, stop_event)` polls and reports on
their own intervals until the event is set. It raises `ValueError` if
either interval is not positive.

## Using the pieces directly

```python
from osmetrics.log import StdoutLogger
from osmetrics.metric import parse_metric_name
from osmetrics.model import parse_counter, parse_gauge
from osmetrics.storage import MemStorage

log = StdoutLogger()
storage = MemStorage(log)
storage.save_counter(parse_counter("PollCount", "3"))
storage.save_counter(parse_counter("PollCount", "4"))
print(storage.get_counter(parse_metric_name("PollCount")).value)  # 7
storage.save_gauge(parse_gauge("Alloc", "123.5"))
print(storage.known_metrics())  # ['PollCount', 'Alloc']
```

`parse_metric_name` raises `InvalidMetricError` for a blank name.
`parse_counter` and `parse_gauge` raise `ValueError` for a value that does
not parse. `InvalidMetricError` is itself a `ValueError`.

## What it does not do

The server keeps metrics in memory only. Nothing is written to disk, and
all values are lost when the server stops. There is no authentication and
no JSON interface.