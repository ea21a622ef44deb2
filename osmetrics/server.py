"""HTTP server that receives and serves metrics."""

from __future__ import annotations

import socket
import socketserver
import sys
from functools import partial
from http import HTTPStatus
from typing import Callable, Iterable, Sequence
from urllib.parse import quote
from wsgiref.simple_server import WSGIServer, make_server

from osmetrics.config import load_server_config
from osmetrics.handlers import (
    TEXT_PLAIN,
    CommonHandler,
    MetricGetHandler,
    MetricListHandler,
    MetricPostHandler,
    Response,
)
from osmetrics.log import Logger, StdoutLogger
from osmetrics.storage import MemStorage, Storage

_NOT_FOUND = Response(HTTPStatus.NOT_FOUND, "404 page not found")

_Route = Callable[[str], Response]


class MetricsApp:
    """WSGI application routing requests to the metric handlers."""

    def __init__(self, storage: Storage, log: Logger) -> None:
        self.common_handler = CommonHandler(log)
        self.get_handler = MetricGetHandler(storage, log)
        self.post_handler = MetricPostHandler(storage, log)
        self.list_handler = MetricListHandler(storage, log)

    def _match(self, method: str, path: str) -> _Route | None:
        if path == "/":
            return self.list_handler.handle if method == "GET" else None
        segments = path.split("/")[1:]
        if (
            method == "GET"
            and len(segments) == 3
            and segments[0] == "value"
            and all(segments[1:])
        ):
            return lambda uri: self.get_handler.handle(uri, segments[1], segments[2])
        if (
            method == "POST"
            and len(segments) == 4
            and segments[0] == "update"
            and all(segments[1:])
        ):
            return lambda uri: self.post_handler.handle(
                uri, segments[1], segments[2], segments[3]
            )
        if len(segments) == 2 and segments[0] and not segments[1]:
            return partial(self.common_handler.handle, method)
        return None

    def _redirect_target(self, method: str, path: str) -> str | None:
        if path.endswith("/") and len(path) > 1:
            alternative = path[:-1]
        else:
            alternative = path + "/"
        return alternative if self._match(method, alternative) else None

    def __call__(self, environ: dict, start_response: Callable) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET").upper()
        path = _request_path(environ)
        uri = _request_uri(environ, path)
        headers: list[tuple[str, str]] = []

        route = self._match(method, path)
        if route is not None:
            response = route(uri)
        else:
            target = self._redirect_target(method, path)
            if target is not None:
                status = (
                    HTTPStatus.MOVED_PERMANENTLY
                    if method == "GET"
                    else HTTPStatus.TEMPORARY_REDIRECT
                )
                location = quote(target)
                query = environ.get("QUERY_STRING", "")
                if query:
                    location += "?" + query
                headers.append(("Location", location))
                response = Response(status, content_type=None)
            else:
                response = _NOT_FOUND

        body = response.body.encode("utf-8")
        if response.content_type is not None:
            headers.append(("Content-Type", response.content_type))
        elif body:
            headers.append(("Content-Type", TEXT_PLAIN))
        headers.append(("Content-Length", str(len(body))))
        status = HTTPStatus(response.status)
        start_response(f"{status.value} {status.phrase}", headers)
        return [body]


def _request_path(environ: dict) -> str:
    raw = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
    path = raw.encode("latin-1").decode("utf-8", "replace")
    return path or "/"


def _request_uri(environ: dict, path: str) -> str:
    given = environ.get("REQUEST_URI") or environ.get("RAW_URI")
    if given:
        return given
    query = environ.get("QUERY_STRING", "")
    return quote(path) + (f"?{query}" if query else "")


def create_app(log: Logger) -> MetricsApp:
    """Build an application backed by fresh in-memory storage."""
    return MetricsApp(MemStorage(log), log)


class _ThreadingWSGIServer(socketserver.ThreadingMixIn, WSGIServer):
    daemon_threads = True


class _ThreadingWSGIServer6(_ThreadingWSGIServer):
    address_family = socket.AF_INET6


def _split_address(address: str) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep:
        raise ValueError(f"address {address}: missing port in address")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    if port and not port.isdigit():
        raise ValueError(f"address {address}: invalid port")
    return host, int(port) if port else 0


def main(argv: Sequence[str] | None = None) -> None:
    """Start the metrics server and serve until interrupted."""
    log = StdoutLogger()
    app = create_app(log)
    config = load_server_config(sys.argv[1:] if argv is None else argv)
    host, port = _split_address(config.address)
    server_class = _ThreadingWSGIServer6 if ":" in host else _ThreadingWSGIServer
    with make_server(host, port, app, server_class=server_class) as httpd:
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            pass


if __name__ == "__main__":
    main()