import io
from wsgiref.util import setup_testing_defaults

import pytest

from osmetrics.server import MetricsApp, create_app, main
from osmetrics.storage import MemStorage


class RecordingLogger:
    def __init__(self):
        self.infos = []
        self.errors = []

    def info(self, message):
        self.infos.append(message)

    def error(self, message):
        self.errors.append(message)


@pytest.fixture
def app():
    return create_app(RecordingLogger())


def call(app, method, path, query=""):
    environ = {
        "REQUEST_METHOD": method,
        "PATH_INFO": path,
        "SCRIPT_NAME": "",
        "QUERY_STRING": query,
        "wsgi.input": io.BytesIO(),
    }
    setup_testing_defaults(environ)
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    body = b"".join(app(environ, start_response))
    code = int(captured["status"].split()[0])
    return code, captured["headers"], body.decode("utf-8")


def test_index_lists_metrics(app):
    call(app, "POST", "/update/gauge/Alloc/12.5")
    code, headers, body = call(app, "GET", "/")
    assert code == 200
    assert headers["Content-Type"] == "text/html"
    assert "<li>Alloc</li>" in body


def test_update_and_value_round_trip(app):
    code, _, body = call(app, "POST", "/update/gauge/Alloc/12.5")
    assert code == 200
    assert body == ""
    code, headers, body = call(app, "GET", "/value/gauge/Alloc")
    assert code == 200
    assert body == "12.5"
    assert headers["Content-Length"] == str(len(body))


def test_counter_round_trip(app):
    call(app, "POST", "/update/counter/PollCount/4")
    code, _, body = call(app, "GET", "/value/counter/PollCount")
    assert code == 200
    assert body == "4"


def test_unknown_type_is_bad_request(app):
    code, _, body = call(app, "POST", "/update/histogram/X/1")
    assert code == 400
    assert body == "Metric type is unsupported"


def test_wrong_method_is_not_found(app):
    code, _, body = call(app, "GET", "/update/gauge/X/1")
    assert code == 404
    assert body == "404 page not found"


def test_single_segment_with_slash_goes_to_common_handler():
    log = RecordingLogger()
    app = MetricsApp(MemStorage(log), log)
    code, _, body = call(app, "DELETE", "/foo/")
    assert code == 404
    assert body == "Request is unsupported"
    assert "DELETE" in log.errors[0]


def test_trailing_slash_redirect(app):
    code, headers, _ = call(app, "GET", "/value/gauge/X/", query="a=1")
    assert code == 301
    assert headers["Location"] == "/value/gauge/X?a=1"


def test_missing_value_is_not_found(app):
    code, _, body = call(app, "GET", "/value/gauge/Nothing")
    assert code == 404
    assert body == "Metric not found"


def test_main_rejects_address_without_port(capsys):
    with pytest.raises(ValueError):
        main(["-a", "nohost"])
    assert "Start getting data for server config" in capsys.readouterr().out