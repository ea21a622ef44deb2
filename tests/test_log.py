import re

from osmetrics.log import StdoutLogger

LINE = r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{4}"


def _split(out, level):
    prefix = f"{level} ("
    assert out.startswith(prefix)
    stamp, _, rest = out[len(prefix):].partition(")")
    return stamp, rest


def test_info_line_format(capsys):
    StdoutLogger().info("hello world")
    out = capsys.readouterr().out
    stamp, rest = _split(out, "INFO")
    assert re.fullmatch(LINE, stamp).group(0) == stamp
    assert rest == " : hello world \n"


def test_error_line_format(capsys):
    StdoutLogger().error("broken")
    out = capsys.readouterr().out
    stamp, rest = _split(out, "ERROR")
    assert re.fullmatch(LINE, stamp).group(0) == stamp
    assert rest == " : broken \n"


def test_each_message_is_one_line(capsys):
    log = StdoutLogger()
    log.info("first")
    log.error("second")
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("INFO (")
    assert lines[1].startswith("ERROR (")