import io

import pytest

from effilog.common import LogLevel, LogMsg
from effilog.formatters import Formatter
from effilog.sinks import ConsoleSink, Sink


class PlainFormatter(Formatter):
    def format(self, msg):
        return f"{msg.level.name}|{msg.message}"


def test_console_sink_writes_formatted_message():
    stream = io.StringIO()
    sink = ConsoleSink(stream)
    sink.set_formatter(PlainFormatter())
    sink.log(LogMsg(LogLevel.INFO, "hi"))
    assert stream.getvalue() == "ConsoleSink Log\nformat:INFO|hi\n"


def test_console_sink_default_formatter_includes_message():
    stream = io.StringIO()
    ConsoleSink(stream).log(LogMsg(LogLevel.DEBUG, "payload"))
    lines = stream.getvalue().splitlines()
    assert lines[0] == "ConsoleSink Log"
    assert lines[1].startswith("format:[")
    assert lines[1].endswith(" payload")
    assert "[Debug]" in lines[1]


def test_console_sink_defaults_to_stdout(capsys):
    sink = ConsoleSink()
    sink.set_formatter(PlainFormatter())
    sink.log(LogMsg(LogLevel.WARN, "x"))
    assert capsys.readouterr().out == "ConsoleSink Log\nformat:WARN|x\n"


def test_sink_is_abstract():
    with pytest.raises(TypeError):
        Sink()