import time

import pytest

from effilog.decode_formatter import (
    DecodeFormatter,
    EffectiveMsg,
    combine_log_msg,
    milliseconds_to_date_string,
)


@pytest.fixture
def msg():
    return EffectiveMsg(
        level="Info",
        timestamp=1651234567890,
        pid=1234,
        tid=5678,
        line=42,
        file_name="file.cpp",
        func_name="main",
        log_info="hello",
    )


def test_default_format(msg):
    assert DecodeFormatter().format(msg) == "[Info][1651234567890][1234:5678][file.cpp:main:42]hello\n"


def test_combine_log_msg_has_no_newline(msg):
    assert combine_log_msg(msg) == "[Info][1651234567890][1234:5678][file.cpp:main:42]hello"


def test_combine_prefix_truncated():
    long_name = "a" * 2000
    out = combine_log_msg(EffectiveMsg(file_name=long_name, log_info="tail"))
    assert out.endswith("tail")
    assert len(out) == 1023 + len("tail")


def test_pattern_fields(msg):
    formatter = DecodeFormatter()
    formatter.set_pattern("[%l][%M][%p:%t][%F:%f:%#]%v")
    assert formatter.format(msg) == "[Info][1651234567890][1234:5678][file.cpp:main:42]hello\n"


def test_seconds_placeholder(msg):
    assert DecodeFormatter("%S").format(msg) == "1651234567\n"


def test_date_placeholder_matches_function(msg):
    out = DecodeFormatter("%D").format(msg)
    assert out == milliseconds_to_date_string(msg.timestamp) + "\n"


def test_date_string_round_trip():
    ms = 1651234567890
    text = milliseconds_to_date_string(ms)
    parsed = time.mktime(time.strptime(text, "%Y-%m-%d %H:%M:%S"))
    assert int(parsed) == ms // 1000


def test_unknown_flag_kept(msg):
    assert DecodeFormatter("a%xb").format(msg) == "a%xb\n"


def test_double_percent_kept(msg):
    assert DecodeFormatter("100%%").format(msg) == "100%%\n"


def test_trailing_percent_dropped(msg):
    assert DecodeFormatter("abc%").format(msg) == "abc\n"


def test_empty_pattern_restores_default(msg):
    formatter = DecodeFormatter("%v")
    assert formatter.format(msg) == "hello\n"
    formatter.set_pattern("")
    assert formatter.format(msg) == combine_log_msg(msg) + "\n"


def test_formatters_are_independent(msg):
    first = DecodeFormatter("%l")
    second = DecodeFormatter("%v")
    assert first.format(msg) == "Info\n"
    assert second.format(msg) == "hello\n"