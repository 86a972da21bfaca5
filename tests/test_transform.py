import io

import pytest
from pydantic import ValidationError

from fieldcase import cases
from fieldcase.cases import CaseStyle
from fieldcase.models import FilterConfig
from fieldcase.transform import (
    InputReadError,
    LineTransformError,
    decode_line,
    read_lines,
    run,
    split_text_lines,
    transform_line,
    transform_lines,
)


def _config(targets, case, delimiter=":"):
    return FilterConfig(delimiter=delimiter, targets=tuple(targets), style=CaseStyle.resolve(case))


def test_kebab_second_field():
    assert transform_line(_config([2], "kebab"), "user:FirstName:42", 1) == "user:first-name:42"

def test_upper_first_and_third():
    assert transform_line(_config([1, 3], "upper", ","), "alpha,beta,gamma", 1) == "ALPHA,beta,GAMMA"

def test_out_of_range_target_is_ignored():
    assert transform_line(_config([5], "snake"), "a:b", 1) == "a:b"

def test_multi_character_delimiter_is_literal():
    assert transform_line(_config([2], "upper", ".*"), "a.*b.*c", 1) == "a.*B.*c"

@pytest.mark.parametrize("line", ["", "a", "a::b", "::", "one:two:three:four"])
def test_field_count_is_preserved(line):
    out = transform_line(_config([1, 2, 3], "upper"), line, 1)
    assert len(out.split(":")) == len(line.split(":"))

def test_targets_are_sorted_and_deduplicated():
    config = FilterConfig(targets=(3, 1, 3), style=CaseStyle.UPPER)
    assert config.targets == (1, 3)
    assert config.delimiter == ":"

def test_config_is_immutable():
    config = _config([1], "upper")
    with pytest.raises(ValidationError):
        config.delimiter = ","

@pytest.mark.parametrize("kwargs", [
    {"delimiter": "", "targets": (1,)},
    {"targets": ()},
    {"targets": (0,)},
])
def test_config_validation(kwargs):
    with pytest.raises(ValidationError):
        FilterConfig(style=CaseStyle.UPPER, **kwargs)

def test_failure_stops_at_first_bad_line(monkeypatch):
    def boom(text):
        if text == "bad":
            raise ValueError("cannot convert")
        return text.upper()

    monkeypatch.setitem(cases._CONVERTERS, CaseStyle.UPPER, boom)

    seen = []

    def lines():
        for line in ["ok:1", "bad:2", "never:3"]:
            seen.append(line)
            yield line

    out = []
    with pytest.raises(LineTransformError) as info:
        for result in transform_lines(_config([1], "upper"), lines()):
            out.append(result)

    assert out == ["OK:1"]
    assert seen == ["ok:1", "bad:2"]
    assert str(info.value) == "error at: line=2 col=1 word=bad case=UpperCase, cannot convert"

def test_read_lines_strips_terminators():
    stream = io.BytesIO(b"a:b\r\nc:d\ne:f")
    assert list(read_lines(stream)) == ["a:b", "c:d", "e:f"]

def test_decode_line_keeps_invalid_bytes():
    raw = "Montr\u00e9al:FirstName".encode("latin-1")
    line = decode_line(raw)
    assert line.split(":") == ["Montr\udce9al", "FirstName"]
    assert line.encode("utf-8", errors="surrogateescape") == raw

@pytest.mark.parametrize("text, expected", [
    ("", []),
    ("a:b", ["a:b"]),
    ("a:b\n", ["a:b"]),
    ("a\r\nb\n\n", ["a", "b", ""]),
    ("a\x0bb\x0cc\u2028d", ["a\x0bb\x0cc\u2028d"]),
    ("a\rb\n", ["a\rb"]),
    ("a\nb\r", ["a", "b\r"]),
])
def test_split_text_lines_matches_stream_reading(text, expected):
    assert split_text_lines(text) == expected
    assert list(read_lines(io.BytesIO(text.encode("utf-8")))) == expected

def test_read_error_is_reported():
    class Broken(io.BytesIO):
        def readline(self, *args):
            raise OSError("device gone")

    with pytest.raises(InputReadError) as info:
        list(read_lines(Broken()))
    assert str(info.value) == "reading standard input: device gone"

def test_run_writes_each_line():
    stdin = io.BytesIO(b"user:FirstName:42\nuser:LastName:7\n")
    stdout = io.StringIO()

    assert run(_config([2], "kebab"), stdin, stdout) == 2
    assert stdout.getvalue() == "user:first-name:42\nuser:last-name:7\n"

def test_run_empty_input():
    stdout = io.StringIO()
    assert run(_config([1], "upper"), io.BytesIO(b""), stdout) == 0
    assert stdout.getvalue() == ""
