"""
Core line transformation.

Responsibilities:
- split a line on the literal delimiter
- rewrite the targeted fields into the configured case style
- rejoin with the same delimiter, keeping field count and order
- drive stdin -> stdout one line at a time, stopping at the first failure
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Iterable, Iterator, List, TextIO

from .cases import CaseTransformError, FieldCaseError
from .models import FilterConfig
from .rules import INPUT_DECODE_ERRORS, INPUT_ENCODING, INPUT_ERROR_PREFIX, LINE_TERMINATOR

logger = logging.getLogger(__name__)


class LineTransformError(FieldCaseError):
    """A field could not be converted; carries where and what."""

    def __init__(self, line: int, column: int, word: str, case: str, cause: Exception):
        self.line = line
        self.column = column
        self.word = word
        self.case = case
        self.cause = cause
        super().__init__(
            f"error at: line={line} col={column} word={word} case={case}, {cause}"
        )


class InputReadError(FieldCaseError):
    def __init__(self, cause: object):
        self.cause = cause
        super().__init__(f"{INPUT_ERROR_PREFIX}: {cause}")


def transform_line(config: FilterConfig, line: str, line_number: int) -> str:
    fields = line.split(config.delimiter)
    length = len(fields)

    for target in config.targets:
        # targets are sorted, so everything after this is out of range too
        if target > length:
            break
        word = fields[target - 1]
        try:
            fields[target - 1] = config.style.apply(word)
        except CaseTransformError as exc:
            raise LineTransformError(
                line=line_number,
                column=target,
                word=word,
                case=exc.case,
                cause=exc.cause,
            ) from exc

    return config.delimiter.join(fields)


def transform_lines(config: FilterConfig, lines: Iterable[str]) -> Iterator[str]:
    """Yield each transformed line in order; the first failure propagates."""
    for n, line in enumerate(lines, start=1):
        yield transform_line(config, line, n)


def _strip_terminator(raw: bytes) -> bytes:
    if raw.endswith(b"\r\n"):
        return raw[:-2]
    if raw.endswith(b"\n"):
        return raw[:-1]
    return raw


def decode_line(raw: bytes) -> str:
    """
    Decode one input line.

    Bytes that are not valid UTF-8 become lone surrogates, so they survive
    splitting untouched and are written back as the same bytes.
    """
    return raw.decode(INPUT_ENCODING, errors=INPUT_DECODE_ERRORS)


def split_text_lines(text: str) -> List[str]:
    """Split already-decoded text the way `read_lines` splits a stream."""
    lines = text.split("\n")
    last = lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    # an unterminated final line keeps its bytes as-is
    if last:
        lines.append(last)
    return lines


def read_lines(stream: BinaryIO) -> Iterator[str]:
    """Read decoded lines lazily, one at a time."""
    while True:
        try:
            raw = stream.readline()
        except OSError as exc:
            raise InputReadError(exc) from exc
        if not raw:
            return
        yield decode_line(_strip_terminator(raw))


def run(config: FilterConfig, stdin: BinaryIO, stdout: TextIO) -> int:
    """
    Filter `stdin` into `stdout`.

    Each result is written and flushed before the next line is read, so output
    produced before a failure stays in the stream. Returns the number of lines
    written.
    """
    logger.debug(
        "filtering with delimiter=%r targets=%s case=%s",
        config.delimiter, list(config.targets), config.style.display,
    )
    written = 0
    for result in transform_lines(config, read_lines(stdin)):
        stdout.write(result + LINE_TERMINATOR)
        stdout.flush()
        written += 1

    logger.debug("wrote %d lines", written)
    return written
