"""
Fixed filter rules.

This file exists to make the non-configurable behaviour explicit.
"""

DEFAULT_DELIMITER = ":"
LINE_TERMINATOR = "\n"
INPUT_ENCODING = "utf-8"
INPUT_ERROR_PREFIX = "reading standard input"
# undecodable bytes pass through unchanged
INPUT_DECODE_ERRORS = "surrogateescape"
