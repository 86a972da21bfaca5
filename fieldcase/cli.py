"""Command-line entry point: `fieldcase -targets 2 -case kebab < in.txt`."""

from __future__ import annotations

import argparse
import io
import logging
import os
import sys
from typing import BinaryIO, List, Optional, Sequence, TextIO

from .cases import CaseStyle, FieldCaseError, UnknownCaseStyle, available_cases
from .models import FilterConfig
from .rules import DEFAULT_DELIMITER, INPUT_DECODE_ERRORS, INPUT_ENCODING, LINE_TERMINATOR
from .transform import run

logger = logging.getLogger(__name__)


class FilterArgumentParser(argparse.ArgumentParser):
    """Report bad flags with the full help text and exit status 1."""

    def error(self, message):
        self.print_help(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def parse_targets(value: str) -> List[int]:
    targets = []
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            num = int(part)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid target: {part!r}")
        if num < 1:
            raise argparse.ArgumentTypeError(f"targets are 1-based, got {num}")
        targets.append(num)
    return targets


def build_parser() -> argparse.ArgumentParser:
    parser = FilterArgumentParser(
        prog="fieldcase",
        description="Rewrite selected delimited fields of each stdin line into a case style.",
    )
    parser.add_argument("-delim", "--delim", default=DEFAULT_DELIMITER,
                        help=f"Delimiter used to split and rejoin each line (default: {DEFAULT_DELIMITER!r})")
    parser.add_argument("-targets", "--targets", type=parse_targets, action="append", default=[],
                        help="1-based field positions to format; repeatable, accepts comma-separated lists")
    parser.add_argument("-case", "--case", default=None,
                        help="Case style; case-insensitive, unambiguous prefixes accepted")
    parser.add_argument("-verbose", "--verbose", action="store_true",
                        help="Log debug information to stderr")
    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def open_output(buffer: BinaryIO) -> TextIO:
    """Text writer that turns surrogate-escaped input bytes back into the same bytes."""
    return io.TextIOWrapper(
        buffer,
        encoding=INPUT_ENCODING,
        errors=INPUT_DECODE_ERRORS,
        newline=LINE_TERMINATOR,
        write_through=True,
    )


def _discard_stdout() -> None:
    # the reader is gone; send anything still buffered to devnull so the
    # interpreter does not fail again flushing stdout at exit
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())


def format_available_cases() -> str:
    lines = ["Available values for 'case' are ..."]
    lines.extend(f"\t{c.display}" for c in available_cases())
    return "\n".join(lines) + "\n"


def main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    targets = [t for group in args.targets for t in group]

    style: Optional[CaseStyle]
    try:
        style = CaseStyle.resolve(args.case)
    except UnknownCaseStyle as exc:
        logger.debug("%s", exc)
        style = None

    if args.delim == "" or not targets or style is None:
        parser.print_help(sys.stderr)
        if style is None:
            sys.stderr.write(format_available_cases())
        return 1

    config = FilterConfig(delimiter=args.delim, targets=tuple(targets), style=style)

    owns_stdout = stdout is None
    if owns_stdout:
        stdout = open_output(sys.stdout.buffer)

    try:
        run(config, stdin if stdin is not None else sys.stdin.buffer, stdout)
    except BrokenPipeError:
        logger.debug("stdout closed by reader")
        if owns_stdout:
            _discard_stdout()
        return 1
    except FieldCaseError as exc:
        print(exc, file=sys.stderr)
        return 1
    finally:
        if owns_stdout:
            stdout.detach()
    return 0


if __name__ == "__main__":
    sys.exit(main())
