"""Console output and leveled log messages."""

from __future__ import annotations

import contextlib
import enum
import sys
from typing import TextIO


class LoggingType(enum.Enum):
    """Severity of a log message."""

    ERROR = "ERROR"
    PANIC = "PANIC"
    DEBUG = "DEBUG"

    def __str__(self) -> str:
        return self.value


class OutputIn(enum.Enum):
    """Standard stream a message is written to."""

    STDOUT = "stdout"
    STDERR = "stderr"


def _stream(output_in: OutputIn) -> TextIO:
    return sys.stdout if output_in is OutputIn.STDOUT else sys.stderr


def write(output_in: OutputIn, text: str) -> None:
    """Write text as-is to the chosen standard stream, ignoring write failures."""
    stream = _stream(output_in)
    with contextlib.suppress(OSError, ValueError):
        stream.write(text)
        stream.flush()


def log(ltype: LoggingType, msg: str) -> None:
    """Write a tagged message.

    Errors go to stderr, debug messages to stdout. A panic is written to
    stderr and then ends the program with exit status 1.
    """
    line = f"{ltype} {msg}"
    if ltype is LoggingType.PANIC:
        write(OutputIn.STDERR, line)
        raise SystemExit(1)
    if ltype is LoggingType.ERROR:
        write(OutputIn.STDERR, line)
        return
    write(OutputIn.STDOUT, line)