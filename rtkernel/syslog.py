"""System log: priority masking, record capture and output."""

from __future__ import annotations

import enum
from typing import Any, Callable

from rtkernel.log_output import LogRecord, LogType, syslog_print
from rtkernel.status import strerror

# Number of information words in a record, the format included.
TMAX_LOGINFO = 6

_WORD_MASK = 0xFFFFFFFF
_CONVERSIONS = frozenset("duxXpcs")


class LogPriority(enum.IntEnum):
    """Importance of a log message; lower values are more important."""

    EMERG = 0
    ALERT = 1
    CRIT = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7


def log_mask(prio: int) -> int:
    """Bit that stands for a single priority."""
    return 1 << int(prio)


def log_upto(prio: int) -> int:
    """Bits for every priority up to and including ``prio``."""
    return (1 << (int(prio) + 1)) - 1


def _collect_args(fmt: str, args: tuple[Any, ...]) -> list[Any]:
    """Take one argument per conversion in ``fmt``, up to the record size."""
    chars = iter(fmt)
    values = iter(args)
    collected: list[Any] = []
    for c in chars:
        if len(collected) >= TMAX_LOGINFO - 1:
            break
        if c != "%":
            continue
        c = next(chars, "")
        while c and "0" <= c <= "9":
            c = next(chars, "")
        if c == "l":
            c = next(chars, "")
        if c and c in _CONVERSIONS:
            try:
                collected.append(next(values))
            except StopIteration:
                raise ValueError("not enough arguments for format") from None
    return collected


class SystemLog:
    """Writes log records whose priority is enabled to an output callable."""

    def __init__(self, output: Callable[[str], Any]) -> None:
        self._output = output
        self._lowmask_not = 0

    def initialize(self) -> None:
        """Enable every priority."""
        self._lowmask_not = 0

    def write(self, prio: int, record: LogRecord) -> None:
        """Output ``record`` followed by a newline if ``prio`` is enabled."""
        if (~self._lowmask_not & _WORD_MASK) & log_mask(prio):
            self._output(syslog_print(record) + "\n")

    def mask(self, lowmask: int) -> None:
        """Set the priorities to output, as a bitmap."""
        self._lowmask_not = ~int(lowmask) & _WORD_MASK

    def syslog(self, prio: int, fmt: str, *args: Any) -> None:
        """Log a formatted message."""
        record = LogRecord(LogType.COMMENT, (fmt, *_collect_args(fmt, args)))
        self.write(prio, record)

    def perror(self, prio: int, file: str, line: int, expr: str, ercd: int) -> None:
        """Log a failed service call with its status name and location."""
        self.syslog(prio, "%s (%d) reported by '%s' in line %d of '%s'.",
                    strerror(ercd), int(ercd), expr, line, file)