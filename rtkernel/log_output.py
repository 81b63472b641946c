"""Formatting of system log records."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterator, Sequence

_WORD_BITS = 32
_WORD_MASK = (1 << _WORD_BITS) - 1
_SIGN_BIT = 1 << (_WORD_BITS - 1)

_DEC_DIGITS = "0123456789"
_HEX_DIGITS = "0123456789abcdef"
_HEX_DIGITS_UPPER = "0123456789ABCDEF"

_ASSERT_FORMAT = "%s:%u: Assertion '%s' failed."


class LogType(enum.IntEnum):
    """Kind of a log record."""

    COMMENT = 1
    ASSERT = 2


@dataclass(frozen=True)
class LogRecord:
    """A log record: its type and its information words."""

    logtype: LogType
    loginfo: tuple[Any, ...] = ()


def _as_unsigned(value: Any) -> int:
    return int(value) & _WORD_MASK


def _as_signed(value: Any) -> int:
    word = _as_unsigned(value)
    return word - (1 << _WORD_BITS) if word & _SIGN_BIT else word


def _convert(val: int, radix: int, digits: str, width: int,
             minus: bool, padzero: bool) -> str:
    out = []
    while True:
        val, rem = divmod(val, radix)
        out.append(digits[rem])
        if val == 0:
            break
    body = "".join(reversed(out))
    if minus and width > 0:
        width -= 1
    pad = ("0" if padzero else " ") * max(0, width - len(body))
    sign = "-" if minus else ""
    return sign + pad + body if padzero else pad + sign + body


def _char_of(value: Any) -> str:
    if isinstance(value, str):
        return value[:1]
    return chr(_as_unsigned(value) & 0xFF)


def syslog_printf(fmt: str, args: Sequence[Any]) -> str:
    """Format ``fmt`` with ``args`` using the kernel's printf subset."""
    chars: Iterator[str] = iter(fmt)
    values = iter(args)
    out: list[str] = []

    def take() -> Any:
        try:
            return next(values)
        except StopIteration:
            raise ValueError("not enough arguments for format") from None

    for c in chars:
        if c != "%":
            out.append(c)
            continue
        width = 0
        padzero = False
        c = next(chars, "")
        if c == "0":
            padzero = True
            c = next(chars, "")
        while "0" <= c <= "9" and c:
            width = width * 10 + int(c)
            c = next(chars, "")
        if c == "l":
            c = next(chars, "")

        if c == "d":
            val = _as_signed(take())
            out.append(_convert(abs(val), 10, _DEC_DIGITS, width, val < 0, padzero))
        elif c == "u":
            out.append(_convert(_as_unsigned(take()), 10, _DEC_DIGITS, width, False, padzero))
        elif c in ("x", "p"):
            out.append(_convert(_as_unsigned(take()), 16, _HEX_DIGITS, width, False, padzero))
        elif c == "X":
            out.append(_convert(_as_unsigned(take()), 16, _HEX_DIGITS_UPPER, width, False, padzero))
        elif c == "c":
            out.append(_char_of(take()))
        elif c == "s":
            out.append(str(take()))
        elif c == "%":
            out.append("%")
        # any other conversion, or the end of the format, emits nothing
    return "".join(out)


def syslog_print(record: LogRecord) -> str:
    """Render a log record as text (without a trailing newline)."""
    if record.logtype == LogType.COMMENT:
        if not record.loginfo:
            return ""
        return syslog_printf(str(record.loginfo[0]), record.loginfo[1:])
    if record.logtype == LogType.ASSERT:
        return syslog_printf(_ASSERT_FORMAT, record.loginfo)
    return ""