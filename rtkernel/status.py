"""Kernel status codes and their printable names."""

from __future__ import annotations

import enum

UNKNOWN_ERROR = "unknown error"


class StatusType(enum.IntEnum):
    """Status codes returned or raised by kernel services."""

    E_OK = 0
    E_OS_ACCESS = 1
    E_OS_CALLEVEL = 2
    E_OS_ID = 3
    E_OS_LIMIT = 4
    E_OS_NOFUNC = 5
    E_OS_RESOURCE = 6
    E_OS_STATE = 7
    E_OS_VALUE = 8
    E_OS_SERVICEID = 9
    E_OS_ILLEGAL_ADDRESS = 10
    E_OS_MISSINGEND = 11
    E_OS_DISABLEDINT = 12
    E_OS_STACKFAULT = 13
    E_OS_PROTECTION_MEMORY = 14
    E_OS_PROTECTION_TIME_TASK = 15
    E_OS_PROTECTION_TIME_ISR = 16
    E_OS_PROTECTION_ARRIVAL_TASK = 17
    E_OS_PROTECTION_ARRIVAL_ISR = 18
    E_OS_PROTECTION_LOCKED_RESOURCE = 19
    E_OS_PROTECTION_LOCKED_OSINT = 20
    E_OS_PROTECTION_LOCKED_ALLINT = 21
    E_OS_PROTECTION_EXCEPTION = 22
    E_OS_PROTECTION_FATAL = 23
    E_OS_MODE = 24
    E_OS_SHUTDOWN_FATAL = 25
    E_OS_PARAM_POINTER = 26
    E_OS_SYS_ASSERT_FATAL = 27
    E_OS_STACKINSUFFICIENT = 28
    E_OS_CORE = 29
    E_OS_SPINLOCK = 30
    E_OS_INTERFERENCE_DEADLOCK = 31
    E_OS_NESTING_DEADLOCK = 32
    E_OS_SHUTDOWN_OTHER_CORE = 33
    E_OS_TIMEINSUFFICIENT = 34
    E_OS_PROTECTION_TIMEWINDOW = 35
    E_OS_PROTECTION_COUNT_ISR = 36


def strerror(ercd: int) -> str:
    """Return the name of a status code, or ``"unknown error"``."""
    try:
        return StatusType(int(ercd)).name
    except ValueError:
        return UNKNOWN_ERROR


class OsError(Exception):
    """A kernel service failed with a status other than E_OK."""

    def __init__(self, status: int, service: str | None = None) -> None:
        self.status = status
        self.service = service
        name = strerror(status)
        message = name if service is None else f"{name} in {service}"
        super().__init__(message)