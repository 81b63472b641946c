"""Schedule tables: expiry points driven by a counter."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Protocol

from rtkernel.status import OsError, StatusType

EXPPTINDEX_TOP = 0x00
EXPPTINDEX_INITIAL = 0xFF

ErrorHook = Callable[[StatusType, str], None]


class ScheduleTableStatus(enum.IntEnum):
    """State of a schedule table; the values are distinct bits."""

    STOPPED = 0x01
    NEXT = 0x02
    WAITING = 0x04
    RUNNING = 0x08
    RUNNING_AND_SYNCHRONOUS = 0x10


class _Counter(Protocol):
    """What a schedule table needs from the counter that drives it.

    ``insert`` queues an object carrying ``expiretick`` and ``expirefunc``;
    when the counter reaches ``expiretick`` it removes the object and calls
    ``expirefunc(counter)``.
    """

    maxval: int

    def get_abstick(self, start: int) -> int: ...

    def get_reltick(self, offset: int) -> int: ...

    def add_tick(self, tick: int, incr: int) -> int: ...

    def insert(self, entry: Any) -> None: ...

    def remove(self, entry: Any) -> None: ...


@dataclass(frozen=True)
class ExpiryPoint:
    """An offset within the table and the action run when it is reached."""

    offset: int
    action: Callable[[], Any]


@dataclass(frozen=True)
class ScheduleTableConfig:
    """Static description of a schedule table."""

    counter: Any
    length: int
    expiry_points: tuple[ExpiryPoint, ...]
    repeat: bool = False
    autosta: int = 0
    absolute: bool = False
    staval: int = 0

    def __post_init__(self) -> None:
        points = tuple(self.expiry_points)
        object.__setattr__(self, "expiry_points", points)
        if not points:
            raise ValueError("a schedule table needs at least one expiry point")
        offsets = [p.offset for p in points]
        if offsets != sorted(offsets) or offsets[0] < 0:
            raise ValueError("expiry point offsets must be ascending and non-negative")
        if self.length < offsets[-1]:
            raise ValueError("length must not be shorter than the last offset")


@dataclass(eq=False)
class ScheduleTable:
    """Run-time state of one schedule table."""

    id: int
    config: ScheduleTableConfig
    status: ScheduleTableStatus = ScheduleTableStatus.STOPPED
    expptindex: int = EXPPTINDEX_INITIAL
    expiretick: int = 0
    prev: Optional["ScheduleTable"] = None
    next: Optional["ScheduleTable"] = None
    expirefunc: Optional[Callable[[Any], None]] = field(default=None, repr=False)


class ScheduleTableManager:
    """The schedule tables of the kernel and their services.

    Tables with an id below ``implicit_count`` are implicitly synchronised.
    Failed services call ``error_hook`` (if set) and raise :class:`OsError`.
    """

    def __init__(self, configs: Iterable[ScheduleTableConfig],
                 implicit_count: int = 0, appmode: int = 0) -> None:
        self.tables: tuple[ScheduleTable, ...] = tuple(
            ScheduleTable(id=i, config=cfg) for i, cfg in enumerate(configs))
        if not 0 <= implicit_count <= len(self.tables):
            raise ValueError("implicit_count out of range")
        self.implicit_count = implicit_count
        self.interrupts_disabled = False
        self.error_hook: Optional[ErrorHook] = None

        for table in self.tables:
            table.expirefunc = functools.partial(self.expire, table)
            cfg = table.config
            if cfg.autosta & (1 << appmode):
                table.status = self._running_status(table.id)
                table.expptindex = EXPPTINDEX_INITIAL
                counter = cfg.counter
                if cfg.absolute:
                    table.expiretick = counter.get_abstick(cfg.staval)
                else:
                    table.expiretick = counter.get_reltick(cfg.staval)
                counter.insert(table)
            else:
                table.status = ScheduleTableStatus.STOPPED

    # -- helpers -----------------------------------------------------------

    def _is_implicit(self, table_id: int) -> bool:
        return table_id < self.implicit_count

    def _running_status(self, table_id: int) -> ScheduleTableStatus:
        if self._is_implicit(table_id):
            return ScheduleTableStatus.RUNNING_AND_SYNCHRONOUS
        return ScheduleTableStatus.RUNNING

    def _fail(self, status: StatusType, service: str) -> OsError:
        if self.error_hook is not None:
            self.error_hook(status, service)
        return OsError(status, service)

    def _check_disabled_int(self, service: str) -> None:
        if self.interrupts_disabled:
            raise self._fail(StatusType.E_OS_DISABLEDINT, service)

    def _table(self, table_id: int, service: str) -> ScheduleTable:
        if not 0 <= table_id < len(self.tables):
            raise self._fail(StatusType.E_OS_ID, service)
        return self.tables[table_id]

    # -- services ----------------------------------------------------------

    def start_rel(self, table_id: int, offset: int) -> None:
        """Start a table ``offset`` ticks from now."""
        service = "StartScheduleTableRel"
        self._check_disabled_int(service)
        table = self._table(table_id, service)
        if self._is_implicit(table_id):
            raise self._fail(StatusType.E_OS_ID, service)
        counter = table.config.counter
        first = table.config.expiry_points[EXPPTINDEX_TOP].offset
        if offset == 0 or counter.maxval - first < offset:
            raise self._fail(StatusType.E_OS_VALUE, service)
        if table.status != ScheduleTableStatus.STOPPED:
            raise self._fail(StatusType.E_OS_STATE, service)
        table.status = ScheduleTableStatus.RUNNING
        table.expptindex = EXPPTINDEX_INITIAL
        table.expiretick = counter.get_reltick(offset)
        counter.insert(table)

    def start_abs(self, table_id: int, start: int) -> None:
        """Start a table when its counter reaches ``start``."""
        service = "StartScheduleTableAbs"
        self._check_disabled_int(service)
        table = self._table(table_id, service)
        counter = table.config.counter
        if start > counter.maxval:
            raise self._fail(StatusType.E_OS_VALUE, service)
        if table.status != ScheduleTableStatus.STOPPED:
            raise self._fail(StatusType.E_OS_STATE, service)
        table.status = self._running_status(table_id)
        table.expptindex = EXPPTINDEX_INITIAL
        table.expiretick = counter.get_abstick(start)
        counter.insert(table)

    def stop(self, table_id: int) -> None:
        """Stop a table, cancelling any table queued to follow it."""
        service = "StopScheduleTable"
        self._check_disabled_int(service)
        table = self._table(table_id, service)
        if table.status == ScheduleTableStatus.STOPPED:
            raise self._fail(StatusType.E_OS_NOFUNC, service)
        if table.status == ScheduleTableStatus.NEXT:
            if table.prev is not None:
                table.prev.next = None
            table.prev = None
        else:
            nxt = table.next
            if nxt is not None:
                nxt.status = ScheduleTableStatus.STOPPED
                nxt.prev = None
                table.next = None
            table.config.counter.remove(table)
        table.status = ScheduleTableStatus.STOPPED

    def next(self, from_id: int, to_id: int) -> None:
        """Queue ``to_id`` to start when ``from_id`` reaches its end."""
        service = "NextScheduleTable"
        self._check_disabled_int(service)
        cur = self._table(from_id, service)
        nxt = self._table(to_id, service)
        if self._is_implicit(from_id) != self._is_implicit(to_id):
            raise self._fail(StatusType.E_OS_ID, service)
        if cur.config.counter is not nxt.config.counter:
            raise self._fail(StatusType.E_OS_ID, service)
        if cur.status in (ScheduleTableStatus.STOPPED, ScheduleTableStatus.NEXT):
            raise self._fail(StatusType.E_OS_NOFUNC, service)
        if nxt.status != ScheduleTableStatus.STOPPED:
            raise self._fail(StatusType.E_OS_STATE, service)
        if cur.next is not None:
            cur.next.status = ScheduleTableStatus.STOPPED
            cur.next.prev = None
        cur.next = nxt
        nxt.status = ScheduleTableStatus.NEXT
        nxt.prev = cur

    def get_status(self, table_id: int) -> ScheduleTableStatus:
        """Return the state of a table."""
        service = "GetScheduleTableStatus"
        self._check_disabled_int(service)
        return self._table(table_id, service).status

    # -- expiry processing -------------------------------------------------

    def expire(self, table: ScheduleTable, counter: Any) -> None:
        """Handle the counter reaching a table's expiry tick."""
        current: Optional[ScheduleTable] = table
        loopcont = True
        while loopcont:
            assert current is not None
            npoints = len(current.config.expiry_points)
            if current.expptindex < npoints:
                loopcont = self._exppoint(current, counter)
            elif current.expptindex == npoints:
                loopcont, current = self._tail(current, counter)
            else:
                loopcont = self._head(current, counter)
        if current is not None:
            counter.insert(current)

    @staticmethod
    def _head(table: ScheduleTable, counter: Any) -> bool:
        first = table.config.expiry_points[EXPPTINDEX_TOP]
        table.expptindex = EXPPTINDEX_TOP
        if first.offset == 0:
            return True
        table.expiretick = counter.add_tick(table.expiretick, first.offset)
        return False

    @staticmethod
    def _exppoint(table: ScheduleTable, counter: Any) -> bool:
        points = table.config.expiry_points
        point = points[table.expptindex]
        point.action()
        currtime = point.offset
        table.expptindex += 1
        if table.expptindex == len(points):
            if table.config.length == currtime:
                return True
            table.expiretick = counter.add_tick(
                table.expiretick, table.config.length - currtime)
            return False
        following = points[table.expptindex]
        table.expiretick = counter.add_tick(
            table.expiretick, following.offset - currtime)
        return False

    @staticmethod
    def _tail(table: ScheduleTable,
              counter: Any) -> tuple[bool, Optional[ScheduleTable]]:
        nxt = table.next
        if nxt is not None:
            nxt.status = table.status
            nxt.expptindex = EXPPTINDEX_INITIAL
            nxt.expiretick = table.expiretick
            nxt.prev = None
            table.status = ScheduleTableStatus.STOPPED
            table.next = None
            return True, nxt
        if table.config.repeat:
            table.expptindex = EXPPTINDEX_TOP
            first = table.config.expiry_points[EXPPTINDEX_TOP]
            if first.offset == 0:
                return True, table
            table.expiretick = counter.add_tick(table.expiretick, first.offset)
            return False, table
        table.status = ScheduleTableStatus.STOPPED
        table.prev = None
        table.next = None
        return False, None