"""Task control: ready queues, priority bitmap and state transitions."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

# Internal priorities: 0 is the highest, TPRI_MINTASK the lowest.
TMIN_TPRI = 0
TMAX_TPRI = 15
TNUM_TPRI = TMAX_TPRI - TMIN_TPRI + 1
TPRI_MINTASK = TNUM_TPRI - 1
TPRI_MAXTASK = 0

EVTMASK_NONE = 0
INVALID_TASK = -1


class TaskState(enum.IntEnum):
    """State of a task as reported to applications."""

    SUSPENDED = 0
    RUNNING = 1
    READY = 2
    WAITING = 3


def bitmap_search(bitmap: int) -> int:
    """Return the number of the lowest set bit of a non-zero bitmap."""
    if bitmap <= 0:
        raise ValueError("bitmap must have at least one bit set")
    return (bitmap & -bitmap).bit_length() - 1


def _check_priority(pri: int) -> None:
    if not TPRI_MAXTASK <= pri <= TPRI_MINTASK:
        raise ValueError(f"task priority {pri} out of range")


@dataclass(frozen=True)
class TaskConfig:
    """Static description of a task."""

    inipri: int
    exepri: Optional[int] = None
    maxact: int = 0
    autoact: int = 0
    entry: Optional[Callable[[], Any]] = None
    name: str = ""

    def __post_init__(self) -> None:
        if self.exepri is None:
            object.__setattr__(self, "exepri", self.inipri)
        _check_priority(self.inipri)
        _check_priority(self.exepri)
        if self.maxact < 0:
            raise ValueError("maxact must not be negative")


@dataclass(eq=False)
class Task:
    """Run-time state of one task."""

    id: int
    config: TaskConfig
    curpri: int = TPRI_MINTASK
    state: TaskState = TaskState.SUSPENDED
    actcnt: int = 0
    curevt: int = EVTMASK_NONE
    waievt: int = EVTMASK_NONE
    lastres: Any = None


class Scheduler:
    """Keeps the ready queues and selects the highest-priority task."""

    def __init__(self, configs: Iterable[TaskConfig], appmode: int,
                 extended_count: int = 0) -> None:
        self.runtsk: Optional[Task] = None
        self.schedtsk: Optional[Task] = None
        self.ready_queue: list[deque[Task]] = [deque() for _ in range(TNUM_TPRI)]
        self.nextpri = TPRI_MINTASK
        self.ready_primap = 0
        self.appmode = appmode
        self.tasks: tuple[Task, ...] = tuple(
            Task(id=i, config=cfg) for i, cfg in enumerate(configs))
        if not 0 <= extended_count <= len(self.tasks):
            raise ValueError("extended_count out of range")
        self.extended_count = extended_count
        for task in self.tasks:
            if task.config.autoact & (1 << appmode):
                self.make_active(task)

    def _primap_set(self, pri: int) -> None:
        self.ready_primap |= 1 << pri

    def _primap_clear(self, pri: int) -> None:
        self.ready_primap &= ~(1 << pri)

    def search_schedtsk(self) -> None:
        """Take the highest-priority ready task as the task to schedule."""
        if self.ready_primap == 0:
            self.schedtsk = None
            return
        queue = self.ready_queue[self.nextpri]
        self.schedtsk = queue.popleft()
        if not queue:
            self._primap_clear(self.nextpri)
            self.nextpri = (TPRI_MINTASK if self.ready_primap == 0
                            else bitmap_search(self.ready_primap))

    def make_runnable(self, task: Task) -> bool:
        """Make ``task`` ready; return True if it becomes the task to schedule."""
        task.state = TaskState.READY
        sched = self.schedtsk
        if sched is not None:
            pri = task.curpri
            schedpri = sched.curpri
            if pri >= schedpri:
                self.ready_queue[pri].append(task)
                self._primap_set(pri)
                if pri < self.nextpri:
                    self.nextpri = pri
                return False
            self.ready_queue[schedpri].appendleft(sched)
            self._primap_set(schedpri)
            self.nextpri = schedpri
        self.schedtsk = task
        return True

    def make_non_runnable(self) -> None:
        """Reselect the task to schedule after the current one stops running."""
        self.search_schedtsk()

    def make_active(self, task: Task) -> bool:
        """Start ``task`` from its initial state and make it ready."""
        task.curpri = task.config.inipri
        if task.id < self.extended_count:
            task.curevt = EVTMASK_NONE
            task.waievt = EVTMASK_NONE
        task.lastres = None
        return self.make_runnable(task)

    def preempt(self) -> None:
        """Put the running task back at the head of its queue and reselect."""
        runtsk = self.runtsk
        if runtsk is None or runtsk is not self.schedtsk:
            raise RuntimeError("preempt needs the running task to be scheduled")
        pri = runtsk.curpri
        self.ready_queue[pri].appendleft(runtsk)
        self._primap_set(pri)
        self.search_schedtsk()

    def suspend(self) -> None:
        """Suspend the running task, restarting it if activations are pending."""
        runtsk = self.runtsk
        if runtsk is None:
            raise RuntimeError("no running task to suspend")
        runtsk.state = TaskState.SUSPENDED
        self.make_non_runnable()
        if runtsk.actcnt > 0:
            runtsk.actcnt -= 1
            self.make_active(runtsk)

    def dispatch(self) -> Optional[Task]:
        """Switch to the task selected for scheduling and return it."""
        self.runtsk = self.schedtsk
        return self.runtsk