# rtkernel

A small model of an OSEK/AUTOSAR-style real-time kernel in plain Python,
with no runtime dependencies. It covers the ready-queue scheduler, schedule
tables driven by a counter, kernel status codes, and the system log with its
own printf-style formatting.

## Modules

- `rtkernel.status`: the `StatusType` codes (`E_OK` … `E_OS_PROTECTION_COUNT_ISR`),
  `strerror(ercd)`, which returns a code's name or `"unknown error"`, and
  `OsError(status, service)`, the exception raised by failing services.
- `rtkernel.log_output`: `LogType`, `LogRecord`, `syslog_printf(fmt, args)`
  and `syslog_print(record)`. The format dialect is `%d %u %x %X %p %c %s %%`
  with an optional `0` pad flag and width; an `l` modifier is accepted and
  ignored. Numbers are treated as 32-bit words. Any other conversion emits
  nothing.
- `rtkernel.syslog`: `LogPriority`, `log_mask(prio)`, `log_upto(prio)` and
  `SystemLog(output)`. `SystemLog` passes each enabled record, followed by a
  newline, to the `output` callable. It provides `initialize()` (enable all
  priorities), `mask(lowmask)`, `write(prio, record)`,
  `syslog(prio, fmt, *args)` (at most five arguments are kept per record), and
  `perror(prio, file, line, expr, ercd)`.
- `rtkernel.banner`: `banner_format(kernel_name, target_name, built)` and
  `print_banner(log, kernel_name, target_name, version, built)`. The second
  logs the start-up message at `NOTICE` with the version printed in hex.
- `rtkernel.serial`: `SerialPort(hardware)`, which holds the last received
  character. `on_receive(ch)` stores it and `receive()` returns it once, or
  `None`. `init()` and `term()` clear it and call the hardware object's
  `init()` and `term()` when a hardware object is given.
- `rtkernel.task`: `TaskState`, `TaskConfig`, `Task`, `Scheduler` and
  `bitmap_search(bitmap)`. Priorities are internal values from 0 (highest) to
  15 (lowest). `Scheduler(configs, appmode, extended_count)` activates the
  tasks whose `autoact` bit for `appmode` is set. It provides `make_active`,
  `make_runnable`, `make_non_runnable`, `search_schedtsk`, `preempt`,
  `suspend` and `dispatch`.
- `rtkernel.scheduletable`: `ScheduleTableStatus`, `ExpiryPoint`,
  `ScheduleTableConfig`, `ScheduleTable` and
  `ScheduleTableManager(configs, implicit_count, appmode)`. The manager
  provides `start_rel`, `start_abs`, `stop`, `next`, `get_status` and
  `expire`. A failing service calls `error_hook(status, service)` if it is set
  and then raises `OsError`.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

```python
from rtkernel.log_output import syslog_printf
from rtkernel.status import StatusType, strerror

print(syslog_printf("%05d %x %s", [-42, 255, "ok"]))  # -0042 ff ok
print(strerror(StatusType.E_OS_LIMIT))                # E_OS_LIMIT
print(strerror(99))                                   # unknown error
```

```python
from rtkernel.syslog import LogPriority, SystemLog, log_upto

lines = []
log = SystemLog(lines.append)
log.mask(log_upto(LogPriority.INFO))
log.syslog(LogPriority.INFO, "Task%d ACTIVATE", 1)
log.syslog(LogPriority.DEBUG, "dropped")
# lines == ["Task1 ACTIVATE\n"]
```

```python
from rtkernel.task import Scheduler, TaskConfig

sched = Scheduler([TaskConfig(inipri=3, autoact=1), TaskConfig(inipri=1)], appmode=0)
sched.dispatch()                          # task 0 runs
sched.make_active(sched.tasks[1])         # True: task 1 has the higher priority
sched.dispatch()                          # task 1 runs, task 0 waits at the head of its queue
```

## Supplying a counter

Schedule tables do not include a counter. Each `ScheduleTableConfig` names a
counter object that must provide `maxval`, `get_abstick(start)`,
`get_reltick(offset)`, `add_tick(tick, incr)`, `insert(table)` and
`remove(table)`. When the counter reaches a queued table's `expiretick`, it
should remove the table and call `table.expirefunc(counter)`.

## What the package does not do

This is a model of kernel data structures and services. It does not execute
tasks. `Scheduler.dispatch()` only records which task is selected to run.
The package has no task service layer for activating, terminating or chaining
tasks with error checks. It has no counters, alarms, events, resources or
interrupt handling, and it does not measure execution times.