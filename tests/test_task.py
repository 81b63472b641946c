import pytest

from rtkernel.task import (
    TPRI_MINTASK,
    Scheduler,
    TaskConfig,
    TaskState,
    bitmap_search,
)


@pytest.mark.parametrize("bit", range(16))
def test_bitmap_search_single_bit(bit):
    assert bitmap_search(1 << bit) == bit


@pytest.mark.parametrize("bit", range(15))
def test_bitmap_search_lowest_wins(bit):
    assert bitmap_search((1 << bit) | (1 << 15)) == bit


def test_bitmap_search_zero_rejected():
    with pytest.raises(ValueError):
        bitmap_search(0)


def test_config_priority_range():
    with pytest.raises(ValueError):
        TaskConfig(inipri=16)
    assert TaskConfig(inipri=3).exepri == 3


def _primap_consistent(s):
    for pri, queue in enumerate(s.ready_queue):
        assert bool(s.ready_primap & (1 << pri)) == bool(queue)


def test_initial_state_without_autostart():
    s = Scheduler([TaskConfig(inipri=3), TaskConfig(inipri=5)], appmode=0)
    assert s.schedtsk is None
    assert s.runtsk is None
    assert s.nextpri == TPRI_MINTASK
    assert s.ready_primap == 0
    assert all(t.state == TaskState.SUSPENDED for t in s.tasks)


def test_autostart_depends_on_appmode():
    configs = [TaskConfig(inipri=3, autoact=0b10), TaskConfig(inipri=5, autoact=0b01)]
    s = Scheduler(configs, appmode=1)
    assert s.schedtsk is s.tasks[0]
    assert s.tasks[0].state == TaskState.READY
    assert s.tasks[1].state == TaskState.SUSPENDED


def test_higher_priority_becomes_schedtsk():
    s = Scheduler([TaskConfig(inipri=5), TaskConfig(inipri=2)], appmode=0)
    low, high = s.tasks
    assert s.make_active(low) is True
    assert s.make_active(high) is True
    assert s.schedtsk is high
    assert list(s.ready_queue[5]) == [low]
    assert s.nextpri == 5
    _primap_consistent(s)


def test_lower_or_equal_priority_is_queued():
    s = Scheduler([TaskConfig(inipri=2), TaskConfig(inipri=2), TaskConfig(inipri=7)],
                  appmode=0)
    a, b, c = s.tasks
    s.make_active(a)
    assert s.make_active(b) is False
    assert s.make_active(c) is False
    assert s.schedtsk is a
    assert list(s.ready_queue[2]) == [b]
    assert s.nextpri == 2
    _primap_consistent(s)


def test_search_schedtsk_order_and_empty():
    s = Scheduler([TaskConfig(inipri=4), TaskConfig(inipri=4), TaskConfig(inipri=9)],
                  appmode=0)
    a, b, c = s.tasks
    for t in (a, b, c):
        s.make_active(t)
    order = [s.schedtsk]
    for _ in range(2):
        s.search_schedtsk()
        order.append(s.schedtsk)
        _primap_consistent(s)
    assert order == [a, b, c]
    assert s.nextpri == TPRI_MINTASK
    s.search_schedtsk()
    assert s.schedtsk is None


def test_dispatch_and_preempt():
    s = Scheduler([TaskConfig(inipri=6), TaskConfig(inipri=6)], appmode=0)
    a, b = s.tasks
    s.make_active(a)
    s.make_active(b)
    assert s.dispatch() is a
    s.preempt()
    # preempted task goes to the head of its queue, so it is picked again
    assert s.schedtsk is a
    assert list(s.ready_queue[6]) == [b]
    _primap_consistent(s)


def test_preempt_requires_running_task():
    s = Scheduler([TaskConfig(inipri=6)], appmode=0)
    with pytest.raises(RuntimeError):
        s.preempt()


def test_suspend_without_pending_activation():
    s = Scheduler([TaskConfig(inipri=1), TaskConfig(inipri=8)], appmode=0)
    a, b = s.tasks
    s.make_active(a)
    s.make_active(b)
    s.dispatch()
    s.suspend()
    assert a.state == TaskState.SUSPENDED
    assert s.schedtsk is b


def test_suspend_restarts_with_pending_activation():
    s = Scheduler([TaskConfig(inipri=1, exepri=0, maxact=2)], appmode=0)
    (a,) = s.tasks
    s.make_active(a)
    s.dispatch()
    a.actcnt = 1
    a.curpri = 0
    s.suspend()
    assert a.actcnt == 0
    assert a.state == TaskState.READY
    assert a.curpri == a.config.inipri
    assert s.schedtsk is a


def test_suspend_without_running_task():
    s = Scheduler([TaskConfig(inipri=1)], appmode=0)
    with pytest.raises(RuntimeError):
        s.suspend()


def test_make_active_resets_events_only_for_extended_tasks():
    s = Scheduler([TaskConfig(inipri=3), TaskConfig(inipri=4)], appmode=0,
                  extended_count=1)
    ext, basic = s.tasks
    for t in (ext, basic):
        t.curevt = 5
        t.waievt = 5
        t.lastres = object()
        s.make_active(t)
    assert (ext.curevt, ext.waievt) == (0, 0)
    assert (basic.curevt, basic.waievt) == (5, 5)
    assert ext.lastres is None and basic.lastres is None


def test_extended_count_range():
    with pytest.raises(ValueError):
        Scheduler([TaskConfig(inipri=1)], appmode=0, extended_count=2)