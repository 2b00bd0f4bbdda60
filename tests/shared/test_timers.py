from visualizers.shared.timers import Scheduler


def test_call_later_fires_once_when_due():
    sched = Scheduler()
    calls = []
    sched.call_later(100, lambda: calls.append(sched.now_ms))

    sched.advance(99)
    assert calls == []
    sched.advance(1)
    assert calls == [100]
    sched.advance(500)
    assert calls == [100]


def test_cancelled_timer_never_fires():
    sched = Scheduler()
    calls = []
    handle = sched.call_later(50, lambda: calls.append("x"))

    assert handle.cancel() is True
    assert handle.cancel() is False
    sched.advance(100)
    assert calls == []
    assert sched.pending == 0


def test_next_frame_runs_before_clock_moves():
    sched = Scheduler()
    seen = []
    sched.call_next_frame(lambda: seen.append(sched.now_ms))

    sched.advance(16)
    assert seen == [0]
    sched.advance(16)
    assert seen == [0]


def test_timers_fire_in_due_order():
    sched = Scheduler()
    order = []
    sched.call_later(30, lambda: order.append("late"))
    sched.call_later(10, lambda: order.append("early"))
    sched.call_later(10, lambda: order.append("early-2"))

    assert sched.advance(50) == 3
    assert order == ["early", "early-2", "late"]


def test_callback_can_arm_another_timer():
    sched = Scheduler()
    order = []

    def first():
        order.append("first")
        sched.call_later(0, lambda: order.append("chained"))

    sched.call_later(10, first)
    sched.advance(10)
    assert order == ["first", "chained"]


def test_cancel_all_disarms_everything():
    sched = Scheduler()
    calls = []
    a = sched.call_later(10, lambda: calls.append("a"))
    b = sched.call_next_frame(lambda: calls.append("b"))

    sched.cancel_all()
    sched.advance(100)
    assert calls == []
    assert not a.active and not b.active
