from __future__ import annotations


def test_callback_fires_at_deadline_not_before(clock, scheduler) -> None:
    fired = []
    scheduler.schedule(1500, lambda: fired.append(clock.now_ms()))

    clock.advance(1499)
    assert scheduler.run_due() == 0
    assert fired == []

    clock.advance(1)
    assert scheduler.run_due() == 1
    assert fired == [1500]


def test_cancel_prevents_firing(clock, scheduler) -> None:
    fired = []
    handle = scheduler.schedule(100, lambda: fired.append("x"))
    scheduler.cancel(handle)

    clock.advance(500)
    scheduler.run_due()

    assert fired == []
    assert handle.cancelled and not handle.fired
    assert scheduler.pending() == []


def test_cancel_is_idempotent(clock, scheduler) -> None:
    fired = []
    handle = scheduler.schedule(10, lambda: fired.append("x"))

    clock.advance(10)
    scheduler.run_due()
    scheduler.cancel(handle)  # already fired
    scheduler.cancel(handle)
    scheduler.cancel(None)

    assert fired == ["x"]
    assert handle.fired and not handle.cancelled

    other = scheduler.schedule(10, lambda: fired.append("y"))
    scheduler.cancel(other)
    scheduler.cancel(other)
    assert other.cancelled


def test_due_callbacks_run_in_deadline_order(clock, scheduler) -> None:
    order = []
    scheduler.schedule(300, lambda: order.append("c"))
    scheduler.schedule(100, lambda: order.append("a"))
    scheduler.schedule(100, lambda: order.append("b"))

    clock.advance(1000)
    scheduler.run_due()

    assert order == ["a", "b", "c"]


def test_callback_can_cancel_a_later_entry(clock, scheduler) -> None:
    fired = []
    later = scheduler.schedule(200, lambda: fired.append("later"))
    scheduler.schedule(100, lambda: scheduler.cancel(later))

    clock.advance(300)
    scheduler.run_due()

    assert fired == []


def test_pending_and_cancel_all(clock, scheduler) -> None:
    a = scheduler.schedule(100, lambda: None, label="a")
    b = scheduler.schedule(50, lambda: None, label="b")

    assert [h.label for h in scheduler.pending()] == ["b", "a"]

    scheduler.cancel_all()
    assert scheduler.pending() == []
    assert a.cancelled and b.cancelled
