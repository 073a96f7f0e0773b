from __future__ import annotations

from runfolio.game.scheduler import ManualScheduler


def test_call_later_fires_once_when_due() -> None:
    s = ManualScheduler()
    calls: list[float] = []
    s.call_later(2.0, lambda: calls.append(s.now), name="once")
    s.advance(1.9)
    assert calls == []
    s.advance(0.2)
    assert calls == [2.0]
    s.advance(10.0)
    assert calls == [2.0]


def test_call_every_repeats_until_cancelled() -> None:
    s = ManualScheduler()
    ticks: list[float] = []
    handle = s.call_every(1.0, lambda: ticks.append(s.now), name="tick")
    s.advance(3.5)
    assert ticks == [1.0, 2.0, 3.0]
    handle.cancel()
    assert handle.active is False
    s.advance(5.0)
    assert len(ticks) == 3
    assert s.pending("tick") == []


def test_timers_fire_in_time_order() -> None:
    s = ManualScheduler()
    order: list[str] = []
    s.call_later(3.0, lambda: order.append("c"), name="c")
    s.call_later(1.0, lambda: order.append("a"), name="a")
    s.call_later(2.0, lambda: order.append("b"), name="b")
    s.advance(5.0)
    assert order == ["a", "b", "c"]


def test_timer_scheduled_from_callback_can_fire_in_same_advance() -> None:
    s = ManualScheduler()
    order: list[str] = []

    def first() -> None:
        order.append("first")
        s.call_later(1.0, lambda: order.append("second"), name="second")

    s.call_later(1.0, first, name="first")
    s.advance(3.0)
    assert order == ["first", "second"]


def test_frame_hooks_run_once_per_frame() -> None:
    s = ManualScheduler()
    count = {"n": 0}

    def bump() -> None:
        count["n"] += 1

    handle = s.every_frame(bump, name="frame")
    s.frame()
    s.frame()
    assert count["n"] == 2
    handle.cancel()
    s.frame()
    assert count["n"] == 2
