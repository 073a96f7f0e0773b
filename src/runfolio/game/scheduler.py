from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Callable, Protocol


class TimerHandle(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """
    The two external clocks the run depends on: a per-frame callback and
    real-time timers (one-shot and repeating).
    """

    def call_later(self, delay: float, fn: Callable[[], None], *, name: str) -> TimerHandle: ...

    def call_every(self, period: float, fn: Callable[[], None], *, name: str) -> TimerHandle: ...

    def every_frame(self, fn: Callable[[], None], *, name: str) -> TimerHandle: ...


class _PandaHandle:
    def __init__(self, task_mgr, task) -> None:
        self._task_mgr = task_mgr
        self._task = task
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def _finish(self) -> None:
        self._active = False

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        try:
            self._task_mgr.remove(self._task)
        except Exception:
            pass


class PandaScheduler:
    """Scheduler over Panda3D's `taskMgr`. Every callback goes through the host's `safe_call`."""

    def __init__(self, *, task_mgr, safe_call: Callable[[str, Callable[[], None]], None]) -> None:
        self._task_mgr = task_mgr
        self._safe_call = safe_call
        self._seq = itertools.count(1)

    def _unique(self, name: str) -> str:
        return f"runfolio.{name}.{next(self._seq)}"

    def call_later(self, delay: float, fn: Callable[[], None], *, name: str) -> _PandaHandle:
        holder: list[_PandaHandle] = []

        def _task(task):  # type: ignore[no-untyped-def]
            holder[0]._finish()
            self._safe_call(name, fn)
            return task.done

        task = self._task_mgr.doMethodLater(float(delay), _task, self._unique(name))
        handle = _PandaHandle(self._task_mgr, task)
        holder.append(handle)
        return handle

    def call_every(self, period: float, fn: Callable[[], None], *, name: str) -> _PandaHandle:
        def _task(task):  # type: ignore[no-untyped-def]
            self._safe_call(name, fn)
            return task.again

        task = self._task_mgr.doMethodLater(float(period), _task, self._unique(name))
        return _PandaHandle(self._task_mgr, task)

    def every_frame(self, fn: Callable[[], None], *, name: str) -> _PandaHandle:
        def _task(task):  # type: ignore[no-untyped-def]
            self._safe_call(name, fn)
            return task.cont

        task = self._task_mgr.add(_task, self._unique(name))
        return _PandaHandle(self._task_mgr, task)


@dataclass
class _ManualTimer:
    due: float
    seq: int
    name: str
    fn: Callable[[], None]
    period: float | None = None
    active: bool = True

    def cancel(self) -> None:
        self.active = False


@dataclass
class _ManualFrameHook:
    name: str
    fn: Callable[[], None]
    active: bool = True

    def cancel(self) -> None:
        self.active = False


@dataclass
class ManualScheduler:
    """
    Deterministic scheduler driven by the caller: `advance(seconds)` fires due timers
    in time order, `frame()` runs the per-frame hooks once.
    """

    now: float = 0.0
    _timers: list[_ManualTimer] = field(default_factory=list)
    _frames: list[_ManualFrameHook] = field(default_factory=list)
    _seq: int = 0

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def call_later(self, delay: float, fn: Callable[[], None], *, name: str) -> _ManualTimer:
        timer = _ManualTimer(due=self.now + max(0.0, float(delay)), seq=self._next_seq(), name=name, fn=fn)
        self._timers.append(timer)
        return timer

    def call_every(self, period: float, fn: Callable[[], None], *, name: str) -> _ManualTimer:
        period = max(1e-6, float(period))
        timer = _ManualTimer(due=self.now + period, seq=self._next_seq(), name=name, fn=fn, period=period)
        self._timers.append(timer)
        return timer

    def every_frame(self, fn: Callable[[], None], *, name: str) -> _ManualFrameHook:
        hook = _ManualFrameHook(name=name, fn=fn)
        self._frames.append(hook)
        return hook

    def pending(self, name: str | None = None) -> list[str]:
        return [t.name for t in self._timers if t.active and (name is None or t.name == name)]

    def advance(self, seconds: float) -> None:
        target = self.now + max(0.0, float(seconds))
        while True:
            self._timers = [t for t in self._timers if t.active]
            due = [t for t in self._timers if t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self.now = max(self.now, timer.due)
            if timer.period is None:
                timer.active = False
            else:
                timer.due += timer.period
            timer.fn()
        self.now = target

    def frame(self) -> None:
        self._frames = [h for h in self._frames if h.active]
        for hook in list(self._frames):
            if hook.active:
                hook.fn()
