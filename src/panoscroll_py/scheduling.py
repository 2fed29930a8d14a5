"""Timer abstraction and debounced tasks."""
from __future__ import annotations

from typing import Callable, Optional, Protocol
import threading


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class ThreadingScheduler:
    """Runs callbacks on daemon timer threads.

    When a lock is given every callback runs while holding it, so callbacks
    never interleave with other users of the same lock.
    """

    def __init__(self, lock: Optional[threading.RLock] = None) -> None:
        self._lock = lock

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay, self._run, args=(callback,))
        timer.daemon = True
        timer.start()
        return timer

    def _run(self, callback: Callable[[], None]) -> None:
        if self._lock is None:
            callback()
            return
        with self._lock:
            callback()


class DebouncedTask:
    """Runs callback once, delay seconds after the most recent trigger."""

    def __init__(self, scheduler: Scheduler, delay: float, callback: Callable[[], None]) -> None:
        self.scheduler = scheduler
        self.delay = delay
        self.callback = callback
        self._handle: Optional[TimerHandle] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        self.cancel()
        generation = self._generation
        self._handle = self.scheduler.call_later(self.delay, lambda: self._fire(generation))

    def cancel(self) -> None:
        # a timer thread may already be past cancel(); the generation check drops it
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._handle = None
        self.callback()
