import threading
import time

from panoscroll_py.scheduling import DebouncedTask, ThreadingScheduler


def test_debounced_task_fires_once_after_delay(scheduler):
    calls = []
    task = DebouncedTask(scheduler, 0.5, lambda: calls.append(scheduler.now))

    task.trigger()
    assert task.pending
    scheduler.advance(0.25)
    assert calls == []
    scheduler.advance(0.25)
    assert calls == [0.5]
    assert not task.pending


def test_retrigger_replaces_pending_run(scheduler):
    calls = []
    task = DebouncedTask(scheduler, 0.5, lambda: calls.append(scheduler.now))

    task.trigger()
    scheduler.advance(0.25)
    task.trigger()
    scheduler.advance(0.25)
    assert calls == []
    scheduler.advance(0.25)
    assert calls == [0.75]
    assert scheduler.pending == 0


def test_cancel_prevents_run(scheduler):
    calls = []
    task = DebouncedTask(scheduler, 0.01, lambda: calls.append(True))
    task.trigger()
    task.cancel()
    scheduler.advance(1.0)
    assert calls == []
    assert not task.pending


def test_stale_callback_is_dropped(scheduler):
    calls = []
    task = DebouncedTask(scheduler, 0.5, lambda: calls.append(True))
    task.trigger()
    stale = scheduler.timers[0]
    task.trigger()
    # timer thread raced past cancel()
    stale.callback()
    assert calls == []
    assert task.pending


def test_threading_scheduler_waits_for_lock():
    lock = threading.RLock()
    done = threading.Event()

    with lock:
        ThreadingScheduler(lock=lock).call_later(0.01, done.set)
        time.sleep(0.1)
        assert not done.is_set()
    assert done.wait(timeout=2)
