"""Joining a child thread with condition variables, done right and wrong."""

import sys
import threading
import time
import types
from collections import deque

from .sync import Synchronizer


class _RawCondition:
    """A condition variable whose signal, like a bare pthread one, needs no lock.

    A signal with no thread waiting is lost.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._waiters = deque()

    def wait(self, mutex, timeout=None):
        """Release ``mutex``, sleep until signalled, re-take ``mutex``.

        Returns False if ``timeout`` seconds passed without a signal.
        """
        waiter = threading.Lock()
        waiter.acquire()
        with self._guard:
            self._waiters.append(waiter)
        mutex.release()
        try:
            woken = waiter.acquire(timeout=-1 if timeout is None else timeout)
            if not woken:
                with self._guard:
                    try:
                        self._waiters.remove(waiter)
                    except ValueError:
                        woken = True  # signalled just as the wait ran out
        finally:
            mutex.acquire()
        return woken

    def signal(self):
        """Wake one waiting thread, if any."""
        with self._guard:
            if self._waiters:
                self._waiters.popleft().release()


def join_cv(delay=1):
    """Wait for a child using a state variable, a lock and a condition variable."""
    state = types.SimpleNamespace(done=False)
    cond = threading.Condition(threading.Lock())

    def child():
        print("child")
        time.sleep(delay)
        with cond:
            state.done = True
            cond.notify()

    print("parent: begin")
    thread = threading.Thread(target=child)
    thread.start()
    with cond:
        while not state.done:
            cond.wait()
    print("parent: end")
    thread.join()


def join_modular(delay=1):
    """Wait for a child through a :class:`Synchronizer`."""
    sync = Synchronizer()

    def child():
        print("child")
        time.sleep(delay)
        sync.signal()

    print("parent: begin")
    thread = threading.Thread(target=child)
    thread.start()
    sync.wait()
    print("parent: end")
    thread.join()


def join_no_lock(child_delay=1, parent_delay=2, timeout=None):
    """The child sets the flag and signals without taking the lock.

    A signal sent while the parent is between its check and its wait is
    lost; with no ``timeout`` the parent then sleeps forever. Returns True if
    the parent saw the child finish, False if its wait timed out.
    """
    state = types.SimpleNamespace(done=False)
    mutex = threading.Lock()
    cond = _RawCondition()

    def child():
        print("child: begin")
        time.sleep(child_delay)
        state.done = True
        print("child: signal")
        cond.signal()

    print("parent: begin")
    thread = threading.Thread(target=child, daemon=True)
    thread.start()
    finished = True
    with mutex:
        print("parent: check condition")
        while not state.done:
            time.sleep(parent_delay)
            print("parent: wait to be signalled...")
            if not cond.wait(mutex, timeout):
                print("parent: timed out")
                finished = False
                break
    thread.join()
    if finished:
        print("parent: end")
    return finished


def join_no_state_var(parent_delay=2, timeout=None):
    """The parent waits with no state variable to tell it the child is done.

    If the child signals before the parent waits, the signal is lost. Returns
    True if the parent was woken, False if its wait timed out.
    """
    mutex = threading.Lock()
    cond = _RawCondition()

    def child():
        print("child: begin")
        with mutex:
            print("child: signal")
            cond.signal()

    print("parent: begin")
    thread = threading.Thread(target=child, daemon=True)
    thread.start()
    time.sleep(parent_delay)
    print("parent: wait to be signalled...")
    with mutex:
        woken = cond.wait(mutex, timeout)
    thread.join()
    print("parent: end" if woken else "parent: timed out")
    return woken


def join_spin(delay=5):
    """Busy-wait on a shared flag until the child sets it; return seconds spun."""
    state = types.SimpleNamespace(done=False)

    def child():
        print("child")
        time.sleep(delay)
        state.done = True

    print("parent: begin")
    start = time.monotonic()
    thread = threading.Thread(target=child)
    thread.start()
    while not state.done:
        pass
    elapsed = time.monotonic() - start
    print("parent: end")
    thread.join()
    return elapsed


_DEMOS = {
    "join": join_cv,
    "join_modular": join_modular,
    "join_no_lock": join_no_lock,
    "join_no_state_var": join_no_state_var,
    "join_spin": join_spin,
}


def main(argv=None):
    """Command entry point: run one of the join demos."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1 or args[0] not in _DEMOS:
        print(f"usage: cv_demos {{{'|'.join(_DEMOS)}}}", file=sys.stderr)
        return 1
    _DEMOS[args[0]]()
    return 0


if __name__ == "__main__":
    sys.exit(main())