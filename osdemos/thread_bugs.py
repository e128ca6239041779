"""Classic concurrency bugs: atomicity violations, deadlock and ordering."""

import contextlib
import sys
import threading
import time
import types
from dataclasses import dataclass

from .threads_api import _ResultThread

PR_STATE_INIT = 0
_T2_INDENT = " " * 17
_DEADLOCK_INDENT = " " * 27


class UseAfterClearError(RuntimeError):
    """A shared pointer was cleared between being checked and being used."""


class OrderingError(RuntimeError):
    """A thread used shared state before it had been initialised."""


@dataclass
class ProcInfo:
    """Process information shared between threads."""

    pid: int


def atomicity_demo(fixed=False, check_delay=2, clear_delay=1):
    """One thread checks then uses shared data while another clears it.

    Returns the pid that was used, or None if the data was already gone at
    the check. Without ``fixed`` the check and use are not atomic, and a clear
    between them raises :class:`UseAfterClearError`.
    """
    thd = types.SimpleNamespace(proc_info=ProcInfo(100))
    guard = threading.Lock() if fixed else contextlib.nullcontext()

    def thread1():
        print("t1: before check")
        with guard:
            if thd.proc_info is None:
                return None
            print("t1: after check")
            time.sleep(check_delay)
            print("t1: use!")
            info = thd.proc_info
            if info is None:
                raise UseAfterClearError("proc_info was cleared between check and use")
            print(info.pid)
            return info.pid

    def thread2():
        print(f"{_T2_INDENT}t2: begin")
        time.sleep(clear_delay)
        with guard:
            print(f"{_T2_INDENT}t2: set to NULL")
            thd.proc_info = None

    print("main: begin")
    workers = [_ResultThread(thread1), _ResultThread(thread2)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    pid = workers[0].join_result()
    workers[1].join_result()
    print("main: end")
    return pid


def deadlock_demo(timeout=None):
    """Two threads take two locks in opposite orders.

    With no ``timeout`` a deadlock blocks forever. With one, a thread that
    cannot get its second lock in time gives up and releases its first.
    Returns True when both threads got both locks.
    """
    lock1 = threading.Lock()
    lock2 = threading.Lock()
    wait = -1 if timeout is None else timeout

    def worker(name, indent, first, second):
        first_lock, first_name = first
        second_lock, second_name = second
        print(f"{indent}{name}: begin")
        print(f"{indent}{name}: try to acquire {first_name}...")
        first_lock.acquire()
        print(f"{indent}{name}: {first_name} acquired")
        print(f"{indent}{name}: try to acquire {second_name}...")
        if not second_lock.acquire(timeout=wait):
            print(f"{indent}{name}: gave up on {second_name}")
            first_lock.release()
            return False
        print(f"{indent}{name}: {second_name} acquired")
        lock1.release()
        lock2.release()
        return True

    print("main: begin")
    workers = [
        _ResultThread(worker, "t1", "", (lock1, "L1"), (lock2, "L2")),
        _ResultThread(worker, "t2", _DEADLOCK_INDENT, (lock2, "L2"), (lock1, "L1")),
    ]
    for thread in workers:
        thread.start()
    results = [thread.join_result() for thread in workers]
    print("main: end")
    return all(results)


class PRThread:
    """A thread handle carrying a state field, set up after the thread starts."""

    def __init__(self):
        self.state = PR_STATE_INIT
        self._thread = None

    @staticmethod
    def create(start_routine, delay=1):
        """Start ``start_routine`` in a new thread, pause ``delay`` seconds, return the handle."""
        handle = PRThread()
        handle._thread = _ResultThread(start_routine)
        handle._thread.start()
        time.sleep(delay)
        return handle

    def wait(self):
        """Join the thread; return its result or raise its exception."""
        return self._thread.join_result()


def ordering_demo(fixed=False, delay=1):
    """A new thread reads the handle that its creator has not yet stored.

    Returns the state the thread read. Without ``fixed`` a thread that runs
    before the handle is stored raises :class:`OrderingError`; with it the
    thread waits on a condition variable until the handle is ready.
    """
    holder = types.SimpleNamespace(thread=None, ready=False)
    cond = threading.Condition(threading.Lock())

    def m_main():
        print("mMain: begin")
        if fixed:
            with cond:
                while not holder.ready:
                    cond.wait()
        handle = holder.thread
        if handle is None:
            raise OrderingError("mThread used before it was initialised")
        state = handle.state
        print(f"mMain: state is {state}")
        return state

    print("ordering: begin")
    holder.thread = PRThread.create(m_main, delay)
    if fixed:
        with cond:
            holder.ready = True
            cond.notify()
    state = holder.thread.wait()
    print("ordering: end")
    return state


_USAGE = "thread_bugs {atomicity|atomicity_fixed|deadlock|ordering|ordering_fixed}"


def main(argv=None):
    """Command entry point: run one of the concurrency bug demos."""
    args = sys.argv[1:] if argv is None else list(argv)
    demos = {
        "atomicity": lambda: atomicity_demo(fixed=False),
        "atomicity_fixed": lambda: atomicity_demo(fixed=True),
        "deadlock": deadlock_demo,
        "ordering": lambda: ordering_demo(fixed=False),
        "ordering_fixed": lambda: ordering_demo(fixed=True),
    }
    if len(args) != 1 or args[0] not in demos:
        print(f"usage: {_USAGE}", file=sys.stderr)
        return 1
    try:
        demos[args[0]]()
    except (UseAfterClearError, OrderingError) as exc:
        print(f"{args[0]}: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())