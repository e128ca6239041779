"""Semaphores as locks, for joining, for throttling, and in a reader-writer lock."""

import sys
import threading
import time
import types

from .lottery import _atoi
from .sync import Zemaphore


def binary_counter(loops=10_000_000, threads=2):
    """Have ``threads`` threads bump a counter ``loops`` times under a binary semaphore."""
    mutex = threading.Semaphore(1)
    shared = types.SimpleNamespace(counter=0)

    def child():
        for _ in range(loops):
            with mutex:
                shared.counter += 1

    workers = [threading.Thread(target=child) for _ in range(threads)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    print(f"result: {shared.counter} (should be {loops * threads})")
    return shared.counter


def sema_join(delay=2):
    """Wait for a child thread through a semaphore that starts at zero."""
    done = Zemaphore(0)

    def child():
        time.sleep(delay)
        print("child")
        done.post()

    print("parent: begin")
    thread = threading.Thread(target=child)
    thread.start()
    done.wait()
    print("parent: end")
    thread.join()


def throttle(num_threads, sem_value, hold=1):
    """Start ``num_threads`` threads, letting at most ``sem_value`` run at once.

    Returns the largest number observed running together.
    """
    gate = threading.Semaphore(sem_value)
    stats = types.SimpleNamespace(active=0, peak=0)
    stats_lock = threading.Lock()

    def child(index):
        with gate:
            with stats_lock:
                stats.active += 1
                stats.peak = max(stats.peak, stats.active)
            print(f"child {index}")
            time.sleep(hold)
            with stats_lock:
                stats.active -= 1

    print("parent: begin")
    workers = [threading.Thread(target=child, args=(i,)) for i in range(num_threads)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    print("parent: end")
    return stats.peak


class RWLock:
    """A reader-writer lock: many readers or one writer; readers may starve writers."""

    def __init__(self):
        self._lock = threading.Semaphore(1)
        self._writelock = threading.Semaphore(1)
        self._readers = 0

    @property
    def readers(self):
        """The number of readers holding the lock."""
        with self._lock:
            return self._readers

    def acquire_readlock(self):
        """Join the readers; the first reader shuts out writers."""
        with self._lock:
            self._readers += 1
            if self._readers == 1:
                self._writelock.acquire()

    def release_readlock(self):
        """Leave the readers; the last reader lets writers in."""
        with self._lock:
            if self._readers == 0:
                raise RuntimeError("release of an unheld read lock")
            self._readers -= 1
            if self._readers == 0:
                self._writelock.release()

    def acquire_writelock(self):
        """Take the lock exclusively."""
        self._writelock.acquire()

    def release_writelock(self):
        """Give up exclusive hold of the lock."""
        self._writelock.release()


def rwlock_demo(read_loops, write_loops):
    """Run a reader and a writer over a shared counter.

    Returns ``(last value read, final counter)``.
    """
    lock = RWLock()
    shared = types.SimpleNamespace(counter=0, last_read=0)

    def reader():
        local = 0
        for _ in range(read_loops):
            lock.acquire_readlock()
            local = shared.counter
            lock.release_readlock()
            print(f"read {local}")
        shared.last_read = local
        print(f"read done: {local}")

    def writer():
        for _ in range(write_loops):
            lock.acquire_writelock()
            shared.counter += 1
            lock.release_writelock()
        print("write done")

    workers = [threading.Thread(target=reader), threading.Thread(target=writer)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()
    print("all done")
    return shared.last_read, shared.counter


_USAGE = (
    "semaphores {binary|join|zemaphore|throttle <num_threads> <sem_value>|"
    "rwlock <readloops> <writeloops>}"
)


def _usage(text):
    print(f"usage: {text}", file=sys.stderr)
    return 1


def main(argv=None):
    """Command entry point: run one of the semaphore demos."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        return _usage(_USAGE)
    command, rest = args[0], args[1:]
    if command == "throttle":
        if len(rest) != 2:
            return _usage("throttle <num_threads> <sem_value>")
        try:
            throttle(_atoi(rest[0]), _atoi(rest[1]))
        except ValueError as exc:
            print(f"throttle: {exc}", file=sys.stderr)
            return 1
        return 0
    if command == "rwlock":
        if len(rest) != 2:
            return _usage("rwlock readloops writeloops")
        rwlock_demo(_atoi(rest[0]), _atoi(rest[1]))
        return 0
    demos = {
        "binary": binary_counter,
        "join": lambda: sema_join(2),
        "zemaphore": lambda: sema_join(4),
    }
    demo = demos.get(command)
    if demo is None or rest:
        return _usage(_USAGE)
    demo()
    return 0


if __name__ == "__main__":
    sys.exit(main())