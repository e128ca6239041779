"""Producer/consumer over a bounded buffer with condition variables or semaphores."""

import sys
import threading
import time

from .lottery import _atoi

END_MARKER = -1
MAX_SEMAPHORE_CONSUMERS = 10


class BoundedBuffer:
    """A fixed-size circular FIFO buffer of integers, without any locking."""

    def __init__(self, size):
        if size < 1:
            raise ValueError(f"buffer size must be at least 1, got {size}")
        self._slots = [0] * size
        self._fill_ptr = 0
        self._use_ptr = 0
        self._count = 0

    @property
    def size(self):
        """The number of slots."""
        return len(self._slots)

    @property
    def is_full(self):
        """Whether every slot holds a value."""
        return self._count == len(self._slots)

    @property
    def is_empty(self):
        """Whether no slot holds a value."""
        return self._count == 0

    def __len__(self):
        return self._count

    def fill(self, value):
        """Store ``value`` in the next free slot."""
        if self.is_full:
            raise IndexError("fill into a full buffer")
        self._slots[self._fill_ptr] = value
        self._fill_ptr = (self._fill_ptr + 1) % len(self._slots)
        self._count += 1

    def get(self):
        """Remove and return the oldest value."""
        if self.is_empty:
            raise IndexError("get from an empty buffer")
        value = self._slots[self._use_ptr]
        self._use_ptr = (self._use_ptr + 1) % len(self._slots)
        self._count -= 1
        return value


def _join_all(threads, timeout):
    deadline = None if timeout is None else time.monotonic() + timeout
    for thread in threads:
        remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
        thread.join(remaining)
        if thread.is_alive():
            raise TimeoutError(f"threads still blocked after {timeout} seconds")


def run_cv(buffer_size, loops, consumers=1, single_cv=False, timeout=None):
    """Run one producer and ``consumers`` consumers guarded by condition variables.

    With ``single_cv`` producers and consumers share one condition variable,
    which can leave every thread asleep; a ``timeout`` then raises
    :class:`TimeoutError`. Returns, per consumer, the values it took.
    """
    buffer = BoundedBuffer(buffer_size)
    lock = threading.Lock()
    empty = threading.Condition(lock)
    fill = empty if single_cv else threading.Condition(lock)
    taken = [[] for _ in range(consumers)]

    def put(value):
        with empty:
            while buffer.is_full:
                empty.wait()
            buffer.fill(value)
            fill.notify()

    def producer():
        for i in range(loops):
            put(i)
        for _ in range(consumers):
            put(END_MARKER)

    def consumer(index):
        value = 0
        while value != END_MARKER:
            with fill:
                while buffer.is_empty:
                    fill.wait()
                value = buffer.get()
                empty.notify()
            if value != END_MARKER:
                taken[index].append(value)

    threads = [threading.Thread(target=producer, daemon=True)]
    threads += [threading.Thread(target=consumer, args=(i,), daemon=True) for i in range(consumers)]
    for thread in threads:
        thread.start()
    _join_all(threads, timeout)
    return tuple(taken)


def run_semaphore(buffer_size, loops, consumers=1):
    """Run one producer and ``consumers`` consumers guarded by semaphores.

    Each consumer prints ``<id> <value>`` for every value it takes. Returns,
    per consumer, the values it took.
    """
    if consumers > MAX_SEMAPHORE_CONSUMERS:
        raise ValueError(f"at most {MAX_SEMAPHORE_CONSUMERS} consumers, got {consumers}")
    buffer = BoundedBuffer(buffer_size)
    empty = threading.Semaphore(buffer_size)
    full = threading.Semaphore(0)
    mutex = threading.Semaphore(1)
    taken = [[] for _ in range(consumers)]

    def put(value):
        empty.acquire()
        with mutex:
            buffer.fill(value)
        full.release()

    def producer():
        for i in range(loops):
            put(i)
        for _ in range(consumers):
            put(END_MARKER)

    def consumer(index):
        value = 0
        while value != END_MARKER:
            full.acquire()
            with mutex:
                value = buffer.get()
            empty.release()
            print(f"{index} {value}")
            if value != END_MARKER:
                taken[index].append(value)

    threads = [threading.Thread(target=producer)]
    threads += [threading.Thread(target=consumer, args=(i,)) for i in range(consumers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return tuple(taken)


_USAGE = "boundedbuffer {cv|single_cv|sema} <buffersize> <loops> <consumers>"


def main(argv=None):
    """Command entry point: run one producer/consumer variant."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 4 or args[0] not in ("cv", "single_cv", "sema"):
        print(f"usage: {_USAGE}", file=sys.stderr)
        return 1
    size, loops, consumers = (_atoi(arg) for arg in args[1:])
    try:
        if args[0] == "sema":
            run_semaphore(size, loops, consumers)
        else:
            run_cv(size, loops, consumers, single_cv=args[0] == "single_cv")
    except ValueError as exc:
        print(f"boundedbuffer: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())