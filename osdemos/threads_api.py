"""Creating and joining threads, passing arguments and results, and CAS."""

import sys
import threading
import types

from .lottery import _atoi


class _ResultThread(threading.Thread):
    """A thread that keeps its target's return value or exception for the joiner."""

    def __init__(self, target, *args):
        super().__init__(daemon=True)
        self._routine = target
        self._call_args = args
        self.result = None
        self.error = None

    def run(self):
        try:
            self.result = self._routine(*self._call_args)
        except BaseException as exc:  # handed to whoever joins
            self.error = exc

    def join_result(self, timeout=None):
        """Join, then return the target's result or raise its exception."""
        self.join(timeout)
        if self.error is not None:
            raise self.error
        return self.result


def thread_create_demo(a=10, b=20):
    """Hand a pair of values to a thread that prints them, then join it."""

    def mythread(args):
        first, second = args
        print(f"{first} {second}")

    worker = _ResultThread(mythread, (a, b))
    worker.start()
    worker.join_result()
    print("done")


def simple_args_demo(value=100):
    """Pass a plain value to a thread that prints it and returns it plus one."""

    def mythread(arg):
        print(arg)
        return arg + 1

    worker = _ResultThread(mythread, value)
    worker.start()
    rvalue = worker.join_result()
    print(f"returned {rvalue}")
    return rvalue


def return_args_demo(a=10, b=20):
    """Run a thread that prints its arguments and returns the pair ``(1, 2)``."""

    def mythread(args):
        first, second = args
        print(f"args {first} {second}")
        return (1, 2)

    worker = _ResultThread(mythread, (a, b))
    worker.start()
    x, y = worker.join_result()
    print(f"returned {x} {y}")
    return x, y


def two_threads_demo():
    """Start two threads that each print a letter and wait for both."""

    def mythread(letter):
        print(letter)

    print("main: begin")
    workers = [_ResultThread(mythread, letter) for letter in ("A", "B")]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join_result()
    print("main: end")


def count_together(loops):
    """Two threads each add one to a shared, unlocked counter ``loops`` times.

    Returns the final counter, which updates lost to the race may leave short.
    """
    shared = types.SimpleNamespace(counter=0)

    def mythread(letter):
        local = object()
        print(f"{letter}: begin [addr of i: {id(local):#x}]")
        for _ in range(loops):
            shared.counter = shared.counter + 1
        print(f"{letter}: done")

    print(f"main: begin [counter = {shared.counter}] [{id(shared):x}]")
    workers = [_ResultThread(mythread, letter) for letter in ("A", "B")]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join_result()
    print(f"main: done\n [counter: {shared.counter}]\n [should: {loops * 2}]")
    return shared.counter


class AtomicInt:
    """An integer cell whose compare-and-swap happens as one indivisible step."""

    def __init__(self, value=0):
        self._value = value
        self._lock = threading.Lock()

    @property
    def value(self):
        """The current value."""
        with self._lock:
            return self._value

    def compare_and_swap(self, old, new):
        """Set the value to ``new`` if it equals ``old``; return whether it did."""
        with self._lock:
            if self._value != old:
                return False
            self._value = new
            return True


def cas_demo():
    """Show one successful and one failing compare-and-swap.

    Returns ``(first succeeded, second succeeded, final value)``.
    """
    cell = AtomicInt(0)
    print(f"before successful cas: {cell.value}")
    first = cell.compare_and_swap(0, 100)
    print(f"after successful cas: {cell.value} (success: {int(first)})")
    print(f"before failing cas: {cell.value}")
    second = cell.compare_and_swap(0, 200)
    print(f"after failing cas: {cell.value} (old: {int(second)})")
    return first, second, cell.value


_USAGE = "threads_api {create|simple_args|return_args|t0|t1 <loopcount>|cas}"


def _usage(text):
    print(f"usage: {text}", file=sys.stderr)
    return 1


def main(argv=None):
    """Command entry point: run one of the thread API demos."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        return _usage(_USAGE)
    command, rest = args[0], args[1:]
    if command == "t1":
        if len(rest) != 1:
            return _usage("t1 <loopcount>")
        count_together(_atoi(rest[0]))
        return 0
    demos = {
        "create": thread_create_demo,
        "simple_args": simple_args_demo,
        "return_args": return_args_demo,
        "t0": two_threads_demo,
        "cas": cas_demo,
    }
    demo = demos.get(command)
    if demo is None or rest:
        return _usage(_USAGE)
    demo()
    return 0


if __name__ == "__main__":
    sys.exit(main())