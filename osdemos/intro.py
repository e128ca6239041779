"""Small demos of virtualising the CPU and memory, threads and persistence."""

import inspect
import itertools
import os
import sys
import threading
import types

from .lottery import _atoi
from .timing import spin

DEFAULT_IO_PATH = "/tmp/file"
HEAP_REQUEST = 100_000_000


def _wrap32(value):
    return ((value + 2**31) % 2**32) - 2**31


def _iterations(count):
    return itertools.count() if count is None else range(count)


def cpu_loop(text, count=None):
    """Print ``text`` once a second of busy spinning; forever if ``count`` is None."""
    for _ in _iterations(count):
        print(text, flush=True)
        spin(1)


def write_hello(path=DEFAULT_IO_PATH):
    """Write ``hello world`` to ``path``, force it to disk; return the bytes written."""
    data = b"hello world\n"
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        written = os.write(fd, data)
        if written != len(data):
            raise OSError(f"short write to {path}: {written} of {len(data)} bytes")
        os.fsync(fd)
    finally:
        os.close(fd)
    return written


def mem_loop(value, count=None):
    """Store ``value`` in a fresh cell and increment it once a second.

    Runs forever when ``count`` is None; otherwise returns the final value.
    """
    cell = [_wrap32(value)]
    pid = os.getpid()
    print(f"({pid}) addr pointed to by p: {id(cell):#x}", flush=True)
    for _ in _iterations(count):
        spin(1)
        cell[0] = _wrap32(cell[0] + 1)
        print(f"({pid}) value of p: {cell[0]}", flush=True)
    return cell[0]


def run_counter(loops):
    """Have two threads each bump a shared, unlocked counter ``loops`` times."""
    shared = types.SimpleNamespace(counter=0)

    def worker():
        for _ in range(loops):
            shared.counter += 1

    workers = [threading.Thread(target=worker) for _ in range(2)]
    for thread in workers:
        thread.start()
    for thread in workers:
        thread.join()
    return shared.counter


def address_layout():
    """Return identities of objects standing for code, heap and stack."""
    heap = bytearray(HEAP_REQUEST)
    frame = inspect.currentframe()
    try:
        return {
            "code": id(address_layout.__code__),
            "heap": id(heap),
            "stack": id(frame),
        }
    finally:
        del frame


def _usage(text):
    print(f"usage: {text}", file=sys.stderr)
    return 1


def main(argv=None):
    """Command entry point: ``intro {cpu|io|mem|threads|va} ...``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        return _usage("intro {cpu|io|mem|threads|va} ...")
    command, rest = args[0], args[1:]
    if command == "cpu":
        if len(rest) != 1:
            return _usage("cpu <string>")
        cpu_loop(rest[0])
    elif command == "io":
        if len(rest) > 1:
            return _usage("io [path]")
        write_hello(rest[0] if rest else DEFAULT_IO_PATH)
    elif command == "mem":
        if len(rest) != 1:
            return _usage("mem <value>")
        mem_loop(_atoi(rest[0]))
    elif command == "threads":
        if len(rest) != 1:
            return _usage("threads <loops>")
        print("Initial value : 0")
        print(f"Final value   : {run_counter(_atoi(rest[0]))}")
    elif command == "va":
        if rest:
            return _usage("va")
        layout = address_layout()
        print(f"location of code : {layout['code']:#x}")
        print(f"location of heap : {layout['heap']:#x}")
        print(f"location of stack: {layout['stack']:#x}")
    else:
        return _usage("intro {cpu|io|mem|threads|va} ...")
    return 0


if __name__ == "__main__":
    sys.exit(main())