"""A stack of integers that persists in a memory-mapped file."""

import mmap
import os
import re
import struct
import sys

_COUNT = struct.Struct("@N")
_ITEM = struct.Struct("=i")
HEADER_SIZE = _COUNT.size
DEFAULT_PATH = "ps.img"

_ATOI = re.compile(r"\s*([+-]?\d+)")


def _atoi(text):
    match = _ATOI.match(text)
    if not match:
        return 0
    value = max(min(int(match.group(1)), 2**63 - 1), -(2**63))
    return ((value + 2**31) % 2**32) - 2**31


class PersistentStack:
    """A stack stored in a file: an item count followed by 32-bit integers."""

    def __init__(self, path):
        self._file = open(path, "r+b")
        try:
            size = os.fstat(self._file.fileno()).st_size
            if size < HEADER_SIZE or size % _ITEM.size:
                raise ValueError(
                    f"backing file size {size} must be at least {HEADER_SIZE} "
                    f"and a multiple of {_ITEM.size}"
                )
            self._map = mmap.mmap(self._file.fileno(), size)
        except BaseException:
            self._file.close()
            raise
        self._size = size
        self._closed = False

    @property
    def capacity(self):
        """The number of items the backing file can hold."""
        return (self._size - HEADER_SIZE) // _ITEM.size

    def __len__(self):
        return _COUNT.unpack_from(self._map, 0)[0]

    def _set_count(self, count):
        _COUNT.pack_into(self._map, 0, count)

    def push(self, value):
        """Push ``value``; return False, leaving the stack as is, when full."""
        if not -(2**31) <= value < 2**31:
            raise OverflowError(f"{value} does not fit in a 32-bit integer")
        count = len(self)
        if HEADER_SIZE + (count + 1) * _ITEM.size > self._size:
            return False
        _ITEM.pack_into(self._map, HEADER_SIZE + count * _ITEM.size, value)
        self._set_count(count + 1)
        return True

    def pop(self):
        """Pop and return the top item, or None when the stack is empty."""
        count = len(self)
        if count == 0:
            return None
        count -= 1
        self._set_count(count)
        return _ITEM.unpack_from(self._map, HEADER_SIZE + count * _ITEM.size)[0]

    def close(self):
        """Flush the mapping and close the backing file."""
        if self._closed:
            return
        self._closed = True
        self._map.flush()
        self._map.close()
        self._file.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


def run(path, args):
    """Apply ``pop`` and push arguments in order; return the popped values."""
    popped = []
    with PersistentStack(path) as stack:
        for arg in args:
            if arg == "pop":
                value = stack.pop()
                if value is not None:
                    popped.append(value)
            else:
                stack.push(_atoi(arg))
    return popped


def main(argv=None):
    """Command entry point: ``pstack [value | pop] ...`` on ./ps.img."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        popped = run(DEFAULT_PATH, args)
    except (OSError, ValueError) as exc:
        print(f"pstack: {exc}", file=sys.stderr)
        return 1
    for value in popped:
        print(value)
    return 0


if __name__ == "__main__":
    sys.exit(main())