"""Dining philosophers with semaphores, with and without deadlock."""

import sys
import threading
import time

from .lottery import _atoi

PHILOSOPHERS = 5
_INDENT = 10


def _check_seat(p):
    if not 0 <= p < PHILOSOPHERS:
        raise ValueError(f"no philosopher {p} at a table of {PHILOSOPHERS}")


def left(p):
    """The fork to philosopher ``p``'s left."""
    _check_seat(p)
    return p


def right(p):
    """The fork to philosopher ``p``'s right."""
    _check_seat(p)
    return (p + 1) % PHILOSOPHERS


class Table:
    """Five forks, each a binary semaphore.

    With ``ordered`` the last philosopher picks up the right fork first,
    which breaks the circular wait. ``log``, if given, receives indented
    progress lines.
    """

    def __init__(self, ordered=True, log=None):
        self.ordered = ordered
        self.forks = [threading.Semaphore(1) for _ in range(PHILOSOPHERS)]
        self._log = log
        self._print_lock = threading.Lock()

    def _say(self, p, text):
        if self._log is None:
            return
        with self._print_lock:
            self._log(" " * (p * _INDENT) + text)

    def _try(self, p, fork):
        if not self.ordered:
            self._say(p, f"{p}: try {fork}")
        elif p == PHILOSOPHERS - 1:
            self._say(p, f"{p} try {fork}")
        else:
            self._say(p, f"try {fork}")
        self.forks[fork].acquire()

    def get_forks(self, p):
        """Pick up both of philosopher ``p``'s forks, blocking as needed."""
        if self.ordered and p == PHILOSOPHERS - 1:
            order = (right(p), left(p))
        else:
            order = (left(p), right(p))
        for fork in order:
            self._try(p, fork)

    def put_forks(self, p):
        """Put down both of philosopher ``p``'s forks."""
        self.forks[left(p)].release()
        self.forks[right(p)].release()


def dine(num_loops, ordered=True, verbose=False, timeout=None):
    """Let five philosophers each eat ``num_loops`` times; return their meal counts.

    Raises :class:`TimeoutError` if they are still at the table after
    ``timeout`` seconds, as happens when they deadlock.
    """
    print("dining: started")
    table = Table(ordered, log=print if verbose else None)
    meals = [0] * PHILOSOPHERS

    def philosopher(p):
        table._say(p, f"{p}: start")
        for _ in range(num_loops):
            table._say(p, f"{p}: think")
            table.get_forks(p)
            table._say(p, f"{p}: eat")
            meals[p] += 1
            table.put_forks(p)
            table._say(p, f"{p}: done")

    threads = [
        threading.Thread(target=philosopher, args=(p,), daemon=True)
        for p in range(PHILOSOPHERS)
    ]
    for thread in threads:
        thread.start()
    deadline = None if timeout is None else time.monotonic() + timeout
    for thread in threads:
        remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
        thread.join(remaining)
        if thread.is_alive():
            raise TimeoutError("dining: philosophers deadlocked")
    print("dining: finished")
    return tuple(meals)


_USAGE = "philosophers {deadlock|no_deadlock} <num_loops> [-v]"


def main(argv=None):
    """Command entry point: run the dining philosophers."""
    args = sys.argv[1:] if argv is None else list(argv)
    verbose = "-v" in args
    args = [arg for arg in args if arg != "-v"]
    if len(args) != 2 or args[0] not in ("deadlock", "no_deadlock"):
        print(f"usage: {_USAGE}", file=sys.stderr)
        return 1
    dine(_atoi(args[1]), ordered=args[0] == "no_deadlock", verbose=verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())