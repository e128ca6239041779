"""Lottery scheduling: pick a winning job in proportion to its tickets."""

import re
import sys
from collections import deque

_MASK32 = 0xFFFFFFFF
_ATOI = re.compile(r"\s*([+-]?\d+)")


def _atoi(text):
    match = _ATOI.match(text)
    if not match:
        return 0
    value = max(min(int(match.group(1)), 2**63 - 1), -(2**63))
    return ((value + 2**31) % 2**32) - 2**31


def _trunc_div(a, b):
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


class GlibcRandom:
    """The additive feedback generator behind ``srandom``/``random`` (TYPE_3)."""

    _DEGREE = 31
    _DISCARD = 310

    def __init__(self, seed):
        seed &= _MASK32
        if seed == 0:
            seed = 1
        word = seed - (1 << 32) if seed & 0x80000000 else seed
        state = [seed]
        for _ in range(1, self._DEGREE):
            hi = _trunc_div(word, 127773)
            lo = word - hi * 127773
            word = 16807 * lo - 2836 * hi
            if word < 0:
                word += 2147483647
            state.append(word & _MASK32)
        self._state = deque(state, maxlen=self._DEGREE)
        for _ in range(3):
            self._state.append(self._state[0])
        for _ in range(self._DISCARD):
            self._step()

    def _step(self):
        value = (self._state[0] + self._state[-3]) & _MASK32
        self._state.append(value)
        return value

    def random(self):
        """Return the next value in the range 0 .. 2**31 - 1."""
        return self._step() >> 1


class Lottery:
    """Jobs holding tickets; new jobs go to the front of the list."""

    def __init__(self):
        self._jobs = deque()
        self.total = 0

    @property
    def tickets(self):
        """Ticket counts of the jobs, front first."""
        return tuple(self._jobs)

    def insert(self, tickets):
        """Add a job holding ``tickets`` tickets at the front."""
        self._jobs.appendleft(tickets)
        self.total += tickets

    def format_list(self):
        """Render the job list as the scheduler prints it."""
        return "List: " + "".join(f"[{tickets}] " for tickets in self._jobs)

    def draw(self, rng):
        """Pick a winning ticket; return ``(winner, tickets of winning job)``."""
        if self.total <= 0:
            raise ValueError("no tickets to draw from")
        winner = rng.random() % self.total
        counter = 0
        for tickets in self._jobs:
            counter += tickets
            if counter > winner:
                return winner, tickets
        raise RuntimeError(f"no job holds ticket {winner}")


def run(seed, loops):
    """Yield the output lines of a lottery run with three fixed jobs."""
    rng = GlibcRandom(seed)
    lottery = Lottery()
    for tickets in (50, 100, 25):
        lottery.insert(tickets)
    yield lottery.format_list()
    for _ in range(loops):
        winner, tickets = lottery.draw(rng)
        yield lottery.format_list()
        yield f"winner: {winner} {tickets}"
        yield ""


def main(argv=None):
    """Command entry point: ``lottery <seed> <loops>``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("usage: lottery <seed> <loops>", file=sys.stderr)
        return 1
    for line in run(_atoi(args[0]), _atoi(args[1])):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())