"""Synchronisation primitives built from a lock and a condition variable."""

import threading


class Zemaphore:
    """A counting semaphore built from a mutex and a condition variable."""

    def __init__(self, value):
        self._value = value
        self._cond = threading.Condition(threading.Lock())

    @property
    def value(self):
        """The current count."""
        with self._cond:
            return self._value

    def wait(self):
        """Block until the count is positive, then decrement it."""
        with self._cond:
            while self._value <= 0:
                self._cond.wait()
            self._value -= 1

    def post(self):
        """Increment the count and wake one waiter."""
        with self._cond:
            self._value += 1
            self._cond.notify()


class Synchronizer:
    """A one-shot signal that resets itself after each successful wait."""

    def __init__(self):
        self._done = False
        self._cond = threading.Condition(threading.Lock())

    @property
    def done(self):
        """Whether a signal is pending."""
        with self._cond:
            return self._done

    def signal(self):
        """Mark the event as done and wake a waiter."""
        with self._cond:
            self._done = True
            self._cond.notify()

    def wait(self):
        """Block until signalled, then reset for the next use."""
        with self._cond:
            while not self._done:
                self._cond.wait()
            self._done = False