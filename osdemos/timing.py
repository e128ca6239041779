"""Wall-clock helpers used by the demos."""

import time


def get_time():
    """Return the current wall-clock time in seconds as a float."""
    return time.time()


def spin(howlong):
    """Busy-wait, burning CPU, until ``howlong`` seconds have passed."""
    start = get_time()
    while get_time() - start < howlong:
        pass