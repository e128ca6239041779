import time

from osdemos.timing import get_time, spin


def test_get_time_tracks_wall_clock():
    assert abs(get_time() - time.time()) < 1.0


def test_get_time_does_not_go_backwards():
    first = get_time()
    second = get_time()
    assert second >= first


def test_spin_waits_at_least_the_requested_time():
    start = get_time()
    spin(0.05)
    assert get_time() - start >= 0.045


def test_spin_zero_returns_promptly():
    start = get_time()
    spin(0)
    assert get_time() - start < 0.5


def test_spin_negative_returns_promptly():
    start = get_time()
    spin(-3)
    assert get_time() - start < 0.5